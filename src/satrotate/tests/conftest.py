"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/conftest.py

Deterministic stand-ins for the alignment oracles.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Dict, List

import pytest

from satrotate.core.hits import AlignmentHit
from satrotate.core.sequences import Sequence, reverse_complement


class ExactMatchAligner:
    """Reports exact occurrences of the query (or its reverse complement) in each subject."""

    name = "exact"

    def __init__(self) -> None:
        self.calls: List[List[str]] = []

    def align(self, query: Sequence, subjects) -> List[AlignmentHit]:
        self.calls.append([s.id for s in subjects])
        q = query.bases.upper()
        rc = reverse_complement(q)
        n = len(q)
        hits = []
        for subject in subjects:
            s = subject.bases.upper()
            i = s.find(q)
            if i >= 0:
                hits.append(AlignmentHit(query.id, subject.id, 1, n, i + 1, i + n, score=2.0 * n, identity=100.0))
                continue
            j = s.find(rc)
            if j >= 0:
                hits.append(AlignmentHit(query.id, subject.id, n, 1, j + 1, j + n, score=2.0 * n, identity=100.0))
        return hits


class StaticMultipleAligner:
    """Returns pre-computed gapped rows for whichever ids it is asked about."""

    name = "static"

    def __init__(self, rows: Dict[str, str]) -> None:
        self.rows = dict(rows)
        self.calls: List[List[str]] = []

    def align_multi(self, sequences) -> Dict[str, str]:
        self.calls.append([s.id for s in sequences])
        return {s.id: self.rows[s.id] for s in sequences if s.id in self.rows}


@pytest.fixture
def exact_aligner() -> ExactMatchAligner:
    return ExactMatchAligner()


@pytest.fixture
def static_msa():
    return StaticMultipleAligner
