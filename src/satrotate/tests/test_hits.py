"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/test_hits.py

Hit strand, best-hit selection and orientation.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import math

import pytest

from satrotate.core.hits import (
    AlignmentHit,
    Strand,
    best_hits_by_subject,
    filter_hits,
    orient,
    select_best_hit,
)
from satrotate.core.sequences import Sequence, reverse_complement
from satrotate.errors import NoHitFoundError


def test_strand_follows_query_coordinates() -> None:
    assert AlignmentHit("q", "s", 1, 10, 3, 12, 5.0).strand is Strand.FORWARD
    assert AlignmentHit("q", "s", 1, 19, 7, 25, 38.0).strand is Strand.FORWARD
    rev = AlignmentHit("q", "s", 146, 1, 3, 148, 5.0)
    assert rev.strand is Strand.REVERSE
    assert rev.is_reverse


def test_best_hit_per_subject_prefers_score_then_lower_coordinates() -> None:
    hits = [
        AlignmentHit("q", "a", 1, 5, 12, 16, 10.0),
        AlignmentHit("q", "a", 1, 5, 2, 6, 10.0),
        AlignmentHit("q", "a", 1, 4, 20, 23, 8.0),
        AlignmentHit("q", "b", 1, 5, 1, 5, 3.0),
    ]
    best = best_hits_by_subject(hits)
    assert set(best) == {("q", "a"), ("q", "b")}
    assert best[("q", "a")].subject_start == 2


def test_select_best_hit_and_empty() -> None:
    hits = [
        AlignmentHit("q", "a", 1, 5, 1, 5, 4.0),
        AlignmentHit("q", "b", 1, 5, 1, 5, 9.0),
    ]
    assert select_best_hit(hits).subject_id == "b"
    with pytest.raises(NoHitFoundError):
        select_best_hit([])
    with pytest.raises(NoHitFoundError):
        select_best_hit(hits, min_score=10.0)


def test_identity_threshold_drops_hits_without_identity() -> None:
    hits = [AlignmentHit("q", "a", 1, 5, 1, 5, 4.0)]
    assert filter_hits(hits, min_identity=50.0) == []
    assert filter_hits(hits) == hits


def test_non_finite_score_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-finite"):
        filter_hits([AlignmentHit("q", "a", 1, 5, 1, 5, math.nan)])


def test_orient_reverse_complements_only_reverse_hits() -> None:
    seq = Sequence(id="s", label="s", bases="AACGTTG")
    fwd = AlignmentHit("q", "s", 1, 3, 1, 3, 6.0)
    rev = AlignmentHit("q", "s", 3, 1, 1, 3, 6.0)
    assert orient(seq, fwd) is seq
    assert orient(seq, None) is seq
    assert orient(seq, rev).bases == "CAACGTT"


def test_reverse_complement_is_iupac_aware_and_keeps_case() -> None:
    assert reverse_complement("ACGTRYN") == "NRYACGT"
    assert reverse_complement("acgU") == "Acgt"
    assert reverse_complement(reverse_complement("GATTACA")) == "GATTACA"
