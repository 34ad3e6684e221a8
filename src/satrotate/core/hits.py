"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/hits.py

Local-alignment hits and strand handling.

Coordinates are 1-based and inclusive, in the space of the two strings that
were actually compared (the subject is usually a doubled sequence). Strand is
read from the ordering of the query coordinates only: a hit whose query_start
is greater than its query_end matched the reverse complement of the query.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import NoHitFoundError
from .sequences import Sequence, reverse_complement


class Strand(str, Enum):
    FORWARD = "+"
    REVERSE = "-"


@dataclass(frozen=True)
class AlignmentHit:
    query_id: str
    subject_id: str
    query_start: int
    query_end: int
    subject_start: int
    subject_end: int
    score: float
    identity: Optional[float] = None

    @property
    def strand(self) -> Strand:
        return Strand.FORWARD if self.query_start <= self.query_end else Strand.REVERSE

    @property
    def is_reverse(self) -> bool:
        return self.strand is Strand.REVERSE


def _better(hit: AlignmentHit, prev: AlignmentHit) -> bool:
    if hit.score != prev.score:
        return hit.score > prev.score
    return (hit.subject_start, hit.subject_end) < (prev.subject_start, prev.subject_end)


def filter_hits(
    hits: Iterable[AlignmentHit],
    *,
    min_score: Optional[float] = None,
    min_identity: Optional[float] = None,
) -> List[AlignmentHit]:
    kept: List[AlignmentHit] = []
    for hit in hits:
        if not math.isfinite(hit.score):
            raise ValueError(f"Alignment hit has non-finite score for '{hit.subject_id}'.")
        if min_score is not None and hit.score < min_score:
            continue
        if min_identity is not None and (hit.identity is None or hit.identity < min_identity):
            continue
        kept.append(hit)
    return kept


def best_hits_by_subject(hits: Iterable[AlignmentHit]) -> Dict[Tuple[str, str], AlignmentHit]:
    """Keep the highest-scoring hit per (query, subject) pair."""
    best: Dict[Tuple[str, str], AlignmentHit] = {}
    for hit in hits:
        key = (hit.query_id, hit.subject_id)
        prev = best.get(key)
        if prev is None or _better(hit, prev):
            best[key] = hit
    return best


def select_best_hit(
    hits: Iterable[AlignmentHit],
    *,
    min_score: Optional[float] = None,
    min_identity: Optional[float] = None,
) -> AlignmentHit:
    best: Optional[AlignmentHit] = None
    for hit in filter_hits(hits, min_score=min_score, min_identity=min_identity):
        if best is None or _better(hit, best):
            best = hit
    if best is None:
        raise NoHitFoundError("No alignment hit between the anchor and any candidate sequence.")
    return best


def orient(sequence: Sequence, hit: Optional[AlignmentHit]) -> Sequence:
    """Reverse-complement the sequence when its hit matched the reverse strand."""
    if hit is None or not hit.is_reverse:
        return sequence
    return sequence.with_bases(reverse_complement(sequence.bases))
