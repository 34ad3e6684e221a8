"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/resolver.py

Resolve the single rotation reference shared by a whole run.

per_sequence      ANCHOR_OFFSET from the globally best anchor-vs-doubled hit;
                  query_end - 1 for reverse hits, query_start - 1 otherwise.
alignment_column  ROTATION_POINT = subject_start - query_start + 1 in the
                  best-hit sequence, mapped to the alignment column holding
                  that residue. Reverse best hits use
                  subject_end + query_end, reduced into the ungapped length.

Missing evidence never aborts here: the reference falls back to "no rotation"
(offset 0 / column 1) with resolved=False.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, Optional

from .._logging import get_logger
from ..errors import NoHitFoundError
from .hits import AlignmentHit, select_best_hit
from .mapper import column_for_ungapped_position
from .sequences import clean_bases

_LOG = get_logger(__name__)

Strategy = Literal["per_sequence", "alignment_column"]


@dataclass(frozen=True)
class RotationReference:
    strategy: Strategy
    anchor_offset: int = 0
    rotation_point: Optional[int] = None
    rotation_column: Optional[int] = None
    best_hit: Optional[AlignmentHit] = None
    resolved: bool = False

    @classmethod
    def unresolved(cls, strategy: Strategy) -> "RotationReference":
        column = 1 if strategy == "alignment_column" else None
        return cls(strategy=strategy, anchor_offset=0, rotation_column=column, resolved=False)


def anchor_offset_for(hit: AlignmentHit) -> int:
    return (hit.query_end - 1) if hit.is_reverse else (hit.query_start - 1)


def rotation_point_for(hit: AlignmentHit, length: int) -> int:
    """
    Ungapped 1-based position in the subject where the anchor's start falls.

    Forward hits use the residue paired with anchor base 1. Reverse hits use
    the residue just past the one paired with anchor base 1, so that a row
    read in its own orientation starts with the reverse complement of the
    anchor. Reverse points are reduced into 1..length since doubled-subject
    coordinates run past the first copy.
    """
    if hit.is_reverse:
        point = hit.subject_end + hit.query_end
        return (point - 1) % length + 1 if length > 0 else point
    point = hit.subject_start - hit.query_start + 1
    while point < 1 and length > 0:
        point += length
    return point


def resolve_anchor_offset(
    hits: Iterable[AlignmentHit],
    *,
    min_score: Optional[float] = None,
    min_identity: Optional[float] = None,
    strict: bool = False,
) -> RotationReference:
    try:
        best = select_best_hit(hits, min_score=min_score, min_identity=min_identity)
    except NoHitFoundError:
        if strict:
            raise
        _LOG.warning("No alignment hits found; all sequences pass through unrotated.")
        return RotationReference.unresolved("per_sequence")

    offset = anchor_offset_for(best)
    _LOG.info(
        "Best hit: %s  anchor[%d:%d] aligns to %s[%d:%d]  score=%s  strand=%s",
        best.subject_id,
        best.query_start,
        best.query_end,
        best.subject_id,
        best.subject_start,
        best.subject_end,
        best.score,
        best.strand.value,
    )
    _LOG.info("Anchor offset: %d", offset)
    return RotationReference(strategy="per_sequence", anchor_offset=offset, best_hit=best, resolved=True)


def resolve_rotation_column(
    hits: Iterable[AlignmentHit],
    alignment: Mapping[str, str],
    *,
    min_score: Optional[float] = None,
    min_identity: Optional[float] = None,
    strict: bool = False,
) -> RotationReference:
    try:
        best = select_best_hit(hits, min_score=min_score, min_identity=min_identity)
    except NoHitFoundError:
        if strict:
            raise
        _LOG.warning("No alignment hits found; rotation column defaults to 1 (no rotation).")
        return RotationReference.unresolved("alignment_column")

    gapped = alignment.get(best.subject_id)
    if gapped is None:
        msg = f"Best-hit sequence '{best.subject_id}' is missing from the alignment."
        if strict:
            raise NoHitFoundError(msg)
        _LOG.warning("%s Rotation column defaults to 1 (no rotation).", msg)
        return RotationReference.unresolved("alignment_column")

    ungapped_len = len(clean_bases(gapped))
    point = rotation_point_for(best, ungapped_len)
    column = column_for_ungapped_position(gapped, point)
    if column is None:
        _LOG.warning(
            "Rotation point %d exceeds ungapped length %d of '%s'; defaulting to column 1.",
            point,
            ungapped_len,
            best.subject_id,
        )
        column = 1
    _LOG.info(
        "Best hit: %s  anchor[%d:%d] aligns to %s[%d:%d]  score=%s  identity=%s",
        best.subject_id,
        best.query_start,
        best.query_end,
        best.subject_id,
        best.subject_start,
        best.subject_end,
        best.score,
        best.identity,
    )
    _LOG.info("Rotation point (ungapped pos %d) = alignment column %d", point, column)
    return RotationReference(
        strategy="alignment_column",
        anchor_offset=0,
        rotation_point=point,
        rotation_column=column,
        best_hit=best,
        resolved=True,
    )
