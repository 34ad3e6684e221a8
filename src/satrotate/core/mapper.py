"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/mapper.py

Translate the shared rotation reference into a 0-based cut offset for one
sequence.

Two coordinate spaces are handled:
  - doubled-subject positions from a pairwise hit (per-sequence strategy);
  - alignment columns of a gapped multiple alignment (alignment-column
    strategy).

Reverse-strand hits are mapped into the reverse-complement frame: the subject
base paired with the first anchor base sits at subject_end, and after the
sequence is reverse-complemented the original 0-based position p moves to
L - 1 - p. The offset returned for a reverse hit is therefore only valid for
the reverse-complemented sequence.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..errors import PerSequenceUnmappableError
from .hits import AlignmentHit

_GAP_CODES = (ord("-"), ord("."))


def normalize_offset(value: int, length: int) -> int:
    if length <= 0:
        raise PerSequenceUnmappableError(f"Cannot normalize offset for length {length}.")
    start = value % length
    while start < 0:
        start += length
    return start


def _residue_mask(gapped: str) -> np.ndarray:
    codes = np.frombuffer(gapped.encode("ascii"), dtype=np.uint8)
    return ~np.isin(codes, _GAP_CODES)


def ungapped_count_at_column(gapped: str, column: int) -> int:
    """Number of residues in columns 1..column (inclusive)."""
    if column < 1 or not gapped:
        return 0
    mask = _residue_mask(gapped[:column])
    return int(mask.sum())


def column_for_ungapped_position(gapped: str, position: int) -> Optional[int]:
    """1-based column holding the position-th residue, or None past the end."""
    if position < 1 or not gapped:
        return None
    counts = np.cumsum(_residue_mask(gapped))
    if counts[-1] < position:
        return None
    return int(np.searchsorted(counts, position, side="left")) + 1


def forward_offset(hit: AlignmentHit, anchor_offset: int, length: int) -> int:
    return normalize_offset(hit.subject_start - 1 + anchor_offset, length)


def reverse_offset(hit: AlignmentHit, anchor_offset: int, length: int) -> int:
    pos = normalize_offset(hit.subject_end - 1, length)
    return normalize_offset(length - 1 - pos + anchor_offset, length)


def offset_for_hit(hit: Optional[AlignmentHit], anchor_offset: int, length: int) -> int:
    if hit is None:
        raise PerSequenceUnmappableError("No alignment hit for this sequence.")
    if hit.is_reverse:
        return reverse_offset(hit, anchor_offset, length)
    return forward_offset(hit, anchor_offset, length)


def offset_for_column(gapped: Optional[str], column: int, length: int) -> int:
    if gapped is None:
        raise PerSequenceUnmappableError("Sequence is not represented in the alignment.")
    position = ungapped_count_at_column(gapped, column)
    # A column before the first residue cuts at the first residue.
    position = position if position > 0 else 1
    return normalize_offset(position - 1, length)
