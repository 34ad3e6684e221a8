"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/test_mapper.py

Offset mapping from doubled-subject hits and from alignment columns.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import pytest

from satrotate.core.hits import AlignmentHit
from satrotate.core.mapper import (
    column_for_ungapped_position,
    normalize_offset,
    offset_for_column,
    offset_for_hit,
    ungapped_count_at_column,
)
from satrotate.core.rotator import rotate
from satrotate.core.sequences import reverse_complement
from satrotate.errors import PerSequenceUnmappableError

ANCHOR = "AAACTTGTTGGTGTGTTTT"
SEQ1 = "TGTTTTAAACTTGTTGGTG"


def _hit(qs, qe, ss, se, score=38.0) -> AlignmentHit:
    return AlignmentHit("anchor", "seq1", qs, qe, ss, se, score=score)


def test_normalize_offset() -> None:
    assert normalize_offset(-3, 10) == 7
    assert normalize_offset(25, 19) == 6
    with pytest.raises(PerSequenceUnmappableError):
        normalize_offset(1, 0)


def test_forward_hit_offset_lands_on_anchor_start() -> None:
    start = offset_for_hit(_hit(1, 19, 7, 25), 0, len(SEQ1))
    assert start == 6
    assert rotate(SEQ1, start) == ANCHOR


def test_doubled_coordinates_wrap_back_into_the_sequence() -> None:
    assert offset_for_hit(_hit(1, 3, 6, 8), 0, 10) == 5
    assert rotate("ABCDEFGHIJ", 5) == "FGHIJABCDE"
    # subject_start in the second copy maps to the same cut
    assert offset_for_hit(_hit(1, 3, 16, 18), 0, 10) == 5


def test_anchor_offset_shifts_the_cut() -> None:
    assert offset_for_hit(_hit(3, 19, 9, 25), 2, len(SEQ1)) == 10


def test_reverse_hit_offset_is_in_reverse_complement_frame() -> None:
    subject = reverse_complement(SEQ1)
    hit = _hit(19, 1, 14, 32)
    assert hit.is_reverse
    start = offset_for_hit(hit, hit.query_end - 1, len(subject))
    assert start == 6
    assert rotate(reverse_complement(subject), start) == ANCHOR


def test_missing_hit_is_unmappable() -> None:
    with pytest.raises(PerSequenceUnmappableError):
        offset_for_hit(None, 0, 10)


def test_ungapped_count_and_column_lookup() -> None:
    row = "TGT-TTTAAACTTGTTGGTG"
    assert ungapped_count_at_column(row, 3) == 3
    assert ungapped_count_at_column(row, 4) == 3
    assert ungapped_count_at_column(row, 8) == 7
    assert ungapped_count_at_column(row, 0) == 0
    assert column_for_ungapped_position(row, 4) == 5
    assert column_for_ungapped_position(row, 7) == 8
    assert column_for_ungapped_position(row, 20) is None
    assert column_for_ungapped_position(row, 0) is None


def test_dot_counts_as_gap() -> None:
    assert ungapped_count_at_column("AC..GT", 5) == 3


def test_offset_for_column() -> None:
    assert offset_for_column("TGT-TTTAAACTTGTTGGTG", 8, 19) == 6
    assert offset_for_column("TGTTTTTAAACTTGTTGGT-", 8, 19) == 7


def test_column_before_first_residue_cuts_at_first_residue() -> None:
    assert offset_for_column("---ACGT", 2, 4) == 0


def test_row_absent_from_alignment_is_unmappable() -> None:
    with pytest.raises(PerSequenceUnmappableError):
        offset_for_column(None, 3, 10)
