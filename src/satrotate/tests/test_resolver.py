"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/test_resolver.py

Resolution of the run-wide rotation reference.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import pytest

from satrotate.core.hits import AlignmentHit
from satrotate.core.resolver import (
    RotationReference,
    anchor_offset_for,
    resolve_anchor_offset,
    resolve_rotation_column,
    rotation_point_for,
)
from satrotate.errors import NoHitFoundError


def _hit(subject, qs, qe, ss, se, score, identity=None) -> AlignmentHit:
    return AlignmentHit("anchor", subject, qs, qe, ss, se, score=score, identity=identity)


def test_anchor_offset_uses_query_start_or_end() -> None:
    assert anchor_offset_for(_hit("a", 3, 19, 7, 23, 30.0)) == 2
    assert anchor_offset_for(_hit("a", 19, 4, 7, 22, 30.0)) == 3


def test_globally_best_hit_wins() -> None:
    hits = [
        _hit("weak", 2, 10, 5, 13, 12.0),
        _hit("strong", 4, 19, 8, 23, 32.0),
        _hit("mid", 1, 12, 3, 14, 20.0),
    ]
    ref = resolve_anchor_offset(hits)
    assert ref.resolved
    assert ref.best_hit.subject_id == "strong"
    assert ref.anchor_offset == 3


def test_no_hits_fall_back_to_zero_offset() -> None:
    ref = resolve_anchor_offset([])
    assert ref == RotationReference.unresolved("per_sequence")
    assert ref.anchor_offset == 0
    assert not ref.resolved


def test_no_hits_raise_in_strict_mode() -> None:
    with pytest.raises(NoHitFoundError):
        resolve_anchor_offset([], strict=True)


def test_thresholds_discard_hits() -> None:
    hits = [_hit("a", 1, 10, 1, 10, 20.0, identity=80.0)]
    assert not resolve_anchor_offset(hits, min_score=25.0).resolved
    assert not resolve_anchor_offset(hits, min_identity=90.0).resolved
    assert resolve_anchor_offset(hits, min_score=20.0, min_identity=80.0).resolved


def test_rotation_point_forward_and_reverse() -> None:
    assert rotation_point_for(_hit("a", 1, 19, 7, 25, 38.0), 19) == 7
    assert rotation_point_for(_hit("a", 5, 10, 2, 7, 12.0), 10) == 8
    assert rotation_point_for(_hit("a", 3, 1, 8, 10, 6.0), 10) == 1


def test_reverse_rotation_point_wraps_doubled_coordinates() -> None:
    assert rotation_point_for(_hit("a", 19, 1, 14, 32, 38.0), 19) == 14
    assert rotation_point_for(_hit("a", 60, 1, 11, 70, 120.0), 60) == 11
    assert rotation_point_for(_hit("a", 19, 3, 12, 28, 30.0), 19) == 12

    alignment = {"r1": "CACCAACAAGTTTAAAACA"}
    ref = resolve_rotation_column([_hit("r1", 19, 1, 14, 32, 38.0)], alignment)
    assert ref.rotation_point == 14
    assert ref.rotation_column == 14


def test_rotation_column_maps_point_through_gaps() -> None:
    alignment = {
        "x1": "TGT-TTTAAACTTGTTGGTG",
        "x2": "TGTTTTTAAACTTGTTGGT-",
    }
    ref = resolve_rotation_column([_hit("x1", 1, 19, 7, 25, 38.0)], alignment)
    assert ref.resolved
    assert ref.rotation_point == 7
    assert ref.rotation_column == 8


def test_rotation_point_past_ungapped_length_defaults_to_column_one() -> None:
    alignment = {"x1": "TGT-TTTAAACTTGTTGGTG"}
    ref = resolve_rotation_column([_hit("x1", 1, 19, 25, 43, 38.0)], alignment)
    assert ref.resolved
    assert ref.rotation_column == 1


def test_no_hits_default_to_column_one() -> None:
    ref = resolve_rotation_column([], {"x1": "ACGT"})
    assert not ref.resolved
    assert ref.rotation_column == 1
    with pytest.raises(NoHitFoundError):
        resolve_rotation_column([], {"x1": "ACGT"}, strict=True)


def test_best_hit_missing_from_alignment() -> None:
    hits = [_hit("ghost", 1, 4, 1, 4, 8.0)]
    ref = resolve_rotation_column(hits, {"x1": "ACGT"})
    assert not ref.resolved
    assert ref.rotation_column == 1
    with pytest.raises(NoHitFoundError, match="missing from the alignment"):
        resolve_rotation_column(hits, {"x1": "ACGT"}, strict=True)
