"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/__init__.py

Pure rotation logic: sequences, hits, reference resolution, coordinate
mapping and fail-safe rotation. Nothing here calls an external tool.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from .hits import AlignmentHit, Strand, orient, select_best_hit
from .mapper import normalize_offset, offset_for_column, offset_for_hit
from .resolver import RotationReference, resolve_anchor_offset, resolve_rotation_column
from .rotator import RotationLogEntry, RotationStatus, is_circular_permutation, rotate, safe_rotate
from .sequences import Sequence, SequenceStore, reverse_complement

__all__ = [
    "AlignmentHit",
    "RotationLogEntry",
    "RotationReference",
    "RotationStatus",
    "Sequence",
    "SequenceStore",
    "Strand",
    "is_circular_permutation",
    "normalize_offset",
    "offset_for_column",
    "offset_for_hit",
    "orient",
    "resolve_anchor_offset",
    "resolve_rotation_column",
    "reverse_complement",
    "rotate",
    "safe_rotate",
    "select_best_hit",
]
