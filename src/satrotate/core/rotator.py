"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/rotator.py

Circular rotation with a fail-safe integrity gate.

A candidate rotation is accepted only if, in order:
  0. the offset lies in [0, L);
  1. the length is preserved;
  2. the case-folded character multiset is preserved;
  3. rotating back by (L - start) mod L reproduces the original exactly;
  4. no symbol outside the nucleotide alphabet appears.
Otherwise the original sequence is emitted and the failure is recorded.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from .._logging import get_logger
from ..errors import IntegrityViolationError
from .hits import Strand
from .sequences import Sequence, invalid_symbols

_LOG = get_logger(__name__)


class RotationStatus(str, Enum):
    OK = "OK"
    NO_REFERENCE = "NO_REFERENCE"
    NO_HIT = "NO_HIT"
    NO_ALIGNMENT = "NO_ALIGNMENT"
    INVALID_POS = "INVALID_POS"
    LENGTH_CHANGE = "LENGTH_CHANGE"
    CHARACTER_CHANGE = "CHARACTER_CHANGE"
    ROTATION_VALIDATION_FAILED = "ROTATION_VALIDATION_FAILED"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"


@dataclass(frozen=True)
class RotationLogEntry:
    sequence_id: str
    original_length: int
    offset: Optional[int]
    rotated_length: int
    same_characters: Optional[bool]
    status: RotationStatus
    strand: Optional[Strand] = None
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status is RotationStatus.OK


def rotate(bases: str, start: int) -> str:
    """Cyclic left-rotation: bases[start:] + bases[:start]."""
    return bases[start:] + bases[:start]


def is_circular_permutation(original: str, candidate: str) -> bool:
    return len(original) == len(candidate) and candidate in (original + original)


def _same_characters(a: str, b: str) -> bool:
    return Counter(a.upper()) == Counter(b.upper())


def verify_rotation(original: str, candidate: str, start: int) -> None:
    length = len(original)
    if not 0 <= start < max(length, 1):
        raise IntegrityViolationError(
            f"Offset {start} is outside [0, {length}).", RotationStatus.INVALID_POS
        )
    if len(candidate) != length:
        raise IntegrityViolationError(
            f"Length changed from {length} to {len(candidate)}.", RotationStatus.LENGTH_CHANGE
        )
    if not _same_characters(original, candidate):
        raise IntegrityViolationError("Character composition changed.", RotationStatus.CHARACTER_CHANGE)
    back = (length - start) % length if length else 0
    if rotate(candidate, back) != original:
        raise IntegrityViolationError(
            "Rotating back does not reproduce the original.", RotationStatus.ROTATION_VALIDATION_FAILED
        )
    bad = invalid_symbols(candidate)
    if bad:
        raise IntegrityViolationError(
            f"Invalid characters in rotated sequence: {''.join(sorted(bad))}",
            RotationStatus.INVALID_CHARACTERS,
        )


def passthrough(
    sequence: Sequence,
    status: RotationStatus,
    message: str = "",
    *,
    strand: Optional[Strand] = None,
) -> Tuple[Sequence, RotationLogEntry]:
    """Emit the sequence unrotated with a log entry explaining why."""
    entry = RotationLogEntry(
        sequence_id=sequence.id,
        original_length=sequence.length,
        offset=None,
        rotated_length=sequence.length,
        same_characters=True,
        status=status,
        strand=strand,
        message=message,
    )
    return sequence, entry


def safe_rotate(
    sequence: Sequence,
    start: int,
    *,
    strand: Optional[Strand] = None,
    original: Optional[Sequence] = None,
    rotate_fn: Callable[[str, int], str] = rotate,
) -> Tuple[Sequence, RotationLogEntry]:
    """
    Rotate `sequence` by `start`, falling back to the unrotated input on any
    integrity failure.

    `original` is what gets emitted on failure; it defaults to `sequence` and
    differs only when `sequence` is the reverse-complemented copy of it.
    """
    fallback = original if original is not None else sequence
    candidate = rotate_fn(sequence.bases, start)
    try:
        verify_rotation(sequence.bases, candidate, start)
    except IntegrityViolationError as e:
        _LOG.error("%s: %s Keeping original sequence.", sequence.id, e)
        entry = RotationLogEntry(
            sequence_id=sequence.id,
            original_length=sequence.length,
            offset=start,
            rotated_length=len(candidate),
            same_characters=_same_characters(sequence.bases, candidate),
            status=e.status,
            strand=strand,
            message=str(e),
        )
        return fallback, entry

    _LOG.debug("%s: rotate to position %d (0-indexed: %d) [VALIDATED]", sequence.id, start + 1, start)
    entry = RotationLogEntry(
        sequence_id=sequence.id,
        original_length=sequence.length,
        offset=start,
        rotated_length=len(candidate),
        same_characters=True,
        status=RotationStatus.OK,
        strand=strand,
    )
    return sequence.with_bases(candidate), entry
