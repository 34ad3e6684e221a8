"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/errors.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations


class SatRotateError(Exception):
    """Base exception for this package."""


class ConfigError(SatRotateError): ...


class FatalInputError(SatRotateError):
    """Input set cannot be processed at all (empty, anchor missing, bad symbols)."""


class OracleUnavailableError(SatRotateError):
    """An external aligner could not be invoked or returned unusable output."""


class NoHitFoundError(SatRotateError):
    """No alignment hit between the anchor and any candidate sequence."""


class PerSequenceUnmappableError(SatRotateError):
    """A single sequence has no usable rotation offset."""


class IntegrityViolationError(SatRotateError):
    """A candidate rotation is not a lossless circular permutation."""

    def __init__(self, message: str, status=None) -> None:
        super().__init__(message)
        self.status = status
