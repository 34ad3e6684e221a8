"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/io/reports.py

Per-sequence rotation log as a table (TSV on disk).

Rotation_Position is 1-based, matching how positions are reported on the
console; sequences passed through without a computed offset show 0.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from ..core.rotator import RotationLogEntry

LOG_COLUMNS = [
    "Sequence",
    "Original_Length",
    "Rotation_Position",
    "Rotated_Length",
    "Same_Characters",
    "Valid_Rotation",
    "Strand",
]


def _yes_no(flag) -> str:
    if flag is None:
        return "ERROR"
    return "YES" if flag else "NO"


def rotation_log_frame(entries: Iterable[RotationLogEntry]) -> pd.DataFrame:
    rows = [
        {
            "Sequence": e.sequence_id,
            "Original_Length": e.original_length,
            "Rotation_Position": (e.offset + 1) if e.offset is not None else 0,
            "Rotated_Length": e.rotated_length,
            "Same_Characters": _yes_no(e.same_characters),
            "Valid_Rotation": e.status.value,
            "Strand": e.strand.value if e.strand is not None else "",
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=LOG_COLUMNS)


def write_rotation_log(path: Path | str, entries: Iterable[RotationLogEntry]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    rotation_log_frame(entries).to_csv(p, sep="\t", index=False)
    return p
