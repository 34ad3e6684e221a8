"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/executables.py

Lightweight resolution of external aligner executables (ssearch36, mafft).

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from ..errors import OracleUnavailableError


def resolve_executable(tool: str, *, tool_path: Path | None = None) -> Path | None:
    if tool_path is not None:
        resolved = Path(tool_path).expanduser()
        candidate = resolved / tool if resolved.is_dir() else resolved
        if candidate.exists():
            return candidate
        raise OracleUnavailableError(f"Configured tool_path does not contain '{tool}': {candidate}")
    env_dir = os.getenv("SATROTATE_BIN")
    if env_dir:
        candidate = Path(env_dir).expanduser() / tool
        if candidate.exists():
            return candidate
    found = shutil.which(tool)
    return Path(found) if found else None


def require_executable(tool: str, *, tool_path: Path | None = None) -> Path:
    exe = resolve_executable(tool, tool_path=tool_path)
    if exe is None:
        raise OracleUnavailableError(
            f"{tool} executable not found. Install it and ensure `{tool}` is on PATH, "
            "or set SATROTATE_BIN to the directory holding it."
        )
    return exe
