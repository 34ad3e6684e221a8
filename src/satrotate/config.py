"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/config.py

Run configuration (YAML -> pydantic).

A config file holds either a top-level `satrotate:` mapping or the bare
mapping itself:

  satrotate:
    strategy: alignment_column      # or per_sequence
    min_score: null                 # drop hits scoring below this
    min_identity: null              # drop hits below this percent identity
    workers: 4
    strict_no_hit: false            # abort instead of passing everything through
    align_anchor: false             # include the anchor in the multiple alignment
    local_aligner:
      name: ssearch36               # or biopython
      args: ["-Q", "-n", "-z", "11", "-E", "2", "-m", "8C"]
    multi_aligner:
      name: mafft
      threads: 4

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

Strategy = Literal["per_sequence", "alignment_column"]

SSEARCH_DEFAULT_ARGS = ["-Q", "-n", "-z", "11", "-E", "2", "-m", "8C"]
MAFFT_DEFAULT_ARGS = [
    "--localpair",
    "--maxiterate",
    "1000",
    "--ep",
    "0.123",
    "--nuc",
    "--reorder",
    "--preservecase",
    "--quiet",
]


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LocalAlignerConfig(_Strict):
    name: str = "ssearch36"
    tool_path: Optional[Path] = None
    args: List[str] = Field(default_factory=lambda: list(SSEARCH_DEFAULT_ARGS))
    # ssearch36 positional "ktup"/library-type argument appended after the files
    trailing_args: List[str] = Field(default_factory=lambda: ["3"])
    # scoring for the in-process Biopython aligner
    match: float = 2.0
    mismatch: float = -3.0
    open_gap: float = -5.0
    extend_gap: float = -2.0


class MultiAlignerConfig(_Strict):
    name: str = "mafft"
    tool_path: Optional[Path] = None
    args: List[str] = Field(default_factory=lambda: list(MAFFT_DEFAULT_ARGS))
    threads: int = Field(default=1, ge=-1)


class RotateConfig(_Strict):
    strategy: Strategy = "alignment_column"
    min_score: Optional[float] = None
    min_identity: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    workers: int = Field(default=1, ge=1)
    strict_no_hit: bool = False
    align_anchor: bool = False
    local_aligner: LocalAlignerConfig = Field(default_factory=LocalAlignerConfig)
    multi_aligner: MultiAlignerConfig = Field(default_factory=MultiAlignerConfig)

    @field_validator("local_aligner", "multi_aligner", mode="before")
    @classmethod
    def _name_shorthand(cls, v: Any) -> Any:
        # allow `local_aligner: biopython`
        if isinstance(v, str):
            return {"name": v}
        return v


def build_config(data: Optional[Dict[str, Any]] = None, **overrides: Any) -> RotateConfig:
    payload: Dict[str, Any] = dict(data or {})
    payload.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return RotateConfig(**payload)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Path | str, **overrides: Any) -> RotateConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse YAML config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {p}")
    data = raw.get("satrotate", raw)
    if not isinstance(data, dict):
        raise ConfigError("'satrotate' section must be a mapping.")
    return build_config(data, **overrides)
