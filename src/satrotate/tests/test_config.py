"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/test_config.py

YAML config loading, defaults and overrides.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from pathlib import Path

import pytest

from satrotate.config import MAFFT_DEFAULT_ARGS, SSEARCH_DEFAULT_ARGS, RotateConfig, build_config, load_config
from satrotate.errors import ConfigError


def test_defaults() -> None:
    cfg = RotateConfig()
    assert cfg.strategy == "alignment_column"
    assert cfg.workers == 1
    assert cfg.min_score is None and cfg.min_identity is None
    assert not cfg.strict_no_hit and not cfg.align_anchor
    assert cfg.local_aligner.name == "ssearch36"
    assert cfg.local_aligner.args == SSEARCH_DEFAULT_ARGS
    assert cfg.local_aligner.trailing_args == ["3"]
    assert cfg.multi_aligner.name == "mafft"
    assert cfg.multi_aligner.args == MAFFT_DEFAULT_ARGS


def test_load_config_with_section(tmp_path: Path) -> None:
    p = tmp_path / "satrotate.yaml"
    p.write_text(
        "satrotate:\n"
        "  strategy: per_sequence\n"
        "  min_identity: 80\n"
        "  workers: 3\n"
        "  local_aligner:\n"
        "    name: biopython\n"
        "    match: 1\n"
        "  multi_aligner: mafft\n"
    )
    cfg = load_config(p)
    assert cfg.strategy == "per_sequence"
    assert cfg.min_identity == 80.0
    assert cfg.workers == 3
    assert cfg.local_aligner.name == "biopython"
    assert cfg.local_aligner.match == 1.0
    assert cfg.multi_aligner.name == "mafft"


def test_bare_mapping_and_overrides(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text("strategy: per_sequence\nworkers: 2\n")
    cfg = load_config(p, workers=8, min_score=None)
    assert cfg.workers == 8
    assert cfg.min_score is None
    assert cfg.strategy == "per_sequence"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_config(p) == RotateConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"strategy": "sideways"},
        {"workers": 0},
        {"min_identity": 120},
        {"unknown_key": 1},
        {"local_aligner": {"name": "ssearch36", "colour": "blue"}},
    ],
)
def test_invalid_values_raise_config_error(data) -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        build_config(data)


def test_unreadable_configs(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("satrotate: [unclosed\n")
    with pytest.raises(ConfigError, match="Could not parse"):
        load_config(bad)
    listy = tmp_path / "list.yaml"
    listy.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(listy)
