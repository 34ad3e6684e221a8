"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/api.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from ._logging import get_logger
from .config import RotateConfig, build_config
from .core.sequences import Sequence, SequenceStore
from .engine import ProgressFactory, RotationEngine, RotationResult
from .errors import ConfigError
from .io.fasta import read_fasta, write_alignment, write_fasta
from .io.reports import write_rotation_log
from .oracles.protocols import LocalAligner, MultipleAligner
from .registry import get_multi_aligner_cls

_LOG = get_logger(__name__)

SequencesIn = Union[SequenceStore, Iterable[Sequence], Iterable[Tuple[str, str]]]


@dataclass(frozen=True)
class RotationOutputs:
    result: RotationResult
    fasta: Path
    log: Path
    alignment: Optional[Path] = None


def _as_store(sequences: SequencesIn) -> SequenceStore:
    if isinstance(sequences, SequenceStore):
        return sequences
    items = list(sequences)
    if all(isinstance(x, Sequence) for x in items):
        return SequenceStore(items)
    if all(isinstance(x, tuple) and len(x) == 2 for x in items):
        return SequenceStore.from_records(items)
    raise ConfigError("sequences must be a SequenceStore, list[Sequence] or list[(label, bases)]")


def _as_config(config: RotateConfig | dict | None) -> RotateConfig:
    if config is None:
        return RotateConfig()
    if isinstance(config, RotateConfig):
        return config
    return build_config(config)


def rotate_sequences(
    sequences: SequencesIn,
    anchor_id: str,
    *,
    config: RotateConfig | dict | None = None,
    local_aligner: Optional[LocalAligner] = None,
    multi_aligner: Optional[MultipleAligner] = None,
    progress_factory: ProgressFactory = None,
) -> RotationResult:
    store = _as_store(sequences)
    store.validate_alphabet()
    engine = RotationEngine(_as_config(config), local_aligner=local_aligner, multi_aligner=multi_aligner)
    return engine.run(store, anchor_id, progress_factory=progress_factory)


def default_output_path(input_path: Path) -> Path:
    if input_path.suffix == ".fa":
        return input_path.with_suffix(".rotated.fa")
    return input_path.with_name(input_path.name + ".rotated.fa")


def rotate_fasta(
    input_path: Path | str,
    anchor_id: str,
    *,
    config: RotateConfig | dict | None = None,
    output: Path | str | None = None,
    log_path: Path | str | None = None,
    realign: bool = False,
    local_aligner: Optional[LocalAligner] = None,
    multi_aligner: Optional[MultipleAligner] = None,
    progress_factory: ProgressFactory = None,
) -> RotationOutputs:
    """Read a FASTA, rotate it, and write <input>.rotated.fa plus a TSV log."""
    cfg = _as_config(config)
    in_path = Path(input_path)
    out_fa = Path(output) if output else default_output_path(in_path)
    out_log = Path(log_path) if log_path else out_fa.with_suffix(".log.tsv")

    store = read_fasta(in_path)
    result = rotate_sequences(
        store,
        anchor_id,
        config=cfg,
        local_aligner=local_aligner,
        multi_aligner=multi_aligner,
        progress_factory=progress_factory,
    )
    write_fasta(out_fa, result.sequences)
    write_rotation_log(out_log, result.log)
    _LOG.info("Rotated FASTA: %s (%d sequences)", out_fa, len(result.sequences))
    _LOG.info("Rotation log: %s", out_log)

    out_al: Optional[Path] = None
    if realign:
        aligner = multi_aligner or get_multi_aligner_cls(cfg.multi_aligner.name)(cfg.multi_aligner)
        final = aligner.align_multi(result.sequences)
        labels = {s.id: s.label for s in result.sequences}
        out_al = write_alignment(out_fa.with_suffix(".al"), final, labels=labels)
        _LOG.info("Final alignment: %s", out_al)

    return RotationOutputs(result=result, fasta=out_fa, log=out_log, alignment=out_al)
