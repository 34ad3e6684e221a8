"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/cli.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ._console import (
    RichProgressManager,
    console,
    render_aligners_table,
    render_reference,
    render_rotation_log,
    render_summary,
    rich_tracebacks,
    setup_console_logging,
)
from .api import rotate_fasta
from .config import RotateConfig, build_config, load_config
from .core.rotator import is_circular_permutation
from .core.sequences import reverse_complement
from .errors import (
    ConfigError,
    FatalInputError,
    IntegrityViolationError,
    NoHitFoundError,
    OracleUnavailableError,
    SatRotateError,
)
from .io.fasta import read_fasta
from .oracles import REQUIRED_TOOLS
from .oracles.executables import resolve_executable
from .registry import list_local_aligners, list_multi_aligners

app = typer.Typer(
    add_completion=True,
    no_args_is_help=True,
    help="Rotate circular sequences to a common start defined by an anchor.",
)


def _exit_for(e: Exception) -> int:
    mapping = {
        ConfigError: 2,
        FatalInputError: 3,
        OracleUnavailableError: 4,
        NoHitFoundError: 5,
        IntegrityViolationError: 6,
    }
    for etype, code in mapping.items():
        if isinstance(e, etype):
            return code
    return 1


def _discovery_config(provided: Optional[Path]) -> Optional[Path]:
    if provided:
        return provided.resolve()
    cwd_cfg = Path.cwd() / "satrotate.yaml"
    if cwd_cfg.exists():
        return cwd_cfg.resolve()
    return None


def _resolve_config(config: Optional[Path], **overrides) -> RotateConfig:
    path = _discovery_config(config)
    aligner = overrides.pop("aligner", None)
    cfg = load_config(path, **overrides) if path else build_config(None, **overrides)
    if aligner:
        cfg = cfg.model_copy(update={"local_aligner": cfg.local_aligner.model_copy(update={"name": aligner})})
    return cfg


@app.callback()
def _root(
    log_level: str = typer.Option(
        os.environ.get("SATROTATE_LOG_LEVEL", "INFO"),
        "--log-level",
        help="Console log level.",
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON logs."),
    trace: bool = typer.Option(False, "--trace", help="Rich tracebacks on errors."),
):
    setup_console_logging(log_level, json_logs)
    rich_tracebacks(enabled=trace)


@app.command(help="Rotate every sequence in a FASTA file to the anchor's landmark.")
def rotate(
    input_fa: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input FASTA."),
    anchor: str = typer.Option(..., "--anchor", "-a", help="Id of the anchor sequence."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to satrotate.yaml"),
    strategy: Optional[str] = typer.Option(None, "--strategy", help="alignment_column | per_sequence"),
    aligner: Optional[str] = typer.Option(None, "--aligner", help="Local aligner: ssearch36 | biopython"),
    min_score: Optional[float] = typer.Option(None, "--min-score", help="Ignore hits scoring below this."),
    min_identity: Optional[float] = typer.Option(None, "--min-identity", help="Ignore hits below this % identity."),
    workers: Optional[int] = typer.Option(None, "--workers", help="Worker threads."),
    align_anchor: Optional[bool] = typer.Option(
        None, "--align-anchor/--no-align-anchor", help="Include the anchor in the multiple alignment."
    ),
    strict_no_hit: Optional[bool] = typer.Option(
        None, "--strict-no-hit/--lenient-no-hit", help="Abort when the anchor hits nothing."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Rotated FASTA path."),
    log_tsv: Optional[Path] = typer.Option(None, "--log-tsv", help="Rotation log path."),
    realign: bool = typer.Option(True, "--realign/--no-realign", help="Write the final multiple alignment (.al)."),
    show_log: bool = typer.Option(False, "--show-log/--no-show-log", help="Print the per-sequence log."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Use progress bars."),
):
    try:
        cfg = _resolve_config(
            config,
            strategy=strategy,
            aligner=aligner,
            min_score=min_score,
            min_identity=min_identity,
            workers=workers,
            align_anchor=align_anchor,
            strict_no_hit=strict_no_hit,
        )
        with RichProgressManager(enabled=progress) as pm:
            outputs = rotate_fasta(
                input_fa,
                anchor,
                config=cfg,
                output=output,
                log_path=log_tsv,
                realign=realign,
                progress_factory=pm.factory,
            )
        render_reference(outputs.result.reference)
        if show_log:
            render_rotation_log(outputs.result.log)
        render_summary(outputs.result.summary())
        console.print(f"[green]✔ Rotated FASTA:[/green] {outputs.fasta}")
        console.print(f"[green]✔ Rotation log:[/green] {outputs.log}")
        if outputs.alignment is not None:
            console.print(f"[green]✔ Final alignment:[/green] {outputs.alignment}")
    except SatRotateError as e:
        console.print(f"[red]✖ {escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


@app.command(help="Check that ROTATED holds circular permutations of ORIGINAL, record by record.")
def verify(
    original: Path = typer.Argument(..., exists=True, dir_okay=False),
    rotated: Path = typer.Argument(..., exists=True, dir_okay=False),
    allow_reverse: bool = typer.Option(
        True, "--allow-reverse/--forward-only", help="Accept reverse-complemented rotations."
    ),
):
    try:
        before = read_fasta(original)
        after = read_fasta(rotated)
        mismatches = 0
        for seq in after:
            if seq.id not in before:
                console.print(f"[yellow]WARNING: {seq.id} not found in original sequences[/yellow]")
                continue
            orig = before.get(seq.id).bases
            ok = is_circular_permutation(orig, seq.bases)
            if not ok and allow_reverse:
                ok = is_circular_permutation(reverse_complement(orig), seq.bases)
            if not ok:
                mismatches += 1
                console.print(f"[red]ERROR: {seq.id} final sequence is not a valid rotation of original![/red]")
        if mismatches:
            raise IntegrityViolationError(f"{mismatches} sequences failed final verification!")
        console.print("[green]✔ All sequences verified: rotations are valid circular permutations[/green]")
    except SatRotateError as e:
        console.print(f"[red]✖ {escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


@app.command(help="List registered aligners and whether their executables resolve.")
def tools():
    available = {}
    for name, tool in REQUIRED_TOOLS.items():
        try:
            available[name] = resolve_executable(tool) is not None
        except OracleUnavailableError:
            available[name] = False
    render_aligners_table(list_local_aligners(), list_multi_aligners(), available)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
