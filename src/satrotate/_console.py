"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/_console.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Type

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as rich_tb

from ._logging import build_handler
from .core.resolver import RotationReference
from .core.rotator import RotationLogEntry

theme = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "bad": "red",
        "muted": "dim",
        "accent": "bright_cyan",
        "kv": "bold white",
        "title": "bold bright_cyan",
    }
)
console = Console(theme=theme)


def setup_console_logging(level: str = "INFO", json_logs: bool = False) -> None:
    root = logging.getLogger()
    for h in list(root.handlers):  # idempotent re-init
        root.removeHandler(h)
    root.setLevel(level.upper())
    root.addHandler(build_handler(level, json_logs, console=console))


def rich_tracebacks(enabled: bool = True) -> None:
    if enabled:
        rich_tb(show_locals=False)


def _rounded_table(title: str) -> Table:
    return Table(
        title=Text(title, style="title"),
        show_header=True,
        header_style="bold white",
        border_style="accent",
        row_styles=["", "muted"],
        box=box.ROUNDED,
    )


def render_reference(reference: RotationReference) -> None:
    t = _rounded_table("Rotation reference")
    t.add_column("Field")
    t.add_column("Value")
    t.add_row("strategy", Text(reference.strategy, style="accent"))
    t.add_row("resolved", Text("yes" if reference.resolved else "no", style="ok" if reference.resolved else "warn"))
    hit = reference.best_hit
    if hit is not None:
        t.add_row("best hit", hit.subject_id)
        t.add_row("anchor span", f"{hit.query_start}..{hit.query_end} ({hit.strand.value})")
        t.add_row("subject span", f"{hit.subject_start}..{hit.subject_end}")
        t.add_row("score", str(hit.score))
        t.add_row("identity", "—" if hit.identity is None else f"{hit.identity:g}%")
    if reference.strategy == "per_sequence":
        t.add_row("anchor offset", str(reference.anchor_offset))
    else:
        t.add_row("rotation point", "—" if reference.rotation_point is None else str(reference.rotation_point))
        t.add_row("rotation column", str(reference.rotation_column))
    console.print(t)


def render_rotation_log(entries: Iterable[RotationLogEntry]) -> None:
    t = _rounded_table("Rotation log")
    t.add_column("sequence")
    t.add_column("length", justify="right")
    t.add_column("position", justify="right")
    t.add_column("strand")
    t.add_column("status")
    for e in entries:
        pos = "—" if e.offset is None else str(e.offset + 1)
        strand = e.strand.value if e.strand is not None else "—"
        t.add_row(
            e.sequence_id,
            str(e.original_length),
            pos,
            strand,
            Text(e.status.value, style="ok" if e.accepted else "bad"),
        )
    console.print(t)


def render_summary(summary, *, max_failures: int = 10) -> None:
    t = _rounded_table("Rotation summary")
    t.add_column("Metric")
    t.add_column("Count", justify="right")
    t.add_row("Total sequences processed", str(summary.total))
    t.add_row("Successfully rotated", Text(str(summary.rotated), style="ok"))
    t.add_row("Unchanged (offset 0)", str(summary.unchanged))
    t.add_row("Failed/kept original", Text(str(summary.kept), style="bad" if summary.kept else "ok"))
    for status, n in sorted(summary.failures.items())[:max_failures]:
        t.add_row(Text(f"  {status}", style="muted"), str(n))
    console.print(t)


def render_aligners_table(local: Dict[str, Type], multi: Dict[str, Type], available: Dict[str, bool]) -> None:
    t = _rounded_table("Registered aligners")
    t.add_column("name")
    t.add_column("kind")
    t.add_column("adapter")
    t.add_column("available")
    for kind, registry in (("local", local), ("multiple", multi)):
        for name, cls in registry.items():
            ok = available.get(name, True)
            t.add_row(
                name,
                Text(kind, style="accent"),
                f"{cls.__module__}.{cls.__name__}",
                Text("yes" if ok else "no", style="ok" if ok else "bad"),
            )
    console.print(t)


# ───────────────────────────────────────────────────────────────────────────────
# Progress Management
# ───────────────────────────────────────────────────────────────────────────────


class _RichHandle:
    def __init__(self, prog: Progress, task_id: int):
        self._p = prog
        self._task_id = task_id

    def update(self, n: int) -> None:
        self._p.update(self._task_id, advance=n)

    def close(self) -> None:
        self._p.remove_task(self._task_id)


class RichProgressManager:
    """Context-managed progress manager that exposes a factory for engine hooks."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        if enabled:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(
                    bar_width=None,
                    style="grey37",
                    complete_style="accent",
                    finished_style="ok",
                    pulse_style="accent",
                ),
                TextColumn("{task.completed}/{task.total}"),
                TimeElapsedColumn(),
                transient=True,
                console=console,
            )
        else:
            self._progress = None

    def __enter__(self):
        if self.enabled:
            self._progress.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.enabled:
            self._progress.__exit__(exc_type, exc, tb)

    def factory(self, label: str, total: int):
        if not self.enabled:
            return None
        task_id = self._progress.add_task(label, total=total)
        return _RichHandle(self._progress, task_id)
