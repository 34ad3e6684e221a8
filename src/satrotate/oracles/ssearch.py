"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/ssearch.py

FASTA-suite ssearch36 (Smith-Waterman) as the local-alignment oracle.

The query and subjects are written to a scratch directory and ssearch36 is
run with BLAST-tabular output (-m 8C). Each data line carries

  qid sid pident alen mismatches gapopens qstart qend sstart send evalue score

and hits are reduced to the best-scoring one per (query, subject).

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence as SequenceT

from .._logging import get_logger
from ..config import SSEARCH_DEFAULT_ARGS, LocalAlignerConfig
from ..core.hits import AlignmentHit, best_hits_by_subject
from ..core.sequences import Sequence
from ..errors import OracleUnavailableError
from ..io.fasta import write_fasta
from .executables import require_executable

_LOG = get_logger(__name__)

_M8_COLUMNS = 12


def parse_m8(text: str) -> List[AlignmentHit]:
    hits: List[AlignmentHit] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) < _M8_COLUMNS:
            fields = line.split()
        if len(fields) < _M8_COLUMNS:
            raise OracleUnavailableError(
                f"ssearch36 output line {lineno} has {len(fields)} columns, expected {_M8_COLUMNS}."
            )
        try:
            hits.append(
                AlignmentHit(
                    query_id=fields[0],
                    subject_id=fields[1],
                    identity=float(fields[2]),
                    query_start=int(fields[6]),
                    query_end=int(fields[7]),
                    subject_start=int(fields[8]),
                    subject_end=int(fields[9]),
                    score=float(fields[11]),
                )
            )
        except ValueError as e:
            raise OracleUnavailableError(f"Could not parse ssearch36 output line {lineno}: {e}") from e
    return hits


class Ssearch36Aligner:
    name = "ssearch36"

    def __init__(self, config: Optional[LocalAlignerConfig] = None) -> None:
        self.config = config or LocalAlignerConfig()
        self.args = list(self.config.args) if self.config.args else list(SSEARCH_DEFAULT_ARGS)

    def command(self, query_path: Path, subjects_path: Path) -> List[str]:
        exe = require_executable("ssearch36", tool_path=self.config.tool_path)
        return [str(exe), *self.args, str(query_path), str(subjects_path), *self.config.trailing_args]

    def run(self, query_path: Path, subjects_path: Path) -> str:
        cmd = self.command(query_path, subjects_path)
        _LOG.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise OracleUnavailableError(f"ssearch36 could not be started: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise OracleUnavailableError(
                f"ssearch36 failed (exit {result.returncode}). {stderr or 'No stderr output.'}"
            )
        return result.stdout

    def align(self, query: Sequence, subjects: SequenceT[Sequence]) -> List[AlignmentHit]:
        if not subjects:
            return []
        with tempfile.TemporaryDirectory(prefix="satrotate_ssearch_") as tmp:
            tmp_dir = Path(tmp)
            query_path = write_fasta(tmp_dir / "query.fa", [query], header="id")
            subjects_path = write_fasta(tmp_dir / "subjects.fa", subjects, header="id")
            stdout = self.run(query_path, subjects_path)
        hits = list(best_hits_by_subject(parse_m8(stdout)).values())
        _LOG.debug("ssearch36: %d hits for %d subjects", len(hits), len(subjects))
        return hits
