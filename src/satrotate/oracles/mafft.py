"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/mafft.py

MAFFT as the multiple-alignment oracle.

Sequences are written under their short ids, MAFFT's FASTA output is parsed
with Bio.SeqIO and keyed back by id. All gapped rows must share one length.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import subprocess
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence as SequenceT

from .._logging import get_logger
from ..config import MultiAlignerConfig
from ..core.sequences import Sequence
from ..errors import OracleUnavailableError
from ..io.fasta import parse_alignment_text, write_fasta
from .executables import require_executable

_LOG = get_logger(__name__)


class MafftAligner:
    name = "mafft"

    def __init__(self, config: Optional[MultiAlignerConfig] = None) -> None:
        self.config = config or MultiAlignerConfig()

    def command(self, input_path: Path) -> List[str]:
        exe = require_executable("mafft", tool_path=self.config.tool_path)
        threads = str(self.config.threads)
        return [str(exe), "--thread", threads, *self.config.args, str(input_path)]

    def align_multi(self, sequences: SequenceT[Sequence]) -> Dict[str, str]:
        if not sequences:
            return {}
        if len(sequences) == 1:
            only = sequences[0]
            return {only.id: only.bases}
        with tempfile.TemporaryDirectory(prefix="satrotate_mafft_") as tmp:
            input_path = write_fasta(Path(tmp) / "input.fa", sequences, header="id")
            cmd = self.command(input_path)
            _LOG.debug("Running: %s", " ".join(cmd))
            try:
                result = subprocess.run(cmd, capture_output=True, text=True, check=False)
            except OSError as e:
                raise OracleUnavailableError(f"mafft could not be started: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise OracleUnavailableError(f"mafft failed (exit {result.returncode}). {stderr or 'No stderr output.'}")
        aligned = parse_alignment_text(result.stdout)
        validate_alignment(aligned, [s.id for s in sequences])
        _LOG.info("MAFFT aligned %d sequences (%d columns)", len(aligned), len(next(iter(aligned.values()))))
        return aligned


def validate_alignment(aligned: Dict[str, str], expected_ids: List[str]) -> None:
    if not aligned:
        raise OracleUnavailableError("Multiple aligner returned no sequences.")
    lengths = {len(v) for v in aligned.values()}
    if len(lengths) != 1:
        raise OracleUnavailableError(f"Aligned rows have unequal lengths: {sorted(lengths)}")
    missing = [i for i in expected_ids if i not in aligned]
    if missing:
        _LOG.warning("%d sequences missing from the alignment: %s", len(missing), ", ".join(missing[:10]))
