"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/io/fasta.py

FASTA reading and writing on top of Bio.SeqIO.

Input records are cleaned before the engine sees them: carriage returns,
whitespace and gap symbols are removed and empty records are dropped.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Dict, Iterable, Literal, Mapping, Optional

from Bio import SeqIO

from .._logging import get_logger
from ..core.sequences import Sequence, SequenceStore, clean_bases
from ..errors import FatalInputError

_LOG = get_logger(__name__)

HeaderMode = Literal["label", "id"]


def parse_fasta_text(text: str) -> SequenceStore:
    store = SequenceStore()
    for record in SeqIO.parse(StringIO(text.replace("\r", "")), "fasta"):
        bases = clean_bases(str(record.seq))
        if not bases:
            _LOG.warning("Skipping empty record '%s'.", record.id)
            continue
        store.add(Sequence.from_label(record.description or record.id, bases))
    return store


def read_fasta(path: Path | str, *, validate: bool = True) -> SequenceStore:
    p = Path(path)
    if not p.exists():
        raise FatalInputError(f"Input FASTA not found: {p}")
    store = parse_fasta_text(p.read_text())
    if len(store) == 0:
        raise FatalInputError(f"No sequences found in {p}")
    if validate:
        store.validate_alphabet()
    _LOG.info("Loaded %d sequences from %s", len(store), p)
    return store


def _wrap(bases: str, line_width: int) -> Iterable[str]:
    if line_width <= 0:
        yield bases
        return
    for i in range(0, len(bases), line_width):
        yield bases[i : i + line_width]


def format_fasta(sequences: Iterable[Sequence], *, header: HeaderMode = "label", line_width: int = 0) -> str:
    lines = []
    for seq in sequences:
        lines.append(f">{seq.label if header == 'label' else seq.id}")
        lines.extend(_wrap(seq.bases, line_width))
    return "\n".join(lines) + "\n" if lines else ""


def write_fasta(
    path: Path | str,
    sequences: Iterable[Sequence],
    *,
    header: HeaderMode = "label",
    line_width: int = 0,
) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(format_fasta(sequences, header=header, line_width=line_width))
    return p


def parse_alignment_text(text: str) -> Dict[str, str]:
    """id -> gapped string, in file order."""
    aligned: Dict[str, str] = {}
    for record in SeqIO.parse(StringIO(text), "fasta"):
        aligned[record.id] = str(record.seq).replace("\n", "")
    return aligned


def write_alignment(
    path: Path | str,
    alignment: Mapping[str, str],
    *,
    labels: Optional[Mapping[str, str]] = None,
) -> Path:
    """Write a gapped alignment, restoring full labels where known."""
    labels = labels or {}
    seqs = [Sequence(id=k, label=labels.get(k, k), bases=v) for k, v in alignment.items()]
    return write_fasta(path, seqs, header="label")
