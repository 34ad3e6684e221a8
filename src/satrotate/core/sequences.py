"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/core/sequences.py

In-memory store of named, linear (gap-free) sequences for a single run.

A Sequence carries the record id (first token of the FASTA label), the full
label, and its bases. Rotation never mutates a Sequence: rotated copies are
built with Sequence.with_bases so the originals stay available for the
integrity checks.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import FatalInputError

NUCLEOTIDES = frozenset("ACGTURYSWKMBDHVN")
GAP_SYMBOLS = "-."

_STRIP_RE = re.compile(r"[\s\-.]+")
_RC_TABLE = str.maketrans(
    "ACGTURYKMBVDHSWNacgturykmbvdhswn",
    "TGCAAYRMKVBHDSWNtgcaayrmkvbhdswn",
)


def reverse_complement(bases: str) -> str:
    """IUPAC-aware reverse complement; case is preserved, U pairs as T."""
    return bases.translate(_RC_TABLE)[::-1]


def clean_bases(text: str) -> str:
    """Remove whitespace, carriage returns and gap symbols."""
    return _STRIP_RE.sub("", text)


def invalid_symbols(bases: str) -> set[str]:
    return {c for c in bases.upper() if c not in NUCLEOTIDES}


def split_label(label: str) -> Tuple[str, str]:
    label = label.strip()
    if not label:
        raise FatalInputError("Empty sequence label.")
    parts = label.split(None, 1)
    return parts[0], label


@dataclass(frozen=True)
class Sequence:
    id: str
    label: str
    bases: str

    @classmethod
    def from_label(cls, label: str, bases: str) -> "Sequence":
        seq_id, full = split_label(label)
        return cls(id=seq_id, label=full, bases=bases)

    @property
    def length(self) -> int:
        return len(self.bases)

    def doubled(self) -> "Sequence":
        return replace(self, bases=self.bases + self.bases)

    def with_bases(self, bases: str) -> "Sequence":
        return replace(self, bases=bases)


class SequenceStore:
    """Ordered, id-unique collection of Sequence records."""

    def __init__(self, sequences: Optional[Iterable[Sequence]] = None) -> None:
        self._records: Dict[str, Sequence] = {}
        for seq in sequences or ():
            self.add(seq)

    @classmethod
    def from_records(cls, records: Iterable[Tuple[str, str]]) -> "SequenceStore":
        """Build from (label, bases) pairs, cleaning gap symbols from bases."""
        return cls(Sequence.from_label(label, clean_bases(bases)) for label, bases in records)

    def add(self, seq: Sequence) -> None:
        if seq.id in self._records:
            raise FatalInputError(f"Duplicate sequence id '{seq.id}'.")
        if not seq.bases:
            raise FatalInputError(f"Sequence '{seq.id}' is empty.")
        self._records[seq.id] = seq

    def get(self, seq_id: str) -> Sequence:
        try:
            return self._records[seq_id]
        except KeyError as e:
            raise FatalInputError(f"Sequence '{seq_id}' not found in input set.") from e

    def without(self, seq_id: str) -> List[Sequence]:
        return [s for s in self._records.values() if s.id != seq_id]

    @property
    def ids(self) -> List[str]:
        return list(self._records)

    def validate_alphabet(self) -> None:
        for seq in self._records.values():
            bad = invalid_symbols(seq.bases)
            if bad:
                raise FatalInputError(
                    f"Sequence '{seq.id}' contains invalid symbols: {''.join(sorted(bad))}"
                )

    def require_anchor(self, anchor_id: str) -> Sequence:
        if not self._records:
            raise FatalInputError("Input sequence set is empty.")
        if anchor_id not in self._records:
            raise FatalInputError(f"Anchor '{anchor_id}' not found!")
        return self._records[anchor_id]

    def __contains__(self, seq_id: object) -> bool:
        return seq_id in self._records

    def __iter__(self) -> Iterator[Sequence]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
