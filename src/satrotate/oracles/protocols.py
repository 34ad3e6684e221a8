"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/protocols.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Dict, List, Protocol, Sequence as SequenceT

from ..core.hits import AlignmentHit
from ..core.sequences import Sequence


class LocalAligner(Protocol):
    name: str

    def align(self, query: Sequence, subjects: SequenceT[Sequence]) -> List[AlignmentHit]: ...


class MultipleAligner(Protocol):
    name: str

    def align_multi(self, sequences: SequenceT[Sequence]) -> Dict[str, str]: ...
