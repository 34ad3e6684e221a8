"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/__init__.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from ..registry import register_local_aligner, register_multi_aligner
from .mafft import MafftAligner
from .pairwise import BiopythonLocalAligner
from .ssearch import Ssearch36Aligner

# Register built-in aligners
register_local_aligner("ssearch36", Ssearch36Aligner)
register_local_aligner("biopython", BiopythonLocalAligner)
register_multi_aligner("mafft", MafftAligner)

# Executables each adapter needs; in-process adapters need none
REQUIRED_TOOLS = {
    "ssearch36": "ssearch36",
    "mafft": "mafft",
}
