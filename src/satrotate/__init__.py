"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/__init__.py

Public API:
  - rotate_sequences
  - rotate_fasta
  - RotationEngine

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

# Side-effect import: registers the built-in aligners (ssearch36, biopython, mafft)
from . import oracles  # noqa: F401
from .api import rotate_fasta, rotate_sequences
from .config import RotateConfig, load_config
from .engine import RotationEngine, RotationResult

__all__ = [
    "RotateConfig",
    "RotationEngine",
    "RotationResult",
    "load_config",
    "rotate_fasta",
    "rotate_sequences",
]
