"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/io/__init__.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from .fasta import read_fasta, write_alignment, write_fasta
from .reports import rotation_log_frame, write_rotation_log

__all__ = ["read_fasta", "rotation_log_frame", "write_alignment", "write_fasta", "write_rotation_log"]
