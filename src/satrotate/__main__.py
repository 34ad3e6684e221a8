"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/__main__.py

CLI module entrypoint.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from .cli import app

if __name__ == "__main__":
    app()
