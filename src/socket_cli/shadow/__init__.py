"""Shadow package-manager entry points.

``socket npm`` / ``socket npx`` / ``socket pnpm`` re-spawn the current
interpreter on the ``<tool>_cli.py`` files in this package.  Each one
checks the packages named on the command line and then hands the call
to the real tool found on PATH.
"""

from __future__ import annotations

from pathlib import Path

SHADOW_DIR = Path(__file__).resolve().parent
"""Directory holding the ``<tool>_cli.py`` entry points."""


def shadow_entry(tool: str) -> Path:
    """Path of the shadow entry point for *tool*."""
    return SHADOW_DIR / f"{tool}_cli.py"
