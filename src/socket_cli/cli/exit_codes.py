"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  Exit
codes of wrapped package-manager children are mirrored verbatim and do
not appear here.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed, or help was explicitly requested."""

GENERAL_ERROR: int = 1
"""Any error: input, auth, HTTP, unmatched command, or an unexpected exception."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C in one of our own prompts (128 + SIGINT=2)."""
