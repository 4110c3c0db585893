"""Allow ``python -m socket_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m socket_cli`` behaves identically to the ``socket``
console script.
"""

from __future__ import annotations

from socket_cli.cli.app import cli

if __name__ == "__main__":
    cli()
