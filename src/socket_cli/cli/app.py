"""CLI application entry point for ``socket``.

This module is the **sole error boundary** for the entire application.
It catches :class:`~socket_cli.exceptions.SocketCliError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, renders a
readable message with the full cause chain via Rich, and returns a
well-defined exit code.

Architecture notes
------------------
* No business logic lives here; the registry routes to subcommands.
* ``SystemExit`` raised by the process proxy passes through untouched,
  so a wrapped child's status reaches the OS unchanged.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from socket_cli.cli import exit_codes
from socket_cli.cli.console import console, escape_markup, out
from socket_cli.config import debug_enabled
from socket_cli.exceptions import AuthError, HttpError, InputError, SocketCliError, messages_with_causes
from socket_cli.logging import configure_logging
from socket_cli.version import __version__

logger = logging.getLogger(__name__)

ROOT_NAME = "socket"

VERSION_FLAGS = frozenset({"--version", "-V"})
DEBUG_FLAG = "--debug"


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the socket CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from socket_cli.cli.commands import build_root_registry
    from socket_cli.cli.dispatcher import dispatch

    args = list(sys.argv[1:] if argv is None else argv)

    debug = debug_enabled()
    while args and args[0] in (VERSION_FLAGS | {DEBUG_FLAG}):
        flag = args.pop(0)
        if flag in VERSION_FLAGS:
            out.write(__version__)
            return exit_codes.SUCCESS
        debug = True

    configure_logging(logging.DEBUG if debug else logging.WARNING)
    logger.debug("socket-cli %s, argv=%s", __version__, args)

    meta = {"version": __version__, "package_dir": str(Path(__file__).resolve().parents[1])}
    result = asyncio.run(dispatch(build_root_registry(), args, ROOT_NAME, meta))
    return result.exit_code


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _title(exc: SocketCliError) -> str:
    if isinstance(exc, InputError):
        return "Input error"
    if isinstance(exc, AuthError):
        return "Authentication error"
    if isinstance(exc, HttpError):
        return "API error"
    return "Error"


def report_error(exc: SocketCliError) -> None:
    """Print *exc* with its cause chain, usage body and hint."""
    console.print(f"[bold red]{_title(exc)}:[/bold red] {escape_markup(messages_with_causes(exc))}")
    if isinstance(exc, InputError) and exc.body:
        console.write(exc.body)
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
    except SocketCliError as exc:
        logger.debug("command failed", exc_info=True)
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("unexpected error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {escape_markup(f'{type(exc).__name__}: {messages_with_causes(exc)}')}"
        )
        sys.exit(exit_codes.GENERAL_ERROR)
    sys.exit(code)
