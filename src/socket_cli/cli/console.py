"""CLI console helpers with optional Rich support.

Two proxies are exposed:

* :data:`console` — status, warnings and errors, on **stderr**;
* :data:`out` — command results (tables, JSON, Markdown), on **stdout**.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``, the npm
proxy) remain functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from socket_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr, highlight=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    @property
    def stream(self) -> TextIO:
        return sys.stderr if self._stderr else sys.stdout

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            print(*objects, file=self.stream)
            return
        rich_console.print(*objects)

    def write(self, text: str) -> None:
        """Write *text* verbatim, bypassing markup (JSON, Markdown, help)."""
        stream = self.stream
        stream.write(text if text.endswith("\n") else text + "\n")
        stream.flush()


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)


def escape_markup(text: str) -> str:
    """Escape Rich markup in *text*; identity when Rich is unavailable."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)
