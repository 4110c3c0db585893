"""Rich-based spinner used around remote API calls.

:class:`Spinner` satisfies
:class:`~socket_cli.core.protocols.ProgressIndicator`, so the API call
layer can stop it on failure without knowing about Rich.

Design
------
* Wraps a Rich :class:`~rich.status.Status` on stderr.
* ``stop`` is idempotent; final-line helpers (``succeed``, ``fail``,
  ``warn``, ``info``) stop the animation first, then print one line.
* No ``print()`` — Rich handles all rendering.
"""

from __future__ import annotations

from typing import Any

from socket_cli.cli.console import get_rich_console
from socket_cli.exceptions import EnvironmentError

SYMBOLS: dict[str, str] = {
    "succeed": "[green]✔[/green]",
    "fail": "[red]✖[/red]",
    "warn": "[yellow]⚠[/yellow]",
    "info": "[blue]ℹ[/blue]",
}


class Spinner:
    """Start/stop spinner with ora-style final lines.

    Usage::

        spinner = Spinner("Fetching organizations...").start()
        ...
        spinner.succeed("Done")

    Or as a context manager::

        with Spinner("Working...") as spinner:
            ...
    """

    def __init__(self, text: str = "") -> None:
        try:
            from rich.status import Status
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._console: Any = get_rich_console()
        self._status: Any = Status(text, console=self._console, spinner="dots")
        self._text: str = text
        self._spinning: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._status.update(value)

    @property
    def is_spinning(self) -> bool:
        return self._spinning

    def start(self, text: str | None = None) -> Spinner:
        """Start (or restart) the animation, optionally with new *text*."""
        if text is not None:
            self.text = text
        if not self._spinning:
            self._status.start()
            self._spinning = True
        return self

    def stop(self) -> None:
        """Stop the animation without printing anything (idempotent)."""
        if self._spinning:
            self._status.stop()
            self._spinning = False

    # ------------------------------------------------------------------
    # Final lines
    # ------------------------------------------------------------------

    def _finish(self, kind: str, text: str | None) -> None:
        from rich.markup import escape

        self.stop()
        message = self._text if text is None else text
        self._console.print(f"{SYMBOLS[kind]} {escape(message)}".rstrip())

    def succeed(self, text: str | None = None) -> None:
        self._finish("succeed", text)

    def fail(self, text: str | None = None) -> None:
        self._finish("fail", text)

    def warn(self, text: str | None = None) -> None:
        self._finish("warn", text)

    def info(self, text: str | None = None) -> None:
        self._finish("info", text)
