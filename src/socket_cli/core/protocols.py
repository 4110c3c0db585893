"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so every collaborator can be replaced by an
in-memory fake in tests.
"""

from __future__ import annotations

from typing import Any, Protocol


class SettingsStore(Protocol):
    """Persisted key/value settings document (credentials, enforced orgs).

    Read-modify-write is last-writer-wins; implementations take no lock.
    """

    def get(self, key: str) -> Any:
        """Return the value stored under *key*, or ``None``."""
        ...  # pragma: no cover

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and persist the whole document."""
        ...  # pragma: no cover


class ProgressIndicator(Protocol):
    """Spinner-like progress reporter used around remote calls."""

    text: str

    @property
    def is_spinning(self) -> bool:
        ...  # pragma: no cover

    def start(self, text: str | None = None) -> ProgressIndicator:
        ...  # pragma: no cover

    def stop(self) -> None:
        """Stop without printing a final line (idempotent)."""
        ...  # pragma: no cover

    def succeed(self, text: str | None = None) -> None:
        ...  # pragma: no cover

    def fail(self, text: str | None = None) -> None:
        ...  # pragma: no cover

    def warn(self, text: str | None = None) -> None:
        ...  # pragma: no cover

    def info(self, text: str | None = None) -> None:
        ...  # pragma: no cover


class ParentProcess(Protocol):
    """The current process, as seen by the process proxy.

    The real implementation lives in the infra layer; tests substitute a
    recorder so signal/exit forwarding can be asserted without dying.
    """

    pending_exit_code: int

    def exit(self, code: int) -> None:
        """Terminate with *code*."""
        ...  # pragma: no cover

    def raise_signal(self, signal_number: int) -> None:
        """Terminate by delivering *signal_number* to ourselves."""
        ...  # pragma: no cover


class ChildHandle(Protocol):
    """Minimal view of a running child process."""

    pid: int

    def send_signal(self, signal_number: int) -> None:
        ...  # pragma: no cover
