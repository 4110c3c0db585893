"""Shared pytest fixtures and configuration for the socket-cli test suite.

Guidelines
----------
* No internet access in any test; the Socket API and the npm registry
  are served by :class:`httpx.MockTransport`.
* Settings never touch the real user data directory.
* Coroutines are driven with :func:`asyncio.run`.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from socket_cli.infra.sdk import SocketSdk
from socket_cli.infra.settings_store import MemorySettingsStore

API_BASE_URL = "https://api.socket.test/v0/"
API_KEY = "test-api-key"

Handler = Callable[[httpx.Request], Any]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    data_home = tmp_path_factory.mktemp("data-home")
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    monkeypatch.setenv("LOCALAPPDATA", str(data_home))
    for name in ("SOCKET_SECURITY_API_KEY", "SOCKET_CLI_API_BASE_URL", "SOCKET_CLI_API_TIMEOUT", "SOCKET_CLI_DEBUG"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeSpinner:
    """In-memory :class:`ProgressIndicator` recording every final line."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.spinning = False
        self.events: list[tuple[str, str | None]] = []

    @property
    def is_spinning(self) -> bool:
        return self.spinning

    def start(self, text: str | None = None) -> FakeSpinner:
        if text is not None:
            self.text = text
        self.spinning = True
        self.events.append(("start", self.text))
        return self

    def stop(self) -> None:
        if self.spinning:
            self.events.append(("stop", None))
        self.spinning = False

    def _finish(self, kind: str, text: str | None) -> None:
        self.spinning = False
        self.events.append((kind, self.text if text is None else text))

    def succeed(self, text: str | None = None) -> None:
        self._finish("succeed", text)

    def fail(self, text: str | None = None) -> None:
        self._finish("fail", text)

    def warn(self, text: str | None = None) -> None:
        self._finish("warn", text)

    def info(self, text: str | None = None) -> None:
        self._finish("info", text)


class FakeParent:
    """:class:`ParentProcess` that records instead of terminating."""

    def __init__(self) -> None:
        self.pending_exit_code = 0
        self.exits: list[int] = []
        self.signals: list[int] = []

    def exit(self, code: int) -> None:
        self.exits.append(code)

    def raise_signal(self, signal_number: int) -> None:
        self.signals.append(signal_number)


class _Answer:
    def __init__(self, value: Any) -> None:
        self._value = value

    def unsafe_ask(self) -> Any:
        return self._value


class FakeQuestionary:
    """Stand-in for the questionary module, recording every prompt."""

    def __init__(self, *, password: str | None = None, checkbox: list[str] | None = None, confirm: bool = False) -> None:
        self._password = password
        self._checkbox = checkbox
        self._confirm = confirm
        self.calls: list[tuple[Any, ...]] = []

    def Choice(self, title: str, value: Any) -> SimpleNamespace:  # noqa: N802
        return SimpleNamespace(title=title, value=value)

    def password(self, message: str, **_kwargs: Any) -> _Answer:
        self.calls.append(("password", message))
        return _Answer(self._password)

    def checkbox(self, message: str, choices: list[Any], **_kwargs: Any) -> _Answer:
        self.calls.append(("checkbox", message, choices))
        return _Answer(self._checkbox)

    def confirm(self, message: str, default: bool = False, **_kwargs: Any) -> _Answer:
        self.calls.append(("confirm", message, default))
        return _Answer(self._confirm)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_sdk(handler: Handler, api_key: str = API_KEY) -> SocketSdk:
    return SocketSdk(api_key, base_url=API_BASE_URL, transport=httpx.MockTransport(handler))


def basic_auth_header(api_key: str = API_KEY) -> str:
    token = base64.b64encode(f"{api_key}:".encode()).decode()
    return f"Basic {token}"


@pytest.fixture
def settings() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def fake_spinner_class() -> type[FakeSpinner]:
    return FakeSpinner
