"""Smoke tests — verify package wiring.

These tests prove that:
* Version is accessible.
* The exception hierarchy is correctly structured and chains render.
* Exit codes are defined.
* The root registry lists every command.
"""

from __future__ import annotations

import pytest

from socket_cli import __version__
from socket_cli.cli import exit_codes
from socket_cli.cli.commands import build_root_registry
from socket_cli.exceptions import (
    LOGIN_HINT,
    AuthError,
    EnvironmentError,
    HttpError,
    InputError,
    NetworkError,
    RegistryError,
    SocketCliError,
    iter_causes,
    messages_with_causes,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [InputError, AuthError, HttpError, NetworkError, RegistryError, EnvironmentError],
    )
    def test_all_exceptions_inherit_from_base(self, exc_class: type[SocketCliError]) -> None:
        assert issubclass(exc_class, SocketCliError)

    def test_hint_is_stored(self) -> None:
        err = SocketCliError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_input_error_carries_body(self) -> None:
        err = InputError("bad flag", "Usage\n  $ socket")
        assert err.body == "Usage\n  $ socket"
        assert err.hint is None

    def test_auth_error_defaults(self) -> None:
        err = AuthError()
        assert str(err) == "User must be authenticated to run this command."
        assert err.hint == LOGIN_HINT

    def test_http_error_message_includes_status(self) -> None:
        err = HttpError(502, "bad gateway")
        assert err.status == 502
        assert str(err) == "API returned an error (502): bad gateway"


class TestCauseChain:
    def test_explicit_cause_is_rendered(self) -> None:
        try:
            try:
                raise ConnectionResetError("peer reset")
            except ConnectionResetError as inner:
                raise HttpError(500, "Failed fetching") from inner
        except HttpError as exc:
            rendered = messages_with_causes(exc)
        assert rendered == (
            "API returned an error (500): Failed fetching"
            ": caused by: ConnectionResetError: peer reset"
        )

    def test_suppressed_context_is_skipped(self) -> None:
        try:
            try:
                raise KeyError("x")
            except KeyError:
                raise InputError("clean") from None
        except InputError as exc:
            assert iter_causes(exc) == [exc]

    def test_cycles_terminate(self) -> None:
        first = SocketCliError("a")
        second = SocketCliError("b")
        first.__cause__ = second
        second.__cause__ = first
        assert iter_causes(first) == [first, second]


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# Root registry
# ---------------------------------------------------------------------------

def test_root_registry_lists_every_command() -> None:
    assert build_root_registry().names() == [
        "npm",
        "npx",
        "pnpm",
        "raw-npx",
        "wrapper",
        "login",
        "logout",
        "info",
        "organizations",
        "repos",
        "scan",
        "analytics",
        "audit-log",
        "dependencies",
        "diff-scan",
        "doctor",
    ]
