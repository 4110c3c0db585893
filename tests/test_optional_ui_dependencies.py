"""Regression tests for optional CLI UI dependencies (rich/questionary).

Bootstrap paths (help, version, doctor) must keep working when the UI
packages are missing; commands that need them fail with a clean
:class:`EnvironmentError`.
"""

from __future__ import annotations

import sys

import pytest

from socket_cli.cli import exit_codes, prompts
from socket_cli.cli.app import main
from socket_cli.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.status", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)
    assert main(["--help"]) == exit_codes.SUCCESS


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)
    assert main(["--version"]) == exit_codes.SUCCESS


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _hide_rich(monkeypatch)
    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)
    assert "socket doctor" in capsys.readouterr().err


def test_data_command_errors_cleanly_when_rich_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setenv("SOCKET_SECURITY_API_KEY", "test-api-key")
    with pytest.raises(EnvironmentError, match="rich is not installed"):
        main(["organizations"])


def test_login_errors_cleanly_when_questionary_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_questionary(monkeypatch)
    monkeypatch.setattr(prompts, "is_interactive", lambda: True)
    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["login"])
