"""Tests for the ``socket`` entry point and its error boundary (cli/app.py)."""

from __future__ import annotations

import logging

import pytest

from socket_cli.cli import app, exit_codes
from socket_cli.exceptions import AuthError, HttpError, InputError, NetworkError
from socket_cli.version import __version__


class TestMain:
    @pytest.mark.parametrize("flag", ["--version", "-V"])
    def test_version(self, flag: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert app.main([flag]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.strip() == __version__

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert app.main(["--help"]) == exit_codes.SUCCESS
        out = capsys.readouterr().out
        assert "$ socket <command>" in out
        assert "audit-log" in out

    def test_no_arguments(self) -> None:
        assert app.main([]) == exit_codes.GENERAL_ERROR

    def test_unknown_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert app.main(["bogus"]) == exit_codes.GENERAL_ERROR
        assert 'Unknown command "bogus"' in capsys.readouterr().err

    def test_debug_flag_enables_debug_logging(self) -> None:
        try:
            app.main(["--debug", "--help"])
            assert logging.getLogger("socket_cli").level == logging.DEBUG
        finally:
            logging.getLogger("socket_cli").setLevel(logging.WARNING)


class TestErrorBoundary:
    def _cli_with(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int | str | None:
        def boom(argv=None) -> int:
            raise exc

        monkeypatch.setattr(app, "main", boom)
        with pytest.raises(SystemExit) as exc_info:
            app.cli([])
        return exc_info.value.code

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app, "main", lambda argv=None: 0)
        with pytest.raises(SystemExit) as exc_info:
            app.cli([])
        assert exc_info.value.code == 0

    def test_input_error_prints_body(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        code = self._cli_with(monkeypatch, InputError("Bad scope", "Usage\n  $ socket analytics"))
        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "Input error" in err
        assert "Bad scope" in err
        assert "$ socket analytics" in err

    def test_auth_error_shows_login_hint(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        code = self._cli_with(monkeypatch, AuthError())
        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "Authentication error" in err
        assert "socket login" in err

    def test_http_error_renders_cause(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        error = HttpError(500, "Failed")
        error.__cause__ = NetworkError("refused")
        code = self._cli_with(monkeypatch, error)
        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "API error" in err
        assert "refused" in err

    def test_markup_in_messages_is_escaped(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        self._cli_with(monkeypatch, InputError("bad [bold]flag[/bold]"))
        assert "[bold]flag[/bold]" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._cli_with(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        code = self._cli_with(monkeypatch, RuntimeError("kaput"))
        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "Unexpected error" in err
        assert "kaput" in err

    def test_system_exit_passes_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._cli_with(monkeypatch, SystemExit(42)) == 42
