"""Tests for ``socket npm|npx|pnpm`` and ``socket raw-npx``.

Coverage:
* The proxy spec points at the shadow entry point, forwards argv
  verbatim and inherits stdio.
* A real child's exit status becomes the parent's exit status.
* ``raw-npx`` runs the real npx found outside the shadow directory.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from socket_cli.cli.commands import build_root_registry, npm, raw_npx
from socket_cli.cli.dispatcher import dispatch
from socket_cli.core.models import ProcessProxySpec
from socket_cli.infra import process_runner
from socket_cli.shadow import SHADOW_DIR, shadow_entry


@pytest.fixture
def spawned(monkeypatch: pytest.MonkeyPatch) -> list[ProcessProxySpec]:
    """Record specs instead of spawning; the fake child exits 0."""
    specs: list[ProcessProxySpec] = []

    async def fake_run(spec: ProcessProxySpec, **_kwargs) -> None:
        specs.append(spec)
        raise SystemExit(0)

    monkeypatch.setattr(process_runner, "run_wrapped_async", fake_run)
    return specs


def _socket(*argv: str) -> int:
    return asyncio.run(dispatch(build_root_registry(), list(argv), "socket")).exit_code


class TestProxySpec:
    @pytest.mark.parametrize("tool", ["npm", "npx", "pnpm"])
    def test_shadow_entry_exists(self, tool: str) -> None:
        assert shadow_entry(tool).is_file()
        assert shadow_entry(tool).parent == SHADOW_DIR

    def test_install_left_pad(self, spawned: list[ProcessProxySpec]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _socket("npm", "install", "left-pad")
        assert exc_info.value.code == 0

        spec = spawned[0]
        assert spec.forwarded_args == ("install", "left-pad")
        assert spec.executable_path == str(shadow_entry("npm"))
        assert spec.interpreter == sys.executable
        assert spec.stdio_mode == "inherit"
        assert spec.command_line() == [sys.executable, str(shadow_entry("npm")), "install", "left-pad"]

    def test_arguments_are_not_parsed(self, spawned: list[ProcessProxySpec]) -> None:
        with pytest.raises(SystemExit):
            _socket("npx", "--help", "--yes", "cowsay", "--", "-x")
        assert spawned[0].forwarded_args == ("--help", "--yes", "cowsay", "--", "-x")
        assert spawned[0].executable_path == str(shadow_entry("npx"))


def test_child_exit_status_reaches_parent(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    script = tmp_path / "fake_npm_cli.py"
    script.write_text(
        "import sys\nsys.exit(0 if sys.argv[1:] == ['install', 'left-pad'] else 5)\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(npm, "shadow_entry", lambda tool: script)

    with pytest.raises(SystemExit) as exc_info:
        _socket("npm", "install", "left-pad")
    assert exc_info.value.code == 0

    with pytest.raises(SystemExit) as exc_info:
        _socket("npm", "run", "build")
    assert exc_info.value.code == 5


class TestRawNpx:
    def test_help_without_arguments(self, spawned: list[ProcessProxySpec], capsys: pytest.CaptureFixture[str]) -> None:
        assert _socket("raw-npx") == 0
        assert "$ socket raw-npx <npx command>" in capsys.readouterr().out
        assert spawned == []

    def test_runs_real_npx(self, spawned: list[ProcessProxySpec], monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str, Path | None]] = []

        def fake_require(name: str, *, exclude_dir: Path | None = None) -> Path:
            calls.append((name, exclude_dir))
            return Path("/usr/bin/npx")

        monkeypatch.setattr(raw_npx, "require_binary", fake_require)
        with pytest.raises(SystemExit):
            _socket("raw-npx", "cowsay", "hi")

        assert calls == [("npx", SHADOW_DIR)]
        assert spawned[0] == ProcessProxySpec(executable_path="/usr/bin/npx", forwarded_args=("cowsay", "hi"))
