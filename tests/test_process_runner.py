"""Tests for the OS process adapters (infra/process_runner.py).

Real short-lived children (``sys.executable -c ...``) are spawned; the
parent side is a recording fake so the test process survives.
"""

from __future__ import annotations

import asyncio
import os
import signal
import sys
import threading

import pytest
from conftest import FakeParent

from socket_cli.core.models import ProcessProxySpec
from socket_cli.infra.process_runner import run_wrapped_async, run_wrapped_sync

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")


def _python(code: str) -> ProcessProxySpec:
    return ProcessProxySpec(executable_path=sys.executable, forwarded_args=("-c", code))


class TestSync:
    @pytest.mark.parametrize("code", [0, 1, 2, 127])
    def test_exit_code_mirrored(self, code: int) -> None:
        parent = FakeParent()
        with pytest.raises(SystemExit) as exc_info:
            run_wrapped_sync(_python(f"import sys; sys.exit({code})"), parent=parent)
        assert parent.exits == [code]
        assert exc_info.value.code == code

    def test_arguments_forwarded_verbatim(self) -> None:
        parent = FakeParent()
        spec = ProcessProxySpec(
            executable_path=sys.executable,
            forwarded_args=(
                "-c",
                "import sys; sys.exit(0 if sys.argv[1:] == ['install', '--save', 'a b'] else 9)",
                "install",
                "--save",
                "a b",
            ),
        )
        with pytest.raises(SystemExit):
            run_wrapped_sync(spec, parent=parent)
        assert parent.exits == [0]

    @posix_only
    def test_child_signal_reraised(self) -> None:
        parent = FakeParent()
        with pytest.raises(SystemExit) as exc_info:
            run_wrapped_sync(
                _python("import os, signal; os.kill(os.getpid(), signal.SIGTERM)"),
                parent=parent,
            )
        assert parent.signals == [int(signal.SIGTERM)]
        assert exc_info.value.code == 1

    def test_spawn_failure_propagates(self, tmp_path) -> None:
        parent = FakeParent()
        missing = ProcessProxySpec(executable_path=str(tmp_path / "missing-binary"), forwarded_args=())
        with pytest.raises(OSError):
            run_wrapped_sync(missing, parent=parent)
        assert parent.exits == []
        assert parent.pending_exit_code == 1

    @posix_only
    def test_parent_signal_forwarded_to_child(self) -> None:
        parent = FakeParent()
        timer = threading.Timer(0.5, os.kill, args=(os.getpid(), signal.SIGTERM))
        timer.start()
        try:
            with pytest.raises(SystemExit):
                run_wrapped_sync(_python("import time; time.sleep(30)"), parent=parent)
        finally:
            timer.cancel()
        assert parent.signals == [int(signal.SIGTERM)]


class TestAsync:
    @pytest.mark.parametrize("code", [0, 2])
    def test_exit_code_mirrored(self, code: int) -> None:
        parent = FakeParent()
        with pytest.raises(SystemExit) as exc_info:
            asyncio.run(run_wrapped_async(_python(f"import sys; sys.exit({code})"), parent=parent))
        assert parent.exits == [code]
        assert exc_info.value.code == code

    @posix_only
    def test_child_signal_reraised(self) -> None:
        parent = FakeParent()
        with pytest.raises(SystemExit):
            asyncio.run(
                run_wrapped_async(
                    _python("import os, signal; os.kill(os.getpid(), signal.SIGINT)"),
                    parent=parent,
                )
            )
        assert parent.signals == [int(signal.SIGINT)]

    def test_spawn_failure_propagates(self, tmp_path) -> None:
        parent = FakeParent()
        missing = ProcessProxySpec(executable_path=str(tmp_path / "missing-binary"), forwarded_args=())
        with pytest.raises(OSError):
            asyncio.run(run_wrapped_async(missing, parent=parent))
        assert parent.exits == []
