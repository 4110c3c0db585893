"""Infrastructure: spawn wrapped package-manager processes.

This module is the only place that creates child processes for the
``npm`` / ``npx`` / ``pnpm`` proxies.  It feeds child lifecycle events
into :class:`~socket_cli.core.proxy.ProcessProxy`, which decides how the
parent ends.

Rules
-----
* Stdio is always inherited — no pipes, no capture.
* Arguments are forwarded verbatim, never parsed.
* Spawn failures (``OSError``) propagate to the caller unchanged.
* Termination signals received while a child runs are forwarded to it.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import subprocess
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

from socket_cli.core.models import ChildTermination, ProcessProxySpec
from socket_cli.core.protocols import ChildHandle, ParentProcess
from socket_cli.core.proxy import ProcessProxy

logger = logging.getLogger(__name__)

FORWARDED_SIGNALS: tuple[int, ...] = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGTERM", "SIGHUP")
    if hasattr(signal, name)
)
"""Signals relayed to the active child instead of ending the parent."""


# ---------------------------------------------------------------------------
# Parent process adapter
# ---------------------------------------------------------------------------

class OsParentProcess:
    """:class:`ParentProcess` backed by the real interpreter process."""

    def __init__(self) -> None:
        self.pending_exit_code: int = 0

    def exit(self, code: int) -> NoReturn:
        sys.stdout.flush()
        sys.stderr.flush()
        raise SystemExit(code)

    def raise_signal(self, signal_number: int) -> None:
        sys.stdout.flush()
        sys.stderr.flush()
        # Python installs its own SIGINT handler; restore the default
        # disposition so the signal actually terminates us.
        try:
            signal.signal(signal_number, signal.SIG_DFL)
        except (OSError, ValueError):
            logger.debug("cannot reset disposition of signal %d", signal_number)
        signal.raise_signal(signal_number)


# ---------------------------------------------------------------------------
# Signal forwarding
# ---------------------------------------------------------------------------

@contextmanager
def forward_signals(child: ChildHandle) -> Iterator[None]:
    """Relay :data:`FORWARDED_SIGNALS` to *child* for the duration of the block.

    Outside the main thread handlers cannot be installed; the block then
    runs with the existing dispositions.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _relay(signum: int, _frame: Any) -> None:
        logger.debug("forwarding signal %d to child %d", signum, child.pid)
        try:
            child.send_signal(signum)
        except ProcessLookupError:
            pass

    previous: dict[int, Any] = {}
    for signum in FORWARDED_SIGNALS:
        try:
            previous[signum] = signal.signal(signum, _relay)
        except (OSError, ValueError):
            continue
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------

def run_wrapped_sync(
    spec: ProcessProxySpec,
    *,
    parent: ParentProcess | None = None,
    env: dict[str, str] | None = None,
) -> NoReturn:
    """Run *spec* to completion, blocking, then end the parent like the child.

    Raises
    ------
    OSError
        When the executable cannot be spawned.
    """
    parent = parent if parent is not None else OsParentProcess()
    proxy = ProcessProxy(parent)
    argv = spec.command_line()
    logger.debug("spawning (sync): %s", argv)

    child = subprocess.Popen(argv, env=env)
    proxy.spawned()
    with forward_signals(child):
        returncode = child.wait()
    proxy.child_terminated(ChildTermination.from_returncode(returncode))
    # Only reachable with a fake parent whose exit() returns.
    raise SystemExit(parent.pending_exit_code)


async def run_wrapped_async(
    spec: ProcessProxySpec,
    *,
    parent: ParentProcess | None = None,
    env: dict[str, str] | None = None,
) -> NoReturn:
    """Asynchronous counterpart of :func:`run_wrapped_sync`.

    Awaits the child's exit on the running event loop; the same
    signal/exit-code forwarding rule applies.
    """
    parent = parent if parent is not None else OsParentProcess()
    proxy = ProcessProxy(parent)
    argv = spec.command_line()
    logger.debug("spawning (async): %s", argv)

    child = await asyncio.create_subprocess_exec(*argv, env=env)
    proxy.spawned()
    with forward_signals(child):
        returncode = await child.wait()
    proxy.child_terminated(ChildTermination.from_returncode(returncode))
    raise SystemExit(parent.pending_exit_code)

