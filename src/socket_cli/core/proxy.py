"""Process-proxy state machine.

Mirrors the way a wrapped package-manager child ended onto the parent
process:

* child exited with status ``N``  → parent exits with ``N``;
* child killed by signal ``S``    → parent re-raises ``S`` on itself.

The rule is expressed as a tiny finite state machine so it can be
exercised with a fake :class:`~socket_cli.core.protocols.ParentProcess`
and no real OS processes.  The OS adapters that spawn children and feed
events into it live in :mod:`socket_cli.infra.process_runner`.

States
------
``SPAWNING`` → ``RUNNING`` → (``EXITED`` | ``SIGNALED``)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from socket_cli.core.models import ChildTermination
from socket_cli.core.protocols import ParentProcess

logger = logging.getLogger(__name__)

PENDING_FAILURE_EXIT_CODE: int = 1
"""Exit status assumed until the child reports how it ended."""


class ProxyState(enum.Enum):
    SPAWNING = "spawning"
    RUNNING = "running"
    EXITED = "exited"
    SIGNALED = "signaled"


# ---------------------------------------------------------------------------
# Termination actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExitWith:
    """Terminate the parent with a numeric status."""

    code: int


@dataclass(frozen=True, slots=True)
class RaiseSignal:
    """Terminate the parent by re-raising the child's signal."""

    signal_number: int


TerminationAction = Union[ExitWith, RaiseSignal]


def termination_action(termination: ChildTermination) -> TerminationAction:
    """Map how the child ended to what the parent must do.

    A signal always wins over a status: the parent must not translate a
    signal into an exit code.
    """
    if termination.signal_number is not None:
        return RaiseSignal(termination.signal_number)
    if termination.exit_code is not None:
        return ExitWith(termination.exit_code)
    return ExitWith(PENDING_FAILURE_EXIT_CODE)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class ProcessProxy:
    """Drive one wrapped child from spawn to parent termination.

    Parameters
    ----------
    parent:
        The process whose fate mirrors the child's.
    """

    def __init__(self, parent: ParentProcess) -> None:
        self._parent = parent
        self._state = ProxyState.SPAWNING
        self._action: TerminationAction | None = None
        # Until the child reports, the parent is assumed to have failed.
        self._parent.pending_exit_code = PENDING_FAILURE_EXIT_CODE

    @property
    def state(self) -> ProxyState:
        return self._state

    @property
    def action(self) -> TerminationAction | None:
        return self._action

    def spawned(self) -> None:
        """Record that the child process is running."""
        if self._state is not ProxyState.SPAWNING:
            raise RuntimeError(f"cannot mark spawned from state {self._state.value}")
        self._state = ProxyState.RUNNING

    def child_terminated(self, termination: ChildTermination) -> TerminationAction:
        """Consume the child's termination event and end the parent."""
        if self._state is not ProxyState.RUNNING:
            raise RuntimeError(f"child terminated in unexpected state {self._state.value}")

        action = termination_action(termination)
        self._action = action
        if isinstance(action, RaiseSignal):
            self._state = ProxyState.SIGNALED
            logger.debug("wrapped child killed by signal %d", action.signal_number)
            self._parent.raise_signal(action.signal_number)
            # Reached only when the signal's default disposition does not
            # terminate (or a fake parent is used).
            self._parent.exit(self._parent.pending_exit_code)
        else:
            self._state = ProxyState.EXITED
            logger.debug("wrapped child exited with status %d", action.code)
            self._parent.pending_exit_code = action.code
            self._parent.exit(action.code)
        return action
