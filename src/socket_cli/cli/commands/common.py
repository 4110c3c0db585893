"""Helpers shared by the data-fetching subcommands."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

from socket_cli.core.api_call import handle_api_call, unwrap_outcome
from socket_cli.core.models import SdkResult
from socket_cli.core.protocols import ProgressIndicator
from socket_cli.core.registry import CommandContext


def command_name(context: CommandContext, name: str) -> str:
    """Full command path used in usage text, e.g. ``socket audit-log``."""
    return f"{context.parent_name} {name}"


async def fetch(
    operation: Awaitable[SdkResult],
    progress: ProgressIndicator | None,
    description: str,
    operation_name: str,
) -> Any:
    """Run one API call and return its payload.

    Raises the typed error matching the classified outcome; on any error
    *progress* has already been stopped.
    """
    outcome = await handle_api_call(
        operation,
        progress,
        description,
        operation_name=operation_name,
    )
    return unwrap_outcome(outcome)
