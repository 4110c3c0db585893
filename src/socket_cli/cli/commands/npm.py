"""``socket npm`` / ``socket npx`` / ``socket pnpm``: proxy to the shadow entry points.

The arguments are handed over verbatim; the shadow entry point decides
what they mean.  The parent process ends exactly like the child.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from socket_cli.core.models import ProcessProxySpec
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.infra import process_runner
from socket_cli.shadow import shadow_entry

WRAPPED_TOOLS: dict[str, str] = {
    "npm": "npm wrapper functionality",
    "npx": "npx wrapper functionality",
    "pnpm": "pnpm wrapper functionality",
}


def proxy_spec(tool: str, argv: Sequence[str]) -> ProcessProxySpec:
    return ProcessProxySpec(
        executable_path=str(shadow_entry(tool)),
        forwarded_args=tuple(argv),
        stdio_mode="inherit",
        interpreter=sys.executable,
    )


def wrapped_tool(tool: str) -> Leaf:
    """Build the leaf that proxies ``socket <tool> ...``."""

    async def run(argv: Sequence[str], context: CommandContext) -> None:
        await process_runner.run_wrapped_async(proxy_spec(tool, argv))

    return Leaf(description=WRAPPED_TOOLS[tool], run=run)
