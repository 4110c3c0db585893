"""``socket raw-npx``: run the real ``npx`` without the Socket wrapper."""

from __future__ import annotations

from collections.abc import Sequence

from socket_cli.cli.commands.common import command_name
from socket_cli.cli.console import out
from socket_cli.cli.flags import build_help
from socket_cli.core.models import ProcessProxySpec
from socket_cli.core.registry import HELP_FLAGS, CommandContext, Leaf
from socket_cli.infra import process_runner
from socket_cli.infra.binary_locator import require_binary
from socket_cli.shadow import SHADOW_DIR

DESCRIPTION = "Temporarily disable the Socket npm/npx wrapper"


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    name = command_name(context, "raw-npx")
    if not argv or argv[0] in HELP_FLAGS:
        out.write(build_help(name, {}, usage="<npx command>", examples=["install"]))
        return None

    npx = require_binary("npx", exclude_dir=SHADOW_DIR)
    spec = ProcessProxySpec(executable_path=str(npx), forwarded_args=tuple(argv))
    await process_runner.run_wrapped_async(spec)
    return None


command = Leaf(description=DESCRIPTION, run=run)
