"""``socket logout``: forget the stored API key and enforced organizations."""

from __future__ import annotations

from collections.abc import Sequence

from socket_cli.cli.commands.common import command_name
from socket_cli.cli.console import out
from socket_cli.cli.flags import parse_flags
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import default_settings_store
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.infra.settings_store import API_KEY, ENFORCED_ORG

DESCRIPTION = "Socket API logout"


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        {},
        argv,
        name=command_name(context, "logout"),
        description="Logs out of the Socket API and clears all Socket credentials from disk",
        examples=[""],
    )
    if parsed.positionals:
        out.write(parsed.help_text)

    settings = default_settings_store()
    settings.set(API_KEY, None)
    settings.set(ENFORCED_ORG, None)
    Spinner().succeed("Successfully logged out")
    return None


command = Leaf(description=DESCRIPTION, run=run)
