"""``socket organizations``: list the organizations the API key can access."""

from __future__ import annotations

from collections.abc import Sequence

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.commands.login import organizations_from_payload
from socket_cli.cli.flags import OUTPUT_FLAGS, parse_flags
from socket_cli.cli.output import emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Leaf

DESCRIPTION = "List organizations associated with the API key used"

COLUMNS: tuple[tuple[str, str], ...] = (("name", "Name"), ("id", "ID"), ("plan", "Plan"))


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(OUTPUT_FLAGS, argv, name=command_name(context, "organizations"))

    async with setup_sdk() as sdk:
        spinner = Spinner("Fetching organizations...").start()
        payload = await fetch(
            sdk.get_organizations(),
            spinner,
            "looking up organizations",
            "getOrganizations",
        )
    spinner.stop()

    rows = [
        {"name": org.name, "id": org.id, "plan": org.plan}
        for org in organizations_from_payload(payload)
    ]
    emit_rows(
        "Organizations associated with your API key",
        COLUMNS,
        rows,
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
    )
    return None


command = Leaf(description=DESCRIPTION, run=run)
