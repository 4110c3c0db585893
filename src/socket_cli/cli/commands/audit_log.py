"""``socket audit-log``: page through an organization's audit log."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.flags import OUTPUT_FLAGS, FlagSpec, ParsedCommand, merge_schemas, parse_flags
from socket_cli.cli.output import emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.models import AuditLogQuery
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.exceptions import InputError

DESCRIPTION = "Look up the audit log for an organization"

FLAGS = merge_schemas(
    {
        "type": FlagSpec("string", "", "Type of log event", short="t"),
        "perPage": FlagSpec("number", 30, "Results per page - default is 30", short="pp"),
        "page": FlagSpec("number", 1, "Page number - default is 1", short="p"),
    },
    OUTPUT_FLAGS,
)

COLUMNS: tuple[tuple[str, str], ...] = (
    ("created_at", "Date"),
    ("user_email", "User"),
    ("type", "Type"),
    ("ip_address", "IP address"),
    ("user_agent", "User agent"),
)


def build_query(parsed: ParsedCommand) -> AuditLogQuery:
    """Turn parsed flags into the request; the slug is the first positional.

    Raises
    ------
    InputError
        When no organization slug was given.
    """
    if not parsed.positionals:
        raise InputError("Please provide an organization slug.", parsed.help_text)
    return AuditLogQuery(
        org_slug=parsed.positionals[0],
        type=parsed.flags["type"],
        page=int(parsed.flags["page"]),
        per_page=int(parsed.flags["perPage"]),
    )


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        FLAGS,
        argv,
        name=command_name(context, "audit-log"),
        usage="<org slug>",
        examples=["FakeOrg"],
    )
    query = build_query(parsed)

    async with setup_sdk() as sdk:
        spinner = Spinner(f"Looking up audit log for {query.org_slug}").start()
        data = await fetch(
            sdk.get_audit_log_events(query),
            spinner,
            f"looking up audit log for {query.org_slug}",
            "getAuditLogEvents",
        )
    spinner.stop()

    results = data.get("results", []) if isinstance(data, Mapping) else []
    rows = [event for event in results if isinstance(event, Mapping)]
    title = f"Audit log for: {query.org_slug}"
    if query.type:
        title += f" with type: {query.to_params()['type']}"
    emit_rows(
        title,
        COLUMNS,
        rows,
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


command = Leaf(description=DESCRIPTION, run=run)
