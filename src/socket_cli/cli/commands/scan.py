"""``socket scan list|view|metadata|delete``: an organization's full scans."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.console import console, out
from socket_cli.cli.flags import OUTPUT_FLAGS, FlagSpec, ParsedCommand, merge_schemas, parse_flags
from socket_cli.cli.output import emit_json, emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Group, Leaf
from socket_cli.exceptions import InputError, NetworkError

LIST_FLAGS = merge_schemas(
    {
        "sort": FlagSpec("string", "created_at", "Sorting option (`name` or `created_at`) - default is `created_at`", short="s"),
        "direction": FlagSpec("string", "desc", "Direction option (`desc` or `asc`) - Default is `desc`", short="d"),
        "perPage": FlagSpec("number", 30, "Results per page - Default is 30", short="pp"),
        "page": FlagSpec("number", 1, "Page number - Default is 1", short="p"),
        "fromTime": FlagSpec("string", "", "From time - as a unix timestamp", short="f"),
        "untilTime": FlagSpec("string", "", "Until time - as a unix timestamp", short="u"),
    },
    OUTPUT_FLAGS,
)

VIEW_FLAGS = merge_schemas(
    {"file": FlagSpec("string", "", "Path to a local file where the scan should be saved", short="f")},
    OUTPUT_FLAGS,
)

LIST_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "ID"),
    ("report_url", "Scan URL"),
    ("branch", "Branch"),
    ("created_at", "Created at"),
)

MISSING_SCAN = "Please specify an organization slug and a scan ID."


def _day(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def scan_rows(data: Any) -> list[dict[str, Any]]:
    """Table rows of a full-scan list payload."""
    results = data.get("results", []) if isinstance(data, Mapping) else []
    return [
        {
            "id": item.get("id"),
            "report_url": item.get("html_report_url"),
            "branch": item.get("branch"),
            "created_at": _day(item.get("created_at")),
        }
        for item in results
        if isinstance(item, Mapping)
    ]


def parse_ndjson(text: str) -> list[Any]:
    """Decode newline-delimited JSON; blank lines are ignored."""
    try:
        return [json.loads(line) for line in text.splitlines() if line.strip()]
    except ValueError as exc:
        raise NetworkError("Socket API returned a scan that is not newline-delimited JSON") from exc


def _scan_target(parsed: ParsedCommand) -> tuple[str, str]:
    if len(parsed.positionals) < 2:
        raise InputError(MISSING_SCAN, parsed.help_text)
    return parsed.positionals[0], parsed.positionals[1]


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------

async def list_scans(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        LIST_FLAGS,
        argv,
        name=command_name(context, "list"),
        usage="<org slug>",
        examples=["FakeOrg"],
    )
    if not parsed.positionals:
        raise InputError("Please specify an organization slug.", parsed.help_text)
    org_slug = parsed.positionals[0]
    params = {
        "sort": parsed.flags["sort"],
        "direction": parsed.flags["direction"],
        "per_page": int(parsed.flags["perPage"]),
        "page": int(parsed.flags["page"]),
        "from": parsed.flags["fromTime"],
        "until": parsed.flags["untilTime"],
    }

    async with setup_sdk() as sdk:
        spinner = Spinner("Listing scans...").start()
        data = await fetch(sdk.get_org_full_scan_list(org_slug, params), spinner, "listing scans", "getOrgFullScanList")
    spinner.stop()

    emit_rows(
        f"Scans for {org_slug}",
        LIST_COLUMNS,
        scan_rows(data),
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


# ---------------------------------------------------------------------------
# view / metadata / delete
# ---------------------------------------------------------------------------

async def view(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        VIEW_FLAGS,
        argv,
        name=command_name(context, "view"),
        usage="<org slug> <scan ID>",
        examples=["FakeOrg 000aaaa1-0000-0a0a-00a0-00a0000000a0 --file=scan.jsonl"],
    )
    org_slug, scan_id = _scan_target(parsed)

    async with setup_sdk() as sdk:
        spinner = Spinner("Fetching scan...").start()
        text = await fetch(sdk.get_org_full_scan(org_slug, scan_id), spinner, "fetching scan", "getOrgFullScan")
    spinner.stop()

    text = text or ""
    if parsed.flags["file"]:
        target = Path(parsed.flags["file"])
        target.write_text(text, encoding="utf-8")
        console.print(f"Scan {scan_id} saved to {target}")
    elif parsed.flags["json"]:
        emit_json(parse_ndjson(text))
    else:
        out.write(text)
    return None


async def metadata(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        OUTPUT_FLAGS,
        argv,
        name=command_name(context, "metadata"),
        usage="<org slug> <scan ID>",
        examples=["FakeOrg 000aaaa1-0000-0a0a-00a0-00a0000000a0"],
    )
    org_slug, scan_id = _scan_target(parsed)

    async with setup_sdk() as sdk:
        spinner = Spinner("Getting scan metadata...").start()
        data = await fetch(
            sdk.get_org_full_scan_metadata(org_slug, scan_id),
            spinner,
            "getting scan metadata",
            "getOrgFullScanMetadata",
        )
    spinner.stop()

    fields = sorted(data.items()) if isinstance(data, Mapping) else []
    emit_rows(
        f"Scan {scan_id} metadata",
        (("field", "Field"), ("value", "Value")),
        [{"field": key, "value": value} for key, value in fields],
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


async def delete(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        {},
        argv,
        name=command_name(context, "delete"),
        usage="<org slug> <scan ID>",
        examples=["FakeOrg 000aaaa1-0000-0a0a-00a0-00a0000000a0"],
    )
    org_slug, scan_id = _scan_target(parsed)

    async with setup_sdk() as sdk:
        spinner = Spinner("Deleting scan...").start()
        await fetch(sdk.delete_org_full_scan(org_slug, scan_id), spinner, "deleting scan", "deleteOrgFullScan")
    spinner.succeed("Scan deleted successfully")
    return None


command = Group.of(
    ("list", Leaf("List the full scans of an organization", list_scans)),
    ("view", Leaf("Print or save the full scan data", view)),
    ("metadata", Leaf("Get a full scan's metadata", metadata)),
    ("delete", Leaf("Delete a full scan", delete)),
    description="Full scan related commands",
)
