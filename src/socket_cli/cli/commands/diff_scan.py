"""``socket diff-scan get``: compare two full scans of an organization."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.console import console
from socket_cli.cli.flags import OUTPUT_FLAGS, FlagSpec, merge_schemas, parse_flags
from socket_cli.cli.output import emit_json, emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Group, Leaf
from socket_cli.exceptions import InputError

FLAGS = merge_schemas(
    {
        "before": FlagSpec("string", "", "The full scan ID of the base scan", short="b"),
        "after": FlagSpec("string", "", "The full scan ID of the head scan", short="a"),
        "file": FlagSpec("string", "", "Path to a local file where the output should be saved", short="f"),
    },
    OUTPUT_FLAGS,
)

ARTIFACT_GROUPS: tuple[str, ...] = ("added", "removed", "replaced", "updated", "unchanged")


def artifact_counts(data: Any) -> list[dict[str, Any]]:
    """Count artifacts per change kind in a diff-scan payload."""
    report = data.get("diff_report", data) if isinstance(data, Mapping) else {}
    artifacts = report.get("artifacts", {}) if isinstance(report, Mapping) else {}
    rows = []
    for group in ARTIFACT_GROUPS:
        entries = artifacts.get(group) if isinstance(artifacts, Mapping) else None
        if isinstance(entries, list):
            rows.append({"change": group, "count": len(entries)})
    return rows


def write_result(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, default=str) + "\n", encoding="utf-8")


async def get(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        FLAGS,
        argv,
        name=command_name(context, "get"),
        usage="<org slug> --before=<scan ID> --after=<scan ID>",
        examples=["FakeOrg --before=aaa0aa0a-aaaa-0000-0a0a-0000000a00a0 --after=aaa1aa1a-aaaa-1111-1a1a-1111111a11a1"],
    )
    before, after = parsed.flags["before"], parsed.flags["after"]
    if not before or not after:
        raise InputError(
            "Please specify a before and after full scan ID. To get full scans IDs, "
            'you can run the command "socket scan list <your org slug>".',
            parsed.help_text,
        )
    if not parsed.positionals:
        raise InputError("Please provide an organization slug.", parsed.help_text)
    org_slug = parsed.positionals[0]

    async with setup_sdk() as sdk:
        spinner = Spinner("Getting diff scan...").start()
        data = await fetch(
            sdk.get_org_diff_scan(org_slug, before=before, after=after),
            spinner,
            "getting diff scan",
            "getOrgDiffScan",
        )
    spinner.stop()

    if parsed.flags["file"]:
        target = Path(parsed.flags["file"])
        write_result(target, data)
        console.print(f"Diff scan result saved to {target}")
        return None
    if parsed.flags["json"]:
        emit_json(data)
        return None
    emit_rows(
        f"Diff scan result for {org_slug}",
        (("change", "Change"), ("count", "Artifacts")),
        artifact_counts(data),
        as_markdown=parsed.flags["markdown"],
    )
    return None


command = Group.of(
    ("get", Leaf("Get a diff scan for an organization", get)),
    description="Diff scans related commands",
)
