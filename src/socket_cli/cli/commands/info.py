"""``socket info <name[@version]>``: issue and score report for one npm package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from socket_cli.cli import exit_codes
from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.console import escape_markup, out
from socket_cli.cli.flags import OUTPUT_FLAGS, VALIDATION_FLAGS, merge_schemas, parse_flags
from socket_cli.cli.output import emit_json
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.issue_rules import format_severity_count, serious_issue_types, severity_count
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.exceptions import InputError

DESCRIPTION = "Look up info regarding a package"

FLAGS = merge_schemas(OUTPUT_FLAGS, VALIDATION_FLAGS)

SCORE_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("supplyChainRisk", "Supply Chain Risk"),
    ("maintenance", "Maintenance"),
    ("quality", "Quality"),
    ("vulnerability", "Vulnerabilities"),
    ("license", "License"),
)


def split_package(raw: str) -> tuple[str, str]:
    """``name@1.0.0`` -> ``("name", "1.0.0")``; no version means ``latest``."""
    separator = raw.rfind("@")
    if separator < 1:
        return raw, "latest"
    return raw[:separator], raw[separator + 1:] or "latest"


def report_card(score: Any) -> list[tuple[str, int]]:
    """Scores as whole percentages; categories missing from *score* are skipped."""
    rows = []
    for key, title in SCORE_CATEGORIES:
        entry = score.get(key) if isinstance(score, Mapping) else None
        value = entry.get("score") if isinstance(entry, Mapping) else None
        if isinstance(value, (int, float)):
            rows.append((title, int(value * 100)))
    return rows


def _score_style(value: int) -> str:
    if value > 80:
        return "green"
    if value > 60:
        return "yellow"
    return "red"


def _issues(data: Any) -> list[Mapping[str, Any]]:
    if isinstance(data, Mapping):
        data = data.get("issues", [])
    return [issue for issue in (data or []) if isinstance(issue, Mapping)]


def _link(label: str, url: str, markdown: bool) -> str:
    if markdown:
        return f"[{label}]({url})"
    return f"[link={url}]{escape_markup(label)}[/link] ({url})"


def _write(line: str, markdown: bool) -> None:
    if markdown:
        out.write(line)
    else:
        out.print(line)


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    name = command_name(context, "info")
    parsed = parse_flags(
        FLAGS,
        argv,
        name=name,
        usage="<name>",
        examples=["webtorrent", "webtorrent@1.9.1"],
    )
    if len(parsed.positionals) > 1:
        raise InputError("Only one package lookup supported at once", parsed.help_text)
    if not parsed.positionals:
        out.write(parsed.help_text)
        return None

    package, version = split_package(parsed.positionals[0])
    markdown = parsed.flags["markdown"]

    if version == "latest":
        text = f"Looking up data for the latest version of {package}"
    else:
        text = f"Looking up data for version {version} of {package}"
    async with setup_sdk() as sdk:
        spinner = Spinner(text).start()
        data = await fetch(
            sdk.get_issues_by_npm_package(package, version),
            spinner,
            "looking up package",
            "getIssuesByNPMPackage",
        )
        score = await fetch(
            sdk.get_score_by_npm_package(package, version),
            spinner,
            "looking up package score",
            "getScoreByNPMPackage",
        )

    issues = _issues(data)
    counts = severity_count(issues, None if parsed.flags["all"] else "high")
    has_issues = any(counts.values())

    spinner.stop()
    if parsed.flags["json"]:
        emit_json(data)
    else:
        _write("Package report card:", markdown)
        for title, value in report_card(score):
            if markdown:
                out.write(f"- {title}: {value}")
            else:
                out.print(f"- {title}: [{_score_style(value)}]{value}[/]")

        if has_issues:
            summary = f"Package has these issues: {format_severity_count(counts)}"
            if parsed.flags["strict"]:
                spinner.fail(summary)
            else:
                spinner.succeed(summary)
            for issue_type, (label, count) in serious_issue_types(issues).items():
                link = _link(label, f"https://socket.dev/npm/issue/{issue_type}", markdown)
                _write(f"- {link}" + (f": {count}" if count > 1 else ""), markdown)
        else:
            spinner.succeed("Package has no issues")

        url = f"https://socket.dev/npm/package/{package}/overview/{version}"
        label = package if version == "latest" else f"{package} v{version}"
        _write(f"Detailed info on socket.dev: {_link(label, url, markdown)}", markdown)
        if not markdown:
            out.print(f"[dim]Or rerun [italic]{escape_markup(name)}[/italic] using the [italic]--json[/italic] flag to get full JSON output[/dim]")

    if parsed.flags["strict"] and has_issues:
        return exit_codes.GENERAL_ERROR
    return None


command = Leaf(description=DESCRIPTION, run=run)
