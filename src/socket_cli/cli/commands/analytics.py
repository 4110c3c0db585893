"""``socket analytics``: organization or repository alert analytics.

Usage: ``socket analytics org <time>`` or
``socket analytics repo <repository> <time>``, with *time* one of 7, 30
or 60 days.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.flags import OUTPUT_FLAGS, parse_flags
from socket_cli.cli.output import emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.exceptions import InputError

DESCRIPTION = "Look up analytics data"

SCOPES: tuple[str, ...] = ("org", "repo")
TIME_FILTERS: tuple[str, ...] = ("7", "30", "60")

COUNTERS: tuple[str, ...] = (
    "total_critical_alerts",
    "total_high_alerts",
    "total_critical_added",
    "total_high_added",
    "total_critical_prevented",
    "total_high_prevented",
    "total_medium_prevented",
    "total_low_prevented",
)

_COUNTER_TITLES: tuple[tuple[str, str], ...] = (
    ("total_critical_alerts", "Critical alerts"),
    ("total_high_alerts", "High alerts"),
    ("total_critical_added", "Critical added"),
    ("total_high_added", "High added"),
    ("total_critical_prevented", "Critical prevented"),
    ("total_high_prevented", "High prevented"),
    ("total_medium_prevented", "Medium prevented"),
    ("total_low_prevented", "Low prevented"),
)

ORG_COLUMNS = (("created_at", "Date"), ("repository_name", "Repository"), *_COUNTER_TITLES)
REPO_COLUMNS = (("created_at", "Date"), *_COUNTER_TITLES)


@dataclass(frozen=True, slots=True)
class AnalyticsRequest:
    """A validated analytics query; ``repo`` is set only for the repo scope."""

    scope: str
    time: str
    repo: str | None = None


def parse_request(positionals: Sequence[str], help_text: str = "") -> AnalyticsRequest:
    """Validate ``<scope> [repo] <time>``.

    Raises
    ------
    InputError
        On a missing or unknown scope, a missing repository, or a time
        filter other than 7, 30 or 60.
    """
    if not positionals:
        raise InputError("Please provide a scope to get analytics data", help_text)
    scope = positionals[0]
    if scope not in SCOPES:
        raise InputError("The scope must either be 'org' or 'repo'", help_text)

    repo: str | None = None
    if scope == "repo":
        if len(positionals) < 2:
            raise InputError("Please provide a repository name to get analytics data", help_text)
        repo = positionals[1]
        time = positionals[2] if len(positionals) > 2 else ""
    else:
        time = positionals[1] if len(positionals) > 1 else ""

    if not time:
        raise InputError("Please provide a time to get analytics data", help_text)
    if time not in TIME_FILTERS:
        raise InputError("The time filter must either be 7, 30 or 60", help_text)
    return AnalyticsRequest(scope=scope, time=time, repo=repo)


def _day(value: Any) -> str:
    return str(value or "")[:10]


def summarize_by_day(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Merge records of the same calendar day, summing the alert counters.

    The first record of a day supplies the non-counter fields.
    """
    days: dict[str, dict[str, Any]] = {}
    for record in records:
        day = _day(record.get("created_at"))
        merged = days.get(day)
        if merged is None:
            days[day] = {**record, "created_at": day}
            continue
        for counter in COUNTERS:
            merged[counter] = (merged.get(counter) or 0) + (record.get(counter) or 0)
    return list(days.values())


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        OUTPUT_FLAGS,
        argv,
        name=command_name(context, "analytics"),
        usage="<scope> [repository] <time>",
        examples=["org 7", "repo my-repo 30"],
    )
    request = parse_request(parsed.positionals, parsed.help_text)

    async with setup_sdk() as sdk:
        spinner = Spinner("Fetching analytics data").start()
        if request.repo is None:
            data = await fetch(
                sdk.get_org_analytics(request.time),
                spinner,
                "fetching analytics data",
                "getOrgAnalytics",
            )
        else:
            data = await fetch(
                sdk.get_repo_analytics(request.repo, request.time),
                spinner,
                "fetching analytics data",
                "getRepoAnalytics",
            )
    spinner.stop()

    records = [item for item in (data or []) if isinstance(item, Mapping)]
    if request.scope == "org":
        title = f"Analytics data for the organization over the last {request.time} days"
        rows, columns = summarize_by_day(records), ORG_COLUMNS
    else:
        title = f"Analytics data for {request.repo} over the last {request.time} days"
        rows = [{**record, "created_at": _day(record.get("created_at"))} for record in records]
        columns = REPO_COLUMNS

    emit_rows(
        title,
        columns,
        rows,
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


command = Leaf(description=DESCRIPTION, run=run)
