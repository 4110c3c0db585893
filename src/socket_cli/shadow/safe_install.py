"""Check requested packages for blocking issues before the real tool runs.

Flow of one shadow invocation
-----------------------------
1. Locate the real ``npm``/``npx``/``pnpm`` on PATH (exit 127 if absent).
2. Collect the registry packages named on the command line.
3. Look up every package's issues concurrently, bounded by a semaphore.
4. Report packages carrying blocking issue types; ask to accept the
   risks when interactive, abort with exit 1 otherwise.
5. Run the real tool through the synchronous process proxy.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, NoReturn

from socket_cli.cli import exit_codes, prompts
from socket_cli.cli.console import console
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import resolve_api_key
from socket_cli.config import debug_enabled, load_config
from socket_cli.core.api_call import handle_api_call
from socket_cli.core.issue_rules import (
    DEFAULT_BLOCKING_ISSUES,
    blocking_issue_types,
    effective_blocking_issues,
    requested_packages,
)
from socket_cli.core.models import ApiSuccess, PackageIssueReport, ProcessProxySpec
from socket_cli.core.protocols import ProgressIndicator
from socket_cli.exceptions import AuthError, SocketCliError
from socket_cli.infra import process_runner
from socket_cli.infra.binary_locator import BINARY_NOT_FOUND_EXIT_CODE, BinaryNotFoundError, require_binary
from socket_cli.infra.npm_registry import NpmRegistry
from socket_cli.infra.sdk import SocketSdk
from socket_cli.infra.socket_yml import discover_issue_rules
from socket_cli.logging import configure_logging
from socket_cli.shadow import SHADOW_DIR

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4
"""Maximum number of package lookups in flight at once."""


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def _issues_from_payload(data: Any) -> list[Mapping[str, Any]]:
    if isinstance(data, Mapping):
        data = data.get("issues", [])
    return [issue for issue in (data or []) if isinstance(issue, Mapping)]


async def lookup_package(
    name: str,
    requested: str,
    *,
    sdk: SocketSdk,
    registry: NpmRegistry,
    blocking: frozenset[str] = DEFAULT_BLOCKING_ISSUES,
) -> PackageIssueReport:
    """Resolve *requested* to a version and fetch that version's issues.

    Failures become a report with ``error`` set; nothing is raised for
    a single package.
    """
    version = await registry.resolve_version(name, requested)
    if version is None:
        return PackageIssueReport(name, requested, error="unable to resolve an exact version")

    outcome = await handle_api_call(
        sdk.get_issues_by_npm_package(name, version),
        None,
        f"looking up {name}@{version}",
        operation_name="getIssuesByNPMPackage",
    )
    if not isinstance(outcome, ApiSuccess):
        return PackageIssueReport(name, version, error=outcome.message or outcome.kind)
    issues = _issues_from_payload(outcome.data)
    return PackageIssueReport(name, version, blocking_issues=blocking_issue_types(issues, blocking))


async def lookup_packages(
    packages: Sequence[tuple[str, str]],
    *,
    sdk: SocketSdk,
    registry: NpmRegistry,
    blocking: frozenset[str] = DEFAULT_BLOCKING_ISSUES,
    progress: ProgressIndicator | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[PackageIssueReport]:
    """Look up *packages* concurrently; reports come back in input order."""
    semaphore = asyncio.Semaphore(max(1, concurrency))
    remaining = len(packages)

    async def lookup(name: str, requested: str) -> PackageIssueReport:
        nonlocal remaining
        async with semaphore:
            report = await lookup_package(name, requested, sdk=sdk, registry=registry, blocking=blocking)
        remaining -= 1
        if progress is not None:
            progress.text = f"Looking up data for {remaining} packages"
        return report

    return list(await asyncio.gather(*(lookup(name, version) for name, version in packages)))


# ---------------------------------------------------------------------------
# Decision
# ---------------------------------------------------------------------------

def print_report(reports: Sequence[PackageIssueReport]) -> None:
    for report in reports:
        if report.error:
            console.print(f"[yellow]⚠[/yellow] Unable to check {report.spec}: {report.error}")
        elif report.risky:
            console.print(
                f"[red]✖[/red] {report.spec} has blocking issues: {', '.join(report.blocking_issues)}",
            )


async def guard_install(
    tool: str,
    argv: Sequence[str],
    *,
    start: Path | None = None,
    interactive: bool | None = None,
) -> bool:
    """Return whether the real tool may run with *argv*."""
    packages = requested_packages(tool, argv)
    if not packages:
        return True

    config = load_config()
    try:
        api_key = resolve_api_key(config=config, interactive=False)
    except AuthError:
        console.print(
            "[yellow]⚠[/yellow] No Socket API key configured; skipping package checks. "
            "Run `socket login` to enable them.",
        )
        return True

    blocking = effective_blocking_issues(discover_issue_rules(start))
    spinner = Spinner(f"Looking up data for {len(packages)} packages").start()
    async with SocketSdk(
        api_key,
        base_url=config.api_base_url,
        timeout_seconds=config.timeout_seconds,
    ) as sdk, NpmRegistry() as registry:
        reports = await lookup_packages(
            packages,
            sdk=sdk,
            registry=registry,
            blocking=blocking,
            progress=spinner,
        )
    spinner.stop()

    print_report(reports)
    if not any(report.risky for report in reports):
        return True

    if interactive is None:
        interactive = prompts.is_interactive()
    if not interactive:
        console.print("[red]Exiting due to risks.[/red]")
        return False
    return prompts.confirm("Accept risks of installing these packages?", default=False)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def shadow_main(tool: str, argv: Sequence[str]) -> NoReturn:
    """Run the shadow flow for *tool*; always ends the process."""
    from socket_cli.cli.app import report_error

    configure_logging(logging.DEBUG if debug_enabled() else logging.WARNING)
    try:
        real = require_binary(tool, exclude_dir=SHADOW_DIR)
    except BinaryNotFoundError as exc:
        report_error(exc)
        sys.exit(BINARY_NOT_FOUND_EXIT_CODE)

    try:
        proceed = asyncio.run(guard_install(tool, argv))
    except SocketCliError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    if not proceed:
        sys.exit(exit_codes.GENERAL_ERROR)

    logger.debug("running real %s at %s", tool, real)
    process_runner.run_wrapped_sync(ProcessProxySpec(executable_path=str(real), forwarded_args=tuple(argv)))
