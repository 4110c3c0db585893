"""``socket doctor`` — environment diagnostics command.

Collects what socket-cli needs at runtime (Python, the real package
managers on PATH, a configured API key) and renders a Rich summary
table on stderr.
"""

from __future__ import annotations

import platform
import sys
from collections.abc import Sequence

from socket_cli.cli import exit_codes
from socket_cli.cli.commands.common import command_name
from socket_cli.cli.console import console
from socket_cli.cli.flags import parse_flags
from socket_cli.cli.sdk_setup import default_settings_store
from socket_cli.config import load_config
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.infra.binary_locator import detect_binary
from socket_cli.infra.settings_store import API_KEY
from socket_cli.shadow import SHADOW_DIR
from socket_cli.version import __version__

DESCRIPTION = "Check the local environment for socket-cli requirements"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"


def _binary_check(name: str, *, required: bool) -> Check:
    status = detect_binary(name, exclude_dir=SHADOW_DIR)
    if status.found:
        return name, str(status.path), "[green]OK[/green]"
    return name, "not found", "[red]FAIL[/red]" if required else "[yellow]WARN[/yellow]"


def _api_key_check() -> Check:
    config = load_config()
    if config.api_key:
        return "API key", "from environment", "[green]OK[/green]"
    if default_settings_store(config).get(API_KEY):
        return "API key", "from settings", "[green]OK[/green]"
    return "API key", "not configured (run `socket login`)", "[yellow]WARN[/yellow]"


def _os_check() -> Check:
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    return "OS", f"{system_display} {platform.release()} ({platform.machine()})", "[green]OK[/green]"


def collect_checks() -> list[Check]:
    return [
        ("socket-cli", __version__, "[green]OK[/green]"),
        _python_version_check(),
        _binary_check("npm", required=True),
        _binary_check("npx", required=True),
        _binary_check("pnpm", required=False),
        _api_key_check(),
        _os_check(),
    ]


def _status_plain(status: str) -> str:
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: Sequence[Check]) -> None:
    print("\nsocket doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parse_flags({}, argv, name=command_name(context, "doctor"))
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(checks)
    else:
        table = Table(
            title="socket doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print(table)

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS


command = Leaf(description=DESCRIPTION, run=run)
