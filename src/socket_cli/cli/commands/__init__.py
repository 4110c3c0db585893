"""Subcommands of the ``socket`` root command."""

from __future__ import annotations

from socket_cli.cli.commands import (
    analytics,
    audit_log,
    dependencies,
    diff_scan,
    doctor,
    info,
    login,
    logout,
    organizations,
    raw_npx,
    repos,
    scan,
    wrapper,
)
from socket_cli.cli.commands.npm import wrapped_tool
from socket_cli.core.registry import Group


def build_root_registry() -> Group:
    """Return the registry behind ``socket <command>``, in help order."""
    return Group.of(
        ("npm", wrapped_tool("npm")),
        ("npx", wrapped_tool("npx")),
        ("pnpm", wrapped_tool("pnpm")),
        ("raw-npx", raw_npx.command),
        ("wrapper", wrapper.command),
        ("login", login.command),
        ("logout", logout.command),
        ("info", info.command),
        ("organizations", organizations.command),
        ("repos", repos.command),
        ("scan", scan.command),
        ("analytics", analytics.command),
        ("audit-log", audit_log.command),
        ("dependencies", dependencies.command),
        ("diff-scan", diff_scan.command),
        ("doctor", doctor.command),
        description="CLI tool for Socket.dev",
    )
