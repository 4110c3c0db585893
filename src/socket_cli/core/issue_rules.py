"""Pure package-spec parsing and issue-blocking rules.

Used by the shadow package-manager entry points to decide, before the
real tool runs, whether a requested package carries issues that warrant
stopping the install.  Every function is deterministic and I/O-free.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

DEFAULT_BLOCKING_ISSUES: frozenset[str] = frozenset(
    {
        "shellScriptOverride",
        "gitDependency",
        "httpDependency",
        "installScripts",
        "malware",
        "didYouMean",
        "hasNativeCode",
        "troll",
        "telemetry",
        "invalidPackageJSON",
        "unresolvedRequire",
    }
)
"""Issue types that block an install unless a project rule disables them."""

INSTALL_COMMANDS: dict[str, frozenset[str]] = {
    "npm": frozenset({"install", "i", "add", "in", "ins", "inst", "insta", "instal", "isnt", "isnta", "isntal", "update", "up", "upgrade"}),
    "pnpm": frozenset({"add", "install", "i", "update", "up", "upgrade"}),
}
"""Package-manager subcommands (and their abbreviations) that pull packages."""

_NON_REGISTRY_PREFIXES: tuple[str, ...] = (
    ".",
    "/",
    "~",
    "file:",
    "git:",
    "git+",
    "github:",
    "http:",
    "https:",
    "link:",
    "workspace:",
)


# ---------------------------------------------------------------------------
# Package specs
# ---------------------------------------------------------------------------

def parse_package_spec(spec: str) -> tuple[str, str] | None:
    """Split ``name@version`` into ``(name, version)``.

    A missing version becomes ``"latest"``.  Returns ``None`` for specs
    that do not name a registry package (paths, URLs, git remotes).
    """
    spec = spec.strip()
    if not spec or spec.startswith(_NON_REGISTRY_PREFIXES):
        return None
    scoped = spec.startswith("@")
    body = spec[1:] if scoped else spec
    if not scoped and "/" in body:
        # ``user/repo`` is a GitHub shorthand.
        return None
    name, sep, version = body.partition("@")
    if scoped:
        name = "@" + name
        if "/" not in name:
            return None
    if not name or (scoped and name.endswith("/")):
        return None
    return name, (version if sep and version else "latest")


def requested_packages(tool: str, argv: Sequence[str]) -> list[tuple[str, str]]:
    """Return the registry packages explicitly named in an install command.

    Only the first positional is treated as the subcommand; flags and
    their inline values (``--tag=x``) are skipped.  For ``npx`` the first
    positional is the package to run.  Everything after a
    bare ``--`` is ignored.
    """
    commands = INSTALL_COMMANDS.get(tool, frozenset())
    positionals: list[str] = []
    for token in argv:
        if token == "--":
            break
        if token.startswith("-"):
            continue
        positionals.append(token)

    if tool == "npx":
        # npx runs its first positional as a package.
        parsed = parse_package_spec(positionals[0]) if positionals else None
        return [parsed] if parsed is not None else []
    if not positionals or positionals[0] not in commands:
        return []
    packages: list[tuple[str, str]] = []
    for token in positionals[1:]:
        parsed = parse_package_spec(token)
        if parsed is not None and parsed not in packages:
            packages.append(parsed)
    return packages


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def effective_blocking_issues(rules: Mapping[str, Any] | None) -> frozenset[str]:
    """Apply ``issueRules`` overrides (``type: true|false``) to the defaults."""
    blocking = set(DEFAULT_BLOCKING_ISSUES)
    for issue_type, enabled in (rules or {}).items():
        if isinstance(enabled, Mapping):
            enabled = enabled.get("action", "error") != "ignore"
        if enabled:
            blocking.add(str(issue_type))
        else:
            blocking.discard(str(issue_type))
    return frozenset(blocking)


def blocking_issue_types(
    issues: Iterable[Mapping[str, Any]],
    blocking: frozenset[str] = DEFAULT_BLOCKING_ISSUES,
) -> tuple[str, ...]:
    """Return the distinct blocking issue types found in *issues*, in order."""
    found: list[str] = []
    for issue in issues:
        if not isinstance(issue, Mapping):
            continue
        issue_type = issue.get("type")
        if isinstance(issue_type, str) and issue_type in blocking and issue_type not in found:
            found.append(issue_type)
    return tuple(found)


# ---------------------------------------------------------------------------
# Severity summaries
# ---------------------------------------------------------------------------

SEVERITIES_BY_ORDER: tuple[str, ...] = ("critical", "high", "middle", "low")


def severity_count(
    issues: Iterable[Mapping[str, Any]],
    lowest_to_include: str | None = "high",
) -> dict[str, int]:
    """Count issues per severity, from ``critical`` down to *lowest_to_include*.

    ``None`` includes every severity.  Issues without a ``value`` or with
    a severity outside the counted range are skipped.
    """
    counts: dict[str, int] = {}
    for severity in SEVERITIES_BY_ORDER:
        counts[severity] = 0
        if severity == lowest_to_include:
            break
    for issue in issues:
        value = issue.get("value") if isinstance(issue, Mapping) else None
        if isinstance(value, Mapping) and value.get("severity") in counts:
            counts[value["severity"]] += 1
    return counts


def format_severity_count(counts: Mapping[str, int]) -> str:
    """``"1 critical, 2 high and 3 low"``; severities with no issues are omitted."""
    parts = [f"{counts[severity]} {severity}" for severity in SEVERITIES_BY_ORDER if counts.get(severity)]
    if len(parts) <= 1:
        return "".join(parts)
    return f"{', '.join(parts[:-1])} and {parts[-1]}"


def serious_issue_types(issues: Iterable[Mapping[str, Any]]) -> dict[str, tuple[str, int]]:
    """Group high and critical issues by type as ``type -> (label, count)``."""
    grouped: dict[str, tuple[str, int]] = {}
    for issue in issues:
        if not isinstance(issue, Mapping):
            continue
        value = issue.get("value")
        issue_type = issue.get("type")
        if not isinstance(value, Mapping) or not isinstance(issue_type, str):
            continue
        if value.get("severity") not in ("critical", "high"):
            continue
        label, count = grouped.get(issue_type, (str(value.get("label") or issue_type), 0))
        grouped[issue_type] = (label, count + 1)
    return grouped
