"""Infrastructure: find and load the project's ``socket.yml``.

The file is searched upward from the working directory (``socket.yml``
before ``socket.yaml`` in each directory).  Only the ``issueRules``
mapping is consumed by socket-cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from socket_cli.exceptions import InputError

CONFIG_NAMES: tuple[str, ...] = ("socket.yml", "socket.yaml")


@dataclass(frozen=True, slots=True)
class SocketYml:
    """Parsed ``socket.yml``."""

    path: Path
    raw: dict[str, Any]
    issue_rules: dict[str, Any] = field(default_factory=dict)


def find_socket_yml(start: Path | None = None) -> Path | None:
    """Return the nearest ``socket.yml``/``socket.yaml`` at or above *start*."""
    directory = (start or Path.cwd()).resolve()
    for current in (directory, *directory.parents):
        for name in CONFIG_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
    return None


def load_socket_yml(path: Path) -> SocketYml:
    """Parse *path*.

    Raises
    ------
    InputError
        If the file is not valid YAML or its top level is not a mapping.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InputError(f"Found file but was unable to parse {path}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InputError(f"Top-level of {path} must be a mapping")

    rules = raw.get("issueRules") or {}
    if not isinstance(rules, dict):
        raise InputError(f"`issueRules` in {path} must be a mapping")
    return SocketYml(path=path, raw=raw, issue_rules=rules)


def discover_issue_rules(start: Path | None = None) -> dict[str, Any]:
    """Return ``issueRules`` of the nearest config, or ``{}`` when none exists."""
    path = find_socket_yml(start)
    if path is None:
        return {}
    return load_socket_yml(path).issue_rules
