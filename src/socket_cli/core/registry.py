"""Subcommand registry — a recursive routing table of named commands.

A registry is a tree of :class:`Group` nodes whose leaves are
:class:`Leaf` subcommand contracts.  Nodes are immutable once built and
are distinguished structurally (``isinstance``), never by probing for
attributes.

Everything here is pure: building, lookup and help rendering.  Printing
and awaiting the leaf happen in :mod:`socket_cli.cli.dispatcher`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from socket_cli.exceptions import RegistryError

HELP_FLAGS: frozenset[str] = frozenset({"--help", "-h"})
"""Tokens that request help instead of naming a subcommand."""


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandContext:
    """Context handed to every leaf ``run``."""

    parent_name: str
    """Space-separated command path that led to this leaf (e.g. ``socket``)."""

    meta: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    """Opaque invocation metadata (package location, version, ...)."""


RunFunction = Callable[[Sequence[str], CommandContext], Awaitable[Union[int, None]]]


@dataclass(frozen=True, slots=True)
class Leaf:
    """A named operation: a description plus an async ``run`` function."""

    description: str
    run: RunFunction


@dataclass(frozen=True, slots=True)
class Group:
    """An ordered collection of uniquely named nodes.

    Insertion order is the display order in generated help.
    """

    entries: tuple[tuple[str, Node], ...]
    description: str = ""

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, node in self.entries:
            if not name or name.startswith("-"):
                raise RegistryError(f"Invalid command name: {name!r}")
            if name in seen:
                raise RegistryError(f"Duplicate command name: {name!r}")
            if not isinstance(node, (Leaf, Group)):
                raise RegistryError(
                    f"Command {name!r} must be a Leaf or Group, got {type(node).__name__}",
                )
            seen.add(name)

    @classmethod
    def of(cls, *entries: tuple[str, Node], description: str = "") -> Group:
        """Build a group from ``(name, node)`` pairs."""
        return cls(entries=tuple(entries), description=description)

    def get(self, name: str) -> Node | None:
        """Exact, case-sensitive lookup."""
        for entry_name, node in self.entries:
            if entry_name == name:
                return node
        return None

    def names(self) -> list[str]:
        return [name for name, _ in self.entries]

    def __iter__(self) -> Iterator[tuple[str, Node]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


Node = Union[Leaf, Group]


def describe(node: Node) -> str:
    """Return the one-line description shown in help tables."""
    return node.description


# ---------------------------------------------------------------------------
# Help rendering (pure)
# ---------------------------------------------------------------------------

def format_help_list(rows: Iterable[tuple[str, str]], indent: int = 4, pad_name: int = 18) -> str:
    """Render ``(name, description)`` rows as an aligned, indented list."""
    lines = [
        f"{' ' * indent}{name.ljust(pad_name)}{description}".rstrip()
        for name, description in rows
    ]
    return "\n".join(lines)


def render_help(name: str, registry: Group) -> str:
    """Build the usage text for the group reachable as *name*."""
    commands = format_help_list((entry, describe(node)) for entry, node in registry)
    options = format_help_list(
        [
            ("--help", "Print this help and exit."),
            ("--version", "Print the current version and exit."),
        ],
    )
    return (
        "Usage\n"
        f"  $ {name} <command>\n"
        "\n"
        "Commands\n"
        f"{commands}\n"
        "\n"
        "Options\n"
        f"{options}\n"
        "\n"
        "Examples\n"
        f"  $ {name} --help\n"
    )
