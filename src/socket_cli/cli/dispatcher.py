"""Route an argv to exactly one leaf of a command registry.

:func:`dispatch` is the only caller of ``Leaf.run``.  Errors raised by a
leaf propagate unchanged to the entry point's error boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from socket_cli.cli import exit_codes
from socket_cli.cli.console import console, out
from socket_cli.core.registry import HELP_FLAGS, CommandContext, Group, render_help

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """What one dispatch did.

    ``matched`` is ``False`` when help was printed instead of running a
    leaf; ``command`` is the full command path that was resolved.
    """

    matched: bool
    command: str
    exit_code: int


async def dispatch(
    registry: Group,
    argv: Sequence[str],
    root_name: str,
    meta: Mapping[str, Any] | None = None,
) -> DispatchResult:
    """Select the subcommand named by ``argv[0]`` and run it.

    * empty argv → help on stdout, exit 1
    * ``--help`` / ``-h`` → help on stdout, exit 0
    * unknown name → ``Unknown command`` on stderr plus help, exit 1
    * group → recurse with ``argv[1:]``
    * leaf → ``await leaf.run(argv[1:], context)``
    """
    context_meta = MappingProxyType(dict(meta or {}))
    group = registry
    name = root_name
    args = list(argv)

    while True:
        if not args or args[0] in HELP_FLAGS:
            out.write(render_help(name, group))
            code = exit_codes.SUCCESS if args else exit_codes.GENERAL_ERROR
            return DispatchResult(matched=False, command=name, exit_code=code)

        candidate, rest = args[0], args[1:]
        node = group.get(candidate)
        if node is None:
            console.write(f'Unknown command "{candidate}"')
            out.write(render_help(name, group))
            return DispatchResult(matched=False, command=name, exit_code=exit_codes.GENERAL_ERROR)

        if isinstance(node, Group):
            group, name, args = node, f"{name} {candidate}", rest
            continue

        command = f"{name} {candidate}"
        logger.debug("dispatching %r with %d argument(s)", command, len(rest))
        code = await node.run(rest, CommandContext(parent_name=name, meta=context_meta))
        return DispatchResult(
            matched=True,
            command=command,
            exit_code=exit_codes.SUCCESS if code is None else code,
        )
