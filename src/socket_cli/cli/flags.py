"""Declared flag schemas and the argparse adapter behind them.

Subcommands declare their options as a mapping of flag name →
:class:`FlagSpec`.  :func:`parse_flags` turns that schema plus an argv
into a :class:`ParsedCommand` (typed flag values, positionals and help
text).  argparse stays behind this narrow interface; nothing else in the
code base builds parsers.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, NoReturn

from socket_cli.cli import exit_codes
from socket_cli.cli.console import out
from socket_cli.core.registry import format_help_list
from socket_cli.exceptions import InputError, RegistryError

FlagKind = Literal["boolean", "string", "number"]

_PYTHON_TYPES: dict[str, tuple[type, ...]] = {
    "boolean": (bool,),
    "string": (str,),
    "number": (int, float),
}


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """One declared option."""

    kind: FlagKind
    default: Any
    description: str
    short: str | None = None


FlagSchema = Mapping[str, FlagSpec]


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """Result of parsing one subcommand's argv."""

    flags: Mapping[str, Any]
    positionals: tuple[str, ...]
    help_text: str = field(repr=False, default="")


# ---------------------------------------------------------------------------
# Shared schemas
# ---------------------------------------------------------------------------

OUTPUT_FLAGS: FlagSchema = MappingProxyType(
    {
        "json": FlagSpec("boolean", False, "Output result as json", short="j"),
        "markdown": FlagSpec("boolean", False, "Output result as markdown", short="m"),
    }
)

VALIDATION_FLAGS: FlagSchema = MappingProxyType(
    {
        "all": FlagSpec("boolean", False, "Include all issues"),
        "strict": FlagSpec("boolean", False, "Exits with an error code if any matching issues are found"),
    }
)

COMMAND_FLAGS: FlagSchema = MappingProxyType(
    {
        "enable": FlagSpec("boolean", False, "Enables the Socket npm/npx wrapper"),
        "disable": FlagSpec("boolean", False, "Disables the Socket npm/npx wrapper"),
    }
)


def merge_schemas(*schemas: FlagSchema) -> FlagSchema:
    """Combine schemas; later schemas may not redefine earlier names."""
    merged: dict[str, FlagSpec] = {}
    for schema in schemas:
        for name, spec in schema.items():
            if name in merged:
                raise RegistryError(f"Flag --{name} declared twice")
            merged[name] = spec
    return MappingProxyType(merged)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_schema(schema: FlagSchema) -> None:
    """Reject malformed schemas once, before any parsing happens.

    Raises
    ------
    RegistryError
        On unknown kinds, defaults of the wrong type, or clashing short
        aliases.
    """
    shorts: set[str] = set()
    for name, spec in schema.items():
        if spec.kind not in _PYTHON_TYPES:
            raise RegistryError(f"Flag --{name} has unknown kind {spec.kind!r}")
        expected = _PYTHON_TYPES[spec.kind]
        if isinstance(spec.default, bool) and spec.kind != "boolean":
            raise RegistryError(f"Flag --{name} default must be a {spec.kind}")
        if not isinstance(spec.default, expected):
            raise RegistryError(f"Flag --{name} default must be a {spec.kind}")
        if spec.short:
            if spec.short in shorts or spec.short == "h":
                raise RegistryError(f"Short flag -{spec.short} declared twice")
            shorts.add(spec.short)


# ---------------------------------------------------------------------------
# Help text
# ---------------------------------------------------------------------------

def format_flag_list(schema: FlagSchema, indent: int = 4) -> str:
    """Render the options block, always including ``--help``."""
    rows = [("--help", "Print this help and exit.")]
    for name, spec in schema.items():
        label = f"--{name}" + (f", -{spec.short}" if spec.short else "")
        rows.append((label, spec.description))
    return format_help_list(rows, indent=indent, pad_name=22)


def build_help(
    name: str,
    schema: FlagSchema,
    *,
    usage: str = "",
    description: str = "",
    examples: Sequence[str] = (),
) -> str:
    """Assemble the full help text of one subcommand."""
    sections = [f"Usage\n  $ {name}{(' ' + usage) if usage else ''}"]
    if description:
        sections.append(f"  {description}")
    sections.append(f"Options\n{format_flag_list(schema)}")
    if examples:
        sections.append("Examples\n" + "\n".join(f"  $ {name} {example}".rstrip() for example in examples))
    return "\n\n".join(sections) + "\n"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _number(value: str) -> int | float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from None
    return int(number) if number.is_integer() else number


class _RaisingParser(argparse.ArgumentParser):
    """argparse parser that raises :class:`InputError` instead of exiting."""

    def __init__(self, *args: Any, help_text: str, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._help_text = help_text

    def error(self, message: str) -> NoReturn:
        raise InputError(message, self._help_text)


def _build_parser(name: str, schema: FlagSchema, help_text: str) -> _RaisingParser:
    parser = _RaisingParser(prog=name, add_help=False, allow_abbrev=False, help_text=help_text)
    for flag, spec in schema.items():
        option_strings = [f"--{flag}"]
        if spec.short:
            option_strings.append(f"-{spec.short}")
        if spec.kind == "boolean":
            parser.add_argument(
                *option_strings,
                dest=flag,
                action=argparse.BooleanOptionalAction,
                default=spec.default,
            )
        else:
            parser.add_argument(
                *option_strings,
                dest=flag,
                type=_number if spec.kind == "number" else str,
                default=spec.default,
            )
    parser.add_argument("positionals", nargs="*")
    return parser


def parse_flags(
    schema: FlagSchema,
    argv: Sequence[str],
    *,
    name: str,
    usage: str = "",
    description: str = "",
    examples: Sequence[str] = (),
) -> ParsedCommand:
    """Parse *argv* against *schema*.

    ``--help`` / ``-h`` prints the help text to stdout and exits with
    :data:`exit_codes.SUCCESS`.

    Raises
    ------
    InputError
        For unknown flags or values of the wrong type; the help text is
        attached as the error body.
    """
    validate_schema(schema)
    help_text = build_help(name, schema, usage=usage, description=description, examples=examples)

    before_separator = list(argv)
    if "--" in before_separator:
        before_separator = before_separator[: before_separator.index("--")]
    if "--help" in before_separator or "-h" in before_separator:
        out.write(help_text)
        raise SystemExit(exit_codes.SUCCESS)

    parser = _build_parser(name, schema, help_text)
    namespace = parser.parse_intermixed_args(list(argv))
    values = vars(namespace)
    positionals = tuple(values.pop("positionals", []) or [])
    return ParsedCommand(flags=MappingProxyType(values), positionals=positionals, help_text=help_text)
