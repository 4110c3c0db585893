"""``socket wrapper``: manage the ``npm``/``npx`` shell aliases.

Aliases are written to ``~/.bashrc`` and ``~/.zshrc`` when those files
exist; they are never created.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from socket_cli.cli import exit_codes, prompts
from socket_cli.cli.commands.common import command_name
from socket_cli.cli.console import console, out
from socket_cli.cli.flags import COMMAND_FLAGS, FlagSpec, merge_schemas, parse_flags
from socket_cli.core.registry import CommandContext, Leaf

DESCRIPTION = "Enable or disable the Socket npm/npx wrapper"

ALIAS_LINES: tuple[str, ...] = ('alias npm="socket npm"', 'alias npx="socket npx"')
RC_FILES: tuple[str, ...] = (".bashrc", ".zshrc")

FLAGS = merge_schemas(
    COMMAND_FLAGS,
    {"postinstall": FlagSpec("boolean", False, "Offer to enable the wrapper after installation")},
)

BANNER = r"""
 _____         _       _
|   __|___ ___| |_ ___| |_
|__   | . |  _| '_| -_|  _|
|_____|___|___|_,_|___|_|
"""


def rc_files(home: Path | None = None) -> list[Path]:
    """Existing shell startup files under *home*."""
    base = home if home is not None else Path.home()
    return [base / name for name in RC_FILES if (base / name).is_file()]


def alias_installed(path: Path) -> bool:
    lines = path.read_text(encoding="utf-8").splitlines()
    return any(line in ALIAS_LINES for line in lines)


def add_alias(path: Path) -> None:
    text = path.read_text(encoding="utf-8")
    prefix = "" if not text or text.endswith("\n") else "\n"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(prefix + "\n".join(ALIAS_LINES) + "\n")


def remove_alias(path: Path) -> None:
    lines = path.read_text(encoding="utf-8").split("\n")
    path.write_text("\n".join(line for line in lines if line not in ALIAS_LINES), encoding="utf-8")


def enable(files: Sequence[Path]) -> None:
    for path in files:
        if alias_installed(path):
            console.print(f"The Socket npm/npx wrapper is set up in your bash profile ({path}).")
            continue
        add_alias(path)
        console.print(
            f"The alias was added to {path}. Running 'npm install' will now be wrapped "
            "in Socket's \"safe npm\".\n"
            "If you want to disable it at any time, run `socket wrapper --disable`",
        )


def disable(files: Sequence[Path]) -> None:
    for path in files:
        remove_alias(path)
        console.print(
            f"The alias was removed from {path}. Running 'npm install' will now run "
            "the standard npm command.",
        )


def postinstall(files: Sequence[Path]) -> None:
    """Offer the aliases once, unless one is already present."""
    if any(alias_installed(path) for path in files):
        return
    if not prompts.is_interactive():
        return
    out.write(BANNER)
    accepted = prompts.confirm(
        "The Socket CLI is now successfully installed! To better protect yourself against "
        "supply-chain attacks, our \"safe npm\" wrapper can warn you about malicious packages "
        "whenever you run 'npm install'. Do you want to install \"safe npm\" "
        "(this will create an alias to the socket-npm command)?",
    )
    if accepted:
        enable(files)


async def run(argv: Sequence[str], context: CommandContext, *, home: Path | None = None) -> int | None:
    parsed = parse_flags(
        FLAGS,
        argv,
        name=command_name(context, "wrapper"),
        usage="<flag>",
        examples=["--enable", "--disable"],
    )
    files = rc_files(home)

    if parsed.flags["postinstall"]:
        postinstall(files)
        return None
    if not parsed.flags["enable"] and not parsed.flags["disable"]:
        out.write(parsed.help_text)
        return None

    if not files:
        console.print("There was an issue setting up the alias in your bash profile")
        return exit_codes.GENERAL_ERROR
    if parsed.flags["enable"]:
        enable(files)
    else:
        disable(files)
    return None


command = Leaf(description=DESCRIPTION, run=run)
