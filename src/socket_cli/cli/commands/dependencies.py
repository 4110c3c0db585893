"""``socket dependencies search|upload``: organization dependency inventory."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.console import console
from socket_cli.cli.flags import OUTPUT_FLAGS, FlagSpec, merge_schemas, parse_flags
from socket_cli.cli.output import emit_json, emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Group, Leaf
from socket_cli.exceptions import InputError

SEARCH_FLAGS = merge_schemas(
    {
        "limit": FlagSpec("number", 50, "Maximum number of dependencies returned", short="l"),
        "offset": FlagSpec("number", 0, "Page number", short="o"),
    },
    OUTPUT_FLAGS,
)

UPLOAD_FLAGS = merge_schemas(
    {
        "repository": FlagSpec("string", "", "Repository name", short="r"),
        "branch": FlagSpec("string", "", "Branch name", short="b"),
    },
    OUTPUT_FLAGS,
)

COLUMNS: tuple[tuple[str, str], ...] = (
    ("namespace", "Namespace"),
    ("name", "Name"),
    ("version", "Version"),
    ("repository", "Repository"),
    ("branch", "Branch"),
    ("type", "Type"),
    ("direct", "Direct"),
)


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------

async def search(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(SEARCH_FLAGS, argv, name=command_name(context, "search"))

    async with setup_sdk() as sdk:
        spinner = Spinner("Searching dependencies...").start()
        data = await fetch(
            sdk.search_dependencies(
                limit=int(parsed.flags["limit"]),
                offset=int(parsed.flags["offset"]),
            ),
            spinner,
            "searching dependencies",
            "searchDependencies",
        )
    spinner.stop()

    rows = data.get("rows", []) if isinstance(data, Mapping) else []
    emit_rows(
        "Organization dependencies",
        COLUMNS,
        [row for row in rows if isinstance(row, Mapping)],
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


# ---------------------------------------------------------------------------
# upload
# ---------------------------------------------------------------------------

async def upload(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        UPLOAD_FLAGS,
        argv,
        name=command_name(context, "upload"),
        usage="--repository=<name> --branch=<name> <files...>",
        examples=["--repository=my-repo --branch=main package.json package-lock.json"],
    )
    repository, branch = parsed.flags["repository"], parsed.flags["branch"]
    if not repository or not branch:
        raise InputError("Please provide a repository name and branch name.", parsed.help_text)
    if not parsed.positionals:
        raise InputError("Please provide file paths.", parsed.help_text)
    missing = [path for path in parsed.positionals if not Path(path).is_file()]
    if missing:
        raise InputError(f"File not found: {', '.join(missing)}")

    async with setup_sdk() as sdk:
        spinner = Spinner("Uploading dependencies...").start()
        data = await fetch(
            sdk.create_dependencies_snapshot(
                repository=repository,
                branch=branch,
                file_paths=parsed.positionals,
                base_path=Path.cwd(),
            ),
            spinner,
            "uploading dependencies",
            "createDependenciesSnapshot",
        )
    spinner.succeed("Dependencies snapshot uploaded successfully")
    if parsed.flags["json"]:
        emit_json(data)
    elif isinstance(data, Mapping) and data.get("id"):
        console.print(f"Snapshot id: {data['id']}")
    return None


command = Group.of(
    ("search", Leaf("Search for any dependency that is being used in your organization", search)),
    ("upload", Leaf("Upload dependency manifests used in your organization", upload)),
    description="Search or upload dependencies used in your organization",
)
