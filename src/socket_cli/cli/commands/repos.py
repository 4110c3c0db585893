"""``socket repos list|view|create|update|delete``: organization repositories."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.flags import OUTPUT_FLAGS, FlagSpec, ParsedCommand, merge_schemas, parse_flags
from socket_cli.cli.output import emit_json, emit_rows
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import setup_sdk
from socket_cli.core.registry import CommandContext, Group, Leaf
from socket_cli.exceptions import InputError

LIST_FLAGS = merge_schemas(
    {
        "sort": FlagSpec("string", "created_at", "Sorting option", short="s"),
        "direction": FlagSpec("string", "desc", "Direction option"),
        "perPage": FlagSpec("number", 30, "Number of results per page", short="pp"),
        "page": FlagSpec("number", 1, "Page number", short="p"),
    },
    OUTPUT_FLAGS,
)

REPOSITORY_FLAGS = merge_schemas(
    {
        "repoName": FlagSpec("string", "", "Repository name", short="n"),
        "repoDescription": FlagSpec("string", "", "Repository description", short="d"),
        "homepage": FlagSpec("string", "", "Repository url"),
        "defaultBranch": FlagSpec("string", "main", "Repository default branch", short="b"),
        "visibility": FlagSpec("string", "private", "Repository visibility (Default Private)", short="v"),
    },
    OUTPUT_FLAGS,
)

LIST_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "ID"),
    ("name", "Name"),
    ("visibility", "Visibility"),
    ("default_branch", "Default branch"),
    ("archived", "Archived"),
)

VIEW_COLUMNS: tuple[tuple[str, str], ...] = (
    *LIST_COLUMNS[:4],
    ("homepage", "Homepage"),
    ("archived", "Archived"),
    ("created_at", "Created at"),
)


def repository_fields(parsed: ParsedCommand) -> dict[str, Any]:
    """Request body for create/update, in the API's field names."""
    flags = parsed.flags
    return {
        "name": flags["repoName"],
        "description": flags["repoDescription"],
        "homepage": flags["homepage"],
        "default_branch": flags["defaultBranch"],
        "visibility": flags["visibility"],
    }


def _org_slug(parsed: ParsedCommand, message: str = "Please provide an organization slug.") -> str:
    if not parsed.positionals:
        raise InputError(message, parsed.help_text)
    return parsed.positionals[0]


async def list_repos(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        LIST_FLAGS,
        argv,
        name=command_name(context, "list"),
        usage="<org slug>",
        examples=["FakeOrg"],
    )
    org_slug = _org_slug(parsed)
    params = {
        "sort": parsed.flags["sort"],
        "direction": parsed.flags["direction"],
        "per_page": int(parsed.flags["perPage"]),
        "page": int(parsed.flags["page"]),
    }

    async with setup_sdk() as sdk:
        spinner = Spinner("Listing repositories...").start()
        data = await fetch(sdk.get_org_repo_list(org_slug, params), spinner, "listing repositories", "getOrgRepoList")
    spinner.stop()

    results = data.get("results", []) if isinstance(data, Mapping) else []
    emit_rows(
        f"Repositories of {org_slug}",
        LIST_COLUMNS,
        [row for row in results if isinstance(row, Mapping)],
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


async def view(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        OUTPUT_FLAGS,
        argv,
        name=command_name(context, "view"),
        usage="<org slug> <repo slug>",
        examples=["FakeOrg test-repo"],
    )
    if len(parsed.positionals) < 2:
        raise InputError("Please provide an organization slug and repository name.", parsed.help_text)
    org_slug, repo = parsed.positionals[:2]

    async with setup_sdk() as sdk:
        spinner = Spinner("Fetching repository...").start()
        data = await fetch(sdk.get_org_repo(org_slug, repo), spinner, "fetching repository", "getOrgRepo")
    spinner.stop()

    emit_rows(
        f"Repository {repo}",
        VIEW_COLUMNS,
        [data] if isinstance(data, Mapping) else [],
        as_json=parsed.flags["json"],
        as_markdown=parsed.flags["markdown"],
        raw=data,
    )
    return None


async def create(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        REPOSITORY_FLAGS,
        argv,
        name=command_name(context, "create"),
        usage="<org slug>",
        examples=["FakeOrg --repoName=test-repo"],
    )
    org_slug = _org_slug(parsed)
    if not parsed.flags["repoName"]:
        raise InputError("Repository name is required.", parsed.help_text)

    async with setup_sdk() as sdk:
        spinner = Spinner("Creating repository...").start()
        data = await fetch(
            sdk.create_org_repo(org_slug, repository_fields(parsed)),
            spinner,
            "creating repository",
            "createOrgRepo",
        )
    spinner.succeed("Repository created successfully")
    if parsed.flags["json"]:
        emit_json(data)
    return None


async def update(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        REPOSITORY_FLAGS,
        argv,
        name=command_name(context, "update"),
        usage="<org slug>",
        examples=["FakeOrg --repoName=test-repo --defaultBranch=develop"],
    )
    org_slug = _org_slug(parsed, "Please provide an organization slug and repository name.")
    repo = parsed.flags["repoName"]
    if not repo:
        raise InputError("Repository name is required.", parsed.help_text)

    async with setup_sdk() as sdk:
        spinner = Spinner("Updating repository...").start()
        data = await fetch(
            sdk.update_org_repo(org_slug, repo, repository_fields(parsed)),
            spinner,
            "updating repository",
            "updateOrgRepo",
        )
    spinner.succeed("Repository updated successfully")
    if parsed.flags["json"]:
        emit_json(data)
    return None


async def delete(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        {},
        argv,
        name=command_name(context, "delete"),
        usage="<org slug> <repo slug>",
        examples=["FakeOrg test-repo"],
    )
    if len(parsed.positionals) < 2:
        raise InputError("Please provide an organization slug and repository slug.", parsed.help_text)
    org_slug, repo = parsed.positionals[:2]

    async with setup_sdk() as sdk:
        spinner = Spinner("Deleting repository...").start()
        await fetch(sdk.delete_org_repo(org_slug, repo), spinner, "deleting repository", "deleteOrgRepo")
    spinner.succeed("Repository deleted successfully")
    return None


command = Group.of(
    ("create", Leaf("Create a repository in an organization", create)),
    ("view", Leaf("View repositories in an organization", view)),
    ("list", Leaf("List repositories in an organization", list_repos)),
    ("delete", Leaf("Delete a repository in an organization", delete)),
    ("update", Leaf("Update a repository in an organization", update)),
    description="Repositories related commands",
)
