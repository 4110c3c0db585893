"""``socket login``: store an API key and the organizations to enforce.

Flow
----
1. Prompt for the key (interactive shells only).  A blank entry warns
   and leaves the stored settings untouched.
2. Store it, then verify it with a quota lookup.  A rejected key puts
   the previous key back and reports ``Invalid API key``.
3. Offer the organizations the key can see; the selected ids are stored
   under ``enforcedOrg`` (an empty list when none is picked).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from socket_cli.cli import exit_codes, prompts
from socket_cli.cli.commands.common import command_name, fetch
from socket_cli.cli.console import out
from socket_cli.cli.flags import parse_flags
from socket_cli.cli.progress import Spinner
from socket_cli.cli.sdk_setup import default_settings_store, setup_sdk
from socket_cli.core.api_call import handle_api_call
from socket_cli.core.models import ApiSuccess, Organization
from socket_cli.core.registry import CommandContext, Leaf
from socket_cli.exceptions import InputError
from socket_cli.infra.settings_store import API_KEY, ENFORCED_ORG

logger = logging.getLogger(__name__)

DESCRIPTION = "Socket API login"


def organizations_from_payload(payload: Any) -> list[Organization]:
    """Read the ``organizations`` mapping (or list) of a getOrganizations body."""
    raw = payload.get("organizations", {}) if isinstance(payload, dict) else {}
    values = raw.values() if isinstance(raw, dict) else raw
    return [Organization.from_payload(item) for item in values if isinstance(item, dict)]


async def run(argv: Sequence[str], context: CommandContext) -> int | None:
    parsed = parse_flags(
        {},
        argv,
        name=command_name(context, "login"),
        description="Logs into the Socket API by prompting for an API key",
        examples=[""],
    )
    if parsed.positionals:
        out.write(parsed.help_text)
        return None

    if not prompts.is_interactive():
        raise InputError("Cannot prompt for credentials in a non-interactive shell")

    api_key = prompts.prompt_api_key()
    if not api_key:
        Spinner().warn("API key not updated")
        return None

    settings = default_settings_store()
    previous_key = settings.get(API_KEY)
    settings.set(API_KEY, api_key)

    spinner = Spinner("Verifying API key...").start()
    async with setup_sdk(api_key) as sdk:
        outcome = await handle_api_call(
            sdk.get_quota(),
            None,
            "verifying API key",
            operation_name="getQuota",
        )
        if not isinstance(outcome, ApiSuccess):
            logger.debug("API key rejected: %s", outcome)
            settings.set(API_KEY, previous_key)
            spinner.fail("Invalid API key")
            return exit_codes.GENERAL_ERROR
        spinner.succeed("API key verified")

        payload = await fetch(
            sdk.get_organizations(),
            None,
            "looking up organizations",
            "getOrganizations",
        )

    organizations = organizations_from_payload(payload)
    enforced: list[str] = []
    if organizations:
        enforced = prompts.prompt_enforced_orgs(organizations)
    settings.set(ENFORCED_ORG, enforced)

    spinner.succeed(f"API credentials {'updated' if previous_key else 'set'}")
    return None


command = Leaf(description=DESCRIPTION, run=run)
