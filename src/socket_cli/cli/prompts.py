"""Interactive prompts for the CLI layer.

This module is responsible for:

* Asking for an API key without echoing it.
* Offering a checkbox list of organizations to enforce.
* Yes/no confirmations (risk acceptance, shell alias installation).

All terminal interaction lives here — no API calls, no settings writes.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any

from socket_cli.core.models import Organization
from socket_cli.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def is_interactive() -> bool:
    """True when both stdin and stderr are attached to a terminal."""
    return sys.stdin.isatty() and sys.stderr.isatty()


def prompt_api_key() -> str | None:
    """Ask for a Socket API key; ``None`` when the user enters nothing.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during the prompt.
    """
    questionary = _import_questionary()
    answer: str | None = questionary.password(
        "Enter your Socket.dev API key",
    ).unsafe_ask()
    answer = (answer or "").strip()
    return answer or None


def prompt_enforced_orgs(organizations: Sequence[Organization]) -> list[str]:
    """Ask which organizations' policies to enforce system-wide.

    Returns
    -------
    list[str]
        Ids of the selected organizations; empty when none is selected.
    """
    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=org.name or org.id, value=org.id)
        for org in organizations
    ]
    selected: list[str] | None = questionary.checkbox(
        "Which organization's policies should Socket enforce system-wide?",
        choices=choices,
    ).unsafe_ask()
    return list(selected or [])


def confirm(message: str, *, default: bool = False) -> bool:
    """Yes/no question; Ctrl+C propagates as ``KeyboardInterrupt``."""
    questionary = _import_questionary()
    return bool(questionary.confirm(message, default=default).unsafe_ask())
