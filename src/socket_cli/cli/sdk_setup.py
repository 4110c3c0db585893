"""Build an authenticated :class:`SocketSdk` for a data command."""

from __future__ import annotations

import logging

import httpx

from socket_cli.cli import prompts
from socket_cli.config import CliConfig, load_config
from socket_cli.core.protocols import SettingsStore
from socket_cli.exceptions import AuthError
from socket_cli.infra.sdk import SocketSdk
from socket_cli.infra.settings_store import API_KEY, FileSettingsStore

logger = logging.getLogger(__name__)


def default_settings_store(config: CliConfig | None = None) -> SettingsStore:
    config = config or load_config()
    return FileSettingsStore(config.settings_path)


def resolve_api_key(
    api_key: str | None = None,
    *,
    config: CliConfig | None = None,
    settings: SettingsStore | None = None,
    interactive: bool | None = None,
) -> str:
    """Return the first API key found.

    Lookup order: explicit *api_key*, ``SOCKET_SECURITY_API_KEY``, the
    settings store, then an interactive prompt.

    Raises
    ------
    AuthError
        When no key can be found.
    """
    if api_key:
        return api_key
    config = config or load_config()
    if config.api_key:
        logger.debug("using API key from the environment")
        return config.api_key
    settings = settings if settings is not None else default_settings_store(config)
    stored = settings.get(API_KEY)
    if isinstance(stored, str) and stored:
        return stored
    if interactive is None:
        interactive = prompts.is_interactive()
    if interactive:
        entered = prompts.prompt_api_key()
        if entered:
            return entered
    raise AuthError("You need to provide an API key")


def setup_sdk(
    api_key: str | None = None,
    *,
    config: CliConfig | None = None,
    settings: SettingsStore | None = None,
    interactive: bool | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SocketSdk:
    """Return a :class:`SocketSdk` configured from *config* and the resolved key."""
    config = config or load_config()
    key = resolve_api_key(api_key, config=config, settings=settings, interactive=interactive)
    return SocketSdk(
        key,
        base_url=config.api_base_url,
        timeout_seconds=config.timeout_seconds,
        transport=transport,
    )
