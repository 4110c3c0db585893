"""Runtime configuration for socket-cli.

Configuration comes from the environment only; there is no user config
file beyond the settings document managed by
:mod:`socket_cli.infra.settings_store`.  :func:`load_config` is the
single place that reads environment variables, so the rest of the code
base receives a typed, immutable :class:`CliConfig`.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from socket_cli.exceptions import EnvironmentError

DEFAULT_API_BASE_URL = "https://api.socket.dev/v0/"
DEFAULT_TIMEOUT_SECONDS = 30.0

ENV_API_KEY = "SOCKET_SECURITY_API_KEY"
ENV_API_BASE_URL = "SOCKET_CLI_API_BASE_URL"
ENV_API_TIMEOUT = "SOCKET_CLI_API_TIMEOUT"
ENV_DEBUG = "SOCKET_CLI_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class CliConfig:
    """Resolved runtime configuration.

    Attributes
    ----------
    api_base_url : str
        Root URL of the Socket API, always ending in ``/``.
    api_key : str | None
        API key from the environment, if any.  The settings store is
        consulted separately when this is ``None``.
    timeout_seconds : float
        Per-request HTTP timeout.
    debug : bool
        Whether debug logging is enabled.
    settings_path : Path
        Location of the persisted settings document.
    """

    api_base_url: str
    api_key: str | None
    timeout_seconds: float
    debug: bool
    settings_path: Path


def default_settings_path(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path:
    """Return ``<data home>/socket/settings`` for the current platform.

    Raises
    ------
    EnvironmentError
        On Windows when ``%LOCALAPPDATA%`` is not set.
    """
    env = os.environ if environ is None else environ
    plat = sys.platform if platform is None else platform

    data_home = env.get("LOCALAPPDATA") if plat == "win32" else env.get("XDG_DATA_HOME")
    if not data_home:
        if plat == "win32":
            raise EnvironmentError("missing %LOCALAPPDATA%")
        home = Path(env.get("HOME") or Path.home())
        if plat == "darwin":
            data_home = str(home / "Library" / "Application Support")
        else:
            data_home = str(home / ".local" / "share")
    return Path(data_home) / "socket" / "settings"


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """True when ``SOCKET_CLI_DEBUG`` holds a truthy value."""
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG, "").strip().lower() in _TRUTHY


def load_config(environ: Mapping[str, str] | None = None) -> CliConfig:
    """Build a :class:`CliConfig` from *environ* (default ``os.environ``)."""
    env = os.environ if environ is None else environ

    base_url = env.get(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL
    if not base_url.endswith("/"):
        base_url += "/"

    raw_timeout = env.get(ENV_API_TIMEOUT)
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        timeout = DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        timeout = DEFAULT_TIMEOUT_SECONDS

    return CliConfig(
        api_base_url=base_url,
        api_key=env.get(ENV_API_KEY) or None,
        timeout_seconds=timeout,
        debug=debug_enabled(env),
        settings_path=default_settings_path(env),
    )
