"""Infrastructure: persisted settings document.

The settings file holds a single JSON object encoded with Ascii85.  It
is read lazily on first access and rewritten in full on every
:meth:`FileSettingsStore.set` — last writer wins, no locking.

Rules
-----
* A missing file is an empty document.
* A file that cannot be decoded is treated as empty (and logged), never
  as a fatal error, so a corrupt file cannot lock the user out of
  ``socket login``.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

API_KEY = "apiKey"
ENFORCED_ORG = "enforcedOrg"


def encode_settings(settings: dict[str, Any]) -> bytes:
    """Serialise *settings* to the on-disk representation."""
    return base64.a85encode(json.dumps(settings).encode("utf-8"))


def decode_settings(raw: bytes) -> dict[str, Any]:
    """Parse the on-disk representation.

    Raises
    ------
    ValueError
        When *raw* is not Ascii85-encoded JSON object text.
    """
    try:
        decoded = base64.a85decode(raw.strip()).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError(f"settings are not valid Ascii85 text: {exc}") from exc
    data = json.loads(decoded)
    if not isinstance(data, dict):
        raise ValueError("settings document must be a JSON object")
    return data


class FileSettingsStore:
    """:class:`~socket_cli.core.protocols.SettingsStore` backed by a file.

    Parameters
    ----------
    path:
        Location of the settings file.  Parent directories are created
        on the first write.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._settings: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._settings is None:
            self._settings = {}
            if self._path.is_file():
                try:
                    self._settings = decode_settings(self._path.read_bytes())
                except ValueError:
                    logger.warning("ignoring unreadable settings file %s", self._path)
        return self._settings

    def get(self, key: str) -> Any:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        settings = self._load()
        settings[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(encode_settings(settings))
        logger.debug("updated setting %r in %s", key, self._path)


class MemorySettingsStore:
    """In-memory settings store for tests and dry runs."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value
