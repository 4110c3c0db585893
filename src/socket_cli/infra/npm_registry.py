"""Infrastructure: resolve npm dist-tags to concrete versions.

The Socket issues endpoint needs an exact version, while users type
``npm install left-pad`` or ``left-pad@next``.  The public registry's
``/<name>/<tag-or-version>`` document carries the resolved ``version``.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org/"

_EXACT_VERSION = re.compile(r"^v?\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.+-]+)?$")


def is_exact_version(version: str) -> bool:
    return bool(_EXACT_VERSION.match(version))


class NpmRegistry:
    """Tiny async registry client; one method, no retries."""

    def __init__(
        self,
        *,
        base_url: str = NPM_REGISTRY_URL,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> NpmRegistry:
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    async def resolve_version(self, name: str, version: str) -> str | None:
        """Return the exact version *version* refers to, or ``None``.

        Exact versions are returned unchanged without a request.  Ranges
        (``^1.2``) cannot be resolved through this endpoint and yield
        ``None``, as do network failures.
        """
        if is_exact_version(version):
            return version.lstrip("v")
        # Scoped names keep their "@" but escape the "/".
        path = f"{quote(name, safe='@')}/{quote(version, safe='')}"
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            logger.debug("registry lookup for %s@%s failed: %s", name, version, exc)
            return None
        if not response.is_success:
            logger.debug("registry lookup for %s@%s -> %d", name, version, response.status_code)
            return None
        try:
            resolved = response.json().get("version")
        except (ValueError, AttributeError):
            return None
        return resolved if isinstance(resolved, str) else None
