"""httpx-backed client for the Socket security-analysis API.

This module is the **only** place in the code base that talks HTTP to
the Socket API.  Every operation returns an :class:`SdkResult`; non-2xx
responses are *values*, not exceptions.  Only transport failures (no
response at all) raise, as :class:`~socket_cli.exceptions.NetworkError`
chained to the underlying httpx error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx

from socket_cli.config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from socket_cli.core.models import AuditLogQuery, SdkResult
from socket_cli.exceptions import NetworkError
from socket_cli.version import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"socket-cli-python/{__version__}"


def _error_description(response: httpx.Response) -> dict[str, Any]:
    """Extract the ``error`` object from a failed response body."""
    try:
        body = response.json()
    except ValueError:
        text = (response.text or "").strip().replace("\n", " ")[:200]
        return {"message": text or response.reason_phrase or "No error message returned"}
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error
        if isinstance(error, str):
            return {"message": error}
        if isinstance(body.get("message"), str):
            return {"message": body["message"]}
    return {"message": "No error message returned"}


class SocketSdk:
    """Async client for the operations socket-cli consumes.

    Usage::

        async with SocketSdk(api_key) as sdk:
            result = await sdk.get_organizations()

    Parameters
    ----------
    api_key:
        Sent as the HTTP basic-auth username.
    base_url:
        API root, e.g. ``https://api.socket.dev/v0/``.
    timeout_seconds:
        Per-request timeout.
    transport:
        Optional httpx transport (tests pass :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(api_key, ""),
            timeout=timeout_seconds,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SocketSdk:
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, *, as_text: bool = False, **kwargs: Any) -> SdkResult:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Socket API network error for {method} {path}: {exc}") from exc

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if response.is_success:
            if as_text:
                return SdkResult(success=True, status=response.status_code, data=response.text)
            if not response.content:
                return SdkResult(success=True, status=response.status_code, data=None)
            try:
                data = response.json()
            except ValueError as exc:
                raise NetworkError(
                    f"Socket API returned a non-JSON success response for {method} {path}",
                ) from exc
            return SdkResult(success=True, status=response.status_code, data=data)

        return SdkResult(
            success=False,
            status=response.status_code,
            error=_error_description(response),
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_quota(self) -> SdkResult:
        return await self._request("GET", "quota")

    async def get_organizations(self) -> SdkResult:
        return await self._request("GET", "organizations")

    async def get_org_analytics(self, time: str) -> SdkResult:
        return await self._request("GET", f"analytics/org/{quote(time, safe='')}")

    async def get_repo_analytics(self, repo: str, time: str) -> SdkResult:
        return await self._request(
            "GET",
            f"analytics/repo/{quote(repo, safe='')}/{quote(time, safe='')}",
        )

    async def get_audit_log_events(self, query: AuditLogQuery) -> SdkResult:
        return await self._request(
            "GET",
            f"orgs/{quote(query.org_slug, safe='')}/audit-log",
            params=query.to_params(),
        )

    async def search_dependencies(self, *, limit: int, offset: int) -> SdkResult:
        return await self._request(
            "POST",
            "dependencies/search",
            json={"limit": limit, "offset": offset},
        )

    async def create_dependencies_snapshot(
        self,
        *,
        repository: str,
        branch: str,
        file_paths: Sequence[str],
        base_path: str | Path = ".",
    ) -> SdkResult:
        """Upload manifest files; form field names are paths relative to *base_path*."""
        base = Path(base_path).resolve()
        with ExitStack() as stack:
            files = []
            for file_path in file_paths:
                absolute = (base / file_path).resolve()
                try:
                    relative = absolute.relative_to(base).as_posix()
                except ValueError:
                    relative = absolute.name
                handle = stack.enter_context(absolute.open("rb"))
                files.append((relative, (relative, handle, "application/octet-stream")))
            return await self._request(
                "POST",
                "dependencies/upload",
                params={"repository": repository, "branch": branch},
                files=files,
            )

    async def get_org_diff_scan(self, org_slug: str, *, before: str, after: str) -> SdkResult:
        return await self._request(
            "GET",
            f"orgs/{quote(org_slug, safe='')}/full-scans/diff",
            params={"before": before, "after": after, "preview": "true"},
        )

    async def get_issues_by_npm_package(self, name: str, version: str) -> SdkResult:
        return await self._request(
            "GET",
            f"npm/{quote(name, safe='')}/{quote(version, safe='')}/issues",
        )

    async def get_score_by_npm_package(self, name: str, version: str) -> SdkResult:
        return await self._request(
            "GET",
            f"npm/{quote(name, safe='')}/{quote(version, safe='')}/score",
        )

    # Repositories

    async def get_org_repo_list(self, org_slug: str, params: Mapping[str, Any]) -> SdkResult:
        return await self._request("GET", f"orgs/{quote(org_slug, safe='')}/repos", params=dict(params))

    async def get_org_repo(self, org_slug: str, repo: str) -> SdkResult:
        return await self._request("GET", _repo_path(org_slug, repo))

    async def create_org_repo(self, org_slug: str, fields: Mapping[str, Any]) -> SdkResult:
        return await self._request("POST", f"orgs/{quote(org_slug, safe='')}/repos", json=dict(fields))

    async def update_org_repo(self, org_slug: str, repo: str, fields: Mapping[str, Any]) -> SdkResult:
        return await self._request("POST", _repo_path(org_slug, repo), json=dict(fields))

    async def delete_org_repo(self, org_slug: str, repo: str) -> SdkResult:
        return await self._request("DELETE", _repo_path(org_slug, repo))

    # Full scans

    async def get_org_full_scan_list(self, org_slug: str, params: Mapping[str, Any]) -> SdkResult:
        return await self._request(
            "GET",
            f"orgs/{quote(org_slug, safe='')}/full-scans",
            params={key: value for key, value in params.items() if value not in ("", None)},
        )

    async def get_org_full_scan(self, org_slug: str, scan_id: str) -> SdkResult:
        """Fetch a full scan; the body is newline-delimited JSON, returned as text."""
        return await self._request("GET", _scan_path(org_slug, scan_id), as_text=True)

    async def get_org_full_scan_metadata(self, org_slug: str, scan_id: str) -> SdkResult:
        return await self._request("GET", f"{_scan_path(org_slug, scan_id)}/metadata")

    async def delete_org_full_scan(self, org_slug: str, scan_id: str) -> SdkResult:
        return await self._request("DELETE", _scan_path(org_slug, scan_id))


def _repo_path(org_slug: str, repo: str) -> str:
    return f"orgs/{quote(org_slug, safe='')}/repos/{quote(repo, safe='')}"


def _scan_path(org_slug: str, scan_id: str) -> str:
    return f"orgs/{quote(org_slug, safe='')}/full-scans/{quote(scan_id, safe='')}"
