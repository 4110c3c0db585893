"""Tests for dist-tag resolution (infra/npm_registry.py)."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from socket_cli.infra.npm_registry import NpmRegistry, is_exact_version


def _resolve(handler, name: str, version: str) -> str | None:
    async def go() -> str | None:
        async with NpmRegistry(base_url="https://registry.npm.test/", transport=httpx.MockTransport(handler)) as registry:
            return await registry.resolve_version(name, version)

    return asyncio.run(go())


@pytest.mark.parametrize(
    ("version", "expected"),
    [("1.3.0", True), ("v1.3.0", True), ("1.0.0-beta.1", True), ("latest", False), ("^1.2.0", False), ("1.x", False)],
)
def test_is_exact_version(version: str, expected: bool) -> None:
    assert is_exact_version(version) is expected


def test_exact_version_needs_no_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("unexpected request")

    assert _resolve(handler, "left-pad", "v1.3.0") == "1.3.0"


def test_dist_tag_resolved() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "left-pad", "version": "1.3.0"})

    assert _resolve(handler, "left-pad", "latest") == "1.3.0"
    assert seen[0].url.path == "/left-pad/latest"


def test_scoped_name_escapes_slash() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"version": "2.0.0"})

    assert _resolve(handler, "@scope/pkg", "next") == "2.0.0"
    assert seen[0].url.raw_path.startswith(b"/@scope%2Fpkg/")


@pytest.mark.parametrize(
    "response",
    [httpx.Response(404, json={"error": "not found"}), httpx.Response(200, json={"name": "x"}), httpx.Response(200, text="oops")],
)
def test_unresolvable_is_none(response: httpx.Response) -> None:
    assert _resolve(lambda request: response, "left-pad", "latest") is None


def test_network_failure_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert _resolve(handler, "left-pad", "latest") is None
