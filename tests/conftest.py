"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Mapping
from typing import Any

import httpx
import pytest

from denopak.errors import NetworkError

VERSION_META = {
    "moduleGraph2": {"/mod.ts": {}, "/src/util.ts": {}, "/virtual.ts": {}},
    "manifest": {
        "/mod.ts": {"size": 10, "checksum": "sha256-deadbeef"},
        "/src/util.ts": {"size": 20, "checksum": "sha256-cafebabe"},
        "/README.md": {"size": 30, "checksum": "sha256-0000"},
    },
}

# base64 of bytes 0x00..0x03
PACKUMENT = {
    "name": "@napi-rs/cli",
    "versions": {
        "2.18.4": {"dist": {"integrity": "sha512-AAECAw==", "shasum": "ignored"}},
    },
}


class FakeHttp:
    """In-memory ``HttpClient`` with optional per-URL delays."""

    def __init__(
        self,
        responses: Mapping[str, str],
        *,
        delays: Mapping[str, float] | None = None,
    ) -> None:
        self.responses = dict(responses)
        self.delays = dict(delays or {})
        self.requested: list[str] = []

    async def get_text(self, url: str) -> str:
        self.requested.append(url)
        await asyncio.sleep(self.delays.get(url, 0))
        if url not in self.responses:
            raise NetworkError("Unexpected HTTP status.", context={"url": url, "status": "404"})
        return self.responses[url]


def registry_responses() -> dict[str, str]:
    return {
        "https://jsr.io/@std/path/meta.json": json.dumps({"latest": "1.0.8"}),
        "https://jsr.io/@std/path/1.0.8_meta.json": json.dumps(VERSION_META),
        "https://registry.npmjs.org/@napi-rs/cli": json.dumps(PACKUMENT),
    }


def mock_transport(
    responses: Mapping[str, Any],
    *,
    calls: list[str] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        entry = responses.get(url)
        if entry is None:
            return httpx.Response(404, text="not found")
        if callable(entry):
            return entry(request)
        return httpx.Response(200, text=entry)

    return httpx.MockTransport(handler)


@pytest.fixture
def responses() -> dict[str, str]:
    return registry_responses()


@pytest.fixture
def fake_http(responses: dict[str, str]) -> Callable[..., FakeHttp]:
    def _make(overrides: Mapping[str, str] | None = None, **kwargs: Any) -> FakeHttp:
        return FakeHttp({**responses, **(overrides or {})}, **kwargs)

    return _make


@pytest.fixture
def transport() -> Callable[..., httpx.MockTransport]:
    return mock_transport


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
