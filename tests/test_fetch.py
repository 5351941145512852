from collections.abc import Callable

import httpx
import pytest

from denopak.errors import NetworkError, PolicyError
from denopak.fetch import HttpxClient, compute_delay
from denopak.policy import Policy

FAST = Policy(base_delay_s=0.0, max_delay_s=0.0, jitter=0.0)


@pytest.mark.anyio
async def test_get_text_returns_body(transport: Callable[..., httpx.MockTransport]) -> None:
    async with HttpxClient(FAST, transport=transport({"https://jsr.io/@std/path/meta.json": "{}"})) as http:
        assert await http.get_text("https://jsr.io/@std/path/meta.json") == "{}"


@pytest.mark.anyio
async def test_get_text_retries_server_errors_then_succeeds(
    transport: Callable[..., httpx.MockTransport],
) -> None:
    calls: list[str] = []
    attempts = iter([503, 502, 200])

    def flaky(request: httpx.Request) -> httpx.Response:
        status = next(attempts)
        return httpx.Response(status, text="ok" if status == 200 else "busy")

    url = "https://registry.npmjs.org/chalk"
    async with HttpxClient(FAST, transport=transport({url: flaky}, calls=calls)) as http:
        assert await http.get_text(url) == "ok"

    assert calls == [url, url, url]


@pytest.mark.anyio
async def test_get_text_gives_up_after_max_attempts(
    transport: Callable[..., httpx.MockTransport],
) -> None:
    calls: list[str] = []
    url = "https://registry.npmjs.org/chalk"
    policy = Policy(max_attempts=2, base_delay_s=0.0, max_delay_s=0.0, jitter=0.0)

    def down(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="down")

    async with HttpxClient(policy, transport=transport({url: down}, calls=calls)) as http:
        with pytest.raises(NetworkError) as excinfo:
            await http.get_text(url)

    assert len(calls) == 2
    assert excinfo.value.context["status"] == "500"


@pytest.mark.anyio
async def test_get_text_does_not_retry_client_errors(
    transport: Callable[..., httpx.MockTransport],
) -> None:
    calls: list[str] = []
    async with HttpxClient(FAST, transport=transport({}, calls=calls)) as http:
        with pytest.raises(NetworkError) as excinfo:
            await http.get_text("https://registry.npmjs.org/missing")

    assert len(calls) == 1
    assert excinfo.value.context["status"] == "404"


@pytest.mark.anyio
async def test_get_text_wraps_transport_errors() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with HttpxClient(FAST, transport=httpx.MockTransport(refuse)) as http:
        with pytest.raises(NetworkError) as excinfo:
            await http.get_text("https://jsr.io/@std/path/meta.json")

    assert excinfo.value.context["attempts"] == "3"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.anyio
async def test_offline_policy_blocks_requests(
    transport: Callable[..., httpx.MockTransport],
) -> None:
    calls: list[str] = []
    policy = Policy(network_mode="offline")
    async with HttpxClient(policy, transport=transport({}, calls=calls)) as http:
        with pytest.raises(PolicyError):
            await http.get_text("https://jsr.io/@std/path/meta.json")

    assert calls == []


def test_compute_delay_backs_off_exponentially_and_caps() -> None:
    policy = Policy(base_delay_s=0.5, max_delay_s=1.5, jitter=0.0)

    assert [compute_delay(policy, attempt) for attempt in (1, 2, 3, 4)] == [0.5, 1.0, 1.5, 1.5]


def test_compute_delay_jitter_stays_within_spread() -> None:
    policy = Policy(base_delay_s=1.0, max_delay_s=1.0, jitter=0.2)

    for _ in range(50):
        assert 0.8 <= compute_delay(policy, 1) <= 1.2
