"""Registry HTTP client with bounded retries."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Protocol

import httpx

from denopak.errors import NetworkError
from denopak.policy import Policy, ensure_network_allowed

logger = logging.getLogger(__name__)

RETRY_ON_STATUS = (429, 500, 502, 503, 504)


class HttpClient(Protocol):
    async def get_text(self, url: str) -> str: ...


class HttpxClient:
    """``HttpClient`` over ``httpx.AsyncClient``.

    Transport errors, timeouts and 429/5xx responses are retried with
    exponential backoff up to ``policy.max_attempts`` attempts.
    """

    def __init__(
        self,
        policy: Policy | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.policy = policy or Policy()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.policy.timeout_s),
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get_text(self, url: str) -> str:
        ensure_network_allowed(policy=self.policy, operation="fetch")
        attempts = 0
        while True:
            attempts += 1
            try:
                response = await self._client.get(url)
            except httpx.TimeoutException as exc:
                if attempts >= self.policy.max_attempts:
                    raise NetworkError(
                        "Request timed out.",
                        hint="Raise --timeout or check registry availability.",
                        context={"url": url, "attempts": str(attempts)},
                    ) from exc
                reason = "timeout"
            except httpx.HTTPError as exc:
                if attempts >= self.policy.max_attempts:
                    raise NetworkError(
                        "Request failed.",
                        hint=str(exc) or type(exc).__name__,
                        context={"url": url, "attempts": str(attempts)},
                    ) from exc
                reason = type(exc).__name__
            else:
                if response.is_success:
                    return response.text
                if response.status_code not in RETRY_ON_STATUS or attempts >= self.policy.max_attempts:
                    raise NetworkError(
                        "Unexpected HTTP status.",
                        context={
                            "url": url,
                            "status": str(response.status_code),
                            "attempts": str(attempts),
                        },
                    )
                reason = f"HTTP {response.status_code}"

            delay = compute_delay(self.policy, attempts)
            logger.warning(
                "Retrying %s after %s (attempt %d/%d, sleeping %.2fs)",
                url,
                reason,
                attempts,
                self.policy.max_attempts,
                delay,
            )
            await asyncio.sleep(delay)


def compute_delay(policy: Policy, attempt: int) -> float:
    delay = min(policy.max_delay_s, policy.base_delay_s * (2 ** (attempt - 1)))
    if policy.jitter > 0:
        spread = delay * policy.jitter
        delay = max(0.0, delay + random.uniform(-spread, spread))
    return delay
