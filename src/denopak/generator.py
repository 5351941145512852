"""Lockfile to flatpak-builder source manifest orchestration."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TypeVar

import httpx

from denopak.emit import OutputWriter, flatten_sources, serialize_sources
from denopak.fetch.http import HttpClient, HttpxClient
from denopak.lockfile import DenoLockfile, LockfileReader, PackageIdentifier, read_lockfile
from denopak.models import SourceDescriptor
from denopak.observability import StructuredLogger
from denopak.policy import Policy
from denopak.registry import JsrFetcher, NpmFetcher

T = TypeVar("T")


class SourceGenerator:
    """Expand every locked package into download sources.

    Each registry wave fans out one task per package and both waves run
    concurrently. The first failure cancels everything still in flight and
    is re-raised as-is. Results are rejoined in lockfile order, so the output
    never depends on response timing.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        policy: Policy | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        self.policy = policy or Policy()
        self.logger = logger or StructuredLogger()
        self.jsr = JsrFetcher(http, policy=self.policy, logger=self.logger)
        self.npm = NpmFetcher(http, policy=self.policy, logger=self.logger)

    async def generate(self, lockfile: DenoLockfile) -> list[SourceDescriptor]:
        jsr_groups, npm_groups = await join_in_order(
            [
                lambda: join_in_order(_bind(self.jsr.fetch, lockfile.jsr)),
                lambda: join_in_order(_bind(self.npm.fetch, lockfile.npm)),
            ]
        )
        sources = flatten_sources(jsr_groups, npm_groups)
        self.logger.log(
            operation="generate",
            registry=None,
            module=None,
            version=None,
            message=f"Generated {len(sources)} sources.",
            extra={"jsr_packages": len(lockfile.jsr), "npm_packages": len(lockfile.npm)},
        )
        return sources

    async def run(
        self,
        lock_path: str | Path,
        *,
        writer: OutputWriter,
        reader: LockfileReader | None = None,
    ) -> list[SourceDescriptor]:
        lockfile = read_lockfile(lock_path, reader=reader)
        sources = await self.generate(lockfile)
        writer.write(serialize_sources(sources))
        return sources


async def join_in_order(factories: Sequence[Callable[[], Awaitable[T]]]) -> list[T]:
    """Run all factories concurrently and return results in submission order."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_await(factory)) for factory in factories]
    except BaseExceptionGroup as exc:
        raise _first_error(exc) from None
    return [task.result() for task in tasks]


def generate_sources(
    lockfile: DenoLockfile,
    *,
    policy: Policy | None = None,
    logger: StructuredLogger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[SourceDescriptor]:
    """Synchronous wrapper that owns the HTTP client for one run."""

    async def _run() -> list[SourceDescriptor]:
        async with HttpxClient(policy, transport=transport) as http:
            generator = SourceGenerator(http, policy=policy, logger=logger)
            return await generator.generate(lockfile)

    return asyncio.run(_run())


def _bind(
    fetch: Callable[[PackageIdentifier], Awaitable[T]],
    packages: Sequence[PackageIdentifier],
) -> list[Callable[[], Awaitable[T]]]:
    return [lambda pkg=pkg: fetch(pkg) for pkg in packages]


async def _await(factory: Callable[[], Awaitable[T]]) -> T:
    return await factory()


def _first_error(exc: BaseException) -> BaseException:
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
