"""Command-line entry point: ``denopak <deno.lock>``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from denopak.emit import DEFAULT_OUTPUT, FileOutputWriter
from denopak.errors import DenopakError
from denopak.fetch.http import HttpxClient
from denopak.generator import SourceGenerator
from denopak.lockfile import FileLockfileReader
from denopak.observability import StructuredLogger
from denopak.policy import DEFAULT_JSR_URL, DEFAULT_NPM_URL, Policy

logger = logging.getLogger("denopak")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="denopak",
        description="Generate flatpak-builder sources from a Deno lockfile.",
    )
    parser.add_argument("lockfile", nargs="?", help="Path to deno.lock")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="Output manifest path")
    parser.add_argument("--jsr-registry", default=DEFAULT_JSR_URL, help="JSR registry base URL")
    parser.add_argument("--npm-registry", default=DEFAULT_NPM_URL, help="npm registry base URL")
    parser.add_argument("--timeout", type=float, default=30.0, help="Per-request timeout in seconds")
    parser.add_argument("--retries", type=int, default=3, help="Attempts per request")
    parser.add_argument("--log-json", type=Path, help="Write the structured fetch log as JSON lines")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def _run(args: argparse.Namespace, policy: Policy, structured: StructuredLogger) -> int:
    async with HttpxClient(policy) as http:
        generator = SourceGenerator(http, policy=policy, logger=structured)
        sources = await generator.run(
            args.lockfile,
            reader=FileLockfileReader(),
            writer=FileOutputWriter(args.output),
        )
    logger.info("Wrote %d sources to %s", len(sources), args.output)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.lockfile:
        print("No argument provided", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    structured = StructuredLogger(sink=logger if args.verbose else None)
    try:
        policy = Policy(
            jsr_url=args.jsr_registry,
            npm_url=args.npm_registry,
            timeout_s=args.timeout,
            max_attempts=args.retries,
        )
        return asyncio.run(_run(args, policy, structured))
    except DenopakError as exc:
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return 1
    finally:
        if args.log_json is not None:
            structured.to_json_lines(args.log_json)


if __name__ == "__main__":
    raise SystemExit(main())
