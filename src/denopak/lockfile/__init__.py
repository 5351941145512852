"""Deno lockfile parsing APIs."""

from .io import (
    FileLockfileReader,
    LockfileReader,
    parse_jsr_entry,
    parse_lockfile,
    parse_npm_entry,
    read_lockfile,
    split_specifier,
)
from .model import DenoLockfile, PackageIdentifier

__all__ = [
    "DenoLockfile",
    "FileLockfileReader",
    "LockfileReader",
    "PackageIdentifier",
    "parse_jsr_entry",
    "parse_lockfile",
    "parse_npm_entry",
    "read_lockfile",
    "split_specifier",
]
