"""Lockfile typed model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PackageIdentifier:
    module: str
    version: str
    name: str
    architecture: str | None = None


@dataclass(frozen=True, slots=True)
class DenoLockfile:
    version: str | None
    jsr: tuple[PackageIdentifier, ...] = field(default_factory=tuple)
    npm: tuple[PackageIdentifier, ...] = field(default_factory=tuple)
