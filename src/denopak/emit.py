"""Flatten per-package sources and serialize the flatpak-builder manifest."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from denopak.models import SourceDescriptor

DEFAULT_OUTPUT = "deno-sources.json"


class OutputWriter(Protocol):
    def write(self, text: str) -> None: ...


class FileOutputWriter:
    def __init__(self, path: str | Path = DEFAULT_OUTPUT) -> None:
        self.path = Path(path)

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


def flatten_sources(
    jsr_groups: Iterable[Sequence[SourceDescriptor]],
    npm_groups: Iterable[Sequence[SourceDescriptor]],
) -> list[SourceDescriptor]:
    """JSR groups first, then npm groups, each kept in lockfile order."""
    flat: list[SourceDescriptor] = []
    for group in (*jsr_groups, *npm_groups):
        flat.extend(group)
    return flat


def serialize_sources(sources: Iterable[SourceDescriptor]) -> str:
    payload = [source.to_dict() for source in sources]
    return json.dumps(payload, indent=2, ensure_ascii=False)
