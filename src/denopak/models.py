"""Typed source descriptors for the flatpak-builder manifest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ArchiveType = Literal["tar-gzip"]


@dataclass(frozen=True, slots=True)
class Checksum:
    """One upstream-declared digest, e.g. ``sha512`` plus its hex value."""

    algorithm: str
    value: str


@dataclass(frozen=True, slots=True)
class FileSource:
    url: str
    checksum: Checksum
    dest: str
    dest_filename: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "file",
            "url": self.url,
            self.checksum.algorithm: self.checksum.value,
            "dest": self.dest,
            "dest-filename": self.dest_filename,
        }


@dataclass(frozen=True, slots=True)
class ArchiveSource:
    url: str
    checksum: Checksum
    dest: str
    only_arches: tuple[str, ...] = ()
    archive_type: ArchiveType = "tar-gzip"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "archive",
            "archive-type": self.archive_type,
            "url": self.url,
            self.checksum.algorithm: self.checksum.value,
            "dest": self.dest,
        }
        if self.only_arches:
            payload["only-arches"] = list(self.only_arches)
        return payload


SourceDescriptor = FileSource | ArchiveSource


__all__ = [
    "ArchiveSource",
    "ArchiveType",
    "Checksum",
    "FileSource",
    "SourceDescriptor",
]
