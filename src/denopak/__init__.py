"""Public package entrypoint for the Deno lockfile to flatpak sources generator."""

from .errors import (
    DecodeError,
    DenopakError,
    InputError,
    NetworkError,
    PolicyError,
    SchemaError,
)
from .generator import SourceGenerator, generate_sources
from .lockfile import DenoLockfile, PackageIdentifier, parse_lockfile, read_lockfile
from .models import ArchiveSource, Checksum, FileSource, SourceDescriptor
from .observability import StructuredLogger
from .policy import Policy

__all__ = [
    "ArchiveSource",
    "Checksum",
    "DecodeError",
    "DenoLockfile",
    "DenopakError",
    "FileSource",
    "InputError",
    "NetworkError",
    "PackageIdentifier",
    "Policy",
    "PolicyError",
    "SchemaError",
    "SourceDescriptor",
    "SourceGenerator",
    "StructuredLogger",
    "generate_sources",
    "parse_lockfile",
    "read_lockfile",
]
