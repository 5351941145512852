"""Deno lockfile parser."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from denopak.errors import InputError
from denopak.lockfile.model import DenoLockfile, PackageIdentifier

CPU_ARCHES = {
    "x64": "x86_64",
    "arm64": "aarch64",
}


class LockfileReader(Protocol):
    def read(self, path: str | Path) -> str: ...


class FileLockfileReader:
    def read(self, path: str | Path) -> str:
        lock_path = Path(path)
        try:
            return lock_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise InputError(
                "Lockfile does not exist.",
                hint="Pass the path of a deno.lock file.",
                context={"path": str(lock_path)},
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(
                "Lockfile could not be read.",
                hint=str(exc),
                context={"path": str(lock_path)},
            ) from exc


def read_lockfile(path: str | Path, *, reader: LockfileReader | None = None) -> DenoLockfile:
    return parse_lockfile((reader or FileLockfileReader()).read(path))


def parse_lockfile(raw: str) -> DenoLockfile:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputError("Invalid lockfile JSON.", hint=str(exc)) from exc

    if not isinstance(payload, dict):
        raise InputError("Invalid lockfile payload type.")

    version = payload.get("version")
    sections = _sections(payload)
    jsr = _optional_mapping(sections, "jsr")
    npm = _optional_mapping(sections, "npm")
    return DenoLockfile(
        version=str(version) if version is not None else None,
        jsr=tuple(parse_jsr_entry(key) for key in jsr),
        npm=tuple(
            identifier
            for key, value in npm.items()
            if (identifier := parse_npm_entry(key, value)) is not None
        ),
    )


def parse_jsr_entry(specifier: str) -> PackageIdentifier:
    module, version = split_specifier(specifier)
    _, sep, name = module.partition("/")
    return PackageIdentifier(module=module, version=version, name=name if sep else module)


def parse_npm_entry(specifier: str, value: Any) -> PackageIdentifier | None:
    """Build an npm identifier, or ``None`` when the package is not for Linux."""
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        raise InputError(
            "Invalid lockfile npm entry.",
            context={"specifier": specifier},
        )
    os_list = _optional_str_list(value, "os", specifier)
    if os_list is not None and (not os_list or os_list[0] != "linux"):
        return None

    module, version = split_specifier(specifier)
    _, sep, name = module.partition("/")
    cpu_list = _optional_str_list(value, "cpu", specifier)
    architecture = None
    if cpu_list:
        architecture = CPU_ARCHES.get(cpu_list[0], cpu_list[0])
    return PackageIdentifier(
        module=module,
        version=version,
        name=name if sep else module,
        architecture=architecture,
    )


def split_specifier(specifier: str) -> tuple[str, str]:
    """Split ``<module>@<version>``, dropping any ``_peer@x`` suffix Deno appends."""
    index = specifier.find("@", 1)
    if index == -1 or index == len(specifier) - 1:
        raise InputError(
            "Lockfile specifier has no version.",
            hint="Expected `<module>@<version>`.",
            context={"specifier": specifier},
        )
    module = specifier[:index]
    version = specifier[index + 1 :].split("_", 1)[0]
    return module, version


def _sections(payload: dict[str, Any]) -> dict[str, Any]:
    # v3 lockfiles nest both registries under `packages`.
    if "jsr" not in payload and "npm" not in payload:
        packages = payload.get("packages")
        if isinstance(packages, dict):
            return packages
    return payload


def _optional_mapping(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InputError(f"Invalid lockfile `{key}` value.")
    return value


def _optional_str_list(value: Mapping[str, Any], key: str, specifier: str) -> list[str] | None:
    items = value.get(key)
    if items is None:
        return None
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise InputError(
            f"Invalid lockfile npm `{key}` value.",
            context={"specifier": specifier},
        )
    return items
