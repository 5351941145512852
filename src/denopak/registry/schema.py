"""Typed views of the registry documents the fetchers consume."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from denopak.errors import DecodeError, SchemaError


@dataclass(frozen=True, slots=True)
class JsrVersionMeta:
    """``{version}_meta.json``: reachable module paths and their checksums."""

    module_graph: tuple[str, ...]
    manifest: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class NpmVersion:
    version: str
    integrity: str


@dataclass(frozen=True, slots=True)
class NpmPackument:
    name: str
    versions: Mapping[str, Any]

    def version(self, version: str) -> NpmVersion:
        """Resolve one version record, failing loudly when any field is missing."""
        record = self.versions.get(version)
        if record is None:
            raise SchemaError(
                "Package version is missing from registry metadata.",
                hint="Check that the lockfile matches the registry contents.",
                context={"package": self.name, "field": f"versions.{version}"},
            )
        field = f"versions.{version}"
        dist = _required_dict(_as_dict(record, field), "dist", field, self.name)
        integrity = _required_str(dist, "integrity", f"{field}.dist", self.name)
        return NpmVersion(version=version, integrity=integrity)


def load_json(text: str, *, url: str) -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            "Registry response is not valid JSON.",
            hint=str(exc),
            context={"url": url},
        ) from exc
    if not isinstance(payload, dict):
        raise SchemaError("Registry response is not a JSON object.", context={"url": url})
    return payload


def parse_jsr_version_meta(payload: dict[str, Any], *, module: str) -> JsrVersionMeta:
    graph = _required_dict(payload, "moduleGraph2", "", module)
    manifest_raw = _required_dict(payload, "manifest", "", module)
    manifest: dict[str, str] = {}
    for path in graph:
        entry = manifest_raw.get(path)
        if entry is None:
            continue
        field = f"manifest.{path}"
        manifest[path] = _required_str(_as_dict(entry, field), "checksum", field, module)
    return JsrVersionMeta(module_graph=tuple(graph), manifest=manifest)


def parse_npm_packument(payload: dict[str, Any], *, module: str) -> NpmPackument:
    versions = _required_dict(payload, "versions", "", module)
    return NpmPackument(name=module, versions=versions)


def _as_dict(value: Any, field: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError("Registry field is not an object.", context={"field": field})
    return value


def _required_dict(payload: dict[str, Any], key: str, parent: str, package: str) -> dict[str, Any]:
    value = payload.get(key)
    if not isinstance(value, dict):
        raise SchemaError(
            f"Registry metadata has no valid `{key}` object.",
            context={"package": package, "field": _join(parent, key)},
        )
    return value


def _required_str(payload: dict[str, Any], key: str, parent: str, package: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise SchemaError(
            f"Registry metadata has no valid `{key}` value.",
            context={"package": package, "field": _join(parent, key)},
        )
    return value


def _join(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key
