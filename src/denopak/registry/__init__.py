"""Registry-specific source expansion."""

from .jsr import JsrFetcher
from .npm import NpmFetcher
from .schema import (
    JsrVersionMeta,
    NpmPackument,
    NpmVersion,
    load_json,
    parse_jsr_version_meta,
    parse_npm_packument,
)

__all__ = [
    "JsrFetcher",
    "JsrVersionMeta",
    "NpmFetcher",
    "NpmPackument",
    "NpmVersion",
    "load_json",
    "parse_jsr_version_meta",
    "parse_npm_packument",
]
