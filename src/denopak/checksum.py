"""Checksum encoding helpers shared by the registry fetchers."""

from __future__ import annotations

import base64
import binascii
import hashlib

from denopak.errors import DecodeError, SchemaError
from denopak.models import Checksum


def digest_hex(payload: bytes | str) -> str:
    """Return the lowercase SHA-256 hex digest of ``payload``."""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def split_algorithm_and_value(encoded: str) -> tuple[str] | tuple[str, str]:
    """Split ``<algo>-<value>`` on the first dash.

    A string without a dash comes back as a one-element tuple.
    """
    algorithm, sep, value = encoded.partition("-")
    if not sep:
        return (encoded,)
    return (algorithm, value)


def base64_digest_to_hex(value: str) -> str:
    """Re-encode a base64 digest as lowercase hex without re-hashing."""
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(
            "Invalid base64 digest.",
            hint=str(exc),
            context={"value": value},
        ) from exc
    return raw.hex()


def parse_checksum(encoded: str, *, field: str = "checksum") -> Checksum:
    parts = split_algorithm_and_value(encoded)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise SchemaError(
            "Checksum is not of the form `<algorithm>-<value>`.",
            context={"field": field, "value": encoded},
        )
    algorithm, value = parts
    return Checksum(algorithm=algorithm, value=value)


__all__ = [
    "base64_digest_to_hex",
    "digest_hex",
    "parse_checksum",
    "split_algorithm_and_value",
]
