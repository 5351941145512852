"""Policy configuration and enforcement helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from denopak.errors import InputError, PolicyError

NetworkMode = Literal["online", "offline"]

DEFAULT_JSR_URL = "https://jsr.io"
DEFAULT_NPM_URL = "https://registry.npmjs.org"


@dataclass(frozen=True, slots=True)
class Policy:
    jsr_url: str = DEFAULT_JSR_URL
    npm_url: str = DEFAULT_NPM_URL
    vendor_dir: str = "vendor"
    deno_dir: str = "deno_dir"
    network_mode: NetworkMode = "online"
    timeout_s: float = 30.0
    max_attempts: int = 3
    base_delay_s: float = 0.25
    max_delay_s: float = 5.0
    jitter: float = 0.15

    def __post_init__(self) -> None:
        object.__setattr__(self, "jsr_url", self.jsr_url.rstrip("/"))
        object.__setattr__(self, "npm_url", self.npm_url.rstrip("/"))
        registry_host(self.jsr_url)
        registry_host(self.npm_url)
        if self.max_attempts < 1:
            raise InputError("Policy max_attempts must be at least 1.")
        if self.timeout_s <= 0:
            raise InputError("Policy timeout_s must be positive.")
        if self.max_delay_s < self.base_delay_s:
            raise InputError("Policy max_delay_s must be >= base_delay_s.")

    @property
    def jsr_host(self) -> str:
        return registry_host(self.jsr_url)

    @property
    def npm_host(self) -> str:
        return registry_host(self.npm_url)


def registry_host(url: str) -> str:
    host = urlsplit(url).netloc
    if not host:
        raise InputError(
            "Registry URL has no host.",
            hint="Use an absolute URL such as https://jsr.io.",
            context={"url": url},
        )
    return host


def ensure_network_allowed(*, policy: Policy, operation: str) -> None:
    if policy.network_mode == "offline":
        raise PolicyError(
            "Network operations are disabled by policy.",
            hint="Switch policy.network_mode to 'online' for this operation.",
            context={"operation": operation},
        )
