"""
Verifier configuration.

Configuration is an explicit value handed to ``EpidVerifier`` at
construction. ``from_env()`` is a convenience for processes that keep
settings in the environment; nothing reads the environment during
``verify``.

Environment variables:
    EPID_ONLINE_URL: Base URL of the verification service.
    EPID_TIMEOUT_S: Request timeout in seconds.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from epid_verifier.constants import DEFAULT_EPID_ONLINE_URL

DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class VerifierConfig:
    """Settings for reaching the verification service.

    Attributes:
        base_url: Service base URL. Endpoint paths are resolved against
            it as absolute paths, so any path on the base is replaced.
        timeout_s: Request timeout in seconds, used by HttpxTransport.
        headers: Additional HTTP headers for every request.
    """

    base_url: str = DEFAULT_EPID_ONLINE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must be non-empty")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got: {self.timeout_s}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> VerifierConfig:
        env = os.environ if environ is None else environ
        timeout = env.get("EPID_TIMEOUT_S")
        return cls(
            base_url=env.get("EPID_ONLINE_URL") or DEFAULT_EPID_ONLINE_URL,
            timeout_s=float(timeout) if timeout else DEFAULT_TIMEOUT_S,
        )
