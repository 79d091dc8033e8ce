from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_PORT = 4040
DEFAULT_ENDPOINT = f"127.0.0.1:{DEFAULT_PORT}"

ENV_ENDPOINT = "PYROQUERY_ENDPOINT"
ENV_TIMEOUT = "PYROQUERY_TIMEOUT"
ENV_SECURE = "PYROQUERY_SECURE"

_TRUTHY = {"1", "true", "yes", "on"}


def normalize_endpoint(endpoint: str) -> str:
    """Reduce ``endpoint`` to the ``host:port`` form grpc expects."""
    target = endpoint.strip()
    for scheme in ("grpc://", "http://", "https://"):
        if target.startswith(scheme):
            target = target[len(scheme) :]
    if "/" in target:
        target = target.split("/", 1)[0]
    if not target:
        return DEFAULT_ENDPOINT
    host = target.rsplit("]", 1)[-1] if target.startswith("[") else target
    if ":" not in host:
        target += f":{DEFAULT_PORT}"
    return target


@dataclass(slots=True)
class ClientConfig:
    """Connection settings for :class:`~pyroquery.client.QueryClient`."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None
    secure: bool = False
    channel_options: Tuple[Tuple[str, object], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.endpoint.strip().startswith("https://"):
            self.secure = True
        self.endpoint = normalize_endpoint(self.endpoint)
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        env = os.environ if environ is None else environ
        timeout_raw = env.get(ENV_TIMEOUT)
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as exc:
            raise ValueError(f"{ENV_TIMEOUT} must be a number, got {timeout_raw!r}") from exc
        return cls(
            endpoint=env.get(ENV_ENDPOINT, DEFAULT_ENDPOINT),
            timeout=timeout,
            secure=env.get(ENV_SECURE, "").strip().lower() in _TRUTHY,
        )


__all__ = [
    "ClientConfig",
    "DEFAULT_ENDPOINT",
    "DEFAULT_PORT",
    "ENV_ENDPOINT",
    "ENV_SECURE",
    "ENV_TIMEOUT",
    "normalize_endpoint",
]
