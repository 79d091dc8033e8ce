from __future__ import annotations

import pytest

from pyroquery.core.config import (
    DEFAULT_ENDPOINT,
    ENV_ENDPOINT,
    ENV_SECURE,
    ENV_TIMEOUT,
    ClientConfig,
    normalize_endpoint,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("localhost:4040", "localhost:4040"),
        ("localhost", "localhost:4040"),
        ("grpc://pyroscope:9095", "pyroscope:9095"),
        ("http://pyroscope:4040/querier", "pyroscope:4040"),
        ("https://profiles.example.com", "profiles.example.com:4040"),
        ("[::1]:5000", "[::1]:5000"),
        ("[::1]", "[::1]:4040"),
        ("", DEFAULT_ENDPOINT),
    ],
)
def test_normalize_endpoint(raw: str, expected: str) -> None:
    assert normalize_endpoint(raw) == expected


def test_https_endpoint_implies_secure() -> None:
    config = ClientConfig(endpoint="https://profiles.example.com:443")
    assert config.secure is True
    assert config.endpoint == "profiles.example.com:443"


def test_non_positive_timeout_rejected() -> None:
    with pytest.raises(ValueError):
        ClientConfig(timeout=0)


def test_from_env_defaults() -> None:
    config = ClientConfig.from_env({})
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.timeout is None
    assert config.secure is False


def test_from_env_reads_values() -> None:
    config = ClientConfig.from_env(
        {ENV_ENDPOINT: "querier:9095", ENV_TIMEOUT: "2.5", ENV_SECURE: "true"}
    )
    assert config.endpoint == "querier:9095"
    assert config.timeout == 2.5
    assert config.secure is True


def test_from_env_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_ENDPOINT, "envhost")
    monkeypatch.delenv(ENV_TIMEOUT, raising=False)
    monkeypatch.delenv(ENV_SECURE, raising=False)
    assert ClientConfig.from_env().endpoint == "envhost:4040"


def test_from_env_rejects_bad_timeout() -> None:
    with pytest.raises(ValueError, match=ENV_TIMEOUT):
        ClientConfig.from_env({ENV_TIMEOUT: "soon"})
