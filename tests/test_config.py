"""
Tests for VerifierConfig.

Test plan:
- Defaults: sandbox URL, 30s timeout, no headers
- from_env reads EPID_ONLINE_URL / EPID_TIMEOUT_S, falls back on empty
- Validation: empty base_url and non-positive timeout rejected
- EpidVerifier builds its default transport from config
"""

import pytest

from epid_verifier.config import DEFAULT_TIMEOUT_S, VerifierConfig
from epid_verifier.constants import DEFAULT_EPID_ONLINE_URL
from epid_verifier.transport import HttpxTransport
from epid_verifier.verifier import EpidVerifier


class TestDefaults:
    def test_defaults(self) -> None:
        config = VerifierConfig()
        assert config.base_url == DEFAULT_EPID_ONLINE_URL
        assert config.timeout_s == DEFAULT_TIMEOUT_S
        assert dict(config.headers) == {}


class TestFromEnv:
    def test_reads_values(self) -> None:
        config = VerifierConfig.from_env(
            {"EPID_ONLINE_URL": "https://epid.example.com/", "EPID_TIMEOUT_S": "5"}
        )
        assert config.base_url == "https://epid.example.com/"
        assert config.timeout_s == 5.0

    def test_empty_env_uses_defaults(self) -> None:
        config = VerifierConfig.from_env({"EPID_ONLINE_URL": "", "EPID_TIMEOUT_S": ""})
        assert config == VerifierConfig()

    def test_process_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EPID_ONLINE_URL", "https://env.example.com/")
        monkeypatch.delenv("EPID_TIMEOUT_S", raising=False)
        assert VerifierConfig.from_env().base_url == "https://env.example.com/"


class TestValidation:
    def test_empty_base_url(self) -> None:
        with pytest.raises(ValueError, match="base_url"):
            VerifierConfig(base_url="")

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_bad_timeout(self, timeout: float) -> None:
        with pytest.raises(ValueError, match="timeout_s"):
            VerifierConfig(timeout_s=timeout)


class TestVerifierDefaultTransport:
    def test_uses_config_timeout(self) -> None:
        verifier = EpidVerifier(VerifierConfig(timeout_s=7.0))
        assert isinstance(verifier._transport, HttpxTransport)
        assert verifier._transport.timeout_s == 7.0
