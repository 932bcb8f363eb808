"""Tests for fetchchain.config — DispatcherConfig frozen dataclass."""

import pytest

from fetchchain.config import DispatcherConfig
from fetchchain.errors import ConfigurationError


class TestDispatcherConfig:
    def test_defaults(self) -> None:
        cfg = DispatcherConfig()

        assert cfg.base_url == ""
        assert cfg.default_method == "GET"
        assert cfg.default_headers == ()
        assert cfg.timeout == 30.0
        assert cfg.follow_redirects is False

    def test_override(self) -> None:
        cfg = DispatcherConfig(
            base_url="https://api.example.com",
            default_method="POST",
            default_headers=(("Accept", "application/json"),),
            timeout=5.0,
            follow_redirects=True,
        )

        assert cfg.base_url == "https://api.example.com"
        assert cfg.default_method == "POST"
        assert cfg.default_headers == (("Accept", "application/json"),)
        assert cfg.timeout == 5.0
        assert cfg.follow_redirects is True

    def test_frozen(self) -> None:
        cfg = DispatcherConfig()

        with pytest.raises(AttributeError):
            cfg.timeout = 1.0  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("timeout", [0, 0.0, -1.0])
    def test_non_positive_timeout(self, timeout: float) -> None:
        with pytest.raises(ConfigurationError, match="timeout must be positive"):
            DispatcherConfig(timeout=timeout)

    def test_empty_default_method(self) -> None:
        with pytest.raises(ConfigurationError, match="default_method"):
            DispatcherConfig(default_method="")
