"""Unit tests for client configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from a2a_client.config import ClientConfig


class TestClientConfig:
    """Tests for ClientConfig model."""

    def test_defaults(self) -> None:
        """Test defaults impose no timeout and verify TLS."""
        config = ClientConfig(url="https://agent.example.com")

        assert config.timeout is None
        assert config.verify_ssl is True
        assert config.follow_redirects is True
        assert config.headers == {}

    def test_url_trailing_slash_stripped(self) -> None:
        """Test trailing slashes are removed from the URL."""
        config = ClientConfig(url="https://agent.example.com/a2a/")

        assert config.url == "https://agent.example.com/a2a"

    @pytest.mark.parametrize("url", ["agent.example.com", "ftp://agent.example.com", ""])
    def test_url_requires_http_scheme(self, url: str) -> None:
        """Test URLs without an http(s) scheme are rejected."""
        with pytest.raises(ValidationError, match="URL must start with"):
            ClientConfig(url=url)

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValidationError):
            ClientConfig(url="https://agent.example.com", timeout=timeout)

    def test_custom_values(self) -> None:
        """Test explicit settings are kept."""
        config = ClientConfig(
            url="http://localhost:8000",
            timeout=12.5,
            verify_ssl=False,
            headers={"X-Tenant": "acme"},
        )

        assert config.timeout == 12.5
        assert config.verify_ssl is False
        assert config.headers == {"X-Tenant": "acme"}
