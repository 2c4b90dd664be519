#!/usr/bin/env python3
"""Tests for the configuration module."""

import logging
import os
from unittest.mock import patch

import pytest

from defender_relayer.config import POOL_ID, POOL_REGION, DefenderCredentials, RelayerConfig


class TestDefenderCredentials:
    """Tests for DefenderCredentials."""

    def test_valid_credentials(self):
        """Test creating valid credentials."""
        creds = DefenderCredentials(api_key="key", api_secret="secret")
        assert creds.api_key == "key"
        assert creds.api_secret == "secret"

    def test_missing_api_key(self):
        """Test that an empty API key raises an error."""
        with pytest.raises(ValueError, match="API key is required"):
            DefenderCredentials(api_key="", api_secret="secret")

    def test_missing_api_secret(self):
        """Test that an empty API secret raises an error."""
        with pytest.raises(ValueError, match="API secret is required"):
            DefenderCredentials(api_key="key", api_secret="")

    def test_repr_hides_secret(self):
        """Test that the secret does not appear in repr."""
        creds = DefenderCredentials(api_key="key", api_secret="very-secret")
        assert "very-secret" not in repr(creds)
        assert "key" in repr(creds)

    def test_immutable(self):
        """Test that credentials cannot be changed after construction."""
        creds = DefenderCredentials(api_key="key", api_secret="secret")
        with pytest.raises(AttributeError):
            creds.api_key = "other"


class TestRelayerConfig:
    """Tests for RelayerConfig."""

    def test_pool_region(self):
        """Test that the region is derived from the pool id."""
        assert POOL_ID.startswith(POOL_REGION)
        assert POOL_REGION == "us-west-2"

    def test_defaults(self):
        """Test default values."""
        config = RelayerConfig(credentials=DefenderCredentials("key", "secret"))
        assert config.rpc_url == "http://localhost:8545"
        assert config.request_timeout == 30

    def test_invalid_rpc_url_scheme(self):
        """Test that invalid RPC URL schemes are rejected."""
        with pytest.raises(ValueError, match="Invalid RPC URL scheme"):
            RelayerConfig(
                credentials=DefenderCredentials("key", "secret"),
                rpc_url="ftp://invalid.scheme"
            )

    @pytest.mark.parametrize("rpc_url", ["ws://localhost:8546", "wss://ethereum.publicnode.com"])
    def test_websocket_rpc_url_rejected(self, rpc_url):
        """Test that WebSocket URLs are rejected since the transport speaks HTTP."""
        with pytest.raises(ValueError, match="Expected http or https"):
            RelayerConfig(credentials=DefenderCredentials("key", "secret"), rpc_url=rpc_url)

    def test_https_rpc_url_accepted(self):
        """Test that HTTPS URLs are accepted."""
        config = RelayerConfig(
            credentials=DefenderCredentials("key", "secret"),
            rpc_url="https://ethereum.publicnode.com"
        )
        assert config.rpc_url == "https://ethereum.publicnode.com"

    @pytest.mark.parametrize("timeout", [0, -1, 121])
    def test_invalid_request_timeout(self, timeout):
        """Test that out-of-range timeouts are rejected."""
        with pytest.raises(ValueError, match="Request timeout"):
            RelayerConfig(credentials=DefenderCredentials("key", "secret"), request_timeout=timeout)

    def test_from_env(self):
        """Test loading configuration from environment variables."""
        env = {
            "API_KEY": "env-key",
            "API_SECRET": "env-secret",
            "RPC_URL": "https://sepolia.example.org",
            "REQUEST_TIMEOUT": "15",
        }
        with patch.dict(os.environ, env, clear=True):
            config = RelayerConfig.from_env()

        assert config.credentials == DefenderCredentials("env-key", "env-secret")
        assert config.rpc_url == "https://sepolia.example.org"
        assert config.request_timeout == 15

    def test_from_env_defaults(self):
        """Test that optional variables fall back to defaults."""
        with patch.dict(os.environ, {"API_KEY": "k", "API_SECRET": "s"}, clear=True):
            config = RelayerConfig.from_env()

        assert config.rpc_url == "http://localhost:8545"
        assert config.request_timeout == 30

    def test_from_env_missing_api_key(self):
        """Test that a missing API_KEY raises an error."""
        with patch.dict(os.environ, {"API_SECRET": "s"}, clear=True):
            with pytest.raises(ValueError, match="API_KEY environment variable is required"):
                RelayerConfig.from_env()

    def test_from_env_missing_api_secret(self):
        """Test that a missing API_SECRET raises an error."""
        with patch.dict(os.environ, {"API_KEY": "k"}, clear=True):
            with pytest.raises(ValueError, match="API_SECRET environment variable is required"):
                RelayerConfig.from_env()

    def test_log_config_masks_secret(self, caplog):
        """Test that logging the configuration never prints the secret."""
        config = RelayerConfig(credentials=DefenderCredentials("key", "very-secret"))

        with caplog.at_level(logging.INFO, logger="defender_relayer.config"):
            config.log_config()

        assert "very-secret" not in caplog.text
        assert "API Secret: [SET]" in caplog.text
