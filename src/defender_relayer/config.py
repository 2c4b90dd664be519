#!/usr/bin/env python3
"""Configuration management for the Defender relayer.

This module holds the fixed OpenZeppelin Defender endpoints and the
dataclasses used to configure a relayer. Configuration is loaded from
environment variables with sensible defaults where appropriate.
"""

import logging
import os
from dataclasses import dataclass, field
from urllib.parse import urlparse

# Get logger for this module
logger = logging.getLogger(__name__)

# Same for every Defender project, see https://docs.openzeppelin.com/defender/api-auth
RELAYER_URL: str = "https://api.defender.openzeppelin.com/txs"
CLIENT_ID: str = "1bpd19lcr33qvg5cr3oi79rdap"
POOL_ID: str = "us-west-2_iLmIggsiy"
POOL_REGION: str = POOL_ID.split("_")[0]


@dataclass(frozen=True, slots=True)
class DefenderCredentials:
    """API key and secret issued by the Defender dashboard.

    Attributes:
        api_key: Relayer API key, also used as the Cognito username
        api_secret: Relayer API secret, used as the Cognito password
    """

    api_key: str
    api_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        """Validate credentials."""
        if not self.api_key:
            raise ValueError("Defender API key is required (API_KEY)")
        if not self.api_secret:
            raise ValueError("Defender API secret is required (API_SECRET)")


@dataclass(frozen=True, slots=True)
class RelayerConfig:
    """Main configuration for the Defender relayer.

    Attributes:
        credentials: Defender API credentials
        rpc_url: HTTP(S) RPC endpoint used by the inner transport for everything
            except transaction submission
        request_timeout: HTTP timeout in seconds for relay requests
    """

    credentials: DefenderCredentials
    rpc_url: str = "http://localhost:8545"
    request_timeout: int = 30

    def __post_init__(self) -> None:
        """Validate relayer configuration."""
        parsed = urlparse(self.rpc_url)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(
                f"Invalid RPC URL scheme: {parsed.scheme}. "
                "Expected http or https"
            )

        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.request_timeout > 120:
            raise ValueError(f"Request timeout too long (max 120s), got {self.request_timeout}")

    @classmethod
    def from_env(cls) -> "RelayerConfig":
        """Load configuration from environment variables.

        Returns:
            RelayerConfig instance with loaded values

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        api_key = os.environ.get("API_KEY", "")
        if not api_key:
            raise ValueError(
                "API_KEY environment variable is required. "
                "It is obtained from the Defender dashboard."
            )

        api_secret = os.environ.get("API_SECRET", "")
        if not api_secret:
            raise ValueError(
                "API_SECRET environment variable is required. "
                "It is obtained from the Defender dashboard."
            )

        rpc_url = os.environ.get("RPC_URL", "http://localhost:8545")
        request_timeout = int(os.environ.get("REQUEST_TIMEOUT", "30"))

        return cls(
            credentials=DefenderCredentials(api_key=api_key, api_secret=api_secret),
            rpc_url=rpc_url,
            request_timeout=request_timeout
        )

    def log_config(self) -> None:
        """Log the configuration (hiding sensitive data)."""
        logger.info("=" * 60)
        logger.info("Defender Relayer Configuration")
        logger.info("=" * 60)
        logger.info(f"  Relayer URL: {RELAYER_URL}")
        logger.info(f"  API Key: {self.credentials.api_key}")
        logger.info("  API Secret: [SET]")
        logger.info(f"  RPC URL: {self.rpc_url}")
        logger.info(f"  Request Timeout: {self.request_timeout} seconds")
        logger.info("=" * 60)
