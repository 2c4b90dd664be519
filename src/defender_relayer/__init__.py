"""
Defender Relayer package.

Submits blockchain transactions through OpenZeppelin Defender Relay.
"""

from .config import DefenderCredentials, RelayerConfig
from .errors import AuthenticationError, RelayerError, TransportError, UnknownResponseError
from .models import CachedToken, RelayTransaction
from .relayer import DefenderRelayerTransport, hash_to_relay_id, relay_id_to_hash
from .token_cache import DefenderAuthenticator, TokenCache
from .transport import PendingTransaction, Transport, Web3Transport

__all__ = [
    "AuthenticationError",
    "CachedToken",
    "DefenderAuthenticator",
    "DefenderCredentials",
    "DefenderRelayerTransport",
    "PendingTransaction",
    "RelayTransaction",
    "RelayerConfig",
    "RelayerError",
    "TokenCache",
    "Transport",
    "TransportError",
    "UnknownResponseError",
    "Web3Transport",
    "hash_to_relay_id",
    "relay_id_to_hash",
]
__version__ = "0.1.0"
