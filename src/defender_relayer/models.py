#!/usr/bin/env python3
"""Data models for the Defender relayer.

This module provides immutable data classes for the cached Defender access
tokens and for transactions in the shape the relay API expects.
"""

from dataclasses import dataclass
from typing import Any

from web3 import Web3
from web3.types import TxParams


@dataclass(frozen=True, slots=True)
class CachedToken:
    """Access token issued by the Defender identity provider.

    Attributes:
        access_token: Bearer token sent to the relay
        expiration_time: Absolute expiry as a Unix timestamp in seconds
    """

    access_token: str
    expiration_time: int

    def __repr__(self) -> str:
        return f"CachedToken(access_token=***, expiration_time={self.expiration_time})"

    def is_valid(self, now: float) -> bool:
        """Return True while ``now`` is strictly before the expiry."""
        return now < self.expiration_time


def _to_quantity(value: int | str) -> str:
    """Encode an integer quantity as a 0x-prefixed minimal hex string."""
    if isinstance(value, str):
        value = int(value, 16) if value.startswith(("0x", "0X")) else int(value)
    if value < 0:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return hex(value)


def _to_data(data: bytes | str) -> str:
    if isinstance(data, str):
        return Web3.to_hex(hexstr=data)
    return Web3.to_hex(data)


@dataclass(frozen=True, slots=True)
class RelayTransaction:
    """A transaction in the shape of the Defender relay API.

    Only the fields the relay needs are kept: signing, nonce and gas price
    are handled by the relay itself.

    Attributes:
        to: Destination address or ENS name
        value: Amount of wei to transfer
        gas_limit: Gas limit for the transaction
        data: Call data, as bytes or a hex string
    """

    to: str | None = None
    value: int | str | None = None
    gas_limit: int | str | None = None
    data: bytes | str | None = None

    @classmethod
    def from_tx_params(cls, tx: TxParams) -> "RelayTransaction":
        """Build a relay transaction from web3 transaction parameters."""
        return cls(
            to=tx.get("to"),
            value=tx.get("value"),
            gas_limit=tx.get("gas"),
            data=tx.get("data"),
        )

    def to_payload(self) -> dict[str, Any]:
        """Convert to the relay JSON body.

        Unset fields are omitted rather than sent as null.
        """
        payload: dict[str, Any] = {}
        if self.to is not None:
            payload["to"] = Web3.to_checksum_address(self.to) if Web3.is_address(self.to) else self.to
        if self.value is not None:
            payload["value"] = _to_quantity(self.value)
        if self.gas_limit is not None:
            payload["gasLimit"] = _to_quantity(self.gas_limit)
        if self.data is not None:
            payload["data"] = _to_data(self.data)
        return payload
