#!/usr/bin/env python3
"""Blockchain transport abstraction.

A ``Transport`` is the set of chain operations the relayer needs. The
``Web3Transport`` implementation talks to a node through ``AsyncWeb3``;
``DefenderRelayerTransport`` in ``relayer.py`` decorates any transport and
only replaces transaction submission.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.types import TxParams, TxReceipt, Wei

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Chain operations used by callers of the relayer."""

    async def send_transaction(self, tx: TxParams) -> "PendingTransaction": ...

    async def get_transaction_receipt(self, tx_hash: HexBytes) -> TxReceipt: ...

    async def wait_for_transaction_receipt(
        self, tx_hash: HexBytes, timeout: float = 120, poll_latency: float = 0.1
    ) -> TxReceipt: ...

    async def get_chain_id(self) -> int: ...

    async def get_balance(self, address: str) -> Wei: ...

    async def get_transaction_count(self, address: str) -> int: ...

    async def estimate_gas(self, tx: TxParams) -> int: ...

    async def get_gas_price(self) -> Wei: ...


@dataclass(frozen=True, slots=True)
class PendingTransaction:
    """A submitted transaction whose outcome is not known yet.

    When the transaction went through Defender, ``tx_hash`` is a
    placeholder built from the relay transaction id, not an on-chain hash.
    Waiting on it only succeeds if the relay and the transport end up
    reconciling the two, which is outside this package's control.

    Attributes:
        tx_hash: Transaction hash (or relay placeholder) as 32 bytes
        transport: Transport used to poll for the receipt
    """

    tx_hash: HexBytes
    transport: Transport

    def __str__(self) -> str:
        return f"PendingTransaction(hash={self.tx_hash.to_0x_hex()})"

    async def wait(self, timeout: float = 120, poll_latency: float = 0.1) -> TxReceipt:
        """Poll the transport until the receipt is available."""
        return await self.transport.wait_for_transaction_receipt(
            self.tx_hash, timeout=timeout, poll_latency=poll_latency
        )


class Web3Transport:
    """Transport backed by a JSON-RPC node through ``AsyncWeb3``."""

    def __init__(self, rpc_url: str = "", request_timeout: int = 30, w3: AsyncWeb3 | None = None) -> None:
        """
        Initialize the transport.

        Args:
            rpc_url: HTTP(S) RPC endpoint, ignored when ``w3`` is given
            request_timeout: RPC request timeout in seconds
            w3: Existing AsyncWeb3 instance to reuse
        """
        if w3 is None:
            if not rpc_url:
                raise ValueError("RPC URL is required")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
                rpc_url,
                request_kwargs={'timeout': request_timeout}
            ))
            logger.debug(f"Web3Transport connected to {rpc_url}")
        self.w3: AsyncWeb3 = w3

    async def send_transaction(self, tx: TxParams) -> PendingTransaction:
        tx_hash = await self.w3.eth.send_transaction(tx)
        return PendingTransaction(tx_hash=HexBytes(tx_hash), transport=self)

    async def get_transaction_receipt(self, tx_hash: HexBytes) -> TxReceipt:
        return await self.w3.eth.get_transaction_receipt(tx_hash)

    async def wait_for_transaction_receipt(
        self, tx_hash: HexBytes, timeout: float = 120, poll_latency: float = 0.1
    ) -> TxReceipt:
        return await self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_latency
        )

    async def get_chain_id(self) -> int:
        return await self.w3.eth.chain_id

    async def get_balance(self, address: str) -> Wei:
        return await self.w3.eth.get_balance(AsyncWeb3.to_checksum_address(address))

    async def get_transaction_count(self, address: str) -> int:
        return await self.w3.eth.get_transaction_count(AsyncWeb3.to_checksum_address(address))

    async def estimate_gas(self, tx: TxParams) -> int:
        return await self.w3.eth.estimate_gas(tx)

    async def get_gas_price(self) -> Wei:
        return await self.w3.eth.gas_price
