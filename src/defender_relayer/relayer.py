#!/usr/bin/env python3
"""Transaction submission through OpenZeppelin Defender Relay.

``DefenderRelayerTransport`` wraps another ``Transport``. Transactions are
posted to the Defender relay, which signs and broadcasts them itself;
every other chain operation goes to the wrapped transport unchanged.
"""

import json
import logging
import string
import uuid
from typing import Any

import httpx
from hexbytes import HexBytes
from web3.types import TxParams, TxReceipt, Wei

from .config import RELAYER_URL, DefenderCredentials, RelayerConfig
from .errors import AuthenticationError, TransportError, UnknownResponseError
from .models import RelayTransaction
from .token_cache import DefenderAuthenticator
from .transport import PendingTransaction, Transport

logger = logging.getLogger(__name__)


def relay_id_to_hash(transaction_id: str) -> HexBytes:
    """
    Turn a relay transaction id into a 32-byte hash placeholder.

    Hyphens are stripped and the hex digits are left-padded with zeros to
    64 characters. The result is not an on-chain transaction hash.

    Args:
        transaction_id: UUID assigned by the relay

    Returns:
        32-byte value embedding the id

    Raises:
        UnknownResponseError: If the id is not hex or is too long
    """
    digits = transaction_id.replace("-", "")
    if len(digits) > 64:
        raise UnknownResponseError(f"Relay transaction id too long: {transaction_id}")
    if not digits or not all(c in string.hexdigits for c in digits):
        raise UnknownResponseError(f"Relay transaction id is not hex: {transaction_id}")
    return HexBytes(bytes.fromhex(digits.rjust(64, "0")))


def hash_to_relay_id(tx_hash: HexBytes) -> str:
    """Recover the relay UUID embedded in a hash built by ``relay_id_to_hash``."""
    return str(uuid.UUID(bytes=bytes(tx_hash)[-16:]))


class DefenderRelayerTransport:
    """Transport that submits transactions through Defender Relay."""

    def __init__(
        self,
        inner: Transport,
        credentials: DefenderCredentials,
        authenticator: DefenderAuthenticator | None = None,
        relayer_url: str = RELAYER_URL,
        request_timeout: float = 30.0
    ) -> None:
        """
        Initialize the relayer transport.

        Args:
            inner: Transport used for every operation except submission
            credentials: Defender API key and secret
            authenticator: Authenticator to share a token cache with other
                relayers; a private one is created when omitted
            relayer_url: Relay transaction endpoint
            request_timeout: Timeout in seconds for the relay request
        """
        self.inner: Transport = inner
        self.credentials: DefenderCredentials = credentials
        self.authenticator: DefenderAuthenticator = (
            authenticator if authenticator is not None else DefenderAuthenticator()
        )
        self.relayer_url: str = relayer_url
        self.request_timeout: float = request_timeout

    @classmethod
    def from_config(
        cls,
        inner: Transport,
        config: RelayerConfig,
        authenticator: DefenderAuthenticator | None = None
    ) -> "DefenderRelayerTransport":
        """Create a relayer transport from a ``RelayerConfig``."""
        return cls(
            inner=inner,
            credentials=config.credentials,
            authenticator=authenticator,
            request_timeout=config.request_timeout
        )

    async def send_transaction(self, tx: TxParams) -> PendingTransaction:
        """
        Submit a transaction to Defender Relay.

        Args:
            tx: Transaction parameters; only to, value, gas and data are sent

        Returns:
            Pending transaction keyed by the relay id placeholder hash

        Raises:
            ValueError: If a quantity in ``tx`` is negative or not a number
            AuthenticationError: If authentication fails, the request cannot
                be sent or the relay answers with a non-200 status
            UnknownResponseError: If a 200 answer lacks a string transactionId
        """
        payload = RelayTransaction.from_tx_params(tx).to_payload()
        token = await self.authenticator.get_valid_token(self.credentials)

        headers = {
            "X-Api-Key": self.credentials.api_key,
            "Authorization": f"Bearer {token}",
        }

        logger.debug(f"Posting to {self.relayer_url}: {json.dumps(payload)}")
        try:
            async with httpx.AsyncClient() as client:
                response: httpx.Response = await client.post(
                    self.relayer_url,
                    json=payload,
                    headers=headers,
                    timeout=self.request_timeout
                )
        except httpx.HTTPError as e:
            logger.error(f"Relay request failed: {type(e).__name__}")
            raise AuthenticationError() from None

        if response.status_code != httpx.codes.OK:
            logger.error(f"Relay rejected transaction with status {response.status_code}")
            raise AuthenticationError(status_code=response.status_code)

        transaction_id = self._parse_transaction_id(response)
        logger.info(f"Transaction accepted by relay with id {transaction_id}")
        return PendingTransaction(tx_hash=relay_id_to_hash(transaction_id), transport=self)

    @staticmethod
    def _parse_transaction_id(response: httpx.Response) -> str:
        try:
            body: Any = response.json()
        except ValueError:
            raise UnknownResponseError("Relay response is not valid JSON") from None

        match body:
            case {"transactionId": str(transaction_id)}:
                return transaction_id
            case {"transactionId": _}:
                raise UnknownResponseError("Relay transactionId is not a string")
            case _:
                raise UnknownResponseError("Relay response has no transactionId")

    async def _forward(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        try:
            return await getattr(self.inner, operation)(*args, **kwargs)
        except Exception as e:
            raise TransportError(e) from e

    async def get_transaction_receipt(self, tx_hash: HexBytes) -> TxReceipt:
        return await self._forward("get_transaction_receipt", tx_hash)

    async def wait_for_transaction_receipt(
        self, tx_hash: HexBytes, timeout: float = 120, poll_latency: float = 0.1
    ) -> TxReceipt:
        return await self._forward(
            "wait_for_transaction_receipt", tx_hash, timeout=timeout, poll_latency=poll_latency
        )

    async def get_chain_id(self) -> int:
        return await self._forward("get_chain_id")

    async def get_balance(self, address: str) -> Wei:
        return await self._forward("get_balance", address)

    async def get_transaction_count(self, address: str) -> int:
        return await self._forward("get_transaction_count", address)

    async def estimate_gas(self, tx: TxParams) -> int:
        return await self._forward("estimate_gas", tx)

    async def get_gas_price(self) -> Wei:
        return await self._forward("get_gas_price")
