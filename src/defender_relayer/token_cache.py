#!/usr/bin/env python3
"""Access token caching and Defender authentication.

Defender issues short-lived Cognito access tokens. ``DefenderAuthenticator``
reuses a cached token while it is valid and runs a fresh SRP handshake
otherwise. The cache lock is never held during the handshake, so a slow
login for one API key does not hold up the others.
"""

import asyncio
import logging
import time
from typing import Any, Callable

from pycognito.aws_srp import AWSSRP

from .config import CLIENT_ID, POOL_ID, POOL_REGION, DefenderCredentials
from .errors import AuthenticationError
from .models import CachedToken

logger = logging.getLogger(__name__)


class TokenCache:
    """Map from API key to its cached access token.

    Every read and write goes through an ``asyncio.Lock``. Entries are only
    ever replaced as a whole.
    """

    def __init__(self) -> None:
        self._tokens: dict[str, CachedToken] = {}
        self._lock = asyncio.Lock()

    async def size(self) -> int:
        async with self._lock:
            return len(self._tokens)

    async def get(self, api_key: str) -> CachedToken | None:
        async with self._lock:
            return self._tokens.get(api_key)

    async def put(self, api_key: str, token: CachedToken) -> None:
        async with self._lock:
            self._tokens[api_key] = token

    async def clear(self) -> None:
        async with self._lock:
            self._tokens.clear()


class DefenderAuthenticator:
    """Hands out valid Defender access tokens, refreshing them when needed."""

    def __init__(
        self,
        cache: TokenCache | None = None,
        clock: Callable[[], float] = time.time
    ) -> None:
        """
        Initialize the authenticator.

        Args:
            cache: Token cache to use, shared between authenticators if given
            clock: Returns the current Unix time in seconds
        """
        self.cache: TokenCache = cache if cache is not None else TokenCache()
        self._clock = clock

    async def get_valid_token(self, credentials: DefenderCredentials) -> str:
        """
        Return an access token for the given credentials.

        Args:
            credentials: Defender API key and secret

        Returns:
            A bearer token valid at the time of the call

        Raises:
            AuthenticationError: If the handshake fails for any reason
        """
        now = int(self._clock())

        cached = await self.cache.get(credentials.api_key)
        if cached is not None and cached.is_valid(now):
            logger.debug(f"Using cached token for API key {credentials.api_key}")
            return cached.access_token

        logger.debug(f"Refreshing token for API key {credentials.api_key}")
        access_token, expires_in = await self._handshake(credentials)

        await self.cache.put(
            credentials.api_key,
            CachedToken(access_token=access_token, expiration_time=now + expires_in)
        )
        logger.info(f"Authenticated API key {credentials.api_key}, token valid for {expires_in}s")
        return access_token

    async def _handshake(self, credentials: DefenderCredentials) -> tuple[str, int]:
        """
        Run the Cognito SRP handshake in a worker thread.

        Returns:
            Tuple of (access token, lifetime in seconds)

        Raises:
            AuthenticationError: On network errors, rejected credentials,
                challenges or malformed responses
        """
        try:
            response = await asyncio.to_thread(self._srp_authenticate, credentials)
        except Exception as e:
            # Provider details stay out of the raised error
            logger.debug(f"Cognito handshake failed: {type(e).__name__}")
            raise AuthenticationError() from None

        match response:
            case {"AuthenticationResult": {"AccessToken": str(token), "ExpiresIn": int(expires_in)}}:
                return token, expires_in
            case {"ChallengeName": challenge}:
                logger.warning(f"Cognito requested unsupported challenge {challenge}")
                raise AuthenticationError()
            case _:
                logger.warning("Malformed Cognito authentication response")
                raise AuthenticationError()

    @staticmethod
    def _srp_authenticate(credentials: DefenderCredentials) -> dict[str, Any]:
        aws = AWSSRP(
            username=credentials.api_key,
            password=credentials.api_secret,
            pool_id=POOL_ID,
            client_id=CLIENT_ID,
            pool_region=POOL_REGION,
        )
        return aws.authenticate_user()
