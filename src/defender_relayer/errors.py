"""Errors raised by the Defender relayer."""


class RelayerError(Exception):
    """Base class for every error raised by this package."""


class AuthenticationError(RelayerError):
    """Defender rejected the credentials or the submission.

    Raised for any failed Cognito handshake and for every non-200 answer
    from the relay. Provider error details are deliberately not included.

    Attributes:
        status_code: HTTP status returned by the relay, or None when the
            failure happened before a relay response was received
    """

    def __init__(self, status_code: int | None = None) -> None:
        self.status_code = status_code
        message = "Authentication error"
        if status_code is not None:
            message = f"{message} (relay status {status_code})"
        super().__init__(message)


class UnknownResponseError(RelayerError):
    """The relay answered 200 with a body we cannot interpret."""

    def __init__(self, reason: str = "Unknown response") -> None:
        super().__init__(reason)


class TransportError(RelayerError):
    """Error raised by the wrapped inner transport.

    Attributes:
        inner: The original exception
    """

    def __init__(self, inner: BaseException) -> None:
        self.inner = inner
        super().__init__(f"{type(inner).__name__}: {inner}")
