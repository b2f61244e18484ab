from typing import Optional


class SonosError(Exception):
    """Base class for every error raised or reported by sonos_control."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RequestBuildError(SonosError, ValueError):
    """Raised when a request cannot be built from the supplied arguments."""


class UnknownEndpointError(SonosError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown endpoint '{name}'.")


class EncodingError(SonosError):
    """The request parameters could not be serialized for the wire."""


class TransportError(SonosError):
    """Network level failure (DNS, TLS, timeout, connection reset).

    The httpx exception that caused it is kept on ``original`` and as
    ``__cause__``.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.original = original
        super().__init__(message)


class APIError(SonosError):
    """The server answered with a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Optional[bytes] = None,
    ) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (status code: {self.status_code})"


class DispatchCancelledError(SonosError):
    def __init__(self, message: str = "The request was cancelled before it completed."):
        super().__init__(message)
