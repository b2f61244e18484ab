from .errors import (
    APIError,
    DispatchCancelledError,
    EncodingError,
    RequestBuildError,
    SonosError,
    TransportError,
    UnknownEndpointError,
)
from .results import Failure, Result, Success

__all__ = [
    "APIError",
    "DispatchCancelledError",
    "EncodingError",
    "Failure",
    "RequestBuildError",
    "Result",
    "SonosError",
    "Success",
    "TransportError",
    "UnknownEndpointError",
]
