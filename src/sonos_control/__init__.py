"""Python client for the Sonos authorization and control API.

Each vendor operation is an entry in a declarative endpoint table. Build a
request with ``build_request`` (or ``SonosControl.request``) and send it with
a ``Dispatcher``; every send yields exactly one ``Success`` or ``Failure``.
"""

from ._config import Config
from ._endpoints import ENDPOINTS, EndpointSpec, Param, build_request, list_endpoints
from ._services import Dispatcher
from ._sonos_control import SonosControl
from ._utils import BodyEncoding, Endpoint, HttpMethod, RequestSpec, encode_client_keys
from .models import (
    APIError,
    DispatchCancelledError,
    EncodingError,
    Failure,
    RequestBuildError,
    Result,
    SonosError,
    Success,
    TransportError,
    UnknownEndpointError,
)

__all__ = [
    "APIError",
    "BodyEncoding",
    "Config",
    "DispatchCancelledError",
    "Dispatcher",
    "ENDPOINTS",
    "Endpoint",
    "EndpointSpec",
    "EncodingError",
    "Failure",
    "HttpMethod",
    "Param",
    "RequestBuildError",
    "RequestSpec",
    "Result",
    "SonosControl",
    "SonosError",
    "Success",
    "TransportError",
    "UnknownEndpointError",
    "build_request",
    "encode_client_keys",
    "list_endpoints",
]
