from ._builder import build_request
from ._registry import ENDPOINTS, get_endpoint, list_endpoints
from ._spec import Api, AuthScheme, EndpointSpec, Param, to_snake_case

__all__ = [
    "Api",
    "AuthScheme",
    "ENDPOINTS",
    "EndpointSpec",
    "Param",
    "build_request",
    "get_endpoint",
    "list_endpoints",
    "to_snake_case",
]
