from ._auth import basic_auth_headers, bearer_auth_headers, encode_client_keys
from ._endpoint import Endpoint
from ._logs import setup_logging
from ._params import merge_present
from ._request_spec import BodyEncoding, HttpMethod, RequestSpec
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "BodyEncoding",
    "Endpoint",
    "HttpMethod",
    "RequestSpec",
    "basic_auth_headers",
    "bearer_auth_headers",
    "encode_client_keys",
    "get_httpx_client_kwargs",
    "merge_present",
    "setup_logging",
]
