from typing import Any, Optional, Union

from pydantic import ValidationError

from .._config import Config
from .._utils import (
    RequestSpec,
    basic_auth_headers,
    bearer_auth_headers,
    merge_present,
)
from ..models.errors import RequestBuildError
from ._registry import get_endpoint
from ._spec import Api, AuthScheme, EndpointSpec


def _base_url(spec: EndpointSpec, config: Config) -> str:
    if spec.api is Api.LOGIN:
        return config.login_base_url
    return config.control_base_url


def _auth_headers(
    spec: EndpointSpec,
    access_token: Optional[str],
    encoded_keys: Optional[str],
) -> dict[str, str]:
    if spec.auth is AuthScheme.BASIC:
        if not encoded_keys:
            raise RequestBuildError(
                f"'{spec.name}' requires encoded_keys (Base64 of client_id:client_secret)."
            )
        return basic_auth_headers(encoded_keys)

    if not access_token:
        raise RequestBuildError(f"'{spec.name}' requires an access_token.")
    return bearer_auth_headers(access_token)


def _body(spec: EndpointSpec, kwargs: dict[str, Any]) -> Optional[dict[str, Any]]:
    if not spec.has_body:
        return None

    required_values: dict[str, Any] = dict(spec.fixed)
    optional_values: dict[str, Any] = {}
    for param in spec.params:
        value = kwargs.get(param.keyword)
        if value is None:
            if param.required:
                raise RequestBuildError(
                    f"Missing required argument '{param.keyword}' for '{spec.name}'."
                )
            continue

        try:
            value = param.validate(value)
        except ValidationError as e:
            raise RequestBuildError(
                f"Invalid value for '{param.keyword}' of '{spec.name}': "
                f"{e.errors(include_url=False)[0]['msg']}"
            ) from e

        if param.required:
            required_values[param.wire_name] = value
        else:
            optional_values[param.wire_name] = value

    return merge_present(required_values, optional_values)


def build_request(
    endpoint: Union[str, EndpointSpec],
    *,
    config: Optional[Config] = None,
    access_token: Optional[str] = None,
    encoded_keys: Optional[str] = None,
    **kwargs: Any,
) -> RequestSpec:
    """Build the request for one vendor operation.

    Args:
        endpoint: Name of an entry in the endpoint table, or the entry itself.
        config: Base URLs and timeout. Defaults to ``Config()``.
        access_token: Bearer token for control endpoints.
        encoded_keys: Base64 ``client_id:client_secret`` for the token endpoints.
        **kwargs: Path parameters (``household_id``, ``group_id``, ...) and body
            parameters in snake_case. Optional body parameters left as ``None``
            are not sent at all.

    Returns:
        RequestSpec: A fully resolved request, ready to be dispatched.

    Raises:
        UnknownEndpointError: If ``endpoint`` names no entry.
        RequestBuildError: On unknown or missing arguments, values of the wrong
            type, or missing credentials.

    Examples:
        ```python
        spec = build_request(
            "set_group_volume",
            access_token="token",
            group_id="RINCON_123:5",
            volume=20,
        )
        ```
    """
    spec = endpoint if isinstance(endpoint, EndpointSpec) else get_endpoint(endpoint)
    config = config or Config()

    unknown = sorted(set(kwargs) - set(spec.keywords))
    if unknown:
        raise RequestBuildError(
            f"Unexpected argument(s) {', '.join(unknown)} for '{spec.name}'. "
            f"Accepted: {', '.join(spec.keywords) or 'none'}."
        )

    path = spec.path.format(
        **{
            placeholder: kwargs.get(keyword)
            for keyword, placeholder in spec.path_keywords.items()
        }
    )

    return RequestSpec(
        name=spec.name,
        method=spec.method,
        endpoint=path.with_base(_base_url(spec, config)),
        encoding=spec.encoding,
        headers=_auth_headers(spec, access_token, encoded_keys),
        parameters=_body(spec, kwargs),
        timeout=config.timeout,
    )
