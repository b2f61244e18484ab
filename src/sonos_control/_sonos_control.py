import asyncio
from logging import getLogger
from os import environ as env
from typing import Any, Optional

from dotenv import load_dotenv
from httpx import AsyncClient, Client

from ._config import Config
from ._endpoints import build_request, list_endpoints
from ._services import Dispatcher, FailureCallback, SuccessCallback
from ._utils import RequestSpec, setup_logging
from ._utils.constants import (
    ENV_ACCESS_TOKEN,
    ENV_CONTROL_URL,
    ENV_ENCODED_KEYS,
    ENV_LOGIN_URL,
    LOGGER_NAME,
)
from .models.results import Result

load_dotenv()


class SonosControl:
    """Entry point for calling the Sonos authorization and control API.

    Credentials given here are used for every call unless a call passes its
    own ``access_token`` or ``encoded_keys``. They are never refreshed: obtain
    new tokens with ``create_token``/``refresh_token`` and build a new client.

    Examples:
        ```python
        from sonos_control import SonosControl

        sonos = SonosControl(access_token="...")
        result = sonos.call("get_groups", household_id="Sonos_abc.123")
        ```
    """

    def __init__(
        self,
        *,
        access_token: Optional[str] = None,
        encoded_keys: Optional[str] = None,
        control_base_url: Optional[str] = None,
        login_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: bool = False,
        client: Optional[Client] = None,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        self._access_token = access_token or env.get(ENV_ACCESS_TOKEN)
        self._encoded_keys = encoded_keys or env.get(ENV_ENCODED_KEYS)

        config_values: dict[str, Any] = {"debug": debug}
        if control_base_url or env.get(ENV_CONTROL_URL):
            config_values["control_base_url"] = control_base_url or env[ENV_CONTROL_URL]
        if login_base_url or env.get(ENV_LOGIN_URL):
            config_values["login_base_url"] = login_base_url or env[ENV_LOGIN_URL]
        if timeout is not None:
            config_values["timeout"] = timeout
        self._config = Config(**config_values)

        setup_logging(self._config.debug)
        log = getLogger(LOGGER_NAME)
        log.debug(f"CONFIG: {self._config.model_dump()}")

        self._dispatcher = Dispatcher(
            self._config, client=client, async_client=async_client
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def endpoints(self) -> list[str]:
        return list_endpoints()

    def request(self, endpoint: str, **kwargs: Any) -> RequestSpec:
        """Build the request for ``endpoint`` without sending it."""
        kwargs.setdefault("access_token", self._access_token)
        kwargs.setdefault("encoded_keys", self._encoded_keys)
        return build_request(endpoint, config=self._config, **kwargs)

    def call(self, endpoint: str, **kwargs: Any) -> Result:
        """Build and send a request, blocking until it completes.

        Raises:
            UnknownEndpointError: If ``endpoint`` is not a known operation.
            RequestBuildError: If the arguments do not fit the operation.
        """
        return self._dispatcher.execute(self.request(endpoint, **kwargs))

    async def call_async(self, endpoint: str, **kwargs: Any) -> Result:
        return await self._dispatcher.execute_async(self.request(endpoint, **kwargs))

    def dispatch(
        self,
        endpoint: str,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        **kwargs: Any,
    ) -> "asyncio.Task[Result]":
        """Callback flavour of ``call_async``; returns the task as a cancel handle.

        Only the outcome of the send is reported through the callbacks. Bad
        arguments are rejected before anything is scheduled.

        Raises:
            UnknownEndpointError: If ``endpoint`` is not a known operation.
            RequestBuildError: If the arguments do not fit the operation.
            RuntimeError: If called without a running event loop.
        """
        return self._dispatcher.dispatch(
            self.request(endpoint, **kwargs), on_success, on_failure
        )

    def close(self) -> None:
        self._dispatcher.close()

    async def aclose(self) -> None:
        await self._dispatcher.aclose()
