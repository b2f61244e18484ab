import asyncio
from logging import getLogger
from typing import Any, Callable, Optional

from httpx import (
    AsyncClient,
    Client,
    HTTPError,
    HTTPStatusError,
    InvalidURL,
    Request,
    Response,
    StreamError,
)

from .._config import Config
from .._utils import RequestSpec, get_httpx_client_kwargs
from .._utils.constants import HEADER_USER_AGENT, LOGGER_NAME, user_agent_value
from ..models.errors import (
    APIError,
    DispatchCancelledError,
    EncodingError,
    SonosError,
    TransportError,
)
from ..models.results import Failure, Result, Success

SuccessCallback = Callable[[Optional[bytes]], Any]
FailureCallback = Callable[[SonosError], Any]


def _error_message(response: Response) -> Optional[str]:
    try:
        error_body = response.json()
    except ValueError:
        return None

    if not isinstance(error_body, dict):
        return None

    error_code = error_body.get("errorCode")
    reason = (
        error_body.get("reason")
        or error_body.get("message")
        or error_body.get("error_description")
        or error_body.get("error")
    )
    if error_code and reason:
        return f"{error_code}: {reason}"
    message = error_code or reason
    return str(message) if message else None


def _status_failure(error: HTTPStatusError) -> Failure:
    response = error.response
    return Failure(
        APIError(
            _error_message(response) or str(error),
            response.status_code,
            response.content or None,
        )
    )


def _transport_failure(error: HTTPError) -> Failure:
    failure = TransportError(str(error) or type(error).__name__, original=error)
    failure.__cause__ = error
    return Failure(failure)


def _encoding_failure(spec: RequestSpec, error: Exception) -> Failure:
    failure = EncodingError(f"Could not encode the request for '{spec.name}': {error}")
    failure.__cause__ = error
    return Failure(failure)


def _deliver(
    result: Result,
    on_success: SuccessCallback,
    on_failure: FailureCallback,
) -> None:
    if isinstance(result, Success):
        on_success(result.payload)
    else:
        on_failure(result.error)


class Dispatcher:
    """Sends a ``RequestSpec`` exactly once and reports exactly one outcome.

    The httpx clients are the transport. Pass your own to control pooling,
    proxies or timeouts; otherwise they are created on first use and owned by
    the dispatcher. Success is whatever httpx considers a success (2xx). No
    request is ever retried.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        client: Optional[Client] = None,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config or Config()
        self._client = client
        self._client_async = async_client
        self._owns_client = client is None
        self._owns_client_async = async_client is None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = Client(**get_httpx_client_kwargs(self._config.timeout))
        return self._client

    @property
    def client_async(self) -> AsyncClient:
        if self._client_async is None:
            self._client_async = AsyncClient(
                **get_httpx_client_kwargs(self._config.timeout)
            )
        return self._client_async

    def _build(self, client: Any, spec: RequestSpec) -> Request:
        request = client.build_request(**spec.request_kwargs())
        request.headers[HEADER_USER_AGENT] = user_agent_value(spec.name)
        return request

    def _classify(self, spec: RequestSpec, response: Response) -> Result:
        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            self._logger.debug(f"Failure: {spec.name} -> {response.status_code}")
            return _status_failure(e)

        self._logger.debug(f"Success: {spec.name} -> {response.status_code}")
        return Success(response.content or None, response.status_code)

    def execute(self, spec: RequestSpec) -> Result:
        """Send ``spec`` and block until it completes."""
        self._logger.debug(f"Request: {spec.method.value} {spec.url}")

        try:
            request = self._build(self.client, spec)
        except (TypeError, ValueError, InvalidURL, StreamError) as e:
            return _encoding_failure(spec, e)

        try:
            response = self.client.send(request)
        except HTTPError as e:
            self._logger.debug(f"Transport failure: {spec.name} -> {e!r}")
            return _transport_failure(e)

        return self._classify(spec, response)

    async def execute_async(self, spec: RequestSpec) -> Result:
        """Send ``spec`` on the running event loop."""
        self._logger.debug(f"Request: {spec.method.value} {spec.url}")

        try:
            request = self._build(self.client_async, spec)
        except (TypeError, ValueError, InvalidURL, StreamError) as e:
            return _encoding_failure(spec, e)

        try:
            response = await self.client_async.send(request)
        except HTTPError as e:
            self._logger.debug(f"Transport failure: {spec.name} -> {e!r}")
            return _transport_failure(e)

        return self._classify(spec, response)

    def dispatch(
        self,
        spec: RequestSpec,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> "asyncio.Task[Result]":
        """Schedule ``spec`` on the running loop and call back with the outcome.

        Exactly one of ``on_success`` and ``on_failure`` is called, once.
        Cancelling the returned task before the response arrives reports a
        ``DispatchCancelledError`` through ``on_failure``.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        task = asyncio.get_running_loop().create_task(
            self.execute_async(spec), name=f"sonos:{spec.name}"
        )

        def on_done(finished: "asyncio.Task[Result]") -> None:
            if finished.cancelled():
                self._logger.debug(f"Cancelled: {spec.name}")
                on_failure(DispatchCancelledError())
                return

            error = finished.exception()
            if error is not None:
                if not isinstance(error, SonosError):
                    wrapped = SonosError(f"Unexpected error in '{spec.name}': {error!r}")
                    wrapped.__cause__ = error
                    error = wrapped
                on_failure(error)
                return

            _deliver(finished.result(), on_success, on_failure)

        task.add_done_callback(on_done)
        return task

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        if self._owns_client_async and self._client_async is not None:
            await self._client_async.aclose()
            self._client_async = None
        self.close()

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "Dispatcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
