import asyncio
import json
from urllib.parse import parse_qs

import httpx
import pytest
from pytest_httpx import HTTPXMock

from sonos_control import (
    APIError,
    DispatchCancelledError,
    Dispatcher,
    EncodingError,
    Failure,
    Success,
    TransportError,
    build_request,
)
from sonos_control._utils.constants import HEADER_USER_AGENT, PACKAGE_VERSION


@pytest.fixture
def dispatcher(config) -> Dispatcher:
    return Dispatcher(config)


class Recorder:
    def __init__(self) -> None:
        self.successes: list = []
        self.failures: list = []

    def on_success(self, payload) -> None:
        self.successes.append(payload)

    def on_failure(self, error) -> None:
        self.failures.append(error)


class TestDispatcher:
    class TestExecute:
        def test_success_returns_raw_body(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            encoded_keys: str,
            login_url: str,
        ):
            httpx_mock.add_response(
                url=f"{login_url}/oauth/access",
                method="POST",
                status_code=200,
                content=b'{"access_token":"t"}',
            )
            spec = build_request(
                "refresh_token", encoded_keys=encoded_keys, refresh_token="r"
            )

            result = dispatcher.execute(spec)

            assert isinstance(result, Success)
            assert result.ok
            assert result.payload == b'{"access_token":"t"}'

            sent_request = httpx_mock.get_requests()[0]
            assert sent_request.headers["Authorization"] == f"Basic {encoded_keys}"
            assert (
                sent_request.headers["Content-Type"]
                == "application/x-www-form-urlencoded;charset=utf-8"
            )
            assert parse_qs(sent_request.content.decode()) == {
                "grant_type": ["refresh_token"],
                "refresh_token": ["r"],
            }

        def test_json_body_and_headers(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/groups/G1/playback/seek",
                method="POST",
                status_code=200,
                json={},
            )
            spec = build_request(
                "seek",
                access_token=access_token,
                group_id="G1",
                position_millis=1500,
            )

            dispatcher.execute(spec)

            sent_request = httpx_mock.get_requests()[0]
            assert sent_request.method == "POST"
            assert sent_request.headers["Authorization"] == f"Bearer {access_token}"
            assert sent_request.headers["Content-Type"] == "application/json"
            assert json.loads(sent_request.content) == {"positionMillis": 1500}
            assert (
                sent_request.headers[HEADER_USER_AGENT]
                == f"SonosControl.Python.Sdk/SonosControl.Python.Sdk.Requests.seek/{PACKAGE_VERSION}"
            )
            assert HEADER_USER_AGENT not in spec.headers

        def test_get_sends_no_body(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/households", method="GET", status_code=200
            )

            result = dispatcher.execute(
                build_request("get_households", access_token=access_token)
            )

            assert isinstance(result, Success)
            assert result.payload is None
            assert httpx_mock.get_requests()[0].content == b""

        def test_http_error_status_is_a_failure(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            body = b'{"errorCode":"ERROR_INVALID_PARAMETER"}'
            httpx_mock.add_response(
                url=f"{control_url}/groups/G1/playback/pause",
                method="POST",
                status_code=400,
                content=body,
            )

            result = dispatcher.execute(
                build_request("pause", access_token=access_token, group_id="G1")
            )

            assert isinstance(result, Failure)
            assert not result.ok
            assert isinstance(result.error, APIError)
            assert result.error.status_code == 400
            assert result.error.response_body == body
            with pytest.raises(APIError):
                result.unwrap()

        def test_optional_only_endpoint_sends_empty_object(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/players/P1/settings/player",
                method="POST",
                status_code=200,
            )

            dispatcher.execute(
                build_request(
                    "set_player_settings", access_token=access_token, player_id="P1"
                )
            )

            sent_request = httpx_mock.get_requests()[0]
            assert sent_request.content == b"{}"

        def test_error_message_from_json_body(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            body = b'{"errorCode":"ERROR_INVALID_OBJECT_ID","reason":"bad group"}'
            httpx_mock.add_response(
                url=f"{control_url}/groups/G1/playback/pause",
                method="POST",
                status_code=400,
                content=body,
            )

            result = dispatcher.execute(
                build_request("pause", access_token=access_token, group_id="G1")
            )

            assert isinstance(result.error, APIError)
            assert result.error.message == "ERROR_INVALID_OBJECT_ID: bad group"
            assert result.error.response_body == body

        def test_error_message_without_json_body(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/groups/G1/playback/pause",
                method="POST",
                status_code=502,
                content=b"Bad Gateway",
            )

            result = dispatcher.execute(
                build_request("pause", access_token=access_token, group_id="G1")
            )

            assert isinstance(result.error, APIError)
            assert "502" in result.error.message
            assert result.error.response_body == b"Bad Gateway"

        def test_server_error_is_not_retried(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/groups/G1/playback/play",
                method="POST",
                status_code=503,
            )

            result = dispatcher.execute(
                build_request("play", access_token=access_token, group_id="G1")
            )

            assert isinstance(result.error, APIError)
            assert len(httpx_mock.get_requests()) == 1

        def test_transport_error_is_a_failure(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
        ):
            httpx_mock.add_exception(httpx.ConnectTimeout("timed out"))

            result = dispatcher.execute(
                build_request("get_households", access_token=access_token)
            )

            assert isinstance(result, Failure)
            assert isinstance(result.error, TransportError)
            assert isinstance(result.error.original, httpx.ConnectTimeout)
            assert result.error.__cause__ is result.error.original

        def test_encoding_error_sends_nothing(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
        ):
            spec = build_request(
                "load_stream_url",
                access_token=access_token,
                session_id="S1",
                stream_url="https://radio.example.com/stream",
                station_metadata={"logo": object()},
            )

            result = dispatcher.execute(spec)

            assert isinstance(result, Failure)
            assert isinstance(result.error, EncodingError)
            assert httpx_mock.get_requests() == []

        def test_injected_client_is_used_and_not_closed(
            self, config, access_token: str, control_url: str
        ):
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, content=b'{"households":[]}')

            client = httpx.Client(transport=httpx.MockTransport(handler))
            dispatcher = Dispatcher(config, client=client)

            result = dispatcher.execute(
                build_request("get_households", access_token=access_token)
            )
            dispatcher.close()

            assert result.payload == b'{"households":[]}'
            assert not client.is_closed
            client.close()

    class TestExecuteAsync:
        @pytest.mark.anyio
        async def test_success(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
            control_url: str,
        ):
            httpx_mock.add_response(
                url=f"{control_url}/players/P1/playerVolume",
                method="GET",
                status_code=200,
                json={"volume": 10, "muted": False, "fixed": False},
            )

            result = await dispatcher.execute_async(
                build_request("get_player_volume", access_token=access_token, player_id="P1")
            )

            assert isinstance(result, Success)
            assert json.loads(result.payload) == {
                "volume": 10,
                "muted": False,
                "fixed": False,
            }
            await dispatcher.aclose()

    class TestDispatch:
        @pytest.mark.anyio
        async def test_success_calls_on_success_once(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            encoded_keys: str,
            login_url: str,
        ):
            httpx_mock.add_response(
                url=f"{login_url}/oauth/access",
                method="POST",
                status_code=200,
                content=b'{"access_token":"t"}',
            )
            recorder = Recorder()

            task = dispatcher.dispatch(
                build_request(
                    "create_token",
                    encoded_keys=encoded_keys,
                    authorization_code="code",
                    redirect_uri="https://example.com",
                ),
                recorder.on_success,
                recorder.on_failure,
            )
            await task
            await asyncio.sleep(0)

            assert recorder.successes == [b'{"access_token":"t"}']
            assert recorder.failures == []

        @pytest.mark.anyio
        async def test_error_status_calls_on_failure_once(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            encoded_keys: str,
            login_url: str,
        ):
            httpx_mock.add_response(
                url=f"{login_url}/oauth/access", method="POST", status_code=400
            )
            recorder = Recorder()

            task = dispatcher.dispatch(
                build_request("refresh_token", encoded_keys=encoded_keys, refresh_token="r"),
                recorder.on_success,
                recorder.on_failure,
            )
            await task
            await asyncio.sleep(0)

            assert recorder.successes == []
            assert len(recorder.failures) == 1
            assert isinstance(recorder.failures[0], APIError)
            assert recorder.failures[0].status_code == 400

        @pytest.mark.anyio
        async def test_transport_error_calls_on_failure_once(
            self,
            httpx_mock: HTTPXMock,
            dispatcher: Dispatcher,
            access_token: str,
        ):
            httpx_mock.add_exception(httpx.ConnectError("connection reset"))
            recorder = Recorder()

            task = dispatcher.dispatch(
                build_request("get_households", access_token=access_token),
                recorder.on_success,
                recorder.on_failure,
            )
            await task
            await asyncio.sleep(0)

            assert recorder.successes == []
            assert len(recorder.failures) == 1
            assert isinstance(recorder.failures[0], TransportError)

        @pytest.mark.anyio
        async def test_cancel_calls_on_failure_once(
            self,
            config,
            access_token: str,
        ):
            async def handler(request: httpx.Request) -> httpx.Response:
                await asyncio.sleep(10)
                return httpx.Response(200)

            async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            dispatcher = Dispatcher(config, async_client=async_client)
            recorder = Recorder()

            task = dispatcher.dispatch(
                build_request("get_households", access_token=access_token),
                recorder.on_success,
                recorder.on_failure,
            )
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            await asyncio.sleep(0)

            assert recorder.successes == []
            assert len(recorder.failures) == 1
            assert isinstance(recorder.failures[0], DispatchCancelledError)
            await async_client.aclose()

        def test_requires_running_loop(self, dispatcher: Dispatcher, access_token: str):
            recorder = Recorder()
            with pytest.raises(RuntimeError):
                dispatcher.dispatch(
                    build_request("get_households", access_token=access_token),
                    recorder.on_success,
                    recorder.on_failure,
                )
