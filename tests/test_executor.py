from __future__ import annotations

import asyncio

import httpx
import pytest

from jikanio.core.executor import execute
from jikanio.core.outcome import Failure, Success
from jikanio.utils.exceptions import DecodeError, NetworkError, TransportFailure

URL = "https://api.jikan.moe/v3/anime/1"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_execute_success_decodes_json(settings, make_recorder) -> None:
    recorder = make_recorder(200, {"id": 1})
    outcome = asyncio.run(execute(URL, client=_client(recorder), settings=settings))

    assert outcome == Success({"id": 1})
    assert outcome.ok is True
    assert outcome.unwrap() == {"id": 1}
    assert recorder.urls == [URL]


def test_execute_sends_user_agent(settings, recorder) -> None:
    asyncio.run(execute(URL, client=_client(recorder), settings=settings))
    assert recorder.requests[0].headers["User-Agent"] == settings.user_agent
    assert recorder.requests[0].method == "GET"


def test_execute_non_200_is_failure(settings, make_recorder) -> None:
    recorder = make_recorder(404, {"error": "Resource does not exist"})
    outcome = asyncio.run(execute(URL, client=_client(recorder), settings=settings))

    assert isinstance(outcome, Failure)
    assert outcome.ok is False
    assert outcome.status_code == 404
    assert outcome.response.json() == {"error": "Resource does not exist"}
    assert outcome.url == URL
    assert len(recorder.requests) == 1, "no retry on failure"


def test_failure_unwrap_raises_transport_failure(settings, make_recorder) -> None:
    outcome = asyncio.run(
        execute(URL, client=_client(make_recorder(503, {})), settings=settings)
    )
    with pytest.raises(TransportFailure) as exc_info:
        outcome.unwrap()
    assert exc_info.value.status_code == 503
    assert exc_info.value.url == URL


def test_execute_invalid_json_raises_decode_error(settings, make_recorder) -> None:
    recorder = make_recorder(200, content=b"<html>not json</html>")
    with pytest.raises(DecodeError) as exc_info:
        asyncio.run(execute(URL, client=_client(recorder), settings=settings))
    assert exc_info.value.body_excerpt == "<html>not json</html>"


def test_execute_invalid_json_on_error_status_is_still_failure(settings, make_recorder) -> None:
    recorder = make_recorder(500, content=b"Internal Server Error")
    outcome = asyncio.run(execute(URL, client=_client(recorder), settings=settings))
    assert isinstance(outcome, Failure)
    assert outcome.response.text == "Internal Server Error"


def test_execute_transport_error_raises_network_error(settings) -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(execute(URL, client=_client(boom), settings=settings))
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_execute_closes_client_it_creates(settings, monkeypatch, recorder) -> None:
    created: list[httpx.AsyncClient] = []
    real_client = httpx.AsyncClient

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(recorder)
        client = real_client(*args, **kwargs)
        created.append(client)
        return client

    monkeypatch.setattr(httpx, "AsyncClient", factory)
    asyncio.run(execute(URL, settings=settings))

    assert len(created) == 1
    assert created[0].is_closed


def test_execute_leaves_shared_client_open(settings, recorder) -> None:
    client = _client(recorder)
    asyncio.run(execute(URL, client=client, settings=settings))
    assert not client.is_closed
