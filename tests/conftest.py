from __future__ import annotations

import json
from collections.abc import Callable, Iterator

import httpx
import pytest

from jikanio.clients import Jikan
from jikanio.config import Settings, settings as settings_module


class Recorder:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status_code: int = 200, body: object = None, content: bytes | None = None):
        self.status_code = status_code
        self.body = {"ok": True} if body is None else body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "JIKANIO_API_ROOT",
        "JIKANIO_API_VERSION",
        "JIKANIO_HTTP_TIMEOUT",
        "JIKANIO_LOG_FORMAT",
        "JIKANIO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_jikan(settings: Settings) -> Callable[[Recorder], Jikan]:
    def _make(handler: Recorder) -> Jikan:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return Jikan(settings, client=client)

    return _make


@pytest.fixture
def make_recorder() -> type[Recorder]:
    return Recorder
