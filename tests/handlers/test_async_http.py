from __future__ import annotations

import logging
from typing import Any

import aiohttp
import pytest

from handlers import async_comm
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp, HttpResponse


class DummyResponse:
    def __init__(self, status: int, body: bytes, encoding: str = "utf-8") -> None:
        self.status = status
        self.body = body
        self.encoding = encoding

    async def read(self) -> bytes:
        return self.body

    def get_encoding(self) -> str:
        return self.encoding

    async def __aenter__(self) -> DummyResponse:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb


class DummySession:
    instances: list[DummySession] = []  # noqa: RUF012

    def __init__(self, *args, **kwargs) -> None:
        _ = args
        self.kwargs: dict[str, Any] = kwargs
        self.closed = False
        self.requests: list[tuple[str, str, dict[str, Any]]] = []
        self.response = DummyResponse(200, b'{"data": {}}')
        self.error: BaseException | None = None
        DummySession.instances.append(self)

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def patch_session(monkeypatch: pytest.MonkeyPatch) -> None:
    DummySession.instances = []
    monkeypatch.setattr(async_comm, "ClientSession", DummySession)


def test_init_does_not_create_session() -> None:
    AsyncHttp()

    assert DummySession.instances == []


@pytest.mark.asyncio
async def test_first_request_initializes_session(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="CloudTranslation")
    http = AsyncHttp(total_timeout=5.0)

    await http.get("https://example.test/languages", params={"key": "k"})

    assert len(DummySession.instances) == 1
    assert DummySession.instances[0].kwargs["timeout"] == aiohttp.ClientTimeout(connect=1.0, total=5.0)
    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_get_returns_status_and_body_without_raising() -> None:
    http = AsyncHttp()
    _ = http.session
    DummySession.instances[0].response = DummyResponse(500, b"Internal error")

    response: HttpResponse = await http.get("https://example.test", params={"key": "k"}, headers={"X": "1"})

    assert response == HttpResponse(status=500, content=b"Internal error")
    assert response.ok is False
    method, url, kwargs = DummySession.instances[0].requests[0]
    assert (method, url) == ("GET", "https://example.test")
    assert kwargs == {"params": {"key": "k"}, "headers": {"X": "1"}}


@pytest.mark.asyncio
async def test_undecodable_body_is_returned_as_bytes() -> None:
    http = AsyncHttp()
    _ = http.session
    DummySession.instances[0].response = DummyResponse(200, b'{"data": "\xff"}')

    response: HttpResponse = await http.get("https://example.test")

    assert response.content == b'{"data": "\xff"}'
    assert response.body == '{"data": "\ufffd"}'
    with pytest.raises(UnicodeDecodeError):
        response.text()


@pytest.mark.asyncio
async def test_announced_charset_is_kept() -> None:
    http = AsyncHttp()
    _ = http.session
    DummySession.instances[0].response = DummyResponse(200, "café".encode("latin-1"), encoding="latin-1")

    response: HttpResponse = await http.get("https://example.test")

    assert response.encoding == "latin-1"
    assert response.text() == "café"


def test_unknown_charset_body_falls_back_to_utf8() -> None:
    response = HttpResponse(502, "Bad gateway é".encode(), encoding="no-such-charset")

    assert response.body == "Bad gateway é"
    with pytest.raises(LookupError):
        response.text()


@pytest.mark.asyncio
async def test_post_forwards_form_and_json_bodies() -> None:
    http = AsyncHttp()

    form_response: HttpResponse = await http.post("https://example.test", data={"q": "Hello"})
    await http.post("https://example.test", json={"q": ["Hello"]})

    requests = DummySession.instances[0].requests
    assert form_response.ok is True
    assert requests[0][2]["data"] == {"q": "Hello"}
    assert requests[0][2]["json"] is None
    assert requests[1][2]["json"] == {"q": ["Hello"]}
    assert requests[1][2]["data"] is None


@pytest.mark.asyncio
async def test_post_rejects_both_bodies() -> None:
    http = AsyncHttp()

    with pytest.raises(ValueError, match="Only one of"):
        await http.post("https://example.test", data={"q": "a"}, json={"q": ["a"]})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        pytest.param(TimeoutError(), AsyncCommTimeoutError, id="timeout"),
        pytest.param(ConnectionResetError(), AsyncCommError, id="reset"),
        pytest.param(aiohttp.ServerDisconnectedError(), AsyncCommError, id="client-error"),
    ],
)
async def test_transport_failures_are_wrapped(error: BaseException, expected: type[AsyncCommError]) -> None:
    http = AsyncHttp()
    _ = http.session
    DummySession.instances[0].error = error

    with pytest.raises(expected) as excinfo:
        await http.get("https://example.test")

    assert excinfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_close_and_reopen_session() -> None:
    http = AsyncHttp()
    first = http.session

    await http.close()
    second = http.session

    assert first.closed is True
    assert second is not first
    assert len(DummySession.instances) == 2


@pytest.mark.asyncio
async def test_context_exit_closes_session() -> None:
    async with AsyncHttp() as http:
        session = http.session

    assert session.closed is True


@pytest.mark.parametrize(
    ("total", "expected"),
    [
        (0, aiohttp.ClientTimeout(total=None)),
        (-1, aiohttp.ClientTimeout(total=None)),
        (0.5, aiohttp.ClientTimeout(total=0.5)),
        (10.0, aiohttp.ClientTimeout(connect=1.0, total=10.0)),
    ],
)
def test_build_timeout(total: float, expected: aiohttp.ClientTimeout) -> None:
    assert AsyncHttp._build_timeout(total) == expected
