"""Asynchronous HTTP transport used by the translation client.

``HttpTransport`` is the interface the client depends on; ``AsyncHttp`` is the aiohttp
implementation. Unlike a typical REST helper the transport never raises for an HTTP
status: every completed exchange comes back as an ``HttpResponse`` so the caller can
report the status and the raw body. Only transport-level failures raise; the body is
kept as bytes and decoded by whoever interprets it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Literal, Protocol, Self

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "HttpResponse",
    "HttpTransport",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 1.0
DEFAULT_TIMEOUT: Final[float] = 10.0


@dataclass(frozen=True)
class HttpResponse:
    """A completed HTTP exchange.

    Attributes:
        status (int): HTTP status code.
        content (bytes): Raw response body.
        encoding (str): Charset announced by the server, utf-8 when absent.
    """

    status: int
    content: bytes
    encoding: str = "utf-8"

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def body(self) -> str:
        """Body decoded leniently, undecodable bytes replaced. Meant for error reports."""
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def text(self) -> str:
        """Decode the body strictly.

        Raises:
            UnicodeDecodeError: If the body is not valid in the announced charset.
            LookupError: If the announced charset is unknown.
        """
        return self.content.decode(self.encoding)


class HttpTransport(Protocol):
    """Anything able to issue GET/POST requests with headers and a body."""

    async def get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse: ...

    async def post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        json: Any | None = None,
    ) -> HttpResponse: ...

    async def close(self) -> None: ...


class AsyncHttp:
    """aiohttp-backed ``HttpTransport``.

    The session is created lazily on the first request so that the instance can be
    constructed outside a running event loop. It is safe to share between concurrent
    requests because aiohttp sessions are.
    """

    def __init__(self, *, total_timeout: float = DEFAULT_TIMEOUT) -> None:
        logger.debug("%s initializing, 'timeout': '%s'", self.__class__.__name__, total_timeout)
        self.__session: ClientSession | None = None
        self._timeout: aiohttp.ClientTimeout = self._build_timeout(total_timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @staticmethod
    def _build_timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        if total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # a connect timeout longer than the total would never apply
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    @property
    def session(self) -> ClientSession:
        """Get the current session, creating a new one if none is open."""
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession(timeout=self._timeout)
            logger.debug("%s session initialized", self.__class__.__name__)
        return self.__session

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
            logger.debug("%s session closed", self.__class__.__name__)
        self.__session = None

    async def get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        return await self._request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        json: Any | None = None,
    ) -> HttpResponse:
        """Send a POST request.

        ``data`` is sent form-encoded, ``json`` as an ``application/json`` body.
        Passing both is an error.
        """
        if data is not None and json is not None:
            msg = "Only one of 'data' or 'json' may be given"
            raise ValueError(msg)
        return await self._request("POST", url, params=params, headers=headers, data=data, json=json)

    async def _request(self, method: HTTPMethod, url: str, **kwargs: Any) -> HttpResponse:
        """Perform a request and return status and body without checking the status.

        Raises:
            AsyncCommTimeoutError: If the server did not answer in time.
            AsyncCommError: If the connection could not be made or was lost.
        """
        logger.debug("[%s] url=%s", method, url)
        try:
            async with self.session.request(method, url, **kwargs) as resp:
                content: bytes = await resp.read()
                logger.debug("[%s] status=%s length=%d", method, resp.status, len(content))
                return HttpResponse(status=resp.status, content=content, encoding=resp.get_encoding())
        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "Unable to connect to the server."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP client error: {err}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for transport-level failures (no HTTP response was obtained)."""

    def __init__(self, msg: str | BaseException) -> None:
        self.msg: str = str(msg)
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """The request did not complete within the configured timeout."""
