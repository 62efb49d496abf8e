"""HTTP transport for the translation client."""

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp, HttpResponse, HttpTransport

__all__: list[str] = ["AsyncCommError", "AsyncCommTimeoutError", "AsyncHttp", "HttpResponse", "HttpTransport"]
