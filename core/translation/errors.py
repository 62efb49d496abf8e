"""Exceptions raised by the translation client.

Every failing call raises exactly one of the three concrete kinds below, so callers can
tell a network problem from a refused request or an unreadable answer.
"""

from __future__ import annotations

from typing import Final

__all__: list[str] = [
    "PARSE_ERROR_LABEL",
    "TranslationError",
    "TranslationHTTPError",
    "TranslationParseError",
    "TranslationTransportError",
]

PARSE_ERROR_LABEL: Final[str] = "error parsing answer"


class TranslationError(Exception):
    """Base class for all translation client failures."""

    def __init__(self, msg: str) -> None:
        self.msg: str = msg
        super().__init__(msg)


class TranslationTransportError(TranslationError):
    """No HTTP response was obtained (connection refused, reset, timeout...).

    Attributes:
        cause (BaseException): The transport exception.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause: BaseException = cause
        super().__init__(f"Transport failure: {cause}")


class TranslationHTTPError(TranslationError):
    """The service answered with a status other than 200.

    Attributes:
        status (int): HTTP status code.
        body (str): Raw response body, usually a JSON error object.
    """

    def __init__(self, status: int, body: str) -> None:
        self.status: int = status
        self.body: str = body
        super().__init__(f"HTTP {status}: {body}")


class TranslationParseError(TranslationError):
    """The service answered 200 but the body could not be mapped to a result.

    Attributes:
        cause (BaseException): The decoding or shape error.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause: BaseException = cause
        super().__init__(f"{PARSE_ERROR_LABEL}: {cause}")
