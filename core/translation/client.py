"""Client for the Google Cloud Translation API Basic (v2) REST endpoints.

Each operation is one stateless round trip: build the request, send it through the
injected transport, decode the ``data`` envelope. Failures are reported once through the
error hook (or the debug log) and then raised as a ``TranslationError`` subclass.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING, Any, Final, Self, TypeAlias, TypeVar

from core.translation.errors import (
    TranslationError,
    TranslationHTTPError,
    TranslationParseError,
    TranslationTransportError,
)
from core.translation.platform import PlatformIdentity
from handlers.async_comm import AsyncCommError, AsyncHttp, HttpTransport
from models.translation_models import (
    DetectionEntry,
    Language,
    LanguageEntry,
    TranslationEntry,
    TranslationResult,
    extract_envelope_items,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Sequence

    from handlers.async_comm import HttpResponse

__all__: list[str] = ["DEFAULT_BASE_URL", "ErrorHandler", "TranslationClient"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://translation.googleapis.com/language/translate/v2"
DETECT_PATH: Final[str] = "/detect"
LANGUAGES_PATH: Final[str] = "/languages"

ErrorHandler: TypeAlias = "Callable[[TranslationError], None]"

# JSONDecodeError and UnicodeDecodeError are ValueErrors, an unknown charset is a LookupError
_DECODE_ERRORS: Final[tuple[type[Exception], ...]] = (ValueError, LookupError, TypeError, AttributeError)

_T = TypeVar("_T")


class TranslationClient:
    """Asynchronous client for text translation, language detection and language listing.

    Args:
        api_key (str): API key of the Google Cloud project. It is sent as the ``key``
            query parameter and not validated locally.
        on_error (ErrorHandler | None): Called with the exception of every failed call
            before it is raised. When None the failure is written to the debug log.
        http (HttpTransport | None): Transport used for all requests. Defaults to an
            aiohttp based ``AsyncHttp``.
        base_url (str): Endpoint root, overridable for proxies and tests.
        identity (PlatformIdentity | None): Application identity sent as headers on
            platforms that support it.

    Attributes:
        http (HttpTransport): The transport. Replaceable, typically with a test double.
    """

    def __init__(
        self,
        api_key: str,
        *,
        on_error: ErrorHandler | None = None,
        http: HttpTransport | None = None,
        base_url: str = DEFAULT_BASE_URL,
        identity: PlatformIdentity | None = None,
    ) -> None:
        self.__api_key: str = api_key
        self._on_error: ErrorHandler | None = on_error
        self.http: HttpTransport = http if http is not None else AsyncHttp()
        self._base_url: str = base_url.rstrip("/")
        self._identity: PlatformIdentity = identity if identity is not None else PlatformIdentity()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @property
    def api_key(self) -> str:
        return self.__api_key

    async def close(self) -> None:
        """Release the transport."""
        await self.http.close()

    async def translate(
        self, text: str, target_language: str, *, source_language: str | None = None
    ) -> TranslationResult:
        """Translate a single text.

        Args:
            text (str): Text to translate.
            target_language (str): Target language code.
            source_language (str | None): Source language code. None lets the service detect it.

        Returns:
            TranslationResult: Unescaped translation and the source language.

        Raises:
            TranslationTransportError: If no response was obtained.
            TranslationHTTPError: If the service answered with a non-200 status.
            TranslationParseError: If the answer could not be decoded.
        """
        logger.debug("'target': '%s', 'source': '%s', 'length': %d", target_language, source_language, len(text))
        form: dict[str, str] = {"target": target_language, "q": text}
        if source_language:
            form["source"] = source_language

        response: HttpResponse = await self._send("POST", "", data=form)
        return self._decode(response, lambda raw: self._translations_from(raw, source_language)[0])

    async def translate_batch(
        self, texts: Sequence[str], target_language: str, *, source_language: str | None = None
    ) -> list[TranslationResult]:
        """Translate several texts with one request.

        The results keep the order and length of ``texts``. A response with a different
        number of entries fails the whole call.

        Raises:
            TranslationTransportError: If no response was obtained.
            TranslationHTTPError: If the service answered with a non-200 status.
            TranslationParseError: If the answer could not be decoded.
        """
        if not texts:
            return []

        logger.debug("'target': '%s', 'source': '%s', 'count': %d", target_language, source_language, len(texts))
        payload: dict[str, Any] = {"target": target_language, "q": list(texts)}
        if source_language:
            payload["source"] = source_language

        response: HttpResponse = await self._send("POST", "", json=payload)
        return self._decode(response, lambda raw: self._translations_from(raw, source_language, expected=len(texts)))

    async def detect_language(self, text: str) -> TranslationResult:
        """Detect the language of a text without translating it.

        Returns:
            TranslationResult: ``translated_text`` is always empty.

        Raises:
            TranslationTransportError: If no response was obtained.
            TranslationHTTPError: If the service answered with a non-200 status.
            TranslationParseError: If the answer could not be decoded.
        """
        response: HttpResponse = await self._send("POST", DETECT_PATH, data={"q": text})
        result: TranslationResult = self._decode(response, self._detection_from)
        logger.debug("Detected language: '%s'", result.detected_source_language)
        return result

    async def list_supported_languages(self, target_display_language: str = "en") -> list[Language]:
        """List the languages supported by the service.

        Args:
            target_display_language (str): Language the display names are localized into.

        Raises:
            TranslationTransportError: If no response was obtained.
            TranslationHTTPError: If the service answered with a non-200 status.
            TranslationParseError: If the answer could not be decoded.
        """
        response: HttpResponse = await self._send("GET", LANGUAGES_PATH, params={"target": target_display_language})
        return self._decode(response, self._languages_from)

    async def _send(
        self, method: str, path: str, *, params: dict[str, str] | None = None, **kwargs: Any
    ) -> HttpResponse:
        """Issue one request and return the 200 response."""
        url: str = f"{self._base_url}{path}"
        query: dict[str, str] = {"key": self.__api_key, **(params or {})}
        headers: dict[str, str] = await self._identity.headers()

        try:
            if method == "GET":
                response: HttpResponse = await self.http.get(url, params=query, headers=headers)
            else:
                response = await self.http.post(url, params=query, headers=headers, **kwargs)
        except (AsyncCommError, OSError) as err:
            raise self._report(TranslationTransportError(err)) from err

        if not response.ok:
            raise self._report(TranslationHTTPError(response.status, response.body))
        return response

    def _decode(self, response: HttpResponse, decoder: Callable[[str], _T]) -> _T:
        try:
            return decoder(response.text())
        except _DECODE_ERRORS as err:
            raise self._report(TranslationParseError(err)) from err

    def _report(self, err: TranslationError) -> TranslationError:
        """Hand a failure to the error hook, or log it when there is none."""
        if self._on_error is not None:
            self._on_error(err)
        else:
            logger.debug(err.msg)
        return err

    @staticmethod
    def _translations_from(
        body: str, source_language: str | None, *, expected: int | None = None
    ) -> list[TranslationResult]:
        items: list[Any] = extract_envelope_items(body, "translations")
        if not items:
            msg = "'data.translations' is empty"
            raise IndexError(msg)
        if expected is not None and len(items) != expected:
            msg: str = f"Expected {expected} translations, got {len(items)}"
            raise ValueError(msg)

        results: list[TranslationResult] = []
        for item in items:
            entry: TranslationEntry = TranslationEntry.from_dict(item)
            results.append(
                TranslationResult(
                    translated_text=html.unescape(entry.translated_text),
                    detected_source_language=entry.detected_source_language or source_language or "",
                )
            )
        return results

    @staticmethod
    def _detection_from(body: str) -> TranslationResult:
        # one list of candidates per input text, best candidate first
        candidates: list[Any] = extract_envelope_items(body, "detections")[0]
        entry: DetectionEntry = DetectionEntry.from_dict(candidates[0])
        return TranslationResult(translated_text="", detected_source_language=entry.language)

    @staticmethod
    def _languages_from(body: str) -> list[Language]:
        return [LanguageEntry.from_dict(item).to_language() for item in extract_envelope_items(body, "languages")]
