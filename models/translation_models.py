"""Value types returned by the translation client and models for the v2 response envelope.

The API wraps every payload in ``{"data": {...}}``. The entry models below are decoded
with dataclasses_json and reject values of the wrong type, so a malformed envelope
fails while decoding instead of leaking bad values into the results.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = [
    "DetectionEntry",
    "Language",
    "LanguageEntry",
    "TranslationEntry",
    "TranslationResult",
    "extract_envelope_items",
]


@dataclass(frozen=True)
class TranslationResult:
    """Result of a translation or detection call.

    Attributes:
        translated_text (str): Translated text, HTML entities already unescaped.
            Always empty for a detection call.
        detected_source_language (str): Source language reported by the service, or the
            pinned source language when the caller gave one.
    """

    translated_text: str
    detected_source_language: str


@dataclass(frozen=True)
class Language:
    """A language supported by the service.

    Attributes:
        code (str): Language code, e.g. ``"ja"``.
        display_name (str): Name of the language localized into the requested display language.
    """

    code: str
    display_name: str


def _require_str(owner: object, *names: str, optional: tuple[str, ...] = ()) -> None:
    for name in names:
        value: Any = getattr(owner, name)
        if value is None and name in optional:
            continue
        if not isinstance(value, str):
            msg: str = f"'{type(owner).__name__}.{name}' must be str, got {type(value).__name__}"
            raise TypeError(msg)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationEntry(DataClassJsonMixin):
    """One element of ``data.translations``."""

    translated_text: str
    detected_source_language: str | None = None

    def __post_init__(self) -> None:
        _require_str(self, "translated_text", "detected_source_language", optional=("detected_source_language",))


@dataclass_json
@dataclass(frozen=True)
class DetectionEntry(DataClassJsonMixin):
    """One element of ``data.detections[i]``.

    ``confidence`` and ``isReliable`` are deprecated by the service and may be absent.
    """

    language: str
    confidence: float | None = None

    def __post_init__(self) -> None:
        _require_str(self, "language")


@dataclass_json
@dataclass(frozen=True)
class LanguageEntry(DataClassJsonMixin):
    """One element of ``data.languages``.

    ``name`` is only returned when a display language was requested, which the client always does.
    """

    language: str
    name: str

    def __post_init__(self) -> None:
        _require_str(self, "language", "name")

    def to_language(self) -> Language:
        return Language(code=self.language, display_name=self.name)


def extract_envelope_items(body: str, key: str) -> list[Any]:
    """Decode a response body and return the list stored at ``data.<key>``.

    Args:
        body (str): Raw response body.
        key (str): Envelope field, one of ``translations``, ``detections`` or ``languages``.

    Returns:
        list[Any]: The raw (undecoded) items.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON.
        KeyError: If ``data`` or ``data.<key>`` is missing.
        TypeError: If the envelope does not have the expected shape.
    """
    payload: Any = json.loads(body)
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        msg = "Response has no 'data' object"
        raise TypeError(msg)

    items: Any = payload["data"][key]
    if not isinstance(items, list):
        msg: str = f"'data.{key}' must be a list, got {type(items).__name__}"
        raise TypeError(msg)
    return items
