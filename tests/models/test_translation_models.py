from __future__ import annotations

import dataclasses
import json

import pytest

from models.translation_models import (
    DetectionEntry,
    Language,
    LanguageEntry,
    TranslationEntry,
    TranslationResult,
    extract_envelope_items,
)


def test_translation_result_is_immutable() -> None:
    result = TranslationResult(translated_text="Hola", detected_source_language="en")

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.translated_text = "Adiós"  # type: ignore[misc]


def test_translation_entry_reads_camel_case_keys() -> None:
    entry: TranslationEntry = TranslationEntry.from_dict({"translatedText": "Hola", "detectedSourceLanguage": "en"})

    assert entry.translated_text == "Hola"
    assert entry.detected_source_language == "en"


def test_translation_entry_detected_language_is_optional() -> None:
    entry: TranslationEntry = TranslationEntry.from_dict({"translatedText": "Hola", "model": "nmt"})

    assert entry.detected_source_language is None


@pytest.mark.parametrize(
    "item",
    [
        pytest.param({"translatedText": None}, id="none-text"),
        pytest.param({"translatedText": ["Hola"]}, id="list-text"),
        pytest.param({"translatedText": "Hola", "detectedSourceLanguage": 1}, id="int-language"),
    ],
)
def test_translation_entry_rejects_wrong_types(item: dict[str, object]) -> None:
    with pytest.raises(TypeError):
        TranslationEntry.from_dict(item)


def test_detection_entry_ignores_deprecated_fields() -> None:
    entry: DetectionEntry = DetectionEntry.from_dict({"language": "es", "isReliable": False, "confidence": 0.5})

    assert entry.language == "es"


def test_language_entry_to_language() -> None:
    entry: LanguageEntry = LanguageEntry.from_dict({"language": "ja", "name": "Japanese"})

    assert entry.to_language() == Language(code="ja", display_name="Japanese")


def test_language_entry_requires_name() -> None:
    with pytest.raises(KeyError):
        LanguageEntry.from_dict({"language": "ja"})


def test_extract_envelope_items_returns_list() -> None:
    body: str = json.dumps({"data": {"languages": [{"language": "ja"}]}})

    assert extract_envelope_items(body, "languages") == [{"language": "ja"}]


@pytest.mark.parametrize(
    ("body", "error"),
    [
        pytest.param("not json", json.JSONDecodeError, id="not-json"),
        pytest.param('{"error": {}}', TypeError, id="no-data"),
        pytest.param('{"data": []}', TypeError, id="data-not-object"),
        pytest.param('{"data": {}}', KeyError, id="missing-key"),
        pytest.param('{"data": {"languages": {}}}', TypeError, id="not-list"),
    ],
)
def test_extract_envelope_items_errors(body: str, error: type[Exception]) -> None:
    with pytest.raises(error):
        extract_envelope_items(body, "languages")
