"""Data models for the translation client.

This package contains the result value types, the response envelope models and the
configuration dataclasses.
"""

from __future__ import annotations

from models.config_models import Config
from models.translation_models import Language, TranslationResult

__all__: list[str] = ["Config", "Language", "TranslationResult"]
