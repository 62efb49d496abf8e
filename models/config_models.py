"""Configuration data models for the translation client.

Each dataclass mirrors one section of ``translation.ini``; field names are the INI keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Config"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""


@dataclass
class Translation:
    API_KEY: str = ""
    BASE_URL: str = "https://translation.googleapis.com/language/translate/v2"
    TIMEOUT: float = 10.0
    TARGET_LANGUAGE: str = "en"
    DISPLAY_LANGUAGE: str = "en"


@dataclass
class Platform:
    PACKAGE_NAME: str = ""
    BUILD_SIGNATURE: str = ""


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    PLATFORM: Platform = field(default_factory=Platform)
