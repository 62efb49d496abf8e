"""Google Cloud Translation (v2) client.

Modules:
- client: TranslationClient and its four operations
- errors: exceptions raised by failed calls
- platform: application identity headers
"""

from core.translation.client import DEFAULT_BASE_URL, TranslationClient
from core.translation.errors import (
    TranslationError,
    TranslationHTTPError,
    TranslationParseError,
    TranslationTransportError,
)
from core.translation.platform import PlatformIdentity

__all__: list[str] = [
    "DEFAULT_BASE_URL",
    "PlatformIdentity",
    "TranslationClient",
    "TranslationError",
    "TranslationHTTPError",
    "TranslationParseError",
    "TranslationTransportError",
]
