"""Command-line demo of the translation client.

Translates a text, detects its language without translating it, and optionally lists
the supported languages. Settings come from translation.ini; the API key may instead
be given in the GOOGLE_CLOUD_API_OAUTH environment variable.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from config.loader import ConfigLoader, ConfigLoaderError
from core.translation import PlatformIdentity, TranslationClient, TranslationError
from handlers.async_comm import AsyncHttp
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from models.config_models import Config
    from models.translation_models import Language, TranslationResult

CFG_FILE: Final[str] = "translation.ini"
SAMPLE_TEXT: Final[str] = (
    "Toda persona tiene derecho a la educación. La educación debe ser gratuita, "
    "al menos en lo concerniente a la instrucción elemental y fundamental."
)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        description="Translate a text with the Google Cloud Translation API",
        epilog='Example: python translate_demo.py --target ja "Good morning"',
    )
    parser.add_argument("text", nargs="?", default=SAMPLE_TEXT, help="Text to translate (a sample text by default)")
    parser.add_argument("--config", dest="config", default=CFG_FILE, metavar="FILE", help="Configuration file")
    parser.add_argument("--target", dest="target", metavar="LANG", help="Override the target language")
    parser.add_argument("--languages", action="store_true", help="Also list the supported languages")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_client(config: Config) -> TranslationClient:
    """Create a client from the loaded configuration."""
    return TranslationClient(
        config.TRANSLATION.API_KEY,
        http=AsyncHttp(total_timeout=config.TRANSLATION.TIMEOUT),
        base_url=config.TRANSLATION.BASE_URL,
        identity=PlatformIdentity(
            package_name=config.PLATFORM.PACKAGE_NAME,
            build_signature=config.PLATFORM.BUILD_SIGNATURE,
        ),
    )


async def run(client: TranslationClient, text: str, config: Config, *, list_languages: bool = False) -> None:
    translated: TranslationResult = await client.translate(text, config.TRANSLATION.TARGET_LANGUAGE)
    detected: TranslationResult = await client.detect_language(text)

    print("Initial text")
    print(f"  {text}")
    print("Translated text")
    print(f"  {translated.translated_text}")
    print(f"Detected language - {translated.detected_source_language}")
    print(f"Language detected with detect_language, without translation - {detected.detected_source_language}")

    if list_languages:
        languages: list[Language] = await client.list_supported_languages(config.TRANSLATION.DISPLAY_LANGUAGE)
        print(f"Languages ({len(languages)})")
        for language in languages:
            print(f"  {language.code:<8} {language.display_name}")


async def main(argv: list[str] | None = None) -> int:
    args: argparse.Namespace = parse_arguments(argv)
    script_name: str = Path(sys.argv[0]).stem

    try:
        config: Config = ConfigLoader(
            config_filename=args.config, script_name=script_name, target=args.target, debug=args.debug
        ).config
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    log_file: str = str(Path(config.GENERAL.LOG_FILE).expanduser().resolve()) if config.GENERAL.LOG_FILE else ""
    LoggerUtils(log_file, debug=config.GENERAL.DEBUG)

    async with build_client(config) as client:
        try:
            await run(client, args.text, config, list_languages=args.languages)
        except TranslationError as err:
            print(f"\nError: {err}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nCancelled by user.", file=sys.stderr)
