"""Configuration file loader and validator.

Reads ``translation.ini``, coerces every value to the type declared in
``models.config_models`` and validates the result. Any problem is raised as a
``ConfigLoaderError`` subclass.
"""

from __future__ import annotations

import configparser
import os
import re
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "API_KEY_ENV",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

API_KEY_ENV: Final[str] = "GOOGLE_CLOUD_API_OAUTH"
LANGUAGE_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]{2,3}(-[a-zA-Z0-9]+)?$")


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigLoader:
    """Loads and validates the client configuration.

    Args:
        config_filename (str | Path): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        **args: Command-line overrides. ``debug`` forces debug logging, ``target``
            replaces ``TRANSLATION.TARGET_LANGUAGE``.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values.
    """

    def __init__(self, *, config_filename: str | Path, script_name: str, **args: Any) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_path.name}' before running '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()
        # keep keys upper case, they are matched against the dataclass field names
        parser.optionxform = str.upper  # type: ignore[assignment, method-assign]

        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._convert_settings(parser)
        self._apply_overrides(args)
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Convert configuration settings from the parser to the Config object.

        Iterates through each section and field of the Config object and replaces the
        default with the coerced INI value. Missing sections and settings keep their defaults.

        Args:
            parser (ConfigParser): Parsed INI data.

        Raises:
            ConfigValueError: If a value cannot be coerced to the type of its field.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Section '%s' not defined, defaults used", section.name)
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                setattr(getattr(self.config, section.name), key.name, formatter.apply_format(section, key))

    def _apply_overrides(self, args: dict[str, Any]) -> None:
        """Apply the environment and command-line overrides on top of the file values.

        A non-empty ``GOOGLE_CLOUD_API_OAUTH`` variable replaces the API key.

        Args:
            args (dict[str, Any]): Command-line overrides, ``target`` and ``debug``.
        """
        api_key: str = os.getenv(API_KEY_ENV, "")
        if api_key:
            logger.debug("API key taken from '%s'", API_KEY_ENV)
            self.config.TRANSLATION.API_KEY = api_key
        if args.get("target") is not None:
            self.config.TRANSLATION.TARGET_LANGUAGE = args["target"]
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True

    def _validate_settings(self) -> None:
        """Validate the API key, language codes and timeout.

        Raises:
            ConfigValueError: If a value is out of range or malformed.
        """
        translation = self.config.TRANSLATION
        if not translation.API_KEY.strip():
            msg: str = f"'TRANSLATION.API_KEY' is empty. Set it in the file or in the '{API_KEY_ENV}' variable."
            raise ConfigValueError(msg)

        for key_name in ("TARGET_LANGUAGE", "DISPLAY_LANGUAGE"):
            value: str = getattr(translation, key_name)
            if not LANGUAGE_CODE_PATTERN.match(value):
                msg = f"'TRANSLATION.{key_name}' is not a valid language code: '{value}'"
                raise ConfigValueError(msg)

        if translation.TIMEOUT <= 0:
            msg = f"'TRANSLATION.TIMEOUT' must be positive: {translation.TIMEOUT}"
            raise ConfigValueError(msg)

        if not translation.BASE_URL.startswith(("https://", "http://")):
            msg = f"'TRANSLATION.BASE_URL' must be an http(s) URL: '{translation.BASE_URL}'"
            raise ConfigValueError(msg)

        if self.config.PLATFORM.BUILD_SIGNATURE and not self.config.PLATFORM.PACKAGE_NAME:
            logger.warning("'PLATFORM.BUILD_SIGNATURE' is set without 'PLATFORM.PACKAGE_NAME'; it will be ignored.")


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, float, str)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the current value of the Config field.

        Args:
            section (Field[Any]): Configuration section dataclass field.
            key (Field[Any]): Setting field within the section.

        Returns:
            Any: The value coerced to the field's type.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
        """
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], Any]] = {
            bool: self.parse_as_boolean,
            float: self.parse_as_float,
            str: self.parse_as_string,
        }

        formatter: Callable[[DataclassField[Any], DataclassField[Any]], Any] = formatters[
            type(getattr(getattr(self.config, section.name), key.name))
        ]
        try:
            return formatter(section, key)
        except ValueError as err:
            msg = f"Invalid value for {section.name}.{key.name}: {err}"
            raise ConfigValueError(msg) from err

    def _raw(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Return the stripped INI value with one pair of surrounding quotes removed."""
        value: str = self.parser.get(section.name, key.name).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        return value

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Parse the value as a string.

        Args:
            section (Field[Any]): Configuration section dataclass field.
            key (Field[Any]): Setting field within the section.

        Returns:
            str: The value with one pair of surrounding quotes removed.
        """
        return self._raw(section, key)

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        """Parse the value as a float.

        Raises:
            ValueError: If the value is not a number.
        """
        return float(self._raw(section, key))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        """Parse the value with configparser's boolean rules (yes/no, on/off, true/false, 1/0).

        Raises:
            ValueError: If the value is not a recognized boolean.
        """
        return self.parser.getboolean(section.name, key.name)
