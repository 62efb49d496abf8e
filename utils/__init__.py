"""Utility modules for the translation client."""

from utils.logger_utils import LoggerUtils

__all__: list[str] = ["LoggerUtils"]
