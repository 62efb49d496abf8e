from __future__ import annotations

import logging
import warnings
from logging import NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import DEFAULT_NAMESPACE, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    LoggerUtils.reset()
    saved_showwarning = warnings.showwarning
    yield
    warnings.showwarning = saved_showwarning
    LoggerUtils.reset()


def _handler_types() -> list[type]:
    return [type(h) for h in logging.getLogger(DEFAULT_NAMESPACE).handlers]


def test_get_logger_prefixes_namespace() -> None:
    assert LoggerUtils.get_logger("core.translation.client").name == f"{DEFAULT_NAMESPACE}.core.translation.client"
    assert LoggerUtils.get_logger().name == DEFAULT_NAMESPACE


def test_console_only_configuration() -> None:
    utils = LoggerUtils("")

    assert _handler_types() == [StreamHandler]
    assert utils.root_logger.level == logging.INFO


def test_file_logging_writes_debug_records(tmp_path: Path) -> None:
    log_file: Path = tmp_path / "translation.log"
    LoggerUtils(log_file, debug=True, use_null_console=True)

    LoggerUtils.get_logger("test").debug("debug message %s", 42)
    for handler in logging.getLogger(DEFAULT_NAMESPACE).handlers:
        handler.flush()

    assert _handler_types() == [NullHandler, RotatingFileHandler]
    assert logging.getLogger(DEFAULT_NAMESPACE).level == logging.DEBUG
    assert "debug message 42" in log_file.read_text(encoding="utf-8")


def test_second_construction_is_a_no_op(tmp_path: Path) -> None:
    first = LoggerUtils("", use_null_console=True)
    second = LoggerUtils(tmp_path / "ignored.log")

    assert first is second
    assert _handler_types() == [NullHandler]
    assert not (tmp_path / "ignored.log").exists()


def test_invalid_log_file_is_reported(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger=DEFAULT_NAMESPACE)

    LoggerUtils(tmp_path / "missing-dir" / "translation.log", use_null_console=True)

    assert RotatingFileHandler not in _handler_types()
    assert any("Incorrect log file name" in rec.message for rec in caplog.records)


def test_warnings_are_routed_to_log(caplog: pytest.LogCaptureFixture) -> None:
    LoggerUtils("", use_null_console=True)
    caplog.set_level(logging.WARNING, logger=DEFAULT_NAMESPACE)

    warnings.showwarning("deprecated thing", DeprecationWarning, "module.py", 10)

    assert any("DeprecationWarning: deprecated thing" in rec.message for rec in caplog.records)
