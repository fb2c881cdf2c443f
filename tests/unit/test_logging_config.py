"""
Тесты для модуля Structured Logging Configuration

Проверяет:
1. JSON-формат записи лога
2. Настройку обработчиков без дублирования
"""

import json
import logging
import sys

import pytest

from src.core.domain.rebase import Rebase
from src.core.logging_config import ROOT_LOGGER_NAME, JSONFormatter, get_logger, setup_logging

TEST_LOGGER_NAME = "tests.logging_config"


@pytest.fixture
def test_logger():
    """Изолированный логгер, восстанавливаемый после теста"""
    logger = logging.getLogger(TEST_LOGGER_NAME)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def package_logger():
    """Корневой логгер пакета, восстанавливаемый после теста"""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def _record(msg: str, *args, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="src.core.domain.rebase",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Тесты для JSONFormatter"""

    def test_fields(self) -> None:
        """Запись содержит timestamp, level, logger, message"""
        entry = json.loads(JSONFormatter().format(_record("add_elastic: +%d", 10)))

        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "src.core.domain.rebase"
        assert entry["message"] == "add_elastic: +10"
        assert "timestamp" in entry
        assert "exception" not in entry

    def test_large_integers_preserved(self) -> None:
        """256-битные значения не теряют точность"""
        value = 2**256 - 1
        entry = json.loads(JSONFormatter().format(_record("value=%d", value)))
        assert entry["message"] == f"value={value}"

    def test_exception(self) -> None:
        """Трассировка исключения попадает в поле exception"""
        try:
            raise ZeroDivisionError("boom")
        except ZeroDivisionError:
            record = _record("failed", exc_info=sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))
        assert "ZeroDivisionError: boom" in entry["exception"]


class TestSetupLogging:
    """Тесты для setup_logging / get_logger"""

    def test_single_json_handler(self, test_logger: logging.Logger) -> None:
        """Повторная настройка не дублирует обработчики"""
        setup_logging("debug", TEST_LOGGER_NAME)
        logger = setup_logging("DEBUG", TEST_LOGGER_NAME)

        assert logger is test_logger
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_get_logger(self) -> None:
        """По умолчанию корневой логгер пакета"""
        assert get_logger().name == ROOT_LOGGER_NAME
        assert get_logger(TEST_LOGGER_NAME).name == TEST_LOGGER_NAME

    def test_package_loggers_emit_json(
        self, package_logger: logging.Logger, capsys: pytest.CaptureFixture
    ) -> None:
        """setup_logging() по умолчанию подключает module-логгеры пакета"""
        setup_logging("DEBUG")
        Rebase.zero().add_elastic(100)

        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        entries = [json.loads(line) for line in lines]
        assert any(
            entry["logger"] == "src.core.domain.rebase" and "add_elastic" in entry["message"]
            for entry in entries
        )
