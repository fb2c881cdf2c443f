"""
Structured Logging Configuration Module

JSON-форматированное логирование для приложений, использующих библиотеку.
Сама библиотека только пишет в module-логгеры (logging.getLogger(__name__))
и не настраивает обработчики.
"""

import json
import logging
from datetime import datetime, timezone

# Корневой логгер пакета
ROOT_LOGGER_NAME = "src.core"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Настройка JSON-логирования для логгера пакета.

    Args:
        level: Уровень (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Имя логгера

    Returns:
        Настроенный логгер
    """
    logger = logging.getLogger(logger_name)

    # Удаляем существующие обработчики, чтобы не дублировать вывод
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
