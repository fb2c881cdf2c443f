"""
Storage Records — Конверсия моделей в wire/storage представление

Каждая модель имеет две формы:
- эргономичную (Pydantic модель с int полями)
- storage-запись (dict, 256-битные целые как десятичные строки)

Конверсия — явная пара функций to_record / from_record для каждой модели.
Записи при чтении проверяются JSON Schema контрактом.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. from_record(to_record(m)) == m для любой валидной модели
2. Строка вне 256-битного диапазона → ValueError, а не усечение
"""

import logging
import re
from typing import Any, Dict, Final

from src.core.contracts.validators import validate_rebase_record, validate_token_record
from src.core.domain.rebase import Rebase
from src.core.domain.units import Token
from src.core.math.numerical_safeguards import validate_int256, validate_uint256

logger = logging.getLogger(__name__)

# Десятичная запись без ведущих нулей
UINT_WIRE_PATTERN: Final = re.compile(r"0|[1-9][0-9]*")
INT_WIRE_PATTERN: Final = re.compile(r"0|-?[1-9][0-9]*")


# =============================================================================
# WIRE КОНВЕРТЕРЫ
# =============================================================================


def uint256_to_wire(value: int) -> str:
    """
    uint256 → десятичная строка.

    Examples:
        >>> uint256_to_wire(2**64)
        '18446744073709551616'
    """
    validate_uint256(value, "value")
    return str(value)


def uint256_from_wire(raw: str) -> int:
    """
    Десятичная строка → uint256.

    Raises:
        ValueError: Если строка не каноническая десятичная запись
            или значение вне [0, 2^256 - 1]
    """
    if not isinstance(raw, str) or UINT_WIRE_PATTERN.fullmatch(raw) is None:
        raise ValueError(f"Invalid uint256 wire value: {raw!r}")
    value = int(raw)
    validate_uint256(value, "value")
    return value


def int256_to_wire(value: int) -> str:
    """int256 → десятичная строка со знаком."""
    validate_int256(value, "value")
    return str(value)


def int256_from_wire(raw: str) -> int:
    """
    Десятичная строка со знаком → int256.

    Raises:
        ValueError: Если строка не каноническая или значение вне int256
    """
    if not isinstance(raw, str) or INT_WIRE_PATTERN.fullmatch(raw) is None:
        raise ValueError(f"Invalid int256 wire value: {raw!r}")
    value = int(raw)
    validate_int256(value, "value")
    return value


# =============================================================================
# REBASE
# =============================================================================


def rebase_to_record(rebase: Rebase) -> Dict[str, Any]:
    """Rebase → storage-запись."""
    return {
        "elastic": uint256_to_wire(rebase.elastic),
        "base": uint256_to_wire(rebase.base),
    }


def rebase_from_record(record: Dict[str, Any]) -> Rebase:
    """
    Storage-запись → Rebase.

    Raises:
        ValidationError: Если запись не соответствует схеме rebase.json
        ValueError: Если значение вне 256-битного диапазона
    """
    validate_rebase_record(record)
    rebase = Rebase(
        elastic=uint256_from_wire(record["elastic"]),
        base=uint256_from_wire(record["base"]),
    )
    logger.debug("Loaded rebase record: %r", rebase)
    return rebase


# =============================================================================
# TOKEN
# =============================================================================


def token_to_record(token: Token) -> Dict[str, Any]:
    """Token → storage-запись."""
    record: Dict[str, Any] = {"decimals": token.decimals}
    if token.symbol is not None:
        record["symbol"] = token.symbol
    return record


def token_from_record(record: Dict[str, Any]) -> Token:
    """
    Storage-запись → Token.

    Raises:
        ValidationError: Если запись не соответствует схеме token.json
    """
    validate_token_record(record)
    return Token(decimals=record["decimals"], symbol=record.get("symbol"))
