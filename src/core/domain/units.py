"""
TokenUnits — Централизованный модуль конверсии точности токенов

Единственный допустимый способ преобразований между:
- нативной суммой токена (decimals разрядов, 0..18)
- нормализованной суммой (18 разрядов, UD60x18)
- нормализованной суммой, округлённой до точности токена

ЗАПРЕЩЕНО смешивать нативные и нормализованные суммы без явного
конвертера из этого модуля.
"""

import logging
from typing import Final, Optional

from pydantic import BaseModel, Field

from src.core.math.constants import DECIMALS
from src.core.math.kernel import bankers_round, exp10, muldiv
from src.core.math.numerical_safeguards import validate_in_range, validate_uint256

logger = logging.getLogger(__name__)


# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Внутренняя точность системы (совпадает с UD60x18)
NORMALIZED_DECIMALS: Final[int] = DECIMALS

# Минимально допустимая точность токена
TOKEN_DECIMALS_MIN: Final[int] = 0


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def validate_decimals(decimals: int) -> None:
    """
    Валидация точности токена.

    Raises:
        ValueError: Если decimals вне [0, 18]
    """
    validate_in_range(decimals, "decimals", TOKEN_DECIMALS_MIN, NORMALIZED_DECIMALS)


def normalize(amount: int, decimals: int) -> int:
    """
    Конверсия: нативная сумма токена → 18 разрядов.

    Args:
        amount: Сумма в нативных единицах токена
        decimals: Точность токена (0..18)

    Returns:
        amount * 10^18 / 10^decimals

    Raises:
        MulOverflow: Если нормализованная сумма не помещается в 256 бит

    Examples:
        >>> normalize(1_500_000, 6)
        1500000000000000000
    """
    validate_uint256(amount, "amount")
    validate_decimals(decimals)

    if decimals == NORMALIZED_DECIMALS:
        return amount
    return muldiv(amount, exp10(NORMALIZED_DECIMALS), exp10(decimals))


def denormalize(amount: int, decimals: int) -> int:
    """
    Конверсия: 18 разрядов → нативная сумма токена (с усечением).

    Examples:
        >>> denormalize(1_500_000_999_999_999_999, 6)
        1500000
    """
    validate_uint256(amount, "amount")
    validate_decimals(decimals)

    if decimals == NORMALIZED_DECIMALS:
        return amount
    return amount // exp10(NORMALIZED_DECIMALS - decimals)


def to_token_precision(amount: int, decimals: int, round_nearest: bool = False) -> int:
    """
    Приведение нормализованной суммы к точности токена.

    Результат остаётся в 18 разрядах, но младшие (18 - decimals) разрядов
    обнулены: усечением или банковским округлением.

    Args:
        amount: Нормализованная сумма (18 разрядов)
        decimals: Точность токена (0..18)
        round_nearest: True: bankers_round, False: усечение

    Returns:
        Нормализованная сумма, представимая в точности токена

    Raises:
        AddOverflow: Если округление вверх выходит за 2^256 - 1
    """
    validate_uint256(amount, "amount")
    validate_decimals(decimals)

    if decimals == NORMALIZED_DECIMALS:
        return amount

    precision_diff = NORMALIZED_DECIMALS - decimals
    if round_nearest:
        return bankers_round(amount, precision_diff)

    precision = exp10(precision_diff)
    return amount // precision * precision


# =============================================================================
# TOKEN MODEL
# =============================================================================


class Token(BaseModel):
    """
    Описание точности токена.

    Immutable модель (frozen=True).
    """

    decimals: int = Field(
        ..., ge=TOKEN_DECIMALS_MIN, le=NORMALIZED_DECIMALS, description="Нативная точность токена"
    )
    symbol: Optional[str] = Field(None, min_length=1, description="Тикер (например, 'USDC')")

    model_config = {"frozen": True}  # Immutable

    def normalize(self, amount: int) -> int:
        """Нативная сумма → 18 разрядов."""
        return normalize(amount, self.decimals)

    def denormalize(self, amount: int) -> int:
        """18 разрядов → нативная сумма."""
        return denormalize(amount, self.decimals)

    def to_token_precision(self, amount: int, round_nearest: bool = False) -> int:
        """Нормализованная сумма, округлённая до точности токена."""
        result = to_token_precision(amount, self.decimals, round_nearest)
        if result != amount:
            logger.debug(
                "%s: %d adjusted to %d decimals -> %d (round_nearest=%s)",
                self.symbol or "token",
                amount,
                self.decimals,
                result,
                round_nearest,
            )
        return result
