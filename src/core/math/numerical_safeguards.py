"""
Numerical Safeguards — Валидация операндов и сравнения с допуском

Модуль обеспечивает входной контроль и сравнение fixed-point значений:
- Проверка, что операнд — int в 256-битном беззнаковом/знаковом диапазоне
- Сравнения с абсолютным допуском (в единицах 10^-18)
- Сравнения с относительным допуском (отклонение как UD60x18 доля)

Python int не ограничен по разрядности, поэтому 256-битный диапазон
контролируется явно на входе каждой публичной операции.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bool не считается допустимым операндом (хотя bool — подкласс int)
2. Операнд вне диапазона → ValueError, а не ArithError
3. Все сравнения точные, без float
"""

from typing import Final

from src.core.math.constants import I256_MAX, I256_MIN, SCALE, U256_MAX

# =============================================================================
# ДОПУСКИ ПО УМОЛЧАНИЮ
# =============================================================================

# Абсолютный допуск: одна единица последнего (18-го) знака
TOL_ULP: Final[int] = 1

# Относительный допуск по умолчанию: 1e-15 в формате UD60x18
DEVIATION_DEFAULT: Final[int] = 1_000


# =============================================================================
# ПРОВЕРКА ДИАПАЗОНОВ
# =============================================================================


def is_valid_uint256(value: object) -> bool:
    """
    Проверка, что значение — int в диапазоне [0, 2^256 - 1].

    Examples:
        >>> is_valid_uint256(0)
        True
        >>> is_valid_uint256(-1)
        False
        >>> is_valid_uint256(2**256)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= U256_MAX


def is_valid_int256(value: object) -> bool:
    """Проверка, что значение — int в диапазоне [-2^255, 2^255 - 1]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return I256_MIN <= value <= I256_MAX


def validate_uint256(value: int, name: str) -> None:
    """
    Валидация беззнакового 256-битного операнда.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int или вне [0, 2^256 - 1]
    """
    if not is_valid_uint256(value):
        raise ValueError(f"{name} must be an unsigned 256-bit integer, got {value!r}")


def validate_int256(value: int, name: str) -> None:
    """
    Валидация знакового 256-битного операнда.

    Raises:
        ValueError: Если value не int или вне [-2^255, 2^255 - 1]
    """
    if not is_valid_int256(value):
        raise ValueError(f"{name} must be a signed 256-bit integer, got {value!r}")


def validate_in_range(
    value: int,
    name: str,
    min_value: int | None = None,
    max_value: int | None = None,
) -> None:
    """
    Валидация, что целое значение в заданном диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Raises:
        ValueError: Если value не int или вне диапазона
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")


# =============================================================================
# СРАВНЕНИЯ С ДОПУСКОМ
# =============================================================================


def compare_with_tolerance(a: int, b: int, tol: int = TOL_ULP) -> int:
    """
    Сравнение двух fixed-point значений с абсолютным допуском.

    Args:
        a: Первое значение
        b: Второе значение
        tol: Абсолютный допуск в единицах 10^-18 (default: TOL_ULP)

    Returns:
        -1 если a < b (с учётом tol)
         0 если |a - b| <= tol
        +1 если a > b (с учётом tol)

    Examples:
        >>> compare_with_tolerance(10, 20)
        -1
        >>> compare_with_tolerance(10, 11)
        0
    """
    diff = a - b

    if abs(diff) <= tol:
        return 0
    elif diff < 0:
        return -1
    else:
        return 1


def is_close(a: int, b: int, tol: int = TOL_ULP) -> bool:
    """Проверка |a - b| <= tol."""
    return compare_with_tolerance(a, b, tol) == 0


def deviation(expected: int, actual: int) -> int:
    """
    Относительное отклонение |actual - expected| / |expected| в UD60x18.

    Округление вниз. Используется для проверки приближённых функций
    (log2, exp2, pow) против эталонных значений.

    Raises:
        ValueError: Если expected == 0 (относительное отклонение не определено)
    """
    if expected == 0:
        raise ValueError("expected must be non-zero for relative deviation")
    return abs(actual - expected) * SCALE // abs(expected)


def within_deviation(expected: int, actual: int, max_deviation: int = DEVIATION_DEFAULT) -> bool:
    """
    Проверка, что относительное отклонение не превышает max_deviation.

    Args:
        expected: Эталонное значение
        actual: Вычисленное значение
        max_deviation: Максимальное отклонение в UD60x18 (1e18 = 100%)

    Returns:
        True если deviation(expected, actual) <= max_deviation
    """
    if expected == actual:
        return True
    return deviation(expected, actual) <= max_deviation
