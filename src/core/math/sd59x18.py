"""
SD59x18 — Знаковые fixed-point числа (59 целых разрядов, 18 дробных)

Значение — int в [-2^255, 2^255 - 1], x = raw / 10^18.

Знаковые операции сводятся к беззнаковому ядру: модули операндов
обрабатываются kernel/ud60x18, знак результата — XOR знаков операндов.
Деление знаковых значений всегда усекает к нулю (в отличие от // в Python).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все аргументы проверяются на int256 (ValueError)
2. MIN_SD59X18 не имеет представимого модуля → InputTooSmall в abs/mul/div
3. Модуль результата > MAX_SD59X18 → ArithError, никогда не перенос знака
"""

import builtins
from enum import Enum

from src.core.math.constants import (
    DOUBLE_SCALE,
    EXP2_MAX_INPUT,
    EXP2_MIN_INPUT_SD59X18,
    EXP_MAX_INPUT,
    EXP_MIN_INPUT_SD59X18,
    LOG2_10,
    LOG2_E,
    MAX_SCALED_SD59X18,
    MAX_SD59X18,
    MAX_WHOLE_SD59X18,
    MIN_SD59X18,
    MIN_WHOLE_SD59X18,
    SCALE,
)
from src.core.math.errors import (
    CeilOverflow,
    DivideByZero,
    DivOverflow,
    Exp2InputTooBig,
    ExpInputTooBig,
    FloorUnderflow,
    FromIntOverflow,
    GmNegativeProduct,
    GmOverflow,
    InputTooSmall,
    LogInputTooSmall,
    MulOverflow,
    SqrtNegativeInput,
    SqrtOverflow,
)
from src.core.math import kernel
from src.core.math import ud60x18
from src.core.math.numerical_safeguards import is_valid_int256, validate_int256, validate_uint256


# =============================================================================
# ЗНАК
# =============================================================================


class Sign(Enum):
    """Знак значения"""

    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def of(cls, x: int) -> "Sign":
        return cls.NEGATIVE if x < 0 else cls.POSITIVE

    def combine(self, other: "Sign") -> "Sign":
        """Знак произведения/частного (XOR)."""
        return Sign.POSITIVE if self is other else Sign.NEGATIVE

    def apply(self, magnitude: int) -> int:
        return -magnitude if self is Sign.NEGATIVE else magnitude


def _tdiv(x: int, y: int) -> int:
    """Целочисленное деление с усечением к нулю."""
    quotient = builtins.abs(x) // builtins.abs(y)
    return -quotient if (x < 0) != (y < 0) else quotient


def _tmod(x: int, y: int) -> int:
    """Остаток со знаком делимого (пара к _tdiv)."""
    return x - y * _tdiv(x, y)


def _magnitude(x: int) -> int:
    if x == MIN_SD59X18:
        raise InputTooSmall(x)
    return builtins.abs(x)


# =============================================================================
# КОНСТАНТЫ И КОНВЕРСИЯ
# =============================================================================


def scale() -> int:
    """1.0 в SD59x18."""
    return SCALE


def from_int(x: int) -> int:
    """
    Целое → SD59x18.

    Raises:
        FromIntOverflow: Если |x| > MAX_SD59X18 / 10^18
    """
    validate_int256(x, "x")
    if builtins.abs(x) > MAX_SCALED_SD59X18:
        raise FromIntOverflow(x)
    return x * SCALE


def to_int(x: int) -> int:
    """SD59x18 → целое (усечение к нулю)."""
    validate_int256(x, "x")
    return _tdiv(x, SCALE)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def abs(x: int) -> int:
    """
    |x|.

    Raises:
        InputTooSmall: Если x == MIN_SD59X18
    """
    validate_int256(x, "x")
    return _magnitude(x)


def avg(x: int, y: int) -> int:
    """
    Среднее арифметическое с округлением к нулю.

    Сумма половин; для нечётных операндов добавляется недостающая
    единица с учётом знака суммы.
    """
    validate_int256(x, "x")
    validate_int256(y, "y")

    total = (x >> 1) + (y >> 1)
    if total < 0:
        return total + ((x | y) & 1)
    return total + (x & y & 1)


def ceil(x: int) -> int:
    """
    Наименьшее целое >= x.

    Raises:
        CeilOverflow: Если x > MAX_WHOLE_SD59X18
    """
    validate_int256(x, "x")
    if x > MAX_WHOLE_SD59X18:
        raise CeilOverflow(x)

    remainder = _tmod(x, SCALE)
    if remainder == 0:
        return x

    result = x - remainder
    if x > 0:
        result += SCALE
    return result


def floor(x: int) -> int:
    """
    Наибольшее целое <= x.

    Raises:
        FloorUnderflow: Если x < MIN_WHOLE_SD59X18
    """
    validate_int256(x, "x")
    if x < MIN_WHOLE_SD59X18:
        raise FloorUnderflow(x)

    remainder = _tmod(x, SCALE)
    if remainder == 0:
        return x

    result = x - remainder
    if x < 0:
        result -= SCALE
    return result


def frac(x: int) -> int:
    """Дробная часть x со знаком x."""
    validate_int256(x, "x")
    return _tmod(x, SCALE)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def mul(x: int, y: int) -> int:
    """
    x * y с округлением модуля половины единицы вверх.

    Raises:
        InputTooSmall: Если x или y == MIN_SD59X18
        MulOverflow: Если |x * y| > MAX_SD59X18
    """
    validate_int256(x, "x")
    validate_int256(y, "y")

    magnitude = kernel.muldiv_fixed(_magnitude(x), _magnitude(y))
    if magnitude > MAX_SD59X18:
        raise MulOverflow(x, y)

    return Sign.of(x).combine(Sign.of(y)).apply(magnitude)


def div(x: int, y: int) -> int:
    """
    x / y с усечением к нулю.

    Raises:
        InputTooSmall: Если x или y == MIN_SD59X18
        DivideByZero: Если y == 0
        DivOverflow: Если |x / y| > MAX_SD59X18
    """
    validate_int256(x, "x")
    validate_int256(y, "y")

    magnitude = kernel.muldiv(_magnitude(x), SCALE, _magnitude(y))
    if magnitude > MAX_SD59X18:
        raise DivOverflow(x, y)

    return Sign.of(x).combine(Sign.of(y)).apply(magnitude)


def inv(x: int) -> int:
    """
    1 / x.

    Raises:
        DivideByZero: Если x == 0
    """
    validate_int256(x, "x")
    if x == 0:
        raise DivideByZero(DOUBLE_SCALE)
    return _tdiv(DOUBLE_SCALE, x)


# =============================================================================
# ЭКСПОНЕНТЫ
# =============================================================================


def exp2(x: int) -> int:
    """
    2^x.

    Для x < 0: 2^x = 1 / 2^|x|; ниже -59.794705707972522261 результат
    меньше 10^-18 и равен нулю.

    Raises:
        Exp2InputTooBig: Если x >= 192
    """
    validate_int256(x, "x")

    if x < 0:
        if x < EXP2_MIN_INPUT_SD59X18:
            return 0
        return DOUBLE_SCALE // exp2(-x)

    if x >= EXP2_MAX_INPUT:
        raise Exp2InputTooBig(x)

    return kernel.exp2_fixed((x << 64) // SCALE)


def exp(x: int) -> int:
    """
    e^x = 2^(x * log2(e)).

    Показатель округляется вниз (к минус бесконечности), как в UD60x18.

    Raises:
        ExpInputTooBig: Если x >= 133.084258667509499441
    """
    validate_int256(x, "x")

    if x < EXP_MIN_INPUT_SD59X18:
        return 0
    if x >= EXP_MAX_INPUT:
        raise ExpInputTooBig(x)

    return exp2(x * LOG2_E // SCALE)


# =============================================================================
# ЛОГАРИФМЫ
# =============================================================================


def log2(x: int) -> int:
    """
    Двоичный логарифм, log2(x) = -log2(1/x) для x < 1.

    Raises:
        LogInputTooSmall: Если x <= 0

    Examples:
        >>> log2(SCALE // 2)
        -1000000000000000000
    """
    validate_int256(x, "x")
    if x <= 0:
        raise LogInputTooSmall(x)

    if x >= SCALE:
        return ud60x18.log2(x)

    return -ud60x18.log2(DOUBLE_SCALE // x)


def ln(x: int) -> int:
    """
    Натуральный логарифм.

    Raises:
        LogInputTooSmall: Если x <= 0
    """
    return _tdiv(log2(x) * SCALE, LOG2_E)


def log10(x: int) -> int:
    """
    Десятичный логарифм; точен для 10^-18 .. 10^58.

    Raises:
        LogInputTooSmall: Если x <= 0
    """
    validate_int256(x, "x")
    if x <= 0:
        raise LogInputTooSmall(x)

    k = kernel.power_of_ten_exponent(x)
    if k is not None:
        return (k - 18) * SCALE

    return _tdiv(log2(x) * SCALE, LOG2_10)


# =============================================================================
# СТЕПЕНИ И КОРНИ
# =============================================================================


def pow(x: int, y: int) -> int:
    """
    x^y = 2^(log2(x) * y).

    Raises:
        LogInputTooSmall: Если x < 0
        Exp2InputTooBig: Если результат не помещается в домен
    """
    validate_int256(x, "x")
    validate_int256(y, "y")

    if x == 0:
        return SCALE if y == 0 else 0

    return exp2(mul(log2(x), y))


def powu(x: int, y: int) -> int:
    """
    x^y для целого беззнакового показателя.

    Результат отрицателен, только если x < 0 и y нечётный.

    Raises:
        InputTooSmall: Если x == MIN_SD59X18
        MulOverflow: Если |x^y| > MAX_SD59X18
    """
    validate_int256(x, "x")
    validate_uint256(y, "y")

    magnitude = ud60x18.powu(_magnitude(x), y)
    if magnitude > MAX_SD59X18:
        raise MulOverflow(x, y)

    if x < 0 and kernel.is_odd(y):
        return -magnitude
    return magnitude


def sqrt(x: int) -> int:
    """
    Квадратный корень.

    Raises:
        SqrtNegativeInput: Если x < 0
        SqrtOverflow: Если x > MAX_SD59X18 / 10^18
    """
    validate_int256(x, "x")
    if x < 0:
        raise SqrtNegativeInput(x)
    if x > MAX_SCALED_SD59X18:
        raise SqrtOverflow(x)
    return kernel.sqrt(x * SCALE)


def gm(x: int, y: int) -> int:
    """
    Среднее геометрическое sqrt(x * y).

    Raises:
        GmOverflow: Если x * y вне int256
        GmNegativeProduct: Если x * y < 0
    """
    validate_int256(x, "x")
    validate_int256(y, "y")
    if x == 0 or y == 0:
        return 0

    product = x * y
    if not is_valid_int256(product):
        raise GmOverflow(x, y)
    if product < 0:
        raise GmNegativeProduct(x, y)

    return kernel.sqrt(product)
