"""
UD60x18 — Беззнаковые fixed-point числа (60 целых разрядов, 18 дробных)

Значение — int в [0, 2^256 - 1], x = raw / 10^18.

Операции:
- Арифметика: mul, div, inv, avg, mul_ratio
- Округление: floor, ceil, frac
- Экспоненты и логарифмы: exp, exp2, ln, log2, log10
- Степени и корни: pow, powu, sqrt, gm
- Конверсия: from_uint, to_uint

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все аргументы проверяются на uint256 (ValueError)
2. Переполнение → ArithError, никогда не усечение по модулю 2^256
3. log2 точен для степеней двойки, log10 — для степеней десяти
4. Результаты приближённых функций округлены вниз (кроме mul: половина вверх)
"""

from src.core.math.constants import (
    DOUBLE_SCALE,
    E,
    EXP2_MAX_INPUT,
    EXP_MAX_INPUT,
    HALF_SCALE,
    LOG2_10,
    LOG2_E,
    MAX_SCALED_UD60X18,
    MAX_WHOLE_UD60X18,
    PI,
    SCALE,
)
from src.core.math.errors import (
    CeilOverflow,
    DivideByZero,
    Exp2InputTooBig,
    ExpInputTooBig,
    FromUintOverflow,
    GmOverflow,
    LogInputTooSmall,
    SqrtOverflow,
)
from src.core.math import kernel
from src.core.math.numerical_safeguards import validate_uint256
from src.core.math.wide import mul_wide


# =============================================================================
# КОНСТАНТЫ И КОНВЕРСИЯ
# =============================================================================


def scale() -> int:
    """1.0 в UD60x18."""
    return SCALE


def e() -> int:
    """Число Эйлера в UD60x18."""
    return E


def pi() -> int:
    """Число π в UD60x18."""
    return PI


def from_uint(x: int) -> int:
    """
    Целое → UD60x18 (x * 10^18).

    Raises:
        FromUintOverflow: Если x > MAX_SCALED_UD60X18
    """
    validate_uint256(x, "x")
    if x > MAX_SCALED_UD60X18:
        raise FromUintOverflow(x)
    return x * SCALE


def to_uint(x: int) -> int:
    """UD60x18 → целое (дробная часть отбрасывается)."""
    validate_uint256(x, "x")
    return x // SCALE


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def floor(x: int) -> int:
    """Наибольшее целое <= x."""
    validate_uint256(x, "x")
    return x - x % SCALE


def ceil(x: int) -> int:
    """
    Наименьшее целое >= x.

    Raises:
        CeilOverflow: Если x > MAX_WHOLE_UD60X18
    """
    validate_uint256(x, "x")
    if x > MAX_WHOLE_UD60X18:
        raise CeilOverflow(x)

    remainder = x % SCALE
    if remainder == 0:
        return x
    return x - remainder + SCALE


def frac(x: int) -> int:
    """Дробная часть x."""
    validate_uint256(x, "x")
    return x % SCALE


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def avg(x: int, y: int) -> int:
    """
    Среднее арифметическое с округлением вниз.

    (x & y) + ((x ^ y) >> 1): общие биты плюс половина различающихся.
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")
    return (x & y) + ((x ^ y) >> 1)


def mul(x: int, y: int) -> int:
    """
    x * y с округлением половины единицы последнего разряда вверх.

    Raises:
        MulOverflow: Если результат не помещается в 256 бит
    """
    return kernel.muldiv_fixed(x, y)


def div(x: int, y: int) -> int:
    """
    x / y с округлением вниз.

    Raises:
        DivideByZero: Если y == 0
        MulOverflow: Если результат не помещается в 256 бит

    Examples:
        >>> div(22 * SCALE, 7 * SCALE)
        3142857142857142857
    """
    return kernel.muldiv(x, SCALE, y)


def mul_ratio(x: int, numerator: int, denominator: int) -> int:
    """x * (numerator / denominator)."""
    return mul(x, div(numerator, denominator))


def inv(x: int) -> int:
    """
    1 / x.

    Raises:
        DivideByZero: Если x == 0
    """
    validate_uint256(x, "x")
    if x == 0:
        raise DivideByZero(DOUBLE_SCALE)
    return DOUBLE_SCALE // x


# =============================================================================
# ЭКСПОНЕНТЫ
# =============================================================================


def exp2(x: int) -> int:
    """
    2^x.

    Raises:
        Exp2InputTooBig: Если x >= 192 (результат не помещается в 256 бит)

    Examples:
        >>> exp2(SCALE)
        2000000000000000000
    """
    validate_uint256(x, "x")
    if x >= EXP2_MAX_INPUT:
        raise Exp2InputTooBig(x)

    # x в формате 192.64
    x_192x64 = (x << 64) // SCALE
    return kernel.exp2_fixed(x_192x64)


def exp(x: int) -> int:
    """
    e^x = 2^(x * log2(e)).

    Показатель x * log2(e) округляется вниз до 18 разрядов.

    Raises:
        ExpInputTooBig: Если x >= 133.084258667509499441
    """
    validate_uint256(x, "x")
    if x >= EXP_MAX_INPUT:
        raise ExpInputTooBig(x)

    return exp2(x * LOG2_E // SCALE)


# =============================================================================
# ЛОГАРИФМЫ
# =============================================================================


def log2(x: int) -> int:
    """
    Двоичный логарифм (итеративная аппроксимация).

    Целая часть — старший бит floor(x); дробная часть — последовательным
    возведением в квадрат y = x / 2^n: каждый раз, когда y >= 2,
    к результату добавляется текущий delta, а y делится пополам.

    Raises:
        LogInputTooSmall: Если x < 1.0 (результат был бы отрицательным)

    Examples:
        >>> log2(4 * SCALE)
        2000000000000000000
    """
    validate_uint256(x, "x")
    if x < SCALE:
        raise LogInputTooSmall(x)

    n = kernel.most_significant_bit(x // SCALE)
    result = n * SCALE

    y = x >> n
    if y == SCALE:
        return result

    delta = HALF_SCALE
    double_scale = 2 * SCALE
    while delta > 0:
        y = y * y // SCALE
        if y >= double_scale:
            result += delta
            y >>= 1
        delta >>= 1

    return result


def ln(x: int) -> int:
    """
    Натуральный логарифм: log2(x) / log2(e).

    Raises:
        LogInputTooSmall: Если x < 1.0
    """
    return log2(x) * SCALE // LOG2_E


def log10(x: int) -> int:
    """
    Десятичный логарифм.

    Точные степени десяти возвращаются из таблицы, остальные значения —
    через log2(x) / log2(10).

    Raises:
        LogInputTooSmall: Если x < 1.0
    """
    validate_uint256(x, "x")
    if x < SCALE:
        raise LogInputTooSmall(x)

    k = kernel.power_of_ten_exponent(x)
    if k is not None:
        return (k - 18) * SCALE

    return log2(x) * SCALE // LOG2_10


# =============================================================================
# СТЕПЕНИ И КОРНИ
# =============================================================================


def pow(x: int, y: int) -> int:
    """
    x^y = 2^(log2(x) * y) для fixed-point показателя.

    Для 0 < x < 1 log2 не определён в беззнаковом домене, поэтому
    используется x^y = 1 / (1/x)^y.

    Args:
        x: Основание (UD60x18)
        y: Показатель (UD60x18)

    Raises:
        Exp2InputTooBig: Если результат не помещается в 256 бит

    Examples:
        >>> pow(4 * SCALE, 2 * SCALE)
        16000000000000000000
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")

    if x == 0:
        return SCALE if y == 0 else 0
    if x == SCALE or y == 0:
        return SCALE
    if y == SCALE:
        return x

    if x > SCALE:
        return exp2(mul(log2(x), y))

    inverse = DOUBLE_SCALE // x
    w = exp2(mul(log2(inverse), y))
    return DOUBLE_SCALE // w


def powu(x: int, y: int) -> int:
    """
    x^y для целого показателя (возведение в квадрат).

    Args:
        x: Основание (UD60x18)
        y: Показатель (обычное целое, не fixed-point)

    Raises:
        MulOverflow: Если результат не помещается в 256 бит

    Examples:
        >>> powu(2 * SCALE, 5)
        32000000000000000000
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")

    result = x if kernel.is_odd(y) else SCALE

    y >>= 1
    while y > 0:
        x = kernel.muldiv_fixed(x, x)
        if kernel.is_odd(y):
            result = kernel.muldiv_fixed(result, x)
        y >>= 1

    return result


def sqrt(x: int) -> int:
    """
    Квадратный корень fixed-point значения: isqrt(x * 10^18).

    Raises:
        SqrtOverflow: Если x > MAX_UD60X18 / 10^18
    """
    validate_uint256(x, "x")
    if x > MAX_SCALED_UD60X18:
        raise SqrtOverflow(x)
    return kernel.sqrt(x * SCALE)


def gm(x: int, y: int) -> int:
    """
    Среднее геометрическое sqrt(x * y).

    Произведение двух fixed-point значений уже имеет масштаб 10^36,
    поэтому корень берётся целочисленный, без домножения на SCALE.

    Raises:
        GmOverflow: Если x * y не помещается в 256 бит
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")
    if x == 0 or y == 0:
        return 0

    prod = mul_wide(x, y)
    if prod.hi != 0:
        raise GmOverflow(x, y)

    return kernel.sqrt(prod.lo)
