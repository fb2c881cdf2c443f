"""
Fixed-Point Kernel — Базовые целочисленные примитивы

Примитивы, на которых построены домены UD60x18 и SD59x18:
- muldiv / muldiv_fixed: floor(x*y/d) с 512-битным промежуточным произведением
- bankers_round: округление по десятичному разряду
- sqrt: целочисленный корень (метод Вавилона)
- most_significant_bit, avg, abs_diff, checked_add / checked_sub
- exp2_fixed: двоичная экспонента в формате 192.64
- exp10 / power_of_ten_exponent: таблица степеней десяти

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операнды — uint256; вне диапазона → ValueError
2. Никакое промежуточное произведение двух uint256 не усекается (только через wide)
3. muldiv округляет вниз; muldiv_fixed округляет половину вверх
4. Фиксированное число итераций везде (детерминизм)
"""

from typing import Optional

from src.core.math.constants import (
    EXP2_FACTORS,
    EXP2_SEED,
    POWERS_OF_TEN,
    SCALE,
    SCALE_HALF_REMAINDER,
    SCALE_INVERSE,
    SCALE_LPOTD,
    TWO_TO_256,
    U256_MAX,
)
from src.core.math.errors import (
    AddOverflow,
    DivideByZero,
    MulDivFixedPointOverflow,
    MulDivOverflow,
    SubUnderflow,
)
from src.core.math.numerical_safeguards import validate_in_range, validate_uint256
from src.core.math.wide import div_wide, mul_wide, mulmod

# Число итераций Ньютона в sqrt
SQRT_ITERATIONS = 7

# Маска дробной части формата 192.64
FRACTION_64_MASK = (1 << 64) - 1


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(x: int, y: int) -> int:
    """
    x + y с контролем переполнения uint256.

    Raises:
        AddOverflow: Если x + y > 2^256 - 1
    """
    result = x + y
    if result > U256_MAX:
        raise AddOverflow(x, y)
    return result


def checked_sub(x: int, y: int) -> int:
    """
    x - y с контролем ухода в минус.

    Raises:
        SubUnderflow: Если y > x
    """
    if y > x:
        raise SubUnderflow(x, y)
    return x - y


def abs_diff(x: int, y: int) -> int:
    """|x - y|"""
    return x - y if x >= y else y - x


def is_odd(x: int) -> bool:
    return x & 1 == 1


def avg(x: int, y: int) -> int:
    """
    floor((x + y) / 2) без переполнения промежуточной суммы.

    Examples:
        >>> avg(3, 5)
        4
        >>> avg(3, 4)
        3
    """
    return (x >> 1) + (y >> 1) + (x & y & 1)


# =============================================================================
# MULDIV
# =============================================================================


def muldiv(x: int, y: int, denominator: int) -> int:
    """
    floor(x * y / denominator) с полной точностью.

    Промежуточное произведение x * y считается в 512 битах; ошибка
    возникает, только если итоговое частное не помещается в 256 бит.

    Args:
        x: Множитель (uint256)
        y: Множитель (uint256)
        denominator: Делитель (uint256)

    Returns:
        Частное (uint256), округлённое вниз

    Raises:
        DivideByZero: Если denominator == 0
        MulDivOverflow: Если частное >= 2^256

    Examples:
        >>> muldiv(19318389123, 1319320194941, 219031831291)
        116362725698
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")
    validate_uint256(denominator, "denominator")

    if denominator == 0:
        raise DivideByZero(x)

    prod = mul_wide(x, y)

    if prod.hi == 0:
        return prod.lo // denominator

    if prod.hi >= denominator:
        raise MulDivOverflow(prod.hi, denominator)

    return div_wide(prod, denominator)


def muldiv_fixed(x: int, y: int) -> int:
    """
    x * y / SCALE для fixed-point множителей с округлением половины вверх.

    Делитель SCALE = 2^18 * 5^18 фиксирован, поэтому степень двойки
    (SCALE_LPOTD) и обратный элемент нечётной части (SCALE_INVERSE)
    вычислены заранее.

    Raises:
        MulDivFixedPointOverflow: Если результат не помещается в 256 бит
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")

    prod = mul_wide(x, y)
    if prod.hi >= SCALE:
        raise MulDivFixedPointOverflow(prod.hi)

    remainder = mulmod(x, y, SCALE)
    round_up = 1 if remainder > SCALE_HALF_REMAINDER else 0

    if prod.hi == 0:
        return prod.lo // SCALE + round_up

    hi, lo = prod
    if remainder > lo:
        hi -= 1
    lo = ((lo - remainder) & U256_MAX) // SCALE_LPOTD
    flip = (TWO_TO_256 - SCALE_LPOTD) // SCALE_LPOTD + 1

    result = ((lo | ((hi * flip) & U256_MAX)) * SCALE_INVERSE) & U256_MAX
    result += round_up
    if result > U256_MAX:
        raise MulDivFixedPointOverflow(prod.hi)
    return result


# =============================================================================
# ДЕСЯТИЧНЫЕ РАЗРЯДЫ
# =============================================================================


def exp10(n: int) -> int:
    """
    10^n из таблицы степеней десяти.

    Raises:
        ValueError: Если 10^n не помещается в 256 бит (n вне [0, 77])
    """
    validate_in_range(n, "n", 0, len(POWERS_OF_TEN) - 1)
    return POWERS_OF_TEN[n]


def nth_digit(x: int, digit: int) -> int:
    """
    Десятичная цифра x в позиции digit (1 — единицы, 2 — десятки, ...).

    Examples:
        >>> nth_digit(99958, 1)
        8
        >>> nth_digit(99958, 2)
        5
    """
    validate_in_range(digit, "digit", 1)
    return (x // 10 ** (digit - 1)) % 10


def bankers_round(x: int, digit: int) -> int:
    """
    Округление x до кратного 10^digit по цифре в позиции digit.

    Правило:
    - цифра > 5 → вверх, цифра < 5 → вниз
    - цифра == 5 → вверх, только если следующая старшая цифра нечётная
      (к чётному)

    Args:
        x: Значение (uint256)
        digit: Позиция проверяемой цифры (>= 1)

    Returns:
        x, выровненный на кратное 10^digit

    Raises:
        ValueError: Если digit вне [1, 77]
        AddOverflow: Если округление вверх выходит за 2^256 - 1

    Examples:
        >>> bankers_round(99958, 2)
        100000
        >>> bankers_round(99945, 2)
        99900
        >>> bankers_round(745, 1)
        740
    """
    validate_uint256(x, "x")
    validate_in_range(digit, "digit", 1, len(POWERS_OF_TEN) - 1)

    precision = POWERS_OF_TEN[digit]
    inspected = nth_digit(x, digit)

    if inspected == 5:
        round_up = is_odd(nth_digit(x, digit + 1))
    else:
        round_up = inspected > 5

    if round_up:
        x = checked_add(x, precision)

    return x // precision * precision


def power_of_ten_exponent(x: int) -> Optional[int]:
    """
    k, если x == 10^k точно, иначе None.

    Индекс в таблице вычисляется из старшего бита (1233 / 4096 ≈ log10(2))
    и корректируется не более чем на единицу.
    """
    if x == 0:
        return None

    k = (most_significant_bit(x) * 1233) >> 12
    if k + 1 < len(POWERS_OF_TEN) and x >= POWERS_OF_TEN[k + 1]:
        k += 1

    return k if x == POWERS_OF_TEN[k] else None


# =============================================================================
# БИТОВЫЕ ОПЕРАЦИИ И КОРЕНЬ
# =============================================================================


def most_significant_bit(x: int) -> int:
    """
    Индекс старшего установленного бита (двоичный поиск).

    most_significant_bit(0) == 0.

    Examples:
        >>> most_significant_bit(1)
        0
        >>> most_significant_bit(2**255)
        255
    """
    validate_uint256(x, "x")

    msb = 0
    for shift in (128, 64, 32, 16, 8, 4, 2):
        if x >= 1 << shift:
            x >>= shift
            msb += shift
    if x >= 2:
        msb += 1
    return msb


def sqrt(x: int) -> int:
    """
    floor(sqrt(x)) для uint256 (метод Вавилона).

    Начальное приближение — степень двойки по разрядности x, затем
    семь итераций Ньютона и выбор меньшего из result, x // result.

    Examples:
        >>> sqrt(0)
        0
        >>> sqrt(16)
        4
        >>> sqrt(17)
        4
    """
    validate_uint256(x, "x")
    if x == 0:
        return 0

    x_aux = x
    result = 1
    for shift in (128, 64, 32, 16, 8, 4):
        if x_aux >= 1 << shift:
            x_aux >>= shift
            result <<= shift // 2
    if x_aux >= 4:
        result <<= 1

    for _ in range(SQRT_ITERATIONS):
        result = (result + x // result) >> 1

    return min(result, x // result)


# =============================================================================
# ДВОИЧНАЯ ЭКСПОНЕНТА
# =============================================================================


def exp2_fixed(x: int) -> int:
    """
    2^x для x в формате 192.64, результат в 18-разрядном fixed-point.

    Для каждого установленного дробного бита результат умножается на
    2^(2^-k); затем целая часть применяется сдвигом.

    Args:
        x: Показатель в формате 192.64, целая часть < 192

    Returns:
        2^x * SCALE (uint256)

    Raises:
        ValueError: Если целая часть x >= 192
    """
    validate_uint256(x, "x")
    if x >> 64 >= 192:
        raise ValueError(f"exp2_fixed integer part must be < 192, got {x >> 64}")

    result = EXP2_SEED
    fraction = x & FRACTION_64_MASK
    for i, factor in enumerate(EXP2_FACTORS):
        if fraction & (1 << (63 - i)):
            result = (result * factor) >> 64

    return (result * SCALE) >> (191 - (x >> 64))
