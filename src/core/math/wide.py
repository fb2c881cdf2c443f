"""
WideInt — Эмуляция 512-битных промежуточных значений

Два 256-битных значения перемножаются в 512-битное произведение
(hi, lo), которое затем делится на 256-битный делитель, если частное
гарантированно помещается в 256 бит.

Алгоритм (Remco Bloemen, "Mathemagic: full multiply", "512-bit division"):
- произведение: lo = x*y mod 2^256, mm = x*y mod (2^256 - 1),
  hi = mm - lo - (mm < lo) (китайская теорема об остатках)
- деление: вычитаем остаток, выносим наибольшую степень двойки делителя,
  домножаем на обратный элемент нечётного делителя по модулю 2^256
  (6 итераций Ньютона-Рафсона: 4 → 8 → ... → 256 бит точности)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Оба лимба hi, lo всегда в [0, 2^256 - 1]
2. div_wide никогда не усекает: при hi >= denominator — ValueError
3. Все операции детерминированы (фиксированное число итераций)
"""

from typing import NamedTuple

from src.core.math.constants import TWO_TO_256, U256_MAX
from src.core.math.errors import DivideByZero
from src.core.math.numerical_safeguards import validate_uint256

# Число итераций Ньютона-Рафсона для обратного элемента mod 2^256
NEWTON_ITERATIONS = 6


class Uint512(NamedTuple):
    """512-битное беззнаковое значение: hi * 2^256 + lo."""

    hi: int
    lo: int

    def __int__(self) -> int:
        return (self.hi << 256) | self.lo

    @classmethod
    def from_int(cls, value: int) -> "Uint512":
        """Разложение int в [0, 2^512) на лимбы."""
        if value < 0 or value >> 512:
            raise ValueError(f"value must fit 512 bits, got {value}")
        return cls(value >> 256, value & U256_MAX)


def mulmod(x: int, y: int, k: int) -> int:
    """
    (x * y) mod k с произвольной точностью промежуточного произведения.

    Raises:
        DivideByZero: Если k == 0
    """
    if k == 0:
        raise DivideByZero(x)
    return (x * y) % k


def mul_wide(x: int, y: int) -> Uint512:
    """
    Точное 512-битное произведение двух uint256.

    Args:
        x: Множитель (uint256)
        y: Множитель (uint256)

    Returns:
        Uint512(hi, lo), x * y == hi * 2^256 + lo

    Raises:
        ValueError: Если операнды вне uint256

    Examples:
        >>> mul_wide(2**255, 4)
        Uint512(hi=2, lo=0)
    """
    validate_uint256(x, "x")
    validate_uint256(y, "y")

    mm = mulmod(x, y, U256_MAX)
    lo = (x * y) & U256_MAX
    hi = (mm - lo - (1 if mm < lo else 0)) & U256_MAX
    return Uint512(hi, lo)


def div_wide(prod: Uint512, denominator: int) -> int:
    """
    Точное floor(prod / denominator) для 512-битного делимого.

    Предусловие: prod.hi < denominator (частное помещается в 256 бит).

    Args:
        prod: 512-битное делимое
        denominator: Делитель (uint256, > 0)

    Returns:
        Частное (uint256), округлённое вниз

    Raises:
        DivideByZero: Если denominator == 0
        ValueError: Если частное не помещается в 256 бит
    """
    validate_uint256(denominator, "denominator")
    if denominator == 0:
        raise DivideByZero(int(prod))

    hi, lo = prod
    if hi >= denominator:
        raise ValueError(
            f"quotient does not fit 256 bits: prod1 {hi} >= denominator {denominator}"
        )

    if hi == 0:
        return lo // denominator

    # Делаем делимое кратным делителю: вычитаем остаток из 512-битного числа
    remainder = int(prod) % denominator
    if remainder > lo:
        hi -= 1
    lo = (lo - remainder) & U256_MAX

    # Наибольшая степень двойки, делящая делитель (всегда >= 1)
    lpotdod = denominator & (-denominator & U256_MAX)
    denominator //= lpotdod
    lo //= lpotdod

    # Переносим младшие биты hi в lo: flip = 2^256 / lpotdod (mod 2^256)
    flip = ((TWO_TO_256 - lpotdod) // lpotdod + 1) & U256_MAX
    lo |= (hi * flip) & U256_MAX

    # Обратный элемент нечётного делителя: seed верен на 4 бита
    inverse = (3 * denominator) ^ 2
    for _ in range(NEWTON_ITERATIONS):
        inverse = (inverse * (2 - denominator * inverse)) & U256_MAX

    # Деление точное, поэтому умножение на обратный по модулю 2^256 даёт частное
    return (lo * inverse) & U256_MAX
