"""
Unit tests для fixed-point kernel

Проверяет:
1. muldiv / muldiv_fixed против точной арифметики Python int
2. Банковское округление и извлечение цифр
3. sqrt, most_significant_bit, avg
4. Таблицу степеней десяти и exp2_fixed
"""

import random

import pytest

from src.core.math.constants import (
    HALF_SCALE,
    POWERS_OF_TEN,
    SCALE,
    SCALE_INVERSE,
    SCALE_LPOTD,
    U256_MAX,
)
from src.core.math.errors import (
    AddOverflow,
    ArithError,
    DivideByZero,
    MulDivFixedPointOverflow,
    MulDivOverflow,
    MulOverflow,
    SubUnderflow,
)
from src.core.math.kernel import (
    abs_diff,
    avg,
    bankers_round,
    checked_add,
    checked_sub,
    exp10,
    exp2_fixed,
    is_odd,
    most_significant_bit,
    muldiv,
    muldiv_fixed,
    nth_digit,
    power_of_ten_exponent,
    sqrt,
)


@pytest.fixture
def rng() -> random.Random:
    """Детерминированный генератор операндов разной разрядности"""
    return random.Random(18)


def _operand(rng: random.Random) -> int:
    return rng.getrandbits(rng.randint(1, 256))


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


class TestCheckedArithmetic:
    """Тесты для checked_add / checked_sub / abs_diff / is_odd"""

    def test_add(self) -> None:
        """Сумма в пределах диапазона"""
        assert checked_add(1, 2) == 3
        assert checked_add(U256_MAX - 1, 1) == U256_MAX

    def test_add_overflow(self) -> None:
        """Переполнение сложения"""
        with pytest.raises(AddOverflow) as exc_info:
            checked_add(U256_MAX, 1)
        assert exc_info.value.operands == (U256_MAX, 1)
        assert isinstance(exc_info.value, OverflowError)
        assert isinstance(exc_info.value, ArithmeticError)

    def test_sub(self) -> None:
        """Разность в пределах диапазона"""
        assert checked_sub(5, 3) == 2
        assert checked_sub(5, 5) == 0

    def test_sub_underflow(self) -> None:
        """Уход в минус"""
        with pytest.raises(SubUnderflow, match="3 - 5"):
            checked_sub(3, 5)

    def test_abs_diff(self) -> None:
        """Модуль разности симметричен"""
        assert abs_diff(10, 3) == 7
        assert abs_diff(3, 10) == 7
        assert abs_diff(0, U256_MAX) == U256_MAX

    def test_is_odd(self) -> None:
        """Чётность"""
        assert is_odd(1)
        assert is_odd(U256_MAX)
        assert not is_odd(0)
        assert not is_odd(SCALE)

    def test_avg(self) -> None:
        """Среднее без переполнения"""
        assert avg(3, 5) == 4
        assert avg(3, 4) == 3
        assert avg(U256_MAX, U256_MAX) == U256_MAX
        assert avg(U256_MAX, U256_MAX - 1) == U256_MAX - 1


# =============================================================================
# MULDIV
# =============================================================================


class TestMuldiv:
    """Тесты для muldiv"""

    def test_reference_vector(self) -> None:
        """Эталонный вектор"""
        assert muldiv(19318389123, 1319320194941, 219031831291) == 116362725698

    def test_max_operands(self) -> None:
        """MAX * MAX / MAX = MAX (512-битный промежуточный результат)"""
        assert muldiv(U256_MAX, U256_MAX, U256_MAX) == U256_MAX

    def test_matches_exact_division(self, rng: random.Random) -> None:
        """floor(x*y/d) совпадает с точным делением либо переполнение"""
        for _ in range(500):
            x, y = _operand(rng), _operand(rng)
            denominator = _operand(rng) or 1
            expected = x * y // denominator
            if expected <= U256_MAX:
                assert muldiv(x, y, denominator) == expected
            else:
                with pytest.raises(MulDivOverflow):
                    muldiv(x, y, denominator)

    def test_overflow(self) -> None:
        """Частное не помещается в 256 бит"""
        with pytest.raises(MulDivOverflow) as exc_info:
            muldiv(U256_MAX, 2, 1)
        assert isinstance(exc_info.value, MulOverflow)
        assert isinstance(exc_info.value, ArithError)

    def test_divide_by_zero(self) -> None:
        """Нулевой делитель"""
        with pytest.raises(DivideByZero):
            muldiv(1, 1, 0)
        with pytest.raises(ZeroDivisionError):
            muldiv(U256_MAX, U256_MAX, 0)

    def test_rejects_negative(self) -> None:
        """Отрицательные операнды: ValueError"""
        with pytest.raises(ValueError):
            muldiv(-1, 1, 1)


class TestMuldivFixed:
    """Тесты для muldiv_fixed"""

    def test_precomputed_constants(self) -> None:
        """SCALE = 2^18 * 5^18, SCALE_INVERSE обратный к 5^18 mod 2^256"""
        assert SCALE_LPOTD == 2**18
        assert (SCALE_INVERSE * (SCALE // SCALE_LPOTD)) % 2**256 == 1

    def test_exact_products(self) -> None:
        """Точные произведения без остатка"""
        assert muldiv_fixed(2 * SCALE, 3 * SCALE) == 6 * SCALE
        assert muldiv_fixed(2_098 * 10**15, 1_119 * 10**15) == 2_347_662 * 10**12
        assert muldiv_fixed(10**24, 10**20) == 10**26

    def test_rounds_half_up(self) -> None:
        """Остаток >= 0.5 единицы округляется вверх"""
        assert muldiv_fixed(1, 1) == 0
        assert muldiv_fixed(6, 10**17) == 1
        assert muldiv_fixed(5, 10**17) == 1
        assert muldiv_fixed(4, 10**17) == 0

    def test_matches_exact_rounding(self, rng: random.Random) -> None:
        """Совпадение с точной арифметикой (round half up) либо переполнение"""
        for _ in range(500):
            x, y = _operand(rng), _operand(rng)
            product = x * y
            expected = product // SCALE + (1 if product % SCALE >= HALF_SCALE else 0)
            if expected <= U256_MAX:
                assert muldiv_fixed(x, y) == expected
            else:
                with pytest.raises(MulDivFixedPointOverflow):
                    muldiv_fixed(x, y)

    def test_overflow(self) -> None:
        """Произведение >= SCALE * 2^256"""
        with pytest.raises(MulDivFixedPointOverflow):
            muldiv_fixed(U256_MAX, 2 * SCALE)


# =============================================================================
# ДЕСЯТИЧНЫЕ РАЗРЯДЫ
# =============================================================================


class TestDigits:
    """Тесты для nth_digit / exp10 / power_of_ten_exponent"""

    def test_nth_digit(self) -> None:
        """Цифра по позиции (1 = единицы)"""
        assert nth_digit(99958, 1) == 8
        assert nth_digit(99958, 2) == 5
        assert nth_digit(99958, 5) == 9
        assert nth_digit(99958, 6) == 0

    def test_nth_digit_invalid_position(self) -> None:
        """Позиция 0 недопустима"""
        with pytest.raises(ValueError):
            nth_digit(99958, 0)

    def test_exp10(self) -> None:
        """Таблица степеней десяти"""
        assert exp10(0) == 1
        assert exp10(18) == SCALE
        assert exp10(77) == 10**77
        assert len(POWERS_OF_TEN) == 78

    def test_exp10_out_of_range(self) -> None:
        """10^78 не помещается в 256 бит"""
        with pytest.raises(ValueError):
            exp10(78)
        with pytest.raises(ValueError):
            exp10(-1)

    def test_power_of_ten_exponent(self) -> None:
        """Точные степени десяти распознаются, соседние значения нет"""
        for k in range(78):
            assert power_of_ten_exponent(10**k) == k
        for k in range(1, 78):
            assert power_of_ten_exponent(10**k + 1) is None
            assert power_of_ten_exponent(10**k - 1) is None
        assert power_of_ten_exponent(0) is None
        assert power_of_ten_exponent(2) is None


class TestBankersRound:
    """Тесты для bankers_round"""

    def test_reference_vectors(self) -> None:
        """Эталонные векторы"""
        assert bankers_round(99958, 2) == 100000
        assert bankers_round(99955, 2) == 100000
        assert bankers_round(99945, 2) == 99900

    def test_ties_to_even(self) -> None:
        """Цифра 5 округляется к чётной старшей цифре"""
        assert bankers_round(735, 1) == 740
        assert bankers_round(745, 1) == 740
        assert bankers_round(755, 1) == 760
        assert bankers_round(765, 1) == 760

    def test_non_ties(self) -> None:
        """Цифры != 5 округляются к ближайшему"""
        assert bankers_round(744, 1) == 740
        assert bankers_round(746, 1) == 750

    def test_idempotent(self, rng: random.Random) -> None:
        """Повторное округление даёт неподвижную точку"""
        for _ in range(200):
            x = rng.getrandbits(250)
            digit = rng.randint(1, 40)
            once = bankers_round(x, digit)
            assert once % 10**digit == 0
            assert bankers_round(once, digit) == once

    def test_invalid_digit(self) -> None:
        """Позиция < 1 недопустима"""
        with pytest.raises(ValueError):
            bankers_round(99958, 0)

    def test_round_up_overflow(self) -> None:
        """Округление вверх за пределы 2^256 - 1"""
        # ...639935: цифра 3 в позиции 2 нечётная, поэтому вверх
        with pytest.raises(AddOverflow):
            bankers_round(U256_MAX, 1)


# =============================================================================
# БИТОВЫЕ ОПЕРАЦИИ И КОРЕНЬ
# =============================================================================


class TestMostSignificantBit:
    """Тесты для most_significant_bit"""

    def test_known_values(self) -> None:
        """Граничные значения"""
        assert most_significant_bit(0) == 0
        assert most_significant_bit(1) == 0
        assert most_significant_bit(2) == 1
        assert most_significant_bit(3) == 1
        assert most_significant_bit(2**255) == 255
        assert most_significant_bit(U256_MAX) == 255

    def test_matches_bit_length(self, rng: random.Random) -> None:
        """Совпадение с int.bit_length() - 1"""
        for _ in range(500):
            x = _operand(rng) or 1
            assert most_significant_bit(x) == x.bit_length() - 1


class TestSqrt:
    """Тесты для целочисленного sqrt"""

    def test_known_values(self) -> None:
        """Точные квадраты и округление вниз"""
        assert sqrt(0) == 0
        assert sqrt(1) == 1
        assert sqrt(16) == 4
        assert sqrt(17) == 4
        assert sqrt(4 * 10**36) == 2 * SCALE
        assert sqrt(U256_MAX) == 2**128 - 1

    def test_floor_bracket(self, rng: random.Random) -> None:
        """sqrt(x)^2 <= x < (sqrt(x) + 1)^2"""
        for _ in range(500):
            x = _operand(rng)
            root = sqrt(x)
            assert root * root <= x < (root + 1) * (root + 1)


# =============================================================================
# EXP2
# =============================================================================


class TestExp2Fixed:
    """Тесты для exp2_fixed (формат 192.64)"""

    def test_integer_exponents(self) -> None:
        """Целые показатели точны"""
        assert exp2_fixed(0) == SCALE
        assert exp2_fixed(1 << 64) == 2 * SCALE
        assert exp2_fixed(10 << 64) == 1024 * SCALE

    def test_half(self) -> None:
        """2^0.5 ≈ 1.414213562373095048"""
        result = exp2_fixed(1 << 63)
        assert abs(result - 1_414213562373095048) <= 1

    def test_integer_part_limit(self) -> None:
        """Целая часть >= 192 недопустима"""
        with pytest.raises(ValueError):
            exp2_fixed(192 << 64)
