"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Проверку 256-битных диапазонов (unsigned/signed)
2. Отклонение bool и не-int операндов
3. Сравнения с абсолютным допуском
4. Относительное отклонение в UD60x18
"""


import pytest

from src.core.math.constants import I256_MAX, I256_MIN, SCALE, U256_MAX
from src.core.math.numerical_safeguards import (
    DEVIATION_DEFAULT,
    TOL_ULP,
    compare_with_tolerance,
    deviation,
    is_close,
    is_valid_int256,
    is_valid_uint256,
    validate_in_range,
    validate_int256,
    validate_uint256,
    within_deviation,
)

# =============================================================================
# ТЕСТЫ ПРОВЕРКИ ДИАПАЗОНОВ
# =============================================================================


class TestUint256Range:
    """Тесты для is_valid_uint256 / validate_uint256"""

    def test_bounds(self) -> None:
        """Границы [0, 2^256 - 1] включены"""
        assert is_valid_uint256(0)
        assert is_valid_uint256(U256_MAX)
        assert not is_valid_uint256(-1)
        assert not is_valid_uint256(U256_MAX + 1)

    def test_rejects_non_int(self) -> None:
        """bool, float и строки не являются операндами"""
        assert not is_valid_uint256(True)
        assert not is_valid_uint256(1.0)
        assert not is_valid_uint256("1")
        assert not is_valid_uint256(None)

    def test_validate_raises_value_error(self) -> None:
        """Ошибка содержит имя параметра"""
        validate_uint256(U256_MAX, "x")
        with pytest.raises(ValueError, match="x must be an unsigned 256-bit integer"):
            validate_uint256(-1, "x")
        with pytest.raises(ValueError):
            validate_uint256(False, "x")


class TestInt256Range:
    """Тесты для is_valid_int256 / validate_int256"""

    def test_bounds(self) -> None:
        """Границы [-2^255, 2^255 - 1] включены"""
        assert is_valid_int256(I256_MIN)
        assert is_valid_int256(I256_MAX)
        assert is_valid_int256(0)
        assert not is_valid_int256(I256_MIN - 1)
        assert not is_valid_int256(I256_MAX + 1)

    def test_validate_raises_value_error(self) -> None:
        """Ошибка содержит имя параметра"""
        validate_int256(-1, "y")
        with pytest.raises(ValueError, match="y must be a signed 256-bit integer"):
            validate_int256(I256_MAX + 1, "y")
        with pytest.raises(ValueError):
            validate_int256(True, "y")


class TestValidateInRange:
    """Тесты для validate_in_range"""

    def test_within_range(self) -> None:
        """Значения внутри диапазона и на границах"""
        validate_in_range(0, "d", 0, 18)
        validate_in_range(18, "d", 0, 18)
        validate_in_range(-(10**80), "d")

    def test_out_of_range(self) -> None:
        """Значения вне диапазона"""
        with pytest.raises(ValueError, match="d must be >= 0"):
            validate_in_range(-1, "d", 0, 18)
        with pytest.raises(ValueError, match="d must be <= 18"):
            validate_in_range(19, "d", 0, 18)

    def test_rejects_non_int(self) -> None:
        """Не-целые значения отклоняются"""
        with pytest.raises(ValueError):
            validate_in_range(1.5, "d", 0, 18)
        with pytest.raises(ValueError):
            validate_in_range(True, "d", 0, 18)


# =============================================================================
# ТЕСТЫ СРАВНЕНИЙ
# =============================================================================


class TestCompareWithTolerance:
    """Тесты для compare_with_tolerance / is_close"""

    def test_default_tolerance_is_one_ulp(self) -> None:
        """По умолчанию допуск равен одной единице 10^-18"""
        assert TOL_ULP == 1
        assert compare_with_tolerance(SCALE, SCALE + 1) == 0
        assert compare_with_tolerance(SCALE, SCALE + 2) == -1
        assert compare_with_tolerance(SCALE + 2, SCALE) == 1

    def test_custom_tolerance(self) -> None:
        """Пользовательский допуск"""
        assert compare_with_tolerance(100, 110, tol=10) == 0
        assert compare_with_tolerance(100, 111, tol=10) == -1

    def test_signed_values(self) -> None:
        """Сравнение отрицательных значений"""
        assert compare_with_tolerance(-SCALE, SCALE) == -1
        assert is_close(-5, -4)
        assert not is_close(-5, -3)


class TestDeviation:
    """Тесты для deviation / within_deviation"""

    def test_deviation(self) -> None:
        """Отклонение в UD60x18 (1e18 = 100%)"""
        assert deviation(100, 101) == 10**16
        assert deviation(100, 99) == 10**16
        assert deviation(-100, -101) == 10**16
        assert deviation(SCALE, SCALE) == 0

    def test_deviation_zero_expected(self) -> None:
        """Относительное отклонение от нуля не определено"""
        with pytest.raises(ValueError):
            deviation(0, 1)

    def test_within_deviation(self) -> None:
        """Сравнение с порогом по умолчанию 1e-15"""
        assert DEVIATION_DEFAULT == 1_000
        assert within_deviation(SCALE, SCALE + 1_000)
        assert not within_deviation(SCALE, SCALE + 1_001)
        assert within_deviation(0, 0)

    def test_custom_threshold(self) -> None:
        """Пользовательский порог"""
        assert within_deviation(100, 101, max_deviation=10**16)
        assert not within_deviation(100, 102, max_deviation=10**16)
