"""
Core math modules

Детерминированная fixed-point арифметика на 256-битных целых:
18 дробных десятичных разрядов, без float.
"""

# Constants
from src.core.math.constants import (
    DECIMALS,
    DOUBLE_SCALE,
    E,
    HALF_SCALE,
    I256_MAX,
    I256_MIN,
    LOG2_E,
    MAX_SCALED_UD60X18,
    MAX_SD59X18,
    MAX_UD60X18,
    MAX_WHOLE_SD59X18,
    MAX_WHOLE_UD60X18,
    MIN_SD59X18,
    MIN_WHOLE_SD59X18,
    PI,
    POWERS_OF_TEN,
    SCALE,
    U256_MAX,
)

# Errors
from src.core.math.errors import (
    AddOverflow,
    ArithError,
    CeilOverflow,
    DivideByZero,
    DivOverflow,
    Exp2InputTooBig,
    ExpInputTooBig,
    FloorUnderflow,
    FromIntOverflow,
    FromUintOverflow,
    GmNegativeProduct,
    GmOverflow,
    InputTooSmall,
    LogInputTooSmall,
    MulDivFixedPointOverflow,
    MulDivOverflow,
    MulOverflow,
    SqrtNegativeInput,
    SqrtOverflow,
    SubUnderflow,
)

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
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

# WideInt
from src.core.math.wide import Uint512, div_wide, mul_wide, mulmod

# Kernel
from src.core.math.kernel import (
    abs_diff,
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

# Fixed-point domains
from src.core.math import sd59x18, ud60x18

__all__ = [
    # Constants
    "DECIMALS",
    "DOUBLE_SCALE",
    "E",
    "HALF_SCALE",
    "I256_MAX",
    "I256_MIN",
    "LOG2_E",
    "MAX_SCALED_UD60X18",
    "MAX_SD59X18",
    "MAX_UD60X18",
    "MAX_WHOLE_SD59X18",
    "MAX_WHOLE_UD60X18",
    "MIN_SD59X18",
    "MIN_WHOLE_SD59X18",
    "PI",
    "POWERS_OF_TEN",
    "SCALE",
    "U256_MAX",
    # Errors
    "ArithError",
    "AddOverflow",
    "SubUnderflow",
    "MulOverflow",
    "MulDivOverflow",
    "MulDivFixedPointOverflow",
    "DivOverflow",
    "DivideByZero",
    "CeilOverflow",
    "FloorUnderflow",
    "SqrtOverflow",
    "SqrtNegativeInput",
    "GmOverflow",
    "GmNegativeProduct",
    "ExpInputTooBig",
    "Exp2InputTooBig",
    "LogInputTooSmall",
    "FromUintOverflow",
    "FromIntOverflow",
    "InputTooSmall",
    # Numerical Safeguards
    "compare_with_tolerance",
    "deviation",
    "is_close",
    "is_valid_int256",
    "is_valid_uint256",
    "validate_in_range",
    "validate_int256",
    "validate_uint256",
    "within_deviation",
    # WideInt
    "Uint512",
    "div_wide",
    "mul_wide",
    "mulmod",
    # Kernel
    "abs_diff",
    "bankers_round",
    "checked_add",
    "checked_sub",
    "exp10",
    "exp2_fixed",
    "is_odd",
    "most_significant_bit",
    "muldiv",
    "muldiv_fixed",
    "nth_digit",
    "power_of_ten_exponent",
    "sqrt",
    # Fixed-point domains
    "sd59x18",
    "ud60x18",
]
