"""
Fixed-Point Constants — Масштаб, границы диапазонов и таблицы

Все числа в системе — целые int в 256-битном диапазоне, у которых
десятичная точка неявно стоит в 18 разрядах справа:
- UD60x18: беззнаковые значения [0, 2^256 - 1]
- SD59x18: знаковые значения [-2^255, 2^255 - 1]

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float: все константы — точные целые
2. SCALE = 10^18 для обоих доменов
3. Таблицы (POWERS_OF_TEN, EXP2_FACTORS) неизменяемы (tuple)
"""

from typing import Final, Tuple

# =============================================================================
# 256-БИТНЫЕ ГРАНИЦЫ
# =============================================================================

# Модуль 256-битной арифметики
TWO_TO_256: Final[int] = 1 << 256
U256_MAX: Final[int] = TWO_TO_256 - 1

TWO_TO_128: Final[int] = 1 << 128
TWO_TO_255: Final[int] = 1 << 255

I256_MAX: Final[int] = TWO_TO_255 - 1
I256_MIN: Final[int] = -TWO_TO_255

# =============================================================================
# МАСШТАБ (18 ДЕСЯТИЧНЫХ РАЗРЯДОВ)
# =============================================================================

DECIMALS: Final[int] = 18
SCALE: Final[int] = 10**18
HALF_SCALE: Final[int] = 5 * 10**17
DOUBLE_SCALE: Final[int] = 10**36

# Наибольший остаток x*y mod SCALE, который округляется вниз в muldiv_fixed
SCALE_HALF_REMAINDER: Final[int] = 499_999_999_999_999_999

# Наибольшая степень двойки, делящая SCALE (10^18 = 2^18 * 5^18)
SCALE_LPOTD: Final[int] = 262_144

# Обратный элемент (SCALE / SCALE_LPOTD) по модулю 2^256
SCALE_INVERSE: Final[int] = (
    78156646155174841979727994598816262306175212592076161876661508869554232690281
)

# =============================================================================
# МАТЕМАТИЧЕСКИЕ КОНСТАНТЫ (FIXED-POINT)
# =============================================================================

# log2(e)
LOG2_E: Final[int] = 1_442_695_040_888_963_407

# log2(10), делитель для log10 через log2
LOG2_10: Final[int] = 3_321_928_094_887_362_347

E: Final[int] = 2_718_281_828_459_045_235
PI: Final[int] = 3_141_592_653_589_793_238

# =============================================================================
# UD60x18 ГРАНИЦЫ
# =============================================================================

MAX_UD60X18: Final[int] = U256_MAX

# Наибольшее целое (без дробной части) значение UD60x18
MAX_WHOLE_UD60X18: Final[int] = U256_MAX - U256_MAX % SCALE

# Наибольшее целое, которое можно перевести в UD60x18 без переполнения
MAX_SCALED_UD60X18: Final[int] = U256_MAX // SCALE

# sqrt(MAX_UD60X18) в fixed-point: наибольший x, для которого mul(x, x) не переполняется
SQRT_MAX_UD60X18: Final[int] = 340282366920938463463374607431768211455_999999999

# exp2: x >= 192 переполняет 256 бит
EXP2_MAX_INPUT: Final[int] = 192 * SCALE

# exp: x >= ln(MAX_UD60X18 / SCALE)
EXP_MAX_INPUT: Final[int] = 133_084_258_667_509_499_441

# =============================================================================
# SD59x18 ГРАНИЦЫ
# =============================================================================

MAX_SD59X18: Final[int] = I256_MAX
MIN_SD59X18: Final[int] = I256_MIN

MAX_WHOLE_SD59X18: Final[int] = (
    57896044618658097711785492504343953926634992332820282019728_000000000000000000
)
MIN_WHOLE_SD59X18: Final[int] = -MAX_WHOLE_SD59X18

# Наибольшее по модулю целое, которое можно перевести в SD59x18
MAX_SCALED_SD59X18: Final[int] = I256_MAX // SCALE

# Ниже этих значений exp2 / exp отрицательного аргумента равны нулю
EXP2_MIN_INPUT_SD59X18: Final[int] = -59_794_705_707_972_522_261
EXP_MIN_INPUT_SD59X18: Final[int] = -41_446_531_673_892_822_322

# =============================================================================
# ТАБЛИЦА СТЕПЕНЕЙ ДЕСЯТИ
# =============================================================================

# 10^0 .. 10^77: все степени десяти, помещающиеся в 256 бит.
# Сырое 10^k есть fixed-point значение 10^(k-18).
POWERS_OF_TEN: Final[Tuple[int, ...]] = tuple(10**k for k in range(78))

# =============================================================================
# EXP2 ТАБЛИЦА (192.64 FORMAT)
# =============================================================================

# Начальное значение 0.5 в формате 192.64
EXP2_SEED: Final[int] = 0x800000000000000000000000000000000000000000000000

# 2^(2^-k) в формате 64.64 для k = 1..64, от старшего дробного бита (бит 63)
# к младшему (бит 0)
EXP2_FACTORS: Final[Tuple[int, ...]] = (
    0x16A09E667F3BCC909,
    0x1306FE0A31B7152DF,
    0x1172B83C7D517ADCE,
    0x10B5586CF9890F62A,
    0x1059B0D31585743AE,
    0x102C9A3E778060EE7,
    0x10163DA9FB33356D8,
    0x100B1AFA5ABCBED61,
    0x10058C86DA1C09EA2,
    0x1002C605E2E8CEC50,
    0x100162F3904051FA1,
    0x1000B175EFFDC76BA,
    0x100058BA01FB9F96D,
    0x10002C5CC37DA9492,
    0x1000162E525EE0547,
    0x10000B17255775C04,
    0x1000058B91B5BC9AE,
    0x100002C5C89D5EC6D,
    0x10000162E43F4F831,
    0x100000B1721BCFC9A,
    0x10000058B90CF1E6E,
    0x1000002C5C863B73F,
    0x100000162E430E5A2,
    0x1000000B172183551,
    0x100000058B90C0B49,
    0x10000002C5C8601CC,
    0x1000000162E42FFF0,
    0x10000000B17217FBB,
    0x1000000058B90BFCE,
    0x100000002C5C85FE3,
    0x10000000162E42FF1,
    0x100000000B17217F8,
    0x10000000058B90BFC,
    0x1000000002C5C85FE,
    0x100000000162E42FF,
    0x1000000000B17217F,
    0x100000000058B90C0,
    0x10000000002C5C860,
    0x1000000000162E430,
    0x10000000000B17218,
    0x1000000000058B90C,
    0x100000000002C5C86,
    0x10000000000162E43,
    0x100000000000B1721,
    0x10000000000058B91,
    0x1000000000002C5C8,
    0x100000000000162E4,
    0x1000000000000B172,
    0x100000000000058B9,
    0x10000000000002C5D,
    0x1000000000000162E,
    0x10000000000000B17,
    0x1000000000000058C,
    0x100000000000002C6,
    0x10000000000000163,
    0x100000000000000B1,
    0x10000000000000059,
    0x1000000000000002C,
    0x10000000000000016,
    0x1000000000000000B,
    0x10000000000000006,
    0x10000000000000003,
    0x10000000000000001,
    0x10000000000000001,
)
