"""
Arithmetic Errors — Таксономия ошибок fixed-point арифметики

Каждая ошибка:
- несёт операнды, на которых произошёл отказ (атрибут operands)
- наследует ArithError (а через него — встроенный ArithmeticError)
- переполнения дополнительно наследуют OverflowError,
  деление на ноль — ZeroDivisionError

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна операция не возвращает усечённый по модулю 2^256 результат
2. Ошибки домена — это исключения ArithError, ошибки аргументов — ValueError
"""


class ArithError(ArithmeticError):
    """
    Базовая ошибка fixed-point арифметики.

    Подклассы задают message_template; операнды подставляются в шаблон
    и сохраняются в self.operands для диагностики.
    """

    message_template = "Arithmetic error: {0}"

    def __init__(self, *operands: int):
        self.operands = operands
        super().__init__(self.message_template.format(*operands))


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


class AddOverflow(ArithError, OverflowError):
    """Сумма не помещается в 256 бит."""

    message_template = "Addition overflow: {0} + {1}"


class SubUnderflow(ArithError, OverflowError):
    """Разность отрицательна для беззнакового значения."""

    message_template = "Subtraction underflow: {0} - {1}"


# =============================================================================
# УМНОЖЕНИЕ / ДЕЛЕНИЕ
# =============================================================================


class MulOverflow(ArithError, OverflowError):
    """Результат умножения не помещается в диапазон домена."""

    message_template = "Multiplication overflow: {0} * {1}"


class MulDivOverflow(MulOverflow):
    """muldiv: старшая половина 512-битного произведения >= делителя."""

    message_template = "Muldiv overflow: prod1 {0} >= denominator {1}"


class MulDivFixedPointOverflow(MulOverflow):
    """muldiv_fixed: старшая половина 512-битного произведения >= SCALE."""

    message_template = "Fixed-point muldiv overflow: prod1 {0} >= SCALE"


class DivOverflow(MulOverflow):
    """Модуль частного знаковых значений превышает MAX_SD59X18."""

    message_template = "Division overflow: {0} / {1}"


class DivideByZero(ArithError, ZeroDivisionError):
    """Деление на ноль (операнд — делимое)."""

    message_template = "Division by zero: {0} / 0"


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


class CeilOverflow(ArithError, OverflowError):
    """ceil(x) не помещается в диапазон домена."""

    message_template = "Ceil overflow: {0}"


class FloorUnderflow(ArithError, OverflowError):
    """floor(x) знакового значения уходит ниже MIN_SD59X18."""

    message_template = "Floor underflow: {0}"


# =============================================================================
# КОРНИ
# =============================================================================


class SqrtOverflow(ArithError, OverflowError):
    """x * SCALE не помещается в 256 бит."""

    message_template = "Sqrt overflow: {0}"


class SqrtNegativeInput(ArithError):
    """Квадратный корень из отрицательного числа."""

    message_template = "Sqrt of negative input: {0}"


class GmOverflow(ArithError, OverflowError):
    """Произведение x * y в среднем геометрическом не помещается в 256 бит."""

    message_template = "Geometric mean overflow: {0} * {1}"


class GmNegativeProduct(ArithError):
    """Произведение x * y в среднем геометрическом отрицательно."""

    message_template = "Geometric mean of negative product: {0} * {1}"


# =============================================================================
# ЭКСПОНЕНТЫ / ЛОГАРИФМЫ
# =============================================================================


class ExpInputTooBig(ArithError, OverflowError):
    """exp(x) переполняет домен."""

    message_template = "Exp input too big: {0}"


class Exp2InputTooBig(ArithError, OverflowError):
    """exp2(x) переполняет домен (x >= 192)."""

    message_template = "Exp2 input too big: {0}"


class LogInputTooSmall(ArithError):
    """Логарифм вне области определения (беззнаковый x < 1, знаковый x <= 0)."""

    message_template = "Log input too small: {0}"


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


class FromUintOverflow(ArithError, OverflowError):
    """Целое слишком велико для перевода в fixed-point."""

    message_template = "From uint overflow: {0}"


class FromIntOverflow(ArithError, OverflowError):
    """Знаковое целое вне диапазона SD59x18 после масштабирования."""

    message_template = "From int overflow: {0}"


class InputTooSmall(ArithError):
    """Операнд равен MIN_SD59X18: модуль не представим."""

    message_template = "Input too small: {0}"
