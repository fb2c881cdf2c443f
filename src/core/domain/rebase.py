"""
Rebase — Соотношение elastic / base для share-based балансов

Пара (elastic, base), где elastic — полная сумма активов, base — число
долей (shares). Курс конверсии: elastic / base.

Immutable Pydantic модель: каждая операция возвращает НОВЫЙ экземпляр и
вычисленную встречную сумму. Оба поля нового экземпляра вычисляются до
его создания, поэтому частично обновлённого состояния не бывает.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. elastic, base ∈ [0, 2^256 - 1]
2. Пустой rebase (elastic == 0) конвертирует 1:1
3. round_up увеличивает результат на 1, только если обратная конверсия
   не восстанавливает исходную сумму
4. elastic == 0 ⇔ base == 0 ожидается, но не навязывается
"""

import logging
from typing import Tuple

from pydantic import BaseModel, Field

from src.core.math.constants import U256_MAX
from src.core.math.kernel import checked_add, checked_sub, muldiv
from src.core.math.numerical_safeguards import validate_uint256

logger = logging.getLogger(__name__)


class Rebase(BaseModel):
    """
    Модель elastic/base соотношения.

    Immutable модель (frozen=True): все изменения создают новый экземпляр.
    """

    elastic: int = Field(0, ge=0, le=U256_MAX, description="Полная сумма активов (elastic)")
    base: int = Field(0, ge=0, le=U256_MAX, description="Число долей (base)")

    model_config = {"frozen": True}  # Immutable

    @classmethod
    def zero(cls) -> "Rebase":
        """Пустой rebase (0, 0)."""
        return cls(elastic=0, base=0)

    # =========================================================================
    # КОНВЕРСИЯ
    # =========================================================================

    def to_base(self, elastic: int, round_up: bool = False) -> int:
        """
        Конверсия elastic → base по текущему курсу.

        Args:
            elastic: Сумма в elastic-единицах
            round_up: Округлять вверх, если обратная конверсия даёт меньше

        Returns:
            Сумма в base-единицах

        Raises:
            DivideByZero: Если elastic > 0, а base == 0 (нарушено соотношение)
        """
        validate_uint256(elastic, "elastic")
        if self.elastic == 0:
            return elastic

        base = muldiv(elastic, self.base, self.elastic)
        if round_up and muldiv(base, self.elastic, self.base) < elastic:
            base = checked_add(base, 1)
        return base

    def to_elastic(self, base: int, round_up: bool = False) -> int:
        """
        Конверсия base → elastic по текущему курсу.

        Args:
            base: Сумма в base-единицах
            round_up: Округлять вверх, если обратная конверсия даёт меньше

        Returns:
            Сумма в elastic-единицах

        Examples:
            >>> Rebase(elastic=480, base=320).to_elastic(20, round_up=True)
            30
        """
        validate_uint256(base, "base")
        if self.base == 0:
            return base

        elastic = muldiv(base, self.elastic, self.base)
        if round_up and muldiv(elastic, self.base, self.elastic) < base:
            elastic = checked_add(elastic, 1)
        return elastic

    # =========================================================================
    # ИЗМЕНЕНИЯ ЧЕРЕЗ ELASTIC
    # =========================================================================

    def add_elastic(self, elastic: int, round_up: bool = False) -> Tuple["Rebase", int]:
        """
        Добавление elastic с соответствующим числом долей.

        Returns:
            (новый Rebase, добавленная base-сумма)

        Raises:
            AddOverflow: Если elastic или base переполняет 256 бит
        """
        base = self.to_base(elastic, round_up)
        updated = Rebase(
            elastic=checked_add(self.elastic, elastic),
            base=checked_add(self.base, base),
        )
        logger.debug("add_elastic: +%d elastic, +%d base -> %r", elastic, base, updated)
        return updated, base

    def sub_elastic(self, elastic: int, round_up: bool = False) -> Tuple["Rebase", int]:
        """
        Изъятие elastic с соответствующим числом долей.

        Returns:
            (новый Rebase, изъятая base-сумма)

        Raises:
            SubUnderflow: Если elastic > self.elastic
        """
        base = self.to_base(elastic, round_up)
        updated = Rebase(
            elastic=checked_sub(self.elastic, elastic),
            base=checked_sub(self.base, base),
        )
        logger.debug("sub_elastic: -%d elastic, -%d base -> %r", elastic, base, updated)
        return updated, base

    # =========================================================================
    # ИЗМЕНЕНИЯ ЧЕРЕЗ BASE
    # =========================================================================

    def add_base(self, base: int, round_up: bool = False) -> Tuple["Rebase", int]:
        """
        Добавление долей с соответствующей elastic-суммой.

        Returns:
            (новый Rebase, добавленная elastic-сумма)
        """
        elastic = self.to_elastic(base, round_up)
        updated = Rebase(
            elastic=checked_add(self.elastic, elastic),
            base=checked_add(self.base, base),
        )
        logger.debug("add_base: +%d base, +%d elastic -> %r", base, elastic, updated)
        return updated, elastic

    def sub_base(self, base: int, round_up: bool = False) -> Tuple["Rebase", int]:
        """
        Изъятие долей с соответствующей elastic-суммой.

        Returns:
            (новый Rebase, изъятая elastic-сумма)
        """
        elastic = self.to_elastic(base, round_up)
        updated = Rebase(
            elastic=checked_sub(self.elastic, elastic),
            base=checked_sub(self.base, base),
        )
        logger.debug("sub_base: -%d base, -%d elastic -> %r", base, elastic, updated)
        return updated, elastic

    # =========================================================================
    # ПРЯМЫЕ ИЗМЕНЕНИЯ
    # =========================================================================

    def add(self, elastic: int, base: int) -> "Rebase":
        """Добавление произвольной пары (elastic, base) без пересчёта курса."""
        validate_uint256(elastic, "elastic")
        validate_uint256(base, "base")
        return Rebase(
            elastic=checked_add(self.elastic, elastic),
            base=checked_add(self.base, base),
        )

    def sub(self, elastic: int, base: int) -> "Rebase":
        """Изъятие произвольной пары (elastic, base) без пересчёта курса."""
        validate_uint256(elastic, "elastic")
        validate_uint256(base, "base")
        return Rebase(
            elastic=checked_sub(self.elastic, elastic),
            base=checked_sub(self.base, base),
        )
