# dividi/schemas/split.py
# -----------------------------------------------------------------------------
# СХЕМЫ Pydantic: запрос на разбивку суммы (POST /api/splits)
# -----------------------------------------------------------------------------
# values - {user_id: число}; смысл числа зависит от mode:
#   percentage → проценты, shares → веса, exact/custom → точные суммы.
# Для itemized важны только items и service_fee_percent.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .expense import ReceiptItem, Split, SplitMode


class SplitsIn(BaseModel):
    total: Decimal = Field(Decimal("0"), description="Сумма расхода")
    participants: List[str] = Field(default_factory=list, description="ID участников в порядке раздачи центов")
    mode: SplitMode = "equal"
    values: Dict[str, Optional[Decimal]] = Field(default_factory=dict)
    items: Optional[List[ReceiptItem]] = None
    service_fee_percent: Decimal = Field(Decimal("0"), description="Сервисный сбор, %")


class SplitsOut(BaseModel):
    splits: List[Split]
    total: Decimal  # Σ долей (для itemized - итог чека)
