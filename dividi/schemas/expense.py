# dividi/schemas/expense.py
# -----------------------------------------------------------------------------
# СХЕМЫ Pydantic: Expense (расход или погашение)
# -----------------------------------------------------------------------------
# Цели:
#   • payments - кто внёс деньги (кредит), splits - кто сколько должен (дебет).
#   • kind='settlement' + status='pending' - это заявка «я заплатил», в балансы
#     она попадает только после подтверждения (status='confirmed').
#   • Сверку сумм (payments/splits против amount, допуск 0.05) делает вызывающая
#     сторона (check_expense_totals), сами расчёты её не требуют.
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, condecimal

# Денежное поле: неотрицательное, без фиксации числа знаков
Money = condecimal(max_digits=18, ge=0)

SplitMode = Literal["equal", "percentage", "shares", "exact", "itemized", "custom"]
ExpenseKind = Literal["expense", "settlement"]
ExpenseStatus = Literal["pending", "confirmed"]


class Payment(BaseModel):
    user_id: str = Field(..., description="Кто заплатил")
    amount: Money = Field(..., description="Сколько заплатил")


class Split(BaseModel):
    user_id: str = Field(..., description="Кто должен")
    amount: Decimal = Field(..., description="Доля участника")
    # введённое значение режима: процент / вес / точная сумма
    manual_value: Optional[Decimal] = None


class ReceiptItem(BaseModel):
    id: Optional[str] = None
    name: str = ""
    price: Money = Field(..., description="Цена за единицу")
    quantity: Money = Field(Decimal("1"), description="Количество")
    assigned_to: List[str] = Field(default_factory=list, description="ID участников, делящих позицию")


class Expense(BaseModel):
    id: str
    group_id: str
    description: str = ""
    amount: Money
    kind: ExpenseKind = "expense"
    status: ExpenseStatus = "confirmed"
    split_mode: SplitMode = "equal"

    payments: List[Payment] = Field(default_factory=list)
    splits: List[Split] = Field(default_factory=list)
    items: Optional[List[ReceiptItem]] = None

    created_by: Optional[str] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
