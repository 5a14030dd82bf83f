# dividi/schemas/settlement.py

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, condecimal

from .expense import Expense
from .group import Group


class Debt(BaseModel):
    """
    Схема ответа для settle-up (жадного алгоритма оптимизации переводов).
    Вычисляется на лету из списка расходов и нигде не хранится.
    """
    from_user_id: str  # кто должен совершить перевод (должник)
    to_user_id: str    # кому перевод предназначен (кредитор)
    amount: condecimal(gt=0)  # сумма перевода (>0, округлена до 2 знаков)

    class Config:
        frozen = True


class BalanceOut(BaseModel):
    user_id: str
    balance: Decimal  # > 0 - пользователю должны; < 0 - он должен


class PaymentInstruction(BaseModel):
    """
    Что показать должнику на экране «Оплатить»: рельс кредитора, его ключ
    и готовая строка для QR или копирования.
    """
    rail_id: str
    rail_name: str
    label: str          # 'Pix (BR)'
    key: str            # сырой ключ кредитора
    payload: str        # закодированная строка (для рельсов без схемы == key)
    amount: Decimal
    currency: str
    supports_qr: bool


# =========================
# ВХОДНЫЕ МОДЕЛИ (HTTP)
# =========================

class GroupLedgerIn(BaseModel):
    group: Group
    expenses: List[Expense] = Field(default_factory=list)


class InstructionIn(BaseModel):
    debt: Debt
    group: Group
    memo: Optional[str] = None
    city: Optional[str] = None
