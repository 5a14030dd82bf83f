# dividi/routers/groups.py
# РОУТЕР БАЛАНСОВ И SETTLE-UP
# -----------------------------------------------------------------------------
# Роутер без состояния: группа и её расходы приходят в теле запроса
# (их загрузка - забота слоя хранения), в ответ - расчёт.
#
#   POST /api/groups/balances   → [{user_id, balance}]
#   POST /api/groups/settle-up  → [{from_user_id, to_user_id, amount}]
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from ..schemas.settlement import BalanceOut, Debt, GroupLedgerIn
from ..utils.balance import compute_balances, compute_debts

router = APIRouter(prefix="/groups")


@router.post("/balances", response_model=List[BalanceOut])
def get_group_balances(body: GroupLedgerIn):
    """
    Net-балансы участников.
    net > 0 - пользователю должны; net < 0 - он должен.
    """
    balances = compute_balances(body.group, body.expenses)
    return [BalanceOut(user_id=uid, balance=bal) for uid, bal in balances.items()]


@router.post("/settle-up", response_model=List[Debt])
def get_group_settle_up(body: GroupLedgerIn):
    """План взаиморасчётов (жадный алгоритм, минимум переводов)."""
    return compute_debts(body.group, body.expenses)
