# dividi/utils/balance.py
# -----------------------------------------------------------------------------
# УТИЛИТЫ РАСЧЁТА БАЛАНСОВ / SETTLE-UP
# -----------------------------------------------------------------------------
# Политика:
#   • Одна валюта на группу, без конверсии.
#   • Внутренние расчёты - Decimal, округление до центов (ROUND_HALF_UP).
#   • Семантика net:
#       net > 0 - пользователю ДОЛЖНЫ; net < 0 - он ДОЛЖЕН.
#   • Пропускаем удалённые расходы (deleted_at) и НЕподтверждённые погашения
#     (kind='settlement', status='pending') - это пока только заявка.
#   • Незнакомые user_id в payments/splits не ошибка: заводим им баланс на лету.
#   • Алгоритм settle-up - "greedy": минимум переводов (сведение должников
#     и кредиторов по net), не более members-1 переводов.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from dividi.schemas.expense import Expense
from dividi.schemas.group import Group
from dividi.schemas.settlement import Debt
from dividi.utils.money import EPS, ZERO, is_zero, round_cents, to_decimal

log = logging.getLogger(__name__)


def _counts_for_balance(expense: Expense) -> bool:
    if expense.deleted_at is not None:
        return False
    if expense.kind == "settlement" and expense.status == "pending":
        return False
    return True


# =========================
# NET-БАЛАНСЫ
# =========================

def compute_balances(group: Group, expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    """
    Возвращает {user_id: net} в порядке: сначала участники группы, затем
    «незнакомые» id в порядке появления. Каждый баланс округлён до центов.
    """
    balances: Dict[str, Decimal] = {m.id: ZERO for m in group.members}

    for expense in expenses:
        if not _counts_for_balance(expense):
            log.debug("balance: skip expense %s (kind=%s, status=%s, deleted=%s)",
                      expense.id, expense.kind, expense.status, expense.deleted_at is not None)
            continue

        # кто заплатил - кредит (+)
        for payment in expense.payments:
            balances[payment.user_id] = balances.get(payment.user_id, ZERO) + to_decimal(payment.amount)

        # кто потребил - дебет (−)
        for split in expense.splits:
            balances[split.user_id] = balances.get(split.user_id, ZERO) - to_decimal(split.amount)

    return {uid: round_cents(bal) for uid, bal in balances.items()}


# =========================
# АЛГОРИТМ ВЫДАЧИ ПЛАНА
# =========================

def greedy_settle_up(net_balance: Dict[str, Decimal]) -> List[Debt]:
    """
    Жадный settle-up.
    Должники - по возрастанию (самый отрицательный первым), кредиторы - по убыванию.
    Сортировка стабильная: при равных суммах сохраняется порядок net_balance.
    """
    debtors = [[uid, round_cents(bal)] for uid, bal in net_balance.items() if round_cents(bal) < -EPS]
    creditors = [[uid, round_cents(bal)] for uid, bal in net_balance.items() if round_cents(bal) > EPS]

    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: -x[1])

    debts: List[Debt] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(abs(debtor[1]), creditor[1])
        if amount > ZERO:
            debts.append(Debt(from_user_id=debtor[0], to_user_id=creditor[0], amount=round_cents(amount)))

        debtor[1] += amount
        creditor[1] -= amount

        if is_zero(debtor[1]):
            i += 1
        if is_zero(creditor[1]):
            j += 1

    return debts


def compute_debts(group: Group, expenses: Iterable[Expense]) -> List[Debt]:
    """План взаиморасчётов группы: минимальный набор переводов."""
    debts = greedy_settle_up(compute_balances(group, expenses))
    log.debug("settle-up: group %s -> %d transfer(s)", group.id, len(debts))
    return debts


def has_debts(group: Group, expenses: Iterable[Expense]) -> bool:
    """Есть ли в группе хоть один ненулевой баланс (|net| > 0.01)."""
    return any(abs(bal) > EPS for bal in compute_balances(group, expenses).values())
