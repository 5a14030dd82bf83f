# dividi/services/settlement.py
# СЕРВИС ПОГАШЕНИЯ ДОЛГОВ
# -----------------------------------------------------------------------------
# Что делает этот модуль:
#   • build_payment_instruction - по долгу собирает «что показать должнику»:
#     рельс кредитора в валюте группы, его ключ и готовую строку для QR/копирования.
#   • build_settlement_expense - запись погашения, которую создаём, когда должник
#     нажал «Я заплатил». Статус pending: в балансы она войдёт только после
#     подтверждения кредитором (confirm_settlement).
#
# Важно:
#   • Никакого I/O: сохранение записи - забота слоя хранения.
#   • id записи передаёт вызывающий (модуль не генерирует id и не смотрит на часы).

from __future__ import annotations

import logging
from typing import Optional

from dividi.schemas.expense import Expense, Payment, Split
from dividi.schemas.group import Group
from dividi.schemas.settlement import Debt, PaymentInstruction
from dividi.utils.money import round_cents
from dividi.utils.payloads import encode
from dividi.utils.payment_rails import resolve_handle

log = logging.getLogger(__name__)

SETTLEMENT_DESCRIPTION = "Settle-up payment"


def build_payment_instruction(
    debt: Debt,
    group: Group,
    memo: Optional[str] = None,
    city: Optional[str] = None,
) -> Optional[PaymentInstruction]:
    """
    Инструкция оплаты для debt.to_user_id в валюте группы.
    None - если кредитора нет в группе или у него нет подходящего ключа.
    """
    creditor = next((m for m in group.members if m.id == debt.to_user_id), None)
    if creditor is None:
        log.debug("instruction: creditor %s is not a member of group %s", debt.to_user_id, group.id)
        return None

    handle = resolve_handle(creditor, group.currency)
    if handle is None:
        return None

    amount = round_cents(debt.amount)
    payload = encode(handle.rail.id, handle.value, creditor.name, amount=amount, memo=memo, city=city)

    return PaymentInstruction(
        rail_id=handle.rail.id,
        rail_name=handle.rail.name,
        label=f"{handle.rail.name} ({handle.rail.country_code})",
        key=handle.value,
        payload=payload,
        amount=amount,
        currency=group.currency,
        supports_qr=handle.rail.supports_qr,
    )


def build_settlement_expense(
    debt: Debt,
    group_id: str,
    expense_id: str,
    description: str = SETTLEMENT_DESCRIPTION,
    created_by: Optional[str] = None,
) -> Expense:
    """Погашение: должник «платит» всю сумму, кредитор «потребляет» её же."""
    amount = round_cents(debt.amount)
    return Expense(
        id=expense_id,
        group_id=group_id,
        description=description,
        amount=amount,
        kind="settlement",
        status="pending",
        split_mode="equal",
        payments=[Payment(user_id=debt.from_user_id, amount=amount)],
        splits=[Split(user_id=debt.to_user_id, amount=amount)],
        created_by=created_by if created_by is not None else debt.from_user_id,
    )


def confirm_settlement(expense: Expense) -> Expense:
    """Копия записи со статусом confirmed (исходный объект не трогаем)."""
    if expense.kind != "settlement":
        raise ValueError(f"Expense {expense.id} is not a settlement")
    return expense.model_copy(update={"status": "confirmed"})
