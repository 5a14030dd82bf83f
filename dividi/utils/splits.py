# dividi/utils/splits.py
# -----------------------------------------------------------------------------
# РАЗБИВКА СУММЫ РАСХОДА НА ДОЛИ (split modes)
# -----------------------------------------------------------------------------
# Режимы:
#   • equal      - поровну;
#   • percentage - по процентам;
#   • shares     - по весам (по умолчанию вес 1);
#   • exact      - точные суммы как ввёл пользователь (legacy-имя: custom);
#   • itemized   - по позициям чека + сервисный сбор.
#
# Правило центов:
#   • equal/shares: «пол» до цента каждому, затем оставшиеся центы по одному
#     участникам в порядке списка. Сумма долей == total до цента.
#   • percentage: весь остаток целиком уходит ПЕРВОМУ участнику (одна поправка).
#   • exact: без перераспределения - сверка суммы на вызывающей стороне.
#
# Функция чистая: одинаковый вход → одинаковый выход, включая раскладку центов.
# Пустой список участников или total <= 0 → пустой результат, а не ошибка
# (вызывается из формы на каждый ввод символа).
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from dividi.schemas.expense import Expense, ReceiptItem, Split
from dividi.utils.money import (
    CENT,
    ZERO,
    floor_cents,
    round_cents,
    sum_money,
    to_cents,
    to_decimal,
)

EXPENSE_TOLERANCE = Decimal("0.05")


def _unique(ids: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for uid in ids:
        if uid in seen:
            continue
        seen.add(uid)
        out.append(uid)
    return out


def _spread_cents(amounts: List[Decimal], remainder: Decimal) -> List[Decimal]:
    """Раздаёт положительный остаток по одному центу в порядке списка."""
    cents = to_cents(remainder)
    n = len(amounts)
    k = 0
    while cents > 0 and n:
        amounts[k % n] += CENT
        cents -= 1
        k += 1
    return amounts


# =========================
# РЕЖИМЫ
# =========================

def _split_equal(total: Decimal, ids: List[str]) -> List[Split]:
    base = floor_cents(total / len(ids))
    amounts = _spread_cents([base] * len(ids), total - base * len(ids))
    return [Split(user_id=uid, amount=amt) for uid, amt in zip(ids, amounts)]


def _split_percentage(total: Decimal, ids: List[str], values: Mapping) -> List[Split]:
    percents = [to_decimal(values.get(uid)) for uid in ids]
    amounts = [floor_cents(total * p / 100) for p in percents]

    diff = total - sum_money(amounts)
    if diff != ZERO:
        amounts[0] += diff

    return [
        Split(user_id=uid, amount=round_cents(amt), manual_value=p)
        for uid, amt, p in zip(ids, amounts, percents)
    ]


def _split_shares(total: Decimal, ids: List[str], values: Mapping) -> List[Split]:
    weights = [to_decimal(values[uid]) if values.get(uid) is not None else Decimal("1") for uid in ids]
    total_weight = sum_money(weights)

    if total_weight == ZERO:
        return [Split(user_id=uid, amount=ZERO, manual_value=w) for uid, w in zip(ids, weights)]

    amounts = [floor_cents(total * w / total_weight) for w in weights]
    amounts = _spread_cents(amounts, total - sum_money(amounts))
    return [
        Split(user_id=uid, amount=amt, manual_value=w)
        for uid, amt, w in zip(ids, amounts, weights)
    ]


def _split_exact(ids: List[str], values: Mapping) -> List[Split]:
    out = []
    for uid in ids:
        value = to_decimal(values.get(uid))
        out.append(Split(user_id=uid, amount=round_cents(value), manual_value=value))
    return out


def _split_itemized(items: Sequence[ReceiptItem], service_fee_percent) -> List[Split]:
    totals: Dict[str, Decimal] = {}
    for item in items:
        assigned = _unique(item.assigned_to or [])
        if not assigned:
            continue
        per_person = to_decimal(item.price) * to_decimal(item.quantity) / len(assigned)
        for uid in assigned:
            totals[uid] = totals.get(uid, ZERO) + per_person

    multiplier = 1 + to_decimal(service_fee_percent) / 100

    out = []
    for uid, amount in totals.items():
        final = round_cents(amount * multiplier)
        if final == ZERO:
            continue
        out.append(Split(user_id=uid, amount=final))
    return out


# =========================
# ТОЧКА ВХОДА
# =========================

def build_splits(
    total,
    participants: Sequence[str],
    mode: str,
    values: Optional[Mapping[str, object]] = None,
    items: Optional[Sequence[ReceiptItem]] = None,
    service_fee_percent=0,
) -> List[Split]:
    """
    Разбивает total на доли участников по режиму mode.
    values - {user_id: процент | вес | точная сумма} в зависимости от режима.
    Для itemized total и participants не используются: сумма выводится из позиций.
    """
    values = values or {}

    if mode == "itemized":
        if not items:
            return []
        return _split_itemized(items, service_fee_percent)

    if mode not in ("equal", "percentage", "shares", "exact", "custom"):
        raise ValueError(f"Unknown split mode: {mode!r}")

    total = round_cents(total)
    ids = _unique(participants)
    if total <= ZERO or not ids:
        return []

    if mode == "equal":
        return _split_equal(total, ids)
    if mode == "percentage":
        return _split_percentage(total, ids, values)
    if mode == "shares":
        return _split_shares(total, ids, values)
    return _split_exact(ids, values)


def itemized_total(items: Sequence[ReceiptItem], service_fee_percent=0) -> Decimal:
    """Итог чека: Σ(price × quantity) × (1 + fee/100), до центов."""
    subtotal = sum_money(to_decimal(i.price) * to_decimal(i.quantity) for i in items)
    return round_cents(subtotal * (1 + to_decimal(service_fee_percent) / 100))


def check_expense_totals(expense: Expense, tolerance=EXPENSE_TOLERANCE) -> bool:
    """
    Сверка, которую делает форма перед сохранением:
    Σ payments и Σ splits должны совпадать с amount с допуском 0.05.
    """
    amount = to_decimal(expense.amount)
    tol = to_decimal(tolerance)
    paid = sum_money(p.amount for p in expense.payments)
    owed = sum_money(s.amount for s in expense.splits)
    return abs(paid - amount) < tol and abs(owed - amount) < tol
