# dividi/utils/money.py
# -----------------------------------------------------------------------------
# ДЕНЕЖНЫЕ ХЕЛПЕРЫ (общие для балансов, сплитов и платёжных payload'ов)
# -----------------------------------------------------------------------------
# Политика:
#   • Внутри - только Decimal. float/str на входе переводим через str(),
#     чтобы не тащить двоичный «хвост» float (0.1 + 0.2 и т.п.).
#   • Округление до центов - ROUND_HALF_UP (половина - от нуля).
#   • Для сплитов - «пол» до цента (ROUND_FLOOR) + раздача остатка по центу.
#   • Порог «ноль» для балансов - 0.01.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Iterable, Optional

from dividi.utils.currencies import get_currency

CENT = Decimal("0.01")
ZERO = Decimal("0")
EPS = Decimal("0.01")


def to_decimal(x) -> Decimal:
    if x is None:
        return ZERO
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def round_cents(x) -> Decimal:
    """Округление до 2 знаков, половина - от нуля."""
    return to_decimal(x).quantize(CENT, rounding=ROUND_HALF_UP)


def floor_cents(x) -> Decimal:
    return to_decimal(x).quantize(CENT, rounding=ROUND_FLOOR)


def to_cents(x) -> int:
    """Целое число центов (после округления half-up)."""
    return int(round_cents(x) * 100)


def is_zero(x) -> bool:
    # |x| < 0.01 - считаем «рассчитались»
    return abs(to_decimal(x)) < EPS


def sum_money(values: Iterable) -> Decimal:
    total = ZERO
    for v in values:
        total += to_decimal(v)
    return total


def format_amount(x) -> str:
    """Сумма для payload'ов: всегда ровно 2 знака ('10.00')."""
    return f"{round_cents(x):.2f}"


# =========================
# ОТОБРАЖЕНИЕ СУММ
# =========================

def _group_digits(digits: str, sep: str) -> str:
    parts = []
    while len(digits) > 3:
        parts.append(digits[-3:])
        digits = digits[:-3]
    parts.append(digits)
    return sep.join(reversed(parts))


def format_money(amount, currency: Optional[str] = "BRL") -> str:
    """
    Сумма для показа человеку в стиле локали валюты:
      BRL → 'R$ 1.234,56', USD → '$1,234.56', EUR → '1 234,56 €'.
    Неизвестная валюта → 'XYZ 1,234.56'. Никакой конверсии.
    """
    code = (currency or "").strip().upper()
    info = get_currency(code)

    decimals = info.decimals if info else 2
    q = Decimal("1") if decimals <= 0 else Decimal("1").scaleb(-decimals)
    value = to_decimal(amount).quantize(q, rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{decimals}f}"
    int_part, _, frac_part = text.partition(".")

    if info is None:
        number = _group_digits(int_part, ",") + (f".{frac_part}" if frac_part else "")
        return f"{sign}{code or 'XXX'} {number}"

    number = _group_digits(int_part, info.group_sep)
    if frac_part:
        number += info.decimal_sep + frac_part

    space = " " if info.symbol_space else ""
    symbol = info.symbol or code
    if info.symbol_after:
        return f"{sign}{number}{space}{symbol}"
    return f"{sign}{symbol}{space}{number}"
