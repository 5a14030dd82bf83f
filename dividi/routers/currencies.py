# dividi/routers/currencies.py
# РОУТЕР СПРАВОЧНИКА ВАЛЮТ
# -----------------------------------------------------------------------------
# Что делает этот файл:
#  - Возвращает список валют, с которыми работают платёжные рельсы.
#  - Возвращает конкретную валюту по коду.
#  - Отдаёт пример форматирования суммы (для превью на фронте).
#
# Ключевые детали:
#  - Справочник статический (dividi/utils/currencies.py), БД не нужна.
#  - Поиск (?q=) - по коду и английскому названию, без учёта регистра.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import BaseModel, Field
from starlette import status

from ..schemas.currency import CurrencyOut
from ..utils.currencies import get_currency, list_currencies as _all_currencies
from ..utils.money import format_money

router = APIRouter(
    prefix="/currencies",   # в main.py подключено под /api → итого: /api/currencies
)


class CurrencyListResponse(BaseModel):
    items: List[CurrencyOut] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class FormattedAmountOut(BaseModel):
    code: str
    amount: Decimal
    formatted: str


# =========================
# РОУТЫ
# =========================

@router.get(
    "",
    response_model=CurrencyListResponse,
    summary="Список валют",
)
def list_currencies(
    response: Response,
    q: Optional[str] = Query(None, description="Поиск по коду и названию"),
):
    items = _all_currencies()
    if q:
        needle = q.strip().lower()
        items = [c for c in items if needle in c.code.lower() or needle in c.name.lower()]

    # справочник статичен - кэшируем долго
    response.headers["Cache-Control"] = "public, max-age=86400"
    return CurrencyListResponse(items=items, total=len(items))


@router.get(
    "/{code}",
    response_model=CurrencyOut,
    summary="Валюта по коду",
)
def get_currency_by_code(code: str, response: Response):
    row = get_currency(code)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Currency not found")

    response.headers["Cache-Control"] = "public, max-age=86400"
    return row


@router.get(
    "/{code}/format",
    response_model=FormattedAmountOut,
    summary="Сумма в формате валюты",
)
def format_amount_for_currency(
    code: str,
    amount: Decimal = Query(..., description="Сумма для форматирования"),
):
    row = get_currency(code)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Currency not found")
    return FormattedAmountOut(code=row.code, amount=amount, formatted=format_money(amount, row.code))
