# dividi/routers/payment_rails.py
# РОУТЕР КАТАЛОГА ПЛАТЁЖНЫХ РЕЛЬСОВ
# -----------------------------------------------------------------------------
#   GET  /api/payment-rails?currency=EUR  → рельсы (по priority)
#   GET  /api/payment-rails/{rail_id}     → рельс или 404
#   POST /api/payment-rails/resolve       → лучший ключ пользователя для валюты или null
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from starlette import status

from ..schemas.payment_rail import PaymentRail, ResolvedHandle, ResolveIn
from ..utils.payment_rails import PAYMENT_RAILS, get_rail, rails_for_currency, resolve_handle

router = APIRouter(prefix="/payment-rails")


@router.get("", response_model=List[PaymentRail])
def list_payment_rails(
    currency: Optional[str] = Query(None, description="Фильтр по валюте ISO-4217"),
):
    if currency:
        return rails_for_currency(currency)
    return list(PAYMENT_RAILS.values())


@router.post("/resolve", response_model=Optional[ResolvedHandle])
def resolve_payment_handle(body: ResolveIn):
    return resolve_handle(body.user, body.currency)


@router.get("/{rail_id}", response_model=PaymentRail)
def get_payment_rail(rail_id: str):
    rail = get_rail(rail_id)
    if rail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment rail not found")
    return rail
