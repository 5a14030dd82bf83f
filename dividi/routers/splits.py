# dividi/routers/splits.py
# РОУТЕР РАЗБИВКИ СУММЫ
# Форма расхода дёргает его на каждый ввод: пустой/нулевой ввод → пустой список, не ошибка.

from __future__ import annotations

from fastapi import APIRouter

from ..schemas.split import SplitsIn, SplitsOut
from ..utils.money import sum_money
from ..utils.splits import build_splits, itemized_total

router = APIRouter(prefix="/splits")


@router.post("", response_model=SplitsOut)
def create_splits(body: SplitsIn):
    splits = build_splits(
        body.total,
        body.participants,
        body.mode,
        values=body.values,
        items=body.items,
        service_fee_percent=body.service_fee_percent,
    )
    if body.mode == "itemized":
        total = itemized_total(body.items or [], body.service_fee_percent)
    else:
        total = sum_money(s.amount for s in splits)
    return SplitsOut(splits=splits, total=total)
