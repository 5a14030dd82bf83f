# dividi/routers/payments.py
# РОУТЕР ПЛАТЁЖНЫХ СТРОК
# -----------------------------------------------------------------------------
#   POST /api/payments/payload      → строка для QR/копирования по рельсу и ключу
#   POST /api/payments/instruction  → инструкция оплаты долга (или null, если
#                                     у кредитора нет ключа в валюте группы)
#
# Ошибки:
#   • неизвестный rail_id            → 404
#   • поле TLV длиннее 99 символов   → 422
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from starlette import status

from ..schemas.payment_rail import PayloadIn, PayloadOut
from ..schemas.settlement import InstructionIn, PaymentInstruction
from ..services.settlement import build_payment_instruction
from ..utils.payloads import PayloadFieldError, UnknownRailError, encode, payload_family

log = logging.getLogger(__name__)

router = APIRouter(prefix="/payments")


@router.post("/payload", response_model=PayloadOut)
def create_payload(body: PayloadIn):
    try:
        payload = encode(body.rail_id, body.key, body.name, amount=body.amount, memo=body.memo, city=body.city)
    except UnknownRailError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment rail not found")
    except PayloadFieldError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return PayloadOut(rail_id=body.rail_id, family=payload_family(body.rail_id), payload=payload)


@router.post("/instruction", response_model=Optional[PaymentInstruction])
def create_payment_instruction(body: InstructionIn):
    try:
        return build_payment_instruction(body.debt, body.group, memo=body.memo, city=body.city)
    except PayloadFieldError as e:
        log.warning("instruction: cannot encode payload for %s: %s", body.debt.to_user_id, e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
