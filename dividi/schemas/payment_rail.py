# dividi/schemas/payment_rail.py
# -----------------------------------------------------------------------------
# СХЕМЫ Pydantic: платёжный рельс и результат выбора рельса
# -----------------------------------------------------------------------------
# Рельс - запись статического каталога (dividi/utils/payment_rails.py):
#   • priority: 1 - локальный мгновенный способ, 10+ - общий fallback (IBAN и т.п.);
#   • numeric_currency - числовой ISO-4217 для EMV-кодировщиков (986 для BRL).

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field

from .user import User

InputType = Literal["phone", "email", "national_id", "iban", "alphanumeric", "bank_details"]


class PaymentRail(BaseModel):
    id: str = Field(..., description="ID рельса, напр. 'br_pix'")
    name: str = Field(..., description="Отображаемое имя")
    country_code: str = Field(..., description="ISO-3166-1 alpha-2 ('EU' для SEPA)")
    flag: str = ""
    currencies: Tuple[str, ...] = Field(..., description="Поддерживаемые валюты ISO-4217")
    input_type: InputType
    placeholder: str = ""
    priority: int = Field(..., description="Меньше - предпочтительнее")
    supports_qr: bool = False
    numeric_currency: Optional[int] = None
    prefix: Optional[str] = None

    class Config:
        frozen = True


class ResolvedHandle(BaseModel):
    rail: PaymentRail
    value: str


# =========================
# ВХОДНЫЕ/ВЫХОДНЫЕ МОДЕЛИ (HTTP)
# =========================

class ResolveIn(BaseModel):
    user: User
    currency: str


class PayloadIn(BaseModel):
    rail_id: str
    key: str
    name: str = ""
    amount: Optional[Decimal] = None
    memo: Optional[str] = None
    city: Optional[str] = None


class PayloadOut(BaseModel):
    rail_id: str
    family: str     # emv | url | text | plain
    payload: str
