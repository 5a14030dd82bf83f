# dividi/schemas/group.py
# -----------------------------------------------------------------------------
# СХЕМЫ Pydantic: Group
# -----------------------------------------------------------------------------
# Группа приходит снаружи (из хранилища) уже собранной: состав + валюта.
# Первый участник в members - владелец (создатель) группы.

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from .user import User


class Group(BaseModel):
    id: str = Field(..., description="ID группы")
    name: str = Field("", description="Название группы")
    currency: str = Field("BRL", description="Код валюты ISO-4217 группы")
    members: List[User] = Field(default_factory=list, description="Состав группы (первый - владелец)")

    @field_validator("currency")
    @classmethod
    def _normalize_currency(cls, v: str) -> str:
        v = str(v).strip().upper()
        if len(v) != 3:
            raise ValueError("Код валюты должен содержать 3 символа (ISO 4217)")
        return v

    class Config:
        from_attributes = True
