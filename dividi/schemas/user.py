# dividi/schemas/user.py

from pydantic import BaseModel, Field
from typing import List, Optional


class PaymentHandle(BaseModel):
    rail_id: str = Field(..., description="ID рельса из каталога, напр. 'br_pix'")
    value: str = Field(..., description="Ключ/телефон/email/IBAN в свободной форме")
    is_primary: bool = False


class User(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    default_currency: Optional[str] = None
    payment_handles: List[PaymentHandle] = Field(default_factory=list)

    class Config:
        from_attributes = True
