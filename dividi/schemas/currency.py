# dividi/schemas/currency.py
# СХЕМЫ: справочник валют.
# ВАЖНО:
#   - Справочник статический (dividi/utils/currencies.py), БД не нужна.
#   - Поля symbol_after/symbol_space/decimal_sep/group_sep описывают, как рисовать сумму
#     на экране (format_money). К арифметике они отношения не имеют.

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class CurrencyOut(BaseModel):
    code: str = Field(..., description="Код валюты ISO-4217, напр. 'USD'")
    numeric_code: int = Field(..., description="Числовой код ISO-4217, напр. 840 для USD")
    decimals: int = Field(..., description="Количество знаков после запятой (2 для USD, 0 для CLP)")
    symbol: Optional[str] = Field(None, description="Символ валюты (например, '$', '€')")
    flag_emoji: Optional[str] = Field(None, description="Эмодзи флага региона валюты")
    display_country: Optional[str] = Field(None, description="Код страны/региона для показа флага, например 'US', 'EU'")
    name: str = Field(..., description="Название валюты (en)")

    symbol_after: bool = Field(False, description="Символ после суммы ('10,00 €')")
    symbol_space: bool = Field(False, description="Пробел между символом и суммой")
    decimal_sep: str = Field(".", description="Десятичный разделитель")
    group_sep: str = Field(",", description="Разделитель разрядов")

    class Config:
        frozen = True
