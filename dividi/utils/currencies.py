# dividi/utils/currencies.py
# СПРАВОЧНИК ВАЛЮТ (статический, только чтение)
# -----------------------------------------------------------------------------
# Что здесь:
#   • Валюты, с которыми работают платёжные рельсы каталога (ISO-4217).
#   • Числовой код (нужен EMV-кодировщикам), число знаков, символ, флаг.
#   • Правила отображения суммы: где стоит символ и какие разделители.
#
# ВАЖНО:
#   • Никакой конверсии курсов - валюта влияет только на формат и выбор рельса.
#   • Таблица заполняется один раз при импорте и дальше не меняется.
# -----------------------------------------------------------------------------

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from dividi.schemas.currency import CurrencyOut


_CURRENCIES = [
    {
        "code": "BRL", "numeric_code": 986, "decimals": 2, "symbol": "R$",
        "flag_emoji": "🇧🇷", "display_country": "BR", "name": "Brazilian Real",
        "symbol_after": False, "symbol_space": True,
        "decimal_sep": ",", "group_sep": ".",
    },
    {
        "code": "USD", "numeric_code": 840, "decimals": 2, "symbol": "$",
        "flag_emoji": "🇺🇸", "display_country": "US", "name": "US Dollar",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "EUR", "numeric_code": 978, "decimals": 2, "symbol": "€",
        "flag_emoji": "🇪🇺", "display_country": "EU", "name": "Euro",
        "symbol_after": True, "symbol_space": True,
        "decimal_sep": ",", "group_sep": " ",
    },
    {
        "code": "GBP", "numeric_code": 826, "decimals": 2, "symbol": "£",
        "flag_emoji": "🇬🇧", "display_country": "GB", "name": "British Pound",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "CAD", "numeric_code": 124, "decimals": 2, "symbol": "$",
        "flag_emoji": "🇨🇦", "display_country": "CA", "name": "Canadian Dollar",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "CLP", "numeric_code": 152, "decimals": 0, "symbol": "$",
        "flag_emoji": "🇨🇱", "display_country": "CL", "name": "Chilean Peso",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ",", "group_sep": ".",
    },
    {
        "code": "AUD", "numeric_code": 36, "decimals": 2, "symbol": "A$",
        "flag_emoji": "🇦🇺", "display_country": "AU", "name": "Australian Dollar",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "INR", "numeric_code": 356, "decimals": 2, "symbol": "₹",
        "flag_emoji": "🇮🇳", "display_country": "IN", "name": "Indian Rupee",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "SGD", "numeric_code": 702, "decimals": 2, "symbol": "S$",
        "flag_emoji": "🇸🇬", "display_country": "SG", "name": "Singapore Dollar",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "THB", "numeric_code": 764, "decimals": 2, "symbol": "฿",
        "flag_emoji": "🇹🇭", "display_country": "TH", "name": "Thai Baht",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "SEK", "numeric_code": 752, "decimals": 2, "symbol": "kr",
        "flag_emoji": "🇸🇪", "display_country": "SE", "name": "Swedish Krona",
        "symbol_after": True, "symbol_space": True,
        "decimal_sep": ",", "group_sep": " ",
    },
    {
        "code": "PLN", "numeric_code": 985, "decimals": 2, "symbol": "zł",
        "flag_emoji": "🇵🇱", "display_country": "PL", "name": "Polish Zloty",
        "symbol_after": True, "symbol_space": True,
        "decimal_sep": ",", "group_sep": " ",
    },
    {
        "code": "MXN", "numeric_code": 484, "decimals": 2, "symbol": "$",
        "flag_emoji": "🇲🇽", "display_country": "MX", "name": "Mexican Peso",
        "symbol_after": False, "symbol_space": False,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "PEN", "numeric_code": 604, "decimals": 2, "symbol": "S/",
        "flag_emoji": "🇵🇪", "display_country": "PE", "name": "Peruvian Sol",
        "symbol_after": False, "symbol_space": True,
        "decimal_sep": ".", "group_sep": ",",
    },
    {
        "code": "COP", "numeric_code": 170, "decimals": 2, "symbol": "$",
        "flag_emoji": "🇨🇴", "display_country": "CO", "name": "Colombian Peso",
        "symbol_after": False, "symbol_space": True,
        "decimal_sep": ",", "group_sep": ".",
    },
]

CURRENCIES: Mapping[str, CurrencyOut] = MappingProxyType(
    {row["code"]: CurrencyOut(**row) for row in _CURRENCIES}
)


def get_currency(code: Optional[str]) -> Optional[CurrencyOut]:
    if not code:
        return None
    return CURRENCIES.get(code.strip().upper())


def list_currencies() -> List[CurrencyOut]:
    """Все валюты справочника, отсортированные по коду."""
    return sorted(CURRENCIES.values(), key=lambda c: c.code)


def numeric_codes() -> Dict[str, int]:
    return {c.code: c.numeric_code for c in CURRENCIES.values()}
