# dividi/utils/payment_rails.py
# -----------------------------------------------------------------------------
# КАТАЛОГ ПЛАТЁЖНЫХ РЕЛЬСОВ + ВЫБОР РЕЛЬСА ДЛЯ ПОЛУЧАТЕЛЯ
# -----------------------------------------------------------------------------
# Что делает этот модуль:
#   • PAYMENT_RAILS - статический каталог (только чтение), ключ - id рельса.
#     Порядок записей значим: при равном priority выигрывает тот, кто раньше.
#   • resolve_handle(user, currency) - из зарегистрированных у пользователя
#     ключей выбирает лучший рельс для валюты долга.
#
# Политика приоритетов:
#   • 1  - локальный мгновенный способ (Pix, Bizum, UPI, ...);
#   • 2  - кошельки второго выбора (Venmo);
#   • 10 - общий fallback (IBAN/SEPA).
#
# ВАЖНО:
#   • Ключ пользователя с неизвестным каталогу rail_id просто игнорируем.
#   • Валидность самого ключа для рельса не проверяем (только синтаксис строки).
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from dividi.schemas.payment_rail import PaymentRail, ResolvedHandle
from dividi.schemas.user import PaymentHandle, User
from dividi.utils.currencies import numeric_codes

log = logging.getLogger(__name__)

_NUMERIC = numeric_codes()


def _rail(**kwargs) -> PaymentRail:
    # числовой ISO-4217 берём из справочника валют по первой валюте рельса
    kwargs.setdefault("numeric_currency", _NUMERIC.get(kwargs["currencies"][0]))
    return PaymentRail(**kwargs)


_RAILS = [
    # --- TIER 1: основные рынки ---
    _rail(id="br_pix", name="Pix", country_code="BR", flag="🇧🇷", currencies=("BRL",),
          input_type="alphanumeric", placeholder="Chave CPF, Email, Telefone ou Aleatória",
          priority=1, supports_qr=True),
    _rail(id="us_zelle", name="Zelle", country_code="US", flag="🇺🇸", currencies=("USD",),
          input_type="email", placeholder="Email or Mobile Number",
          priority=1, supports_qr=False),
    _rail(id="us_venmo", name="Venmo", country_code="US", flag="🇺🇸", currencies=("USD",),
          input_type="alphanumeric", placeholder="Username (@user)",
          priority=2, supports_qr=True),
    _rail(id="eu_sepa", name="IBAN (SEPA)", country_code="EU", flag="🇪🇺", currencies=("EUR",),
          input_type="iban", placeholder="IBAN (Ex: IE12 BOFI...)",
          priority=10, supports_qr=False),
    _rail(id="es_bizum", name="Bizum", country_code="ES", flag="🇪🇸", currencies=("EUR",),
          input_type="phone", placeholder="Número de Móvil",
          priority=1, supports_qr=False, prefix="+34"),
    _rail(id="pt_mbway", name="MB WAY", country_code="PT", flag="🇵🇹", currencies=("EUR",),
          input_type="phone", placeholder="Número de Telemóvel",
          priority=1, supports_qr=False, prefix="+351"),
    _rail(id="gb_faster", name="Faster Payments", country_code="GB", flag="🇬🇧", currencies=("GBP",),
          input_type="bank_details", placeholder="Sort Code + Account Number",
          priority=1, supports_qr=False),
    _rail(id="ca_interac", name="Interac e-Transfer", country_code="CA", flag="🇨🇦", currencies=("CAD",),
          input_type="email", placeholder="Email address",
          priority=1, supports_qr=False),

    # --- TIER 2: расширение ---
    _rail(id="cl_rut", name="Transferencia (RUT)", country_code="CL", flag="🇨🇱", currencies=("CLP",),
          input_type="bank_details", placeholder="Banco, Tipo, Conta, RUT, Email",
          priority=1, supports_qr=False),
    _rail(id="au_payid", name="PayID", country_code="AU", flag="🇦🇺", currencies=("AUD",),
          input_type="alphanumeric", placeholder="Phone, Email or ABN",
          priority=1, supports_qr=False),
    _rail(id="in_upi", name="UPI", country_code="IN", flag="🇮🇳", currencies=("INR",),
          input_type="alphanumeric", placeholder="VPA (ex: name@bank)",
          priority=1, supports_qr=True),
    _rail(id="sg_paynow", name="PayNow", country_code="SG", flag="🇸🇬", currencies=("SGD",),
          input_type="alphanumeric", placeholder="Mobile or UEN/NRIC",
          priority=1, supports_qr=True, prefix="+65"),
    _rail(id="th_promptpay", name="PromptPay", country_code="TH", flag="🇹🇭", currencies=("THB",),
          input_type="phone", placeholder="Mobile Number or ID",
          priority=1, supports_qr=True, prefix="+66"),
    _rail(id="se_swish", name="Swish", country_code="SE", flag="🇸🇪", currencies=("SEK",),
          input_type="phone", placeholder="Mobile Number",
          priority=1, supports_qr=True, prefix="+46"),
    _rail(id="pl_blik", name="BLIK", country_code="PL", flag="🇵🇱", currencies=("PLN",),
          input_type="phone", placeholder="Phone Number",
          priority=1, supports_qr=False, prefix="+48"),
    _rail(id="mx_spei", name="SPEI (CLABE)", country_code="MX", flag="🇲🇽", currencies=("MXN",),
          input_type="bank_details", placeholder="CLABE (18 dígitos)",
          priority=1, supports_qr=False),
    _rail(id="pe_yape", name="Yape / Plin", country_code="PE", flag="🇵🇪", currencies=("PEN",),
          input_type="phone", placeholder="Número de Celular",
          priority=1, supports_qr=True, prefix="+51"),
    _rail(id="co_transfiya", name="Transfiya", country_code="CO", flag="🇨🇴", currencies=("COP",),
          input_type="phone", placeholder="Número de Celular",
          priority=1, supports_qr=False, prefix="+57"),
]

PAYMENT_RAILS: Mapping[str, PaymentRail] = MappingProxyType({r.id: r for r in _RAILS})


# =========================
# ПОИСК
# =========================

def get_rail(rail_id: Optional[str]) -> Optional[PaymentRail]:
    if not rail_id:
        return None
    return PAYMENT_RAILS.get(rail_id)


def rails_for_currency(currency: str) -> List[PaymentRail]:
    """Рельсы валюты: по priority, при равенстве - в порядке каталога."""
    code = (currency or "").strip().upper()
    rails = [r for r in PAYMENT_RAILS.values() if code in r.currencies]
    return sorted(rails, key=lambda r: r.priority)


def _handles_by_rail(handles: List[PaymentHandle]) -> Dict[str, PaymentHandle]:
    """
    Один ключ на рельс: помеченный is_primary, иначе первый по списку.
    Пустые значения и рельсы вне каталога отбрасываем.
    """
    out: Dict[str, PaymentHandle] = {}
    for h in handles:
        if h.rail_id not in PAYMENT_RAILS:
            log.debug("resolve: ignore handle for unknown rail %r", h.rail_id)
            continue
        if not (h.value or "").strip():
            continue
        current = out.get(h.rail_id)
        if current is None or (h.is_primary and not current.is_primary):
            out[h.rail_id] = h
    return out


def resolve_handle(user: User, currency: str) -> Optional[ResolvedHandle]:
    """
    Лучший способ заплатить пользователю в валюте currency
    или None, если подходящих ключей нет.
    """
    if not user.payment_handles:
        return None

    by_rail = _handles_by_rail(user.payment_handles)
    for rail in rails_for_currency(currency):
        handle = by_rail.get(rail.id)
        if handle is not None:
            log.debug("resolve: user %s -> %s (priority %s)", user.id, rail.id, rail.priority)
            return ResolvedHandle(rail=rail, value=handle.value)

    return None
