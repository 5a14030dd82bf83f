# dividi/utils/payloads.py
# -----------------------------------------------------------------------------
# ПЛАТЁЖНЫЕ PAYLOAD'Ы (строка для QR или «скопировать и вставить»)
# -----------------------------------------------------------------------------
# Семейства (выбор - по профилю рельса в PAYLOAD_PROFILES):
#   • EMV TLV  - Pix (BR Code), PayNow (SG), PromptPay (TH):
#       поля <tag:2><len:2><value>, вложенные блоки - обычные значения,
#       в конце '6304' + CRC-16/CCITT-FALSE (4 hex, верхний регистр).
#   • URL      - UPI (upi://pay?...), Venmo (venmo://paycharge?...).
#   • Текст    - Swish ('C:phone;amount;msg'), Yape ('YAPE:phone:name:amount').
#   • Прочие рельсы каталога - сырой ключ как есть (показываем текстом).
#
# Нормализация (для всех семейств):
#   • диакритика: NFD + выкидываем combining-символы ('São' → 'Sao');
#   • референс транзакции: только [A-Za-z0-9];
#   • сумма: всегда ровно 2 знака ('10.00'), только если > 0.
#
# Ошибки:
#   • UnknownRailError  - рельса нет в каталоге;
#   • PayloadFieldError - значение TLV длиннее 99 символов.
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, ClassVar, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from dividi import config
from dividi.schemas.payment_rail import PaymentRail
from dividi.utils.money import ZERO, format_amount, to_decimal
from dividi.utils.payment_rails import get_rail


class UnknownRailError(LookupError):
    def __init__(self, rail_id: str):
        super().__init__(f"Unknown payment rail: {rail_id!r}")
        self.rail_id = rail_id


class PayloadFieldError(ValueError):
    pass


# =========================
# ВСПОМОГАТЕЛЬНОЕ
# =========================

def crc16_ccitt(payload: str) -> str:
    """CRC-16/CCITT-FALSE: poly 0x1021, init 0xFFFF, без отражений, старший бит первым."""
    crc = 0xFFFF
    for ch in payload:
        crc ^= (ord(ch) & 0xFF) << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"


def has_valid_crc(payload: str) -> bool:
    """Последние 4 символа == CRC всего, что перед ними (включая '6304')."""
    if len(payload) < 8 or payload[-8:-4] != "6304":
        return False
    return crc16_ccitt(payload[:-4]) == payload[-4:].upper()


def format_field(tag: str, value: str) -> str:
    if len(value) > 99:
        raise PayloadFieldError(f"TLV field {tag} is too long ({len(value)} > 99)")
    return f"{tag}{len(value):02d}{value}"


def normalize_text(s: Optional[str]) -> str:
    decomposed = unicodedata.normalize("NFD", s or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def reference_text(s: Optional[str]) -> str:
    return re.sub(r"[^A-Za-z0-9]", "", normalize_text(s))


def _has_amount(amount) -> bool:
    return amount is not None and to_decimal(amount) > ZERO


def _strip_phone(raw: str) -> str:
    return re.sub(r"[\s\-]", "", raw or "")


def _international_phone(raw: str, calling_code: str) -> str:
    """'+46 70-123' → '4670123'; '070123' → '4670123'."""
    phone = _strip_phone(raw)
    if phone.startswith("+"):
        return phone[1:]
    if phone.startswith("0"):
        return calling_code + phone[1:]
    return phone


def _uri_component(s: str) -> str:
    # как encodeURIComponent: не трогаем A-Z a-z 0-9 - _ . ! ~ * ' ( )
    return quote(s, safe="-_.!~*'()")


# =========================
# ПРОФИЛИ РЕЛЬСОВ
# =========================

@dataclass(frozen=True)
class EmvProfile:
    family: ClassVar[str] = "emv"

    account_tag: str
    account_fields: Callable[[str], List[Tuple[str, str]]]
    name_fallback: str
    point_of_initiation: bool = True
    upper_name: bool = True
    name_max: int = 25
    city: Optional[str] = None      # None - город от вызывающего / из конфига
    city_max: int = 15
    reference_tag: Optional[str] = None
    reference_fallback: Optional[str] = None
    reference_max: int = 25


@dataclass(frozen=True)
class UrlProfile:
    family: ClassVar[str] = "url"

    base: str
    payee_param: str
    amount_param: str
    note_param: str
    note_max: int
    payee_clean: Callable[[str], str] = str.strip
    fixed_params: Tuple[Tuple[str, str], ...] = ()
    name_param: Optional[str] = None
    name_max: int = 50
    name_fallback: str = "User"
    currency: Optional[str] = None


@dataclass(frozen=True)
class TextProfile:
    family: ClassVar[str] = "text"

    prefix: str
    separator: str
    calling_code: str
    fields: Tuple[str, ...]          # порядок полей после телефона: name / amount / memo
    empty_amount: Optional[str] = None
    name_max: int = 30
    memo_max: int = 50
    mobile_prefix: Optional[str] = None
    mobile_length: Optional[int] = None


PayloadProfile = Union[EmvProfile, UrlProfile, TextProfile]


def _pix_account(key: str) -> List[Tuple[str, str]]:
    return [("00", "BR.GOV.BCB.PIX"), ("01", key.strip())]


_UEN_RE = re.compile(r"^[A-Z0-9]{9,10}$", re.IGNORECASE)
_SG_MOBILE_RE = re.compile(r"^(\+65)?[89]\d{7}$")


def paynow_proxy_type(value: str) -> str:
    """'0' - мобильный, '1' - NRIC, '2' - UEN."""
    if _UEN_RE.match(value):
        return "2"
    if _SG_MOBILE_RE.match(value):
        return "0"
    return "1"


def _paynow_account(key: str) -> List[Tuple[str, str]]:
    value = re.sub(r"\s", "", key)
    return [
        ("00", "SG.PAYNOW"),
        ("01", paynow_proxy_type(value)),
        ("02", value),
        ("03", "1"),  # сумму можно править в приложении банка
    ]


def promptpay_target(key: str) -> Tuple[str, str]:
    """
    (подтег, значение) для блока 29:
      • 13 цифр без ведущего 0 - национальный ID → '02';
      • иначе телефон: '0812345678' → '0066812345678' → '01'.
    """
    raw = _strip_phone(key)
    if len(raw) == 13 and raw.isdigit() and not raw.startswith("0"):
        return "02", raw
    return "01", _international_phone(raw, "66").rjust(13, "0")


def _promptpay_account(key: str) -> List[Tuple[str, str]]:
    return [("00", "A000000677010111"), promptpay_target(key)]


def _venmo_username(key: str) -> str:
    return key.strip().replace("@", "", 1)


PAYLOAD_PROFILES: Mapping[str, PayloadProfile] = MappingProxyType({
    "br_pix": EmvProfile(
        account_tag="26",
        account_fields=_pix_account,
        name_fallback=config.DEFAULT_NAME,
        point_of_initiation=False,
        upper_name=False,
        reference_tag="05",
        reference_fallback="***",
    ),
    "sg_paynow": EmvProfile(
        account_tag="26",
        account_fields=_paynow_account,
        name_fallback="USER",
        city="SINGAPORE",
        reference_tag="01",
    ),
    "th_promptpay": EmvProfile(
        account_tag="29",
        account_fields=_promptpay_account,
        name_fallback="USER",
        city="BANGKOK",
    ),
    "in_upi": UrlProfile(
        base="upi://pay",
        payee_param="pa",
        name_param="pn",
        amount_param="am",
        currency="INR",
        note_param="tn",
        note_max=50,
    ),
    "us_venmo": UrlProfile(
        base="venmo://paycharge",
        fixed_params=(("txn", "pay"),),
        payee_param="recipients",
        payee_clean=_venmo_username,
        amount_param="amount",
        note_param="note",
        note_max=280,
    ),
    "se_swish": TextProfile(
        prefix="C:",
        separator=";",
        calling_code="46",
        fields=("amount", "memo"),
        empty_amount="0",
    ),
    "pe_yape": TextProfile(
        prefix="YAPE:",
        separator=":",
        calling_code="51",
        fields=("name", "amount"),
        mobile_prefix="9",
        mobile_length=9,
    ),
})


# =========================
# КОДИРОВЩИКИ СЕМЕЙСТВ
# =========================

def _encode_emv(rail: PaymentRail, profile: EmvProfile, key, name, amount, memo, city) -> str:
    clean_name = normalize_text(name)
    if profile.upper_name:
        clean_name = clean_name.upper()
    clean_name = clean_name[: profile.name_max] or profile.name_fallback

    clean_city = profile.city or normalize_text(city or config.DEFAULT_CITY)[: profile.city_max] or config.DEFAULT_CITY

    payload = format_field("00", "01")
    if profile.point_of_initiation:
        payload += format_field("01", "12" if _has_amount(amount) else "11")

    account = "".join(format_field(tag, value) for tag, value in profile.account_fields(key))
    payload += format_field(profile.account_tag, account)

    payload += format_field("52", "0000")
    payload += format_field("53", f"{rail.numeric_currency:03d}")
    if _has_amount(amount):
        payload += format_field("54", format_amount(amount))
    payload += format_field("58", rail.country_code)
    payload += format_field("59", clean_name)
    payload += format_field("60", clean_city)

    if profile.reference_tag:
        ref = reference_text(memo)
        if profile.upper_name:
            ref = ref.upper()
        ref = ref[: profile.reference_max] or profile.reference_fallback
        if ref:
            payload += format_field("62", format_field(profile.reference_tag, ref))

    payload += "6304"
    return payload + crc16_ccitt(payload)


def _encode_url(rail: PaymentRail, profile: UrlProfile, key, name, amount, memo, city) -> str:
    params: List[Tuple[str, str]] = list(profile.fixed_params)
    params.append((profile.payee_param, profile.payee_clean(key)))
    if profile.name_param:
        params.append((profile.name_param, (name or "")[: profile.name_max] or profile.name_fallback))
    if _has_amount(amount):
        params.append((profile.amount_param, format_amount(amount)))
    if profile.currency:
        params.append(("cu", profile.currency))
    if memo:
        params.append((profile.note_param, memo[: profile.note_max]))

    query = "&".join(f"{k}={_uri_component(v)}" for k, v in params)
    return f"{profile.base}?{query}"


def _text_phone(profile: TextProfile, key: str) -> str:
    phone = _strip_phone(key)
    if (
        profile.mobile_prefix
        and len(phone) == profile.mobile_length
        and phone.startswith(profile.mobile_prefix)
    ):
        return profile.calling_code + phone
    return _international_phone(phone, profile.calling_code)


def _encode_text(rail: PaymentRail, profile: TextProfile, key, name, amount, memo, city) -> str:
    parts = [profile.prefix + _text_phone(profile, key)]
    for field_name in profile.fields:
        if field_name == "name":
            if name:
                parts.append(name[: profile.name_max])
        elif field_name == "amount":
            if _has_amount(amount):
                parts.append(format_amount(amount))
            elif profile.empty_amount is not None:
                parts.append(profile.empty_amount)
        elif field_name == "memo":
            if memo:
                parts.append(memo[: profile.memo_max])
    return profile.separator.join(parts)


_ENCODERS = {
    EmvProfile: _encode_emv,
    UrlProfile: _encode_url,
    TextProfile: _encode_text,
}


# =========================
# ТОЧКА ВХОДА
# =========================

def payload_family(rail_id: str) -> str:
    """'emv' | 'url' | 'text' | 'plain' - или UnknownRailError."""
    if get_rail(rail_id) is None:
        raise UnknownRailError(rail_id)
    profile = PAYLOAD_PROFILES.get(rail_id)
    return profile.family if profile is not None else "plain"


def encode(
    rail_id: str,
    key: str,
    name: str,
    amount=None,
    memo: Optional[str] = None,
    city: Optional[str] = None,
) -> str:
    """
    Строка оплаты для рельса rail_id.
    amount пустой или 0 - статический код без суммы (плательщик введёт сам).
    """
    rail = get_rail(rail_id)
    if rail is None:
        raise UnknownRailError(rail_id)

    profile = PAYLOAD_PROFILES.get(rail.id)
    if profile is None:
        return key

    return _ENCODERS[type(profile)](rail, profile, key, name, amount, memo, city)
