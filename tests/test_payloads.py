"""Tests for payment payload encoding (EMV TLV, URL and text schemes)."""

import pytest

from dividi import config
from dividi.utils.payloads import (
    PayloadFieldError,
    UnknownRailError,
    crc16_ccitt,
    encode,
    format_field,
    has_valid_crc,
    normalize_text,
    payload_family,
    paynow_proxy_type,
    promptpay_target,
    reference_text,
)


class TestHelpers:
    def test_crc_check_value(self):
        # standard check value for CRC-16/CCITT-FALSE
        assert crc16_ccitt("123456789") == "29B1"

    def test_crc_is_four_uppercase_hex(self):
        crc = crc16_ccitt("")
        assert crc == "FFFF"

    def test_format_field(self):
        assert format_field("00", "01") == "000201"
        assert format_field("59", "Joao Silva") == "5910Joao Silva"

    def test_format_field_too_long(self):
        with pytest.raises(PayloadFieldError, match="too long"):
            format_field("26", "x" * 100)

    def test_normalize_text(self):
        assert normalize_text("São Paulo – Ação") == "Sao Paulo – Acao"

    def test_reference_text(self):
        assert reference_text("Jantar #1 – ação!") == "Jantar1acao"


class TestPix:
    def test_full_payload(self):
        payload = encode("br_pix", "fulano@example.com", "João Silva", amount=10, memo="Jantar", city="São Paulo")
        assert payload[:-4] == (
            "000201"
            "26400014BR.GOV.BCB.PIX0118fulano@example.com"
            "52040000"
            "5303986"
            "540510.00"
            "5802BR"
            "5910Joao Silva"
            "6009Sao Paulo"
            "62100506Jantar"
            "6304"
        )
        assert has_valid_crc(payload)

    def test_static_code_without_amount(self):
        payload = encode("br_pix", "+5511999998888", "Ana")
        assert "53039865802BR" in payload
        assert "62070503***6304" in payload
        assert has_valid_crc(payload)

    def test_zero_amount_is_static(self):
        assert encode("br_pix", "key", "Ana", amount=0) == encode("br_pix", "key", "Ana")

    def test_default_name_and_city(self):
        payload = encode("br_pix", "key", "")
        assert format_field("59", config.DEFAULT_NAME) in payload
        assert format_field("60", config.DEFAULT_CITY[:15]) in payload

    def test_name_truncated(self):
        payload = encode("br_pix", "key", "Maria Aparecida dos Santos Oliveira")
        assert "5925Maria Aparecida dos Santo" in payload

    def test_key_too_long(self):
        with pytest.raises(PayloadFieldError):
            encode("br_pix", "k" * 90, "Ana")


class TestPayNow:
    def test_full_payload(self):
        payload = encode("sg_paynow", "9123 4567", "Tan Ah Kow", amount=5.5, memo="lunch #3")
        assert payload[:-4] == (
            "000201"
            "010212"
            "26350009SG.PAYNOW01010020891234567"
            "03011"
            "52040000"
            "5303702"
            "54045.50"
            "5802SG"
            "5910TAN AH KOW"
            "6009SINGAPORE"
            "62100106LUNCH3"
            "6304"
        )
        assert has_valid_crc(payload)

    def test_no_reference_block_without_memo(self):
        payload = encode("sg_paynow", "91234567", "Tan")
        assert "010211" in payload
        assert "6009SINGAPORE6304" in payload

    @pytest.mark.parametrize(
        "value, expected",
        [("91234567", "0"), ("+6581234567", "0"), ("201912345K", "2"), ("abc", "1")],
    )
    def test_proxy_type(self, value, expected):
        assert paynow_proxy_type(value) == expected


class TestPromptPay:
    def test_phone_payload(self):
        payload = encode("th_promptpay", "081-234-5678", "somchai", memo="ignored")
        assert payload[:-4] == (
            "000201"
            "010211"
            "29370016A00000067701011101130066812345678"
            "52040000"
            "5303764"
            "5802TH"
            "5907SOMCHAI"
            "6007BANGKOK"
            "6304"
        )
        assert has_valid_crc(payload)

    def test_targets(self):
        assert promptpay_target("0812345678") == ("01", "0066812345678")
        assert promptpay_target("+66 81 234 5678") == ("01", "0066812345678")
        assert promptpay_target("1234567890123") == ("02", "1234567890123")


class TestUrlSchemes:
    def test_upi(self):
        payload = encode("in_upi", "name@bank", "Ravi Kumar", amount=250, memo="Dinner & drinks")
        assert payload == "upi://pay?pa=name%40bank&pn=Ravi%20Kumar&am=250.00&cu=INR&tn=Dinner%20%26%20drinks"

    def test_upi_optional_params_omitted(self):
        assert encode("in_upi", " name@bank ", "") == "upi://pay?pa=name%40bank&pn=User&cu=INR"

    def test_venmo(self):
        payload = encode("us_venmo", "@jane-doe", "Jane", amount=12.5, memo="Pizza")
        assert payload == "venmo://paycharge?txn=pay&recipients=jane-doe&amount=12.50&note=Pizza"

    def test_venmo_note_truncated(self):
        payload = encode("us_venmo", "jane", "Jane", memo="x" * 300)
        assert payload.endswith("&note=" + "x" * 280)


class TestTextSchemes:
    def test_swish(self):
        assert encode("se_swish", "070-123 45 67", "Anna", amount=100, memo="Middag") == "C:46701234567;100.00;Middag"

    def test_swish_editable_amount(self):
        assert encode("se_swish", "+46701234567", "Anna") == "C:46701234567;0"

    def test_yape(self):
        assert encode("pe_yape", "987 654 321", "Luis", amount=20) == "YAPE:51987654321:Luis:20.00"

    def test_yape_local_zero_prefix(self):
        assert encode("pe_yape", "0987654321", "") == "YAPE:51987654321"


class TestDispatch:
    def test_plain_fallback_returns_key(self):
        iban = "IE12 BOFI 9000 0112 3456 78"
        assert encode("eu_sepa", iban, "Ana", amount=10) == iban

    def test_unknown_rail(self):
        with pytest.raises(UnknownRailError) as exc:
            encode("xx_nowhere", "key", "Ana")
        assert exc.value.rail_id == "xx_nowhere"
        assert isinstance(exc.value, LookupError)

    @pytest.mark.parametrize(
        "rail_id, family",
        [("br_pix", "emv"), ("th_promptpay", "emv"), ("in_upi", "url"), ("se_swish", "text"), ("gb_faster", "plain")],
    )
    def test_family(self, rail_id, family):
        assert payload_family(rail_id) == family

    @pytest.mark.parametrize(
        "rail_id, key",
        [("br_pix", "123e4567-e89b-12d3-a456-426614174000"), ("sg_paynow", "S1234567D"), ("th_promptpay", "0899999999")],
    )
    @pytest.mark.parametrize("amount", [None, "0.01", "1234.5"])
    def test_crc_round_trip(self, rail_id, key, amount):
        payload = encode(rail_id, key, "Zoë Ñandú", amount=amount, memo="Réf 42")
        assert crc16_ccitt(payload[:-4]) == payload[-4:]
