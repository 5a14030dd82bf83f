"""Tests for the payment rail catalog and handle resolution."""

import pytest
from pydantic import ValidationError

from dividi.schemas.user import PaymentHandle, User
from dividi.utils.payment_rails import PAYMENT_RAILS, get_rail, rails_for_currency, resolve_handle


def _user(*handles):
    return User(
        id="u1",
        name="Ana",
        payment_handles=[
            PaymentHandle(rail_id=h[0], value=h[1], is_primary=len(h) > 2 and h[2]) for h in handles
        ],
    )


class TestCatalog:
    def test_get_rail(self):
        rail = get_rail("br_pix")
        assert rail.name == "Pix"
        assert rail.priority == 1
        assert rail.supports_qr is True
        assert rail.numeric_currency == 986
        assert rail.country_code == "BR"

    def test_get_rail_missing(self):
        assert get_rail("xx_nowhere") is None
        assert get_rail("") is None

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            PAYMENT_RAILS["xx_new"] = get_rail("br_pix")

    def test_rails_are_frozen(self):
        with pytest.raises(ValidationError):
            get_rail("br_pix").priority = 5

    def test_rails_for_currency(self):
        assert [r.id for r in rails_for_currency("eur")] == ["es_bizum", "pt_mbway", "eu_sepa"]
        assert rails_for_currency("JPY") == []


class TestResolveHandle:
    def test_lowest_priority_wins(self):
        user = _user(("eu_sepa", "IE12BOFI90000112345678"), ("es_bizum", "+34600111222"))
        resolved = resolve_handle(user, "EUR")
        assert resolved.rail.id == "es_bizum"
        assert resolved.value == "+34600111222"

    def test_priority_ties_follow_catalog_order(self):
        user = _user(("pt_mbway", "912345678"), ("es_bizum", "600111222"))
        assert resolve_handle(user, "EUR").rail.id == "es_bizum"

    def test_currency_filter(self):
        user = _user(("us_venmo", "@ana"), ("br_pix", "ana@example.com"))
        assert resolve_handle(user, "BRL").rail.id == "br_pix"
        assert resolve_handle(user, "USD").rail.id == "us_venmo"

    def test_unknown_rail_handle_is_ignored(self):
        user = _user(("xx_legacy", "whatever"), ("br_pix", "ana@example.com"))
        assert resolve_handle(user, "BRL").value == "ana@example.com"

    def test_no_match(self):
        assert resolve_handle(_user(("br_pix", "ana@example.com")), "EUR") is None
        assert resolve_handle(_user(), "BRL") is None

    def test_primary_handle_preferred_within_rail(self):
        user = _user(("br_pix", "old@example.com"), ("br_pix", "new@example.com", True))
        assert resolve_handle(user, "BRL").value == "new@example.com"

    def test_blank_value_ignored(self):
        user = _user(("es_bizum", "   "), ("eu_sepa", "IE12BOFI90000112345678"))
        assert resolve_handle(user, "EUR").rail.id == "eu_sepa"
