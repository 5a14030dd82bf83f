"""Tests for split allocation across modes."""

from decimal import Decimal

import pytest

from conftest import make_expense
from dividi.schemas.expense import ReceiptItem
from dividi.utils.splits import build_splits, check_expense_totals, itemized_total


def _amounts(splits):
    return [s.amount for s in splits]


def _d(*values):
    return [Decimal(v) for v in values]


class TestEqual:
    def test_extra_cent_goes_to_first(self):
        splits = build_splits(100, ["a", "b", "c"], "equal")
        assert _amounts(splits) == _d("33.34", "33.33", "33.33")
        assert sum(_amounts(splits)) == Decimal("100.00")

    def test_even_division(self):
        assert _amounts(build_splits(10, ["a", "b", "c", "d"], "equal")) == _d("2.5", "2.5", "2.5", "2.5")

    def test_several_residual_cents(self):
        assert _amounts(build_splits("0.05", ["a", "b", "c"], "equal")) == _d("0.02", "0.02", "0.01")

    def test_duplicate_participants_counted_once(self):
        splits = build_splits(10, ["a", "b", "a"], "equal")
        assert [s.user_id for s in splits] == ["a", "b"]


class TestPercentage:
    def test_rounding_error_goes_to_first(self):
        splits = build_splits(10, ["a", "b", "c"], "percentage", {"a": "33.33", "b": "33.33", "c": "33.34"})
        assert _amounts(splits) == _d("3.34", "3.33", "3.33")

    def test_whole_residual_goes_to_first(self):
        # c has no percent; the 25.00 left over is not spread cent by cent
        splits = build_splits(100, ["a", "b", "c"], "percentage", {"a": 50, "b": 25})
        assert _amounts(splits) == _d("75", "25", "0")

    def test_manual_value_keeps_percent(self):
        splits = build_splits(100, ["a", "b"], "percentage", {"a": 60, "b": 40})
        assert [s.manual_value for s in splits] == _d("60", "40")


class TestShares:
    def test_weights(self):
        splits = build_splits(100, ["a", "b", "c"], "shares", {"a": 2, "b": 1})
        assert _amounts(splits) == _d("50", "25", "25")
        assert [s.manual_value for s in splits] == _d("2", "1", "1")

    def test_residual_cents_in_list_order(self):
        splits = build_splits(10, ["a", "b", "c"], "shares", {})
        assert _amounts(splits) == _d("3.34", "3.33", "3.33")

    def test_zero_total_weight(self):
        splits = build_splits(100, ["a", "b"], "shares", {"a": 0, "b": 0})
        assert _amounts(splits) == _d("0", "0")


class TestExact:
    def test_values_taken_verbatim(self):
        splits = build_splits(50, ["a", "b", "c"], "exact", {"a": "12.345", "b": 20})
        assert _amounts(splits) == _d("12.35", "20", "0")

    def test_custom_is_exact(self):
        assert _amounts(build_splits(50, ["a"], "custom", {"a": 7})) == _d("7")


class TestItemized:
    def test_worked_example(self):
        items = [ReceiptItem(name="Pizza", price=10, quantity=2, assigned_to=["x", "y"])]
        splits = build_splits(0, [], "itemized", items=items, service_fee_percent=10)
        assert [(s.user_id, s.amount) for s in splits] == [("x", Decimal("11.00")), ("y", Decimal("11.00"))]

    def test_zero_amounts_and_unassigned_items_are_dropped(self):
        items = [
            ReceiptItem(name="Water", price=0, assigned_to=["z"]),
            ReceiptItem(name="Bread", price=4, assigned_to=[]),
            ReceiptItem(name="Wine", price=30, assigned_to=["x", "y", "w"]),
            ReceiptItem(name="Cake", price="7.50", assigned_to=["y"]),
        ]
        splits = build_splits(999, ["x"], "itemized", items=items)
        assert [(s.user_id, s.amount) for s in splits] == [
            ("x", Decimal("10")),
            ("y", Decimal("17.50")),
            ("w", Decimal("10")),
        ]

    def test_no_items(self):
        assert build_splits(100, ["a"], "itemized", items=[]) == []

    def test_itemized_total(self):
        items = [
            ReceiptItem(name="Pizza", price=10, quantity=2, assigned_to=["x"]),
            ReceiptItem(name="Soda", price=5, assigned_to=["y"]),
        ]
        assert itemized_total(items, service_fee_percent=10) == Decimal("27.50")


class TestDegenerateInput:
    @pytest.mark.parametrize("mode", ["equal", "percentage", "shares", "exact"])
    def test_zero_total(self, mode):
        assert build_splits(0, ["a", "b"], mode) == []

    @pytest.mark.parametrize("mode", ["equal", "percentage", "shares", "exact"])
    def test_no_participants(self, mode):
        assert build_splits(100, [], mode) == []

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown split mode"):
            build_splits(100, ["a"], "random")


class TestInvariants:
    @pytest.mark.parametrize("total", ["0.01", "1", "99.99", "100", "1234.57"])
    @pytest.mark.parametrize("n", [1, 2, 3, 6, 7])
    def test_equal_and_shares_sum_to_total(self, total, n):
        ids = [f"u{i}" for i in range(n)]
        weights = {uid: i + 1 for i, uid in enumerate(ids)}
        for splits in (
            build_splits(total, ids, "equal"),
            build_splits(total, ids, "shares", weights),
        ):
            assert sum(_amounts(splits)) == Decimal(total)

    def test_percentage_sums_to_total(self):
        splits = build_splits("1234.57", ["a", "b", "c"], "percentage", {"a": 17, "b": "41.5", "c": "41.5"})
        assert sum(_amounts(splits)) == Decimal("1234.57")

    def test_deterministic(self):
        args = ("100.01", ["a", "b", "c"], "shares", {"a": 3, "b": 1, "c": 1})
        assert build_splits(*args) == build_splits(*args)


class TestCheckExpenseTotals:
    def test_balanced(self):
        expense = make_expense("e1", {"a": 100}, {"a": "33.34", "b": "33.33", "c": "33.33"})
        assert check_expense_totals(expense) is True

    def test_within_tolerance(self):
        expense = make_expense("e1", {"a": 100}, {"a": "50", "b": "49.96"})
        assert check_expense_totals(expense) is True

    def test_splits_off(self):
        expense = make_expense("e1", {"a": 100}, {"a": "50", "b": "40"})
        assert check_expense_totals(expense) is False
