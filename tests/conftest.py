"""Shared builders for group/expense fixtures."""

from decimal import Decimal

import pytest

from dividi.schemas.expense import Expense, Payment, Split
from dividi.schemas.group import Group
from dividi.schemas.user import PaymentHandle, User


def make_user(uid, name=None, handles=()):
    return User(
        id=uid,
        name=name or uid.upper(),
        payment_handles=[PaymentHandle(rail_id=r, value=v) for r, v in handles],
    )


def make_expense(eid, payments, splits, **kwargs):
    amount = kwargs.pop("amount", sum(Decimal(str(v)) for v in payments.values()))
    return Expense(
        id=eid,
        group_id=kwargs.pop("group_id", "g1"),
        amount=amount,
        payments=[Payment(user_id=u, amount=a) for u, a in payments.items()],
        splits=[Split(user_id=u, amount=a) for u, a in splits.items()],
        **kwargs,
    )


@pytest.fixture
def trio_group():
    return Group(
        id="g1",
        name="Trip",
        currency="BRL",
        members=[
            make_user("a", "Ana", handles=[("br_pix", "ana@example.com")]),
            make_user("b", "Bruno"),
            make_user("c", "Carla"),
        ],
    )


@pytest.fixture
def dinner_expense():
    # 90 paid by A, split equally between A, B, C
    return make_expense("e1", {"a": 90}, {"a": 30, "b": 30, "c": 30})
