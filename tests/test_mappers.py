"""Tests for mapper functions between domain and ORM models."""

from datetime import datetime, timedelta, timezone

from monzoledger.database.mappers import (
    from_storage_datetime,
    pot_to_domain,
    pot_to_orm,
    to_storage_datetime,
    transaction_to_orm,
)
from monzoledger.database.models import Account as ORMAccount
from helpers import make_pot, make_transaction, utc


def test_storage_datetime_is_naive_utc():
    local = datetime(2024, 6, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))

    stored = to_storage_datetime(local)

    assert stored.tzinfo is None
    assert stored == datetime(2024, 6, 1, 8, 0)


def test_stored_datetime_comes_back_as_utc():
    assert from_storage_datetime(datetime(2024, 6, 1, 8, 0)) == utc(2024, 6, 1, 8)
    assert from_storage_datetime(None) is None


def test_transaction_to_orm_links_merchant_by_id():
    from monzoledger.domain.entities import Merchant

    txn = make_transaction(merchant=Merchant(id="merch_9", name="Pret"))
    orm = transaction_to_orm(txn)

    assert orm.merchant_id == "merch_9"
    assert orm.created.tzinfo is None


def test_transaction_without_merchant_has_no_merchant_id():
    assert transaction_to_orm(make_transaction()).merchant_id is None


def test_pot_to_domain_uses_owner_type_as_label():
    orm_pot = pot_to_orm(make_pot())
    orm_pot.account = ORMAccount(
        id="acc1",
        closed=False,
        created=datetime(2024, 1, 1),
        description="Joint account",
        currency="GBP",
        owner_type="joint",
    )

    pot = pot_to_domain(orm_pot)

    assert pot.account_label == "joint"
