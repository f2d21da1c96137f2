"""Entity builders and an in-memory remote source shared by the tests."""

from datetime import datetime, UTC
from typing import Optional

from monzoledger.client.base import LedgerSource
from monzoledger.domain.entities import (
    Balance,
    Merchant,
    Pot,
    RawTransaction,
    RemoteAccount,
)

SETTLED_AT_CREATION = object()


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=UTC)


def make_account(account_id="acc1", owner_type="acc1", **overrides) -> RemoteAccount:
    values = dict(
        id=account_id,
        closed=False,
        created=utc(2024, 1, 1),
        description="Personal current account",
        currency="GBP",
        owner_type=owner_type,
    )
    values.update(overrides)
    return RemoteAccount(**values)


def make_pot(pot_id="pot_0001", account_id="acc1", name="Holiday", **overrides) -> Pot:
    values = dict(
        id=pot_id,
        account_id=account_id,
        name=name,
        currency="GBP",
        balance=5000,
        pot_type="default",
        deleted=False,
    )
    values.update(overrides)
    return Pot(**values)


def make_transaction(
    txn_id="t1",
    amount=-500,
    category="groceries",
    created: Optional[datetime] = None,
    settled=SETTLED_AT_CREATION,
    merchant: Optional[Merchant] = None,
    **overrides,
) -> RawTransaction:
    created = created or utc(2024, 2, 10, 12)
    values = dict(
        id=txn_id,
        account_id="acc1",
        amount=amount,
        currency="GBP",
        local_amount=amount,
        local_currency="GBP",
        created=created,
        settled=created if settled is SETTLED_AT_CREATION else settled,
        updated=created,
        description="CARD PAYMENT",
        notes=None,
        merchant=merchant,
        category=category,
    )
    values.update(overrides)
    return RawTransaction(**values)


class FakeSource(LedgerSource):
    """In-memory ledger source that records the windows it was asked for."""

    def __init__(self, accounts=None, pots=None, transactions=None, balances=None):
        self.accounts = list(accounts or [])
        self.pots = list(pots or [])
        self.transactions = list(transactions or [])
        self.balances = dict(balances or {})
        self.requests = []

    def list_accounts(self):
        return list(self.accounts)

    def list_pots(self, account_id):
        return [p for p in self.pots if p.account_id == account_id]

    def list_transactions(self, account_id, since, before, limit=None):
        self.requests.append((account_id, since, before))
        return [
            t for t in self.transactions
            if t.account_id == account_id and since <= t.created < before
        ]

    def get_balance(self, account_id):
        return self.balances.get(account_id, Balance(0, 0, "GBP", 0))
