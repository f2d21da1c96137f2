"""Mapper functions to convert between domain models and SQLAlchemy models.

SQLite stores datetimes without a timezone. Everything is written as UTC and
tagged as UTC again on the way out.
"""

from datetime import datetime, UTC
from typing import Optional

from monzoledger.domain import entities as domain
from monzoledger.database.models import (
    Account as ORMAccount,
    Pot as ORMPot,
    Merchant as ORMMerchant,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def to_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC for storage."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Tag a stored naive datetime as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def account_to_domain(orm_account: ORMAccount) -> domain.RemoteAccount:
    """Convert SQLAlchemy Account model to domain RemoteAccount entity."""
    return domain.RemoteAccount(
        id=orm_account.id,
        closed=orm_account.closed,
        created=from_storage_datetime(orm_account.created),
        description=orm_account.description,
        currency=orm_account.currency,
        owner_type=orm_account.owner_type,
        account_number=orm_account.account_number,
        sort_code=orm_account.sort_code,
    )


def account_to_orm(account: domain.RemoteAccount) -> ORMAccount:
    """Convert domain RemoteAccount entity to SQLAlchemy Account model."""
    return ORMAccount(
        id=account.id,
        closed=account.closed,
        created=to_storage_datetime(account.created),
        description=account.description,
        currency=account.currency,
        owner_type=account.owner_type,
        account_number=account.account_number,
        sort_code=account.sort_code,
    )


def pot_to_domain(orm_pot: ORMPot) -> domain.Pot:
    """Convert SQLAlchemy Pot model to domain Pot entity."""
    return domain.Pot(
        id=orm_pot.id,
        account_id=orm_pot.account_id,
        name=orm_pot.name,
        currency=orm_pot.currency,
        balance=orm_pot.balance,
        pot_type=orm_pot.pot_type,
        deleted=orm_pot.deleted,
        account_label=orm_pot.account.owner_type if orm_pot.account is not None else None,
    )


def pot_to_orm(pot: domain.Pot) -> ORMPot:
    """Convert domain Pot entity to SQLAlchemy Pot model."""
    return ORMPot(
        id=pot.id,
        account_id=pot.account_id,
        name=pot.name,
        balance=pot.balance,
        currency=pot.currency,
        pot_type=pot.pot_type,
        deleted=pot.deleted,
    )


def merchant_to_domain(orm_merchant: ORMMerchant) -> domain.Merchant:
    """Convert SQLAlchemy Merchant model to domain Merchant entity."""
    return domain.Merchant(
        id=orm_merchant.id,
        name=orm_merchant.name,
        category=orm_merchant.category,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(id=orm_category.id, name=orm_category.name)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.RawTransaction:
    """Convert SQLAlchemy Transaction model to domain RawTransaction entity."""
    merchant = None
    if orm_transaction.merchant is not None:
        merchant = merchant_to_domain(orm_transaction.merchant)

    return domain.RawTransaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        amount=orm_transaction.amount,
        currency=orm_transaction.currency,
        local_amount=orm_transaction.local_amount,
        local_currency=orm_transaction.local_currency,
        created=from_storage_datetime(orm_transaction.created),
        settled=from_storage_datetime(orm_transaction.settled),
        updated=from_storage_datetime(orm_transaction.updated),
        description=orm_transaction.description,
        notes=orm_transaction.notes,
        merchant=merchant,
        category=orm_transaction.category,
    )


def transaction_to_orm(transaction: domain.RawTransaction) -> ORMTransaction:
    """Convert domain RawTransaction entity to SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=transaction.id,
        account_id=transaction.account_id,
        merchant_id=transaction.merchant.id if transaction.merchant is not None else None,
        amount=transaction.amount,
        currency=transaction.currency,
        local_amount=transaction.local_amount,
        local_currency=transaction.local_currency,
        created=to_storage_datetime(transaction.created),
        settled=to_storage_datetime(transaction.settled),
        updated=to_storage_datetime(transaction.updated),
        description=transaction.description,
        notes=transaction.notes,
        category=transaction.category,
    )


def ledger_row_to_domain(
    orm_transaction: ORMTransaction, category_name: Optional[str]
) -> domain.LedgerRow:
    """Build the denormalized ledger row for a settled transaction."""
    merchant = orm_transaction.merchant
    return domain.LedgerRow(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        account_label=orm_transaction.account.owner_type,
        amount=orm_transaction.amount,
        currency=orm_transaction.currency,
        local_amount=orm_transaction.local_amount,
        local_currency=orm_transaction.local_currency,
        created=from_storage_datetime(orm_transaction.created),
        settled=from_storage_datetime(orm_transaction.settled),
        description=orm_transaction.description,
        notes=orm_transaction.notes,
        merchant_name=merchant.name if merchant is not None else None,
        category=orm_transaction.category,
        category_name=category_name or orm_transaction.category,
    )
