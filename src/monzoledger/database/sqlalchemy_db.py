"""Generic SQLAlchemy database implementation."""

import logging
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session, joinedload

from monzoledger.database.base import Database
from monzoledger.database.models import (
    Base,
    Account,
    Pot,
    Merchant,
    Category,
    Transaction,
    create_session_factory,
)
from monzoledger.database.mappers import (
    account_to_domain,
    account_to_orm,
    pot_to_domain,
    pot_to_orm,
    category_to_domain,
    transaction_to_domain,
    transaction_to_orm,
    ledger_row_to_domain,
    to_storage_datetime,
)
from monzoledger.domain.entities import (
    RemoteAccount as DomainAccount,
    Pot as DomainPot,
    Merchant as DomainMerchant,
    Category as DomainCategory,
    RawTransaction as DomainTransaction,
    LedgerRow,
)
from monzoledger.domain.errors import DuplicateError, duplicate_entity

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _exists(self, model, entity_id: str) -> bool:
        session = self._get_session()
        return session.query(model.id).filter(model.id == entity_id).first() is not None

    def _insert(self, kind: str, model, entity_id: str, row) -> None:
        """Insert a row after a duplicate pre-check."""
        if self._exists(model, entity_id):
            raise DuplicateError(duplicate_entity(kind, entity_id))

        session = self._get_session()
        session.add(row)
        try:
            session.commit()
        except Exception:
            session.rollback()
            logger.error("Failed to insert %s %s", kind.lower(), entity_id)
            raise
        logger.debug("Inserted %s %s", kind.lower(), entity_id)

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def reset(self) -> None:
        """Drop all stored data and recreate the schema."""
        engine = self._get_session().get_bind()
        self.disconnect()
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        logger.info("Database reset")

    # Account operations
    def save_account(self, account: DomainAccount) -> None:
        """Insert an account. Raises DuplicateError if the id exists."""
        self._insert("Account", Account, account.id, account_to_orm(account))

    def read_accounts(self) -> list[DomainAccount]:
        """List all accounts."""
        session = self._get_session()
        accounts = session.query(Account).order_by(Account.created, Account.id).all()
        return [account_to_domain(acc) for acc in accounts]

    # Pot operations
    def save_pot(self, pot: DomainPot) -> None:
        """Insert a pot. Raises DuplicateError if the id exists."""
        self._insert("Pot", Pot, pot.id, pot_to_orm(pot))

    def read_pots(self, include_deleted: bool = False) -> list[DomainPot]:
        """List pots, skipping soft-deleted ones unless asked."""
        session = self._get_session()
        query = session.query(Pot).options(joinedload(Pot.account))
        if not include_deleted:
            query = query.filter(Pot.deleted.is_(False))
        pots = query.order_by(Pot.account_id, Pot.name, Pot.id).all()
        return [pot_to_domain(pot) for pot in pots]

    def find_pot_by_external_id(self, pot_id: str) -> Optional[DomainPot]:
        """Get pot by its remote id."""
        session = self._get_session()
        pot = session.query(Pot).filter(Pot.id == pot_id).first()
        if pot is None:
            return None
        return pot_to_domain(pot)

    def find_pot_by_type(self, pot_type: str) -> Optional[DomainPot]:
        """Get the first non-deleted pot with the given type tag."""
        session = self._get_session()
        pot = (
            session.query(Pot)
            .filter(Pot.pot_type == pot_type, Pot.deleted.is_(False))
            .order_by(Pot.id)
            .first()
        )
        if pot is None:
            return None
        return pot_to_domain(pot)

    # Merchant operations
    def save_merchant(self, merchant: DomainMerchant) -> None:
        """Insert a merchant. Raises DuplicateError if the id exists."""
        row = Merchant(id=merchant.id, name=merchant.name, category=merchant.category)
        self._insert("Merchant", Merchant, merchant.id, row)

    # Category operations
    def save_category(self, category: DomainCategory) -> None:
        """Insert a category. Raises DuplicateError if the id exists."""
        row = Category(id=category.id, name=category.name)
        self._insert("Category", Category, category.id, row)

    def read_categories(self) -> list[DomainCategory]:
        """List all categories."""
        session = self._get_session()
        categories = session.query(Category).order_by(Category.id).all()
        return [category_to_domain(cat) for cat in categories]

    # Transaction operations
    def save_transaction(self, transaction: DomainTransaction) -> None:
        """Insert a transaction. Raises DuplicateError if the id exists."""
        self._insert("Transaction", Transaction, transaction.id, transaction_to_orm(transaction))

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def count_transactions(self) -> int:
        """Count stored transactions."""
        session = self._get_session()
        return session.query(Transaction).count()

    def read_transactions_for_ledger(
        self, since: Optional[datetime] = None, before: Optional[datetime] = None
    ) -> list[LedgerRow]:
        """List settled transactions created in [since, before) as ledger rows."""
        session = self._get_session()
        query = (
            session.query(Transaction, Category.name)
            .join(Account, Transaction.account_id == Account.id)
            .outerjoin(Category, Transaction.category == Category.id)
            .options(joinedload(Transaction.account), joinedload(Transaction.merchant))
            .filter(Transaction.settled.isnot(None))
        )

        if since is not None:
            query = query.filter(Transaction.created >= to_storage_datetime(since))
        if before is not None:
            query = query.filter(Transaction.created < to_storage_datetime(before))

        rows = query.order_by(Transaction.created, Transaction.id).all()
        return [ledger_row_to_domain(txn, category_name) for txn, category_name in rows]
