"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

# Import entities directly to avoid circular import through domain/__init__.py
from monzoledger.domain.entities import (
    RemoteAccount,
    Pot,
    Merchant,
    Category,
    RawTransaction,
    LedgerRow,
)


class Database(ABC):
    """Abstract database interface for monzoledger.

    Every ``save_*`` operation is an idempotent keyed insert: it checks for an
    existing row with the same id first and raises ``DuplicateError`` instead
    of writing a second copy. The check and the insert are not atomic, which
    is fine for a single-process batch tool.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Drop all stored data and recreate the schema."""
        pass

    # Account operations
    @abstractmethod
    def save_account(self, account: RemoteAccount) -> None:
        """Insert an account. Raises DuplicateError if the id exists."""
        pass

    @abstractmethod
    def read_accounts(self) -> list[RemoteAccount]:
        """List all accounts."""
        pass

    # Pot operations
    @abstractmethod
    def save_pot(self, pot: Pot) -> None:
        """Insert a pot. Raises DuplicateError if the id exists."""
        pass

    @abstractmethod
    def read_pots(self, include_deleted: bool = False) -> list[Pot]:
        """List pots, skipping soft-deleted ones unless asked."""
        pass

    @abstractmethod
    def find_pot_by_external_id(self, pot_id: str) -> Optional[Pot]:
        """Get pot by its remote id (as it appears in transfer descriptions)."""
        pass

    @abstractmethod
    def find_pot_by_type(self, pot_type: str) -> Optional[Pot]:
        """Get the first non-deleted pot with the given type tag."""
        pass

    # Merchant operations
    @abstractmethod
    def save_merchant(self, merchant: Merchant) -> None:
        """Insert a merchant. Raises DuplicateError if the id exists."""
        pass

    # Category operations
    @abstractmethod
    def save_category(self, category: Category) -> None:
        """Insert a category. Raises DuplicateError if the id exists."""
        pass

    @abstractmethod
    def read_categories(self) -> list[Category]:
        """List all categories."""
        pass

    # Transaction operations
    @abstractmethod
    def save_transaction(self, transaction: RawTransaction) -> None:
        """Insert a transaction. Raises DuplicateError if the id exists."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[RawTransaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def count_transactions(self) -> int:
        """Count stored transactions."""
        pass

    @abstractmethod
    def read_transactions_for_ledger(
        self, since: Optional[datetime] = None, before: Optional[datetime] = None
    ) -> list[LedgerRow]:
        """List settled transactions created in [since, before) as ledger rows.

        Rows are joined with their account, merchant and category and ordered
        by creation time, then id.
        """
        pass
