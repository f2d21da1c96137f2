"""Abstract remote ledger source."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from monzoledger.domain.entities import Balance, Pot, RawTransaction, RemoteAccount


class LedgerSource(ABC):
    """Read-only view of a remote bank's accounts, pots and transactions."""

    @abstractmethod
    def list_accounts(self) -> list[RemoteAccount]:
        """List all accounts visible to the credentials."""
        pass

    @abstractmethod
    def list_pots(self, account_id: str) -> list[Pot]:
        """List the pots of an account, including deleted ones."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: str,
        since: datetime,
        before: datetime,
        limit: Optional[int] = None,
    ) -> list[RawTransaction]:
        """List transactions of an account created in [since, before)."""
        pass

    @abstractmethod
    def get_balance(self, account_id: str) -> Balance:
        """Get the live balance of an account."""
        pass
