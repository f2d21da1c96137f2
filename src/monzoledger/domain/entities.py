"""Domain model entities for monzoledger.

These are pure data classes representing the banking records fetched from the
remote API, independent of the database schema. They are created once by the
sync job and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Pot type Monzo assigns to the account's flexible savings pot
FLEXIBLE_SAVINGS_POT_TYPE = "flexible_savings"


@dataclass(frozen=True)
class RemoteAccount:
    """Bank account domain entity."""

    id: str
    closed: bool
    created: datetime
    description: str
    currency: str
    owner_type: str
    account_number: Optional[str] = None
    sort_code: Optional[str] = None

    @property
    def label(self) -> str:
        """Entity label used as the ledger account owner."""
        return self.owner_type


@dataclass(frozen=True)
class Pot:
    """Savings pot nested under a bank account."""

    id: str
    account_id: str
    name: str
    currency: str
    balance: int
    pot_type: str
    deleted: bool
    account_label: Optional[str] = None

    @property
    def is_flexible_savings(self) -> bool:
        return self.pot_type == FLEXIBLE_SAVINGS_POT_TYPE


@dataclass(frozen=True)
class Merchant:
    """Merchant domain entity."""

    id: str
    name: str
    category: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Bank category code mapped to a display name."""

    id: str
    name: str


@dataclass(frozen=True)
class RawTransaction:
    """Transaction as reported by the remote API.

    Amounts are signed integers in minor units of ``currency``.
    """

    id: str
    account_id: str
    amount: int
    currency: str
    local_amount: int
    local_currency: str
    created: datetime
    settled: Optional[datetime]
    updated: Optional[datetime]
    description: str
    notes: Optional[str]
    merchant: Optional[Merchant]
    category: str

    @property
    def is_settled(self) -> bool:
        return self.settled is not None


@dataclass(frozen=True)
class Balance:
    """Live balance of a bank account."""

    balance: int
    total_balance: int
    currency: str
    spend_today: int


@dataclass(frozen=True)
class LedgerRow:
    """Denormalized settled transaction used by the ledger export."""

    id: str
    account_id: str
    account_label: str
    amount: int
    currency: str
    local_amount: int
    local_currency: str
    created: datetime
    settled: datetime
    description: str
    notes: Optional[str]
    merchant_name: Optional[str]
    category: str
    category_name: str

    @property
    def ledger_date(self) -> datetime:
        """Earlier of the settlement and creation timestamps."""
        return min(self.settled, self.created)
