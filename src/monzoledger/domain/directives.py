"""Ledger value types: accounts, postings and directives.

These are recomputed on every export run and never persisted.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union

from monzoledger.domain.errors import ValidationError, unbalanced_postings


class AccountType(Enum):
    """Top-level Beancount account types."""

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    INCOME = "Income"
    EXPENSES = "Expenses"
    EQUITY = "Equity"


# Section order of open directives in the generated ledger
SECTION_ORDER = (
    AccountType.EQUITY,
    AccountType.ASSETS,
    AccountType.INCOME,
    AccountType.EXPENSES,
    AccountType.LIABILITIES,
)

SECTION_TITLES = {
    AccountType.EQUITY: "equities",
    AccountType.ASSETS: "assets",
    AccountType.INCOME: "income",
    AccountType.EXPENSES: "expenses",
    AccountType.LIABILITIES: "liabilities",
}

# Runs of anything that is not a Unicode letter or digit
_WORD_SPLIT = re.compile(r"[\W_]+")


def component_words(name: str) -> list[str]:
    """Words of a name, split on whitespace, punctuation and symbols."""
    return [w for w in _WORD_SPLIT.split(unicodedata.normalize("NFC", name)) if w]


def normalize_component(name: str) -> str:
    """Normalize an account name component to Beancount form.

    Words are split on anything that is not a letter or digit, capitalized and
    joined, so "eating_out", "Eating Out" and "EATING OUT" all become
    "EatingOut". Letters outside ASCII are kept ("Café"). Mixed-case words keep
    their inner capitals ("OpeningBalances").

    A name made only of symbols, such as an emoji, becomes its code points
    ("🎁" -> "U1F381") so that it still names one stable account.

    Raises:
        ValidationError: If the name is empty or only whitespace
    """
    words = component_words(name)
    if words:
        return "".join(_capitalize(w) for w in words)

    symbols = "".join(name.split())
    if not symbols:
        raise ValidationError(f"Account component '{name}' is empty")
    return "U" + "U".join(f"{ord(c):X}" for c in symbols)


def _capitalize(word: str) -> str:
    if word.isupper() or word.islower():
        return word[0].upper() + word[1:].lower()
    return word[0].upper() + word[1:]


@dataclass(frozen=True)
class LedgerAccount:
    """Hierarchical ledger account reference.

    Components are normalized on construction, so two accounts that differ
    only in case or separators compare (and hash) equal.
    """

    account_type: AccountType
    currency: str
    entity: str
    subaccount: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "currency", self.currency.strip().upper())
        object.__setattr__(self, "entity", normalize_component(self.entity))
        if self.subaccount is not None:
            object.__setattr__(self, "subaccount", normalize_component(self.subaccount))

    def __str__(self) -> str:
        parts = [self.account_type.value, self.currency, self.entity]
        if self.subaccount is not None:
            parts.append(self.subaccount)
        return ":".join(parts)


@dataclass(frozen=True)
class Posting:
    """One leg of a double-entry transaction, in minor units."""

    account: LedgerAccount
    amount: int
    currency: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Open:
    date: date
    account: LedgerAccount
    currency: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class Close:
    date: date
    account: LedgerAccount
    comment: Optional[str] = None


@dataclass(frozen=True)
class Balance:
    date: date
    account: LedgerAccount
    amount: int
    currency: str


@dataclass(frozen=True)
class Transaction:
    """Balanced transaction with exactly two postings.

    Raises:
        ValidationError: If the postings do not sum to zero
    """

    date: date
    note: str
    postings: tuple[Posting, Posting]
    comment: Optional[str] = None
    transaction_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if len(self.postings) != 2:
            raise ValidationError(f"Transaction needs exactly two postings, got {len(self.postings)}")
        total = sum(p.amount for p in self.postings)
        if total != 0:
            raise ValidationError(unbalanced_postings(total))


Directive = Union[Comment, Open, Close, Balance, Transaction]
