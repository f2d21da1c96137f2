"""Mapping of settled transactions onto ledger accounts."""

from dataclasses import dataclass
from typing import Callable, Optional

from monzoledger.domain.currency import format_money, minor_to_major
from monzoledger.domain.directives import AccountType, LedgerAccount, Posting, component_words
from monzoledger.domain.entities import LedgerRow, Pot
from monzoledger.domain.errors import CurrencyNotFoundError

# Description prefix Monzo uses for money received from another bank
INBOUND_TRANSFER_PREFIX = "Monzo-"
POT_ID_PREFIX = "pot_"

TRANSFERS_CATEGORY = "transfers"
SAVINGS_CATEGORY = "savings"

SAVINGS_SUBACCOUNT = "Savings"
INCOME_SUBACCOUNT = "Income"
UNRESOLVED_TRANSFER_SUBACCOUNT = "Transfers"

PotLookup = Callable[[str], Optional[Pot]]


def pot_ledger_account(pot: Pot, fallback_label: str) -> LedgerAccount:
    """Ledger account of a pot.

    The flexible-savings pot is the account's savings asset, so it shares the
    ``Savings`` subaccount with transactions in the savings category. A pot
    whose name has no letters or digits (an emoji, say) is named by its id.
    """
    if pot.is_flexible_savings:
        subaccount = SAVINGS_SUBACCOUNT
    elif component_words(pot.name):
        subaccount = pot.name
    else:
        subaccount = pot.id
    return LedgerAccount(AccountType.ASSETS, pot.currency, pot.account_label or fallback_label, subaccount)


def describe_amount(amount: int, currency: str) -> str:
    """Human-readable amount, e.g. "€12.50" or "12.50 XYZ" for unknown codes."""
    try:
        return format_money(amount, currency)
    except CurrencyNotFoundError:
        return f"{minor_to_major(amount)} {currency.upper()}"


@dataclass(frozen=True)
class ResolvedPostings:
    """The two postings of a transaction plus its narration."""

    asset: Posting
    counter: Posting
    note: str
    comment: Optional[str] = None

    @property
    def postings(self) -> tuple[Posting, Posting]:
        return (self.asset, self.counter)


class AccountResolver:
    """Resolve the ledger accounts a settled transaction posts to.

    The resolver holds no state beyond the pot lookup, so the same row always
    resolves to the same postings.
    """

    def __init__(self, find_pot: PotLookup):
        """Initialize resolver.

        Args:
            find_pot: Returns the pot whose id equals the given text, or None
        """
        self.find_pot = find_pot

    def resolve(self, row: LedgerRow) -> ResolvedPostings:
        """Resolve a ledger row into two postings that sum to zero."""
        asset_account = LedgerAccount(AccountType.ASSETS, row.currency, row.account_label)
        counter_account, pot = self._counter_account(row)

        return ResolvedPostings(
            asset=Posting(asset_account, row.amount, row.currency),
            counter=Posting(counter_account, -row.amount, row.currency),
            note=self._note(row, pot),
            comment=row.notes or None,
        )

    def _counter_account(self, row: LedgerRow) -> tuple[LedgerAccount, Optional[Pot]]:
        category = row.category.lower()
        currency, entity = row.currency, row.account_label

        if category == TRANSFERS_CATEGORY:
            if row.description.startswith(INBOUND_TRANSFER_PREFIX):
                return LedgerAccount(AccountType.INCOME, currency, entity, INCOME_SUBACCOUNT), None

            pot = self.find_pot(row.description)
            if pot is not None:
                return pot_ledger_account(pot, entity), pot

            if row.description.startswith(POT_ID_PREFIX):
                return LedgerAccount(AccountType.ASSETS, currency, entity, row.description), None

            return LedgerAccount(AccountType.INCOME, currency, entity, UNRESOLVED_TRANSFER_SUBACCOUNT), None

        if category == SAVINGS_CATEGORY:
            return LedgerAccount(AccountType.ASSETS, currency, entity, SAVINGS_SUBACCOUNT), None

        return LedgerAccount(AccountType.EXPENSES, currency, entity, row.category_name), None

    def _note(self, row: LedgerRow, pot: Optional[Pot]) -> str:
        if row.merchant_name:
            note = row.merchant_name
        elif row.notes:
            note = row.notes
        elif pot is not None:
            note = pot.name
        else:
            note = row.description

        if row.local_currency and row.local_currency.upper() != row.currency.upper():
            note = f"{note} ({describe_amount(row.local_amount, row.local_currency)})"
        return note
