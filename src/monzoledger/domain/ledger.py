"""Ledger generation domain service."""

import logging
import os
import tempfile
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from monzoledger.config import LedgerSettings
from monzoledger.database.base import Database
from monzoledger.domain.directives import (
    SECTION_ORDER,
    SECTION_TITLES,
    AccountType,
    Comment,
    Directive,
    LedgerAccount,
    Open,
    Posting,
    Transaction,
)
from monzoledger.domain.entities import LedgerRow
from monzoledger.domain.errors import LedgerInvariantError, unopened_account
from monzoledger.domain.formatter import format_ledger
from monzoledger.domain.resolver import AccountResolver, ResolvedPostings, pot_ledger_account

logger = logging.getLogger(__name__)

TRANSACTIONS_TITLE = "transactions"


class LedgerBuilder:
    """Service for turning stored transactions into a Beancount ledger."""

    def __init__(self, db: Database, settings: LedgerSettings):
        """Initialize ledger builder.

        Args:
            db: Database instance
            settings: Ledger export settings (chart of accounts, start date)
        """
        self.db = db
        self.settings = settings
        self.resolver = AccountResolver(db.find_pot_by_external_id)

    def build(self, since: Optional[datetime] = None, before: Optional[datetime] = None) -> list[Directive]:
        """Build the directives of the ledger for transactions created in [since, before).

        Every account is opened once, dated with the configured start date,
        before any transaction posts to it.

        Raises:
            LedgerInvariantError: If a transaction posts to an unopened account
        """
        sections: dict[AccountType, list[Open]] = {t: [] for t in SECTION_ORDER}
        opened: set[LedgerAccount] = set()

        def open_account(account: LedgerAccount, currency: Optional[str] = None, comment: Optional[str] = None):
            if account in opened:
                return
            opened.add(account)
            sections[account.account_type].append(
                Open(self.settings.start_date, account, currency or account.currency, comment)
            )

        # Chart of accounts from configuration
        config_assets = set()
        for account_type in SECTION_ORDER:
            for entry in self.settings.accounts_of_type(account_type):
                ledger_account = entry.to_ledger_account()
                if account_type == AccountType.ASSETS:
                    config_assets.add(ledger_account)
                open_account(ledger_account, comment=entry.comment)

        # Bank accounts and their pots
        for account in self.db.read_accounts():
            open_account(LedgerAccount(AccountType.ASSETS, account.currency, account.label))
        for pot in self.db.read_pots():
            open_account(pot_ledger_account(pot, pot.account_label or pot.account_id))

        rows = sorted(
            self.db.read_transactions_for_ledger(since, before),
            key=lambda r: (r.ledger_date.date(), r.created, r.id),
        )
        resolved = [(row, self._resolve(row, config_assets)) for row in rows]

        # Expense accounts per (account, category) pair
        for _, postings in resolved:
            if postings.counter.account.account_type == AccountType.EXPENSES:
                open_account(postings.counter.account)

        # Everything else the postings reference
        for _, postings in resolved:
            for posting in postings.postings:
                open_account(posting.account)

        directives: list[Directive] = []
        for account_type in SECTION_ORDER:
            directives.append(Comment(SECTION_TITLES[account_type]))
            directives.extend(sections[account_type])

        directives.append(Comment(TRANSACTIONS_TITLE))
        for row, postings in resolved:
            directives.append(
                Transaction(
                    date=row.ledger_date.date(),
                    note=postings.note,
                    postings=postings.postings,
                    comment=postings.comment,
                    transaction_id=row.id,
                )
            )

        check_open_before_use(directives)
        logger.info("Built ledger with %d accounts and %d transactions", len(opened), len(resolved))
        return directives

    def _resolve(self, row: LedgerRow, config_assets: set[LedgerAccount]) -> ResolvedPostings:
        """Resolve a row with the configured category names.

        Categories declared as configured assets post to that asset.
        """
        if row.category.lower() in self.settings.custom_categories:
            row = replace(row, category_name=self.settings.category_name(row.category))
        postings = self.resolver.resolve(row)
        counter = postings.counter.account
        if counter.account_type != AccountType.EXPENSES:
            return postings

        as_asset = LedgerAccount(AccountType.ASSETS, counter.currency, counter.entity, counter.subaccount)
        if as_asset not in config_assets:
            return postings

        return ResolvedPostings(
            asset=postings.asset,
            counter=Posting(as_asset, postings.counter.amount, postings.counter.currency),
            note=postings.note,
            comment=postings.comment,
        )

    def render(self, directives: list[Directive]) -> str:
        """Render directives to the full ledger text."""
        return format_ledger(directives)

    def export(
        self,
        since: Optional[datetime] = None,
        before: Optional[datetime] = None,
        path: Optional[Path] = None,
    ) -> dict[str, Any]:
        """Build the ledger and write it to a file.

        The text is rendered in memory and written to a temporary file that
        replaces the target, so a failed run leaves any previous ledger intact.

        Returns:
            Dict with export statistics:
            - path: file written
            - accounts: number of open directives
            - transactions: number of transaction directives
        """
        target = Path(path or self.settings.filepath)
        directives = self.build(since, before)
        text = self.render(directives)

        write_atomically(target, text)
        logger.info("Wrote ledger to %s", target)

        return {
            "path": target,
            "accounts": sum(1 for d in directives if isinstance(d, Open)),
            "transactions": sum(1 for d in directives if isinstance(d, Transaction)),
        }


def check_open_before_use(directives: list[Directive]) -> None:
    """Verify that every posting's account is opened by an earlier directive.

    Raises:
        LedgerInvariantError: On the first posting to an unopened account
    """
    opened = set()
    for directive in directives:
        if isinstance(directive, Open):
            opened.add(directive.account)
        elif isinstance(directive, Transaction):
            for posting in directive.postings:
                if posting.account not in opened:
                    raise LedgerInvariantError(
                        unopened_account(str(posting.account), directive.transaction_id or directive.note)
                    )


def write_atomically(target: Path, text: str) -> None:
    """Write text to target through a temporary file in the same directory."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
