"""Synchronization of remote accounts, pots and transactions into storage."""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from monzoledger.client.base import LedgerSource
from monzoledger.database.base import Database
from monzoledger.domain.entities import Category, RawTransaction
from monzoledger.domain.errors import DuplicateError
from monzoledger.domain.windows import windows

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30

ENTITY_LABELS = {
    "accounts": "account",
    "pots": "pot",
    "categories": "category",
    "merchants": "merchant",
    "transactions": "transaction",
}


class SyncService:
    """Service for pulling remote data into the local database.

    Every save is an idempotent keyed insert, so running the same range twice
    (or two overlapping ranges) leaves the database unchanged the second time.
    """

    def __init__(
        self,
        db: Database,
        source: LedgerSource,
        custom_categories: Optional[dict[str, str]] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        """Initialize sync service.

        Args:
            db: Database instance
            source: Remote ledger source
            custom_categories: Category code -> display name overrides
            window_days: Maximum span of one transaction request
        """
        self.db = db
        self.source = source
        self.custom_categories = {k.lower(): v for k, v in (custom_categories or {}).items()}
        self.window_days = window_days

    def category_name(self, code: str) -> str:
        return self.custom_categories.get(code.lower(), code)

    def sync(self, since: datetime, before: datetime) -> dict[str, Any]:
        """Fetch and store everything created in [since, before).

        Returns:
            Dict with sync statistics:
            - accounts, pots, categories, merchants, transactions: rows inserted
            - skipped: saves rejected as duplicates
            - fetched: transactions kept after filtering
            - windows: transaction requests made per account

        Raises:
            RemoteSourceError: If a remote request fails
            ValidationError: If the range or window size is invalid
        """
        spans = windows(since, before, self.window_days)
        stats = {
            "accounts": 0,
            "pots": 0,
            "categories": 0,
            "merchants": 0,
            "transactions": 0,
            "skipped": 0,
            "fetched": 0,
            "windows": len(spans),
        }

        accounts = self.source.list_accounts()
        logger.info("Found %d accounts", len(accounts))
        for account in accounts:
            self._save(stats, "accounts", self.db.save_account, account)

        for account in accounts:
            for pot in self.source.list_pots(account.id):
                self._save(stats, "pots", self.db.save_pot, pot)

        transactions: list[RawTransaction] = []
        for account in accounts:
            for window_since, window_before in spans:
                fetched = self.source.list_transactions(account.id, window_since, window_before)
                transactions.extend(t for t in fetched if t.amount != 0 and t.is_settled)

        # sorted() is stable, so equal timestamps keep their fetch order
        transactions = sorted(transactions, key=lambda t: t.created)
        stats["fetched"] = len(transactions)

        seen_categories = set()
        for txn in transactions:
            if txn.category in seen_categories:
                continue
            seen_categories.add(txn.category)
            category = Category(id=txn.category, name=self.category_name(txn.category))
            self._save(stats, "categories", self.db.save_category, category)

        seen_merchants = set()
        for txn in transactions:
            if txn.merchant is not None and txn.merchant.id not in seen_merchants:
                seen_merchants.add(txn.merchant.id)
                self._save(stats, "merchants", self.db.save_merchant, txn.merchant)
            self._save(stats, "transactions", self.db.save_transaction, txn)

        logger.info(
            "Sync complete: %d new transactions, %d duplicates skipped, %d fetched",
            stats["transactions"],
            stats["skipped"],
            stats["fetched"],
        )
        return stats

    def _save(self, stats: dict[str, Any], key: str, save: Callable[[Any], None], entity: Any) -> None:
        try:
            save(entity)
        except DuplicateError as e:
            logger.debug("Skipping: %s", e)
            stats["skipped"] += 1
            return
        stats[key] += 1
        logger.info("Stored %s %s", ENTITY_LABELS[key], entity.id)
