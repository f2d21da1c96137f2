"""Monzo HTTP API client."""

import logging
from datetime import datetime, UTC
from typing import Any, Optional
from urllib.parse import urljoin

import requests
from dateutil import parser as date_parser

from monzoledger.client.base import LedgerSource
from monzoledger.domain.entities import (
    Balance,
    Merchant,
    Pot,
    RawTransaction,
    RemoteAccount,
)
from monzoledger.domain.errors import AuthenticationError, RemoteSourceError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


def format_timestamp(value: datetime) -> str:
    """Format a datetime as the ISO-8601 UTC form the API expects."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an API timestamp into an aware UTC datetime.

    Monzo reports unsettled transactions with an empty ``settled`` string.
    """
    if not value:
        return None
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def account_from_json(data: dict[str, Any]) -> RemoteAccount:
    return RemoteAccount(
        id=data["id"],
        closed=bool(data.get("closed", False)),
        created=parse_timestamp(data["created"]),
        description=data.get("description", ""),
        currency=data.get("currency", "GBP"),
        owner_type=data.get("owner_type") or data.get("type", "personal"),
        account_number=data.get("account_number"),
        sort_code=data.get("sort_code"),
    )


def pot_from_json(data: dict[str, Any], account_id: str) -> Pot:
    return Pot(
        id=data["id"],
        account_id=data.get("current_account_id") or account_id,
        name=data["name"],
        currency=data["currency"],
        balance=int(data.get("balance", 0)),
        pot_type=data.get("type", ""),
        deleted=bool(data.get("deleted", False)),
    )


def merchant_from_json(data: Any) -> Optional[Merchant]:
    """Parse an expanded merchant object.

    Without ``expand[]=merchant`` the API returns a bare id, which carries no
    name to store, so it is ignored.
    """
    if not isinstance(data, dict) or not data.get("id"):
        return None
    return Merchant(id=data["id"], name=data.get("name") or data["id"], category=data.get("category"))


def transaction_from_json(data: dict[str, Any]) -> RawTransaction:
    currency = data["currency"]
    amount = int(data["amount"])
    return RawTransaction(
        id=data["id"],
        account_id=data["account_id"],
        amount=amount,
        currency=currency,
        local_amount=int(data.get("local_amount", amount)),
        local_currency=data.get("local_currency") or currency,
        created=parse_timestamp(data["created"]),
        settled=parse_timestamp(data.get("settled")),
        updated=parse_timestamp(data.get("updated")),
        description=data.get("description") or "",
        notes=data.get("notes") or None,
        merchant=merchant_from_json(data.get("merchant")),
        category=data.get("category") or "general",
    )


class MonzoClient(LedgerSource):
    """Ledger source backed by the Monzo REST API."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.monzo.com/",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            access_token: OAuth access token obtained out of band
            base_url: API root URL
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (used by tests)
        """
        if not access_token:
            raise AuthenticationError("No Monzo access token configured")

        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {access_token}"})

    def _get(self, path: str, params: Any = None) -> dict[str, Any]:
        url = urljoin(self.base_url, path)
        logger.debug("GET %s %s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteSourceError(f"Request to {url} failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"Authorisation failure: {_error_message(response)}")
        if not response.ok:
            raise RemoteSourceError(
                f"Request to {url} failed with status {response.status_code}: {_error_message(response)}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteSourceError(f"Invalid JSON from {url}") from e

    def list_accounts(self) -> list[RemoteAccount]:
        data = self._get("accounts")
        return [account_from_json(item) for item in data.get("accounts", [])]

    def list_pots(self, account_id: str) -> list[Pot]:
        data = self._get("pots", params={"current_account_id": account_id})
        return [pot_from_json(item, account_id) for item in data.get("pots", [])]

    def list_transactions(
        self,
        account_id: str,
        since: datetime,
        before: datetime,
        limit: Optional[int] = None,
    ) -> list[RawTransaction]:
        params = [
            ("account_id", account_id),
            ("since", format_timestamp(since)),
            ("before", format_timestamp(before)),
            ("limit", limit or DEFAULT_LIMIT),
            ("expand[]", "merchant"),
        ]
        data = self._get("transactions", params=params)
        transactions = [transaction_from_json(item) for item in data.get("transactions", [])]
        logger.info(
            "Fetched %d transactions for %s between %s and %s",
            len(transactions),
            account_id,
            format_timestamp(since),
            format_timestamp(before),
        )
        return transactions

    def get_balance(self, account_id: str) -> Balance:
        data = self._get("balance", params={"account_id": account_id})
        return Balance(
            balance=int(data["balance"]),
            total_balance=int(data.get("total_balance", data["balance"])),
            currency=data["currency"],
            spend_today=int(data.get("spend_today", 0)),
        )


def _error_message(response: requests.Response) -> str:
    """Extract the API's error code and message, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "unknown error"
    if isinstance(body, dict) and ("code" in body or "message" in body):
        return f"code: {body.get('code')}, message: {body.get('message')}"
    return str(body)
