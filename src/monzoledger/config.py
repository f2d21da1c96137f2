"""
Configuration Management for monzoledger

Loads one YAML file into typed settings. The settings are read once at start-up
and passed explicitly to the sync and ledger services.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml
from dateutil import parser as date_parser

from monzoledger.domain.directives import AccountType, LedgerAccount
from monzoledger.domain.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "monzoledger.yaml"
DEFAULT_BASE_URL = "https://api.monzo.com/"

# YAML section name -> ledger account type
ACCOUNT_SECTIONS = {
    "equities": AccountType.EQUITY,
    "assets": AccountType.ASSETS,
    "income": AccountType.INCOME,
    "expenses": AccountType.EXPENSES,
    "liabilities": AccountType.LIABILITIES,
}


@dataclass(frozen=True)
class AccountConfig:
    """One account declared in the chart of accounts."""

    account_type: AccountType
    currency: str
    entity: str
    name: Optional[str] = None
    comment: Optional[str] = None

    def to_ledger_account(self) -> LedgerAccount:
        return LedgerAccount(self.account_type, self.currency, self.entity, self.name)


@dataclass
class MonzoSettings:
    """Remote API configuration."""

    access_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30


@dataclass
class LedgerSettings:
    """Beancount export configuration."""

    filepath: Path
    start_date: date
    custom_categories: dict[str, str] = field(default_factory=dict)
    accounts: list[AccountConfig] = field(default_factory=list)

    def accounts_of_type(self, account_type: AccountType) -> list[AccountConfig]:
        return [a for a in self.accounts if a.account_type == account_type]

    def category_name(self, code: str) -> str:
        """Map a bank category code through the custom category table."""
        return self.custom_categories.get(code.lower(), code)


@dataclass
class Settings:
    """Main configuration for the application."""

    database_path: Optional[str]
    monzo: MonzoSettings
    ledger: LedgerSettings
    window_days: int = 30

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse configuration file {config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

        return cls.from_dict(data, base_dir=config_path.parent)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path = Path(".")) -> "Settings":
        """Build settings from already-parsed configuration data."""
        monzo_data = _section(data, "monzo")
        monzo = MonzoSettings(
            access_token=monzo_data.get("access_token") or os.environ.get("MONZO_ACCESS_TOKEN"),
            base_url=monzo_data.get("base_url", DEFAULT_BASE_URL),
            timeout=_positive_int(monzo_data.get("timeout", 30), "monzo.timeout"),
        )

        database_path = data.get("database_path")
        if database_path is not None:
            database_path = str(_resolve(base_dir, database_path))

        return cls(
            database_path=database_path,
            monzo=monzo,
            ledger=_parse_ledger(_section(data, "beancount"), base_dir),
            window_days=_positive_int(data.get("window_days", 30), "window_days"),
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping")
    return value


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}") from None
    if number <= 0:
        raise ConfigurationError(f"'{name}' must be positive, got {number}")
    return number


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid 'beancount.start_date': {value!r}") from e


def _parse_ledger(data: dict[str, Any], base_dir: Path) -> LedgerSettings:
    if "start_date" not in data:
        raise ConfigurationError("Missing required setting 'beancount.start_date'")

    custom_categories = data.get("custom_categories") or {}
    if not isinstance(custom_categories, dict):
        raise ConfigurationError("'beancount.custom_categories' must be a mapping")

    accounts = []
    for section, account_type in ACCOUNT_SECTIONS.items():
        entries = data.get(section) or []
        if not isinstance(entries, list):
            raise ConfigurationError(f"'beancount.{section}' must be a list")
        for index, entry in enumerate(entries):
            accounts.append(_parse_account(entry, account_type, f"beancount.{section}[{index}]"))

    known = {"filepath", "start_date", "custom_categories", *ACCOUNT_SECTIONS}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown beancount settings: {', '.join(unknown)}")

    return LedgerSettings(
        filepath=_resolve(base_dir, data.get("filepath", "monzo.beancount")),
        start_date=_parse_date(data["start_date"]),
        custom_categories={str(k).lower(): str(v) for k, v in custom_categories.items()},
        accounts=accounts,
    )


def _parse_account(entry: Any, account_type: AccountType, where: str) -> AccountConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"'{where}' must be a mapping")
    for required in ("currency", "entity"):
        if not entry.get(required):
            raise ConfigurationError(f"'{where}' is missing '{required}'")
    return AccountConfig(
        account_type=account_type,
        currency=str(entry["currency"]),
        entity=str(entry["entity"]),
        name=str(entry["name"]) if entry.get("name") else None,
        comment=entry.get("comment"),
    )


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for a CLI run."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from the HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
