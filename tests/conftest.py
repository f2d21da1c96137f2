"""Shared pytest fixtures for monzoledger tests."""

import tempfile
import os
from datetime import date

import pytest

from monzoledger.config import AccountConfig, LedgerSettings
from monzoledger.database.factories import create_sqlite_database
from monzoledger.domain.directives import AccountType
from monzoledger.domain.entities import Balance, Merchant
from helpers import FakeSource, make_account, make_pot, make_transaction, utc


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sample_account():
    return make_account()


@pytest.fixture
def sample_pot():
    return make_pot()


@pytest.fixture
def fake_source(sample_account, sample_pot):
    """Source with one account, one pot and a month of mixed transactions."""
    tesco = Merchant(id="merch_1", name="Tesco", category="groceries")
    transactions = [
        make_transaction("t1", -500, "groceries", created=utc(2024, 2, 10, 12), merchant=tesco),
        make_transaction("t2", -1250, "eating_out", created=utc(2024, 2, 3, 9)),
        make_transaction("t3", 0, "general", created=utc(2024, 2, 4, 9)),
        make_transaction("t4", -800, "groceries", created=utc(2024, 2, 5, 9), settled=None),
        make_transaction(
            "t5", 10000, "transfers", created=utc(2024, 2, 1, 8), description="Monzo-AB12CD"
        ),
        make_transaction(
            "t6", -2000, "transfers", created=utc(2024, 2, 15, 8), description="pot_0001"
        ),
        make_transaction("t7", -300, "groceries", created=utc(2024, 2, 20, 18), merchant=tesco),
    ]
    return FakeSource(
        accounts=[sample_account],
        pots=[sample_pot],
        transactions=transactions,
        balances={"acc1": Balance(balance=12345, total_balance=17345, currency="GBP", spend_today=0)},
    )


@pytest.fixture
def ledger_settings(tmp_path):
    return LedgerSettings(
        filepath=tmp_path / "ledger" / "monzo.beancount",
        start_date=date(2024, 1, 1),
        custom_categories={"eating_out": "Restaurants"},
        accounts=[
            AccountConfig(AccountType.EQUITY, "GBP", "OpeningBalances"),
            AccountConfig(AccountType.LIABILITIES, "GBP", "CreditCard", "Amex", comment="Travel card"),
        ],
    )


@pytest.fixture
def config_file(tmp_path):
    """Write a complete configuration file and return its path."""
    path = tmp_path / "monzoledger.yaml"
    path.write_text(
        "\n".join(
            [
                "database_path: data/monzo.db",
                "window_days: 10",
                "monzo:",
                "  access_token: test-token",
                "beancount:",
                "  filepath: ledger/monzo.beancount",
                "  start_date: 2024-01-01",
                "  custom_categories:",
                "    eating_out: Restaurants",
                "  equities:",
                "    - currency: GBP",
                "      entity: OpeningBalances",
                "  liabilities:",
                "    - currency: gbp",
                "      entity: credit card",
                "      name: amex",
                "      comment: Travel card",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
