"""Tests for the Database interface and its duplicate handling."""

import pytest

from monzoledger.database.factories import create_sqlite_database, resolve_database_path
from monzoledger.domain import entities
from monzoledger.domain.entities import Category, Merchant
from monzoledger.domain.errors import DuplicateError
from helpers import make_account, make_pot, make_transaction, utc


class TestKeyedInsert:
    """Every save is an insert keyed on the remote id."""

    def test_save_and_read_account(self, temp_db, sample_account):
        temp_db.save_account(sample_account)

        accounts = temp_db.read_accounts()
        assert len(accounts) == 1
        assert isinstance(accounts[0], entities.RemoteAccount)
        assert accounts[0] == sample_account

    def test_duplicate_account_raises(self, temp_db, sample_account):
        temp_db.save_account(sample_account)

        with pytest.raises(DuplicateError, match="acc1"):
            temp_db.save_account(sample_account)
        assert len(temp_db.read_accounts()) == 1

    def test_duplicate_transaction_keeps_first_copy(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_transaction(make_transaction("t1", amount=-500))

        with pytest.raises(DuplicateError):
            temp_db.save_transaction(make_transaction("t1", amount=-999))

        assert temp_db.count_transactions() == 1
        assert temp_db.get_transaction("t1").amount == -500

    @pytest.mark.parametrize(
        "save,entity",
        [
            ("save_pot", make_pot()),
            ("save_merchant", Merchant(id="merch_1", name="Tesco")),
            ("save_category", Category(id="groceries", name="Groceries")),
        ],
    )
    def test_duplicates_raise_for_every_entity(self, temp_db, sample_account, save, entity):
        temp_db.save_account(sample_account)
        getattr(temp_db, save)(entity)

        with pytest.raises(DuplicateError):
            getattr(temp_db, save)(entity)


class TestQueries:
    """Tests for the read side used by the ledger export."""

    def test_transaction_round_trip(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        merchant = Merchant(id="merch_1", name="Tesco", category="groceries")
        temp_db.save_merchant(merchant)
        txn = make_transaction("t1", merchant=merchant, notes="weekly shop")
        temp_db.save_transaction(txn)

        stored = temp_db.get_transaction("t1")
        assert stored == txn
        assert stored.created.tzinfo is not None
        assert stored.merchant == merchant

    def test_get_missing_transaction_returns_none(self, temp_db):
        assert temp_db.get_transaction("nope") is None

    def test_read_pots_skips_deleted_by_default(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_pot(make_pot("pot_1", name="Holiday"))
        temp_db.save_pot(make_pot("pot_2", name="Old", deleted=True))

        assert [p.id for p in temp_db.read_pots()] == ["pot_1"]
        assert {p.id for p in temp_db.read_pots(include_deleted=True)} == {"pot_1", "pot_2"}

    def test_pot_carries_owning_account_label(self, temp_db):
        temp_db.save_account(make_account(owner_type="personal"))
        temp_db.save_pot(make_pot())

        assert temp_db.read_pots()[0].account_label == "personal"

    def test_find_pot_by_external_id(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_pot(make_pot("pot_0001"))

        assert temp_db.find_pot_by_external_id("pot_0001").name == "Holiday"
        assert temp_db.find_pot_by_external_id("CARD PAYMENT") is None

    def test_find_pot_by_type_ignores_deleted(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_pot(make_pot("pot_a", pot_type="flexible_savings", deleted=True))
        temp_db.save_pot(make_pot("pot_b", name="Savings", pot_type="flexible_savings"))

        assert temp_db.find_pot_by_type("flexible_savings").id == "pot_b"
        assert temp_db.find_pot_by_type("unknown") is None

    def test_ledger_rows_are_settled_ordered_and_bounded(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_category(Category(id="groceries", name="Food"))
        temp_db.save_transaction(make_transaction("b", created=utc(2024, 2, 2)))
        temp_db.save_transaction(make_transaction("a", created=utc(2024, 2, 2)))
        temp_db.save_transaction(make_transaction("early", created=utc(2024, 1, 1)))
        temp_db.save_transaction(make_transaction("pending", created=utc(2024, 2, 3), settled=None))
        temp_db.save_transaction(make_transaction("late", created=utc(2024, 3, 1)))

        rows = temp_db.read_transactions_for_ledger(utc(2024, 2, 1), utc(2024, 3, 1))

        assert [r.id for r in rows] == ["a", "b"]
        assert rows[0].category_name == "Food"
        assert rows[0].account_label == "acc1"

    def test_ledger_row_category_name_falls_back_to_code(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_transaction(make_transaction("t1", category="bills"))

        rows = temp_db.read_transactions_for_ledger()
        assert rows[0].category_name == "bills"

    def test_reset_drops_all_rows(self, temp_db, sample_account):
        temp_db.save_account(sample_account)
        temp_db.save_transaction(make_transaction("t1"))

        temp_db.reset()

        assert temp_db.read_accounts() == []
        assert temp_db.count_transactions() == 0


class TestFactory:
    """Tests for choosing the SQLite file."""

    def test_explicit_path_wins_and_parent_is_created(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MONZOLEDGER_DB_PATH", str(tmp_path / "env.db"))
        target = tmp_path / "nested" / "dir" / "explicit.db"

        assert resolve_database_path(str(target)) == str(target)
        assert target.parent.is_dir()

    def test_environment_variable_used_when_no_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MONZOLEDGER_DB_PATH", str(tmp_path / "env.db"))
        assert resolve_database_path() == str(tmp_path / "env.db")

    def test_in_memory_database(self, sample_account):
        db = create_sqlite_database(":memory:")
        db.save_account(sample_account)

        assert db.read_accounts() == [sample_account]
        db.disconnect()
