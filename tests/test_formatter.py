"""Tests for Beancount text rendering."""

from datetime import date

import pytest

from monzoledger.domain.directives import (
    AccountType,
    Balance,
    Close,
    Comment,
    LedgerAccount,
    Open,
    Posting,
    Transaction,
)
from monzoledger.domain.formatter import format_directive, format_ledger, format_posting

DAY = date(2024, 6, 13)
PERSONAL = LedgerAccount(AccountType.ASSETS, "GBP", "Monzo", "Personal")


def grocery_transaction(comment=None):
    asset = LedgerAccount(AccountType.ASSETS, "GBP", "acc1")
    expense = LedgerAccount(AccountType.EXPENSES, "GBP", "acc1", "groceries")
    return Transaction(
        date(2024, 2, 10),
        "Tesco",
        (Posting(asset, -500, "GBP"), Posting(expense, 500, "GBP")),
        comment=comment,
    )


class TestFormatDirective:
    """Tests for the fixed-width directive templates."""

    def test_comment(self):
        assert format_directive(Comment("assets")) == "\n* assets\n"

    def test_open(self):
        assert format_directive(Open(DAY, PERSONAL, "GBP")) == (
            "2024-06-13 open Assets:GBP:Monzo:Personal" + " " * 16 + "GBP"
        )

    def test_open_with_comment(self):
        assert format_directive(Open(DAY, PERSONAL, "GBP", "Initial Deposit")) == (
            "; Initial Deposit.\n2024-06-13 open Assets:GBP:Monzo:Personal" + " " * 16 + "GBP"
        )

    def test_open_without_currency(self):
        assert format_directive(Open(DAY, PERSONAL)) == "2024-06-13 open Assets:GBP:Monzo:Personal"

    def test_close(self):
        assert format_directive(Close(DAY, PERSONAL, "To Close")) == (
            "; To Close.\n2024-06-13 close Assets:GBP:Monzo:Personal"
        )

    def test_balance(self):
        assert format_directive(Balance(DAY, PERSONAL, 12345, "GBP")) == (
            "2024-06-13 balance Assets:GBP:Monzo:Personal" + " " * 16 + "    123.45 GBP"
        )

    def test_transaction(self):
        expected = (
            '2024-02-10 * "Tesco"\n'
            "  " + "Assets:GBP:Acc1".ljust(50) + "      -5.00 GBP\n"
            "  " + "Expenses:GBP:Acc1:Groceries".ljust(50) + "       5.00 GBP\n"
        )
        assert format_directive(grocery_transaction()) == expected

    def test_transaction_comment_and_quotes(self):
        txn = grocery_transaction(comment="weekly\nshop")
        txn = Transaction(txn.date, 'Say "hi"', txn.postings, comment=txn.comment)

        text = format_directive(txn)

        assert text.startswith("; weekly shop\n2024-02-10 * \"Say 'hi'\"\n")

    def test_unknown_directive_rejected(self):
        with pytest.raises(TypeError):
            format_directive("not a directive")


def test_format_posting():
    posting = Posting(LedgerAccount(AccountType.EXPENSES, "GBP", "personal", "groceries"), 500, "GBP")
    assert format_posting(posting) == "Expenses:GBP:Personal:Groceries".ljust(50) + "       5.00 GBP"


def test_format_ledger_is_stable():
    directives = [Comment("assets"), Open(DAY, PERSONAL, "GBP"), grocery_transaction()]

    first = format_ledger(directives)

    assert first == format_ledger(list(directives))
    assert first.startswith("\n* assets\n\n2024-06-13 open")
    assert first.endswith("GBP\n\n")
