"""Plain-text Beancount rendering of ledger directives.

Column widths are fixed constants and amounts are formatted from ``Decimal``,
so identical directives always render to identical bytes.
"""

from typing import Iterable

from monzoledger.domain.currency import minor_to_major
from monzoledger.domain.directives import (
    Balance,
    Close,
    Comment,
    Directive,
    Open,
    Posting,
    Transaction,
)

OPEN_ACCOUNT_WIDTH = 40
POSTING_ACCOUNT_WIDTH = 50
AMOUNT_WIDTH = 10


def _single_line(text: str) -> str:
    return " ".join(text.split())


def _comment_line(comment: str | None, terminator: str = "") -> str:
    if not comment or not comment.strip():
        return ""
    return f"; {_single_line(comment)}{terminator}\n"


def _format_amount(amount: int) -> str:
    return f"{minor_to_major(amount):>{AMOUNT_WIDTH}.2f}"


def format_posting(posting: Posting) -> str:
    """Render a posting line without indentation.

    e.g. ``Expenses:GBP:Personal:Groceries                        5.00 GBP``
    """
    return f"{str(posting.account):<{POSTING_ACCOUNT_WIDTH}} {_format_amount(posting.amount)} {posting.currency}"


def format_directive(directive: Directive) -> str:
    """Render one directive to its Beancount text."""
    if isinstance(directive, Comment):
        return f"\n* {directive.text}\n"

    if isinstance(directive, Open):
        prefix = _comment_line(directive.comment, ".")
        if directive.currency is None:
            return f"{prefix}{directive.date.isoformat()} open {directive.account}"
        return (
            f"{prefix}{directive.date.isoformat()} open "
            f"{str(directive.account):<{OPEN_ACCOUNT_WIDTH}} {directive.currency}"
        )

    if isinstance(directive, Close):
        prefix = _comment_line(directive.comment, ".")
        return f"{prefix}{directive.date.isoformat()} close {directive.account}"

    if isinstance(directive, Balance):
        return (
            f"{directive.date.isoformat()} balance {str(directive.account):<{OPEN_ACCOUNT_WIDTH}} "
            f"{_format_amount(directive.amount)} {directive.currency}"
        )

    if isinstance(directive, Transaction):
        note = _single_line(directive.note).replace('"', "'")
        first, second = directive.postings
        return (
            f"{_comment_line(directive.comment)}"
            f'{directive.date.isoformat()} * "{note}"\n'
            f"  {format_posting(first)}\n"
            f"  {format_posting(second)}\n"
        )

    raise TypeError(f"Unsupported directive: {directive!r}")


def format_ledger(directives: Iterable[Directive]) -> str:
    """Render a directive sequence into the full ledger text."""
    return "\n".join(format_directive(d) for d in directives) + "\n"
