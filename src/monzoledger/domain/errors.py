"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateError(ConflictError):
    """An entity with the same key is already stored.

    Raised by every ``save_*`` operation of the database layer. Callers that
    re-import overlapping data treat it as a benign, expected outcome.
    """


class ConfigurationError(DomainError):
    """Missing or malformed configuration."""


class CurrencyNotFoundError(NotFoundError):
    """Currency code is not a known ISO 4217 code."""


class LedgerInvariantError(DomainError):
    """Generated ledger violates a structural invariant."""


class RemoteSourceError(DomainError):
    """Remote banking API request failed."""


class AuthenticationError(RemoteSourceError):
    """Remote banking API rejected the credentials."""


def duplicate_entity(kind: str, entity_id: str) -> str:
    """Return message for an entity that is already stored."""
    return f"{kind} '{entity_id}' already exists"


def currency_not_found(code: str) -> str:
    """Return message for an unknown currency code."""
    return f"Currency '{code}' not found"


def unopened_account(account: str, transaction_id: str) -> str:
    """Return message for a posting whose account was never opened."""
    return f"Account '{account}' used by transaction '{transaction_id}' is not opened before use"


def unbalanced_postings(total: int) -> str:
    """Return message for postings that do not sum to zero."""
    return f"Postings do not balance: sum is {total}"
