"""Domain layer for monzoledger application.

Services are imported from their modules (``monzoledger.domain.sync``,
``monzoledger.domain.ledger``) so that the database layer can import the
entities here without a circular import.
"""
