"""SQLAlchemy models for monzoledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    closed = Column(Boolean, default=False, nullable=False)
    created = Column(DateTime, nullable=False)
    description = Column(String, nullable=False)
    currency = Column(String, nullable=False)
    owner_type = Column(String, nullable=False)
    account_number = Column(String, nullable=True)
    sort_code = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    pots = relationship("Pot", back_populates="account")
    transactions = relationship("Transaction", back_populates="account")


class Pot(Base):
    """Savings pot model."""

    __tablename__ = "pots"

    id = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    balance = Column(Integer, nullable=False)
    currency = Column(String, nullable=False)
    pot_type = Column(String, nullable=False)
    deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="pots")


class Merchant(Base):
    """Merchant model."""

    __tablename__ = "merchants"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)

    # Relationships
    transactions = relationship("Transaction", back_populates="merchant")


class Category(Base):
    """Category code to display name model."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)


class Transaction(Base):
    """Transaction model. Amounts are integers in minor units."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    merchant_id = Column(String, ForeignKey("merchants.id"), nullable=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String, nullable=False)
    local_amount = Column(Integer, nullable=False)
    local_currency = Column(String, nullable=False)
    created = Column(DateTime, nullable=False, index=True)
    settled = Column(DateTime, nullable=True)
    updated = Column(DateTime, nullable=True)
    description = Column(String, nullable=False, default="")
    notes = Column(String, nullable=True)
    category = Column(String, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    merchant = relationship("Merchant", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
