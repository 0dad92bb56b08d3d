"""SQLAlchemy models for the ledgerkit database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from ledgerkit.database.types import DecimalText

Base = declarative_base()


class FiscalYear(Base):
    """Fiscal year model."""

    __tablename__ = "fiscal_years"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Chart of accounts model with hierarchical structure."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_account_tenant_code"),)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")
    journal_lines = relationship("JournalLine", back_populates="account")


class JournalEntry(Base):
    """Journal entry header model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False)
    fiscal_year_id = Column(Integer, ForeignKey("fiscal_years.id"), nullable=False)
    entry_number = Column(String, nullable=False)
    transaction_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    status = Column(String, default="draft", nullable=False)
    currency = Column(String, default="EGP", nullable=False)
    reversal_of_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Entry numbers and document references are the ledger's de-duplication guard
    __table_args__ = (
        UniqueConstraint("tenant_id", "entry_number", name="uq_entry_tenant_number"),
        UniqueConstraint("tenant_id", "reference", name="uq_entry_tenant_reference"),
        Index("ix_entry_tenant_date", "tenant_id", "transaction_date"),
    )

    # Relationships
    fiscal_year = relationship("FiscalYear")
    lines = relationship(
        "JournalLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.id",
    )


class JournalLine(Base):
    """Journal line model."""

    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True)
    journal_entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    description = Column(String, nullable=True)
    debit = Column(DecimalText, default=Decimal("0"), nullable=False)
    credit = Column(DecimalText, default=Decimal("0"), nullable=False)

    __table_args__ = (Index("ix_line_account_entry", "account_id", "journal_entry_id"),)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="journal_lines")


class Customer(Base):
    """Customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Supplier(Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class SalesInvoice(Base):
    """Sales invoice model."""

    __tablename__ = "sales_invoices"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    invoice_number = Column(String, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    customer_name = Column(String, nullable=False)
    issue_date = Column(Date, nullable=False)
    currency = Column(String, default="EGP", nullable=False)
    total_amount = Column(DecimalText, nullable=False)
    amount_paid = Column(DecimalText, default=Decimal("0"), nullable=False)
    status = Column(String, default="posted", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class PurchaseInvoice(Base):
    """Purchase invoice model (purchases and purchase returns)."""

    __tablename__ = "purchase_invoices"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    invoice_number = Column(String, nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    supplier_name = Column(String, nullable=False)
    issue_date = Column(Date, nullable=False)
    currency = Column(String, default="EGP", nullable=False)
    total_amount = Column(DecimalText, nullable=False)
    amount_paid = Column(DecimalText, default=Decimal("0"), nullable=False)
    status = Column(String, default="posted", nullable=False)
    kind = Column(String, default="purchase", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Voucher(Base):
    """Receipt / payment voucher model."""

    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    voucher_number = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    voucher_date = Column(Date, nullable=False)
    amount = Column(DecimalText, nullable=False)
    party_type = Column(String, nullable=False)
    party_id = Column(Integer, nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
