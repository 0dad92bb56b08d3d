"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    AccountActivity,
    FiscalYear,
    FiscalYearPeriod,
    JournalEntry,
    LedgerLine,
    LineInput,
    LineTotals,
    Party,
    PartyType,
    PurchaseInvoice,
    SalesInvoice,
    Voucher,
)


class Database(ABC):
    """Abstract storage interface for the ledger engine.

    Every query is scoped by an explicit ``tenant_id``; implementations must
    never return rows belonging to another tenant.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Fiscal year operations
    @abstractmethod
    def create_fiscal_year(self, tenant_id: str, name: str, start_date: date, end_date: date) -> int:
        """Create a fiscal year. Returns fiscal year ID."""
        pass

    @abstractmethod
    def get_fiscal_year(self, tenant_id: str, fiscal_year_id: int) -> Optional[FiscalYear]:
        """Get fiscal year by ID."""
        pass

    @abstractmethod
    def find_fiscal_year(self, tenant_id: str, on_date: date) -> Optional[FiscalYear]:
        """Find the fiscal year whose range contains ``on_date``, open years first."""
        pass

    @abstractmethod
    def close_fiscal_year(self, tenant_id: str, fiscal_year_id: int) -> None:
        """Mark a fiscal year as closed."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        tenant_id: str,
        code: str,
        name: str,
        account_type: str,
        parent_id: Optional[int] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, tenant_id: str, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, tenant_id: str, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(self, tenant_id: str, include_inactive: bool = True) -> list[Account]:
        """List accounts ordered by code."""
        pass

    @abstractmethod
    def set_account_active(self, tenant_id: str, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account."""
        pass

    @abstractmethod
    def delete_account(self, tenant_id: str, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_child_count(self, tenant_id: str, account_id: int) -> int:
        """Get count of direct child accounts."""
        pass

    @abstractmethod
    def get_account_line_count(self, tenant_id: str, account_id: int) -> int:
        """Get count of journal lines posted to an account."""
        pass

    # Journal operations
    @abstractmethod
    def create_journal_entry(
        self,
        tenant_id: str,
        fiscal_year_id: Optional[int],
        transaction_date: date,
        lines: Sequence[LineInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
        currency: str = "EGP",
        status: str = "posted",
        reversal_of_id: Optional[int] = None,
        open_fiscal_year: Optional[FiscalYearPeriod] = None,
    ) -> JournalEntry:
        """Write an entry header and all its lines in one transaction.

        Allocates the next per-tenant entry number. With ``open_fiscal_year``
        instead of ``fiscal_year_id``, the year is created in the same
        transaction. Nothing is persisted if any row fails.

        Raises:
            IntegrityViolation: If the entry number or reference already exists
        """
        pass

    @abstractmethod
    def get_journal_entry(self, tenant_id: str, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry (with lines) by ID."""
        pass

    @abstractmethod
    def get_journal_entry_by_reference(self, tenant_id: str, reference: str) -> Optional[JournalEntry]:
        """Get journal entry by source document reference."""
        pass

    @abstractmethod
    def list_journal_entries(
        self,
        tenant_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[JournalEntry]:
        """List journal entries, newest first."""
        pass

    @abstractmethod
    def count_journal_entries(self, tenant_id: str) -> int:
        """Count journal entries for a tenant."""
        pass

    @abstractmethod
    def sum_line_totals(
        self,
        tenant_id: str,
        account_id: int,
        before: Optional[date] = None,
        through: Optional[date] = None,
        currency: Optional[str] = None,
    ) -> LineTotals:
        """Sum debit and credit of an account's lines as exact decimals.

        Args:
            before: Only lines dated strictly before this date
            through: Only lines dated on or before this date
            currency: Only lines of entries in this currency
        """
        pass

    @abstractmethod
    def list_ledger_lines(
        self,
        tenant_id: str,
        account_id: int,
        start_date: date,
        end_date: date,
        currency: Optional[str] = None,
    ) -> list[LedgerLine]:
        """List an account's lines in ``[start_date, end_date]``.

        Ordered by transaction date, then entry ID, then line ID. With a
        currency, only lines of entries in that currency are listed.
        """
        pass

    @abstractmethod
    def summarize_account_activity(
        self,
        tenant_id: str,
        account_types: Sequence[str],
        start_date: date,
        end_date: date,
    ) -> list[AccountActivity]:
        """Debit/credit totals per account of the given types over a range."""
        pass

    # Party operations
    @abstractmethod
    def create_party(
        self, tenant_id: str, party_type: PartyType, name: str, account_id: Optional[int] = None
    ) -> int:
        """Create a customer or supplier. Returns party ID."""
        pass

    @abstractmethod
    def get_party(self, tenant_id: str, party_type: PartyType, party_id: int) -> Optional[Party]:
        """Get customer or supplier by ID."""
        pass

    @abstractmethod
    def list_parties(self, tenant_id: str, party_type: PartyType) -> list[Party]:
        """List customers or suppliers ordered by name."""
        pass

    @abstractmethod
    def set_party_account(
        self, tenant_id: str, party_type: PartyType, party_id: int, account_id: Optional[int]
    ) -> None:
        """Store the explicit ledger account link of a party."""
        pass

    # Source document operations
    @abstractmethod
    def create_sales_invoice(
        self,
        tenant_id: str,
        invoice_number: str,
        customer_id: Optional[int],
        customer_name: str,
        issue_date: date,
        total_amount: Decimal,
        amount_paid: Decimal,
        currency: str = "EGP",
    ) -> int:
        """Create a sales invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_sales_invoice(self, tenant_id: str, invoice_id: int) -> Optional[SalesInvoice]:
        """Get sales invoice by ID."""
        pass

    @abstractmethod
    def delete_sales_invoice(self, tenant_id: str, invoice_id: int) -> None:
        """Delete a sales invoice."""
        pass

    @abstractmethod
    def create_purchase_invoice(
        self,
        tenant_id: str,
        invoice_number: Optional[str],
        supplier_id: Optional[int],
        supplier_name: str,
        issue_date: date,
        total_amount: Decimal,
        amount_paid: Decimal,
        kind: str = "purchase",
        currency: str = "EGP",
        status: str = "posted",
    ) -> int:
        """Create a purchase invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_purchase_invoice(self, tenant_id: str, invoice_id: int) -> Optional[PurchaseInvoice]:
        """Get purchase invoice by ID."""
        pass

    @abstractmethod
    def list_purchase_invoices(self, tenant_id: Optional[str] = None) -> list[PurchaseInvoice]:
        """List purchase invoices ordered by ID.

        Args:
            tenant_id: Restrict to one tenant; None lists every tenant (batch jobs only)
        """
        pass

    @abstractmethod
    def delete_purchase_invoice(self, tenant_id: str, invoice_id: int) -> None:
        """Delete a purchase invoice."""
        pass

    @abstractmethod
    def create_voucher(
        self,
        tenant_id: str,
        voucher_number: str,
        kind: str,
        voucher_date: date,
        amount: Decimal,
        party_type: str,
        party_id: Optional[int] = None,
        account_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a voucher. Returns voucher ID."""
        pass

    @abstractmethod
    def get_voucher(self, tenant_id: str, voucher_id: int) -> Optional[Voucher]:
        """Get voucher by ID."""
        pass

    @abstractmethod
    def delete_voucher(self, tenant_id: str, voucher_id: int) -> None:
        """Delete a voucher."""
        pass
