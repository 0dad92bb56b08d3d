"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so services never hold ORM objects
and schema changes stay local to the database package.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Customer as ORMCustomer,
    FiscalYear as ORMFiscalYear,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
    PurchaseInvoice as ORMPurchaseInvoice,
    SalesInvoice as ORMSalesInvoice,
    Supplier as ORMSupplier,
    Voucher as ORMVoucher,
)


def fiscal_year_to_domain(orm_year: ORMFiscalYear) -> domain.FiscalYear:
    """Convert SQLAlchemy FiscalYear model to domain FiscalYear entity."""
    return domain.FiscalYear(
        id=orm_year.id,
        tenant_id=orm_year.tenant_id,
        name=orm_year.name,
        start_date=orm_year.start_date,
        end_date=orm_year.end_date,
        is_closed=orm_year.is_closed,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        tenant_id=orm_account.tenant_id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        parent_id=orm_account.parent_id,
        is_active=orm_account.is_active,
        created_at=orm_account.created_at,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        id=orm_line.id,
        journal_entry_id=orm_line.journal_entry_id,
        account_id=orm_line.account_id,
        debit=orm_line.debit,
        credit=orm_line.credit,
        description=orm_line.description,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model (with lines) to domain entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        tenant_id=orm_entry.tenant_id,
        fiscal_year_id=orm_entry.fiscal_year_id,
        entry_number=orm_entry.entry_number,
        transaction_date=orm_entry.transaction_date,
        description=orm_entry.description,
        reference=orm_entry.reference,
        status=domain.EntryStatus(orm_entry.status),
        currency=orm_entry.currency,
        reversal_of_id=orm_entry.reversal_of_id,
        created_at=orm_entry.created_at,
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
    )


def ledger_line_to_domain(orm_line: ORMJournalLine, orm_entry: ORMJournalEntry) -> domain.LedgerLine:
    """Combine a line and its entry header into a statement input row."""
    return domain.LedgerLine(
        line_id=orm_line.id,
        journal_entry_id=orm_entry.id,
        transaction_date=orm_entry.transaction_date,
        entry_number=orm_entry.entry_number,
        reference=orm_entry.reference,
        description=orm_line.description or orm_entry.description,
        debit=orm_line.debit,
        credit=orm_line.credit,
    )


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Party:
    """Convert SQLAlchemy Customer model to domain Party entity."""
    return domain.Party(
        id=orm_customer.id,
        tenant_id=orm_customer.tenant_id,
        party_type=domain.PartyType.CUSTOMER,
        name=orm_customer.name,
        account_id=orm_customer.account_id,
        created_at=orm_customer.created_at,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Party:
    """Convert SQLAlchemy Supplier model to domain Party entity."""
    return domain.Party(
        id=orm_supplier.id,
        tenant_id=orm_supplier.tenant_id,
        party_type=domain.PartyType.SUPPLIER,
        name=orm_supplier.name,
        account_id=orm_supplier.account_id,
        created_at=orm_supplier.created_at,
    )


def sales_invoice_to_domain(orm_invoice: ORMSalesInvoice) -> domain.SalesInvoice:
    """Convert SQLAlchemy SalesInvoice model to domain SalesInvoice entity."""
    return domain.SalesInvoice(
        id=orm_invoice.id,
        tenant_id=orm_invoice.tenant_id,
        invoice_number=orm_invoice.invoice_number,
        customer_id=orm_invoice.customer_id,
        customer_name=orm_invoice.customer_name,
        issue_date=orm_invoice.issue_date,
        currency=orm_invoice.currency,
        total_amount=orm_invoice.total_amount,
        amount_paid=orm_invoice.amount_paid,
        status=orm_invoice.status,
        created_at=orm_invoice.created_at,
    )


def purchase_invoice_to_domain(orm_invoice: ORMPurchaseInvoice) -> domain.PurchaseInvoice:
    """Convert SQLAlchemy PurchaseInvoice model to domain PurchaseInvoice entity."""
    return domain.PurchaseInvoice(
        id=orm_invoice.id,
        tenant_id=orm_invoice.tenant_id,
        invoice_number=orm_invoice.invoice_number,
        supplier_id=orm_invoice.supplier_id,
        supplier_name=orm_invoice.supplier_name,
        issue_date=orm_invoice.issue_date,
        currency=orm_invoice.currency,
        total_amount=orm_invoice.total_amount,
        amount_paid=orm_invoice.amount_paid,
        status=orm_invoice.status,
        kind=orm_invoice.kind,
        created_at=orm_invoice.created_at,
    )


def voucher_to_domain(orm_voucher: ORMVoucher) -> domain.Voucher:
    """Convert SQLAlchemy Voucher model to domain Voucher entity."""
    return domain.Voucher(
        id=orm_voucher.id,
        tenant_id=orm_voucher.tenant_id,
        voucher_number=orm_voucher.voucher_number,
        kind=orm_voucher.kind,
        voucher_date=orm_voucher.voucher_date,
        amount=orm_voucher.amount,
        party_type=orm_voucher.party_type,
        party_id=orm_voucher.party_id,
        account_id=orm_voucher.account_id,
        description=orm_voucher.description,
        created_at=orm_voucher.created_at,
    )
