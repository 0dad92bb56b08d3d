"""Repair job that posts missing journal entries for purchase invoices."""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.documents import DocumentAccounts, build_purchase_lines
from ledgerkit.domain.entities import Account, AccountType, PartyType, PurchaseInvoice, SyncReport
from ledgerkit.domain.journal import JournalWriter
from ledgerkit.domain.party import PartyService
from ledgerkit.logging_config import get_logger

logger = get_logger("domain.reconciliation")


class ReconciliationService:
    """Ensures every purchase invoice has exactly one journal entry."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = DocumentAccounts(db)
        self.account_service = AccountService(db)
        self.party_service = PartyService(db)
        self.journal = JournalWriter(db)

    def sync_all_purchases_to_ledger(self, tenant_id: Optional[str] = None) -> SyncReport:
        """Post the missing journal entry of every purchase invoice.

        Invoices whose number is already used as an entry reference, void
        invoices and zero-total invoices are skipped. A failure on one invoice
        is recorded in the report and does not stop the batch, so running the
        job again only retries what failed.

        Args:
            tenant_id: Restrict to one tenant; None processes every tenant

        Returns:
            SyncReport with fixed, skipped and failed counts
        """
        report = SyncReport()
        for invoice in self.db.list_purchase_invoices(tenant_id):
            number = invoice.document_number
            if self._is_settled(invoice):
                report.skipped_count += 1
                continue
            try:
                self._post_invoice(invoice)
            except Exception as e:
                logger.exception(
                    "purchase_sync_failed",
                    extra={"tenant_id": invoice.tenant_id, "invoice_id": invoice.id, "number": number},
                )
                report.failed_count += 1
                report.errors.append(f"{number}: {e}")
                continue
            report.fixed_count += 1

        logger.info(
            "purchase_sync_completed",
            extra={
                "tenant_id": tenant_id,
                "fixed": report.fixed_count,
                "skipped": report.skipped_count,
                "failed": report.failed_count,
            },
        )
        return report

    def _is_settled(self, invoice: PurchaseInvoice) -> bool:
        if invoice.status == "void" or invoice.total_amount == 0:
            return True
        existing = self.db.get_journal_entry_by_reference(invoice.tenant_id, invoice.document_number)
        return existing is not None

    def _supplier_account(self, invoice: PurchaseInvoice) -> Account:
        if invoice.supplier_id is not None:
            supplier = self.db.get_party(invoice.tenant_id, PartyType.SUPPLIER, invoice.supplier_id)
            if supplier is not None:
                return self.party_service.ensure_party_account(invoice.tenant_id, supplier)
        return self.account_service.find_or_create_account_by_name(
            invoice.tenant_id, invoice.supplier_name, AccountType.LIABILITY, code_prefix="201"
        )

    def _post_invoice(self, invoice: PurchaseInvoice) -> None:
        tenant_id = invoice.tenant_id
        number = invoice.document_number
        purchases_account = self.accounts.purchases_account(tenant_id)
        supplier_account = self._supplier_account(invoice)
        cash_account = self.accounts.cash_account(tenant_id) if invoice.amount_paid > 0 else None

        lines = build_purchase_lines(
            invoice.kind,
            number,
            invoice.total_amount,
            invoice.amount_paid,
            purchases_account.id,
            supplier_account.id,
            cash_account.id if cash_account else None,
        )
        self.journal.post_entry(
            tenant_id=tenant_id,
            entry_date=invoice.issue_date,
            lines=lines,
            description=f"Ledger sync of purchase {invoice.kind} {number} - {invoice.supplier_name}",
            reference=number,
            currency=invoice.currency,
        )
