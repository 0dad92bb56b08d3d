"""Source documents that post to the ledger: invoices and vouchers."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import (
    ZERO,
    Account,
    AccountType,
    LineInput,
    PartyType,
    PurchaseInvoice,
    SalesInvoice,
    Voucher,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.journal import DEFAULT_CURRENCY, JournalWriter
from ledgerkit.domain.party import PartyService
from ledgerkit.logging_config import get_logger

logger = get_logger("domain.documents")

CASH_KEYWORDS = ("cash", "treasury", "نقدية", "خزينة")
PURCHASE_KEYWORDS = ("purchase", "مشتريات")
SALES_KEYWORDS = ("sales", "مبيعات")

PURCHASE_KINDS = ("purchase", "return")
VOUCHER_KINDS = ("receipt", "payment")
VOUCHER_PARTY_TYPES = ("customer", "supplier", "other")


def to_money(value, field_name: str = "amount") -> Decimal:
    """Convert a number or numeric string to Decimal.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid {field_name}: {value}")
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value}")
    return result


def validate_settlement(total_amount: Decimal, amount_paid: Decimal) -> None:
    """Check that ``0 <= amount_paid <= total_amount`` and the total is positive."""
    if total_amount <= 0:
        raise ValidationError("Total amount must be greater than zero")
    if amount_paid < 0:
        raise ValidationError("Amount paid must not be negative")
    if amount_paid > total_amount:
        raise ValidationError(
            f"Amount paid {amount_paid} exceeds total amount {total_amount}"
        )


def build_purchase_lines(
    kind: str,
    number: str,
    total_amount: Decimal,
    amount_paid: Decimal,
    purchases_account_id: int,
    supplier_account_id: int,
    cash_account_id: Optional[int] = None,
) -> list[LineInput]:
    """Journal lines of a purchase invoice or purchase return.

    A purchase debits purchases and credits the supplier for the total; the
    paid part then debits the supplier and credits cash. A return is the
    mirror image of a purchase.

    Raises:
        ValidationError: If something was paid but no cash account is given
    """
    if kind not in PURCHASE_KINDS:
        raise ValidationError(f"Unknown purchase kind '{kind}'")
    if amount_paid > 0 and cash_account_id is None:
        raise ValidationError(f"Invoice {number}: a cash account is required for the paid amount")

    if kind == "purchase":
        lines = [
            LineInput.debit_line(purchases_account_id, total_amount, f"Purchase - invoice {number}"),
            LineInput.credit_line(supplier_account_id, total_amount, f"Supplier balance - invoice {number}"),
        ]
        if amount_paid > 0:
            lines += [
                LineInput.debit_line(supplier_account_id, amount_paid, f"Payment - invoice {number}"),
                LineInput.credit_line(cash_account_id, amount_paid, f"Cash paid - invoice {number}"),
            ]
        return lines

    lines = [
        LineInput.debit_line(supplier_account_id, total_amount, f"Supplier balance - return {number}"),
        LineInput.credit_line(purchases_account_id, total_amount, f"Purchase return - {number}"),
    ]
    if amount_paid > 0:
        lines += [
            LineInput.debit_line(cash_account_id, amount_paid, f"Cash refunded - return {number}"),
            LineInput.credit_line(supplier_account_id, amount_paid, f"Refund - return {number}"),
        ]
    return lines


def build_sales_lines(
    number: str,
    total_amount: Decimal,
    amount_paid: Decimal,
    sales_account_id: int,
    customer_account_id: int,
    cash_account_id: Optional[int] = None,
) -> list[LineInput]:
    """Journal lines of a sales invoice: revenue for the total, cash for the paid part."""
    lines = [
        LineInput.debit_line(customer_account_id, total_amount, f"Customer balance - invoice {number}"),
        LineInput.credit_line(sales_account_id, total_amount, f"Sale - invoice {number}"),
    ]
    if amount_paid > 0:
        if cash_account_id is None:
            raise ValidationError(f"Invoice {number}: a cash account is required for the paid amount")
        lines += [
            LineInput.debit_line(cash_account_id, amount_paid, f"Cash received - invoice {number}"),
            LineInput.credit_line(customer_account_id, amount_paid, f"Collection - invoice {number}"),
        ]
    return lines


def build_voucher_lines(
    kind: str,
    number: str,
    amount: Decimal,
    cash_account_id: int,
    target_account_id: int,
    description: Optional[str] = None,
) -> list[LineInput]:
    """Journal lines of a voucher.

    A receipt debits cash and credits the target; a payment debits the
    target and credits cash.
    """
    if kind not in VOUCHER_KINDS:
        raise ValidationError(f"Unknown voucher kind '{kind}'")
    text = description or f"Voucher {number}"
    if kind == "receipt":
        return [
            LineInput.debit_line(cash_account_id, amount, text),
            LineInput.credit_line(target_account_id, amount, text),
        ]
    return [
        LineInput.debit_line(target_account_id, amount, text),
        LineInput.credit_line(cash_account_id, amount, text),
    ]


class DocumentAccounts:
    """Finds the well-known accounts documents post to, creating them if missing."""

    def __init__(self, db: Database):
        self.account_service = AccountService(db)
        self.party_service = PartyService(db)

    def _find_or_create(
        self, tenant_id: str, keywords, account_type: AccountType, fallback_name: str, prefix: str
    ) -> Account:
        # Party accounts never count, so customer "Cashmere Ltd" is not the cash account
        account = self.account_service.find_account_by_keywords(
            tenant_id,
            keywords,
            account_type,
            exclude_ids=self.party_service.linked_account_ids(tenant_id),
        )
        if account is not None:
            return account
        return self.account_service.find_or_create_account_by_name(
            tenant_id, fallback_name, account_type, code_prefix=prefix
        )

    def purchases_account(self, tenant_id: str) -> Account:
        return self._find_or_create(
            tenant_id, PURCHASE_KEYWORDS, AccountType.EXPENSE, "Purchases (auto)", "501"
        )

    def sales_account(self, tenant_id: str) -> Account:
        return self._find_or_create(
            tenant_id, SALES_KEYWORDS, AccountType.REVENUE, "Sales (auto)", "401"
        )

    def cash_account(self, tenant_id: str) -> Account:
        return self._find_or_create(
            tenant_id, CASH_KEYWORDS, AccountType.ASSET, "Cash (auto)", "101"
        )


class PurchaseService:
    """Service for purchase invoices and purchase returns."""

    def __init__(self, db: Database):
        """Initialize purchase service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = DocumentAccounts(db)
        self.party_service = PartyService(db)
        self.journal = JournalWriter(db)

    def create_purchase_invoice(
        self,
        tenant_id: str,
        supplier_id: int,
        invoice_number: Optional[str],
        issue_date: date,
        total_amount,
        amount_paid=ZERO,
        kind: str = "purchase",
        currency: str = DEFAULT_CURRENCY,
    ) -> PurchaseInvoice:
        """Store a purchase invoice and post its journal entry.

        The invoice is removed again if posting fails, so no document exists
        without its entry.

        Raises:
            ValidationError: If amounts or kind are invalid
            NotFoundError: If the supplier does not exist
            IntegrityViolation: If the invoice number was already posted
        """
        total_amount = to_money(total_amount, "total amount")
        amount_paid = to_money(amount_paid, "amount paid")
        validate_settlement(total_amount, amount_paid)
        kind = (kind or "").strip().lower()
        if kind not in PURCHASE_KINDS:
            raise ValidationError(f"Unknown purchase kind '{kind}'. Valid kinds: purchase, return")

        supplier = self.party_service.require_party(tenant_id, PartyType.SUPPLIER, supplier_id)
        supplier_account = self.party_service.ensure_party_account(tenant_id, supplier)
        purchases_account = self.accounts.purchases_account(tenant_id)
        cash_account = self.accounts.cash_account(tenant_id) if amount_paid > 0 else None

        invoice_number = invoice_number.strip() if invoice_number and invoice_number.strip() else None
        invoice_id = self.db.create_purchase_invoice(
            tenant_id=tenant_id,
            invoice_number=invoice_number,
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            issue_date=issue_date,
            total_amount=total_amount,
            amount_paid=amount_paid,
            kind=kind,
            currency=currency,
        )
        invoice = self.db.get_purchase_invoice(tenant_id, invoice_id)
        try:
            self.journal.post_entry(
                tenant_id=tenant_id,
                entry_date=issue_date,
                lines=build_purchase_lines(
                    kind,
                    invoice.document_number,
                    total_amount,
                    amount_paid,
                    purchases_account.id,
                    supplier_account.id,
                    cash_account.id if cash_account else None,
                ),
                description=f"Purchase {kind} {invoice.document_number} - {supplier.name}",
                reference=invoice.document_number,
                currency=currency,
            )
        except Exception:
            self.db.delete_purchase_invoice(tenant_id, invoice_id)
            raise
        logger.info(
            "document_posted",
            extra={"tenant_id": tenant_id, "document": "purchase_invoice", "number": invoice.document_number},
        )
        return invoice


class SalesService:
    """Service for sales invoices."""

    def __init__(self, db: Database):
        """Initialize sales service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = DocumentAccounts(db)
        self.party_service = PartyService(db)
        self.journal = JournalWriter(db)

    def create_sales_invoice(
        self,
        tenant_id: str,
        customer_id: int,
        invoice_number: str,
        issue_date: date,
        total_amount,
        amount_paid=ZERO,
        currency: str = DEFAULT_CURRENCY,
    ) -> SalesInvoice:
        """Store a sales invoice and post its journal entry.

        Raises:
            ValidationError: If the number or amounts are invalid
            NotFoundError: If the customer does not exist
            IntegrityViolation: If the invoice number was already posted
        """
        invoice_number = (invoice_number or "").strip()
        if not invoice_number:
            raise ValidationError("Invoice number is required")
        total_amount = to_money(total_amount, "total amount")
        amount_paid = to_money(amount_paid, "amount paid")
        validate_settlement(total_amount, amount_paid)

        customer = self.party_service.require_party(tenant_id, PartyType.CUSTOMER, customer_id)
        customer_account = self.party_service.ensure_party_account(tenant_id, customer)
        sales_account = self.accounts.sales_account(tenant_id)
        cash_account = self.accounts.cash_account(tenant_id) if amount_paid > 0 else None

        invoice_id = self.db.create_sales_invoice(
            tenant_id=tenant_id,
            invoice_number=invoice_number,
            customer_id=customer.id,
            customer_name=customer.name,
            issue_date=issue_date,
            total_amount=total_amount,
            amount_paid=amount_paid,
            currency=currency,
        )
        try:
            self.journal.post_entry(
                tenant_id=tenant_id,
                entry_date=issue_date,
                lines=build_sales_lines(
                    invoice_number,
                    total_amount,
                    amount_paid,
                    sales_account.id,
                    customer_account.id,
                    cash_account.id if cash_account else None,
                ),
                description=f"Sales invoice {invoice_number} - {customer.name}",
                reference=invoice_number,
                currency=currency,
            )
        except Exception:
            self.db.delete_sales_invoice(tenant_id, invoice_id)
            raise
        logger.info(
            "document_posted",
            extra={"tenant_id": tenant_id, "document": "sales_invoice", "number": invoice_number},
        )
        return self.db.get_sales_invoice(tenant_id, invoice_id)


class VoucherService:
    """Service for receipt and payment vouchers."""

    def __init__(self, db: Database):
        """Initialize voucher service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = DocumentAccounts(db)
        self.account_service = AccountService(db)
        self.party_service = PartyService(db)
        self.journal = JournalWriter(db)

    def create_voucher(
        self,
        tenant_id: str,
        voucher_number: str,
        kind: str,
        voucher_date: date,
        amount,
        party_type: str,
        party_id: Optional[int] = None,
        account_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Voucher:
        """Store a voucher and post its journal entry.

        Args:
            tenant_id: Owning tenant
            voucher_number: Voucher number, used as the entry reference
            kind: 'receipt' (money in) or 'payment' (money out)
            voucher_date: Voucher date
            amount: Positive amount
            party_type: 'customer', 'supplier' or 'other'
            party_id: Customer or supplier ID (customer/supplier vouchers)
            account_id: Counter account (party_type 'other')
            description: Optional description

        Raises:
            ValidationError: If any argument is invalid
            NotFoundError: If the party or account does not exist
            IntegrityViolation: If the voucher number was already posted
        """
        voucher_number = (voucher_number or "").strip()
        if not voucher_number:
            raise ValidationError("Voucher number is required")
        kind = (kind or "").strip().lower()
        if kind not in VOUCHER_KINDS:
            raise ValidationError(f"Unknown voucher kind '{kind}'. Valid kinds: receipt, payment")
        party_type = (party_type or "").strip().lower()
        if party_type not in VOUCHER_PARTY_TYPES:
            raise ValidationError(
                f"Unknown party type '{party_type}'. Valid types: customer, supplier, other"
            )
        amount = to_money(amount)
        if amount <= 0:
            raise ValidationError("Voucher amount must be greater than zero")

        if party_type == "other":
            if account_id is None:
                raise ValidationError("An account is required for 'other' vouchers")
            target = self.account_service.require_account(tenant_id, account_id)
            party_id = None
        else:
            if party_id is None:
                raise ValidationError(f"A {party_type} is required for {party_type} vouchers")
            party = self.party_service.require_party(tenant_id, party_type, party_id)
            target = self.party_service.ensure_party_account(tenant_id, party)
        cash_account = self.accounts.cash_account(tenant_id)

        voucher_id = self.db.create_voucher(
            tenant_id=tenant_id,
            voucher_number=voucher_number,
            kind=kind,
            voucher_date=voucher_date,
            amount=amount,
            party_type=party_type,
            party_id=party_id,
            account_id=target.id,
            description=description,
        )
        try:
            self.journal.post_entry(
                tenant_id=tenant_id,
                entry_date=voucher_date,
                lines=build_voucher_lines(
                    kind, voucher_number, amount, cash_account.id, target.id, description
                ),
                description=description or f"{kind.capitalize()} voucher {voucher_number}",
                reference=voucher_number,
            )
        except Exception:
            self.db.delete_voucher(tenant_id, voucher_id)
            raise
        logger.info(
            "document_posted",
            extra={"tenant_id": tenant_id, "document": f"{kind}_voucher", "number": voucher_number},
        )
        return self.db.get_voucher(tenant_id, voucher_id)
