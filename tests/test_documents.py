"""Tests for parties and source documents."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerkit.domain.documents import build_purchase_lines, build_voucher_lines, to_money, validate_settlement
from ledgerkit.domain.entities import AccountType, PartyType
from ledgerkit.domain.errors import IntegrityViolation, NotFoundError, ValidationError

from conftest import TENANT


class TestPartyService:
    """Tests for PartyService."""

    def test_customer_gets_receivable_account(self, party_service, account_service):
        customer = party_service.create_customer(TENANT, "  Cairo   Retail ")
        account = account_service.get_account(TENANT, customer.account_id)

        assert customer.name == "Cairo Retail"
        assert customer.party_type == PartyType.CUSTOMER
        assert account.name == "Cairo Retail"
        assert account.type == AccountType.ASSET
        assert account.code == "102-0001"

    def test_supplier_gets_payable_account(self, party_service, account_service):
        supplier = party_service.create_supplier(TENANT, "Delta Paper")
        account = account_service.get_account(TENANT, supplier.account_id)

        assert account.type == AccountType.LIABILITY
        assert account.code == "201-0001"

    def test_same_name_account_not_shared(self, party_service, account_service):
        account_id = account_service.create_account(TENANT, "2300", "Delta Paper", "liability")
        supplier = party_service.create_supplier(TENANT, "delta paper")

        assert supplier.account_id != account_id
        assert account_service.get_account(TENANT, supplier.account_id).code == "201-0001"

    def test_customer_named_like_chart_account_gets_own_account(self, party_service, account_service, chart):
        customer = party_service.create_customer(TENANT, "cash")
        supplier = party_service.create_supplier(TENANT, "Rent")

        assert customer.account_id != chart["Cash"].id
        assert supplier.account_id != chart["Rent"].id
        assert account_service.get_account(TENANT, customer.account_id).type == AccountType.ASSET
        assert account_service.get_account(TENANT, supplier.account_id).type == AccountType.LIABILITY

    def test_paid_sale_to_customer_named_cash(self, party_service, sales_service, journal, statements, chart):
        customer = party_service.create_customer(TENANT, "Cash")
        sales_service.create_sales_invoice(TENANT, customer.id, "S-9", date(2024, 7, 1), "100", "100")

        entry = journal.get_entry_by_reference(TENANT, "S-9")
        assert {line.account_id for line in entry.lines} == {customer.account_id, chart["Sales"].id, chart["Cash"].id}
        assert statements.get_account_balance(TENANT, customer.account_id) == Decimal("0")
        assert statements.get_account_balance(TENANT, chart["Cash"].id) == Decimal("100")

    def test_linked_account_ids(self, party_service, chart):
        customer = party_service.create_customer(TENANT, "Cairo Retail")
        supplier = party_service.create_supplier(TENANT, "Nile Foods", account_id=chart["Loans"].id)

        assert party_service.linked_account_ids(TENANT) == {customer.account_id, supplier.account_id}

    def test_explicit_account_must_exist(self, party_service):
        with pytest.raises(NotFoundError):
            party_service.create_customer(TENANT, "Ghost", account_id=77)

    def test_name_required(self, party_service):
        with pytest.raises(ValidationError, match="Customer name is required"):
            party_service.create_customer(TENANT, "  ")

    def test_list_parties_by_type(self, party_service):
        party_service.create_customer(TENANT, "Zeta")
        party_service.create_customer(TENANT, "Alpha")
        party_service.create_supplier(TENANT, "Mid")

        assert [p.name for p in party_service.list_parties(TENANT, "customer")] == ["Alpha", "Zeta"]
        assert [p.name for p in party_service.list_parties(TENANT, PartyType.SUPPLIER)] == ["Mid"]


class TestLineBuilders:
    """Tests for document line builders."""

    def test_purchase_lines_without_payment(self):
        lines = build_purchase_lines("purchase", "P-1", Decimal("100"), Decimal("0"), 1, 2)
        assert [(l.account_id, l.debit, l.credit) for l in lines] == [
            (1, Decimal("100"), Decimal("0")),
            (2, Decimal("0"), Decimal("100")),
        ]

    def test_paid_purchase_needs_cash_account(self):
        with pytest.raises(ValidationError, match="cash account"):
            build_purchase_lines("purchase", "P-1", Decimal("100"), Decimal("10"), 1, 2)

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            build_purchase_lines("refund", "P-1", Decimal("100"), Decimal("0"), 1, 2)

    def test_voucher_lines(self):
        receipt = build_voucher_lines("receipt", "RV-1", Decimal("5"), cash_account_id=1, target_account_id=9)
        payment = build_voucher_lines("payment", "PV-1", Decimal("5"), cash_account_id=1, target_account_id=9)

        assert [(l.account_id, l.debit) for l in receipt] == [(1, Decimal("5")), (9, Decimal("0"))]
        assert [(l.account_id, l.debit) for l in payment] == [(9, Decimal("5")), (1, Decimal("0"))]

    def test_validate_settlement(self):
        validate_settlement(Decimal("10"), Decimal("10"))
        with pytest.raises(ValidationError, match="greater than zero"):
            validate_settlement(Decimal("0"), Decimal("0"))
        with pytest.raises(ValidationError, match="exceeds"):
            validate_settlement(Decimal("10"), Decimal("10.01"))
        with pytest.raises(ValidationError, match="negative"):
            validate_settlement(Decimal("10"), Decimal("-1"))

    def test_to_money(self):
        assert to_money("12.30") == Decimal("12.30")
        assert to_money(7) == Decimal("7")
        with pytest.raises(ValidationError):
            to_money("abc")
        with pytest.raises(ValidationError):
            to_money("NaN")


class TestPurchaseService:
    """Tests for PurchaseService."""

    def test_purchase_posts_entry(self, purchase_service, party_service, journal, statements, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")

        invoice = purchase_service.create_purchase_invoice(
            TENANT, supplier.id, "P-500", date(2024, 6, 1), Decimal("1000"), Decimal("400")
        )

        entry = journal.get_entry_by_reference(TENANT, "P-500")
        assert invoice.document_number == "P-500"
        assert entry.total_debit == Decimal("1400")
        balance = statements.get_account_balance(TENANT, supplier.account_id)
        assert balance == Decimal("600")
        assert statements.get_account_balance(TENANT, chart["Cash"].id) == Decimal("-400")
        assert statements.get_account_balance(TENANT, chart["Purchases"].id) == Decimal("1000")

    def test_customer_account_never_used_as_cash(self, purchase_service, party_service, account_service, journal):
        account_service.seed_default_accounts(TENANT)
        customer = party_service.create_customer(TENANT, "Cashmere Textiles")
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")

        purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 1), "100", "100")

        entry = journal.get_entry_by_reference(TENANT, "P-1")
        assert all(line.account_id != customer.account_id for line in entry.lines)
        cash = account_service.find_account_by_name(TENANT, "Cash (auto)")
        assert cash.type == AccountType.ASSET
        assert cash.id in {line.account_id for line in entry.lines}

    def test_purchase_without_number(self, purchase_service, party_service, journal, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")
        invoice = purchase_service.create_purchase_invoice(TENANT, supplier.id, None, date(2024, 6, 1), "50")

        assert invoice.invoice_number is None
        assert journal.get_entry_by_reference(TENANT, f"PI-{invoice.id}") is not None

    def test_return_reduces_supplier_balance(self, purchase_service, party_service, statements, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")
        purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 1), "300")
        purchase_service.create_purchase_invoice(TENANT, supplier.id, "PR-1", date(2024, 6, 2), "100", kind="return")

        assert statements.get_account_balance(TENANT, supplier.account_id) == Decimal("200")
        assert statements.get_account_balance(TENANT, chart["Purchases"].id) == Decimal("200")

    def test_failed_posting_removes_invoice(self, purchase_service, party_service, temp_db, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")
        purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 1), "300")

        with pytest.raises(IntegrityViolation):
            purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 2), "10")

        assert [inv.invoice_number for inv in temp_db.list_purchase_invoices(TENANT)] == ["P-1"]

    def test_invalid_amounts(self, purchase_service, party_service, temp_db, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")
        with pytest.raises(ValidationError, match="exceeds"):
            purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 1), "10", "20")
        assert temp_db.list_purchase_invoices(TENANT) == []

    def test_unknown_supplier(self, purchase_service, chart):
        with pytest.raises(NotFoundError, match="Supplier 12 not found"):
            purchase_service.create_purchase_invoice(TENANT, 12, "P-1", date(2024, 6, 1), "10")


class TestSalesService:
    """Tests for SalesService."""

    def test_sale_posts_revenue_and_collection(self, sales_service, party_service, statements, chart):
        customer = party_service.create_customer(TENANT, "Cairo Retail")

        invoice = sales_service.create_sales_invoice(
            TENANT, customer.id, "S-001", date(2024, 7, 1), "2500", "1000"
        )

        assert invoice.total_amount == Decimal("2500")
        assert statements.get_account_balance(TENANT, customer.account_id) == Decimal("1500")
        assert statements.get_account_balance(TENANT, chart["Sales"].id) == Decimal("2500")
        assert statements.get_account_balance(TENANT, chart["Cash"].id) == Decimal("1000")

    def test_number_required(self, sales_service, party_service, chart):
        customer = party_service.create_customer(TENANT, "Cairo Retail")
        with pytest.raises(ValidationError, match="Invoice number is required"):
            sales_service.create_sales_invoice(TENANT, customer.id, " ", date(2024, 7, 1), "10")

    def test_sales_account_created_when_missing(self, sales_service, party_service, account_service):
        customer = party_service.create_customer(TENANT, "Cairo Retail")
        sales_service.create_sales_invoice(TENANT, customer.id, "S-1", date(2024, 7, 1), "10")

        sales = account_service.find_account_by_name(TENANT, "Sales (auto)")
        assert sales.type == AccountType.REVENUE


class TestVoucherService:
    """Tests for VoucherService."""

    def test_customer_receipt(self, voucher_service, sales_service, party_service, statements, chart):
        customer = party_service.create_customer(TENANT, "Cairo Retail")
        sales_service.create_sales_invoice(TENANT, customer.id, "S-1", date(2024, 7, 1), "800")

        voucher = voucher_service.create_voucher(
            TENANT, "RV-1", "receipt", date(2024, 7, 5), "300", "customer", party_id=customer.id
        )

        assert voucher.account_id == customer.account_id
        assert statements.get_account_balance(TENANT, customer.account_id) == Decimal("500")
        assert statements.get_account_balance(TENANT, chart["Cash"].id) == Decimal("300")

    def test_supplier_payment(self, voucher_service, purchase_service, party_service, statements, chart):
        supplier = party_service.create_supplier(TENANT, "Acme Supplies")
        purchase_service.create_purchase_invoice(TENANT, supplier.id, "P-1", date(2024, 6, 1), "900")

        voucher_service.create_voucher(
            TENANT, "PV-1", "payment", date(2024, 6, 9), "900", "supplier", party_id=supplier.id
        )

        assert statements.get_account_balance(TENANT, supplier.account_id) == Decimal("0")

    def test_other_payment_uses_explicit_account(self, voucher_service, statements, chart):
        voucher_service.create_voucher(
            TENANT, "PV-2", "payment", date(2024, 6, 9), "1200", "other",
            account_id=chart["Rent"].id, description="June rent",
        )
        assert statements.get_account_balance(TENANT, chart["Rent"].id) == Decimal("1200")

    def test_other_requires_account(self, voucher_service, chart):
        with pytest.raises(ValidationError, match="account is required"):
            voucher_service.create_voucher(TENANT, "PV-3", "payment", date(2024, 6, 9), "1", "other")

    def test_party_voucher_requires_party(self, voucher_service, chart):
        with pytest.raises(ValidationError, match="customer is required"):
            voucher_service.create_voucher(TENANT, "RV-3", "receipt", date(2024, 6, 9), "1", "customer")

    def test_invalid_kind_and_amount(self, voucher_service, chart):
        with pytest.raises(ValidationError, match="Unknown voucher kind"):
            voucher_service.create_voucher(TENANT, "X-1", "transfer", date(2024, 6, 9), "1", "other")
        with pytest.raises(ValidationError, match="greater than zero"):
            voucher_service.create_voucher(
                TENANT, "X-1", "payment", date(2024, 6, 9), "0", "other", account_id=chart["Rent"].id
            )

    def test_duplicate_number_removes_voucher(self, voucher_service, temp_db, chart):
        voucher_service.create_voucher(
            TENANT, "PV-1", "payment", date(2024, 6, 9), "10", "other", account_id=chart["Rent"].id
        )
        with pytest.raises(IntegrityViolation):
            voucher_service.create_voucher(
                TENANT, "PV-1", "payment", date(2024, 6, 10), "10", "other", account_id=chart["Rent"].id
            )
        assert temp_db.get_voucher(TENANT, 2) is None
