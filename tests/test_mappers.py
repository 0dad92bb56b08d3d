"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerkit.database.models import (
    Account as ORMAccount,
    Customer as ORMCustomer,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
    PurchaseInvoice as ORMPurchaseInvoice,
    Supplier as ORMSupplier,
)
from ledgerkit.database.mappers import (
    account_to_domain,
    customer_to_domain,
    journal_entry_to_domain,
    ledger_line_to_domain,
    purchase_invoice_to_domain,
    supplier_to_domain,
)
from ledgerkit.domain.entities import Account, AccountType, EntryStatus, JournalEntry, PartyType


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        orm_account = ORMAccount(
            id=1,
            tenant_id="acme",
            code="1010",
            name="Cash",
            type="asset",
            parent_id=None,
            is_active=True,
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.code == "1010"
        assert domain_account.type == AccountType.ASSET
        assert domain_account.created_at == orm_account.created_at


class TestJournalMappers:
    """Tests for journal entry and ledger line mappers."""

    def _entry(self):
        entry = ORMJournalEntry(
            id=3,
            tenant_id="acme",
            fiscal_year_id=1,
            entry_number="JE-000003",
            transaction_date=date(2024, 2, 1),
            description="Rent",
            reference="PV-1",
            status="posted",
            currency="EGP",
            reversal_of_id=None,
            created_at=datetime.now(UTC),
        )
        entry.lines = [
            ORMJournalLine(id=5, journal_entry_id=3, account_id=9, debit=Decimal("800"), credit=Decimal("0")),
            ORMJournalLine(
                id=6, journal_entry_id=3, account_id=2, debit=Decimal("0"), credit=Decimal("800"), description="Cash out"
            ),
        ]
        return entry

    def test_journal_entry_to_domain(self):
        entry = journal_entry_to_domain(self._entry())

        assert isinstance(entry, JournalEntry)
        assert entry.status == EntryStatus.POSTED
        assert [line.id for line in entry.lines] == [5, 6]
        assert entry.total_debit == entry.total_credit == Decimal("800")

    def test_ledger_line_falls_back_to_entry_description(self):
        orm_entry = self._entry()
        first, second = orm_entry.lines

        assert ledger_line_to_domain(first, orm_entry).description == "Rent"
        assert ledger_line_to_domain(second, orm_entry).description == "Cash out"
        assert ledger_line_to_domain(second, orm_entry).entry_number == "JE-000003"


class TestPartyMappers:
    """Tests for customer and supplier mappers."""

    def test_party_types(self):
        now = datetime.now(UTC)
        customer = customer_to_domain(ORMCustomer(id=1, tenant_id="acme", name="C", account_id=4, created_at=now))
        supplier = supplier_to_domain(ORMSupplier(id=1, tenant_id="acme", name="S", account_id=None, created_at=now))

        assert customer.party_type == PartyType.CUSTOMER
        assert customer.account_id == 4
        assert supplier.party_type == PartyType.SUPPLIER
        assert supplier.account_id is None


def test_purchase_invoice_document_number():
    invoice = purchase_invoice_to_domain(
        ORMPurchaseInvoice(
            id=12,
            tenant_id="acme",
            invoice_number=None,
            supplier_id=None,
            supplier_name="Acme",
            issue_date=date(2024, 1, 1),
            currency="EGP",
            total_amount=Decimal("5"),
            amount_paid=Decimal("0"),
            status="posted",
            kind="purchase",
            created_at=datetime.now(UTC),
        )
    )
    assert invoice.document_number == "PI-12"
