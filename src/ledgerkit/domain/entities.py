"""Domain model entities for ledgerkit.

These are pure data classes representing ledger concepts, independent of the
database schema. Money is always ``Decimal``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


ZERO = Decimal("0")


class AccountType(str, Enum):
    """Chart of accounts type. Determines the sign convention."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    INCOME = "income"
    EXPENSE = "expense"


class SignConvention(str, Enum):
    """Which side of a movement increases an account balance."""

    DEBIT_POSITIVE = "debit_positive"
    CREDIT_POSITIVE = "credit_positive"


class EntryStatus(str, Enum):
    """Journal entry status."""

    DRAFT = "draft"
    POSTED = "posted"


class PartyType(str, Enum):
    """Counterparty kinds that own a ledger account."""

    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class StatementRowKind(str, Enum):
    """Statement row kind."""

    OPENING = "OPENING"
    TRX = "TRX"


@dataclass(frozen=True)
class FiscalYear:
    """Fiscal year domain entity."""

    id: int
    tenant_id: str
    name: str
    start_date: date
    end_date: date
    is_closed: bool


@dataclass(frozen=True)
class FiscalYearPeriod:
    """A fiscal year that does not exist yet, opened with the entry that needs it."""

    name: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    tenant_id: str
    code: str
    name: str
    type: AccountType
    parent_id: Optional[int]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class AccountTreeNode:
    """Account with nested children for chart-of-accounts display."""

    id: int
    code: str
    name: str
    type: AccountType
    parent_id: Optional[int]
    is_active: bool
    children: tuple["AccountTreeNode", ...] = ()


@dataclass(frozen=True)
class LineInput:
    """One requested journal line before posting."""

    account_id: int
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: Optional[str] = None

    @classmethod
    def debit_line(cls, account_id: int, amount: Decimal, description: Optional[str] = None) -> "LineInput":
        return cls(account_id=account_id, debit=amount, credit=ZERO, description=description)

    @classmethod
    def credit_line(cls, account_id: int, amount: Decimal, description: Optional[str] = None) -> "LineInput":
        return cls(account_id=account_id, debit=ZERO, credit=amount, description=description)


@dataclass(frozen=True)
class JournalLine:
    """Persisted journal line."""

    id: int
    journal_entry_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    description: Optional[str]


@dataclass(frozen=True)
class JournalEntry:
    """Persisted journal entry with its lines."""

    id: int
    tenant_id: str
    fiscal_year_id: int
    entry_number: str
    transaction_date: date
    description: Optional[str]
    reference: Optional[str]
    status: EntryStatus
    currency: str
    reversal_of_id: Optional[int]
    created_at: datetime
    lines: tuple[JournalLine, ...] = ()

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)


@dataclass(frozen=True)
class LedgerLine:
    """A journal line joined with its entry header, as read by statements."""

    line_id: int
    journal_entry_id: int
    transaction_date: date
    entry_number: str
    reference: Optional[str]
    description: Optional[str]
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class LineTotals:
    """Aggregated debit and credit sums."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO


@dataclass(frozen=True)
class AccountActivity:
    """Debit and credit totals for one account over a period."""

    account_id: int
    code: str
    name: str
    type: AccountType
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class Party:
    """Customer or supplier with an optional explicit ledger account link."""

    id: int
    tenant_id: str
    party_type: PartyType
    name: str
    account_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class SalesInvoice:
    """Sales invoice source document."""

    id: int
    tenant_id: str
    invoice_number: str
    customer_id: Optional[int]
    customer_name: str
    issue_date: date
    currency: str
    total_amount: Decimal
    amount_paid: Decimal
    status: str
    created_at: datetime


@dataclass(frozen=True)
class PurchaseInvoice:
    """Purchase invoice (or purchase return) source document."""

    id: int
    tenant_id: str
    invoice_number: Optional[str]
    supplier_id: Optional[int]
    supplier_name: str
    issue_date: date
    currency: str
    total_amount: Decimal
    amount_paid: Decimal
    status: str
    kind: str
    created_at: datetime

    @property
    def document_number(self) -> str:
        """Number correlating the invoice with its journal entry reference."""
        if self.invoice_number and self.invoice_number.strip():
            return self.invoice_number.strip()
        return f"PI-{self.id}"


@dataclass(frozen=True)
class Voucher:
    """Receipt or payment voucher source document."""

    id: int
    tenant_id: str
    voucher_number: str
    kind: str
    voucher_date: date
    amount: Decimal
    party_type: str
    party_id: Optional[int]
    account_id: Optional[int]
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class StatementRow:
    """One row of an account statement."""

    date: date
    kind: StatementRowKind
    description: str
    reference: Optional[str]
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class StatementEntity:
    """Who the statement is about. ``error`` is set for unresolved parties."""

    name: str
    code: str
    error: Optional[str] = None


@dataclass(frozen=True)
class AccountStatement:
    """Opening, running and closing balances for one account over a range."""

    statement: tuple[StatementRow, ...]
    entity: StatementEntity
    opening_balance: Decimal
    closing_balance: Decimal

    @property
    def transactions(self) -> tuple[StatementRow, ...]:
        return tuple(row for row in self.statement if row.kind == StatementRowKind.TRX)


@dataclass(frozen=True)
class ExpenseDetail:
    """Net expense for one account in an income statement."""

    account_name: str
    value: Decimal


@dataclass(frozen=True)
class IncomeStatement:
    """Revenue, expenses and net profit over a period."""

    start_date: date
    end_date: date
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    expense_details: tuple[ExpenseDetail, ...] = ()


@dataclass
class SyncReport:
    """Outcome of a reconciliation batch."""

    fixed_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    errors: list[str] = field(default_factory=list)
