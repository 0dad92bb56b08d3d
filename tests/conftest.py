"""Shared pytest fixtures for ledgerkit tests."""

import tempfile
import os
import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.documents import PurchaseService, SalesService, VoucherService
from ledgerkit.domain.journal import JournalWriter
from ledgerkit.domain.party import PartyService
from ledgerkit.domain.reconciliation import ReconciliationService
from ledgerkit.domain.reports import ReportService
from ledgerkit.domain.statement import StatementCalculator
from ledgerkit.logging_config import reset_logging

TENANT = "acme"
OTHER_TENANT = "globex"

# (code, name, type, parent code)
SAMPLE_CHART = [
    ("1000", "Assets", "asset", None),
    ("1010", "Cash", "asset", "1000"),
    ("1100", "Bank", "asset", "1000"),
    ("2000", "Liabilities", "liability", None),
    ("2100", "Loans", "liability", "2000"),
    ("3000", "Equity", "equity", None),
    ("3100", "Capital", "equity", "3000"),
    ("4000", "Revenue", "revenue", None),
    ("4100", "Sales", "revenue", "4000"),
    ("4200", "Interest Income", "income", "4000"),
    ("5000", "Expenses", "expense", None),
    ("5100", "Purchases", "expense", "5000"),
    ("5200", "Rent", "expense", "5000"),
]


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch):
    """Start every test with unconfigured logging and no ledgerkit env vars."""
    for var in ("LEDGERKIT_DB_PATH", "LEDGERKIT_DATABASE_URL", "LEDGERKIT_TENANT", "LEDGERKIT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal(temp_db):
    """Create a JournalWriter with a temporary database."""
    return JournalWriter(temp_db)


@pytest.fixture
def statements(temp_db):
    """Create a StatementCalculator with a temporary database."""
    return StatementCalculator(temp_db)


@pytest.fixture
def party_service(temp_db):
    """Create a PartyService with a temporary database."""
    return PartyService(temp_db)


@pytest.fixture
def purchase_service(temp_db):
    """Create a PurchaseService with a temporary database."""
    return PurchaseService(temp_db)


@pytest.fixture
def sales_service(temp_db):
    """Create a SalesService with a temporary database."""
    return SalesService(temp_db)


@pytest.fixture
def voucher_service(temp_db):
    """Create a VoucherService with a temporary database."""
    return VoucherService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService with a temporary database."""
    return ReconciliationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


def seed_chart(account_service, tenant_id):
    """Create SAMPLE_CHART for a tenant and return accounts keyed by name."""
    accounts = {}
    by_code = {}
    for code, name, account_type, parent_code in SAMPLE_CHART:
        parent_id = by_code[parent_code] if parent_code else None
        account_id = account_service.create_account(tenant_id, code, name, account_type, parent_id=parent_id)
        by_code[code] = account_id
        accounts[name] = account_service.get_account(tenant_id, account_id)
    return accounts


@pytest.fixture
def chart(account_service):
    """Sample chart of accounts for TENANT, keyed by account name."""
    return seed_chart(account_service, TENANT)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
