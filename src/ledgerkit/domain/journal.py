"""Journal writer: validates and persists balanced journal entries."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import ZERO, FiscalYear, FiscalYearPeriod, JournalEntry, LineInput
from ledgerkit.domain.errors import (
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
    account_not_found,
    entry_not_found,
)
from ledgerkit.logging_config import get_logger

logger = get_logger("domain.journal")

CENT = Decimal("0.01")
DEFAULT_CURRENCY = "EGP"


def round_money(value: Decimal) -> Decimal:
    """Round a money value to cents, for comparison and display only."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_lines(lines: Sequence[LineInput]) -> tuple[Decimal, Decimal]:
    """Check the double-entry rules for a set of lines.

    Returns:
        Tuple of (total_debit, total_credit)

    Raises:
        ValidationError: If there are fewer than two lines or a line is malformed
        UnbalancedEntryError: If the rounded totals differ
    """
    if len(lines) < 2:
        raise ValidationError("A journal entry needs at least two lines")

    total_debit = ZERO
    total_credit = ZERO
    for index, line in enumerate(lines, start=1):
        debit = Decimal(line.debit)
        credit = Decimal(line.credit)
        if debit < 0 or credit < 0:
            raise ValidationError(f"Line {index}: debit and credit must not be negative")
        if (debit == 0) == (credit == 0):
            raise ValidationError(f"Line {index}: exactly one of debit or credit must be nonzero")
        total_debit += debit
        total_credit += credit

    if round_money(total_debit) != round_money(total_credit):
        raise UnbalancedEntryError(total_debit, total_credit)
    return total_debit, total_credit


class JournalWriter:
    """Service that posts atomic, balanced journal entries."""

    def __init__(self, db: Database):
        """Initialize journal writer.

        Args:
            db: Database instance
        """
        self.db = db

    def post_entry(
        self,
        tenant_id: str,
        entry_date: date,
        lines: Sequence[LineInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
        fiscal_year_id: Optional[int] = None,
        currency: str = DEFAULT_CURRENCY,
        reversal_of_id: Optional[int] = None,
    ) -> JournalEntry:
        """Post a balanced journal entry.

        All validation happens before anything is written; header and lines
        are then stored in a single transaction.

        Args:
            tenant_id: Owning tenant
            entry_date: Transaction date
            lines: At least two lines, each with exactly one nonzero side
            description: Entry description (default for line descriptions)
            reference: Source document number; unique per tenant
            fiscal_year_id: Explicit fiscal year, else the open year covering the date
            currency: Entry currency code
            reversal_of_id: Entry this one reverses, if any

        Returns:
            The persisted journal entry

        Raises:
            ValidationError: If lines are malformed or an account is inactive
            UnbalancedEntryError: If debits and credits do not balance
            NotFoundError: If an account or the fiscal year does not exist
            IntegrityViolation: If the entry number or reference already exists
        """
        lines = list(lines)
        try:
            total_debit, _ = validate_lines(lines)
        except UnbalancedEntryError as e:
            logger.warning(
                "journal_entry_unbalanced",
                extra={
                    "tenant_id": tenant_id,
                    "reference": reference,
                    "total_debit": e.total_debit,
                    "total_credit": e.total_credit,
                },
            )
            raise

        for line in lines:
            account = self.db.get_account(tenant_id, line.account_id)
            if account is None:
                raise NotFoundError(account_not_found(line.account_id))
            if not account.is_active:
                raise ValidationError(f"Account {account.code} ({account.name}) is inactive")

        reference = reference.strip() if reference and reference.strip() else None
        fiscal_year = self._resolve_fiscal_year(tenant_id, entry_date, fiscal_year_id)
        new_year = None
        if fiscal_year is None:
            # No year covers the date: the calendar year opens with this entry
            year = entry_date.year
            new_year = FiscalYearPeriod(str(year), date(year, 1, 1), date(year, 12, 31))

        entry = self.db.create_journal_entry(
            tenant_id=tenant_id,
            fiscal_year_id=fiscal_year.id if fiscal_year is not None else None,
            transaction_date=entry_date,
            lines=lines,
            description=description,
            reference=reference,
            currency=currency or DEFAULT_CURRENCY,
            status="posted",
            reversal_of_id=reversal_of_id,
            open_fiscal_year=new_year,
        )
        if new_year is not None:
            logger.info(
                "fiscal_year_created",
                extra={"tenant_id": tenant_id, "fiscal_year_id": entry.fiscal_year_id},
            )
        logger.info(
            "journal_entry_posted",
            extra={
                "tenant_id": tenant_id,
                "entry_id": entry.id,
                "entry_number": entry.entry_number,
                "reference": reference,
                "line_count": len(lines),
                "amount": total_debit,
            },
        )
        return entry

    def _resolve_fiscal_year(
        self, tenant_id: str, entry_date: date, fiscal_year_id: Optional[int]
    ) -> Optional[FiscalYear]:
        """Fiscal year an entry posts into, or None when no year covers the date."""
        if fiscal_year_id is not None:
            fiscal_year = self.db.get_fiscal_year(tenant_id, fiscal_year_id)
            if fiscal_year is None:
                raise NotFoundError(f"Fiscal year {fiscal_year_id} not found")
            if fiscal_year.is_closed:
                raise ValidationError(f"Fiscal year {fiscal_year.name} is closed")
            if not fiscal_year.start_date <= entry_date <= fiscal_year.end_date:
                raise ValidationError(
                    f"Entry date {entry_date} is outside fiscal year {fiscal_year.name}"
                )
            return fiscal_year

        fiscal_year = self.db.find_fiscal_year(tenant_id, entry_date)
        if fiscal_year is not None:
            if fiscal_year.is_closed:
                raise ValidationError(f"Fiscal year {fiscal_year.name} is closed")
            return fiscal_year
        return None

    def reverse_entry(
        self,
        tenant_id: str,
        entry_id: int,
        entry_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> JournalEntry:
        """Post an offsetting entry that cancels a posted entry.

        Posted entries are never edited; every line is mirrored with debit and
        credit swapped. The reversal's reference is ``REV-<entry number>``, so
        an entry can only be reversed once.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If the entry is itself a reversal
            IntegrityViolation: If the entry was already reversed
        """
        original = self.get_entry(tenant_id, entry_id)
        if original.reversal_of_id is not None:
            raise ValidationError(f"Entry {original.entry_number} is a reversal and cannot be reversed")

        lines = [
            LineInput(
                account_id=line.account_id,
                debit=line.credit,
                credit=line.debit,
                description=f"Reversal: {line.description}" if line.description else "Reversal",
            )
            for line in original.lines
        ]
        return self.post_entry(
            tenant_id=tenant_id,
            entry_date=entry_date or original.transaction_date,
            lines=lines,
            description=description or f"Reversal of {original.entry_number}",
            reference=f"REV-{original.entry_number}",
            currency=original.currency,
            reversal_of_id=original.id,
        )

    def get_entry(self, tenant_id: str, entry_id: int) -> JournalEntry:
        """Get journal entry by ID.

        Raises:
            NotFoundError: If the entry does not exist in the tenant
        """
        entry = self.db.get_journal_entry(tenant_id, entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def get_entry_by_reference(self, tenant_id: str, reference: str) -> Optional[JournalEntry]:
        """Get journal entry by source document reference, or None."""
        return self.db.get_journal_entry_by_reference(tenant_id, reference)

    def list_entries(
        self,
        tenant_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = 50,
    ) -> list[JournalEntry]:
        """List journal entries, newest first."""
        return self.db.list_journal_entries(tenant_id, start_date=start_date, end_date=end_date, limit=limit)
