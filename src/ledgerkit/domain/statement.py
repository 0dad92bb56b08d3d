"""Statement calculator: opening, running and closing balances."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService, resolve_sign, signed_amount
from ledgerkit.domain.entities import (
    ZERO,
    Account,
    AccountStatement,
    StatementEntity,
    StatementRow,
    StatementRowKind,
)
from ledgerkit.domain.errors import UnresolvedPartyLinkError, ValidationError
from ledgerkit.domain.party import PartyService

OPENING_DESCRIPTION = "Opening Balance"


class StatementCalculator:
    """Builds account and party statements from posted journal lines."""

    def __init__(self, db: Database):
        """Initialize statement calculator.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)
        self.party_service = PartyService(db)

    def get_account_statement(
        self,
        tenant_id: str,
        account_id: int,
        start_date: date,
        end_date: date,
        currency: Optional[str] = None,
    ) -> AccountStatement:
        """Get the statement of one account over ``[start_date, end_date]``.

        The first row is always the opening balance; each following row
        carries the running balance after that line. Balances follow the
        account's sign convention.

        Amounts are never converted between currencies. With ``currency``
        only entries in that currency are included; without it the account
        is treated as single-currency and every entry is summed as is.

        Raises:
            NotFoundError: If the account does not exist in the tenant
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        account = self.account_service.require_account(tenant_id, account_id)
        convention = resolve_sign(account.type)

        before = self.db.sum_line_totals(tenant_id, account.id, before=start_date, currency=currency)
        opening = signed_amount(convention, before.debit, before.credit)

        rows = [
            StatementRow(
                date=start_date,
                kind=StatementRowKind.OPENING,
                description=OPENING_DESCRIPTION,
                reference=None,
                debit=ZERO,
                credit=ZERO,
                balance=opening,
            )
        ]
        balance = opening
        lines = self.db.list_ledger_lines(tenant_id, account.id, start_date, end_date, currency=currency)
        for line in lines:
            balance += signed_amount(convention, line.debit, line.credit)
            rows.append(
                StatementRow(
                    date=line.transaction_date,
                    kind=StatementRowKind.TRX,
                    description=line.description or "-",
                    reference=line.reference,
                    debit=line.debit,
                    credit=line.credit,
                    balance=balance,
                )
            )

        return AccountStatement(
            statement=tuple(rows),
            entity=StatementEntity(name=account.name, code=account.code),
            opening_balance=opening,
            closing_balance=balance,
        )

    def get_customer_statement(
        self,
        tenant_id: str,
        entity_type: str,
        entity_id: int,
        start_date: date,
        end_date: date,
        currency: Optional[str] = None,
    ) -> AccountStatement:
        """Get the statement of a customer's or supplier's ledger account.

        A party without any account yields an empty statement whose entity
        carries an error message instead of raising.

        Raises:
            ValidationError: If entity_type is not customer/supplier
            NotFoundError: If the party does not exist in the tenant
        """
        party = self.party_service.require_party(tenant_id, entity_type, entity_id)
        account = self.party_service.resolve_party_account(tenant_id, party)
        if account is None:
            error = UnresolvedPartyLinkError(party.party_type.value, party.name)
            return AccountStatement(
                statement=(),
                entity=StatementEntity(name=party.name, code="N/A", error=str(error)),
                opening_balance=ZERO,
                closing_balance=ZERO,
            )
        return self.get_account_statement(tenant_id, account.id, start_date, end_date, currency=currency)

    def get_account_balance(
        self,
        tenant_id: str,
        account_id: int,
        as_of: Optional[date] = None,
        currency: Optional[str] = None,
    ) -> Decimal:
        """Signed balance of an account through ``as_of`` (inclusive), optionally in one currency."""
        account: Account = self.account_service.require_account(tenant_id, account_id)
        totals = self.db.sum_line_totals(tenant_id, account.id, through=as_of, currency=currency)
        return signed_amount(resolve_sign(account.type), totals.debit, totals.credit)
