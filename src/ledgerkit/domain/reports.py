"""Period reports built from journal activity."""

from datetime import date
from decimal import Decimal

from ledgerkit.database.base import Database
from ledgerkit.domain.account import resolve_sign, signed_amount
from ledgerkit.domain.entities import ZERO, AccountActivity, AccountType, ExpenseDetail, IncomeStatement
from ledgerkit.domain.errors import ValidationError

REVENUE_TYPES = (AccountType.REVENUE.value, AccountType.INCOME.value)
EXPENSE_TYPES = (AccountType.EXPENSE.value,)


def net_activity(activity: AccountActivity) -> Decimal:
    """Period movement of an account under its own sign convention."""
    return signed_amount(resolve_sign(activity.type), activity.debit, activity.credit)


class ReportService:
    """Service for period reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_income_statement(self, tenant_id: str, start_date: date, end_date: date) -> IncomeStatement:
        """Revenue, expenses and net profit for ``[start_date, end_date]``.

        Expense details list accounts with a positive net expense, largest first.
        """
        if start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        revenue = self.db.summarize_account_activity(tenant_id, REVENUE_TYPES, start_date, end_date)
        expenses = self.db.summarize_account_activity(tenant_id, EXPENSE_TYPES, start_date, end_date)

        total_revenue = sum((net_activity(a) for a in revenue), ZERO)
        total_expenses = sum((net_activity(a) for a in expenses), ZERO)

        details = [
            ExpenseDetail(account_name=a.name, value=net_activity(a))
            for a in expenses
            if net_activity(a) > 0
        ]
        details.sort(key=lambda d: d.value, reverse=True)

        return IncomeStatement(
            start_date=start_date,
            end_date=end_date,
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_profit=total_revenue - total_expenses,
            expense_details=tuple(details),
        )
