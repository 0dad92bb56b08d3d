"""Tests for amount, date and account parsing utilities."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerkit.domain.errors import NotFoundError, ValidationError
from ledgerkit.utils.account_resolver import resolve_account
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.date_parser import get_period_range, parse_date

from conftest import TENANT

TODAY = date(2024, 3, 15)


class TestParseMoney:
    """Tests for parse_money."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1234.5", Decimal("1234.5")),
            ("1,234.50", Decimal("1234.50")),
            ("EGP 99", Decimal("99")),
            ("$0.10", Decimal("0.10")),
            ("  7 ", Decimal("7")),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_money(text) == expected

    def test_parentheses_are_negative(self):
        assert parse_money("(12.00)", allow_negative=True) == Decimal("-12.00")

    def test_negative_rejected_by_default(self):
        with pytest.raises(ValidationError, match="must not be negative"):
            parse_money("-5")

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "inf"])
    def test_invalid_amounts(self, text):
        with pytest.raises(ValidationError):
            parse_money(text)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_month_name(self):
        assert parse_date("March 3, 2024") == date(2024, 3, 3)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("today", TODAY),
            ("Yesterday", date(2024, 3, 14)),
            ("start of month", date(2024, 3, 1)),
            ("start  of year", date(2024, 1, 1)),
            ("end of last month", date(2024, 2, 29)),
            ("end of last year", date(2023, 12, 31)),
        ],
    )
    def test_relative_dates(self, text, expected):
        assert parse_date(text, today=TODAY) == expected

    def test_invalid_date(self):
        with pytest.raises(ValidationError, match="Could not parse date"):
            parse_date("not a date")


class TestPeriodRange:
    """Tests for get_period_range."""

    @pytest.mark.parametrize(
        "period, expected",
        [
            ("this-month", (date(2024, 3, 1), TODAY)),
            ("this-year", (date(2024, 1, 1), TODAY)),
            ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
            ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
        ],
    )
    def test_periods(self, period, expected):
        assert get_period_range(period, today=TODAY) == expected

    def test_last_month_in_january(self):
        assert get_period_range("last-month", today=date(2024, 1, 10)) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_unknown_period(self):
        with pytest.raises(ValidationError, match="Unknown period"):
            get_period_range("next-week")


class TestResolveAccount:
    """Tests for resolve_account."""

    def test_by_code_id_and_name(self, account_service, chart):
        assert resolve_account(account_service, TENANT, "1010").id == chart["Cash"].id
        assert resolve_account(account_service, TENANT, chart["Rent"].id).id == chart["Rent"].id
        assert resolve_account(account_service, TENANT, str(chart["Rent"].id)).id == chart["Rent"].id
        assert resolve_account(account_service, TENANT, " sales ").id == chart["Sales"].id

    def test_not_found(self, account_service, chart):
        with pytest.raises(NotFoundError, match="'Petty cash' not found"):
            resolve_account(account_service, TENANT, "Petty cash")
