"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import get_period_range, parse_date
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.account_resolver import resolve_account

__all__ = ["get_period_range", "parse_date", "parse_money", "resolve_account"]
