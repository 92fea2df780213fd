#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Calendar day of a till sheet or advance, plus helpers for the YYYY-MM
month keys that salary sheets are filed under.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True, order=True)
class FinancialDate:
    """
    Immutable calendar date, ordered and hashable.

    Sales records are keyed by to_iso_string(); salary sheets and advances
    are grouped by month_key().
    """

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse a date string.

        Raises:
            ValueError: If the string does not match the format
        """
        return cls(date=datetime.strptime(date_str.strip(), format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Format as YYYY-MM."""
        return self.date.strftime("%Y-%m")

    def __str__(self) -> str:
        return self.to_iso_string()


def validate_month(month: str) -> str:
    """
    Validate a YYYY-MM month key.

    Returns:
        The stripped month key

    Raises:
        ValueError: If the key is not a valid month
    """
    month = month.strip()
    if not _MONTH_PATTERN.match(month):
        raise ValueError(f"Invalid month (expected YYYY-MM): {month!r}")
    return month


def current_month() -> str:
    """Get the current month as YYYY-MM."""
    return FinancialDate.today().month_key()
