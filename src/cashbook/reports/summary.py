#!/usr/bin/env python3
"""
Sales and Salary Reports

pandas summaries over sales records and advances. Money columns are rupee
floats, converted from paise when the frame is built.
"""

from collections.abc import Iterable

import pandas as pd

from ..reconciliation.engine import difference_status
from ..reconciliation.models import SalesRecord
from ..salary.models import SalaryAdvance

SALES_COLUMNS = [
    "date",
    "opening_cash",
    "total_sales_pos",
    "paytm_sales",
    "total_cash_sales",
    "total_expenses",
    "total_from_denominations",
    "cash_withdrawn",
    "closing_cash",
    "total_cash",
    "cash_difference",
]


def _rupees(paise: int) -> float:
    return paise / 100


def sales_frame(records: Iterable[SalesRecord]) -> pd.DataFrame:
    """One row per record, sorted by date, with a datetime "date" column."""
    rows = [
        {
            "date": record.date.date,
            **{name: _rupees(getattr(record, name).to_paise()) for name in SALES_COLUMNS[1:]},
        }
        for record in records
    ]
    df = pd.DataFrame(rows, columns=SALES_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df.sort_values("date").reset_index(drop=True)


def monthly_sales_summary(records: Iterable[SalesRecord]) -> pd.DataFrame:
    """
    Totals per month.

    Returns:
        DataFrame indexed by "YYYY-MM" with days, total_sales_pos, paytm_sales,
        total_cash_sales, total_expenses, cash_withdrawn and cash_difference
    """
    df = sales_frame(records)
    columns = ["total_sales_pos", "paytm_sales", "total_cash_sales", "total_expenses", "cash_withdrawn", "cash_difference"]
    if df.empty:
        return pd.DataFrame(columns=["days", *columns]).rename_axis("month")

    df["month"] = df["date"].dt.strftime("%Y-%m")
    grouped = df.groupby("month")
    summary = grouped[columns].sum()
    summary.insert(0, "days", grouped.size())
    return summary


def cash_difference_report(records: Iterable[SalesRecord]) -> pd.DataFrame:
    """Per-day cash difference with its success/warning/error status."""
    records = sorted(records, key=lambda r: r.date)
    return pd.DataFrame(
        {
            "date": [record.date.to_iso_string() for record in records],
            "total_cash": [_rupees(record.total_cash.to_paise()) for record in records],
            "total_from_denominations": [_rupees(record.total_from_denominations.to_paise()) for record in records],
            "cash_difference": [_rupees(record.cash_difference.to_paise()) for record in records],
            "status": [difference_status(record.cash_difference).value for record in records],
        },
        columns=["date", "total_cash", "total_from_denominations", "cash_difference", "status"],
    )


def advances_report(advances: Iterable[SalaryAdvance], employee_id: str, month: str | None = None) -> pd.DataFrame:
    """An employee's advances, optionally for one month, newest first."""
    selected = [a for a in advances if a.employee_id == employee_id and (month is None or a.month == month)]
    selected.sort(key=lambda a: a.date, reverse=True)
    return pd.DataFrame(
        {
            "date": [a.date.to_iso_string() for a in selected],
            "type": [a.type.value for a in selected],
            "amount": [_rupees(a.amount.to_paise()) for a in selected],
            "comments": [a.comments for a in selected],
        },
        columns=["date", "type", "amount", "comments"],
    )
