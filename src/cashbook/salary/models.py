#!/usr/bin/env python3
"""
Salary and Advance Models

Advances are payments made to an employee ahead of salary, either by bank
transfer or in cash. Each month an EmployeeSalary row sets the month's
salary against the advances paid, and carries a running balance forward.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


class AdvanceType(Enum):
    """How an advance was paid."""

    BANK = "bank"
    CASH = "cash"

    @classmethod
    def parse(cls, value: str | None) -> "AdvanceType":
        """Anything other than "bank" is a cash advance."""
        return cls.BANK if (value or "").strip().lower() == "bank" else cls.CASH


@dataclass
class SalaryAdvance:
    """A single advance or transfer paid to an employee."""

    id: str
    date: FinancialDate
    amount: Money
    employee_id: str
    comments: str = ""
    type: AdvanceType = AdvanceType.BANK

    @property
    def key(self) -> str:
        return self.id

    @property
    def month(self) -> str:
        return self.date.month_key()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.to_iso_string(),
            "amount": self.amount.to_paise(),
            "employee_id": self.employee_id,
            "comments": self.comments,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalaryAdvance":
        return cls(
            id=data["id"],
            date=FinancialDate.from_string(data["date"]),
            amount=Money.from_paise(int(data.get("amount") or 0)),
            employee_id=data["employee_id"],
            comments=data.get("comments") or "",
            type=AdvanceType.parse(data.get("type")),
        )


_MONEY_FIELDS: tuple[str, ...] = (
    "salary",
    "total_sales",
    "monthly_bank_transfers",
    "monthly_cash_withdrawn",
    "total_salary_advance",
    "balance_current",
    "balance_till_date",
)


@dataclass
class EmployeeSalary:
    """
    One employee's salary sheet for one month.

    balance_current is advances paid minus salary for the month;
    balance_till_date adds the balance carried from the latest earlier month.
    """

    id: str
    month: str
    employee_id: str
    salary: Money = field(default_factory=Money.zero)
    total_sales: Money = field(default_factory=Money.zero)
    monthly_bank_transfers: Money = field(default_factory=Money.zero)
    monthly_cash_withdrawn: Money = field(default_factory=Money.zero)
    total_salary_advance: Money = field(default_factory=Money.zero)
    balance_current: Money = field(default_factory=Money.zero)
    balance_till_date: Money = field(default_factory=Money.zero)

    @property
    def key(self) -> str:
        return self.id

    @staticmethod
    def make_id(month: str, employee_id: str) -> str:
        return f"{month}-{employee_id}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "month": self.month, "employee_id": self.employee_id}
        for name in _MONEY_FIELDS:
            data[name] = getattr(self, name).to_paise()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmployeeSalary":
        return cls(
            id=data["id"],
            month=data["month"],
            employee_id=data["employee_id"],
            **{name: Money.from_paise(int(data.get(name) or 0)) for name in _MONEY_FIELDS},
        )
