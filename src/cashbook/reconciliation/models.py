#!/usr/bin/env python3
"""
Daily Sales Record Models

A SalesRecord is one day's till sheet for one store: the cash the day
opened with, what the POS says was sold, money paid out of the till, and
the physical note count at close. Derived figures are filled in only by
engine.derive_all().
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money

# Face values of the notes counted at close, largest first
NOTE_VALUES: tuple[int, ...] = (500, 200, 100, 50, 20, 10, 5)

ADVANCE_SLOTS: tuple[str, ...] = ("employee1", "employee2", "employee3", "employee4")


@dataclass
class Denominations:
    """Count of notes of each face value found in the till."""

    d500: int = 0
    d200: int = 0
    d100: int = 0
    d50: int = 0
    d20: int = 0
    d10: int = 0
    d5: int = 0

    @classmethod
    def from_mapping(cls, counts: Mapping[Any, Any] | None) -> "Denominations":
        """
        Build from a mapping keyed by "d500"-style names or face values.

        Missing or empty counts become 0; keys that are not one of the
        fixed note values are ignored.

        Example:
            >>> Denominations.from_mapping({"d500": 2, 100: 1}).d100
            1
        """
        if counts is None:
            return cls()
        values: dict[str, int] = {}
        for key, count in counts.items():
            name = str(key)
            if not name.startswith("d"):
                name = f"d{name}"
            if name in cls.__dataclass_fields__:
                values[name] = int(count or 0)
        return cls(**values)

    def count_for(self, note: int) -> int:
        """Get the count for a face value."""
        return getattr(self, f"d{note}")

    def counts(self) -> dict[int, int]:
        """Counts keyed by face value, largest note first."""
        return {note: self.count_for(note) for note in NOTE_VALUES}

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class EmployeeAdvances:
    """Cash handed to up to four employees out of the till during the day."""

    employee1: Money = field(default_factory=Money.zero)
    employee2: Money = field(default_factory=Money.zero)
    employee3: Money = field(default_factory=Money.zero)
    employee4: Money = field(default_factory=Money.zero)

    def amounts(self) -> list[Money]:
        return [getattr(self, slot) for slot in ADVANCE_SLOTS]

    def to_dict(self) -> dict[str, int]:
        return {slot: getattr(self, slot).to_paise() for slot in ADVANCE_SLOTS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmployeeAdvances":
        return cls(**{slot: Money.from_paise(int(data.get(slot) or 0)) for slot in ADVANCE_SLOTS})


@dataclass
class OtherExpenses:
    """Two free-form expense lines paid from the till."""

    name1: str = ""
    amount1: Money = field(default_factory=Money.zero)
    name2: str = ""
    amount2: Money = field(default_factory=Money.zero)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name1": self.name1,
            "amount1": self.amount1.to_paise(),
            "name2": self.name2,
            "amount2": self.amount2.to_paise(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OtherExpenses":
        return cls(
            name1=data.get("name1") or "",
            amount1=Money.from_paise(int(data.get("amount1") or 0)),
            name2=data.get("name2") or "",
            amount2=Money.from_paise(int(data.get("amount2") or 0)),
        )


DERIVED_FIELDS: tuple[str, ...] = (
    "total_expenses",
    "total_from_denominations",
    "closing_cash",
    "total_cash_sales",
    "total_cash",
    "cash_difference",
)

_MONEY_INPUTS: tuple[str, ...] = (
    "opening_cash",
    "total_sales_pos",
    "paytm_sales",
    "cleaning_expenses",
    "cash_withdrawn",
)


@dataclass
class SalesRecord:
    """
    One store's till sheet for one calendar day.

    Input fields are entered by staff; the fields listed in DERIVED_FIELDS
    are always recomputed from them and never edited directly.
    """

    date: FinancialDate
    store_id: str = ""
    opening_cash: Money = field(default_factory=Money.zero)
    total_sales_pos: Money = field(default_factory=Money.zero)
    # Portion of POS sales paid electronically
    paytm_sales: Money = field(default_factory=Money.zero)
    employee_advances: EmployeeAdvances = field(default_factory=EmployeeAdvances)
    cleaning_expenses: Money = field(default_factory=Money.zero)
    other_expenses: OtherExpenses = field(default_factory=OtherExpenses)
    denominations: Denominations = field(default_factory=Denominations)
    # Cash removed from the till at close
    cash_withdrawn: Money = field(default_factory=Money.zero)

    # Derived
    total_expenses: Money = field(default_factory=Money.zero)
    total_from_denominations: Money = field(default_factory=Money.zero)
    closing_cash: Money = field(default_factory=Money.zero)
    total_cash_sales: Money = field(default_factory=Money.zero)
    total_cash: Money = field(default_factory=Money.zero)
    cash_difference: Money = field(default_factory=Money.zero)

    @classmethod
    def empty(cls, date: FinancialDate | None = None, store_id: str = "") -> "SalesRecord":
        """Blank till sheet for a day (defaults to today)."""
        return cls(date=date or FinancialDate.today(), store_id=store_id)

    @property
    def key(self) -> str:
        """Natural key within a store partition."""
        return self.date.to_iso_string()

    def derived_values(self) -> dict[str, Money]:
        return {name: getattr(self, name) for name in DERIVED_FIELDS}

    def input_values(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in DERIVED_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (money in paise)."""
        data: dict[str, Any] = {
            "date": self.date.to_iso_string(),
            "store_id": self.store_id,
            "employee_advances": self.employee_advances.to_dict(),
            "other_expenses": self.other_expenses.to_dict(),
            "denominations": self.denominations.to_dict(),
        }
        for name in _MONEY_INPUTS + DERIVED_FIELDS:
            data[name] = getattr(self, name).to_paise()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalesRecord":
        """Create SalesRecord from dictionary."""
        money = {name: Money.from_paise(int(data.get(name) or 0)) for name in _MONEY_INPUTS + DERIVED_FIELDS}
        return cls(
            date=FinancialDate.from_string(data["date"]),
            store_id=data.get("store_id") or "",
            employee_advances=EmployeeAdvances.from_dict(data.get("employee_advances") or {}),
            other_expenses=OtherExpenses.from_dict(data.get("other_expenses") or {}),
            denominations=Denominations.from_mapping(data.get("denominations")),
            **money,
        )
