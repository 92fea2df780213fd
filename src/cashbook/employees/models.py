#!/usr/bin/env python3
"""Employee model."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate


@dataclass
class Employee:
    """A member of shop staff, scoped to one store."""

    id: str
    name: str
    mobile: str = ""
    joining_date: FinancialDate = field(default_factory=FinancialDate.today)
    employee_number: int = 1

    @property
    def key(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "joining_date": self.joining_date.to_iso_string(),
            "employee_number": self.employee_number,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Employee":
        return cls(
            id=data["id"],
            name=data["name"],
            mobile=data.get("mobile") or "",
            joining_date=FinancialDate.from_string(data["joining_date"]),
            employee_number=int(data.get("employee_number") or 1),
        )
