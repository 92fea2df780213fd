"""
Reconciliation Package

Turns a day's till sheet into expected cash, counted cash and the
difference between them.
"""

from .denominations import denomination_breakdown, total_from_denominations
from .engine import DifferenceStatus, derive_all, difference_status, validate_record
from .models import NOTE_VALUES, Denominations, EmployeeAdvances, OtherExpenses, SalesRecord
from .policy import (
    MaskLargeNegativePolicy,
    PassthroughPolicy,
    PermissiveValidation,
    ReconciliationSettings,
    StrictValidation,
)

__all__ = [
    "NOTE_VALUES",
    "Denominations",
    "EmployeeAdvances",
    "OtherExpenses",
    "SalesRecord",
    "total_from_denominations",
    "denomination_breakdown",
    "derive_all",
    "validate_record",
    "difference_status",
    "DifferenceStatus",
    "ReconciliationSettings",
    "PassthroughPolicy",
    "MaskLargeNegativePolicy",
    "PermissiveValidation",
    "StrictValidation",
]
