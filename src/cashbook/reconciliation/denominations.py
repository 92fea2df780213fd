#!/usr/bin/env python3
"""
Denomination Calculator

Turns a physical note count into a rupee total.
"""

from collections.abc import Mapping
from typing import Any

from ..core.money import Money
from .models import NOTE_VALUES, Denominations


def _as_denominations(counts: Denominations | Mapping[Any, Any] | None) -> Denominations:
    if isinstance(counts, Denominations):
        return counts
    return Denominations.from_mapping(counts)


def total_from_denominations(counts: Denominations | Mapping[Any, Any] | None) -> Money:
    """
    Sum count x face value over every note value.

    Missing counts are treated as 0. Negative counts are not rejected here;
    that is left to the validation policy.

    Example:
        >>> total_from_denominations({"d500": 2, "d100": 1})
        Money(paise=110000)
    """
    denominations = _as_denominations(counts)
    rupees = sum(note * denominations.count_for(note) for note in NOTE_VALUES)
    return Money.from_rupees(rupees)


def denomination_breakdown(counts: Denominations | Mapping[Any, Any] | None) -> list[tuple[int, int, Money]]:
    """
    Line totals for display, largest note first.

    Returns:
        List of (face value, count, subtotal) tuples
    """
    denominations = _as_denominations(counts)
    return [
        (note, count, Money.from_rupees(note * count))
        for note, count in denominations.counts().items()
    ]
