#!/usr/bin/env python3
"""
Money Primitive Type

Immutable rupee value wrapper that uses integer paise internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass

from .currency import (
    paise_to_plain_str,
    paise_to_rupees_str,
    parse_rupees_to_paise,
    safe_rupees_to_paise,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in paise (INR).

    Supports both positive and negative amounts; a negative cash
    difference is a normal outcome of reconciliation.

    Examples:
        >>> sales = Money.from_rupees(15000)
        >>> str(sales)
        '₹15000.00'

        >>> paytm = Money.from_rupees("3000")
        >>> str(sales - paytm)
        '₹12000.00'

        >>> Money.from_paise(-1250).to_plain()
        '-12.5'
    """

    paise: int

    @classmethod
    def zero(cls) -> "Money":
        """Return ₹0."""
        return cls(paise=0)

    @classmethod
    def from_paise(cls, paise: int) -> "Money":
        """Create Money from paise."""
        return cls(paise=paise)

    @classmethod
    def from_rupees(cls, rupees: str | int) -> "Money":
        """
        Parse from rupee string like '₹123.45' or integer rupees.

        Args:
            rupees: String like "12.34" or integer like 12

        Returns:
            Money object

        Raises:
            ValueError: If a string is not a valid amount
        """
        if isinstance(rupees, int):
            return cls(paise=rupees * 100)
        return cls(paise=parse_rupees_to_paise(rupees))

    @classmethod
    def coerce(cls, value: "Money | str | int | float | None") -> "Money":
        """Convert loosely typed input to Money, treating unusable values as zero."""
        if isinstance(value, Money):
            return value
        return cls(paise=safe_rupees_to_paise(value))

    def to_paise(self) -> int:
        """Get value in paise."""
        return self.paise

    def to_plain(self) -> str:
        """Get shortest exact decimal rupee string (CSV form)."""
        return paise_to_plain_str(self.paise)

    def to_rupees(self) -> str:
        """Get formatted rupee string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(paise=abs(self.paise))

    def is_zero(self) -> bool:
        """Check whether the amount is exactly zero."""
        return self.paise == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(paise=self.paise + other.paise)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(paise=self.paise - other.paise)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(paise=self.paise * scalar)

    def __neg__(self) -> "Money":
        """Negate Money."""
        return Money(paise=-self.paise)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.paise == other.paise

    def __hash__(self) -> int:
        return hash(self.paise)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.paise < other.paise

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.paise <= other.paise

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.paise > other.paise

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.paise >= other.paise

    def __str__(self) -> str:
        """Format as rupee string."""
        return f"₹{paise_to_rupees_str(self.paise)}"

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(paise={self.paise})"


def money_sum(amounts) -> Money:
    """Sum an iterable of Money values (start at ₹0)."""
    total = Money.zero()
    for amount in amounts:
        total = total + amount
    return total
