#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All cashbook calculations use integer paise to avoid floating-point errors.

Currency Units:
- Internal calculations use paise: 100 paise = ₹1.00
- CSV files carry plain decimal rupees: "5000", "12.5"
- Display uses rupee strings: "₹12.50"

Key Principles:
- Never use floating-point arithmetic for money
- Parse file input by splitting strings, never through float
- Reject malformed numbers instead of silently coercing them
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_NUMBER_PATTERN = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")


def parse_rupees_to_paise(rupees_str: str) -> int:
    """
    Parse a rupee string to paise using integer arithmetic only.

    Empty strings are treated as zero. Amounts finer than one paisa are
    rejected; trailing zeros ("12.500") are accepted.

    Args:
        rupees_str: String representation of a rupee amount

    Returns:
        Amount in paise

    Raises:
        ValueError: If the string is not a plain decimal number, or has
            significant digits beyond the second decimal place

    Examples:
        parse_rupees_to_paise("12.34") -> 1234
        parse_rupees_to_paise("₹12.34") -> 1234
        parse_rupees_to_paise("1,234.56") -> 123456
        parse_rupees_to_paise("12") -> 1200
        parse_rupees_to_paise("12.5") -> 1250
    """
    clean = rupees_str.replace("₹", "").replace("Rs.", "").replace(",", "").strip()

    if not clean:
        return 0

    if not _NUMBER_PATTERN.match(clean):
        raise ValueError(f"Not a valid rupee amount: {rupees_str!r}")

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        whole, fraction = clean.split(".", 1)
        rupees = int(whole) if whole else 0
        if len(fraction.rstrip("0")) > 2:
            raise ValueError(f"Rupee amount has more than two decimal places: {rupees_str!r}")
        paise = int(fraction.ljust(2, "0")[:2])
        total = rupees * 100 + paise
    else:
        total = int(clean) * 100

    return -total if is_negative else total


def safe_rupees_to_paise(value: Union[str, int, float, None]) -> int:
    """
    Convert loosely typed input to paise, returning 0 for anything unusable.

    Mirrors the forgiving behaviour of form inputs where an empty or
    garbage field simply counts as zero.

    Examples:
        safe_rupees_to_paise('₹45.99') -> 4599
        safe_rupees_to_paise(12) -> 1200
        safe_rupees_to_paise('') -> 0
        safe_rupees_to_paise(None) -> 0
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value * 100
    if isinstance(value, float):
        return int(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) * 100)
    try:
        return parse_rupees_to_paise(str(value))
    except ValueError:
        return 0


def paise_to_rupees_str(paise: int) -> str:
    """
    Convert paise to a fixed two-decimal rupee string.

    Example:
        paise_to_rupees_str(4599) -> "45.99"
    """
    is_negative = paise < 0
    abs_paise = abs(int(paise))

    rupees = abs_paise // 100
    remainder = abs_paise % 100

    if is_negative:
        return f"-{rupees}.{remainder:02d}"
    return f"{rupees}.{remainder:02d}"


def paise_to_plain_str(paise: int) -> str:
    """
    Convert paise to the shortest exact decimal rupee string.

    Used for CSV cells so whole amounts stay integers ("5000") and
    fractional amounts keep every significant digit ("12.5").

    Examples:
        paise_to_plain_str(500000) -> "5000"
        paise_to_plain_str(1250) -> "12.5"
        paise_to_plain_str(-5) -> "-0.05"
    """
    is_negative = paise < 0
    abs_paise = abs(int(paise))
    rupees, remainder = divmod(abs_paise, 100)

    if remainder == 0:
        text = str(rupees)
    else:
        text = f"{rupees}.{remainder:02d}".rstrip("0")

    return f"-{text}" if is_negative else text


def format_paise(paise: int) -> str:
    """Format paise as a rupee string with ₹ prefix."""
    return f"₹{paise_to_rupees_str(paise)}"


def round_half_up_rupees(numerator: int, denominator: int) -> int:
    """
    Divide two integers and round half-up to a whole number.

    Example:
        round_half_up_rupees(1000000, 45) -> 22222
    """
    if denominator == 0:
        return 0
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
