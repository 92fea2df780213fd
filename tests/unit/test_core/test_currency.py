#!/usr/bin/env python3
"""Tests for core currency utilities."""

import pytest

from cashbook.core.currency import (
    format_paise,
    paise_to_plain_str,
    paise_to_rupees_str,
    parse_rupees_to_paise,
    round_half_up_rupees,
    safe_rupees_to_paise,
)


class TestCurrencyConversions:
    """Test core currency conversion functions."""

    @pytest.mark.currency
    def test_parse_rupees_to_paise(self):
        """Test detailed rupee string parsing."""
        assert parse_rupees_to_paise("12.34") == 1234
        assert parse_rupees_to_paise("₹12.34") == 1234
        assert parse_rupees_to_paise("Rs.12.34") == 1234
        assert parse_rupees_to_paise("1,234.56") == 123456
        assert parse_rupees_to_paise("12") == 1200
        assert parse_rupees_to_paise("12.5") == 1250
        assert parse_rupees_to_paise(".5") == 50
        assert parse_rupees_to_paise("-12.34") == -1234

    @pytest.mark.currency
    def test_parse_empty_is_zero(self):
        assert parse_rupees_to_paise("") == 0
        assert parse_rupees_to_paise("   ") == 0

    @pytest.mark.currency
    def test_parse_rejects_fractions_of_a_paisa(self):
        with pytest.raises(ValueError, match="two decimal places"):
            parse_rupees_to_paise("12.345")

    @pytest.mark.currency
    def test_parse_accepts_trailing_zeros(self):
        assert parse_rupees_to_paise("12.500") == 1250

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["abc", "12a", "1.2.3", "--5"])
    def test_parse_rejects_non_numbers(self, text):
        with pytest.raises(ValueError):
            parse_rupees_to_paise(text)

    @pytest.mark.currency
    def test_safe_rupees_to_paise(self):
        """Test safe currency parsing."""
        assert safe_rupees_to_paise("₹45.99") == 4599
        assert safe_rupees_to_paise(12) == 1200
        assert safe_rupees_to_paise(45.99) == 4599
        assert safe_rupees_to_paise("") == 0
        assert safe_rupees_to_paise(None) == 0
        assert safe_rupees_to_paise("invalid") == 0

    @pytest.mark.currency
    def test_paise_to_rupees_str(self):
        assert paise_to_rupees_str(4599) == "45.99"
        assert paise_to_rupees_str(100) == "1.00"
        assert paise_to_rupees_str(5) == "0.05"
        assert paise_to_rupees_str(-4599) == "-45.99"

    @pytest.mark.currency
    def test_paise_to_plain_str(self):
        """CSV form keeps whole amounts integral and never truncates."""
        assert paise_to_plain_str(500000) == "5000"
        assert paise_to_plain_str(1250) == "12.5"
        assert paise_to_plain_str(1205) == "12.05"
        assert paise_to_plain_str(-5) == "-0.05"

    @pytest.mark.currency
    def test_format_paise(self):
        assert format_paise(4599) == "₹45.99"


class TestRounding:
    """Test half-up division used for salary-derived sales."""

    @pytest.mark.currency
    def test_round_half_up(self):
        assert round_half_up_rupees(1000000, 45) == 22222
        assert round_half_up_rupees(45, 90) == 1  # exactly .5 rounds up
        assert round_half_up_rupees(44, 90) == 0

    @pytest.mark.currency
    def test_zero_denominator(self):
        assert round_half_up_rupees(100, 0) == 0
