#!/usr/bin/env python3
"""Tests for starter CSV templates."""

import pytest

from cashbook.csvio.codec import decode
from cashbook.csvio.schemas import EMPLOYEE_TEMPLATE, SALES_TEMPLATE
from cashbook.csvio.templates import TEMPLATE_FILENAMES, employee_template, sales_template, template_for


@pytest.mark.csv
class TestTemplates:
    """Templates must import cleanly with their own layouts."""

    def test_employee_template_text(self):
        assert employee_template() == (
            "name,mobile,joiningDate\nJohn Doe,9876543210,2023-01-01\nJane Smith,8765432109,2023-02-15"
        )

    def test_sales_template_decodes(self):
        result = decode(sales_template(), SALES_TEMPLATE)

        assert result.ok
        assert result.entities[0].date.to_iso_string() == "2023-04-01"

    def test_employee_template_decodes(self):
        result = decode(employee_template(), EMPLOYEE_TEMPLATE)
        assert [e.mobile for e in result.entities] == ["9876543210", "8765432109"]

    def test_template_for(self):
        assert template_for("sales") == sales_template()
        assert set(TEMPLATE_FILENAMES) == {"employees", "sales"}
        with pytest.raises(ValueError):
            template_for("stores")
