#!/usr/bin/env python3
"""Tests for the shared CSV codec."""

import pytest

from cashbook.core.exceptions import UnknownFormatError
from cashbook.csvio.codec import decode, detect_schema, encode, read_header
from cashbook.csvio.schemas import EMPLOYEE_TEMPLATE, EMPLOYEES, SALES, SALES_TEMPLATE
from tests.fixtures.records import sample_employee


@pytest.mark.csv
class TestEncode:
    """Test CSV serialization."""

    def test_empty_collection_is_header_only(self):
        assert encode([], EMPLOYEES) == "id,name,mobile,joiningDate,employeeNumber\n"

    def test_cells_with_commas_and_quotes_are_quoted(self):
        employee = sample_employee("e1", 'Rao, "Babu"')
        line = encode([employee], EMPLOYEES).splitlines()[1]

        assert line == 'e1,"Rao, ""Babu""",9876543210,2023-01-01,1'

    def test_round_trip_preserves_awkward_text(self):
        employee = sample_employee("e1", "Line\nbreak, comma")
        decoded = decode(encode([employee], EMPLOYEES), EMPLOYEES)

        assert decoded.ok
        assert decoded.entities == [employee]


@pytest.mark.csv
class TestDecode:
    """Test CSV parsing and error reporting."""

    def test_header_only_gives_nothing(self):
        result = decode("id,name,mobile,joiningDate,employeeNumber\n", EMPLOYEES)
        assert result.entities == []
        assert result.ok

    def test_empty_text(self):
        assert decode("", EMPLOYEES).entities == []

    def test_blank_lines_are_skipped(self):
        text = "name,mobile,joiningDate\n\nAsha,98,2023-01-01\n   \nRavi,97,2023-02-01\n"
        result = decode(text, EMPLOYEE_TEMPLATE)

        assert [e.name for e in result.entities] == ["Asha", "Ravi"]
        assert result.line_numbers == [3, 5]

    def test_short_row_is_a_parse_error(self):
        text = "name,mobile,joiningDate\nAsha,98\nRavi,97,2023-02-01\n"
        result = decode(text, EMPLOYEE_TEMPLATE)

        assert [e.name for e in result.entities] == ["Ravi"]
        assert len(result.errors) == 1
        assert result.errors[0].line_number == 2
        assert "expected 3 columns, found 2" in str(result.errors[0])

    def test_bad_number_is_a_parse_error(self):
        header = ",".join(SALES_TEMPLATE.headers)
        row = "2023-04-01,5000,lots,3000" + ",0" * 17
        result = decode(f"{header}\n{row}\n", SALES_TEMPLATE)

        assert result.entities == []
        assert result.errors[0].line_number == 2
        assert "totalSalesPOS" in result.errors[0].message

    def test_fraction_of_a_paisa_is_a_parse_error(self):
        header = ",".join(SALES_TEMPLATE.headers)
        row = "2023-04-01,5000.005,15000,3000" + ",0" * 17
        result = decode(f"{header}\n{row}\n", SALES_TEMPLATE)

        assert result.entities == []
        assert "two decimal places" in result.errors[0].message

    def test_bad_date_is_a_parse_error(self):
        result = decode("name,mobile,joiningDate\nAsha,98,01/01/2023\n", EMPLOYEE_TEMPLATE)
        assert "joiningDate" in result.errors[0].message

    def test_extra_columns_are_ignored(self):
        result = decode("name,mobile,joiningDate\nAsha,98,2023-01-01,surplus\n", EMPLOYEE_TEMPLATE)
        assert result.ok
        assert result.entities[0].name == "Asha"

    def test_byte_order_mark_is_tolerated(self):
        result = decode("\ufeffname,mobile,joiningDate\nAsha,98,2023-01-01\n", EMPLOYEE_TEMPLATE)
        assert [e.name for e in result.entities] == ["Asha"]


@pytest.mark.csv
class TestDetectSchema:
    """Test layout detection by header row."""

    def test_detects_each_layout(self):
        assert detect_schema("name,mobile,joiningDate\n", [EMPLOYEE_TEMPLATE, EMPLOYEES]) is EMPLOYEE_TEMPLATE
        assert detect_schema("id,name,mobile,joiningDate,employeeNumber\n", [EMPLOYEE_TEMPLATE, EMPLOYEES]) is EMPLOYEES
        assert detect_schema(",".join(SALES.headers), [SALES_TEMPLATE, SALES]) is SALES

    def test_header_match_is_case_insensitive(self):
        assert detect_schema("NAME, Mobile ,joiningdate\n", [EMPLOYEE_TEMPLATE]) is EMPLOYEE_TEMPLATE

    def test_unknown_header_raises(self):
        with pytest.raises(UnknownFormatError, match="employee template"):
            detect_schema("foo,bar\n", [EMPLOYEE_TEMPLATE, EMPLOYEES])

    def test_read_header(self):
        assert read_header(" a , b \n1,2\n") == ["a", "b"]
        assert read_header("") == []
