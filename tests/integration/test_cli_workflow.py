#!/usr/bin/env python3
"""
Integration tests for a full day-to-day CLI workflow

Every invocation builds a fresh workspace over the same data directory, so
these tests also cover persistence between commands.
"""

import pytest
from click.testing import CliRunner

from cashbook.cli.main import main
from cashbook.core.config import get_config
from cashbook.workspace import Workspace

SALES_ARGS = [
    "sales",
    "record",
    "--date",
    "2023-04-01",
    "--opening-cash",
    "5000",
    "--pos-sales",
    "15000",
    "--paytm",
    "3000",
    "--advance",
    "500",
    "--cleaning",
    "200",
    "--expense",
    "Maintenance=300",
    "--expense2",
    "Supplies=150",
    "--count",
    "500=5",
    "--count",
    "200=10",
    "--count",
    "100=20",
    "--count",
    "50=15",
    "--count",
    "20=10",
    "--count",
    "10=5",
    "--count",
    "5=2",
    "--withdrawn",
    "1000",
]


def _workspace() -> Workspace:
    return Workspace.from_config(get_config())


@pytest.mark.integration
class TestStoreCommands:
    """Test store management through the CLI."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_list_marks_active_store(self):
        """Test the default store is listed and marked active."""
        result = self.runner.invoke(main, ["store", "list"])

        assert result.exit_code == 0
        assert "* default-store  Main Store" in result.output

    def test_add_and_switch_store(self):
        """Test adding a store and making it active."""
        result = self.runner.invoke(main, ["store", "add", "Branch Two", "--id", "branch-2", "--activate"])
        assert result.exit_code == 0
        assert "Active store: Branch Two" in result.output

        listed = self.runner.invoke(main, ["store", "list"])
        assert "* branch-2  Branch Two" in listed.output

        switched = self.runner.invoke(main, ["store", "use", "default-store"])
        assert switched.exit_code == 0
        assert _workspace().active_store_id() == "default-store"

    def test_duplicate_store_id_rejected(self):
        """Test adding a store id that already exists fails."""
        result = self.runner.invoke(main, ["store", "add", "Again", "--id", "default-store"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_store_id_must_be_a_plain_name(self):
        """Test a store id that would leave the export directory is refused."""
        result = self.runner.invoke(main, ["store", "add", "Parent", "--id", ".."])

        assert result.exit_code == 2
        assert "Invalid store id" in result.output
        assert [s.id for s in _workspace().stores.list()] == ["default-store"]

    def test_removing_active_store_leaves_no_active_store(self):
        """Test commands needing a store fail cleanly after removing it."""
        result = self.runner.invoke(main, ["store", "remove", "default-store", "--yes"])
        assert result.exit_code == 0
        assert "No store is active now" in result.output

        followup = self.runner.invoke(main, ["employee", "list"])
        assert followup.exit_code == 1
        assert "No active store" in followup.output

    def test_init_after_setup_is_a_no_op(self):
        """Test store init only acts on a fresh data directory."""
        first = self.runner.invoke(main, ["store", "init"])
        second = self.runner.invoke(main, ["store", "init"])

        assert "Created Main Store (default-store)" in first.output
        assert "nothing to do" in second.output


@pytest.mark.integration
class TestSalesCommands:
    """Test recording and reporting till sheets."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_record_shows_reconciliation(self):
        """Test recording the sample day prints the derived figures."""
        result = self.runner.invoke(main, SALES_ARGS)

        assert result.exit_code == 0, result.output
        assert "Cash Sales:          ₹12000.00" in result.output
        assert "Total Expenses:      ₹1150.00" in result.output
        assert "Counted Cash:        ₹7510.00" in result.output
        assert "Closing Cash:        ₹6510.00" in result.output
        assert "Expected Cash:       ₹15900.00" in result.output
        assert "₹8390.00" in result.output
        assert "error" in result.output

    def test_record_updates_only_given_fields(self):
        """Test re-recording a day keeps fields that were not passed."""
        self.runner.invoke(main, SALES_ARGS)
        result = self.runner.invoke(main, ["sales", "record", "--date", "2023-04-01", "--count", "500=21"])

        assert result.exit_code == 0, result.output
        stored = _workspace().sales.list("default-store")
        assert len(stored) == 1
        assert stored[0].opening_cash.to_plain() == "5000"
        assert stored[0].cash_difference.to_plain() == "390"

    def test_bad_note_count_rejected(self):
        """Test unknown note values are refused before anything is saved."""
        result = self.runner.invoke(main, ["sales", "record", "--date", "2023-04-01", "--count", "2000=1"])

        assert result.exit_code == 2
        assert _workspace().sales.list("default-store") == []

    def test_show_list_status_and_reports(self):
        """Test read-only sales views after recording two days."""
        self.runner.invoke(main, SALES_ARGS)
        self.runner.invoke(main, ["sales", "record", "--date", "2023-04-02", "--pos-sales", "0", "--count", "500=1"])

        shown = self.runner.invoke(main, ["sales", "show", "2023-04-01"])
        assert "Sales record for 2023-04-01" in shown.output

        missing = self.runner.invoke(main, ["sales", "show", "2023-05-01"])
        assert missing.exit_code == 1

        listed = self.runner.invoke(main, ["sales", "list", "--from", "2023-04-02"])
        assert "2023-04-02" in listed.output
        assert "2023-04-01" not in listed.output

        status = self.runner.invoke(main, ["sales", "status"])
        assert "Latest record: 2023-04-02" in status.output

        monthly = self.runner.invoke(main, ["report", "monthly"])
        assert monthly.exit_code == 0
        assert "2023-04" in monthly.output

        differences = self.runner.invoke(main, ["report", "differences", "--status", "error"])
        assert "2023-04-01" in differences.output
        assert "error(s)" in differences.output


@pytest.mark.integration
class TestStaffCommands:
    """Test employees, advances and salary sheets."""

    def setup_method(self):
        self.runner = CliRunner()
        result = self.runner.invoke(
            main, ["employee", "add", "Asha Verma", "--mobile", "9876543210", "--joining-date", "2023-01-01"]
        )
        assert result.exit_code == 0, result.output
        self.employee_id = _workspace().employees.list("default-store")[0].id

    def test_employee_listed(self):
        """Test the new employee is listed with number 1."""
        result = self.runner.invoke(main, ["employee", "list"])

        assert "#1" in result.output
        assert "Asha Verma" in result.output

    def test_advance_and_salary_month(self):
        """Test an advance flows into the month's salary sheet."""
        added = self.runner.invoke(
            main, ["advance", "add", self.employee_id, "2000", "--date", "2024-04-05", "--type", "bank"]
        )
        assert added.exit_code == 0, added.output

        listed = self.runner.invoke(main, ["advance", "list", self.employee_id, "--month", "2024-04"])
        assert "2024-04-05" in listed.output
        assert "1 payment(s)" in listed.output

        computed = self.runner.invoke(
            main, ["salary", "compute", "--month", "2024-04", "--salary", f"{self.employee_id}=9000"]
        )
        assert computed.exit_code == 0, computed.output
        assert "balance ₹-7000.00" in computed.output

        summary = self.runner.invoke(main, ["salary", "summary", self.employee_id])
        assert "Total Salary:   ₹9000.00" in summary.output
        assert "Net Balance:    ₹-7000.00" in summary.output

    def test_non_positive_advance_rejected(self):
        """Test a zero advance is refused."""
        result = self.runner.invoke(main, ["advance", "add", self.employee_id, "0"])

        assert result.exit_code == 1
        assert "valid amount" in result.output

    def test_salary_for_unknown_employee_rejected(self):
        """Test salary assignments must name employees of the store."""
        result = self.runner.invoke(main, ["salary", "compute", "--month", "2024-04", "--salary", "ghost=100"])

        assert result.exit_code == 1
        assert "ghost" in result.output

    def test_employee_with_advances_cannot_be_removed(self):
        """Test referential integrity is reported as a CLI error."""
        self.runner.invoke(main, ["advance", "add", self.employee_id, "500", "--type", "cash"])

        result = self.runner.invoke(main, ["employee", "remove", self.employee_id])

        assert result.exit_code == 1
        assert "Cannot delete employee" in result.output
        assert len(_workspace().employees.list("default-store")) == 1

    def test_salaries_and_advances_export_then_import_into_another_store(self, temp_dir):
        """Test the salaries and advances files load back into a store with the same staff."""
        self.runner.invoke(main, ["advance", "add", self.employee_id, "2000", "--date", "2024-04-05"])
        self.runner.invoke(main, ["salary", "compute", "--month", "2024-04", "--salary", f"{self.employee_id}=9000"])
        out = temp_dir / "out"
        for kind in ("advances", "salaries"):
            exported = self.runner.invoke(main, ["data", "export", kind, "--output-dir", str(out)])
            assert exported.exit_code == 0, exported.output

        workspace = _workspace()
        workspace.employees.upsert("branch-2", workspace.employees.get("default-store", self.employee_id))
        self.runner.invoke(main, ["store", "add", "Branch Two", "--id", "branch-2", "--activate"])
        advances = self.runner.invoke(main, ["data", "import", "advances", str(next(out.glob("advances_*.csv")))])
        salaries = self.runner.invoke(main, ["data", "import", "salaries", str(next(out.glob("salaries_*.csv")))])

        assert "Imported 1 advances" in advances.output
        assert "Imported 1 salary records" in salaries.output
        copied = _workspace()
        assert copied.salaries.list("branch-2") == copied.salaries.list("default-store")
        assert copied.advances.list("branch-2") == copied.advances.list("default-store")

    def test_employees_are_scoped_to_the_active_store(self):
        """Test switching store hides the other store's staff."""
        self.runner.invoke(main, ["store", "add", "Branch Two", "--id", "branch-2", "--activate"])

        result = self.runner.invoke(main, ["employee", "list"])

        assert "No employees yet." in result.output


@pytest.mark.integration
class TestDataCommands:
    """Test CSV templates, import and export."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_template_import_export_cycle(self, temp_dir):
        """Test a template can be imported, re-imported and exported."""
        template = temp_dir / "employee_template.csv"
        written = self.runner.invoke(main, ["data", "template", "employees", "--output", str(template)])
        assert written.exit_code == 0

        first = self.runner.invoke(main, ["data", "import", "employees", str(template)])
        assert "Imported 2 employees" in first.output

        second = self.runner.invoke(main, ["data", "import", "employees", str(template)])
        assert "Imported 0 employees, skipped 2 already present" in second.output

        exported = self.runner.invoke(main, ["data", "export", "employees", "--output-dir", str(temp_dir / "out")])
        assert exported.exit_code == 0
        files = list((temp_dir / "out").glob("employees_*.csv"))
        assert len(files) == 1
        assert "John Doe" in files[0].read_text(encoding="utf-8")

    def test_sales_template_import(self, temp_dir):
        """Test importing the sales template stores a derived record."""
        template = temp_dir / "sales_template.csv"
        self.runner.invoke(main, ["data", "template", "sales", "--output", str(template)])

        result = self.runner.invoke(main, ["data", "import", "sales", str(template)])

        assert result.exit_code == 0
        assert "Imported 1 sales records" in result.output
        assert _workspace().sales.list("default-store")[0].cash_difference.to_plain() == "8390"

    def test_template_printed_without_output(self):
        """Test templates go to stdout by default."""
        result = self.runner.invoke(main, ["data", "template", "employees"])

        assert result.output.startswith("name,mobile,joiningDate\n")

    def test_bad_rows_listed_with_verbose(self, temp_dir):
        """Test skipped rows are only itemised with --verbose."""
        path = temp_dir / "staff.csv"
        path.write_text("name,mobile,joiningDate\nAsha,98,yesterday\n", encoding="utf-8")

        quiet = self.runner.invoke(main, ["data", "import", "employees", str(path)])
        loud = self.runner.invoke(main, ["data", "import", "employees", str(path), "--verbose"])

        assert "Run with --verbose" in quiet.output
        assert "line 2" in loud.output

    def test_unknown_header_and_missing_file(self, temp_dir):
        """Test unreadable imports fail without a traceback."""
        path = temp_dir / "mystery.csv"
        path.write_text("a,b\n1,2\n", encoding="utf-8")

        unknown = self.runner.invoke(main, ["data", "import", "sales", str(path)])
        missing = self.runner.invoke(main, ["data", "import", "sales", str(temp_dir / "nope.csv")])

        assert unknown.exit_code == 1
        assert "Unrecognized CSV header" in unknown.output
        assert missing.exit_code == 1
        assert "Could not read" in missing.output

    def test_snapshots_written_after_changes(self):
        """Test each change publishes a CSV snapshot under the export directory."""
        self.runner.invoke(main, SALES_ARGS)

        export_dir = get_config().storage.export_dir
        assert (export_dir / "stores.csv").exists()
        assert (export_dir / "default-store" / "sales_records.csv").exists()
