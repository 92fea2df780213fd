"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from cashbook.core.config import reload_config
from cashbook.reconciliation.models import SalesRecord
from cashbook.workspace import Workspace
from tests.fixtures.records import sample_sales_record
from tests.fixtures.storage import RecordingSnapshotSink


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point every test at a private test data directory."""
    monkeypatch.setenv("CASHBOOK_ENV", "test")
    monkeypatch.setenv("CASHBOOK_DATA_DIR", str(tmp_path / "cashbook_data"))
    for name in [
        "CASHBOOK_CASH_OFFSET",
        "CASHBOOK_DIFFERENCE_POLICY",
        "CASHBOOK_VALIDATION",
        "CASHBOOK_MAX_DIFFERENCE",
        "CASHBOOK_SNAPSHOTS",
        "LOG_LEVEL",
        "DEBUG",
    ]:
        monkeypatch.delenv(name, raising=False)
    reload_config()


@pytest.fixture
def snapshot_sink() -> RecordingSnapshotSink:
    return RecordingSnapshotSink()


@pytest.fixture
def workspace(snapshot_sink) -> Workspace:
    """In-memory workspace with the default store created and active."""
    ws = Workspace.in_memory(sink=snapshot_sink)
    ws.bootstrap()
    return ws


@pytest.fixture
def sample_record() -> SalesRecord:
    """Sales template row as a record (inputs only, nothing derived yet)."""
    return sample_sales_record()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "csv: Tests for CSV encoding, decoding and import/export")
    config.addinivalue_line("markers", "reconciliation: Tests for the cash reconciliation engine")
