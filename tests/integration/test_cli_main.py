#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import pytest
from click.testing import CliRunner

from cashbook.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        """Test cashbook --help shows all registered subcommands."""
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Shop Cashbook" in result.output

        for command in ["store", "employee", "advance", "salary", "sales", "data", "report"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        """Test cashbook version displays version and author."""
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "Shop Cashbook v0.1.0" in result.output
        assert "Author:" in result.output

    def test_config_command_shows_configuration(self):
        """Test cashbook config displays current configuration."""
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Storage Directory:" in result.output
        assert "Cash Offset: ₹50" in result.output
        assert "Difference Policy: passthrough" in result.output
        assert "Validation: permissive" in result.output

    def test_config_reflects_environment_overrides(self, monkeypatch):
        """Test policy settings come from the environment."""
        monkeypatch.setenv("CASHBOOK_DIFFERENCE_POLICY", "mask")
        monkeypatch.setenv("CASHBOOK_VALIDATION", "strict")
        monkeypatch.setenv("LOG_LEVEL", "INFO")

        result = self.runner.invoke(main, ["--debug", "config"])

        assert result.exit_code == 0
        assert "Difference Policy: mask" in result.output
        assert "Validation: strict" in result.output

    def test_invalid_command_shows_error(self):
        """Test that invalid command shows helpful error."""
        result = self.runner.invoke(main, ["invalid-command"])

        assert result.exit_code != 0
        assert "No such command" in result.output

    def test_verbose_flag_enables_verbose_output(self):
        """Test --verbose flag prints environment details."""
        result = self.runner.invoke(main, ["--verbose", "version"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Data directory:" in result.output

    def test_status_creates_default_store(self):
        """Test the first command run sets up the default store."""
        result = self.runner.invoke(main, ["status"])

        assert result.exit_code == 0
        assert "Active store: Main Store (default-store)" in result.output
        assert "Stores: 1 record(s)" in result.output
        assert "No employees saved yet" in result.output
