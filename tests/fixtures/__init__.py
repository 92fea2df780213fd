"""
Test Fixtures and Utilities

Shared test doubles and sample data for the cashbook test suite.

This module provides:
- Recording snapshot sink and failing key-value store doubles
- Sample till sheets, employees and advances

All data is synthetic.
"""
