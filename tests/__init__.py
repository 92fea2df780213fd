"""
Test Suite for the Shop Cashbook

Test Structure:
- fixtures/: Shared test doubles and sample records
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI workflow tests

Test Categories:
- Core utilities (currency, money, dates, config, storage)
- Cash reconciliation
- CSV import/export
- Stores, employees, salaries and sales records

Test Data:
All names, numbers and amounts are synthetic.
"""
