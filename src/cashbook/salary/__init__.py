"""
Salary Package

Advances paid to employees and the monthly salary sheets that settle them.
"""

from .calculator import build_salary, chain_balances, employee_financial_summary, month_advances
from .models import AdvanceType, EmployeeSalary, SalaryAdvance

__all__ = [
    "AdvanceType",
    "SalaryAdvance",
    "EmployeeSalary",
    "month_advances",
    "build_salary",
    "chain_balances",
    "employee_financial_summary",
]
