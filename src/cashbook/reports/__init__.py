"""
Reports Package

pandas summaries of sales records and salary advances.
"""

from .summary import advances_report, cash_difference_report, monthly_sales_summary, sales_frame

__all__ = ["sales_frame", "monthly_sales_summary", "cash_difference_report", "advances_report"]
