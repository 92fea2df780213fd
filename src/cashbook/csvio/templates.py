#!/usr/bin/env python3
"""Starter CSV files handed to users who want to fill in data by hand."""

from .schemas import EMPLOYEE_TEMPLATE, SALES_TEMPLATE

TEMPLATE_FILENAMES = {
    "employees": "employee_template.csv",
    "sales": "sales_template.csv",
}


def employee_template() -> str:
    rows = [
        ",".join(EMPLOYEE_TEMPLATE.headers),
        "John Doe,9876543210,2023-01-01",
        "Jane Smith,8765432109,2023-02-15",
    ]
    return "\n".join(rows)


def sales_template() -> str:
    rows = [
        ",".join(SALES_TEMPLATE.headers),
        "2023-04-01,5000,15000,3000,500,0,0,0,200,Maintenance,300,Supplies,150,5,10,20,15,10,5,2,1000",
    ]
    return "\n".join(rows)


def template_for(kind: str) -> str:
    """Template text by kind ("employees" or "sales")."""
    if kind == "employees":
        return employee_template()
    if kind == "sales":
        return sales_template()
    raise ValueError(f"Unknown template: {kind!r}")
