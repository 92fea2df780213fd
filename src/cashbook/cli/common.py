#!/usr/bin/env python3
"""Helpers shared by the CLI command groups."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ..core.currency import parse_rupees_to_paise
from ..core.dates import FinancialDate
from ..core.exceptions import CashbookError
from ..core.money import Money
from ..workspace import Workspace

F = TypeVar("F", bound=Callable[..., Any])


def get_workspace(ctx: click.Context, bootstrap: bool = True) -> Workspace:
    """
    Workspace for this invocation, created on first use.

    Unless bootstrap is False, the default store is created on first run.
    """
    obj = ctx.ensure_object(dict)
    workspace = obj.get("workspace")
    if workspace is None:
        config = obj.get("config")
        if config is None:
            from ..core.config import get_config

            config = obj["config"] = get_config()
        workspace = Workspace.from_config(config)
        if bootstrap:
            workspace.bootstrap()
        obj["workspace"] = workspace
    return workspace


def cashbook_errors(func: F) -> F:
    """Report cashbook errors as click errors instead of tracebacks."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CashbookError as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]


class MoneyParamType(click.ParamType):
    """Rupee amount such as 1500, 1,500.50 or ₹1500."""

    name = "amount"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Money:
        if isinstance(value, Money):
            return value
        try:
            return Money.from_paise(parse_rupees_to_paise(str(value)))
        except ValueError:
            self.fail(f"{value!r} is not a valid amount", param, ctx)


class DateParamType(click.ParamType):
    """Date in YYYY-MM-DD format."""

    name = "date"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> FinancialDate:
        if isinstance(value, FinancialDate):
            return value
        try:
            return FinancialDate.from_string(str(value))
        except ValueError:
            self.fail(f"Invalid date format: {value}. Use YYYY-MM-DD", param, ctx)


AMOUNT = MoneyParamType()
DATE = DateParamType()
