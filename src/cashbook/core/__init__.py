"""
Core Package

Money and date primitives, configuration, errors and the key-value
storage substrate shared by every repository.
"""

from .config import Config, Environment, get_config
from .dates import FinancialDate
from .exceptions import (
    CashbookError,
    NoActiveStoreError,
    ParseError,
    ReferentialIntegrityError,
    StorageError,
    UnknownFormatError,
    ValidationError,
)
from .money import Money

__all__ = [
    "Money",
    "FinancialDate",
    "Config",
    "Environment",
    "get_config",
    "CashbookError",
    "ParseError",
    "ReferentialIntegrityError",
    "ValidationError",
    "StorageError",
    "NoActiveStoreError",
    "UnknownFormatError",
]
