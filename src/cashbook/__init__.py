"""
Shop Cashbook - Daily Cash Reconciliation for Retail Stores

Keeps the daily till sheet of one or more shops: opening cash, POS and
Paytm sales, cash paid out, and the note count at close. Reconciles the
expected cash against the counted cash and flags the difference.

Domain Packages:
- core: Money, dates, configuration, key-value storage, repository base
- reconciliation: Denomination totals and the reconciliation engine
- stores: Stores and the active-store context
- employees: Store staff
- salary: Advances, monthly salary sheets and balance carry-forward
- sales: Daily sales record repository
- csvio: CSV codec, snapshots, import/export and templates
- reports: pandas summaries
- cli: Command-line interface

Example Usage:
    from cashbook import Money, SalesRecord, derive_all
    from cashbook.workspace import Workspace
"""

__version__ = "0.1.0"
__author__ = "Shop Cashbook Contributors"

from .core.config import Environment, get_config
from .core.currency import format_paise, paise_to_plain_str, parse_rupees_to_paise
from .core.dates import FinancialDate
from .core.money import Money
from .reconciliation.engine import DifferenceStatus, derive_all, difference_status
from .reconciliation.models import Denominations, SalesRecord

__all__ = [
    # Currency
    "Money",
    "parse_rupees_to_paise",
    "paise_to_plain_str",
    "format_paise",
    "FinancialDate",
    # Reconciliation
    "SalesRecord",
    "Denominations",
    "derive_all",
    "difference_status",
    "DifferenceStatus",
    # Configuration
    "get_config",
    "Environment",
]
