"""Stores and the active-store context."""

from .context import StoreContext, get_active_store, initialize_default_store
from .models import Store

__all__ = ["Store", "StoreContext", "initialize_default_store", "get_active_store"]
