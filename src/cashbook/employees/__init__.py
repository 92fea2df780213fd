"""Store staff."""

from .models import Employee

__all__ = ["Employee"]
