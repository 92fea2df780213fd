#!/usr/bin/env python3
"""
Cashbook Exceptions

Every error the cashbook raises derives from CashbookError so the CLI
boundary can report it without crashing the process.
"""


class CashbookError(Exception):
    """Base class for all cashbook errors."""


class ParseError(CashbookError):
    """A CSV row could not be turned into an entity."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(f"line {line_number}: {message}")


class ReferentialIntegrityError(CashbookError):
    """A delete was refused because other records still reference the entity."""

    def __init__(self, entity: str, entity_id: str, references: dict[str, int]):
        self.entity = entity
        self.entity_id = entity_id
        self.references = references
        detail = ", ".join(f"{count} {kind}" for kind, count in references.items())
        super().__init__(f"Cannot delete {entity} {entity_id!r}: still referenced by {detail}")


class ValidationError(CashbookError):
    """A sales record was rejected by the active validation policy."""


class StorageError(CashbookError):
    """The durable key-value store could not be read or written."""


class NoActiveStoreError(CashbookError):
    """An operation needed an active store but none is selected."""


class UnknownFormatError(CashbookError):
    """CSV text does not match any known file layout."""
