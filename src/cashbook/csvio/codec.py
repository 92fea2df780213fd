#!/usr/bin/env python3
"""
CSV Codec

One quote-aware tokenizer and serializer shared by every entity type.
Entity layouts are described by CsvSchema objects (see schemas.py); this
module never splits lines by hand.

Decoding is positional: the first row is treated as a header and skipped,
and cells are read by column index. Malformed rows are reported as
ParseError values and skipped so one bad line never aborts an import.
"""

import csv
import io
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..core.dates import FinancialDate
from ..core.exceptions import ParseError, UnknownFormatError
from ..core.money import Money

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CsvSchema(Generic[T]):
    """
    Fixed CSV layout for one entity type.

    Attributes:
        name: Short layout name used in logs and errors
        headers: Header cells, in column order
        to_row: Converts an entity to its row cells
        from_row: Builds an entity from row cells; raises ValueError on bad data
    """

    name: str
    headers: tuple[str, ...]
    to_row: Callable[[T], list[str]]
    from_row: Callable[[list[str]], T]

    @property
    def width(self) -> int:
        return len(self.headers)


@dataclass
class DecodeResult(Generic[T]):
    """Entities parsed from CSV text plus the rows that could not be parsed."""

    entities: list[T] = field(default_factory=list)
    # Source line of each entity, parallel to entities
    line_numbers: list[int] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _rows(text: str) -> Iterable[tuple[int, list[str]]]:
    """Yield (line_number, cells) for every non-blank CSV record."""
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    for cells in reader:
        if not cells or all(not cell.strip() for cell in cells):
            continue
        yield reader.line_num, cells


def encode(entities: Iterable[T], schema: CsvSchema[T]) -> str:
    """
    Serialize entities to CSV text with a header row.

    Cells containing commas, quotes or newlines are quoted; everything else
    is written verbatim.

    Args:
        entities: Entities to serialize
        schema: Layout to serialize with

    Returns:
        CSV text terminated by a newline
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(schema.headers)
    for entity in entities:
        writer.writerow(schema.to_row(entity))
    return buffer.getvalue()


def decode(text: str, schema: CsvSchema[T]) -> DecodeResult[T]:
    """
    Parse CSV text into entities.

    Args:
        text: CSV text, header row first
        schema: Layout to parse with

    Returns:
        DecodeResult holding parsed entities and per-row ParseErrors
    """
    result: DecodeResult[T] = DecodeResult()
    rows = iter(_rows(text))

    if next(rows, None) is None:
        return result

    for line_number, cells in rows:
        if len(cells) < schema.width:
            error = ParseError(line_number, f"expected {schema.width} columns, found {len(cells)}")
        else:
            try:
                result.entities.append(schema.from_row(cells[: schema.width]))
                result.line_numbers.append(line_number)
                continue
            except (ValueError, KeyError) as e:
                error = ParseError(line_number, str(e))

        logger.warning("Skipping %s row: %s", schema.name, error)
        result.errors.append(error)

    return result


def read_header(text: str) -> list[str]:
    """Return the stripped header cells of CSV text (empty list for empty text)."""
    first = next(iter(_rows(text)), None)
    if first is None:
        return []
    return [cell.strip() for cell in first[1]]


def detect_schema(text: str, candidates: Sequence[CsvSchema]) -> CsvSchema:
    """
    Pick the layout whose header row matches the text's header row.

    Raises:
        UnknownFormatError: If no candidate matches
    """
    header = read_header(text)
    for schema in candidates:
        if [h.lower() for h in header] == [h.lower() for h in schema.headers]:
            return schema
    names = ", ".join(schema.name for schema in candidates)
    raise UnknownFormatError(f"Unrecognized CSV header {header!r}; expected one of: {names}")


# Cell helpers shared by the entity schemas


def money_cell(value: Money) -> str:
    """Serialize Money as plain decimal rupees."""
    return value.to_plain()


def parse_money(cell: str, column: str) -> Money:
    """Parse a rupee cell; empty cells are ₹0."""
    try:
        return Money.from_rupees(cell)
    except ValueError as e:
        raise ValueError(f"{column}: {e}") from None


def parse_count(cell: str, column: str) -> int:
    """Parse an integer count cell; empty cells are 0."""
    cell = cell.strip()
    if not cell:
        return 0
    try:
        return int(cell)
    except ValueError:
        raise ValueError(f"{column}: not a whole number: {cell!r}") from None


def parse_date(cell: str, column: str) -> FinancialDate:
    """Parse a YYYY-MM-DD cell."""
    try:
        return FinancialDate.from_string(cell)
    except ValueError:
        raise ValueError(f"{column}: not a date: {cell!r}") from None


def parse_bool(cell: str) -> bool:
    """Parse a true/false cell."""
    return cell.strip().lower() == "true"


def bool_cell(value: bool) -> str:
    return "true" if value else "false"
