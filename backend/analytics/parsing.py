"""
parsing.py — Delimited Text to Typed Records
=============================================

Responsibilities in the flood analytics pipeline:
1. Split an uploaded export into non-empty lines.
2. Take the first line as the ordered column set.
3. Split every following line on the delimiter and map cell i to column i.
4. Infer a type for every cell: Number, Text, or Missing.

Parsing never fails on content.  A blank file yields an empty Dataset,
a header-only file yields a Dataset with columns and no records, short
rows are padded with Missing, and cells that are not finite numbers are
kept as Text so they drop out of numeric aggregates downstream.

Limitation: quoted fields are not supported.  A delimiter inside quotes
still splits the cell, and a newline inside quotes ends the row.
"""

import logging
import math
import re

from . import config
from .records import Dataset, Value

logger = logging.getLogger("analytics.parsing")

# Decimal literal with optional sign, fraction and exponent: "12", "-0.5", ".5", "1e3"
_NUMERIC_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class RecordParser:
    """
    Parser for delimiter-separated flood sensor exports.

    Attributes:
        delimiter (str): Cell separator.  Defaults to config.CSV_DELIMITER.
    """

    def __init__(self, delimiter: str = None):
        self.delimiter = delimiter or config.CSV_DELIMITER

    # ── Cell typing ───────────────────────────────────────────────

    @staticmethod
    def parse_cell(raw: str) -> Value:
        """
        Infer the value of one raw cell.

        Empty cells are Missing (None), never zero.  Finite decimal
        literals become floats.  Anything else, including "NaN" and
        "inf", is kept as the trimmed text.

        Args:
            raw: Cell text as it appears in the file (may be None).

        Returns:
            float, str, or None.
        """
        if raw is None:
            return None
        cell = raw.strip()
        if not cell:
            return None
        if _NUMERIC_LITERAL.fullmatch(cell):
            number = float(cell)
            if math.isfinite(number):
                return number
        return cell

    # ── Lines and rows ────────────────────────────────────────────

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """
        Split text on line feeds only (a trailing carriage return is
        dropped), discarding blank and whitespace-only lines.  Other
        Unicode line breaks such as form feeds stay inside their cell.
        """
        if text.startswith("\ufeff"):
            text = text[1:]
        lines = (line.rstrip("\r") for line in text.split("\n"))
        return [line for line in lines if line.strip()]

    def parse_header(self, line: str) -> tuple:
        """Trimmed column names in file order, duplicates kept."""
        return tuple(name.strip() for name in line.split(self.delimiter))

    def parse_row(self, line: str, width: int) -> tuple:
        """
        Typed values for one data line, fitted to the header width.

        Missing trailing cells are padded with None; cells beyond the
        header have no column and are dropped.
        """
        cells = line.split(self.delimiter)
        values = [self.parse_cell(cell) for cell in cells[:width]]
        values.extend([None] * (width - len(values)))
        return tuple(values)

    # ── Entry points ──────────────────────────────────────────────

    def parse(self, text: str) -> Dataset:
        """
        Parse the full text of one export into a Dataset.

        Args:
            text: File content.

        Returns:
            Dataset in file order.  Empty if the text has no lines.
        """
        lines = self.split_lines(text or "")
        if not lines:
            logger.info("Empty input — returning an empty dataset")
            return Dataset()

        columns = self.parse_header(lines[0])
        width = len(columns)

        if len(set(columns)) < width:
            logger.warning("Header repeats column names; the last occurrence "
                           "wins when a column is read by name")

        rows = []
        overlong = 0
        for line in lines[1:]:
            if line.count(self.delimiter) + 1 > width:
                overlong += 1
            rows.append(self.parse_row(line, width))

        if overlong:
            logger.warning(f"{overlong} rows had more cells than the header "
                           f"({width} columns); extra cells were dropped")

        dataset = Dataset.from_rows(columns, rows)
        logger.info(f"Parsed {dataset.row_count} records, "
                    f"{dataset.column_count} columns")
        return dataset

    def load(self, path: str, encoding: str = "utf-8") -> Dataset:
        """
        Read and parse an export from disk.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(path, encoding=encoding, errors="replace") as fh:
            text = fh.read()
        logger.info(f"Loaded {len(text)} characters from {path}")
        return self.parse(text)


def parse_dataset(text: str, delimiter: str = None) -> Dataset:
    """Parse export text with a default-configured RecordParser."""
    return RecordParser(delimiter).parse(text)


def load_dataset(path: str, delimiter: str = None) -> Dataset:
    """Read and parse an export file with a default-configured RecordParser."""
    return RecordParser(delimiter).load(path)
