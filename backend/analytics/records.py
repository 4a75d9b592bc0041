"""
records.py — Flood Record and Dataset Model
============================================

In-memory model for an ingested flood sensor export.

Cell values are a three-way tagged union expressed with Python types:
    float  — Number (a finite numeric reading)
    str    — Text   (anything that is not a finite number, e.g. a date)
    None   — Missing (the cell was empty or absent)

A FloodRecord is one row of the export.  The semantic fields the
pipeline knows about (rainfall, water level, flood flag, coordinates,
date) are exposed as properties; every other column is kept verbatim in
``extras``.  A Dataset is the ordered, immutable sequence of records
produced by the parser.  Record position encodes temporal order, so the
rolling features depend on it.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

import numpy as np
import pandas as pd

from . import config
from .utils import is_number

logger = logging.getLogger("analytics.records")

Value = Union[float, str, None]


class FloodRecord(Mapping):
    """
    One row of a flood sensor export, keyed by column name.

    Column order follows the header row.  When the header repeats a
    name, reading that name returns the value of its last occurrence.

    Attributes:
        columns (tuple[str, ...]): Header names, duplicates included.
        cells (tuple[Value, ...]): Cell values aligned with ``columns``.
    """

    __slots__ = ("columns", "cells", "_index")

    def __init__(self, columns: tuple, values: tuple, index: dict = None):
        if len(columns) != len(values):
            raise ValueError(
                f"Record has {len(values)} values for {len(columns)} columns"
            )
        self.columns = tuple(columns)
        self.cells = tuple(values)
        self._index = index if index is not None else column_index(self.columns)

    # ── Mapping protocol ──────────────────────────────────────────

    def __getitem__(self, column: str) -> Value:
        return self.cells[self._index[column]]

    def __iter__(self):
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"FloodRecord({dict(self)!r})"

    # ── Semantic fields ──────────────────────────────────────────

    @property
    def date(self) -> Value:
        return self.get(config.DATE_COLUMN)

    @property
    def rainfall_mm(self) -> Value:
        return self.get(config.RAINFALL_COLUMN)

    @property
    def water_level_m(self) -> Value:
        return self.get(config.WATER_LEVEL_COLUMN)

    @property
    def flood_occurrence(self) -> Value:
        return self.get(config.FLOOD_COLUMN)

    @property
    def latitude(self) -> Value:
        return self.get(config.LATITUDE_COLUMN)

    @property
    def longitude(self) -> Value:
        return self.get(config.LONGITUDE_COLUMN)

    @property
    def extras(self) -> dict:
        """Columns outside the known semantic set, in header order."""
        return {name: self[name] for name in self._index
                if name not in config.SEMANTIC_COLUMNS}

    @property
    def is_flooded(self) -> bool:
        return self.flood_occurrence == config.FLOOD_FLAG_VALUE

    def as_dict(self) -> dict:
        return dict(self)


def column_index(columns) -> dict:
    """Map each column name to the position of its last occurrence."""
    index = {}
    for position, name in enumerate(columns):
        # Keys keep first-seen order; a repeated name takes the later position.
        index[name] = position
    return index


@dataclass(frozen=True)
class Dataset:
    """
    Immutable, ordered table of FloodRecords sharing one header.

    Every derived view (statistics, features, anomalies, insights) is
    computed from a Dataset on demand; nothing writes back into it.

    Attributes:
        columns (tuple[str, ...]): Header names in file order.
        records (tuple[FloodRecord, ...]): Rows in file (temporal) order.
    """

    columns: tuple = ()
    records: tuple = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, columns, rows) -> "Dataset":
        """
        Build a Dataset from a header and rows of already-typed values.

        Short rows are padded with Missing; long rows are truncated to
        the header width.
        """
        columns = tuple(columns)
        index = column_index(columns)
        width = len(columns)
        records = []
        for row in rows:
            row = tuple(row)[:width]
            row = row + (None,) * (width - len(row))
            records.append(FloodRecord(columns, row, index))
        return cls(columns=columns, records=tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, position: int) -> FloodRecord:
        return self.records[position]

    @property
    def row_count(self) -> int:
        return len(self.records)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def has_column(self, column: str) -> bool:
        return column in self.columns

    def _require(self, column: str) -> None:
        if column not in self.columns:
            raise KeyError(
                f"Column '{column}' not found in dataset "
                f"(available: {', '.join(self.columns) or 'none'})"
            )

    def column_values(self, column: str) -> list:
        """
        All values of a column in record order, Missing included.

        Raises:
            KeyError: If the column is not part of the header.
        """
        self._require(column)
        return [record[column] for record in self.records]

    def numeric_values(self, column: str) -> list:
        """Numeric (float) values of a column in record order; others skipped."""
        return [v for v in self.column_values(column) if is_number(v)]

    def numeric_series(self, column: str) -> pd.Series:
        """
        Column as a float Series aligned with record positions.

        Missing and Text cells become NaN, which pandas propagates through
        arithmetic and rolling windows.
        """
        values = [v if is_number(v) else np.nan
                  for v in self.column_values(column)]
        return pd.Series(values, dtype="float64", name=column)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Dataset as an object-dtype DataFrame with None for Missing.

        Duplicate header names become duplicate DataFrame columns, each
        holding the last-wins value.
        """
        rows = [[record[name] for name in self.columns] for record in self.records]
        return pd.DataFrame(rows, columns=list(self.columns), dtype=object)

