"""
descriptive.py — Per-Column Descriptive Statistics
===================================================

Computes count, mean, standard deviation, min, median and max for the
numeric values of a column.

Conventions (kept identical to the dashboard this pipeline replaces):
- Standard deviation is the POPULATION std (divide by count, not count − 1).
- Median is the element at index count // 2 of the ascending values,
  i.e. the upper of the two central values for even counts; the two
  central values are never averaged.  The index rule is what is
  followed: [1, 2, 3, 4] gives 3, even where this element is loosely
  described as the "lower-middle" one.
- Missing and Text cells are ignored.  A column with no numeric values
  has no statistics (None), never NaN.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np
import pandas as pd

from . import config
from .records import Dataset
from .utils import is_number

logger = logging.getLogger("analytics.descriptive")


@dataclass(frozen=True)
class SummaryStatistics:
    count: int
    mean: float
    std: float
    min: float
    median: float
    max: float

    def as_dict(self) -> dict:
        return asdict(self)


def summarize_values(values) -> Optional[SummaryStatistics]:
    """
    Descriptive statistics of a list of floats.

    Args:
        values: Numeric values in any order.

    Returns:
        SummaryStatistics, or None if ``values`` is empty.
    """
    if len(values) == 0:
        return None

    # Sorting first fixes the summation order, so the result does not
    # depend on record order down to the last bit.
    ordered = np.sort(np.asarray(values, dtype=np.float64))
    count = len(ordered)

    if ordered[0] == ordered[-1]:
        mean = float(ordered[0])
        std = 0.0
    else:
        mean = float(ordered.mean())
        std = float(ordered.std(ddof=0))

    return SummaryStatistics(
        count=count,
        mean=mean,
        std=std,
        min=float(ordered[0]),
        median=float(ordered[count // 2]),
        max=float(ordered[-1]),
    )


def stats(dataset: Dataset, column: str) -> Optional[SummaryStatistics]:
    """
    Descriptive statistics of one dataset column.

    Args:
        dataset: Parsed dataset.
        column: Column name from the header.

    Returns:
        SummaryStatistics, or None when the column has no numeric values.

    Raises:
        KeyError: If the column is not in the dataset header.
    """
    values = dataset.numeric_values(column)
    result = summarize_values(values)
    if result is None:
        logger.debug(f"No numeric values in column '{column}'")
    return result


def numeric_columns(dataset: Dataset) -> list[str]:
    """Columns (header order, no duplicates) holding at least one Number."""
    names = list(dict.fromkeys(dataset.columns))
    return [name for name in names
            if any(is_number(record[name]) for record in dataset.records)]


def describe(dataset: Dataset) -> dict:
    """Statistics for every numeric column, keyed by column name."""
    return {name: stats(dataset, name) for name in numeric_columns(dataset)}


def statistics_table(dataset: Dataset) -> pd.DataFrame:
    """
    Statistics table with one row per statistic and one column per
    numeric column, in the order of config.STAT_NAMES.

    An empty dataset yields an empty table that still carries the
    statistic index.
    """
    table = {
        name: [getattr(summary, stat) for stat in config.STAT_NAMES]
        for name, summary in describe(dataset).items()
    }
    return pd.DataFrame(table, index=list(config.STAT_NAMES), dtype="float64")
