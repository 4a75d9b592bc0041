"""
feature_engineering.py — Rolling Temporal Features
===================================================

Derives order-dependent features from the dataset.  Records are taken
in stored order, which is treated as temporal order (one reading per
day); timestamps are not checked for gaps.

Output columns (per record at position i):
    Rainfall_3day_avg  — Mean rainfall over positions i−2 … i.
                         Not applicable for i < 2.
    Rainfall_7day_avg  — Mean rainfall over positions i−6 … i.
                         Not applicable for i < 6.
    WaterLevel_change  — WaterLevel[i] − WaterLevel[i−1].
                         Not applicable for i = 0 or a missing reading.
    WaterLevel_rising  — 1 if WaterLevel_change > 0, else 0.  A change
                         that is not applicable counts as not rising.

A missing or non-numeric reading inside a window makes the whole window
not applicable.  The window is never re-averaged over the readings that
remain.  Not-applicable results are None (NaN inside DataFrames).
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from . import config
from .records import Dataset, FloodRecord

logger = logging.getLogger("analytics.feature_engineering")

RAINFALL_SHORT_AVG = config.FEATURE_NAMES[0]
RAINFALL_LONG_AVG = config.FEATURE_NAMES[1]
WATER_LEVEL_CHANGE = config.FEATURE_NAMES[2]
WATER_LEVEL_RISING = config.FEATURE_NAMES[3]


@dataclass(frozen=True)
class EngineeredRecord:
    """A source record plus its derived features."""

    record: FloodRecord
    rainfall_3day_avg: Optional[float]
    rainfall_7day_avg: Optional[float]
    water_level_change: Optional[float]
    water_level_rising: int

    @property
    def features(self) -> dict:
        return {
            RAINFALL_SHORT_AVG: self.rainfall_3day_avg,
            RAINFALL_LONG_AVG: self.rainfall_7day_avg,
            WATER_LEVEL_CHANGE: self.water_level_change,
            WATER_LEVEL_RISING: self.water_level_rising,
        }

    def as_dict(self) -> dict:
        """Original fields followed by the derived columns."""
        row = self.record.as_dict()
        row.update(self.features)
        return row


def _numeric_series(dataset: Dataset, column: str) -> pd.Series:
    """Float series for a column, all NaN if the column is absent."""
    if dataset.has_column(column):
        return dataset.numeric_series(column)
    if not dataset.is_empty:
        logger.warning(f"Column '{column}' missing from dataset — "
                       "dependent features are not applicable")
    return pd.Series(np.nan, index=range(dataset.row_count),
                     dtype="float64", name=column)


def rolling_mean(series: pd.Series, window: int) -> pd.Series:
    """
    Trailing mean over ``window`` positions.

    NaN for the first window − 1 positions and for any window that
    contains a NaN.
    """
    return series.rolling(window=window, min_periods=window).mean()


def compute_feature_frame(dataset: Dataset) -> pd.DataFrame:
    """
    Derived feature columns aligned with record positions.

    Args:
        dataset: Parsed dataset.

    Returns:
        DataFrame with columns config.FEATURE_NAMES; not-applicable is NaN.
    """
    rainfall = _numeric_series(dataset, config.RAINFALL_COLUMN)
    water_level = _numeric_series(dataset, config.WATER_LEVEL_COLUMN)

    change = water_level.diff()

    frame = pd.DataFrame({
        RAINFALL_SHORT_AVG: rolling_mean(rainfall, config.SHORT_WINDOW),
        RAINFALL_LONG_AVG: rolling_mean(rainfall, config.LONG_WINDOW),
        WATER_LEVEL_CHANGE: change,
        # NaN > 0 is False, so an undefined change is "not rising"
        WATER_LEVEL_RISING: (change > 0).astype(int),
    }, index=range(dataset.row_count))

    logger.debug(f"Computed features for {len(frame)} records")
    return frame


def _optional(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def engineer_features(dataset: Dataset) -> list[EngineeredRecord]:
    """
    Attach rolling features to every record of a dataset.

    Args:
        dataset: Parsed dataset.

    Returns:
        List of EngineeredRecord in record order.
    """
    frame = compute_feature_frame(dataset)
    engineered = []
    for record, row in zip(dataset.records, frame.itertuples(index=False)):
        engineered.append(EngineeredRecord(
            record=record,
            rainfall_3day_avg=_optional(row[0]),
            rainfall_7day_avg=_optional(row[1]),
            water_level_change=_optional(row[2]),
            water_level_rising=int(row[3]),
        ))
    return engineered


def features_to_dataframe(dataset: Dataset) -> pd.DataFrame:
    """
    Original columns followed by the derived feature columns.

    Useful for handing the engineered table to pandas-based consumers.
    """
    base = dataset.to_dataframe()
    features = compute_feature_frame(dataset)
    return pd.concat([base, features], axis=1)
