"""
insights.py — Aggregate Flood Risk Insights
============================================

Scalar summary metrics over the full dataset:

    mean_rainfall     — mean of the present rainfall readings
    flood_rate        — 100 × (records with FloodOccurrence = 1) / N
    max/min_rainfall  — extrema of the present rainfall readings
    mean_water_level  — sum of present water levels divided by either the
                        total record count ("records", the default, which
                        reproduces the dashboard this pipeline replaces)
                        or the number of present readings ("present")

The two water-level conventions diverge whenever some records have no
water-level reading: "records" treats those records as contributing 0.
Every metric is None (not applicable) when its denominator would be
zero.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np

from . import config
from .descriptive import summarize_values
from .records import Dataset

logger = logging.getLogger("analytics.insights")

WATER_LEVEL_BASES = ("records", "present")


@dataclass(frozen=True)
class InsightsSummary:
    record_count: int
    flood_count: int
    mean_rainfall: Optional[float]
    flood_rate: Optional[float]
    max_rainfall: Optional[float]
    min_rainfall: Optional[float]
    mean_water_level: Optional[float]
    water_level_basis: str = "records"

    @property
    def normal_count(self) -> int:
        return self.record_count - self.flood_count

    @property
    def rainfall_mean_to_max(self) -> Optional[float]:
        """Mean rainfall as a percentage of the maximum (progress-bar width)."""
        if self.mean_rainfall is None or not self.max_rainfall:
            return None
        return self.mean_rainfall / self.max_rainfall * 100.0

    def as_dict(self) -> dict:
        data = asdict(self)
        data["normal_count"] = self.normal_count
        data["rainfall_mean_to_max"] = self.rainfall_mean_to_max
        return data


def check_water_level_basis(basis: str) -> str:
    """Return ``basis`` if it is a known convention, else raise ValueError."""
    if basis not in WATER_LEVEL_BASES:
        raise ValueError(
            f"Unknown water level basis '{basis}' "
            f"(expected one of {', '.join(WATER_LEVEL_BASES)})"
        )
    return basis


def _present(dataset: Dataset, column: str) -> list:
    if not dataset.has_column(column):
        return []
    return dataset.numeric_values(column)


def mean_water_level(dataset: Dataset, basis: str = None) -> Optional[float]:
    """
    Mean water level under the chosen divisor convention.

    Args:
        dataset: Parsed dataset.
        basis: "records" or "present".  Defaults to
            config.WATER_LEVEL_MEAN_BASIS.

    Returns:
        Mean water level, or None if there are no readings.

    Raises:
        ValueError: If ``basis`` is not a known convention.
    """
    basis = check_water_level_basis(basis or config.WATER_LEVEL_MEAN_BASIS)

    present = _present(dataset, config.WATER_LEVEL_COLUMN)
    if not present or dataset.is_empty:
        return None

    total = float(np.sum(np.sort(present)))
    divisor = dataset.row_count if basis == "records" else len(present)
    return total / divisor


def compute_insights(dataset: Dataset, water_level_basis: str = None) -> InsightsSummary:
    """
    Aggregate the dataset into an InsightsSummary.

    Args:
        dataset: Parsed dataset.
        water_level_basis: Divisor convention for the mean water level.

    Returns:
        InsightsSummary; metrics without data are None.
    """
    basis = water_level_basis or config.WATER_LEVEL_MEAN_BASIS
    count = dataset.row_count

    rainfall = summarize_values(_present(dataset, config.RAINFALL_COLUMN))
    flood_count = sum(1 for record in dataset.records if record.is_flooded)
    flood_rate = flood_count / count * 100.0 if count else None

    summary = InsightsSummary(
        record_count=count,
        flood_count=flood_count,
        mean_rainfall=rainfall.mean if rainfall else None,
        flood_rate=flood_rate,
        max_rainfall=rainfall.max if rainfall else None,
        min_rainfall=rainfall.min if rainfall else None,
        mean_water_level=mean_water_level(dataset, basis),
        water_level_basis=basis,
    )

    if count:
        logger.info(f"Insights: {count} records, {flood_count} flood events "
                    f"({flood_rate:.1f}%)")
    else:
        logger.info("Insights: empty dataset — all metrics not applicable")
    return summary
