"""
anomaly.py — Z-Score Rainfall Anomaly Detector
===============================================

Flags readings whose rainfall deviates unusually far from the dataset
mean.  This is a univariate heuristic, not a learned model:

    1. mean, std = population mean / std of the target column
    2. score     = |value − mean| / std            (per reading)
    3. threshold = score at the contamination cut of the
                   descending score ranking
    4. anomalous = score ≥ threshold

Selection of the cut:
    With N scored readings and contamination c the quota is N × c.  The
    threshold is the score at 0-based index ceil(N × c) − 1 (never below
    0).  For any fractional quota this is floor(N × c); when the quota is a
    whole number k it is the k-th highest score, so exactly the quota is
    flagged instead of one extra reading.

Ties:
    Every reading whose score equals the threshold is flagged, so the
    flagged count can exceed the quota.  This is intentional and is not
    trimmed back to a top-k.

Degenerate inputs:
    - Missing / Text target values get no score and are never flagged.
    - std = 0 (all readings equal): every score is 0 and nothing is flagged.
    - No scored readings: no threshold, nothing flagged.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from sklearn.preprocessing import StandardScaler

from . import config
from .descriptive import summarize_values
from .records import Dataset, Value
from .utils import is_number

logger = logging.getLogger("analytics.anomaly")

ANOMALY_LABEL = "Anomaly"
NORMAL_LABEL = "Normal"


@dataclass(frozen=True)
class AnomalyResult:
    """Score and flag for the record at ``position``."""

    position: int
    value: Value
    score: Optional[float]
    is_anomaly: bool

    @property
    def label(self) -> str:
        return ANOMALY_LABEL if self.is_anomaly else NORMAL_LABEL


@dataclass(frozen=True)
class AnomalyReport:
    """
    Detector output for a whole dataset.

    Attributes:
        results (tuple[AnomalyResult, ...]): One entry per record, in
            record order.
        threshold (float | None): Score cut-off, None when nothing was scored.
        mean (float | None): Population mean of the scored values.
        std (float | None): Population std of the scored values.
        contamination (float): Contamination fraction used.
        target_column (str): Column that was scored.
    """

    results: tuple
    threshold: Optional[float]
    mean: Optional[float]
    std: Optional[float]
    contamination: float
    target_column: str

    @property
    def anomalies(self) -> list:
        """Flagged results sorted by target value, highest first."""
        flagged = [r for r in self.results if r.is_anomaly]
        return sorted(flagged, key=lambda r: r.value, reverse=True)

    @property
    def anomaly_count(self) -> int:
        return sum(1 for r in self.results if r.is_anomaly)

    @property
    def normal_count(self) -> int:
        return len(self.results) - self.anomaly_count

    @property
    def anomaly_rate(self) -> Optional[float]:
        """Percentage of records flagged; None for an empty dataset."""
        if not self.results:
            return None
        return self.anomaly_count / len(self.results) * 100.0

    @property
    def flags(self) -> list[bool]:
        return [r.is_anomaly for r in self.results]

    @property
    def scores(self) -> list:
        return [r.score for r in self.results]


def select_threshold(scores, contamination: float) -> Optional[float]:
    """
    Score at the contamination cut of the descending ranking.

    Args:
        scores: Scores of the scored readings (no None entries).
        contamination: Fraction in [0, 1).

    Returns:
        Threshold score, or None if ``scores`` is empty.
    """
    if len(scores) == 0:
        return None
    ranked = sorted(scores, reverse=True)
    # Rounding keeps products like 20 × 0.05 from landing a hair above 1.
    quota = round(len(ranked) * contamination, 9)
    index = min(max(math.ceil(quota) - 1, 0), len(ranked) - 1)
    return ranked[index]


class ZScoreAnomalyDetector:
    """
    Univariate z-score detector over one numeric column.

    Attributes:
        contamination (float): Expected anomalous fraction.
        target_column (str): Column to score.
    """

    def __init__(self, contamination: float = None, target_column: str = None):
        """
        Args:
            contamination: Fraction in [0, 1).  Defaults to config.CONTAMINATION.
            target_column: Defaults to config.TARGET_COLUMN (rainfall).

        Raises:
            ValueError: If contamination is outside [0, 1).
        """
        self.contamination = (contamination if contamination is not None
                              else config.CONTAMINATION)
        if not 0.0 <= self.contamination < 1.0:
            raise ValueError(
                f"contamination must be in [0, 1), got {self.contamination}"
            )
        self.target_column = target_column or config.TARGET_COLUMN

    def detect(self, dataset: Dataset) -> AnomalyReport:
        """
        Score and flag every record of a dataset.

        Args:
            dataset: Parsed dataset.

        Returns:
            AnomalyReport with one result per record.
        """
        if not dataset.has_column(self.target_column):
            if not dataset.is_empty:
                logger.warning(f"Target column '{self.target_column}' not in "
                               "dataset — no records scored")
            values = [None] * dataset.row_count
        else:
            values = dataset.column_values(self.target_column)

        positions = [i for i, v in enumerate(values) if is_number(v)]
        present = [values[i] for i in positions]
        summary = summarize_values(present)

        scores = [None] * len(values)
        threshold = None
        flagged_positions = set()

        if summary is not None:
            if summary.std == 0.0:
                logger.info(f"'{self.target_column}' has zero deviation — "
                            "all scores are 0, nothing flagged")
                for i in positions:
                    scores[i] = 0.0
            else:
                column = np.asarray(present, dtype=np.float64).reshape(-1, 1)
                scaler = StandardScaler().fit(column)
                if scaler.scale_[0] == 1.0 and summary.std != 1.0:
                    # The scaler reports near-constant, large-magnitude
                    # columns as unscaled; divide by the population std.
                    logger.debug(f"'{self.target_column}' variance below scaler "
                                 "precision — scoring against population std")
                    z = np.abs((column.ravel() - summary.mean) / summary.std)
                else:
                    z = np.abs(scaler.transform(column)).ravel()
                for i, score in zip(positions, z):
                    scores[i] = float(score)

                threshold = select_threshold(z.tolist(), self.contamination)
                flagged_positions = {i for i in positions if scores[i] >= threshold}

        results = tuple(
            AnomalyResult(position=i, value=values[i], score=scores[i],
                          is_anomaly=i in flagged_positions)
            for i in range(len(values))
        )

        report = AnomalyReport(
            results=results,
            threshold=threshold,
            mean=summary.mean if summary else None,
            std=summary.std if summary else None,
            contamination=self.contamination,
            target_column=self.target_column,
        )

        if results:
            logger.info(f"Flagged {report.anomaly_count}/{len(results)} records "
                        f"as anomalies ({report.anomaly_rate:.1f}%)")
        if threshold is not None:
            logger.debug(f"Anomaly threshold: {threshold:.4f} "
                         f"(contamination={self.contamination})")
        return report


def detect_anomalies(dataset: Dataset, contamination: float = None,
                     target_column: str = None) -> AnomalyReport:
    """Run a ZScoreAnomalyDetector with the given settings."""
    return ZScoreAnomalyDetector(contamination, target_column).detect(dataset)
