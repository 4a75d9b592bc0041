"""
pipeline.py — Dataset-to-Views Engine
======================================

Bridges an ingested sensor export to the display-ready views consumed
by the dashboard front end and the map widget.

Flow:
    uploaded text -> RecordParser -> Dataset (immutable)
    Dataset -> dataset_summary()   (row/column counts, preview rows)
            -> statistics_view()   (descriptive statistics table)
            -> feature_view()      (rolling features)
            -> anomaly_view()      (z-score flags + anomalous subset)
            -> insights_view()     (aggregate scalars)
            -> map_view()          (marker data for the map widget)

Every view is recomputed from the Dataset on each call; nothing is
cached, and no view writes back into the Dataset, so one engine can
serve concurrent callers.  Views are plain dicts of JSON-ready values.
Raw cells and not-applicable results render as config.MISSING_MARKER,
never as "0" or "".
"""

import logging
from typing import Optional

import pandas as pd

from . import config
from .anomaly import AnomalyReport, ZScoreAnomalyDetector
from .descriptive import SummaryStatistics, numeric_columns, stats, statistics_table
from .feature_engineering import engineer_features
from .geospatial import map_points
from .insights import InsightsSummary, check_water_level_basis, compute_insights
from .parsing import RecordParser
from .records import Dataset
from .utils import format_number, format_value, is_number, setup_logging

logger = logging.getLogger("analytics.pipeline")

RISING_LABEL = "Rising"
STABLE_LABEL = "Stable"


class FloodAnalyticsEngine:
    """
    Derived-view engine over one immutable Dataset.

    Usage:
        engine = FloodAnalyticsEngine.from_file("floods.csv")
        summary = engine.dataset_summary()
        anomalies = engine.anomaly_view()

    Attributes:
        dataset (Dataset): The ingested data.
        detector (ZScoreAnomalyDetector): Configured anomaly detector.
        water_level_basis (str): Divisor convention for the mean water level.
    """

    def __init__(self, dataset: Dataset, contamination: float = None,
                 water_level_basis: str = None):
        """
        Args:
            dataset: Parsed dataset.
            contamination: Anomaly contamination fraction.
                Defaults to config.CONTAMINATION.
            water_level_basis: "records" or "present".
                Defaults to config.WATER_LEVEL_MEAN_BASIS.

        Raises:
            ValueError: If either setting is invalid.
        """
        self.dataset = dataset
        self.detector = ZScoreAnomalyDetector(contamination)
        self.water_level_basis = check_water_level_basis(
            water_level_basis or config.WATER_LEVEL_MEAN_BASIS)
        logger.info(f"Engine ready: {dataset.row_count} records, "
                    f"contamination={self.detector.contamination}")

    @classmethod
    def from_text(cls, text: str, delimiter: str = None, log_level: str = None,
                  **kwargs) -> "FloodAnalyticsEngine":
        """
        Parse export text and wrap it in an engine.

        Args:
            text: File content.
            delimiter: Cell separator.  Defaults to config.CSV_DELIMITER.
            log_level: If given, configure the analytics loggers first
                (see utils.setup_logging).  Off by default.
            **kwargs: Passed to the constructor (contamination,
                water_level_basis).
        """
        if log_level:
            setup_logging(log_level)
        return cls(RecordParser(delimiter).parse(text), **kwargs)

    @classmethod
    def from_file(cls, path: str, delimiter: str = None, log_level: str = None,
                  **kwargs) -> "FloodAnalyticsEngine":
        """Read an export from disk; arguments as for from_text."""
        if log_level:
            setup_logging(log_level)
        return cls(RecordParser(delimiter).load(path), **kwargs)

    # ── Dataset summary ───────────────────────────────────────────

    def dataset_summary(self, rows: int = None) -> dict:
        """
        Shape, headers and the first ``rows`` records as display strings.

        Args:
            rows: Preview length.  Defaults to config.PREVIEW_ROWS.
        """
        rows = config.PREVIEW_ROWS if rows is None else rows
        columns = list(self.dataset.columns)
        preview = [[format_value(record[name]) for name in columns]
                   for record in self.dataset.records[:rows]]
        return {
            "row_count": self.dataset.row_count,
            "column_count": self.dataset.column_count,
            "columns": columns,
            "preview": preview,
        }

    # ── Statistics ────────────────────────────────────────────────

    def statistics(self, column: str) -> Optional[SummaryStatistics]:
        """Statistics of one column.  Raises KeyError for unknown columns."""
        return stats(self.dataset, column)

    def statistics_table(self) -> pd.DataFrame:
        return statistics_table(self.dataset)

    def statistics_view(self) -> dict:
        """
        Statistics table rendered for display: one row per statistic,
        one cell per numeric column.  Counts render as integers.
        """
        columns = numeric_columns(self.dataset)
        summaries = {name: stats(self.dataset, name) for name in columns}

        table = []
        for stat in config.STAT_NAMES:
            cells = []
            for name in columns:
                value = getattr(summaries[name], stat) if summaries[name] else None
                if stat == "count" and value is not None:
                    cells.append(str(value))
                else:
                    cells.append(format_number(value))
            table.append({"stat": stat, "values": cells})

        return {"columns": columns, "rows": table}

    # ── Features ──────────────────────────────────────────────────

    def feature_view(self, rows: int = None) -> dict:
        """
        Original fields plus the derived feature columns, first ``rows``
        records.  WaterLevel_rising renders as "Rising" / "Stable".

        Args:
            rows: Number of records.  Defaults to config.FEATURE_PREVIEW_ROWS.
        """
        rows = config.FEATURE_PREVIEW_ROWS if rows is None else rows
        columns = list(self.dataset.columns)
        rendered = []
        for item in engineer_features(self.dataset)[:rows]:
            cells = [format_value(item.record[name]) for name in columns]
            cells.extend([
                format_number(item.rainfall_3day_avg),
                format_number(item.rainfall_7day_avg),
                format_number(item.water_level_change),
                RISING_LABEL if item.water_level_rising == 1 else STABLE_LABEL,
            ])
            rendered.append(cells)
        return {"columns": columns + list(config.FEATURE_NAMES), "rows": rendered}

    # ── Anomalies ─────────────────────────────────────────────────

    def anomaly_report(self) -> AnomalyReport:
        return self.detector.detect(self.dataset)

    def anomaly_view(self, chart_rows: int = None) -> dict:
        """
        Per-record flags and scores, the anomalous subset sorted by
        target value (highest first), and a bar-chart series.

        Args:
            chart_rows: Records in the chart series.
                Defaults to config.ANOMALY_CHART_ROWS.
        """
        chart_rows = config.ANOMALY_CHART_ROWS if chart_rows is None else chart_rows
        report = self.anomaly_report()
        columns = list(self.dataset.columns)

        records = [{
            "position": r.position,
            "score": r.score,
            "is_anomaly": r.is_anomaly,
            "label": r.label,
        } for r in report.results]

        anomalies = [{
            "position": r.position,
            "score": r.score,
            "cells": [format_value(self.dataset[r.position][name]) for name in columns],
        } for r in report.anomalies]

        present = [r.value for r in report.results if is_number(r.value)]
        peak = max(present) if present else None
        chart = []
        for r in report.results[:chart_rows]:
            width = None
            if is_number(r.value) and peak and peak > 0:
                width = r.value / peak * 100.0
            chart.append({
                "position": r.position,
                "value": format_number(r.value, 1) if is_number(r.value) else config.MISSING_MARKER,
                "width": width,
                "label": r.label,
            })

        return {
            "target_column": report.target_column,
            "contamination": report.contamination,
            "threshold": report.threshold,
            "anomaly_count": report.anomaly_count,
            "normal_count": report.normal_count,
            "anomaly_rate": report.anomaly_rate,
            "records": records,
            "columns": columns,
            "anomalies": anomalies,
            "chart": chart,
        }

    # ── Insights ──────────────────────────────────────────────────

    def insights(self) -> InsightsSummary:
        return compute_insights(self.dataset, self.water_level_basis)

    def insights_view(self) -> dict:
        """Insights scalars plus their display strings."""
        summary = self.insights()
        data = summary.as_dict()
        data["display"] = {
            "mean_rainfall": format_number(summary.mean_rainfall),
            "flood_rate": format_number(summary.flood_rate, 1),
            "max_rainfall": format_number(summary.max_rainfall),
            "min_rainfall": format_number(summary.min_rainfall),
            "mean_water_level": format_number(summary.mean_water_level),
        }
        return data

    # ── Map ───────────────────────────────────────────────────────

    def map_view(self, limit: int = None) -> dict:
        """Marker data for the map widget plus flood / normal counts."""
        points = map_points(self.dataset, self.anomaly_report(), limit)
        flooded = sum(1 for record in self.dataset.records if record.is_flooded)
        return {
            "points": [p.as_dict() for p in points],
            "flood_count": flooded,
            "normal_count": self.dataset.row_count - flooded,
            "center": [config.DEFAULT_LATITUDE, config.DEFAULT_LONGITUDE],
        }

    # ── All views ─────────────────────────────────────────────────

    def all_views(self) -> dict:
        """Every view, freshly computed."""
        return {
            "summary": self.dataset_summary(),
            "statistics": self.statistics_view(),
            "features": self.feature_view(),
            "anomalies": self.anomaly_view(),
            "insights": self.insights_view(),
            "map": self.map_view(),
        }
