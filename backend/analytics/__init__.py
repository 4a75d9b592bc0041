"""
backend.analytics — Flood Sensor Analytics Pipeline
====================================================

This package turns an uploaded flood monitoring export (rainfall, water
level, station coordinates, flood occurrence flags) into the analytical
views shown on the flood risk dashboard.

Architecture:
    Station export (CSV) → Dashboard upload → Analytics Pipeline
                                                   ↓
                                          1. Record Parsing
                                          2. Immutable Dataset
                                                   ↓
                                          3. Descriptive Statistics
                                          4. Rolling Feature Engineering
                                          5. Z-Score Anomaly Detection
                                          6. Insights Aggregation
                                                   ↓
                                  Display-ready views → Dashboard / map widget

Modules:
    config              — Column names, thresholds and view limits
    records             — Cell values, FloodRecord and Dataset model
    parsing             — Delimited text to typed records
    descriptive         — Per-column descriptive statistics
    feature_engineering — Rolling rainfall / water-level features
    anomaly             — Z-score rainfall anomaly detector
    insights            — Aggregate flood risk metrics
    geospatial          — Marker data for the map widget
    pipeline            — Dataset-to-views engine
    utils               — Logging setup and display formatting

Logging:
    Modules log to "analytics.<module>" loggers and install no handlers.
    Call setup_logging(level), or pass log_level= to
    FloodAnalyticsEngine.from_text / from_file, to get console output.

Anomaly threshold:
    The cut-off is the score at index ceil(N × c) − 1 of the descending
    ranking.  This matches floor(N × c) for fractional quotas; when N × c
    is a whole number k it flags the top k readings (plus ties) where the
    dashboard this pipeline replaces flagged one more.
"""

from .anomaly import AnomalyReport, AnomalyResult, ZScoreAnomalyDetector, detect_anomalies
from .descriptive import SummaryStatistics, stats, statistics_table
from .feature_engineering import EngineeredRecord, engineer_features
from .insights import InsightsSummary, compute_insights
from .parsing import RecordParser, load_dataset, parse_dataset
from .pipeline import FloodAnalyticsEngine
from .records import Dataset, FloodRecord
from .utils import setup_logging

__version__ = "1.0.0"
__author__ = "Flood Monitoring Analytics Team"

__all__ = [
    "AnomalyReport",
    "AnomalyResult",
    "Dataset",
    "EngineeredRecord",
    "FloodAnalyticsEngine",
    "FloodRecord",
    "InsightsSummary",
    "RecordParser",
    "SummaryStatistics",
    "ZScoreAnomalyDetector",
    "compute_insights",
    "detect_anomalies",
    "engineer_features",
    "load_dataset",
    "parse_dataset",
    "setup_logging",
    "statistics_table",
    "stats",
]
