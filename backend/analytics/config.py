"""
config.py — Analytics Pipeline Configuration Constants
=======================================================

Centralizes the column names, thresholds, and view limits used by the
flood analytics pipeline.  Tuning these values adjusts how sensitive the
anomaly detector is and how much of the dataset each view exposes.

The pipeline consumes flood monitoring station exports:
- Rain gauges (mm per reading)
- River / drainage water level sensors (m)
- Flood occurrence flags (0 = normal, 1 = flooded)
- Station coordinates (decimal degrees)
"""

import os

# ═══════════════════════════════════════════════════════════════════
# INPUT FORMAT
# ═══════════════════════════════════════════════════════════════════

# Cell delimiter for uploaded sensor exports.  Quoted fields are not
# supported, so a delimiter inside a cell always splits it.
CSV_DELIMITER = os.environ.get("ANALYTICS_CSV_DELIMITER", ",")

# ═══════════════════════════════════════════════════════════════════
# SEMANTIC COLUMN NAMES
# ═══════════════════════════════════════════════════════════════════

RAINFALL_COLUMN = "Rainfall_mm"
WATER_LEVEL_COLUMN = "WaterLevel_m"
FLOOD_COLUMN = "FloodOccurrence"
LATITUDE_COLUMN = "Latitude"
LONGITUDE_COLUMN = "Longitude"
DATE_COLUMN = "Date"

SEMANTIC_COLUMNS = (
    DATE_COLUMN,
    RAINFALL_COLUMN,
    WATER_LEVEL_COLUMN,
    FLOOD_COLUMN,
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
)

# Value of FLOOD_COLUMN that marks a flood event.
FLOOD_FLAG_VALUE = 1.0

# ═══════════════════════════════════════════════════════════════════
# ANOMALY DETECTION
# ═══════════════════════════════════════════════════════════════════

# Expected proportion of anomalous readings in a dataset.
# 0.05 = 5%: the z-score cutoff is taken at the 5% mark of the
# descending score ranking, so roughly one reading in twenty is flagged
# (more when several readings tie at the cutoff).
CONTAMINATION = 0.05

# Numeric column scored by the univariate z-score detector.
TARGET_COLUMN = RAINFALL_COLUMN

# ═══════════════════════════════════════════════════════════════════
# ROLLING FEATURES
# ═══════════════════════════════════════════════════════════════════

# Window lengths (in records) for the rainfall rolling means.
# Records are daily readings, so 3 records = 3 days.
SHORT_WINDOW = 3
LONG_WINDOW = 7

# Derived column names (must match feature_engineering output)
FEATURE_NAMES = [
    "Rainfall_3day_avg",
    "Rainfall_7day_avg",
    "WaterLevel_change",
    "WaterLevel_rising",
]

# ═══════════════════════════════════════════════════════════════════
# INSIGHTS
# ═══════════════════════════════════════════════════════════════════

# Divisor for the mean water level:
#   "records" — sum of present readings / total record count
#               (matches the dashboard this pipeline replaces)
#   "present" — sum of present readings / number of present readings
WATER_LEVEL_MEAN_BASIS = "records"

# ═══════════════════════════════════════════════════════════════════
# VIEW LIMITS
# ═══════════════════════════════════════════════════════════════════

PREVIEW_ROWS = 10
FEATURE_PREVIEW_ROWS = 20
ANOMALY_CHART_ROWS = 50
MAP_POINT_LIMIT = 100

# Map centre used for stations without usable coordinates (Metro Manila).
DEFAULT_LATITUDE = 14.6
DEFAULT_LONGITUDE = 121.0

# Statistic rows of the descriptive statistics table, in display order
STAT_NAMES = ["count", "mean", "std", "min", "median", "max"]

# Display marker for missing and not-applicable cells.  Never "0" or "".
MISSING_MARKER = "—"

# Decimal places for computed values in rendered views
DISPLAY_DECIMALS = 2

# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

# Log level for the analytics pipeline (DEBUG, INFO, WARNING, ERROR, CRITICAL)
LOG_LEVEL = os.environ.get("ANALYTICS_LOG_LEVEL", "INFO")
