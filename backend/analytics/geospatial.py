"""
geospatial.py — Map Marker Data
================================

Prepares the read-only point list handed to the external map widget.
The widget draws one marker per point, coloured by flood occurrence;
this module only decides what goes into each point.

Stations without usable coordinates (missing, non-numeric, or 0) are
placed at the default map centre, config.DEFAULT_LATITUDE /
config.DEFAULT_LONGITUDE.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from . import config
from .anomaly import AnomalyReport
from .records import Dataset, Value
from .utils import is_number

logger = logging.getLogger("analytics.geospatial")


@dataclass(frozen=True)
class MapPoint:
    position: int
    latitude: float
    longitude: float
    rainfall_mm: Value
    water_level_m: Value
    is_flooded: bool
    is_anomaly: bool

    def as_dict(self) -> dict:
        return asdict(self)


def _coordinate(value: Value, default: float) -> float:
    return value if is_number(value) and value != 0.0 else default


def map_points(dataset: Dataset, anomalies: Optional[AnomalyReport] = None,
               limit: int = None) -> list[MapPoint]:
    """
    Marker data for the first ``limit`` records.

    Args:
        dataset: Parsed dataset.
        anomalies: Optional detector output used to mark anomalous points.
        limit: Maximum number of points.  Defaults to config.MAP_POINT_LIMIT.

    Returns:
        List of MapPoint in record order.
    """
    limit = config.MAP_POINT_LIMIT if limit is None else limit
    flags = anomalies.flags if anomalies is not None else []

    points = []
    for position, record in enumerate(dataset.records[:limit]):
        points.append(MapPoint(
            position=position,
            latitude=_coordinate(record.latitude, config.DEFAULT_LATITUDE),
            longitude=_coordinate(record.longitude, config.DEFAULT_LONGITUDE),
            rainfall_mm=record.rainfall_mm,
            water_level_m=record.water_level_m,
            is_flooded=record.is_flooded,
            is_anomaly=bool(flags[position]) if position < len(flags) else False,
        ))

    logger.debug(f"Prepared {len(points)} map points "
                 f"(of {dataset.row_count} records)")
    return points
