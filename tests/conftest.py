"""Shared fixtures for the flood analytics tests."""

import pytest

from backend.analytics.parsing import parse_dataset

SAMPLE_CSV = """Date,Rainfall_mm,WaterLevel_m,FloodOccurrence,Latitude,Longitude,Station
2023-07-01,12.5,1.20,0,14.55,121.02,Marikina
2023-07-02,30.0,1.45,0,14.56,121.03,Marikina
2023-07-03,85.2,2.10,1,14.57,121.01,Pasig
2023-07-04,5.0,1.90,0,14.58,121.05,Pasig
2023-07-05,0.0,,0,,121.00,Taguig
2023-07-06,42.1,1.75,1,14.60,121.04,Taguig
2023-07-07,18.3,1.60,0,14.61,121.06,Marikina
2023-07-08,240.0,3.80,1,14.62,121.07,Pasig
"""


def make_csv(rainfall, water_level=None, flood=None) -> str:
    """Build CSV text from parallel lists; None becomes an empty cell."""
    header = ["Rainfall_mm"]
    if water_level is not None:
        header.append("WaterLevel_m")
    if flood is not None:
        header.append("FloodOccurrence")

    lines = [",".join(header)]
    for i, rain in enumerate(rainfall):
        cells = ["" if rain is None else str(rain)]
        if water_level is not None:
            wl = water_level[i]
            cells.append("" if wl is None else str(wl))
        if flood is not None:
            cells.append(str(flood[i]))
        lines.append(",".join(cells))
    return "\n".join(lines) + "\n"


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def sample_dataset():
    return parse_dataset(SAMPLE_CSV)


@pytest.fixture()
def sample_file(tmp_path):
    path = tmp_path / "floods.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def build_dataset():
    """Factory fixture: parallel lists -> parsed Dataset."""
    def _build(rainfall, water_level=None, flood=None):
        return parse_dataset(make_csv(rainfall, water_level, flood))
    return _build
