# tests/conftest.py

import math

import pytest
import pandas as pd
import geopandas as gpd
from shapely.geometry import Polygon, box

from land4health.backend import ReductionBackend

EQUAL_AREA = "EPSG:6933"

def square_km2(area_km2: float, x0: float = 0.0, y0: float = 0.0) -> Polygon:
    """Square of the given area in km², in EPSG:6933 meters."""
    side = math.sqrt(area_km2) * 1000.0
    return box(x0, y0, x0 + side, y0 + side)

class RecordingBackend(ReductionBackend):
    """
    In-memory backend that records every call.

    Args:
        values: Callable (index, region) -> dict of column values for one feature.
            Defaults to {"value": index}.
        fail_on: 0-based call index at which to raise instead of answering.
    """

    name = "recording"

    def __init__(self, values=None, fail_on=None):
        self.values = values or (lambda index, region: {"value": float(index)})
        self.fail_on = fail_on
        self.calls = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def reduce(self, image, region, reducer, scale, **options):
        index = len(self.calls)
        self.calls.append({
            "image": image,
            "region": region,
            "reducer": reducer,
            "scale": scale,
            "options": options
        })
        if self.fail_on is not None and index == self.fail_on:
            raise ConnectionError("remote service unavailable")
        return pd.DataFrame([self.values(index, region)])

    def pixel_count_image(self, image, scale):
        return ("pixel_count", image, scale)

@pytest.fixture
def recording_backend():
    return RecordingBackend()

@pytest.fixture
def backend_factory():
    """Build RecordingBackend instances with custom behaviour."""
    return RecordingBackend

@pytest.fixture
def valid_poly():
    """Returns a simple square polygon."""
    return Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])

@pytest.fixture
def districts_gdf():
    """
    Three districts of 10, 0.02 and 5 km² in an equal-area CRS,
    with attributes and a non-default index.
    """
    return gpd.GeoDataFrame(
        {
            "ubigeo": ["160101", "160102", "160103"],
            "population": [1200, 35, 800],
            "geometry": [
                square_km2(10),
                square_km2(0.02, x0=10_000),
                square_km2(5, x0=20_000)
            ]
        },
        index=[10, 20, 30],
        crs=EQUAL_AREA
    )

@pytest.fixture
def many_features_gdf():
    """100 one-km² cells in a row."""
    return gpd.GeoDataFrame(
        {"cell": list(range(100)), "geometry": [square_km2(1, x0=i * 2000) for i in range(100)]},
        crs=EQUAL_AREA
    )

@pytest.fixture
def geojson_path(tmp_path, districts_gdf):
    """Saves the districts to a GeoJSON file and returns the path."""
    path = tmp_path / "districts.geojson"
    districts_gdf.to_crs("EPSG:4326").to_file(path, driver="GeoJSON")
    return path
