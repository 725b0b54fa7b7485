# tests/unit/test_tidy.py

import pytest
import pandas as pd
import geopandas as gpd
from shapely.geometry import box

from land4health.indicators.tidy import pivot_longer, relocate_before_geometry

@pytest.fixture
def wide():
    return pd.DataFrame({
        "ubigeo": ["a", "b"],
        "y2001": [1.0, 3.0],
        "y2002": [2.0, 4.0]
    })

def test_pivot_longer_is_feature_major(wide):
    long = pivot_longer(wide, ["y2001", "y2002"], names_to="date", values_to="value")

    assert list(long.columns) == ["ubigeo", "date", "value"]
    assert long["ubigeo"].tolist() == ["a", "a", "b", "b"]
    assert long["date"].tolist() == ["y2001", "y2002", "y2001", "y2002"]
    assert long["value"].tolist() == [1.0, 2.0, 3.0, 4.0]

def test_pivot_longer_follows_given_column_order(wide):
    long = pivot_longer(wide, ["y2002", "y2001"], names_to="date")
    assert long["date"].tolist()[:2] == ["y2002", "y2001"]

def test_pivot_longer_keeps_geometry_last(wide):
    gdf = gpd.GeoDataFrame(wide, geometry=[box(0, 0, 1, 1), box(2, 2, 3, 3)], crs="EPSG:4326")
    long = pivot_longer(gdf, ["y2001", "y2002"], names_to="date")

    assert isinstance(long, gpd.GeoDataFrame)
    assert list(long.columns) == ["ubigeo", "date", "value", "geometry"]
    assert long.crs == gdf.crs
    assert long.geometry.iloc[2].equals(box(2, 2, 3, 3))

def test_pivot_longer_missing_column(wide):
    with pytest.raises(KeyError):
        pivot_longer(wide, ["y1999"])

def test_relocate_before_geometry():
    gdf = gpd.GeoDataFrame(
        {"value": [1.0], "date": ["2001"], "id": [1]}, geometry=[box(0, 0, 1, 1)], crs="EPSG:4326"
    )
    out = relocate_before_geometry(gdf, ["date", "value"])
    assert list(out.columns) == ["id", "date", "value", "geometry"]
