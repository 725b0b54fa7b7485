# src/land4health/region/geom.py

"""
This module provides the geometric operations needed before extraction:
splitting a region into single features, reprojection and area computation.
"""

from typing import List
import logging

import geopandas as gpd
import pandas as pd

from land4health.errors import InvalidInputKind
from land4health.region.layer import Region
from land4health.region.io import resolve_region

log = logging.getLogger(__name__)

__all__ = [
    "EQUAL_AREA_CRS",
    "split_region",
    "to_crs",
    "feature_areas_km2"
]

# World Cylindrical Equal Area
EQUAL_AREA_CRS = "EPSG:6933"

@resolve_region
def split_region(region: Region) -> List[Region]:
    """
    Decompose a region into one single-feature region per input feature.

    Order, index labels and attribute columns are preserved; nothing is
    deduplicated or filtered.
    """
    gdf = region.data
    return [Region(gdf.iloc[[i]].copy()) for i in range(len(gdf))]

def to_crs(region: Region, target_crs) -> Region:
    if region.crs is None:
        raise InvalidInputKind("Region has no CRS. Cannot reproject.")
    if region.crs == target_crs:
        return Region(region.data.copy())
    return Region(region.data.to_crs(target_crs))

@resolve_region
def feature_areas_km2(region: Region) -> pd.Series:
    """Area of every feature in square kilometres, computed in an equal-area CRS."""
    if region.crs is None:
        raise InvalidInputKind("Region has no CRS. Cannot compute feature areas.")

    projected: gpd.GeoDataFrame = to_crs(region, EQUAL_AREA_CRS).data
    return projected.geometry.area / 1e6
