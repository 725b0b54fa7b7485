# src/land4health/region/layer.py

"""
This module defines the core data structure for the regions over which indicators are extracted.
"""

import logging
from typing import List

import geopandas as gpd

from land4health.errors import InvalidInputKind

log = logging.getLogger(__name__)

__all__ = [
    "Region"
]

class Region:
    """
    A non-empty collection of polygon features sharing one CRS.

    Every feature must carry a non-empty geometry. The wrapped GeoDataFrame
    is never modified by land4health; every operation works on copies.
    """
    def __init__(self, data: gpd.GeoDataFrame):
        if not isinstance(data, gpd.GeoDataFrame):
            raise InvalidInputKind(f"Expected GeoDataFrame, got {type(data)}")
        try:
            geometry = data.geometry
        except AttributeError:
            raise InvalidInputKind("GeoDataFrame has no active geometry column.") from None
        if len(data) == 0:
            raise InvalidInputKind("Region must contain at least one feature.")

        missing = geometry.isna() | geometry.is_empty
        if missing.any():
            positions = [i for i, bad in enumerate(missing) if bad]
            raise InvalidInputKind(f"Region contains missing or empty geometries at positions {positions}")

        self._data = data

    @property
    def data(self) -> gpd.GeoDataFrame:
        return self._data

    @property
    def crs(self):
        return self._data.crs

    @property
    def geometry_name(self) -> str:
        return self._data.geometry.name

    @property
    def attribute_columns(self) -> List[str]:
        """Non-spatial columns, in their original order."""
        geom = self.geometry_name
        return [c for c in self._data.columns if c != geom]

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self):
        return f"<Region features={len(self._data)} crs={self.crs}>"
