# src/land4health/region/io.py

"""
This module converts user-supplied spatial objects into Region objects.

Accepted inputs are Region, GeoDataFrame, GeoSeries and paths to vector files
readable by GeoPandas.
"""

from pathlib import Path
from typing import Union, Callable, Any
from functools import wraps
import logging

import geopandas as gpd

from land4health.errors import InvalidInputKind
from land4health.region.layer import Region

log = logging.getLogger(__name__)

__all__ = [
    "load_region",
    "as_region",
    "resolve_region"
]

RegionLike = Union[Region, gpd.GeoDataFrame, gpd.GeoSeries, str, Path]

def load_region(path: Union[str, Path], engine: str = "pyogrio", **kwargs) -> Region:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Region file not found: {path}")

    gdf = gpd.read_file(path, engine=engine, **kwargs)
    log.debug(f"Loaded {len(gdf)} features from {path}")
    return Region(gdf)

def as_region(obj: Any) -> Region:
    """
    Adapt a supported spatial object to a Region.

    Raises:
        InvalidInputKind: If the object is not a supported region type.
        FileNotFoundError: If a path is given and does not exist.
    """
    if isinstance(obj, Region):
        return obj
    if isinstance(obj, gpd.GeoDataFrame):
        return Region(obj)
    if isinstance(obj, gpd.GeoSeries):
        return Region(gpd.GeoDataFrame(geometry=obj, crs=obj.crs))
    if isinstance(obj, (str, Path)):
        return load_region(obj)
    raise InvalidInputKind(
        f"Invalid region: expected Region, GeoDataFrame, GeoSeries or a file path, got {type(obj).__name__}"
    )

def resolve_region(func: Callable):
    @wraps(func)
    def wrapper(region: RegionLike, *args, **kwargs):
        return func(as_region(region), *args, **kwargs)
    return wrapper
