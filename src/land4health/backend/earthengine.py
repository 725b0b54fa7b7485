# src/land4health/backend/earthengine.py

"""
This module implements the reduction backend on top of Google Earth Engine.

Regions are sent as GeoJSON in EPSG:4326 and reduced with reduceRegions;
the reducer is expanded per band so output properties carry band names.
"""

import logging
from typing import Any, Optional

import ee
import pandas as pd

from land4health.errors import InvalidInputKind
from land4health.reducers import Reducer
from land4health.region.layer import Region
from land4health.region.geom import to_crs
from .base import ReductionBackend

log = logging.getLogger(__name__)

__all__ = [
    "EarthEngineBackend",
    "ee_reducer"
]

GEOJSON_CRS = "EPSG:4326"

def ee_reducer(reducer: Reducer) -> ee.Reducer:
    reducers = {
        Reducer.MEAN: ee.Reducer.mean,
        Reducer.SUM: ee.Reducer.sum,
        Reducer.MIN: ee.Reducer.min,
        Reducer.MAX: ee.Reducer.max,
        Reducer.MEDIAN: ee.Reducer.median,
        Reducer.STD_DEV: ee.Reducer.stdDev,
        Reducer.FIRST: ee.Reducer.first,
    }
    return reducers[reducer]()

class EarthEngineBackend(ReductionBackend):
    """
    Reduction backend for Earth Engine images.

    Args:
        project: Cloud project passed to ee.Initialize. Only used when initialize=True.
        initialize: Call ee.Initialize on first use instead of relying on a prior call.
    """

    name = "earthengine"

    def __init__(self, project: Optional[str] = None, initialize: bool = False):
        self.project = project
        self.initialize = initialize
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if self.initialize and not self._initialized:
            log.info(f"Initializing Earth Engine (project={self.project})")
            ee.Initialize(project=self.project)
            self._initialized = True

    def _to_feature_collection(self, region: Region) -> ee.FeatureCollection:
        if region.crs is None:
            raise InvalidInputKind("Region has no CRS. Cannot send it to Earth Engine.")
        geometries = to_crs(region, GEOJSON_CRS).data.geometry
        features = [ee.Feature(ee.Geometry(geom.__geo_interface__)) for geom in geometries]
        return ee.FeatureCollection(features)

    def reduce(
        self,
        image: Any,
        region: Region,
        reducer: Reducer,
        scale: float,
        **options
    ) -> pd.DataFrame:
        self.check_image(image)
        self._ensure_initialized()

        collection = self._to_feature_collection(region)
        reduced = image.reduceRegions(
            collection=collection,
            reducer=ee_reducer(reducer).forEachBand(image),
            scale=scale,
            **options
        ).getInfo()

        rows = [feature.get("properties") or {} for feature in reduced.get("features", [])]
        return pd.DataFrame.from_records(rows)

    def check_image(self, image: Any) -> None:
        if not isinstance(image, ee.Image):
            raise InvalidInputKind(f"Expected ee.Image, got {type(image).__name__}")

    def pixel_count_image(self, image: Any, scale: float) -> ee.Image:
        self.check_image(image)
        mask = image.mask().reduce(ee.Reducer.min()).gt(0)
        return mask.multiply(ee.Image.pixelArea()).divide(scale * scale).rename("pixel_count")
