# src/land4health/indicators/lights.py

"""
This module extracts annual night-time light radiance from the Harmonized
Global Night Time Lights collections (DMSP-OLS 1992-2013, VIIRS-like 2014-2021).
"""

import datetime
import logging
import re
from typing import Any, Optional, Union

import ee
import pandas as pd

from land4health.backend import ReductionBackend
from land4health.config import DatasetConfig
from land4health.extract import extract_by_feature
from land4health.reducers import Reducer, resolve_reducer
from land4health.representativity import check_representativity
from land4health.region import as_region
from .tidy import pivot_longer, relocate_before_geometry
from .validation import parse_date, check_year_range

log = logging.getLogger(__name__)

__all__ = [
    "night_lights"
]

BAND_MARKER = "Harmonized_DN_NTL"
_YEAR_PATTERN = re.compile(r".*_(\d{4})_.*")

def _night_lights_image(config: DatasetConfig, from_year: int, to_year: int) -> ee.Image:
    dmsp = config.get("night_lights_dmsp")
    viirs = config.get("night_lights_viirs")

    def _collection(asset_id: str, start: int, end: int) -> ee.ImageCollection:
        return ee.ImageCollection(asset_id).filter(ee.Filter.calendarRange(start, end, "year"))

    if to_year <= dmsp.end_year:
        collection = _collection(dmsp.asset_id, from_year, to_year)
    elif from_year >= viirs.start_year:
        collection = _collection(viirs.asset_id, from_year, to_year)
    else:
        collection = _collection(dmsp.asset_id, from_year, dmsp.end_year).merge(
            _collection(viirs.asset_id, viirs.start_year, to_year)
        )
    return collection.select("b1").toBands()

def _band_year(band: str) -> int:
    match = _YEAR_PATTERN.match(band)
    if not match:
        raise ValueError(f"Cannot parse year from band name '{band}'")
    return int(match.group(1))

def _band_provider(band: str) -> Optional[str]:
    if "DMSP" in band:
        return "dmsp"
    if "VIIRS" in band:
        return "viirs"
    return None

def night_lights(
    from_date: str,
    to_date: str,
    region: Any,
    stat: Union[str, Reducer] = "mean",
    scale: float = 1000,
    with_geometry: bool = True,
    quiet: bool = False,
    force: bool = False,
    backend: Union[str, ReductionBackend, None] = None,
    config: Optional[DatasetConfig] = None,
    **options
) -> pd.DataFrame:
    """
    Annual night-time light statistics per feature.

    Only the years of from_date and to_date are used.

    Args:
        from_date (str): Start date, 'YYYY-MM-DD'.
        to_date (str): End date, 'YYYY-MM-DD'.
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        stat (Union[str, Reducer]): Statistic per year and feature. Default="mean".
        scale (float): Nominal scale in meters. Default=1000.
        with_geometry (bool): Return a GeoDataFrame with the region geometries. Default=True.
        quiet (bool): Suppress the progress bar. Default=False.
        force (bool): Skip the representativity check. Default=False.
        backend (Union[str, ReductionBackend, None]): Reduction backend. Defaults to Earth Engine.
        config (Optional[DatasetConfig]): Dataset identifiers. Defaults to DatasetConfig.default().
        **options: Passed to the backend reduction call.

    Returns:
        pd.DataFrame: Long table with the region attributes and the columns date, variable, provider, value.
    """
    start = parse_date(from_date, "from")
    end = parse_date(to_date, "to")
    if end < start:
        raise ValueError("Parameter 'to' must be greater than or equal to 'from'")

    stat = resolve_reducer(stat)
    config = config or DatasetConfig.default()
    first_year = config.get("night_lights_dmsp").start_year
    last_year = config.get("night_lights_viirs").end_year
    check_year_range(start.year, end.year, first_year, last_year)

    region = as_region(region)
    if not force:
        check_representativity(region, scale=scale)

    image = _night_lights_image(config, start.year, end.year)

    wide = extract_by_feature(
        image,
        region,
        scale=scale,
        reducer=stat,
        backend=backend,
        with_geometry=with_geometry,
        quiet=quiet,
        **options
    )

    value_columns = [c for c in wide.columns if BAND_MARKER in str(c)]
    tidy = pivot_longer(wide, value_columns, names_to="date", values_to="value")
    tidy["provider"] = tidy["date"].map(_band_provider)
    tidy["date"] = tidy["date"].map(lambda band: datetime.date(_band_year(band), 1, 1))
    tidy["variable"] = "night_lights"
    return relocate_before_geometry(tidy, ["date", "variable", "provider", "value"])
