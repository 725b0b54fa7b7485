# src/land4health/indicators/temperature.py

"""
This module extracts daily land surface temperature from MODIS MOD11A1.

Pixels are kept according to bits 0-1 of the QC band ("strict": 00 only,
"moderate": 00 or 01) and converted from scaled Kelvin to degrees Celsius
as value * 0.02 - 273.15.
"""

import datetime
import logging
import re
from typing import Any, Optional, Union

import ee
import pandas as pd

from land4health.backend import ReductionBackend
from land4health.config import DatasetConfig, DatasetEntry
from land4health.extract import extract_by_feature
from land4health.reducers import Reducer, resolve_reducer
from land4health.representativity import check_representativity
from land4health.region import as_region
from .tidy import pivot_longer, relocate_before_geometry
from .validation import parse_date, check_year_range

log = logging.getLogger(__name__)

__all__ = [
    "surface_temperature"
]

LST_SCALE_FACTOR = 0.02
KELVIN_OFFSET = 273.15

_BANDS = {
    "day": ("LST_Day_1km", "QC_Day"),
    "night": ("LST_Night_1km", "QC_Night"),
}

# highest accepted value of QC bits 0-1
_QUALITY_LEVELS = {
    "strict": 0,
    "moderate": 1,
}

_DATE_PATTERN = re.compile(r"^(\d{4})_(\d{2})_(\d{2})_LST_")

def _select_bands(band: str, level: str):
    if band not in _BANDS:
        raise ValueError(f"Invalid band '{band}'. Must be one of: {sorted(_BANDS)}")
    if level not in _QUALITY_LEVELS:
        raise ValueError(f"Invalid level '{level}'. Must be one of: {sorted(_QUALITY_LEVELS)}")
    lst_band, qc_band = _BANDS[band]
    return lst_band, qc_band, _QUALITY_LEVELS[level]

def _surface_temperature_image(
    entry: DatasetEntry,
    start: datetime.date,
    end: datetime.date,
    lst_band: str,
    qc_band: str,
    max_quality: int
) -> ee.Image:
    def _to_celsius(image):
        good = image.select(qc_band).bitwiseAnd(3).lte(max_quality)
        return (
            image.select(lst_band)
            .multiply(LST_SCALE_FACTOR)
            .subtract(KELVIN_OFFSET)
            .updateMask(good)
        )

    # filterDate excludes its end date
    last = end + datetime.timedelta(days=1)
    return (
        ee.ImageCollection(entry.asset_id)
        .filterDate(start.isoformat(), last.isoformat())
        .map(_to_celsius)
        .toBands()
    )

def _band_date(band: str) -> datetime.date:
    match = _DATE_PATTERN.match(band)
    if not match:
        raise ValueError(f"Cannot parse date from band name '{band}'")
    year, month, day = (int(g) for g in match.groups())
    return datetime.date(year, month, day)

def surface_temperature(
    from_date: str,
    to_date: str,
    region: Any,
    band: str = "day",
    level: str = "strict",
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
    Daily land surface temperature per feature, in degrees Celsius.

    Args:
        from_date (str): Start date, 'YYYY-MM-DD'.
        to_date (str): End date, 'YYYY-MM-DD', included.
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        band (str): "day" or "night" overpass. Default="day".
        level (str): QC filter, "strict" or "moderate". Default="strict".
        stat (Union[str, Reducer]): Statistic per day and feature. Default="mean".
        scale (float): Nominal scale in meters. Default=1000.
        with_geometry (bool): Return a GeoDataFrame with the region geometries. Default=True.
        quiet (bool): Suppress the progress bar. Default=False.
        force (bool): Skip the representativity check. Default=False.
        backend (Union[str, ReductionBackend, None]): Reduction backend. Defaults to Earth Engine.
        config (Optional[DatasetConfig]): Dataset identifiers. Defaults to DatasetConfig.default().
        **options: Passed to the backend reduction call.

    Returns:
        pd.DataFrame: Long table with the region attributes and the columns date, variable, value.
    """
    start = parse_date(from_date, "from")
    end = parse_date(to_date, "to")
    if end < start:
        raise ValueError("Parameter 'to' must be greater than or equal to 'from'")

    lst_band, qc_band, max_quality = _select_bands(band, level)
    stat = resolve_reducer(stat)
    entry = (config or DatasetConfig.default()).get("lst")
    check_year_range(start.year, end.year, entry.start_year, entry.end_year)

    region = as_region(region)
    if not force:
        check_representativity(region, scale=scale)

    image = _surface_temperature_image(entry, start, end, lst_band, qc_band, max_quality)

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

    value_columns = [c for c in wide.columns if _DATE_PATTERN.match(str(c))]
    tidy = pivot_longer(wide, value_columns, names_to="date", values_to="value")
    tidy["date"] = tidy["date"].map(_band_date)
    tidy["variable"] = f"lst_{band}"
    return relocate_before_geometry(tidy, ["date", "variable", "value"])
