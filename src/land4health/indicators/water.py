# src/land4health/indicators/water.py

"""
This module extracts the annual proportion of each feature covered by surface water,
from the JRC Global Surface Water yearly history (waterClass 2 = seasonal, 3 = permanent).
"""

import datetime
import logging
from typing import Any, List, Optional, Union

import ee
import pandas as pd

from land4health.backend import ReductionBackend
from land4health.config import DatasetConfig, DatasetEntry
from land4health.extract import extract_by_feature
from land4health.representativity import check_representativity
from land4health.region import as_region, feature_areas_km2
from .tidy import pivot_longer, relocate_before_geometry
from .validation import check_year, check_year_range

log = logging.getLogger(__name__)

__all__ = [
    "water_proportion"
]

WATER_SCALE = 30
SEASONAL_WATER = 2

def _band_name(year: int) -> str:
    return f"water_{year}"

def _water_area_image(entry: DatasetEntry, years: List[int]) -> ee.Image:
    history = ee.ImageCollection(entry.asset_id)
    yearly = [
        ee.Image(history.filter(ee.Filter.eq("year", year)).first())
        .select("waterClass")
        .gte(SEASONAL_WATER)
        .rename(_band_name(year))
        for year in years
    ]
    return ee.Image.cat(yearly).multiply(ee.Image.pixelArea()).divide(1e6)

def water_proportion(
    from_year: int,
    to_year: int,
    region: Any,
    with_geometry: bool = True,
    quiet: bool = False,
    force: bool = False,
    backend: Union[str, ReductionBackend, None] = None,
    config: Optional[DatasetConfig] = None,
    **options
) -> pd.DataFrame:
    """
    Share of each feature's area covered by seasonal or permanent water, per year.

    Values are ratios between 0 and 1: water area in km² (summed at 30 m)
    divided by the feature area computed in an equal-area CRS.

    Args:
        from_year (int): First year, between 1984 and 2021.
        to_year (int): Last year, between from_year and 2021.
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        with_geometry (bool): Return a GeoDataFrame with the region geometries. Default=True.
        quiet (bool): Suppress the progress bar. Default=False.
        force (bool): Skip the representativity check. Default=False.
        backend (Union[str, ReductionBackend, None]): Reduction backend. Defaults to Earth Engine.
        config (Optional[DatasetConfig]): Dataset identifiers. Defaults to DatasetConfig.default().
        **options: Passed to the backend reduction call.

    Returns:
        pd.DataFrame: Long table with the region attributes and the columns date, variable, value.
    """
    check_year(from_year, "from")
    check_year(to_year, "to")
    entry = (config or DatasetConfig.default()).get("surface_water")
    check_year_range(from_year, to_year, entry.start_year, entry.end_year)

    region = as_region(region)
    if not force:
        check_representativity(region, scale=WATER_SCALE)

    years = list(range(from_year, to_year + 1))
    image = _water_area_image(entry, years)

    wide = extract_by_feature(
        image,
        region,
        scale=WATER_SCALE,
        reducer="sum",
        backend=backend,
        with_geometry=with_geometry,
        quiet=quiet,
        **options
    )

    areas = feature_areas_km2(region).to_numpy()
    band_years = {_band_name(year): year for year in years}
    value_columns = [c for c in wide.columns if c in band_years]
    for column in value_columns:
        wide[column] = wide[column].to_numpy() / areas

    tidy = pivot_longer(wide, value_columns, names_to="date", values_to="value")
    tidy["date"] = tidy["date"].map(lambda band: datetime.date(band_years[band], 1, 1))
    tidy["variable"] = "water_proportion"
    return relocate_before_geometry(tidy, ["date", "variable", "value"])
