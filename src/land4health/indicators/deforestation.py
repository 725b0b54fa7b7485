# src/land4health/indicators/deforestation.py

"""
This module extracts yearly forest loss area from the Hansen Global Forest Change dataset.

The lossyear band encodes the year of stand-replacement disturbance as 1..23
for 2001..2023 and 0 for no loss. One band per requested year is built
server-side as (lossyear == year) * pixel area in km², then summed per feature.
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
from land4health.region import as_region
from .tidy import pivot_longer, relocate_before_geometry
from .validation import check_year, check_year_range

log = logging.getLogger(__name__)

__all__ = [
    "forest_loss"
]

HANSEN_SCALE = 30

def _band_name(year: int) -> str:
    return f"loss_{year}"

def _forest_loss_image(entry: DatasetEntry, years: List[int]) -> ee.Image:
    lossyear = ee.Image(entry.asset_id).select("lossyear")
    codes = [year - 2000 for year in years]
    return (
        lossyear.eq(ee.Image.constant(codes))
        .rename([_band_name(year) for year in years])
        .multiply(ee.Image.pixelArea())
        .divide(1e6)
    )

def forest_loss(
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
    Forest loss area per feature and year, in square kilometres.

    Args:
        from_year (int): First year, between 2001 and 2023.
        to_year (int): Last year, between from_year and 2023.
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
    entry = (config or DatasetConfig.default()).get("hansen")
    check_year_range(from_year, to_year, entry.start_year, entry.end_year)

    region = as_region(region)
    if not force:
        check_representativity(region, scale=HANSEN_SCALE)

    years = list(range(from_year, to_year + 1))
    image = _forest_loss_image(entry, years)

    wide = extract_by_feature(
        image,
        region,
        scale=HANSEN_SCALE,
        reducer="sum",
        backend=backend,
        with_geometry=with_geometry,
        quiet=quiet,
        **options
    )

    band_years = {_band_name(year): year for year in years}
    value_columns = [c for c in wide.columns if c in band_years]
    tidy = pivot_longer(wide, value_columns, names_to="date", values_to="value")
    tidy["date"] = tidy["date"].map(lambda band: datetime.date(band_years[band], 1, 1))
    tidy["variable"] = "forest_loss"
    return relocate_before_geometry(tidy, ["date", "variable", "value"])
