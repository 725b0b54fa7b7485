# src/land4health/indicators/accessibility.py

"""
This module extracts travel time to the nearest city or healthcare facility
from the Malaria Atlas Project accessibility surfaces (minutes, ~1 km).
"""

import logging
from typing import Any, Optional, Tuple, Union

import ee
import pandas as pd

from land4health.backend import ReductionBackend
from land4health.config import DatasetConfig
from land4health.extract import extract_by_feature
from land4health.reducers import Reducer, resolve_reducer
from land4health.representativity import check_representativity
from land4health.region import as_region
from .tidy import pivot_longer, relocate_before_geometry

log = logging.getLogger(__name__)

__all__ = [
    "travel_time"
]

ACCESSIBILITY_SCALE = 1000

# destination -> transport_mode -> (dataset key, band, output name)
_LAYERS = {
    "cities": {
        "all": ("accessibility_cities", "accessibility", "city_access"),
    },
    "healthcare": {
        "all": ("accessibility_healthcare", "accessibility", "healthcare_access"),
        "walking_only": ("accessibility_healthcare", "accessibility_walking_only", "healthcare_access"),
    },
}

def _select_layer(destination: str, transport_mode: str) -> Tuple[str, str, str]:
    if destination not in _LAYERS:
        raise ValueError(
            f"Invalid destination '{destination}'. Must be one of: {sorted(_LAYERS)}"
        )
    modes = _LAYERS[destination]
    if transport_mode not in modes:
        raise ValueError(
            f"Invalid transport_mode '{transport_mode}' for destination '{destination}'. "
            f"Must be one of: {sorted(modes)}"
        )
    return modes[transport_mode]

def _travel_time_image(asset_id: str, band: str, output: str) -> ee.Image:
    return ee.Image(asset_id).select(band).rename(output)

def travel_time(
    region: Any,
    destination: str = "cities",
    transport_mode: str = "all",
    stat: Union[str, Reducer] = "mean",
    with_geometry: bool = False,
    quiet: bool = False,
    force: bool = False,
    backend: Union[str, ReductionBackend, None] = None,
    config: Optional[DatasetConfig] = None,
    **options
) -> pd.DataFrame:
    """
    Travel time in minutes to the nearest city or healthcare facility.

    Args:
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        destination (str): "cities" or "healthcare". Default="cities".
        transport_mode (str): "all", or "walking_only" for healthcare. Default="all".
        stat (Union[str, Reducer]): Statistic per feature. Default="mean".
        with_geometry (bool): Return a GeoDataFrame with the region geometries. Default=False.
        quiet (bool): Suppress the progress bar. Default=False.
        force (bool): Skip the representativity check. Default=False.
        backend (Union[str, ReductionBackend, None]): Reduction backend. Defaults to Earth Engine.
        config (Optional[DatasetConfig]): Dataset identifiers. Defaults to DatasetConfig.default().
        **options: Passed to the backend reduction call.

    Returns:
        pd.DataFrame: Long table with the region attributes and the columns variable, value.
    """
    key, band, output = _select_layer(destination, transport_mode)
    stat = resolve_reducer(stat)
    entry = (config or DatasetConfig.default()).get(key)

    region = as_region(region)
    if not force:
        check_representativity(region, scale=ACCESSIBILITY_SCALE)

    image = _travel_time_image(entry.asset_id, band, output)

    wide = extract_by_feature(
        image,
        region,
        scale=ACCESSIBILITY_SCALE,
        reducer=stat,
        backend=backend,
        with_geometry=with_geometry,
        quiet=quiet,
        **options
    )

    tidy = pivot_longer(wide, [output], names_to="variable", values_to="value")
    return relocate_before_geometry(tidy, ["variable", "value"])
