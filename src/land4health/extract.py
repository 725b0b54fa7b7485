# src/land4health/extract.py

"""
This module performs per-feature zonal extraction through a remote reduction backend.

A region is split into single features and the backend is called once per
feature, in order, so that large regions stay under the request limits of the
remote service and progress can be reported after every feature. Results are
concatenated by column name: a column missing for some features is filled
with NaN for them.
"""

import logging
from typing import Any, List, Optional, Union

import geopandas as gpd
import pandas as pd
import polars as pl

from land4health.errors import BackendCallFailure
from land4health.reducers import Reducer, resolve_reducer
from land4health.progress import ProgressSink, TqdmProgress
from land4health.backend import ReductionBackend, get_backend
from land4health.region import Region, as_region, split_region

log = logging.getLogger(__name__)

__all__ = [
    "extract_by_feature",
    "extract_to_polars"
]

def _notify(sink: Optional[ProgressSink], method: str, *args) -> Optional[ProgressSink]:
    """
    Call a progress sink method, disabling the sink if it raises.

    Returns the sink, or None once it has failed.
    """
    if sink is None:
        return None
    try:
        getattr(sink, method)(*args)
        return sink
    except Exception as e:
        log.warning(f"Progress reporting disabled after error in {method}(): {e}")
        return None

def _reduce_feature(
    backend: ReductionBackend,
    image: Any,
    feature: Region,
    reducer: Reducer,
    scale: float,
    index: int,
    total: int,
    options: dict
) -> pd.DataFrame:
    try:
        values = backend.reduce(image, feature, reducer, scale, **options)
    except BackendCallFailure:
        raise
    except Exception as e:
        raise BackendCallFailure(
            f"Reduction failed for feature {index + 1}/{total}: {e}",
            index=index,
            total=total
        ) from e

    if not isinstance(values, pd.DataFrame) or len(values) != 1:
        got = f"{len(values)} rows" if isinstance(values, pd.DataFrame) else type(values).__name__
        raise BackendCallFailure(
            f"Malformed response for feature {index + 1}/{total}: expected one row, got {got}",
            index=index,
            total=total
        )
    return values.reset_index(drop=True)

def _free_name(name: str, taken: set) -> str:
    """Return name, or name with the first numeric suffix not in taken."""
    candidate = name
    suffix = 2
    while candidate in taken:
        candidate = f"{name}_{suffix}"
        suffix += 1
    return candidate

def _assemble(
    region: Region,
    frames: List[pd.DataFrame],
    reducer: Reducer,
    with_geometry: bool
) -> Union[pd.DataFrame, gpd.GeoDataFrame]:
    values = pd.concat(frames, ignore_index=True, sort=False)

    attribute_cols = region.attribute_columns
    reserved = set(attribute_cols) | {region.geometry_name}
    clashes = [c for c in values.columns if c in reserved]
    if clashes:
        taken = reserved | set(values.columns)
        renamed = {}
        for c in clashes:
            renamed[c] = _free_name(f"{c}_{reducer.value}", taken)
            taken.add(renamed[c])
        log.warning(f"Value columns clash with region attributes, renaming: {renamed}")
        values = values.rename(columns=renamed)

    attributes = region.data[attribute_cols].reset_index(drop=True)
    result = pd.concat([attributes, values], axis=1)
    result.index = region.data.index

    if not with_geometry:
        return result

    geom_col = region.geometry_name
    result[geom_col] = region.data.geometry.values
    return gpd.GeoDataFrame(result, geometry=geom_col, crs=region.crs)

def extract_by_feature(
    image: Any,
    region: Any,
    scale: float,
    reducer: Union[str, Reducer] = "mean",
    backend: Union[str, ReductionBackend, None] = None,
    with_geometry: bool = False,
    quiet: bool = False,
    progress: Optional[ProgressSink] = None,
    **options
) -> Union[pd.DataFrame, gpd.GeoDataFrame]:
    """
    Reduces a raster expression over every feature of a region, one backend call per feature.

    Args:
        image (Any): Raster expression understood by the backend (ee.Image for Earth Engine).
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        scale (float): Nominal pixel size in meters at which the reduction is evaluated.
        reducer (Union[str, Reducer]): Statistic to apply. Defaults to "mean".
        backend (Union[str, ReductionBackend, None]): Backend instance or registered name. Defaults to Earth Engine.
        with_geometry (bool): Return a GeoDataFrame carrying the region geometries when True.
        quiet (bool): Suppress progress reporting. The progress sink is never touched when True.
        progress (Optional[ProgressSink]): Sink to report to. Defaults to a tqdm progress bar.
        **options: Passed verbatim to the backend reduction call.

    Returns:
        Union[pd.DataFrame, gpd.GeoDataFrame]: One row per feature, in region order, with the
            attribute columns of the region followed by the union of the reduced value columns.

    Raises:
        InvalidReducerName: If the reducer is not supported. Raised before any backend call.
        InvalidInputKind: If the region or image is not supported. Raised before any backend call.
        BackendCallFailure: If the reduction fails for any feature. No partial result is returned.
    """
    reducer = resolve_reducer(reducer)
    region = as_region(region)
    if scale is None or scale <= 0:
        raise ValueError(f"scale must be a positive number of meters. Got: {scale}")

    backend = get_backend(backend)
    backend.check_image(image)

    features = split_region(region)
    total = len(features)
    log.info(f"Extracting {reducer.value} over {total} features at {scale}m with {backend.name}")

    sink = None if quiet else (progress or TqdmProgress())
    sink = _notify(sink, "start", total, f"Extracting {reducer.value}")

    frames = []
    try:
        for index, feature in enumerate(features):
            frames.append(
                _reduce_feature(backend, image, feature, reducer, scale, index, total, options)
            )
            sink = _notify(sink, "advance")
    finally:
        _notify(sink, "close")

    return _assemble(region, frames, reducer, with_geometry)

def extract_to_polars(
    image: Any,
    region: Any,
    scale: float,
    reducer: Union[str, Reducer] = "mean",
    **kwargs
) -> pl.DataFrame:
    """
    Runs extract_by_feature and returns the result, without geometry, as a Polars DataFrame.

    Args:
        image (Any): Raster expression understood by the backend.
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        scale (float): Nominal pixel size in meters.
        reducer (Union[str, Reducer]): Statistic to apply. Defaults to "mean".
        **kwargs: Extraneous arguments passed directly to extract_by_feature.

    Returns:
        pl.DataFrame: One row per feature, in region order.
    """
    kwargs["with_geometry"] = False
    df = extract_by_feature(image, region, scale, reducer=reducer, **kwargs)
    return pl.from_dicts(df.to_dict(orient="records"), infer_schema_length=None)
