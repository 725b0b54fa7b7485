# src/land4health/representativity.py

"""
This module checks whether a region is large enough for a raster reduction
at a given pixel resolution to be meaningful.

The checks are advisory: they emit a RepresentativityWarning and return a
verdict, and never raise for a small region.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Any, Optional, Union

from land4health.errors import RepresentativityWarning
from land4health.backend import ReductionBackend, get_backend
from land4health.extract import extract_by_feature
from land4health.region import as_region, feature_areas_km2

log = logging.getLogger(__name__)

__all__ = [
    "RepresentativityVerdict",
    "PixelCoverage",
    "check_representativity",
    "check_pixel_coverage"
]

@dataclass(frozen=True)
class RepresentativityVerdict:
    """
    Outcome of an area-based representativity check.

    Args:
        is_representative: False when the smallest feature is below the required area.
        min_area_km2: Area of the smallest feature, in km².
        required_area_km2: Footprint of min_pixels pixels at the given scale, in km².
        scale: Pixel size in meters used for the check.
        min_pixels: Number of pixels the smallest feature must cover.
    """
    is_representative: bool
    min_area_km2: float
    required_area_km2: float
    scale: float
    min_pixels: float = 1

    def __bool__(self) -> bool:
        return self.is_representative

@dataclass(frozen=True)
class PixelCoverage:
    """
    Outcome of a pixel-count representativity check evaluated by the backend.

    Args:
        is_representative: False when any feature covers fewer than min_pixels valid pixels.
        min_pixel_count: Smallest per-feature valid pixel count (NaN if outside the image).
        min_pixels: Required number of valid pixels.
        scale: Pixel size in meters used for the check.
    """
    is_representative: bool
    min_pixel_count: float
    min_pixels: float
    scale: float

    def __bool__(self) -> bool:
        return self.is_representative

def check_representativity(
    region: Any,
    scale: float,
    min_pixels: float = 1
) -> RepresentativityVerdict:
    """
    Compares the smallest feature area of a region with the pixel footprint at a given scale.

    Args:
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        scale (float): Nominal pixel size in meters (e.g. 30 for Hansen, 1000 for MODIS).
        min_pixels (float): Number of pixels the smallest feature must cover. Default=1.

    Returns:
        RepresentativityVerdict: Verdict with the observed and required areas, on both outcomes.

    Raises:
        InvalidInputKind: If the region is unsupported or has no CRS.
        ValueError: If scale or min_pixels is not positive.
    """
    if scale is None or scale <= 0:
        raise ValueError(f"scale must be a positive number of meters. Got: {scale}")
    if min_pixels <= 0:
        raise ValueError(f"min_pixels must be positive. Got: {min_pixels}")

    areas = feature_areas_km2(as_region(region))
    min_area = float(areas.min())
    required_area = min_pixels * scale ** 2 / 1e6

    verdict = RepresentativityVerdict(
        is_representative=not (min_area < required_area),
        min_area_km2=min_area,
        required_area_km2=required_area,
        scale=scale,
        min_pixels=min_pixels
    )

    if verdict.is_representative:
        log.debug(f"Region is representative at {scale}m: smallest feature {min_area:.6g} km²")
        return verdict

    msg = (
        f"The region is too small to be representative at {scale}m resolution. "
        f"Minimum required area: {required_area:.6g} km². "
        f"Smallest feature area: {min_area:.6g} km². "
        f"Consider enlarging or buffering the region, or pass force=True to skip this check."
    )
    log.warning(msg)
    warnings.warn(msg, RepresentativityWarning, stacklevel=2)
    return verdict

def check_pixel_coverage(
    image: Any,
    region: Any,
    scale: float = 30,
    min_pixels: float = 2,
    backend: Union[str, ReductionBackend, None] = None,
    quiet: bool = True
) -> PixelCoverage:
    """
    Counts the valid pixels of an image inside every feature and compares the smallest count with min_pixels.

    Args:
        image (Any): Raster expression understood by the backend.
        region (Any): Region, GeoDataFrame, GeoSeries or path to a vector file.
        scale (float): Pixel size in meters. Default=30.
        min_pixels (float): Required valid pixels per feature. Default=2.
        backend (Union[str, ReductionBackend, None]): Backend instance or registered name.
        quiet (bool): Suppress the progress bar of the underlying extraction. Default=True.

    Returns:
        PixelCoverage: Coverage verdict, on both outcomes.
    """
    backend = get_backend(backend)
    count_image = backend.pixel_count_image(image, scale)

    counts = extract_by_feature(
        count_image,
        region,
        scale=scale,
        reducer="sum",
        backend=backend,
        quiet=quiet
    )
    if "pixel_count" in counts.columns:
        values = counts["pixel_count"].astype(float)
    else:
        values = None

    if values is None or values.isna().any():
        msg = "Pixel count result contains missing values, possibly outside the image extent."
        log.warning(msg)
        warnings.warn(msg, RepresentativityWarning, stacklevel=2)
        return PixelCoverage(False, math.nan, min_pixels, scale)

    min_count = float(values.min())
    if min_count < min_pixels:
        msg = (
            f"The region does not cover enough pixels to be representative. "
            f"Minimum required: {min_pixels} pixels at {scale}m resolution. "
            f"Smallest feature covers: {round(min_count, 2)} pixels."
        )
        log.warning(msg)
        warnings.warn(msg, RepresentativityWarning, stacklevel=2)
        return PixelCoverage(False, min_count, min_pixels, scale)

    return PixelCoverage(True, min_count, min_pixels, scale)
