# src/land4health/region/__init__.py
#
# Copyright (c) The land4health project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
The region subpackage provides the data structure for areas of interest,
adapters from GeoPandas objects and files, and the geometric operations
needed before extraction.
"""

# Data structure and adapters
from .layer import (
    Region
)

from .io import (
    load_region,
    as_region,
    resolve_region
)

# Geometric operations
from .geom import (
    EQUAL_AREA_CRS,
    split_region,
    to_crs,
    feature_areas_km2
)

__all__ = [
    # Data structure and adapters
    "Region",
    "load_region",
    "as_region",
    "resolve_region",

    # Geometric operations
    "EQUAL_AREA_CRS",
    "split_region",
    "to_crs",
    "feature_areas_km2"
]
