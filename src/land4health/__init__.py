# src/land4health/__init__.py
#
# Copyright (c) The land4health project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
land4health extracts remote-sensing metrics over regions for spatial health analysis.
"""

__version__ = "0.1.0"

from .errors import (
    Land4HealthError,
    InvalidInputKind,
    InvalidReducerName,
    BackendCallFailure,
    RepresentativityWarning
)

from .reducers import (
    Reducer,
    resolve_reducer
)

from .config import (
    DatasetEntry,
    DatasetConfig
)

from .extract import (
    extract_by_feature,
    extract_to_polars
)

from .representativity import (
    RepresentativityVerdict,
    PixelCoverage,
    check_representativity,
    check_pixel_coverage
)

from .catalog import (
    list_metrics,
    summarize_providers
)

__all__ = [
    "__version__",

    # Errors
    "Land4HealthError",
    "InvalidInputKind",
    "InvalidReducerName",
    "BackendCallFailure",
    "RepresentativityWarning",

    # Reducers and configuration
    "Reducer",
    "resolve_reducer",
    "DatasetEntry",
    "DatasetConfig",

    # Extraction
    "extract_by_feature",
    "extract_to_polars",
    "RepresentativityVerdict",
    "PixelCoverage",
    "check_representativity",
    "check_pixel_coverage",

    # Catalog
    "list_metrics",
    "summarize_providers"
]
