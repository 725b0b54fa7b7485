# src/land4health/indicators/__init__.py
#
# Copyright (c) The land4health project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
The indicators subpackage provides ready-made extractions of remote-sensing
metrics for spatial health analysis, returned as tidy long tables.
"""

# Indicators
from .deforestation import (
    forest_loss
)

from .lights import (
    night_lights
)

from .accessibility import (
    travel_time
)

from .temperature import (
    surface_temperature
)

from .water import (
    water_proportion
)

# Reshaping helpers
from .tidy import (
    pivot_longer,
    relocate_before_geometry
)

__all__ = [
    # Indicators
    "forest_loss",
    "night_lights",
    "travel_time",
    "surface_temperature",
    "water_proportion",

    # Reshaping helpers
    "pivot_longer",
    "relocate_before_geometry"
]
