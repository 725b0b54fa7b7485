# src/land4health/reducers.py

"""
This module defines the set of zonal statistics supported by the extractors.
"""

import logging
from enum import Enum
from typing import Union

from .errors import InvalidReducerName

log = logging.getLogger(__name__)

__all__ = [
    "Reducer",
    "resolve_reducer"
]

class Reducer(Enum):
    """
    Zonal statistic applied to the pixels of a feature.

    Values match the reducer names of the remote backend.
    """
    MEAN = "mean"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"
    STD_DEV = "stdDev"
    FIRST = "first"

def resolve_reducer(reducer: Union[str, Reducer]) -> Reducer:
    """
    Normalize a reducer given as an enum member or its exact string value.

    Raises:
        InvalidReducerName: If the reducer is not one of the supported names.
    """
    if isinstance(reducer, Reducer):
        return reducer
    try:
        return Reducer(reducer)
    except ValueError:
        valid = [r.value for r in Reducer]
        raise InvalidReducerName(f"Invalid reducer '{reducer}'. Must be one of: {valid}") from None
