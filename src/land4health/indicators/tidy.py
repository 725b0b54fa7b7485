# src/land4health/indicators/tidy.py

"""
This module reshapes wide extraction results (one column per band) into tidy long tables.
"""

import logging
from typing import List, Sequence, Union

import geopandas as gpd
import pandas as pd

log = logging.getLogger(__name__)

__all__ = [
    "pivot_longer",
    "relocate_before_geometry"
]

def pivot_longer(
    frame: Union[pd.DataFrame, gpd.GeoDataFrame],
    value_columns: Sequence[str],
    names_to: str = "name",
    values_to: str = "value"
) -> Union[pd.DataFrame, gpd.GeoDataFrame]:
    """
    Stack value columns into (names_to, values_to) pairs.

    Rows come out feature-major: all values of the first feature, in the
    order of value_columns, then the second feature, and so on. Remaining
    columns are repeated on every row; geometry, if any, stays last.
    """
    value_columns = list(value_columns)
    missing = [c for c in value_columns if c not in frame.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")

    geom_col = frame.geometry.name if isinstance(frame, gpd.GeoDataFrame) else None
    id_cols = [c for c in frame.columns if c not in value_columns and c != geom_col]
    work = pd.DataFrame(frame[id_cols + value_columns]).reset_index(drop=True)
    work["_feature"] = range(len(work))

    long = work.melt(
        id_vars=id_cols + ["_feature"],
        value_vars=value_columns,
        var_name=names_to,
        value_name=values_to
    )
    long["_position"] = long[names_to].map({c: i for i, c in enumerate(value_columns)})
    long = long.sort_values(["_feature", "_position"], kind="mergesort").reset_index(drop=True)
    long = long[id_cols + [names_to, values_to, "_feature"]].copy()

    if geom_col:
        long[geom_col] = frame.geometry.values.take(long["_feature"].to_numpy())
        long = long.drop(columns="_feature")
        return gpd.GeoDataFrame(long, geometry=geom_col, crs=frame.crs)
    return long.drop(columns="_feature")

def relocate_before_geometry(frame: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Move columns to the end of the table, keeping the geometry column last."""
    geom_col = frame.geometry.name if isinstance(frame, gpd.GeoDataFrame) else None
    others = [c for c in frame.columns if c not in columns and c != geom_col]
    return frame[others + columns + ([geom_col] if geom_col else [])]
