# src/land4health/catalog.py

"""
This module lists the metrics available in land4health from a DatasetConfig.
"""

import logging
from dataclasses import asdict
from typing import Optional

import polars as pl

from land4health.config import DatasetConfig

log = logging.getLogger(__name__)

__all__ = [
    "list_metrics",
    "summarize_providers"
]

CATALOG_SCHEMA = {
    "metric": pl.Utf8,
    "category": pl.Utf8,
    "provider": pl.Utf8,
    "key": pl.Utf8,
    "asset_id": pl.Utf8,
    "resolution_m": pl.Float64,
    "start_year": pl.Int64,
    "end_year": pl.Int64,
    "url": pl.Utf8,
}

def _check_scalar_str(value, arg: str) -> None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"`{arg}` must be a single string or None.")

def _catalog_frame(config: DatasetConfig) -> pl.DataFrame:
    rows = [{k: asdict(entry)[k] for k in CATALOG_SCHEMA} for entry in config]
    for row in rows:
        row["resolution_m"] = float(row["resolution_m"])
    return pl.DataFrame(rows, schema=CATALOG_SCHEMA)

def list_metrics(
    category: Optional[str] = None,
    metric: Optional[str] = None,
    provider: Optional[str] = None,
    config: Optional[DatasetConfig] = None
) -> pl.DataFrame:
    """
    Returns the metadata of every metric, optionally filtered.

    Args:
        category (Optional[str]): Keep only this thematic category.
        metric (Optional[str]): Keep only this metric short name.
        provider (Optional[str]): Keep only this provider.
        config (Optional[DatasetConfig]): Datasets to list. Defaults to DatasetConfig.default().

    Returns:
        pl.DataFrame: One row per dataset.

    Raises:
        TypeError: If a filter is not a string or None.
        ValueError: If no metric matches the filters.
    """
    _check_scalar_str(category, "category")
    _check_scalar_str(metric, "metric")
    _check_scalar_str(provider, "provider")

    df = _catalog_frame(config or DatasetConfig.default())

    if category is not None:
        df = df.filter(pl.col("category") == category)
    if metric is not None:
        df = df.filter(pl.col("metric") == metric)
    if provider is not None:
        df = df.filter(pl.col("provider") == provider)

    if df.height == 0:
        raise ValueError("No metrics matched your query.")
    return df

def summarize_providers(config: Optional[DatasetConfig] = None) -> pl.DataFrame:
    """Number of datasets published by each provider, sorted by provider name."""
    df = _catalog_frame(config or DatasetConfig.default())
    return (
        df.group_by("provider")
        .agg(pl.len().alias("metrics_counts"))
        .sort("provider")
    )
