# src/land4health/config.py

"""
This module defines the dataset configuration shared by the indicators and the metrics catalog.

A DatasetConfig is built once (usually with DatasetConfig.default()) and passed
to whichever function needs dataset identifiers. Tests substitute assets with
with_overrides().
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

log = logging.getLogger(__name__)

__all__ = [
    "DatasetEntry",
    "DatasetConfig"
]

@dataclass(frozen=True)
class DatasetEntry:
    """
    A remote dataset backing one metric.

    Args:
        key: Identifier used by the indicators (e.g. "hansen").
        metric: Short metric name shown in the catalog.
        category: Thematic category.
        provider: Institution or collection publishing the data.
        asset_id: Backend resource identifier.
        resolution_m: Nominal pixel size in meters.
        start_year: First year covered.
        end_year: Last year covered.
        url: Documentation page of the dataset.
        bands: Band names used by the indicator.
    """
    key: str
    metric: str
    category: str
    provider: str
    asset_id: str
    resolution_m: float
    start_year: int
    end_year: int
    url: str = ""
    bands: Tuple[str, ...] = field(default_factory=tuple)

class DatasetConfig:
    def __init__(self, entries: Optional[List[DatasetEntry]] = None):
        self._entries: Dict[str, DatasetEntry] = {}
        for entry in entries or []:
            self.register(entry)

    @classmethod
    def default(cls) -> "DatasetConfig":
        return cls([
            DatasetEntry(
                key="hansen",
                metric="forest_loss",
                category="Environment",
                provider="Hansen Global Forest Change",
                asset_id="UMD/hansen/global_forest_change_2023_v1_11",
                resolution_m=30,
                start_year=2001,
                end_year=2023,
                url="https://developers.google.com/earth-engine/datasets/catalog/UMD_hansen_global_forest_change_2023_v1_11",
                bands=("lossyear",)
            ),
            DatasetEntry(
                key="surface_water",
                metric="water_proportion",
                category="Environment",
                provider="JRC Global Surface Water",
                asset_id="JRC/GSW1_4/YearlyHistory",
                resolution_m=30,
                start_year=1984,
                end_year=2021,
                url="https://developers.google.com/earth-engine/datasets/catalog/JRC_GSW1_4_YearlyHistory",
                bands=("waterClass",)
            ),
            DatasetEntry(
                key="lst",
                metric="surface_temperature",
                category="Climate",
                provider="MODIS",
                asset_id="MODIS/061/MOD11A1",
                resolution_m=1000,
                start_year=2000,
                end_year=2024,
                url="https://developers.google.com/earth-engine/datasets/catalog/MODIS_061_MOD11A1",
                bands=("LST_Day_1km", "QC_Day", "LST_Night_1km", "QC_Night")
            ),
            DatasetEntry(
                key="night_lights_dmsp",
                metric="night_lights",
                category="Human intervention",
                provider="Harmonized Global Night Time Lights",
                asset_id="projects/sat-io/open-datasets/Harmonized_NTL/dmsp",
                resolution_m=1000,
                start_year=1992,
                end_year=2013,
                url="https://gee-community-catalog.org/projects/hntl/",
                bands=("b1",)
            ),
            DatasetEntry(
                key="night_lights_viirs",
                metric="night_lights",
                category="Human intervention",
                provider="Harmonized Global Night Time Lights",
                asset_id="projects/sat-io/open-datasets/Harmonized_NTL/viirs",
                resolution_m=1000,
                start_year=2014,
                end_year=2021,
                url="https://gee-community-catalog.org/projects/hntl/",
                bands=("b1",)
            ),
            DatasetEntry(
                key="accessibility_cities",
                metric="travel_time_cities",
                category="Accessibility",
                provider="Malaria Atlas Project",
                asset_id="Oxford/MAP/accessibility_to_cities_2015_v1_0",
                resolution_m=1000,
                start_year=2015,
                end_year=2015,
                url="https://developers.google.com/earth-engine/datasets/catalog/Oxford_MAP_accessibility_to_cities_2015_v1_0",
                bands=("accessibility",)
            ),
            DatasetEntry(
                key="accessibility_healthcare",
                metric="travel_time_healthcare",
                category="Accessibility",
                provider="Malaria Atlas Project",
                asset_id="Oxford/MAP/accessibility_to_healthcare_2019",
                resolution_m=1000,
                start_year=2019,
                end_year=2019,
                url="https://developers.google.com/earth-engine/datasets/catalog/Oxford_MAP_accessibility_to_healthcare_2019",
                bands=("accessibility", "accessibility_walking_only")
            ),
        ])

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping]) -> "DatasetConfig":
        """
        Build a config from plain data, e.g. parsed JSON.

        Expects {key: {metric, category, provider, asset_id, resolution_m, start_year, end_year, ...}}.
        """
        entries = []
        for key, values in data.items():
            values = dict(values)
            values["bands"] = tuple(values.get("bands", ()))
            try:
                entries.append(DatasetEntry(key=key, **values))
            except TypeError as e:
                raise ValueError(f"Invalid dataset entry '{key}': {e}") from e
        return cls(entries)

    def get(self, key: str) -> DatasetEntry:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"Unknown dataset '{key}'. Available: {sorted(self._entries)}") from None

    def register(self, entry: DatasetEntry) -> None:
        if entry.key in self._entries:
            log.debug(f"Replacing dataset entry '{entry.key}'")
        self._entries[entry.key] = entry

    def with_overrides(self, **asset_ids: str) -> "DatasetConfig":
        """Return a copy where the given keys point to other asset identifiers."""
        unknown = set(asset_ids) - set(self._entries)
        if unknown:
            raise KeyError(f"Unknown datasets: {sorted(unknown)}")
        return DatasetConfig([
            replace(entry, asset_id=asset_ids.get(key, entry.asset_id))
            for key, entry in self._entries.items()
        ])

    def __iter__(self) -> Iterator[DatasetEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
