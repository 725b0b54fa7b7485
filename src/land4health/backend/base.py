# src/land4health/backend/base.py

"""
This module defines the contract between the extractors and a remote raster
reduction service.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

from land4health.errors import InvalidInputKind
from land4health.reducers import Reducer
from land4health.region.layer import Region

log = logging.getLogger(__name__)

__all__ = [
    "ReductionBackend"
]

class ReductionBackend(ABC):
    """
    A service able to reduce a raster expression over polygon features.

    Implementations return only the reduced values; attribute columns and
    geometry are attached by the extractor.
    """

    name: str = "abstract"

    @abstractmethod
    def reduce(
        self,
        image: Any,
        region: Region,
        reducer: Reducer,
        scale: float,
        **options
    ) -> pd.DataFrame:
        """
        Reduce the image over every feature of the region.

        Args:
            image: Backend-specific raster expression.
            region: Features to reduce over (one, when called by the extractor).
            reducer: Statistic to apply.
            scale: Nominal pixel size in meters.
            **options: Passed verbatim to the remote call.

        Returns:
            pd.DataFrame: One row per feature, one column per output band.
        """

    def check_image(self, image: Any) -> None:
        """Raise InvalidInputKind if the image cannot be reduced by this backend."""
        if image is None:
            raise InvalidInputKind("Image must not be None.")

    @abstractmethod
    def pixel_count_image(self, image: Any, scale: float) -> Any:
        """
        Build a single-band expression named 'pixel_count' whose per-feature
        sum is the number of valid pixels of the image at the given scale.
        """

    def __repr__(self):
        return f"<{type(self).__name__} name={self.name}>"
