# src/land4health/progress.py

"""
This module provides the progress sinks used by the per-feature extractor.

A sink is told the total number of units once, then advanced by one unit per
completed feature. NullProgress is used whenever progress reporting is off.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from tqdm.auto import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

log = logging.getLogger(__name__)

__all__ = [
    "ProgressSink",
    "NullProgress",
    "TqdmProgress"
]

class ProgressSink(ABC):
    """Interface for anything that can display extraction progress."""

    @abstractmethod
    def start(self, total: int, description: str = "") -> None:
        ...

    @abstractmethod
    def advance(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

class NullProgress(ProgressSink):
    def start(self, total: int, description: str = "") -> None:
        pass

    def advance(self) -> None:
        pass

    def close(self) -> None:
        pass

class TqdmProgress(ProgressSink):
    """
    Console progress bar backed by tqdm.

    Args:
        unit: Label of one unit of work. Default="feature".
        leave: Keep the finished bar on screen. Default=True.
    """
    def __init__(self, unit: str = "feature", leave: bool = True):
        self.unit = unit
        self.leave = leave
        self._bar: Optional[tqdm] = None
        self._redirect = None

    def start(self, total: int, description: str = "") -> None:
        self.close()
        # route log records through tqdm while the bar is open
        self._redirect = logging_redirect_tqdm()
        self._redirect.__enter__()
        self._bar = tqdm(total=total, desc=description or None, unit=self.unit, leave=self.leave)

    def advance(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
        if self._redirect is not None:
            self._redirect.__exit__(None, None, None)
            self._redirect = None
