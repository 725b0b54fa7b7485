# src/land4health/backend/factory.py

"""
This module resolves backend names to ReductionBackend instances.

The Earth Engine backend is imported on demand so that land4health can be
used with other backends without earthengine-api being importable.
"""

import logging
from typing import Callable, Dict, Union

from .base import ReductionBackend

log = logging.getLogger(__name__)

__all__ = [
    "get_backend",
    "register_backend"
]

def _earthengine(**kwargs) -> ReductionBackend:
    from .earthengine import EarthEngineBackend
    return EarthEngineBackend(**kwargs)

_REGISTRY: Dict[str, Callable[..., ReductionBackend]] = {
    "earthengine": _earthengine,
}

def register_backend(name: str, constructor: Callable[..., ReductionBackend]) -> None:
    _REGISTRY[name] = constructor

def get_backend(backend: Union[str, ReductionBackend, None] = None, **kwargs) -> ReductionBackend:
    """
    Return a backend instance.

    Args:
        backend: A backend instance (returned as is), a registered name, or None for "earthengine".
        **kwargs: Passed to the backend constructor when a name is given.
    """
    if isinstance(backend, ReductionBackend):
        return backend
    name = backend or "earthengine"
    try:
        constructor = _REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown backend '{name}'. Must be one of: {sorted(_REGISTRY)}") from None
    return constructor(**kwargs)
