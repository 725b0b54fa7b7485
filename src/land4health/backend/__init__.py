# src/land4health/backend/__init__.py
#
# Copyright (c) The land4health project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
The backend subpackage provides the interface to the remote raster reduction
service and its Earth Engine implementation.
"""

from .base import (
    ReductionBackend
)

from .factory import (
    get_backend,
    register_backend
)

__all__ = [
    "ReductionBackend",
    "get_backend",
    "register_backend"
]
