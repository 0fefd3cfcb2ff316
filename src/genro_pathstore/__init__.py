# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-PathStore - Nested key-value container with dotted path access.

A lightweight, zero-dependency library providing dict-backed storage
addressed by dotted paths, for the Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .exceptions import (
    EncodingError,
    KeyNotFoundError,
    PathStoreError,
)
from .store import PathStore

__all__ = [
    # Core classes
    "PathStore",
    # Exceptions
    "PathStoreError",
    "KeyNotFoundError",
    "EncodingError",
]
