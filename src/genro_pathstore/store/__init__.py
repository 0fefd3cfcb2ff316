# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathStore package - Nested key-value container with dotted paths.

The package is organized into:
- core: Main PathStore class with access, merge, iteration and JSON
- paths: Segment resolution and the read/write/delete walks
- loading: Coercion of construction and merge sources into dicts
- merging: Shallow and recursive replace

Example:
    >>> from genro_pathstore import PathStore
    >>> store = PathStore()
    >>> store.set('config.name', 'MyApp')
    >>> store['config.name']
    'MyApp'
"""

from .core import PathStore

__all__ = ["PathStore"]
