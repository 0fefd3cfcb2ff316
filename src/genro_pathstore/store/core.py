# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathStore - A nested key-value container with dotted path access.

This module provides the PathStore class, an in-memory container that keeps
its data as ordinary nested dicts and lists, and addresses it with dotted
paths. Resolved compound paths are memoized in a flat cache so repeated
reads skip the walk.

Key Features:
    - **Plain storage**: items are a regular dict, nested dicts and lists
    - **Path navigation**: dotted paths ('a.b.c'), list indexes ('items.0')
    - **Top-level priority**: a key stored directly wins over traversal,
      even when it contains a literal '.'
    - **Lookup cache**: compound reads are memoized and kept coherent
      across set/remove/merge/clear
    - **Merge**: shallow replace or recursive replace
    - **JSON projection**: the whole store or any sub-path

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - List index: 'numbers.1'
    - There is no escape for a literal '.' inside a segment: such keys are
      only reachable when stored at the top level.

Example:
    Basic usage::

        store = PathStore()
        store.set('config.database.host', 'localhost')
        store.set('config.database.port', 5432)

        print(store['config.database.host'])  # 'localhost'
        print(store.get('config.database'))  # {'host': 'localhost', 'port': 5432}

        store.merge_recursive({'config': {'database': {'port': 6432}}})
        print(store.to_json('config', indent=2))
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping, Set
from typing import Any, Iterator

from ..exceptions import EncodingError, KeyNotFoundError
from .loading import load_source
from .merging import replace, replace_recursive
from .paths import (
    MISSING,
    SEPARATOR,
    assign,
    delete,
    is_path,
    lookup,
    resolve_key,
    split_path,
)

_logger = logging.getLogger(__name__)

_COUNTABLE = (Mapping, list, tuple, Set)


class PathStore:
    """A nested key-value container with dotted path access.

    PathStore provides:
    - get(path, default) / store[path]: read values
    - set(path, value) / store[path] = value: write with autocreate
    - has(path) / path in store: existence check
    - remove(path) / del store[path]: silent removal
    - merge(source) / merge_recursive(source): combine with other data
    - to_json(path): JSON projection

    Lookups of compound paths are memoized. The cache is invalidated for
    the written path, its descendants and its ancestors on set/remove, and
    flushed entirely on merge/clear.

    Example:
        >>> store = PathStore({'name': {'first': 'John'}})
        >>> store.set('name.last', 'Doe').get('name')
        {'first': 'John', 'last': 'Doe'}
    """

    __slots__ = ('_items', '_cache', '_use_cache')

    def __init__(self, source: Any = None, *, use_cache: bool = True) -> None:
        """Initialize a PathStore.

        Args:
            source: Optional initial data. Can be:
                - PathStore: deep copy of its items
                - Mapping: shallow copy used as items
                - list/tuple: entries keyed by position (0, 1, ...)
                - record (dataclass, namedtuple, object): its public fields
                - any other value: wrapped as {0: source}
            use_cache: If True (default), compound lookups are memoized.

        Example:
            >>> PathStore({'a': 1, 'b': {'c': 2}})
            >>> PathStore([1, 2, 3, 4])
            >>> PathStore(other_store)  # copy
            >>> PathStore(settings, use_cache=False)
        """
        self._items: dict[Any, Any] = load_source(source)
        self._cache: dict[str, Any] = {}
        self._use_cache = use_cache

    @classmethod
    def new(cls, source: Any = None, **options: Any) -> PathStore:
        """Alternative constructor, handy at the start of a call chain."""
        return cls(source, **options)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing top-level keys."""
        return f"PathStore({list(self._items.keys())})"

    def __len__(self) -> int:
        """Return the number of top-level entries."""
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        """Iterate over top-level keys as they are at call time."""
        return iter(list(self._items))

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __getitem__(self, key: Any) -> Any:
        """Get value by path; missing paths return None."""
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        """Remove value by path; missing paths are ignored."""
        self.remove(key)

    @property
    def use_cache(self) -> bool:
        """True if compound lookups are memoized."""
        return self._use_cache

    # ==================== Cache ====================

    def _invalidate(self, key: Any) -> None:
        """Drop cached entries for key, its descendants and its ancestors."""
        if not self._cache:
            return
        path = str(key)
        prefix = path + SEPARATOR
        stale = [
            entry for entry in self._cache
            if entry == path
            or entry.startswith(prefix)
            or path.startswith(entry + SEPARATOR)
        ]
        for entry in stale:
            del self._cache[entry]
        if stale:
            _logger.debug("Invalidated %d cached path(s) for '%s'", len(stale), path)

    def _flush_cache(self) -> None:
        if self._cache:
            _logger.debug("Flushing %d cached path(s)", len(self._cache))
        self._cache.clear()

    # ==================== Core API ====================

    def has(self, key: Any) -> bool:
        """Check whether a top-level key or a dotted path exists.

        Args:
            key: Top-level key or dotted path.

        Returns:
            True if the key is cached, stored at the top level, or every
            segment of the path resolves.
        """
        if str(key) in self._cache:
            return True
        if resolve_key(self._items, key) is not MISSING:
            return True
        return lookup(self._items, split_path(key)) is not MISSING

    def get(self, key: Any, default: Any = None) -> Any:
        """Get the value at the given key or path.

        Resolution order: top-level key, cache, path walk. A successful walk
        is memoized under the full path.

        Args:
            key: Top-level key or dotted path.
            default: Value returned when nothing is found.

        Returns:
            The stored value, or default.

        Example:
            >>> store.get('name.first')
            'John'
            >>> store.get('name.middle', '-')
            '-'
        """
        top = resolve_key(self._items, key)
        if top is not MISSING:
            return self._items[top]

        path = str(key)
        if path in self._cache:
            return self._cache[path]

        if not is_path(path):
            return default

        value = lookup(self._items, split_path(path))
        if value is MISSING:
            return default

        if self._use_cache:
            self._cache[path] = value
        return value

    def set(self, key: Any, value: Any) -> PathStore:
        """Set a value at the given key or path, creating dicts as needed.

        Keys without a separator, and keys already stored at the top level,
        are written directly into items. Otherwise the path is walked and any
        absent or non-container segment is replaced by an empty dict.

        Args:
            key: Top-level key or dotted path.
            value: The value to store.

        Returns:
            The store itself, for chaining.

        Example:
            >>> store.set('name.first', 'John').set('name.last', 'Doe')
        """
        top = resolve_key(self._items, key)
        if top is not MISSING:
            self._items[top] = value
        elif not is_path(key):
            self._items[key] = value
        else:
            assign(self._items, split_path(key), value)

        self._invalidate(key)
        if self._use_cache:
            self._cache[str(key)] = value
        return self

    def remove(self, key: Any) -> PathStore:
        """Remove the value at the given key or path.

        A matching top-level key is removed first, then the path is walked
        and the nested entry is removed too, so a literal 'a.b' key and the
        nested 'a' -> 'b' entry both go. Paths that do not resolve are
        ignored. Removing a list entry shifts the following entries down.

        Args:
            key: Top-level key or dotted path.

        Returns:
            The store itself, for chaining.
        """
        top = resolve_key(self._items, key)
        if top is not MISSING:
            del self._items[top]

        segments = split_path(key)
        if delete(self._items, segments) and len(segments) > 1:
            # list removals shift siblings, so drop everything under the parent
            self._invalidate(SEPARATOR.join(segments[:-1]))
        self._invalidate(key)
        return self

    def merge(self, source: Any, recursive: bool = False) -> PathStore:
        """Merge another source into this store.

        Args:
            source: PathStore, mapping, sequence or record. Coerced the same
                way as the constructor source.
            recursive: If False, top-level entries of source replace those
                of the store. If True, nested containers are merged deeply
                and entries missing from source survive.

        Returns:
            The store itself, for chaining.

        Example:
            >>> store = PathStore({'first': 'John', 'last': 'Doe'})
            >>> store.merge({'first': 'Johnny'}).all()
            {'first': 'Johnny', 'last': 'Doe'}
        """
        other = load_source(source)
        if recursive:
            self._items = replace_recursive(self._items, other)
        else:
            self._items = replace(self._items, other)
        self._flush_cache()
        return self

    def merge_recursive(self, source: Any) -> PathStore:
        """Shortcut for merge(source, recursive=True)."""
        return self.merge(source, True)

    def create_from(self, key: Any) -> PathStore:
        """Create a new PathStore from the value at key.

        The value is deep-copied; a None value yields an empty store.

        Raises:
            KeyNotFoundError: If key does not exist.
        """
        if not self.has(key):
            _logger.debug("create_from: key '%s' not found", key)
            raise KeyNotFoundError(key)

        value = self.get(key)
        if value is None:
            value = {}
        return PathStore(copy.deepcopy(value), use_cache=self._use_cache)

    def append(self, value: Any) -> PathStore:
        """Store value under the next free integer key."""
        indexes = [
            k for k in self._items
            if isinstance(k, int) and not isinstance(k, bool) and k >= 0
        ]
        key = max(indexes) + 1 if indexes else 0
        self._items[key] = value
        self._invalidate(key)
        return self

    def clear(self) -> PathStore:
        """Remove all items and forget every cached path."""
        self._items = {}
        self._flush_cache()
        return self

    # ==================== Inspection ====================

    def all(self) -> dict[Any, Any]:
        """Return a shallow copy of the top-level items."""
        return dict(self._items)

    def count(self, key: Any = None) -> int:
        """Count top-level entries, or the entries of the value at key.

        Raises:
            TypeError: If the value at key is not a countable aggregate.
        """
        if key is None:
            return len(self._items)

        value = self.get(key)
        if not isinstance(value, _COUNTABLE):
            raise TypeError(
                f"value at '{key}' is not countable: {type(value).__name__}"
            )
        return len(value)

    def is_empty(self) -> bool:
        return not self._items

    def keys(self) -> list[Any]:
        """Return list of top-level keys in insertion order."""
        return list(self._items.keys())

    def values(self) -> list[Any]:
        """Return list of top-level values in insertion order."""
        return list(self._items.values())

    def items(self) -> list[tuple[Any, Any]]:
        """Return list of (key, value) pairs in insertion order."""
        return list(self._items.items())

    # ==================== Conversion ====================

    def json_serialize(self) -> dict[Any, Any]:
        """Return the data to encode as JSON (the items, no cache)."""
        return self._items

    def to_json(self, key: Any = None, **options: Any) -> str:
        """Encode the store, or the value at key, as a JSON string.

        Dicts keyed exactly 0..n-1 in order are encoded as arrays. Nested
        PathStore values are encoded through json_serialize().

        Args:
            key: Optional path. A missing path encodes as 'null'.
            **options: Passed to json.dumps (indent, sort_keys, ...).

        Returns:
            The JSON document.

        Raises:
            EncodingError: If the data cannot be encoded.

        Example:
            >>> PathStore({'first': 'John'}).to_json()
            '{"first": "John"}'
        """
        data = self._items if key is None else self.get(key)
        try:
            return json.dumps(_project(data), **options)
        except (TypeError, ValueError, RecursionError) as e:
            _logger.debug("JSON encoding failed for key %r", key, exc_info=True)
            target = 'store' if key is None else repr(key)
            raise EncodingError(f"Cannot encode {target} as JSON: {e}", key) from e


def _is_sequential(mapping: Mapping) -> bool:
    """True for a non-empty mapping keyed exactly 0..n-1 in order."""
    if not mapping:
        return False
    for expected, key in enumerate(mapping):
        if isinstance(key, bool) or not isinstance(key, int) or key != expected:
            return False
    return True


def _project(value: Any) -> Any:
    """Convert stored data into structures json.dumps understands."""
    if isinstance(value, PathStore):
        value = value.json_serialize()
    if isinstance(value, Mapping):
        if _is_sequential(value):
            return [_project(v) for v in value.values()]
        return {_project_key(k): _project(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_project(v) for v in value]
    return value


def _project_key(key: Any) -> Any:
    """Turn scalar keys into the strings json.dumps would produce.

    Done up front so that sort_keys works on mixed int/str keys.
    """
    if key is True:
        return 'true'
    if key is False:
        return 'false'
    if key is None:
        return 'null'
    if isinstance(key, (int, float)):
        return json.dumps(key)
    return key
