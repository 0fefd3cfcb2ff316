# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path traversal over plain dicts and lists.

The functions in this module implement the read, write and delete walks used
by PathStore. They operate on ordinary Python containers:

    - dict (any MutableMapping): addressed by key
    - list: addressed by non-negative decimal index ('0', '1', ...)

Anything else (str, bytes, tuple, numbers, None, objects) is a leaf and
stops traversal.

Integer keys and their canonical decimal string form address the same
entry, so 'numbers.1' reaches index 1 of a list and key 1 of a dict.
An exact match always wins over the converted form.

Each walk descends by key, holding the parent container and the key that
leads to the current one, so a container can be replaced in its parent
(e.g. when a list has to become a dict) without aliasing tricks.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

SEPARATOR = '.'


class _Missing:
    """Sentinel for failed lookups (None is a legitimate stored value)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'


MISSING: Any = _Missing()


def split_path(key: Any) -> list[str]:
    """Split a key into its dotted segments."""
    return str(key).split(SEPARATOR)


def is_path(key: Any) -> bool:
    """True if the key contains at least one separator."""
    return SEPARATOR in str(key)


def is_container(value: Any) -> bool:
    """True if traversal can descend into value."""
    return isinstance(value, (MutableMapping, list))


def as_index(segment: Any) -> int | None:
    """Return segment as a non-negative integer index, or None.

    Only canonical decimal strings qualify: '7' does, '07', '+7', '-1'
    and ' 7' do not.
    """
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        if segment == '0' or not segment.startswith('0'):
            return int(segment)
    return None


def resolve_key(container: Any, segment: Any) -> Any:
    """Find the key under which segment is stored in container.

    Args:
        container: A dict or list.
        segment: Path segment (str) or a raw key (int, str, ...).

    Returns:
        The actual key (or list index) present in container, or MISSING.
    """
    if isinstance(container, list):
        index = as_index(segment)
        if index is not None and index < len(container):
            return index
        return MISSING

    try:
        if segment in container:
            return segment
    except TypeError:
        # unhashable segment
        return MISSING

    if isinstance(segment, str):
        index = as_index(segment)
        if index is not None and index in container:
            return index
    elif as_index(segment) is not None and str(segment) in container:
        return str(segment)
    return MISSING


def lookup(root: Any, segments: list[str]) -> Any:
    """Walk segments from root and return the value found, or MISSING.

    Every intermediate value must be a container holding the next segment.
    """
    current = root
    for segment in segments:
        if not is_container(current):
            return MISSING
        key = resolve_key(current, segment)
        if key is MISSING:
            return MISSING
        current = current[key]
    return current


def _put(
    container: Any,
    segment: Any,
    value: Any,
    parent: Any = None,
    parent_key: Any = None,
) -> tuple[Any, Any]:
    """Store value under segment in container.

    Writing into a list at index len(list) appends and at an existing index
    replaces. Any other segment turns the list into a dict keyed by position,
    which is written back into parent under parent_key.

    Returns:
        Tuple of (container, key) actually written to.
    """
    if isinstance(container, list):
        index = as_index(segment)
        if index is not None and index <= len(container):
            if index == len(container):
                container.append(value)
            else:
                container[index] = value
            return container, index
        container = dict(enumerate(container))
        parent[parent_key] = container
        # positions are int keys, so keep index segments int as well
        if index is not None:
            segment = index

    key = resolve_key(container, segment)
    if key is MISSING:
        key = segment
    container[key] = value
    return container, key


def assign(root: MutableMapping, segments: list[str], value: Any) -> None:
    """Write value at the end of segments, creating dicts along the way.

    Intermediate segments that are absent or hold a leaf are replaced by
    an empty dict.
    """
    parent: Any = None
    parent_key: Any = None
    container: Any = root

    for segment in segments[:-1]:
        key = resolve_key(container, segment)
        if key is MISSING or not is_container(container[key]):
            container, key = _put(container, segment, {}, parent, parent_key)
        parent, parent_key = container, key
        container = container[key]

    _put(container, segments[-1], value, parent, parent_key)


def delete(root: MutableMapping, segments: list[str]) -> bool:
    """Delete the entry at the end of segments.

    List entries are removed by index, shifting later entries down.

    Returns:
        True if an entry was removed, False if the path did not resolve.
    """
    *prefix, last = segments
    container = lookup(root, prefix)
    if not is_container(container):
        return False

    key = resolve_key(container, last)
    if key is MISSING:
        return False
    del container[key]
    return True
