# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Replace and recursive replace for nested dicts and lists."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .paths import MISSING, is_container, resolve_key


def _entries(container: Any) -> Any:
    if isinstance(container, list):
        return enumerate(container)
    return container.items()


def replace(base: Mapping, replacement: Mapping) -> dict[Any, Any]:
    """Return base with the top-level entries of replacement written over it.

    Values are replaced wholesale; keys only in base keep their position,
    new keys are appended.
    """
    result = dict(base)
    for key, value in replacement.items():
        existing = resolve_key(result, key)
        result[key if existing is MISSING else existing] = value
    return result


def replace_recursive(base: Any, replacement: Any) -> Any:
    """Return a new container with replacement merged deeply into base.

    Where both sides hold a container under the same key they are merged
    recursively, otherwise the replacement value wins. Two lists merge by
    index; a list merged with a dict is treated as a dict keyed by position.

    Example:
        >>> replace_recursive({'name': {'first': 'John', 'last': 'Doe'}},
        ...                   {'name': {'first': 'Johnny'}})
        {'name': {'first': 'Johnny', 'last': 'Doe'}}
    """
    if isinstance(base, list) and isinstance(replacement, list):
        result: Any = list(base)
        for index, value in enumerate(replacement):
            if index < len(result):
                result[index] = _merge_value(result[index], value)
            else:
                result.append(value)
        return result

    result = dict(enumerate(base)) if isinstance(base, list) else dict(base)
    for key, value in _entries(replacement):
        existing = resolve_key(result, key)
        if existing is MISSING:
            result[key] = value
        else:
            result[existing] = _merge_value(result[existing], value)
    return result


def _merge_value(current: Any, value: Any) -> Any:
    if is_container(current) and is_container(value):
        return replace_recursive(current, value)
    return value
