# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Source loading for PathStore.

Every value accepted by PathStore() and PathStore.merge() is coerced into a
plain dict by one of the functions below:

    - load_from_pathstore: deep copy of another store's snapshot
    - load_from_mapping: shallow copy of a mapping
    - load_from_sequence: list/tuple keyed by position
    - load_from_object: public fields of a record (dataclass, namedtuple,
      object with __dict__ or __slots__)
    - anything else is wrapped as a single entry under key 0
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import PathStore

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def load_from_pathstore(source: PathStore) -> dict[Any, Any]:
    """Copy another store's items; nested containers are not shared."""
    return copy.deepcopy(source.all())


def load_from_mapping(source: Mapping) -> dict[Any, Any]:
    return dict(source)


def load_from_sequence(source: list | tuple) -> dict[Any, Any]:
    return dict(enumerate(source))


def load_from_object(source: Any) -> dict[str, Any]:
    """Map the public field names of a record to their values.

    Private names (leading underscore) are skipped, as are unset slots.
    """
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return {
            f.name: getattr(source, f.name)
            for f in dataclasses.fields(source)
            if not f.name.startswith('_')
        }

    if hasattr(source, '_asdict'):
        return dict(source._asdict())

    result: dict[str, Any] = {}
    for klass in reversed(type(source).__mro__):
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if not name.startswith('_') and hasattr(source, name):
                result[name] = getattr(source, name)

    if hasattr(source, '__dict__'):
        result.update(
            (name, value)
            for name, value in vars(source).items()
            if not name.startswith('_')
        )
    return result


def is_record(source: Any) -> bool:
    """True if source should be loaded field by field."""
    if isinstance(source, _SCALARS) or source is None:
        return False
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return True
    if isinstance(source, tuple) and hasattr(source, '_asdict'):
        return True
    return hasattr(source, '__dict__') or any(
        '__slots__' in klass.__dict__ for klass in type(source).__mro__[:-1]
    )


def load_source(source: Any) -> dict[Any, Any]:
    """Coerce any supported source into a new dict.

    Args:
        source: PathStore, mapping, list/tuple, record, None or scalar.

    Returns:
        A dict owned by the caller.
    """
    from .core import PathStore

    if source is None:
        return {}
    if isinstance(source, PathStore):
        return load_from_pathstore(source)
    if isinstance(source, Mapping):
        return load_from_mapping(source)
    if is_record(source):
        return load_from_object(source)
    if isinstance(source, (list, tuple)):
        return load_from_sequence(source)
    return {0: source}
