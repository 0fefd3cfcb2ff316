# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathStore exceptions."""

from __future__ import annotations

from typing import Any


class PathStoreError(Exception):
    """Base exception for PathStore errors."""

    pass


class KeyNotFoundError(PathStoreError, KeyError):
    """Raised when a store is created from a key that does not exist."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Key '{key}' does not exist.")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class EncodingError(PathStoreError, ValueError):
    """Raised when the store (or part of it) cannot be encoded as JSON."""

    def __init__(self, message: str, key: Any = None) -> None:
        self.key = key
        super().__init__(message)
