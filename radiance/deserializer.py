"""Deserializer interface and typed lookups in parsed TOML header tables."""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from radiance.resource_unit import ResourceUnit

T = TypeVar("T")

_MISSING = object()
_object_ids = itertools.count(1)
_object_id_lock = threading.Lock()


class Deserializer(ABC):
    """Builds a resource unit from its section in a header table.

    ``resource_type`` is the value of a section's ``type`` key that this
    deserializer handles.
    """

    resource_type: ClassVar[str]

    @abstractmethod
    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        """Create the unit for section ``resource_id`` of ``header_table``."""


def next_object_id() -> int:
    """Return a fresh object id, unique across threads, starting at 1."""
    with _object_id_lock:
        return next(_object_ids)


def _convert(value: Any, kind: type) -> Any:
    if isinstance(value, bool) and kind is not bool:
        return _MISSING
    if kind is float and isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, kind):
        return value
    return _MISSING


def _lookup(table: Mapping[str, Any] | None, key: str, kind: type) -> Any:
    if not isinstance(table, Mapping) or key not in table:
        return _MISSING
    return _convert(table[key], kind)


def get_required_value(table: Mapping[str, Any] | None, key: str, kind: type[T]) -> T:
    """Return ``table[key]`` as ``kind``; raise ``KeyError`` if absent or of another type."""
    value = _lookup(table, key, kind)
    if value is _MISSING:
        raise KeyError(f"The following key is required: {key}")
    return value


def get_optional_value(
    table: Mapping[str, Any] | None, key: str, kind: type[T], default: T | None = None
) -> T | None:
    """Return ``table[key]`` as ``kind``, or ``default`` if absent or of another type."""
    value = _lookup(table, key, kind)
    return default if value is _MISSING else value