"""Lenient conversion of persisted mappings back into flat dataclasses."""

from __future__ import annotations

import logging
from dataclasses import MISSING, fields
from typing import Any, Iterable, Mapping, TypeVar

__all__ = ["coerce_dataclass"]

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def coerce_dataclass(cls: type[T], payload: Any, *, exclude: Iterable[str] = ()) -> T:
    """Build ``cls`` from ``payload`` field by field.

    Unknown keys are dropped and any value whose type does not match the
    field's default falls back to that default, so one bad entry never
    discards the rest of the record.
    """

    if not isinstance(payload, Mapping):
        if payload is not None:
            LOGGER.warning("Expected a mapping for %s, got %s", cls.__name__, type(payload).__name__)
        return cls()

    skipped = set(exclude)
    values: dict[str, Any] = {}
    for item in fields(cls):  # type: ignore[arg-type]
        if item.name in skipped or item.name not in payload:
            continue
        default = _field_default(item)
        value = payload[item.name]
        if default is MISSING or _same_kind(default, value):
            values[item.name] = float(value) if isinstance(default, float) else value
        else:
            LOGGER.warning(
                "Ignoring %s.%s=%r; expected %s",
                cls.__name__,
                item.name,
                value,
                type(default).__name__,
            )
    return cls(**values)


def _field_default(item: Any) -> Any:
    if item.default is not MISSING:
        return item.default
    if item.default_factory is not MISSING:
        return item.default_factory()
    return MISSING


def _same_kind(default: Any, value: Any) -> bool:
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(default, bool) and isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))
