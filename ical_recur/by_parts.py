"""Storage for the "by" parts of a recurrence rule.

The by parts (BYSECOND, BYMINUTE, ... BYSETPOS) each hold an ordered list of
values that limit the occurrences in a frequency period. Each part is exposed
as its own attribute on the rule and all of them are also available through
the `by_list` mapping keyed by the lower case part name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "BY_PARTS",
    "ByPart",
    "ByPartStorage",
]

BY_PARTS = (
    "bysecond",
    "byminute",
    "byhour",
    "byday",
    "bymonthday",
    "byyearday",
    "byweekno",
    "bymonth",
    "bysetpos",
)
"""By part names in the order they are serialized."""


class _ByPartHost(Protocol):
    """Host requirements of the ByPart descriptor."""

    def reset_errors(self) -> None:
        """Clear the error list of the host."""

    def set_by_part(self, name: str, values: Any) -> None:
        """Store the values of a by part."""


def _as_list(values: Any) -> list[Any]:
    """Normalize a by part assignment into a list of values."""
    if values is None:
        return []
    if isinstance(values, str):
        return [value.strip() for value in values.split(",") if value.strip()]
    if isinstance(values, Iterable):
        return list(values)
    return [values]


class ByPartStorage:
    """Capability that holds the by part lists of a recurrence rule."""

    _by_list: dict[str, list[Any]] | None = None

    @property
    def by_list(self) -> dict[str, list[Any]]:
        """Mapping of by part name to its values, only for parts that are set."""
        if self._by_list is None:
            self._by_list = {}
        return self._by_list

    def get_by_part(self, name: str) -> list[Any] | None:
        """Return the values of a by part, or None if the part is not set."""
        return self.by_list.get(name.lower())

    def set_by_part(self, name: str, values: Any) -> None:
        """Store the values of a by part, removing it when empty."""
        name = name.lower()
        if name not in BY_PARTS:
            raise KeyError(f"Unknown by part: {name}")
        if not (value_list := _as_list(values)):
            self.by_list.pop(name, None)
            return
        _LOGGER.debug("Setting %s=%s", name, value_list)
        self.by_list[name] = value_list

    def clear_by_parts(self) -> None:
        """Remove all by parts."""
        self.by_list.clear()


class ByPart:
    """Descriptor exposing one by part list as an attribute.

    Assigning resets the error list of the owning rule.
    """

    def __init__(self) -> None:
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        if name not in BY_PARTS:
            raise TypeError(f"ByPart attribute must be one of {BY_PARTS}: {name}")
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.get_by_part(self.name)

    def __set__(self, instance: _ByPartHost, values: Any) -> None:
        instance.reset_errors()
        instance.set_by_part(self.name, values)
