"""Base class for typed rfc5545 property values.

A property value keeps the raw text it was parsed from, compares by value,
and surfaces its own text encoding through `ics_value`, which subclasses
override. The encoding can be wrapped in a content line for the owning
component with `ics_property`.
"""

from __future__ import annotations

from typing import Any

from .parsing.property import ParsedProperty


class PropertyValue:
    """A typed value of an rfc5545 property."""

    def __init__(self, value: str | None = None) -> None:
        """Initialize PropertyValue, parsing the raw text when given."""
        self.raw_value: str | None = None
        if value is not None:
            self.value = value

    @property
    def value(self) -> str | None:
        """The raw text this value was last parsed from."""
        return self.raw_value

    @value.setter
    def value(self, value: str | None) -> None:
        if value is None:
            return
        self.raw_value = value
        self._parse_value(value)

    def _parse_value(self, value: str) -> None:
        """Replace the state of this value by parsing the text."""
        raise NotImplementedError

    def ics_value(self) -> str:
        """Encode this value as rfc5545 text."""
        raise NotImplementedError

    def ics_property(self, name: str) -> ParsedProperty:
        """Return this value as a property of the owning component."""
        return ParsedProperty(name=name.lower(), value=self.ics_value())

    def _compare_key(self) -> Any:
        """Return the key used for value equality."""
        return self.ics_value()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, type(self)) and not isinstance(self, type(other)):
            return NotImplemented
        return bool(self._compare_key() == other._compare_key())

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.ics_value()
