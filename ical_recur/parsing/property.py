"""Library for handling a single rfc5545 property content line.

A recurrence rule usually travels inside a content line of its owning
component, for example:

  RRULE:FREQ=WEEKLY;COUNT=10;BYDAY=MO,WE,FR

This library splits such a line into a ParsedProperty with the property
name, any property parameters and the raw value text. It does not attempt
to interpret the value itself, that is left to the property value types:

  ParsedProperty(
    name='rrule',
    value='FREQ=WEEKLY;COUNT=10;BYDAY=MO,WE,FR',
    params=None,
  )
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from ical_recur.exceptions import RecurParseError


# Characters that should be encoded in quotes
_UNSAFE_CHAR_RE = re.compile(r"[,:;]")
_RE_CONTROL_CHARS = re.compile("[\x00-\x08\x0a-\x1f\x7f]")
_RE_NAME = re.compile("[A-Z0-9-]+")
_QUOTE = '"'


@dataclass
class ParsedPropertyParameter:
    """An rfc5545 property parameter."""

    name: str

    values: Sequence[Union[str, datetime.tzinfo]]
    """Values are typically strings.

    A TZID value may be replaced with the resolved tzinfo so that date-time
    values can be parsed without looking the timezone up again.
    """


@dataclass
class ParsedProperty:
    """An rfc5545 property."""

    name: str
    value: str
    params: Optional[list[ParsedPropertyParameter]] = None

    def get_parameter(self, name: str) -> ParsedPropertyParameter | None:
        """Return a single ParsedPropertyParameter with the specified name."""
        if not self.params:
            return None
        for param in self.params:
            if param.name.lower() != name.lower():
                continue
            return param
        return None

    def ics(self) -> str:
        """Encode a ParsedProperty into the serialized format."""
        result = [self.name.upper()]
        if self.params:
            result_params = []
            for parameter in self.params:
                result_param_values = []
                for value in parameter.values:
                    if not isinstance(value, str):
                        value = str(value)
                    # Parameter values containing a colon, semicolon or comma
                    # must be placed in quoted text
                    if _UNSAFE_CHAR_RE.search(value):
                        result_param_values.append(f'"{value}"')
                    else:
                        result_param_values.append(value)
                values = ",".join(result_param_values)
                result_params.append(f"{parameter.name.upper()}={values}")
            result.append(";")
            result.append(";".join(result_params))
        result.append(":")
        result.append(str(self.value))
        return "".join(result)

    @classmethod
    def from_ics(cls, contentline: str) -> ParsedProperty:
        """Decode a ParsedProperty from an rfc5545 content line.

        Will raise a RecurParseError on failure.
        """
        return _parse_line(contentline)


def _split_params(text: str, line: str) -> list[ParsedPropertyParameter]:
    """Parse the ';' separated parameters that follow the property name."""
    params: list[ParsedPropertyParameter] = []
    for param_text in _split_unquoted(text, ";"):
        name, sep, raw_values = param_text.partition("=")
        if not sep:
            raise RecurParseError(
                f"Invalid parameter format: missing '=' after parameter name part '{param_text}'",
                detailed_error=line,
            )
        name = name.upper()
        if not _RE_NAME.fullmatch(name):
            raise RecurParseError(
                f"Invalid parameter name '{name}'", detailed_error=line
            )
        values: list[str] = []
        for value in _split_unquoted(raw_values, ","):
            if value.startswith(_QUOTE) and value.endswith(_QUOTE) and len(value) > 1:
                value = value[1:-1]
            if _QUOTE in value or _RE_CONTROL_CHARS.search(value):
                raise RecurParseError(
                    f"Invalid parameter value '{value}' for parameter '{name}'",
                    detailed_error=line,
                )
            values.append(value)
        params.append(ParsedPropertyParameter(name=name, values=values))
    return params


def _split_unquoted(text: str, delimiter: str) -> list[str]:
    """Split text on a delimiter, ignoring delimiters inside quotes."""
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for char in text:
        if char == _QUOTE:
            quoted = not quoted
        if char == delimiter and not quoted:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _value_start(line: str) -> int | None:
    """Return the position of the ':' separating the name from the value."""
    quoted = False
    for pos, char in enumerate(line):
        if char == _QUOTE:
            quoted = not quoted
        elif char == ":" and not quoted:
            return pos
    return None


def _parse_line(line: str) -> ParsedProperty:
    """Parse a single property line."""
    if (colon := _value_start(line)) is None:
        raise RecurParseError(
            "Invalid property line, expected ':' after property name",
            detailed_error=line,
        )
    property_name, has_params, param_text = line[0:colon].partition(";")
    property_name = property_name.upper()
    if not _RE_NAME.fullmatch(property_name):
        raise RecurParseError(
            f"Invalid property name '{property_name}'", detailed_error=line
        )
    params = _split_params(param_text, line) if has_params else []

    property_value = line[colon + 1 :]
    if _RE_CONTROL_CHARS.search(property_value):
        raise RecurParseError(
            f"Property value contains control characters: {property_value}",
            detailed_error=line,
        )

    return ParsedProperty(
        name=property_name.lower(),
        value=property_value,
        params=params if params else None,
    )
