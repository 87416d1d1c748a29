"""Library for parsing and encoding DATE-TIME types.

The `to_date_time_value` function is the single conversion used for the
UNTIL part of a recurrence rule. It accepts rfc5545 text, ISO 8601 text or
python date and datetime objects and returns the canonical python value.
"""

from __future__ import annotations

import datetime
import logging
import re
import zoneinfo
from typing import Any

from ical_recur.parsing.property import ParsedProperty

from .date import DateEncoder

_LOGGER = logging.getLogger(__name__)


DATETIME_REGEX = re.compile(r"^([0-9]{8})T([0-9]{6})(Z)?$")
TZID = "TZID"


def parse_property_value(prop: ParsedProperty) -> datetime.datetime:
    """Parse a rfc5545 into a datetime.datetime."""
    if not (match := DATETIME_REGEX.fullmatch(prop.value)):
        raise ValueError(f"Expected value to match DATE-TIME pattern: {prop.value}")

    # Example: TZID=America/New_York:19980119T020000
    timezone: datetime.tzinfo | None = None
    if param := prop.get_parameter(TZID):
        if param.values and (value := param.values[0]):
            if isinstance(value, datetime.tzinfo):
                timezone = value
            else:
                try:
                    timezone = zoneinfo.ZoneInfo(value)
                except zoneinfo.ZoneInfoNotFoundError as err:
                    raise ValueError(
                        f"Expected DATE-TIME TZID value '{value}' to be valid timezone"
                    ) from err
    elif match.group(3):  # Example: 19980119T070000Z
        timezone = datetime.timezone.utc

    # Example: 19980118T230000
    date_value = match.group(1)
    year = int(date_value[0:4])
    month = int(date_value[4:6])
    day = int(date_value[6:])
    time_value = match.group(2)
    hour = int(time_value[0:2])
    minute = int(time_value[2:4])
    second = int(time_value[4:6])

    result = datetime.datetime(year, month, day, hour, minute, second, tzinfo=timezone)
    _LOGGER.debug("DateTimeEncoder returned %s", result)
    return result


class DateTimeEncoder:
    """Class to handle encoding for a datetime.datetime."""

    @classmethod
    def __parse_property_value__(cls, prop: ParsedProperty) -> datetime.datetime:
        """Parse a rfc5545 into a datetime.datetime."""
        return parse_property_value(prop)

    @classmethod
    def __encode_property_json__(cls, value: datetime.datetime) -> str:
        """Encode an ICS value.

        Values in a timezone other than UTC are converted to UTC, which is
        the only form allowed for a zoned UNTIL.
        """
        if value.tzinfo is None:
            return value.strftime("%Y%m%dT%H%M%S")
        return value.astimezone(datetime.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def to_date_time_value(value: Any) -> datetime.datetime | datetime.date:
    """Convert a candidate UNTIL value into a date or datetime.

    Raises a ValueError when the value can't be converted.
    """
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value
    if isinstance(value, ParsedProperty):
        prop = value
    elif isinstance(value, str):
        prop = ParsedProperty(name="until", value=value.strip())
    else:
        raise ValueError(f"Unable to convert {type(value).__name__} to date/time")

    errors = []
    try:
        return DateTimeEncoder.__parse_property_value__(prop)
    except ValueError as err:
        errors.append(err)
    try:
        return DateEncoder.__parse_property_value__(prop)
    except ValueError as err:
        errors.append(err)
    try:
        return _parse_iso(prop.value)
    except ValueError as err:
        errors.append(err)
    raise ValueError(f"Unable to parse date/time value: {errors}")


def _parse_iso(value: str) -> datetime.datetime | datetime.date:
    """Coerce an ISO 8601 string into a date or datetime value."""
    if "T" in value or " " in value:
        return datetime.datetime.fromisoformat(value)
    return datetime.date.fromisoformat(value)


def encode_date_time_value(value: datetime.datetime | datetime.date) -> str:
    """Encode a canonical date or datetime as rfc5545 text."""
    if isinstance(value, datetime.datetime):
        return DateTimeEncoder.__encode_property_json__(value)
    return DateEncoder.__encode_property_json__(value)
