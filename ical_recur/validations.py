"""Validation and error tracking for recurrence rules.

Problems with a recurrence rule are not raised when a field is assigned.
Instead the error list is computed from the current state of the rule the
first time it is read, and cleared again by every assignment, so that it
always describes the latest state and never a previous one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Generator, Iterable
from typing import Any

from pydantic import NonNegativeInt, PositiveInt, TypeAdapter, ValidationError

from .exceptions import (
    InvalidByPart,
    InvalidFrequency,
    InvalidInteger,
    InvalidWeekday,
    RecurParseError,
    RecurValidationError,
)

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "ErrorTracking",
    "coerce_count",
    "coerce_interval",
    "validate_by_part",
    "validate_freq",
    "validate_wkst",
]

FREQUENCIES = (
    "SECONDLY",
    "MINUTELY",
    "HOURLY",
    "DAILY",
    "WEEKLY",
    "MONTHLY",
    "YEARLY",
)
WEEKDAYS = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

BYDAY_REGEX = re.compile(r"(?:[+-]?([0-9]{1,2}))?(SU|MO|TU|WE|TH|FR|SA)")

# Allowed (low, high, signed) bounds of the numeric by parts. Signed parts
# also accept the negated range, e.g. BYMONTHDAY=-1 for the last day.
_BY_PART_RANGES: dict[str, tuple[int, int, bool]] = {
    "bysecond": (0, 60, False),
    "byminute": (0, 59, False),
    "byhour": (0, 23, False),
    "bymonthday": (1, 31, True),
    "byyearday": (1, 366, True),
    "byweekno": (1, 53, True),
    "bymonth": (1, 12, False),
    "bysetpos": (1, 366, True),
}

_INT_ADAPTER = TypeAdapter(int)
_COUNT_ADAPTER = TypeAdapter(NonNegativeInt)
_INTERVAL_ADAPTER = TypeAdapter(PositiveInt)


def _coerce(adapter: TypeAdapter[int], key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidInteger(key, value)
    if isinstance(value, str):
        value = value.strip()
    try:
        return adapter.validate_python(value)
    except ValidationError as err:
        _LOGGER.debug("Rejected %s value %r: %s", key, value, err)
        raise InvalidInteger(key, value) from err


def coerce_count(value: Any) -> int:
    """Coerce a COUNT value into a non-negative integer or raise InvalidInteger."""
    return _coerce(_COUNT_ADAPTER, "count", value)


def coerce_interval(value: Any) -> int:
    """Coerce an INTERVAL value into a positive integer or raise InvalidInteger."""
    return _coerce(_INTERVAL_ADAPTER, "interval", value)


def validate_freq(value: Any) -> Generator[RecurValidationError, None, None]:
    """Check the frequency is one of the rfc5545 frequencies."""
    if str(value).upper() not in FREQUENCIES:
        yield InvalidFrequency(value)


def validate_wkst(value: Any) -> Generator[RecurValidationError, None, None]:
    """Check the week start is one of the seven weekday codes."""
    if str(value).upper() not in WEEKDAYS:
        yield InvalidWeekday(value)


def _valid_byday(value: Any) -> bool:
    if not (match := BYDAY_REGEX.fullmatch(str(value).strip().upper())):
        return False
    if (ordinal := match.group(1)) is not None:
        return 1 <= int(ordinal) <= 53
    return True


def validate_by_part(
    name: str, values: Iterable[Any]
) -> Generator[RecurValidationError, None, None]:
    """Check each element of a by part list is in the allowed range."""
    for value in values:
        if name == "byday":
            if not _valid_byday(value):
                yield InvalidByPart(name, value)
            continue
        low, high, signed = _BY_PART_RANGES[name]
        try:
            number = _INT_ADAPTER.validate_python(
                value.strip() if isinstance(value, str) else value
            )
        except ValidationError:
            yield InvalidByPart(name, value)
            continue
        if signed:
            number = abs(number)
        if not low <= number <= high:
            yield InvalidByPart(name, value)


class ErrorTracking:
    """Capability that records the problems of a recurrence rule.

    The host implements `validate` to produce the problems of its current
    state and calls `reset_errors` whenever that state changes.
    """

    _errors: list[RecurValidationError] | None = None

    def reset_errors(self) -> None:
        """Clear the error list, it is recomputed on the next read."""
        self._errors = None

    def validate(self) -> Iterable[RecurValidationError]:
        """Return the problems found in the current state."""
        raise NotImplementedError

    @property
    def errors(self) -> list[RecurValidationError]:
        """Return the list of problems with the current state."""
        if self._errors is None:
            self._errors = list(self.validate())
            if self._errors:
                _LOGGER.debug("Recurrence rule has errors: %s", self._errors)
        return self._errors

    def is_valid(self) -> bool:
        """Return True if there are no problems."""
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise a RecurParseError describing every problem, if any."""
        if not (errors := self.errors):
            return
        raise RecurParseError(
            f"Recurrence rule is not valid: {errors[0]}",
            detailed_error="\n".join(str(error) for error in errors),
        )
