"""Implementation of the rfc5545 RECUR value type.

A recurrence rule is parsed from its text form, inspected or modified one
field at a time, and encoded back to text. This library does not expand a
rule into occurrences, that is left to the consumer of the rule.

This is an example of parsing a rule, changing it, and encoding it again:

```python
from ical_recur import RecurrenceRule

rule = RecurrenceRule.from_rrule("FREQ=WEEKLY;COUNT=10;BYDAY=MO,WE,FR")
rule.interval = 2
rule.byday = ["TU", "TH"]
print(rule.ics_value())
```

The above example will output:
```
FREQ=WEEKLY;COUNT=10;INTERVAL=2;BYDAY=TU,TH
```

Problems in the rule, such as unknown parts or out of range values, do not
raise when parsing. They are collected in `rule.errors`:

```python
rule = RecurrenceRule.from_rrule("FREQ=WEEKLY;FOO=BAR")
print(rule.errors)
```

```
[UnrecognizedKey('Unrecognized recurrence rule part: FOO')]
```
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ical_recur.by_parts import BY_PARTS, ByPart, ByPartStorage
from ical_recur.compat import until_compat
from ical_recur.exceptions import (
    ConflictingBound,
    InvalidDateTime,
    InvalidInteger,
    MissingFrequency,
    RecurValidationError,
)
from ical_recur.initialization import HashInitialization
from ical_recur.parsing.property import ParsedProperty
from ical_recur.property_value import PropertyValue
from ical_recur.validations import (
    WEEKDAYS,
    ErrorTracking,
    coerce_count,
    coerce_interval,
    validate_by_part,
    validate_freq,
    validate_wkst,
)

from .date_time import encode_date_time_value, to_date_time_value

_LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1
DEFAULT_WKST = "MO"
RRULE = "RRULE"


def _is_contentline(text: str) -> bool:
    """Return True if the text starts with a property name, e.g. 'RRULE:'."""
    if (colon := text.find(":")) == -1:
        return False
    name_end = colon if (semi := text.find(";")) == -1 else min(colon, semi)
    return "=" not in text[:name_end]


class Weekday(str, enum.Enum):
    """Corresponds to a day of the week."""

    SUNDAY = "SU"
    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class Frequency(str, enum.Enum):
    """Type of recurrence rule."""

    SECONDLY = "SECONDLY"
    """Repeating events based on an interval of a second or more."""

    MINUTELY = "MINUTELY"
    """Repeating events based on an interval of a minute or more."""

    HOURLY = "HOURLY"
    """Repeating events based on an interval of an hour or more."""

    DAILY = "DAILY"
    """Repeating events based on an interval of a day or more."""

    WEEKLY = "WEEKLY"
    """Repeating events based on an interval of a week or more."""

    MONTHLY = "MONTHLY"
    """Repeating events based on an interval of a month or more."""

    YEARLY = "YEARLY"
    """Repeating events based on an interval of a year or more."""

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class RecurrenceRule(PropertyValue, ErrorTracking, HashInitialization, ByPartStorage):
    """A recurrence rule value, e.g. 'FREQ=WEEKLY;COUNT=10;BYDAY=MO,WE,FR'.

    Every assignment to a field resets the error list. COUNT and UNTIL are
    mutually exclusive, assigning one clears the other.
    """

    HASH_KEYS = ("freq", "count", "until", "interval", "wkst", *BY_PARTS)

    bysecond = ByPart()
    byminute = ByPart()
    byhour = ByPart()
    byday = ByPart()
    bymonthday = ByPart()
    byyearday = ByPart()
    byweekno = ByPart()
    bymonth = ByPart()
    bysetpos = ByPart()

    def __init__(self, value: str | None = None, **fields: Any) -> None:
        """Initialize RecurrenceRule from rule text and/or field values."""
        self._clear_fields()
        super().__init__(value)
        if fields:
            self.initialize_from_hash(fields)

    @classmethod
    def from_rrule(cls, rrule_str: str) -> RecurrenceRule:
        """Create a RecurrenceRule from an RRULE string."""
        return cls(rrule_str)

    @classmethod
    def from_ics(cls, contentline: str) -> RecurrenceRule:
        """Create a RecurrenceRule from a content line like 'RRULE:FREQ=DAILY'.

        A line without a property name is parsed as the rule itself. Raises
        RecurParseError if the content line is malformed.
        """
        if not _is_contentline(contentline):
            return cls(contentline)
        prop = ParsedProperty.from_ics(contentline)
        _LOGGER.debug("Parsed %s property value %s", prop.name, prop.value)
        return cls(prop.value)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> RecurrenceRule:
        """Create a RecurrenceRule from a mapping of part name to value."""
        rule = cls()
        rule.initialize_from_hash(values)
        return rule

    def _clear_fields(self) -> None:
        self._freq: Any = None
        self._count: int | None = None
        self._until: datetime.datetime | datetime.date | None = None
        self._interval: int | None = None
        self._wkst: Any = None
        self._wkst_day: int | None = None
        self._rejected: dict[str, Any] = {}
        self.clear_by_parts()
        self.clear_parse_problems()
        self.reset_errors()

    def _parse_value(self, value: str) -> None:
        """Replace every field by parsing the rule text."""
        self._clear_fields()
        value_hash: dict[str, Any] = {}
        for part in value.split(";"):
            value_hash = self.add_part_to_hash(value_hash, part)
        self.initialize_from_hash(value_hash)

    @property
    def freq(self) -> str:
        """Return the frequency of the rule, upper cased.

        Raises MissingFrequency if the frequency was never set.
        """
        if self._freq is None:
            raise MissingFrequency()
        return str(self._freq).upper()

    @freq.setter
    def freq(self, value: str | Frequency | None) -> None:
        """Set the frequency, one of SECONDLY through YEARLY."""
        self.reset_errors()
        self._freq = value

    @property
    def wkst(self) -> str:
        """Return the starting week day, 'MO' unless set."""
        if self._wkst is None:
            return DEFAULT_WKST
        return str(self._wkst).upper()

    @wkst.setter
    def wkst(self, value: str | Weekday | None) -> None:
        """Set the starting week day, case insensitive."""
        self.reset_errors()
        self._wkst = value
        self._wkst_day = None

    @property
    def wkst_day(self) -> int:
        """Return the index of the week start in SU, MO, ... SA.

        An unrecognized week start uses the index of the default 'MO'.
        """
        if self._wkst_day is None:
            wkst = self.wkst if self.wkst in WEEKDAYS else DEFAULT_WKST
            self._wkst_day = WEEKDAYS.index(wkst)
        return self._wkst_day

    @property
    def count(self) -> int | None:
        """Return the number of occurrences that bound the rule."""
        return self._count

    @count.setter
    def count(self, value: int | str | None) -> None:
        """Set the count, converted to an integer. Clears UNTIL."""
        self.reset_errors()
        self.discard_parse_problems(ConflictingBound)
        self._rejected.pop("count", None)
        self._count = None
        if value is None:
            return
        try:
            self._count = coerce_count(value)
        except InvalidInteger:
            self._rejected["count"] = value
        self._rejected.pop("until", None)
        self._until = None

    @property
    def until(self) -> datetime.datetime | datetime.date | None:
        """Return the inclusive end of the rule."""
        return self._until

    @until.setter
    def until(self, value: Any) -> None:
        """Set the until value. Clears COUNT.

        The value may be a string in rfc5545 DATE or DATE-TIME format, an
        ISO 8601 string, or a datetime.date or datetime.datetime.
        """
        self.reset_errors()
        self.discard_parse_problems(ConflictingBound)
        self._rejected.pop("until", None)
        self._until = None
        if value is None:
            return
        try:
            self._until = to_date_time_value(value)
        except ValueError as err:
            _LOGGER.debug("Rejected UNTIL value %r: %s", value, err)
            self._rejected["until"] = value
        self._rejected.pop("count", None)
        self._count = None

    @property
    def interval(self) -> int:
        """Return the interval at which the rule repeats, 1 unless set."""
        if self._interval is None:
            return DEFAULT_INTERVAL
        return self._interval

    @interval.setter
    def interval(self, value: int | str | None) -> None:
        """Set the interval, converted to a positive integer."""
        self.reset_errors()
        self._rejected.pop("interval", None)
        self._interval = None
        if value is None:
            return
        try:
            self._interval = coerce_interval(value)
        except InvalidInteger:
            self._rejected["interval"] = value

    def bounded(self) -> bool:
        """Return True if the rule is limited by COUNT or UNTIL."""
        return self._count is not None or self._until is not None

    def validate(self) -> Iterable[RecurValidationError]:
        """Return the problems found in the current state of the rule."""
        yield from self.parse_problems
        if self._freq is None:
            yield MissingFrequency()
        else:
            yield from validate_freq(self._freq)
        for key, value in self._rejected.items():
            if key == "until":
                yield InvalidDateTime(value)
            else:
                yield InvalidInteger(key, value)
        if self._wkst is not None:
            yield from validate_wkst(self._wkst)
        for by_part in BY_PARTS:
            if values := self.by_list.get(by_part):
                yield from validate_by_part(by_part, values)

    def ics_value(self, include_until: bool | None = None) -> str:
        """Return the rfc5545 text of the rule.

        UNTIL is only included when `include_until` is set or when enabled
        with `ical_recur.compat.enable_until_serialization`.
        """
        if include_until is None:
            include_until = until_compat.is_until_serialization_enabled()
        result = [f"FREQ={self.freq}"]
        if self._count is not None:
            result.append(f"COUNT={self._count}")
        if include_until and self._until is not None:
            result.append(f"UNTIL={encode_date_time_value(self._until)}")
        if self.interval != DEFAULT_INTERVAL:
            result.append(f"INTERVAL={self.interval}")
        for by_part in BY_PARTS:
            if values := self.by_list.get(by_part):
                result.append(
                    f"{by_part.upper()}={','.join(str(value) for value in values)}"
                )
        if self.wkst != DEFAULT_WKST:
            result.append(f"WKST={self.wkst}")
        return ";".join(result)

    def ics_property(self, name: str = RRULE) -> ParsedProperty:
        """Return the rule as an RRULE (or EXRULE) property."""
        return super().ics_property(name)

    def _compare_key(self) -> Any:
        return (
            str(self._freq).upper() if self._freq is not None else None,
            self._count,
            self._until,
            self.interval,
            self.wkst,
            tuple(
                (by_part, tuple(str(value) for value in values))
                for by_part in BY_PARTS
                if (values := self.by_list.get(by_part))
            ),
        )

    def __repr__(self) -> str:
        if self._freq is None:
            return f"{type(self).__name__}({self.raw_value!r})"
        return f"{type(self).__name__}({self.ics_value(include_until=True)!r})"
