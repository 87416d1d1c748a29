"""Library for parsing rfc5545 recurrence rules and the values they use."""

from .date import DateEncoder
from .date_time import DateTimeEncoder, to_date_time_value
from .recur import Frequency, RecurrenceRule, Weekday

__all__ = [
    "DateEncoder",
    "DateTimeEncoder",
    "Frequency",
    "RecurrenceRule",
    "Weekday",
    "to_date_time_value",
]
