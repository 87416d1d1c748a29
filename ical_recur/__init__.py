"""
.. include:: ../README.md
"""

from .exceptions import RecurError, RecurParseError, RecurValidationError
from .types.recur import Frequency, RecurrenceRule, Weekday

__all__ = [
    "Frequency",
    "RecurError",
    "RecurParseError",
    "RecurValidationError",
    "RecurrenceRule",
    "Weekday",
    "by_parts",
    "compat",
    "exceptions",
    "initialization",
    "property_value",
    "types",
    "validations",
]
