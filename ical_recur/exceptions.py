"""Exceptions for ical_recur library."""

from __future__ import annotations

from typing import Any


class RecurError(Exception):
    """Base exception for all ical_recur errors."""


class RecurParseError(RecurError):
    """Exception raised when a recurrence rule is not valid.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute contains every
    problem recorded on the rule, one per line, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the RecurParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class RecurValidationError(RecurError, ValueError):
    """A single problem found on a recurrence rule.

    These are recorded in the error list of a rule rather than raised, so
    that all problems of a rule can be inspected at once. Two errors are
    equal when they have the same type and message.
    """

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RecurValidationError):
            return NotImplemented
        return type(self) is type(other) and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((type(self), str(self)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class MissingFrequency(RecurValidationError):
    """The required FREQ part was read or serialized before being set."""

    def __init__(self) -> None:
        super().__init__("Recurrence rule is missing required FREQ")


class InvalidFrequency(RecurValidationError):
    """FREQ is not one of the recognized frequencies."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Unrecognized FREQ value: {value}")
        self.value = value


class InvalidInteger(RecurValidationError):
    """COUNT or INTERVAL could not be coerced into an allowed integer."""

    def __init__(self, key: str, value: Any) -> None:
        super().__init__(f"Invalid integer for {key.upper()}: {value!r}")
        self.key = key
        self.value = value


class InvalidDateTime(RecurValidationError):
    """UNTIL could not be converted into a DATE or DATE-TIME value."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid DATE or DATE-TIME for UNTIL: {value!r}")
        self.value = value


class InvalidWeekday(RecurValidationError):
    """WKST is not one of the seven weekday codes."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid weekday for WKST: {value!r}")
        self.value = value


class InvalidByPart(RecurValidationError):
    """An element of a by-part list is out of range or malformed."""

    def __init__(self, key: str, value: Any) -> None:
        super().__init__(f"Invalid value for {key.upper()}: {value!r}")
        self.key = key
        self.value = value


class UnrecognizedKey(RecurValidationError):
    """The parser found a part with an unknown key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unrecognized recurrence rule part: {key.upper()}")
        self.key = key.upper()


class MalformedPart(RecurValidationError):
    """The parser found a part that is not of the form KEY=VALUE."""

    def __init__(self, part: str) -> None:
        super().__init__(f"Recurrence rule part missing '=': {part!r}")
        self.part = part


class ConflictingBound(RecurValidationError):
    """Both COUNT and UNTIL were given; only the last one was kept."""

    def __init__(self, kept: str) -> None:
        super().__init__(
            f"COUNT and UNTIL are mutually exclusive, kept {kept.upper()}"
        )
        self.kept = kept.upper()
