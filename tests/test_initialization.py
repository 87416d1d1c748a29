"""Tests for initializing recurrence rules from parts."""

import datetime

import pytest

from ical_recur.exceptions import ConflictingBound, MalformedPart, UnrecognizedKey
from ical_recur.types.recur import RecurrenceRule


def test_add_part_to_hash() -> None:
    """Test parts are accumulated with lower case keys."""
    rule = RecurrenceRule()
    value_hash: dict[str, str] = {}
    for part in ["FREQ=DAILY", "ByHour=9,10", " COUNT = 3 ", ""]:
        value_hash = rule.add_part_to_hash(value_hash, part)
    assert value_hash == {"freq": "DAILY", "byhour": "9,10", "count": "3"}
    assert rule.parse_problems == []


def test_add_part_last_wins() -> None:
    """Test a repeated key replaces the earlier value."""
    rule = RecurrenceRule()
    value_hash = rule.add_part_to_hash({}, "COUNT=1")
    value_hash = rule.add_part_to_hash(value_hash, "count=2")
    assert value_hash == {"count": "2"}


def test_add_malformed_part() -> None:
    """Test a part without '=' is recorded and skipped."""
    rule = RecurrenceRule()
    assert rule.add_part_to_hash({}, "DAILY") == {}
    assert rule.parse_problems == [MalformedPart("DAILY")]


def test_initialize_from_hash() -> None:
    """Test mapping entries are dispatched to the field setters."""
    rule = RecurrenceRule()
    rule.initialize_from_hash(
        {
            "freq": "MONTHLY",
            "interval": "2",
            "until": datetime.date(2024, 6, 30),
            "bymonthday": "1,15",
            "wkst": "SU",
        }
    )
    assert rule.freq == "MONTHLY"
    assert rule.interval == 2
    assert rule.until == datetime.date(2024, 6, 30)
    assert rule.bymonthday == ["1", "15"]
    assert rule.wkst == "SU"
    assert rule.is_valid()


def test_initialize_unrecognized_key() -> None:
    """Test unknown keys are recorded without stopping initialization."""
    rule = RecurrenceRule()
    rule.initialize_from_hash({"x-name": "Standup", "freq": "DAILY", "byeaster": "0"})
    assert rule.freq == "DAILY"
    assert rule.errors == [UnrecognizedKey("X-NAME"), UnrecognizedKey("BYEASTER")]


def test_initialize_conflicting_bound() -> None:
    """Test both bounds in one mapping keeps the last one."""
    rule = RecurrenceRule()
    rule.initialize_from_hash({"freq": "DAILY", "until": "20240101", "count": "4"})
    assert rule.count == 4
    assert rule.until is None
    assert rule.errors == [ConflictingBound("count")]


def test_parse_problems_cleared_by_parse() -> None:
    """Test problems from a previous parse are forgotten on a new parse."""
    rule = RecurrenceRule("FREQ=DAILY;NOPE")
    assert rule.errors == [MalformedPart("NOPE")]
    rule.value = "FREQ=DAILY"
    assert rule.parse_problems == []
    assert rule.errors == []


def test_parse_problems_kept_across_setters() -> None:
    """Test parse problems describe the parsed text until it is replaced."""
    rule = RecurrenceRule("FREQ=DAILY;FOO=1")
    rule.interval = 2
    assert rule.errors == [UnrecognizedKey("FOO")]


def test_unrecognized_key_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test skipped parts are logged for debugging."""
    RecurrenceRule("FREQ=DAILY;FOO=1")
    assert "Ignoring unrecognized recurrence rule part foo" in caplog.text


def test_initialize_after_errors_read() -> None:
    """Test problems from a later initialization show up in the errors."""
    rule = RecurrenceRule("FREQ=DAILY")
    assert rule.errors == []
    rule.initialize_from_hash({"foo": "bar"})
    assert rule.errors == [UnrecognizedKey("FOO")]


def test_add_part_after_errors_read() -> None:
    """Test a malformed part added later shows up in the errors."""
    rule = RecurrenceRule("FREQ=DAILY")
    assert rule.is_valid()
    rule.add_part_to_hash({}, "WEEKLY")
    assert rule.errors == [MalformedPart("WEEKLY")]


@pytest.mark.parametrize(
    ("attr", "value"),
    [("until", None), ("count", None), ("count", 5), ("until", "20240301")],
)
def test_conflicting_bound_cleared_by_setter(attr: str, value: str | int | None) -> None:
    """Test assigning a bound replaces the conflict found when parsing."""
    rule = RecurrenceRule("FREQ=DAILY;COUNT=3;UNTIL=20240101")
    assert rule.errors == [ConflictingBound("until")]
    setattr(rule, attr, value)
    assert rule.errors == []


def test_conflicting_bound_kept_by_other_setters() -> None:
    """Test unrelated assignments keep the parse conflict."""
    rule = RecurrenceRule("FREQ=DAILY;COUNT=3;UNTIL=20240101")
    rule.interval = 2
    assert rule.errors == [ConflictingBound("until")]
