"""Tests for DATE-TIME values."""

import datetime
import zoneinfo

import pytest

from ical_recur.parsing.property import ParsedProperty, ParsedPropertyParameter
from ical_recur.types.date_time import (
    DateTimeEncoder,
    encode_date_time_value,
    to_date_time_value,
)


def test_datedatime_parser() -> None:
    """Test for a datetime property value."""
    value = DateTimeEncoder.__parse_property_value__(
        ParsedProperty(name="dt", value="20220724T120000")
    )
    assert value == datetime.datetime(2022, 7, 24, 12, 0, 0)
    assert value.tzinfo is None


def test_datetime_utc() -> None:
    """Test a datetime in UTC."""
    value = DateTimeEncoder.__parse_property_value__(
        ParsedProperty(name="dt", value="20220724T120000Z")
    )
    assert value == datetime.datetime(2022, 7, 24, 12, 0, 0, tzinfo=datetime.UTC)


def test_datetime_timezone() -> None:
    """Test a datetime with a TZID property parameter."""
    value = DateTimeEncoder.__parse_property_value__(
        ParsedProperty(
            name="dt",
            value="20220724T120000",
            params=[
                ParsedPropertyParameter(name="TZID", values=["America/New_York"]),
            ],
        )
    )
    assert value == datetime.datetime(
        2022, 7, 24, 12, 0, 0, tzinfo=zoneinfo.ZoneInfo("America/New_York")
    )


def test_datetime_invalid_timezone() -> None:
    """Test a datetime with an unknown timezone."""
    with pytest.raises(ValueError, match="to be valid timezone"):
        DateTimeEncoder.__parse_property_value__(
            ParsedProperty(
                name="dt",
                value="20220724T120000",
                params=[ParsedPropertyParameter(name="TZID", values=["Mars/Olympus"])],
            )
        )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime.datetime(2022, 7, 24, 12, 0, 0), "20220724T120000"),
        (
            datetime.datetime(2022, 7, 24, 12, 0, 0, tzinfo=datetime.UTC),
            "20220724T120000Z",
        ),
        (
            datetime.datetime(
                2022, 7, 24, 8, 0, 0, tzinfo=zoneinfo.ZoneInfo("America/New_York")
            ),
            "20220724T120000Z",
        ),
        (datetime.date(2022, 7, 24), "20220724"),
    ],
    ids=("floating", "utc", "zoned", "date"),
)
def test_encode(value: datetime.date, expected: str) -> None:
    """Test encoding the canonical values back to text."""
    assert encode_date_time_value(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("20220724", datetime.date(2022, 7, 24)),
        (" 20220724 ", datetime.date(2022, 7, 24)),
        ("20220724T120000", datetime.datetime(2022, 7, 24, 12, 0, 0)),
        ("2022-07-24T12:00:00", datetime.datetime(2022, 7, 24, 12, 0, 0)),
        (
            ParsedProperty(name="until", value="20220724T120000Z"),
            datetime.datetime(2022, 7, 24, 12, 0, 0, tzinfo=datetime.UTC),
        ),
        (datetime.date(2022, 7, 24), datetime.date(2022, 7, 24)),
    ],
)
def test_to_date_time_value(
    value: str | datetime.date | ParsedProperty, expected: datetime.date
) -> None:
    """Test converting candidate until values."""
    assert to_date_time_value(value) == expected


@pytest.mark.parametrize(("value"), ["", "tomorrow", "2022-13-01", 20220724, None])
def test_to_date_time_value_invalid(value: str | int | None) -> None:
    """Test values that can't be converted."""
    with pytest.raises(ValueError):
        to_date_time_value(value)
