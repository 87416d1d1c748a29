"""Tests for by part storage."""

import pytest

from ical_recur.by_parts import BY_PARTS, ByPart, ByPartStorage
from ical_recur.types.recur import RecurrenceRule


def test_by_parts_order() -> None:
    """Test the by parts are listed in encoding order."""
    assert BY_PARTS == (
        "bysecond",
        "byminute",
        "byhour",
        "byday",
        "bymonthday",
        "byyearday",
        "byweekno",
        "bymonth",
        "bysetpos",
    )


def test_storage() -> None:
    """Test storing and removing by parts."""
    storage = ByPartStorage()
    assert storage.by_list == {}
    assert storage.get_by_part("byday") is None

    storage.set_by_part("BYDAY", "MO, WE,,FR")
    assert storage.get_by_part("byday") == ["MO", "WE", "FR"]

    storage.set_by_part("bymonth", (1, 2))
    storage.set_by_part("bysetpos", -1)
    assert storage.by_list == {
        "byday": ["MO", "WE", "FR"],
        "bymonth": [1, 2],
        "bysetpos": [-1],
    }

    storage.set_by_part("byday", "")
    assert "byday" not in storage.by_list
    storage.clear_by_parts()
    assert storage.by_list == {}


def test_storage_is_per_instance() -> None:
    """Test separate instances don't share by parts."""
    first = ByPartStorage()
    second = ByPartStorage()
    first.set_by_part("byhour", [9])
    assert second.by_list == {}


def test_unknown_by_part() -> None:
    """Test storing an unknown by part name."""
    storage = ByPartStorage()
    with pytest.raises(KeyError):
        storage.set_by_part("byeaster", [1])


def test_descriptor_names() -> None:
    """Test the descriptor only accepts by part attribute names."""
    assert isinstance(RecurrenceRule.__dict__["byday"], ByPart)
    with pytest.raises((TypeError, RuntimeError)):

        class BadRule(RecurrenceRule):  # pylint: disable=unused-variable
            byeaster = ByPart()


def test_all_parts_exposed() -> None:
    """Test every by part is available as an attribute of the rule."""
    rule = RecurrenceRule(freq="YEARLY")
    for by_part in BY_PARTS:
        assert getattr(rule, by_part) is None
        setattr(rule, by_part, ["1"])
        assert getattr(rule, by_part) == ["1"]
    assert list(rule.by_list) == list(BY_PARTS)
