"""Tests for the DateRange value object."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from shared.domain.exceptions import InvalidRange, ValidationError
from shared.domain.value_objects import DateRange


def r(start: int, end: int) -> DateRange:
    base = date(2024, 1, 1)
    return DateRange(base + timedelta(days=start), base + timedelta(days=end))


SAMPLE_RANGES = [r(0, 1), r(0, 5), r(1, 5), r(5, 9), r(3, 7), r(4, 5), r(8, 30)]


def test_rejects_empty_and_inverted_ranges():
    with pytest.raises(InvalidRange):
        DateRange(date(2024, 1, 5), date(2024, 1, 5))
    with pytest.raises(InvalidRange):
        DateRange(date(2024, 1, 6), date(2024, 1, 5))


def test_invalid_range_is_a_validation_error():
    with pytest.raises(ValidationError):
        DateRange(date(2024, 1, 6), date(2024, 1, 5))


@pytest.mark.parametrize("bound", [None, "2024-01-01", datetime(2024, 1, 1)])
def test_rejects_non_date_bounds(bound):
    with pytest.raises(InvalidRange):
        DateRange(bound, date(2024, 2, 1))


@pytest.mark.parametrize("rng", SAMPLE_RANGES)
def test_contains_is_reflexive(rng):
    assert rng.contains(rng)


@pytest.mark.parametrize("a", SAMPLE_RANGES)
@pytest.mark.parametrize("b", SAMPLE_RANGES)
def test_overlaps_is_symmetric(a, b):
    assert a.overlaps(b) == b.overlaps(a)


def test_adjacent_ranges_do_not_overlap():
    assert not r(1, 5).overlaps(r(5, 9))
    assert not r(5, 9).overlaps(r(1, 5))


def test_ranges_sharing_an_inner_day_overlap():
    assert r(1, 5).overlaps(r(4, 9))
    assert r(1, 9).overlaps(r(3, 4))
    assert r(3, 4).overlaps(r(1, 9))


def test_contains():
    window = r(0, 30)
    assert window.contains(r(0, 30))
    assert window.contains(r(5, 10))
    assert not window.contains(r(25, 31))
    assert not r(5, 10).contains(window)


def test_value_semantics():
    assert r(1, 5) == r(1, 5)
    assert hash(r(1, 5)) == hash(r(1, 5))
    assert r(1, 5) != r(1, 6)
    with pytest.raises(AttributeError):
        r(1, 5).start = date(2020, 1, 1)


def test_length_and_rendering():
    rng = DateRange(date(2024, 1, 10), date(2024, 2, 10))
    assert len(rng) == 31
    assert str(rng) == "[2024-01-10 to 2024-02-10)"
