"""Tests for range and interval expansion."""

from __future__ import annotations

import pytest

from isochrones.domain.errors import (
    ErrorCode,
    InvalidParameterValueError,
    MissingParameterError,
    ParameterExceedsMaximumError,
)
from isochrones.services.ranges import expand_ranges, step_ranges, threshold_count


def test_single_range_without_interval():
    assert expand_ranges([900]) == ((900.0,), None)


def test_multiple_ranges_are_sorted_ascending():
    ranges, interval = expand_ranges([600, 300])
    assert ranges == (300.0, 600.0)
    assert interval is None


def test_multiple_ranges_ignore_interval():
    ranges, interval = expand_ranges([900, 100, 500], interval=50)
    assert ranges == (100.0, 500.0, 900.0)
    assert interval is None


def test_duplicates_are_kept():
    ranges, _ = expand_ranges([300, 600, 300])
    assert ranges == (300.0, 300.0, 600.0)


def test_single_range_with_interval_ends_at_range():
    ranges, interval = expand_ranges([1000], interval=300)
    assert ranges == (300.0, 600.0, 900.0, 1000.0)
    assert ranges[-1] == 1000.0
    assert interval == 300.0


def test_interval_equal_to_range():
    ranges, interval = expand_ranges([600], interval=600)
    assert ranges == (600.0,)
    assert interval == 600.0


def test_interval_dividing_range_evenly():
    assert step_ranges(900.0, 300.0) == (300.0, 600.0, 900.0)


def test_interval_with_inexact_division():
    ranges = step_ranges(0.3, 0.1)
    assert len(ranges) == 3
    assert ranges[-1] == 0.3


def test_interval_above_range_exceeds_maximum():
    with pytest.raises(ParameterExceedsMaximumError) as excinfo:
        expand_ranges([300], interval=400)
    error = excinfo.value
    assert error.parameter == "interval"
    assert error.value == "400.0"
    assert error.limit == "300.0"
    assert error.code == ErrorCode.PARAMETER_VALUE_EXCEEDS_MAXIMUM


@pytest.mark.parametrize("values", [[300, 600], [300, 300, 600, 100]])
def test_output_is_non_decreasing(values):
    ranges, _ = expand_ranges(values)
    assert all(a <= b for a, b in zip(ranges, ranges[1:]))
    assert len(ranges) == len(values)


def test_empty_range_is_missing():
    with pytest.raises(MissingParameterError) as excinfo:
        expand_ranges([])
    assert excinfo.value.parameter == "range"


@pytest.mark.parametrize("value", [-1, "far", float("inf")])
def test_invalid_range_values(value):
    with pytest.raises(InvalidParameterValueError) as excinfo:
        expand_ranges([value])
    assert excinfo.value.parameter == "range"


@pytest.mark.parametrize("interval", [0, -60, "often"])
def test_invalid_interval(interval):
    with pytest.raises(InvalidParameterValueError) as excinfo:
        expand_ranges([600], interval=interval)
    assert excinfo.value.parameter == "interval"


def test_zero_range_is_allowed_without_interval():
    assert expand_ranges([0]) == ((0.0,), None)


def test_stepped_thresholds_are_lazy():
    ranges, interval = expand_ranges([18000], interval=1e-7)
    assert interval == 1e-7
    assert len(ranges) > 10**10
    assert ranges[0] == 1e-7
    assert ranges[-1] == 18000.0


def test_stepped_thresholds_slice_and_iterate():
    ranges = step_ranges(1000.0, 300.0)
    assert ranges[1:3] == (600.0, 900.0)
    assert list(ranges) == [300.0, 600.0, 900.0, 1000.0]
    assert threshold_count(1000.0, 300.0) == 4
    with pytest.raises(IndexError):
        ranges[4]
