"""Tests for validating batches against the configured limits."""

from __future__ import annotations

import pytest

from isochrones.config import IsochronesLimits
from isochrones.domain.errors import (
    ErrorCode,
    FeatureNotSupportedError,
    ParameterExceedsMaximumError,
    ParameterExceedsMinimumError,
)
from isochrones.domain.request import parse_request
from isochrones.services.policy import validate_against_limits
from isochrones.services.request_converter import convert_request


def _batch(body):
    return convert_request(parse_request(body))


def test_valid_batch_passes(request_body, limits):
    validate_against_limits(_batch(request_body), limits)


class TestAreaComputation:
    """Test suite for the area attribute switch."""

    def test_area_rejected_when_disabled(self, request_body):
        request_body["attributes"] = ["area"]
        limits = IsochronesLimits(allow_compute_area=False)
        with pytest.raises(FeatureNotSupportedError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.code == ErrorCode.FEATURE_NOT_SUPPORTED
        assert excinfo.value.parameter == "attributes"

    def test_other_attributes_allowed_when_disabled(self, request_body):
        request_body["attributes"] = ["reachfactor"]
        validate_against_limits(_batch(request_body), IsochronesLimits(allow_compute_area=False))

    def test_area_checked_before_locations(self, request_body):
        request_body.update(
            attributes=["area"],
            locations=[[8.68, 49.41], [8.69, 49.42], [8.70, 49.43]],
        )
        limits = IsochronesLimits(allow_compute_area=False, maximum_locations=2)
        with pytest.raises(FeatureNotSupportedError):
            validate_against_limits(_batch(request_body), limits)


class TestLocations:
    """Test suite for the location count limit."""

    def test_too_many_locations(self, request_body, limits):
        request_body["locations"] = [[8.68, 49.41], [8.69, 49.42], [8.70, 49.43]]
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)

        error = excinfo.value
        assert error.parameter == "locations"
        assert error.value == "3"
        assert error.limit == "2"
        assert "3" in error.message
        assert "2" in error.message
        assert error.code == ErrorCode.PARAMETER_VALUE_EXCEEDS_MAXIMUM

    def test_location_count_checked_before_ranges(self, request_body, limits):
        request_body.update(
            locations=[[8.68, 49.41], [8.69, 49.42], [8.70, 49.43]],
            range=[999999],
        )
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.parameter == "locations"


class TestRangeLimits:
    """Test suite for the per traveller range limit."""

    def test_time_range_above_default(self, request_body, limits):
        request_body["range"] = [18001]
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.parameter == "range"
        assert excinfo.value.limit == "18000"

    def test_range_at_limit_passes(self, request_body, limits):
        request_body["range"] = [18000]
        validate_against_limits(_batch(request_body), limits)

    def test_distance_uses_distance_limit(self, request_body, limits):
        request_body.update(range_type="distance", range=[20000])
        validate_against_limits(_batch(request_body), limits)

        request_body["range"] = [100001]
        with pytest.raises(ParameterExceedsMaximumError):
            validate_against_limits(_batch(request_body), limits)

    def test_profile_specific_limit(self, request_body):
        request_body.update(profile="foot-walking", range=[3000])
        limits = IsochronesLimits(maximum_range_time_by_profile={"foot-walking": 1800})
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.limit == "1800"

    def test_fast_isochrone_limit_applies_without_options(self, request_body):
        request_body["range"] = [4000]
        limits = IsochronesLimits(fastisochrones_maximum_range_time=3600)
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.limit == "3600"

    def test_fast_isochrone_limit_ignored_with_options(self, request_body):
        request_body.update(range=[4000], options={})
        limits = IsochronesLimits(fastisochrones_maximum_range_time=3600)
        validate_against_limits(_batch(request_body), limits)

    def test_fast_isochrone_falls_back_to_general_limit(self, request_body):
        request_body["range"] = [2000]
        limits = IsochronesLimits(maximum_range_time_by_profile={"driving-car": 1800})
        with pytest.raises(ParameterExceedsMaximumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)
        assert excinfo.value.limit == "1800"


class TestIntervalCount:
    """Test suite for the number of isochrones per traveller."""

    def test_too_many_isochrones(self, request_body):
        request_body.update(range=[3600], interval=60)
        limits = IsochronesLimits(maximum_intervals=10)
        with pytest.raises(ParameterExceedsMinimumError) as excinfo:
            validate_against_limits(_batch(request_body), limits)

        error = excinfo.value
        assert error.parameter == "interval"
        assert error.code == ErrorCode.PARAMETER_VALUE_EXCEEDS_MINIMUM
        assert error.message == "Resulting number of 60 isochrones exceeds maximum value of 10."

    def test_count_at_limit_passes(self, request_body):
        request_body.update(range=[600], interval=60)
        validate_against_limits(_batch(request_body), IsochronesLimits(maximum_intervals=10))

    def test_zero_disables_the_count_limit(self, request_body):
        request_body.update(range=[3600], interval=60)
        validate_against_limits(_batch(request_body), IsochronesLimits(maximum_intervals=0))

    def test_explicit_range_list_is_counted(self, request_body):
        request_body["range"] = [60, 120, 180]
        limits = IsochronesLimits(maximum_intervals=2)
        with pytest.raises(ParameterExceedsMinimumError):
            validate_against_limits(_batch(request_body), limits)


def test_tiny_interval_is_rejected_without_expanding(request_body):
    request_body.update(range=[18000], interval=1e-7)
    batch = _batch(request_body)
    assert len(batch.travellers[0].ranges) > 10**10

    with pytest.raises(ParameterExceedsMinimumError) as excinfo:
        validate_against_limits(batch, IsochronesLimits(maximum_intervals=10))
    assert int(excinfo.value.value) > 10**10
    assert excinfo.value.message.endswith("exceeds maximum value of 10.")


def test_tiny_interval_still_checks_range_first(request_body):
    request_body.update(range=[20000], interval=1e-7)
    with pytest.raises(ParameterExceedsMaximumError) as excinfo:
        validate_against_limits(_batch(request_body), IsochronesLimits(maximum_intervals=10))
    assert excinfo.value.parameter == "range"
