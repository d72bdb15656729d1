"""Enum, unit and coordinate converters.

Each converter maps one externally supplied value onto its internal
representation through a lookup table. Every value missing from a
table, including values of the wrong type, raises
InvalidParameterValueError naming the parameter. Nothing is defaulted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Sequence, Tuple, TypeVar

from ..domain.errors import InvalidParameterValueError
from ..domain.models import (
    CalculationMethod,
    Coordinate,
    DistanceUnit,
    LocationType,
    RoutingProfileType,
    TravelRangeType,
)

T = TypeVar("T")

PARAM_PROFILE = "profile"
PARAM_LOCATIONS = "locations"
PARAM_RANGE = "range"
PARAM_RANGE_TYPE = "range_type"
PARAM_RANGE_UNITS = "range_units"
PARAM_AREA_UNITS = "area_units"
PARAM_INTERVAL = "interval"
PARAM_LOCATION_TYPE = "location_type"
PARAM_ATTRIBUTES = "attributes"
PARAM_SMOOTHING = "smoothing"
PARAM_CALC_METHOD = "calc_method"

RANGE_TYPES: Mapping[str, TravelRangeType] = {
    "distance": TravelRangeType.DISTANCE,
    "time": TravelRangeType.TIME,
}

LOCATION_TYPES: Mapping[str, LocationType] = {
    "start": LocationType.START,
    "destination": LocationType.DESTINATION,
}

DISTANCE_UNITS: Mapping[str, DistanceUnit] = {
    "m": DistanceUnit.METERS,
    "meters": DistanceUnit.METERS,
    "metres": DistanceUnit.METERS,
    "km": DistanceUnit.KILOMETERS,
    "kilometers": DistanceUnit.KILOMETERS,
    "kilometres": DistanceUnit.KILOMETERS,
    "mi": DistanceUnit.MILES,
    "miles": DistanceUnit.MILES,
}

CALC_METHODS: Mapping[str, CalculationMethod] = {
    "concaveballs": CalculationMethod.CONCAVE_BALLS,
    "concave_balls": CalculationMethod.CONCAVE_BALLS,
    "grid": CalculationMethod.GRID,
    "fastisochrone": CalculationMethod.FASTISOCHRONE,
}

ATTRIBUTES: Mapping[str, str] = {
    "area": "area",
    "reachfactor": "reachfactor",
    "total_pop": "total_pop",
}


def lookup(table: Mapping[str, T], value: Any, parameter: str) -> T:
    key = value.value if isinstance(value, Enum) else value
    try:
        return table[key.strip().lower()]
    except (AttributeError, KeyError, TypeError) as e:
        raise InvalidParameterValueError.of(parameter, value, cause=e) from e


def convert_range_type(range_type: Any) -> TravelRangeType:
    return lookup(RANGE_TYPES, range_type, PARAM_RANGE_TYPE)


def convert_location_type(location_type: Any) -> LocationType:
    return lookup(LOCATION_TYPES, location_type, PARAM_LOCATION_TYPE)


def convert_area_unit(unit: Any) -> DistanceUnit:
    return lookup(DISTANCE_UNITS, unit, PARAM_AREA_UNITS)


def convert_range_unit(unit: Any) -> DistanceUnit:
    return lookup(DISTANCE_UNITS, unit, PARAM_RANGE_UNITS)


def convert_calc_method(method: Any) -> CalculationMethod:
    return lookup(CALC_METHODS, method, PARAM_CALC_METHOD)


def convert_attributes(attributes: Iterable[Any]) -> Tuple[str, ...]:
    """Map requested attribute flags onto their internal names."""
    return tuple(lookup(ATTRIBUTES, attribute, PARAM_ATTRIBUTES) for attribute in attributes)


def convert_smoothing(smoothing: Any) -> float:
    """Validate a smoothing factor, 0 to 100 inclusive."""
    try:
        factor = float(smoothing)
    except (TypeError, ValueError) as e:
        raise InvalidParameterValueError.of(PARAM_SMOOTHING, smoothing, cause=e) from e

    # NaN fails both comparisons
    if not 0 <= factor <= 100:
        raise InvalidParameterValueError.of(PARAM_SMOOTHING, smoothing)
    return factor


def convert_profile(profile: Any) -> RoutingProfileType:
    """Resolve a public profile name to a non-zero profile type."""
    try:
        profile_type = RoutingProfileType.from_string(profile)
    except (AttributeError, TypeError) as e:
        raise InvalidParameterValueError.of(PARAM_PROFILE, profile, cause=e) from e

    if profile_type is RoutingProfileType.UNKNOWN:
        raise InvalidParameterValueError.of(PARAM_PROFILE, profile)
    return profile_type


def convert_single_coordinate(coordinate: Sequence[Any]) -> Coordinate:
    """Validate one [lon, lat] pair.

    Raises:
        InvalidParameterValueError: If the pair does not have exactly two
            finite numeric components.
    """
    try:
        size = len(coordinate)
    except TypeError as e:
        raise InvalidParameterValueError.of(PARAM_LOCATIONS, cause=e) from e
    if size != 2:
        raise InvalidParameterValueError.of(PARAM_LOCATIONS)

    try:
        return Coordinate(float(coordinate[0]), float(coordinate[1]))
    except (TypeError, ValueError) as e:
        raise InvalidParameterValueError.of(PARAM_LOCATIONS, cause=e) from e
