"""Processing of the advanced routing options of a request.

Options are only applied when the request carries an ``options`` block.
Each option is validated against the resolved profile before it is
merged into the route search parameters.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..domain.errors import InvalidParameterValueError
from ..domain.models import (
    AvoidBorders,
    AvoidFeature,
    RouteSearchParameters,
    RoutingProfileType,
    VehicleType,
)
from ..domain.request import RouteRequestOptions
from .converters import lookup

logger = logging.getLogger(__name__)

PARAM_AVOID_FEATURES = "avoid_features"
PARAM_AVOID_BORDERS = "avoid_borders"
PARAM_AVOID_COUNTRIES = "avoid_countries"
PARAM_VEHICLE_TYPE = "vehicle_type"
PARAM_PROFILE_PARAMS = "profile_params"
PARAM_AVOID_POLYGONS = "avoid_polygons"

ProfileCheck = Callable[[RoutingProfileType], bool]

# feature name -> (flag, profiles the feature can be avoided on)
AVOID_FEATURES: Mapping[str, Tuple[AvoidFeature, ProfileCheck]] = {
    "highways": (AvoidFeature.HIGHWAYS, lambda p: p.is_driving),
    "tollways": (AvoidFeature.TOLLWAYS, lambda p: p.is_driving),
    "ferries": (AvoidFeature.FERRIES, lambda p: True),
    "fords": (AvoidFeature.FORDS, lambda p: not p.is_wheelchair),
    "steps": (AvoidFeature.STEPS, lambda p: not p.is_driving),
}

AVOID_BORDERS: Mapping[str, AvoidBorders] = {
    "all": AvoidBorders.ALL,
    "controlled": AvoidBorders.CONTROLLED,
    "none": AvoidBorders.NONE,
}

VEHICLE_TYPES: Mapping[str, VehicleType] = {v.value: v for v in VehicleType}

PROFILE_PARAM_KEYS = frozenset(
    {"weightings", "restrictions", "surface_quality_known", "allow_unsuitable"}
)

POLYGON_TYPES = frozenset({"Polygon", "MultiPolygon"})


def process_request_options(
    options: RouteRequestOptions,
    parameters: RouteSearchParameters,
) -> RouteSearchParameters:
    """Merge validated routing options into route search parameters.

    Args:
        options: The request's options block.
        parameters: Parameters with the profile type already resolved.

    Returns:
        A new RouteSearchParameters with the options applied.

    Raises:
        InvalidParameterValueError: If an option is unknown or not
            applicable to the profile.
    """
    profile = parameters.profile_type
    changes: Dict[str, Any] = {}

    if options.avoid_features is not None:
        changes["avoid_features"] = _convert_avoid_features(options.avoid_features, profile)

    if options.avoid_borders is not None:
        if not profile.is_driving:
            raise InvalidParameterValueError.of(PARAM_AVOID_BORDERS, options.avoid_borders)
        changes["avoid_borders"] = lookup(AVOID_BORDERS, options.avoid_borders, PARAM_AVOID_BORDERS)

    if options.avoid_countries is not None:
        for country in options.avoid_countries:
            if country <= 0:
                raise InvalidParameterValueError.of(PARAM_AVOID_COUNTRIES, country)
        changes["avoid_countries"] = tuple(options.avoid_countries)

    if options.vehicle_type is not None:
        if profile is not RoutingProfileType.DRIVING_HGV:
            raise InvalidParameterValueError.of(PARAM_VEHICLE_TYPE, options.vehicle_type)
        changes["vehicle_type"] = lookup(VEHICLE_TYPES, options.vehicle_type, PARAM_VEHICLE_TYPE)

    if options.profile_params is not None:
        changes["profile_params"] = _convert_profile_params(options.profile_params)

    if options.avoid_polygons is not None:
        changes["avoid_areas"] = _convert_avoid_polygons(options.avoid_polygons)

    logger.debug(
        "Routing options applied",
        extra={"profile": profile.profile_name, "options": sorted(changes)},
    )
    return dataclasses.replace(parameters, **changes)


def _convert_avoid_features(names: Any, profile: RoutingProfileType) -> AvoidFeature:
    flags = AvoidFeature.NONE
    for name in names:
        flag, applies_to = lookup(AVOID_FEATURES, name, PARAM_AVOID_FEATURES)
        if not applies_to(profile):
            raise InvalidParameterValueError.of(PARAM_AVOID_FEATURES, name)
        flags |= flag
    return flags


def _convert_profile_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = set(params) - PROFILE_PARAM_KEYS
    if unknown:
        raise InvalidParameterValueError.of(PARAM_PROFILE_PARAMS, sorted(unknown)[0])
    for key in ("weightings", "restrictions"):
        if key in params and not isinstance(params[key], Mapping):
            raise InvalidParameterValueError.of(PARAM_PROFILE_PARAMS, key)
    return dict(params)


def _convert_avoid_polygons(geometry: Mapping[str, Any]) -> Dict[str, Any]:
    geometry_type: Optional[Any] = geometry.get("type")
    coordinates = geometry.get("coordinates")
    if not isinstance(geometry_type, str) or geometry_type not in POLYGON_TYPES:
        raise InvalidParameterValueError.of(PARAM_AVOID_POLYGONS, geometry_type)
    if not isinstance(coordinates, list) or not coordinates:
        raise InvalidParameterValueError.of(PARAM_AVOID_POLYGONS, geometry_type)

    polygons = [coordinates] if geometry_type == "Polygon" else coordinates
    if not all(_has_rings(polygon) for polygon in polygons):
        raise InvalidParameterValueError.of(PARAM_AVOID_POLYGONS, geometry_type)
    return {"type": geometry_type, "coordinates": coordinates}


def _has_rings(polygon: Any) -> bool:
    """A polygon is a non-empty list of non-empty rings."""
    if not isinstance(polygon, list) or not polygon:
        return False
    return all(isinstance(ring, list) and ring for ring in polygon)
