"""Conversion of an isochrones request into a batch of travellers.

One traveller is built per location, in input order, with the
location's zero-based index as its id. Request-wide settings (units,
attributes, smoothing, calculation method) are converted once.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Sequence

from ..domain.errors import InternalServerError, MissingParameterError
from ..domain.models import (
    CalculationMethod,
    IsochroneBatch,
    LocationType,
    RouteSearchParameters,
    TravellerInfo,
    TravelRangeType,
)
from ..domain.request import IsochronesRequest
from .converters import (
    PARAM_INTERVAL,
    PARAM_RANGE,
    convert_area_unit,
    convert_attributes,
    convert_calc_method,
    convert_location_type,
    convert_profile,
    convert_range_type,
    convert_range_unit,
    convert_single_coordinate,
    convert_smoothing,
)
from .ranges import expand_ranges
from .route_options import process_request_options

logger = logging.getLogger(__name__)


def convert_request(request: IsochronesRequest) -> IsochroneBatch:
    """Convert a parsed request into an unvalidated batch.

    Raises:
        RequestError: On the first invalid, missing or unknown value.
        InternalServerError: If a traveller cannot be added to the batch.
    """
    batch = IsochroneBatch()

    for index, location in enumerate(request.locations):
        traveller = build_traveller(index, location, request)
        try:
            batch.add_traveller(traveller)
        except Exception as e:
            logger.error(
                "Could not add traveller",
                extra={"traveller_id": traveller.id, "error": str(e)},
            )
            raise InternalServerError(
                "Unable to process the request.", cause=e, parameter=PARAM_INTERVAL
            ) from e

    batch.id = request.id
    if request.range_units is not None:
        batch.units = convert_range_unit(request.range_units)
    if request.area_units is not None:
        batch.area_units = convert_area_unit(request.area_units)
    if request.attributes is not None:
        batch.attributes = convert_attributes(request.attributes)
    if request.smoothing is not None:
        batch.smoothing_factor = convert_smoothing(request.smoothing)
    if request.intersections is not None:
        batch.include_intersections = request.intersections
    batch.calc_method = select_calc_method(request)

    logger.debug(
        "Request converted",
        extra={
            "travellers": len(batch.travellers),
            "calc_method": batch.calc_method.value,
        },
    )
    return batch


def select_calc_method(request: IsochronesRequest) -> CalculationMethod:
    """Concave balls when routing options are present, fast isochrones otherwise."""
    if request.has_options:
        return convert_calc_method(CalculationMethod.CONCAVE_BALLS)
    return convert_calc_method(CalculationMethod.FASTISOCHRONE)


def build_traveller(
    index: int,
    coordinate: Sequence[Any],
    request: IsochronesRequest,
) -> TravellerInfo:
    """Build the validated traveller for one location of the request.

    Args:
        index: Position of the location in the request.
        coordinate: The raw [lon, lat] pair.
        request: The whole request, for its shared settings.

    Raises:
        InvalidParameterValueError: If profile, range type, location type,
            coordinate or range values are invalid.
        MissingParameterError: If the request has no range.
        ParameterExceedsMaximumError: If the interval exceeds the range.
    """
    route_search_parameters = build_route_search_parameters(request)

    range_type = TravelRangeType.TIME
    if request.range_type is not None:
        range_type = convert_range_type(request.range_type)

    location_type = LocationType.START
    if request.location_type is not None:
        location_type = convert_location_type(request.location_type)

    location = convert_single_coordinate(coordinate)

    if request.ranges is None:
        raise MissingParameterError.of(PARAM_RANGE)
    ranges, interval = expand_ranges(request.ranges, request.interval)

    return TravellerInfo(
        id=str(index),
        location=location,
        route_search_parameters=route_search_parameters,
        ranges=ranges,
        range_type=range_type,
        location_type=location_type,
        interval=interval,
    )


def build_route_search_parameters(request: IsochronesRequest) -> RouteSearchParameters:
    """Resolve the profile and apply routing options, turn restrictions off."""
    parameters = RouteSearchParameters(profile_type=convert_profile(request.profile))

    if request.options is not None:
        parameters = process_request_options(request.options, parameters)
    return dataclasses.replace(parameters, consider_turn_restrictions=False)
