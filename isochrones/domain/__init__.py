"""Domain layer - Core models, request model and errors.

This module contains the immutable traveller models, the external
request model and the typed errors used throughout the application.
"""

from .errors import (
    ConfigurationError,
    EngineError,
    ErrorCode,
    FeatureNotSupportedError,
    InternalServerError,
    InvalidJsonFormatError,
    InvalidParameterValueError,
    IsochronesError,
    MissingParameterError,
    ParameterExceedsMaximumError,
    ParameterExceedsMinimumError,
    ParameterOutOfRangeError,
    RequestError,
    UnknownParameterError,
)
from .models import (
    AvoidBorders,
    AvoidFeature,
    CalculationMethod,
    Coordinate,
    DistanceUnit,
    IsochroneBatch,
    IsochroneMap,
    IsochroneMapCollection,
    IsochroneSearchParameters,
    LocationType,
    RouteSearchParameters,
    RoutingProfileType,
    TravellerInfo,
    TravelRangeType,
    VehicleType,
)
from .request import IsochronesRequest, RouteRequestOptions, parse_request

__all__ = [
    # Models
    "AvoidBorders",
    "AvoidFeature",
    "CalculationMethod",
    "Coordinate",
    "DistanceUnit",
    "IsochroneBatch",
    "IsochroneMap",
    "IsochroneMapCollection",
    "IsochroneSearchParameters",
    "LocationType",
    "RouteSearchParameters",
    "RoutingProfileType",
    "TravellerInfo",
    "TravelRangeType",
    "VehicleType",
    # Request
    "IsochronesRequest",
    "RouteRequestOptions",
    "parse_request",
    # Errors
    "ErrorCode",
    "IsochronesError",
    "RequestError",
    "InvalidJsonFormatError",
    "UnknownParameterError",
    "MissingParameterError",
    "InvalidParameterValueError",
    "ParameterOutOfRangeError",
    "ParameterExceedsMaximumError",
    "ParameterExceedsMinimumError",
    "FeatureNotSupportedError",
    "InternalServerError",
    "EngineError",
    "ConfigurationError",
]
