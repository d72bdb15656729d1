"""External isochrones request model.

The request is deliberately loosely typed: enum-like fields are plain
strings so that the converters, not the parser, decide which values are
legal and report them with the proper error code. Parsing only checks
the JSON shape.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import (
    InvalidJsonFormatError,
    InvalidParameterValueError,
    MissingParameterError,
    RequestError,
    UnknownParameterError,
)


class RouteRequestOptions(BaseModel):
    """Advanced routing options of an isochrones request."""

    model_config = ConfigDict(extra="forbid")

    avoid_features: Optional[List[str]] = None
    avoid_borders: Optional[str] = None
    avoid_countries: Optional[List[int]] = None
    vehicle_type: Optional[str] = None
    profile_params: Optional[Dict[str, Any]] = None
    avoid_polygons: Optional[Dict[str, Any]] = None


class IsochronesRequest(BaseModel):
    """Batch isochrones request as sent by API clients."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: Optional[str] = None
    profile: str
    locations: List[List[float]] = Field(..., min_length=1)
    ranges: Optional[List[float]] = Field(default=None, alias="range")
    range_type: Optional[str] = None
    range_units: Optional[str] = None
    area_units: Optional[str] = None
    interval: Optional[float] = None
    location_type: Optional[str] = None
    attributes: Optional[List[str]] = None
    smoothing: Optional[float] = None
    intersections: Optional[bool] = None
    options: Optional[RouteRequestOptions] = None

    @property
    def has_options(self) -> bool:
        return self.options is not None


RequestPayload = Union[IsochronesRequest, Mapping[str, Any], str, bytes]


def parse_request(payload: RequestPayload) -> IsochronesRequest:
    """Parse a raw request body into an IsochronesRequest.

    Args:
        payload: A parsed request, a mapping, or JSON text.

    Returns:
        The parsed request.

    Raises:
        InvalidJsonFormatError: If the body is not a JSON object.
        UnknownParameterError: If the body has unknown keys.
        MissingParameterError: If profile or locations are absent.
        InvalidParameterValueError: If a value has the wrong shape.
    """
    if isinstance(payload, IsochronesRequest):
        return payload

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise InvalidJsonFormatError(
                "Unable to parse JSON document.", cause=e
            ) from e

    if not isinstance(payload, Mapping):
        raise InvalidJsonFormatError("Request body must be a JSON object.")

    try:
        return IsochronesRequest.model_validate(payload)
    except ValidationError as e:
        raise _translate_validation_error(e) from e


def _translate_validation_error(exc: ValidationError) -> RequestError:
    """Map the first pydantic error to the matching request error."""
    error = exc.errors()[0]
    loc = tuple(str(part) for part in error.get("loc", ()))
    parameter = loc[0] if loc else ""
    kind = error.get("type", "")

    if kind == "extra_forbidden":
        return UnknownParameterError.of(".".join(loc))
    if kind == "missing":
        return MissingParameterError.of(".".join(loc))
    return InvalidParameterValueError.of(parameter, _reportable(error.get("input")))


def _reportable(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)
