"""Valhalla isochrone engine adapter.

Computes the isochrones of one traveller with a Valhalla routing
server's ``/isochrone`` endpoint:
- Profiles map onto Valhalla costing models
- Time thresholds are sent in minutes, distance thresholds in kilometres
- Destination locations are computed in reverse
- Avoided features and polygons become costing options and exclusions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ...config import EngineConfig, get_config
from ...domain.errors import EngineError
from ...domain.models import (
    AvoidFeature,
    DistanceUnit,
    IsochroneMap,
    IsochroneSearchParameters,
    LocationType,
    RoutingProfileType,
    TravelRangeType,
)

COSTING_BY_PROFILE: Dict[RoutingProfileType, str] = {
    RoutingProfileType.DRIVING_CAR: "auto",
    RoutingProfileType.DRIVING_HGV: "truck",
    RoutingProfileType.CYCLING_REGULAR: "bicycle",
    RoutingProfileType.CYCLING_MOUNTAIN: "bicycle",
    RoutingProfileType.CYCLING_ROAD: "bicycle",
    RoutingProfileType.CYCLING_ELECTRIC: "bicycle",
    RoutingProfileType.FOOT_WALKING: "pedestrian",
    RoutingProfileType.FOOT_HIKING: "pedestrian",
    RoutingProfileType.WHEELCHAIR: "pedestrian",
}

# avoided feature -> costing option switched off
COSTING_OPTIONS_BY_FEATURE: Dict[AvoidFeature, str] = {
    AvoidFeature.HIGHWAYS: "use_highways",
    AvoidFeature.TOLLWAYS: "use_tolls",
    AvoidFeature.FERRIES: "use_ferry",
}


@dataclass
class ValhallaIsochroneEngine:
    """Isochrone engine backed by a Valhalla server.

    This adapter implements IsochroneEnginePort.

    Attributes:
        config: Engine configuration (base URL, timeout)
        session: Optional HTTP session, a new one is used if omitted
    """

    config: EngineConfig = field(default_factory=lambda: get_config().engine)
    session: Optional[requests.Session] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.session is None:
            self.session = requests.Session()

    def build_isochrone(self, parameters: IsochroneSearchParameters) -> IsochroneMap:
        """Compute the isochrones of one traveller.

        Raises:
            EngineError: If the server cannot be reached, answers with an
                error status or returns a malformed document.
        """
        traveller = parameters.traveller
        url = f"{self.config.base_url.rstrip('/')}/isochrone"
        payload = self.build_payload(parameters)

        self._logger.debug(
            "Requesting Valhalla isochrone",
            extra={"url": url, "traveller_id": traveller.id, "costing": payload["costing"]},
        )

        try:
            resp = self.session.post(url, json=payload, timeout=self.config.timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            self._logger.error(
                "Valhalla request failed",
                extra={"traveller_id": traveller.id, "error": str(e)},
            )
            raise EngineError(
                "Isochrone engine request failed",
                cause=e,
                engine="valhalla",
                traveller_id=traveller.id,
            ) from e
        except ValueError as e:
            raise EngineError(
                "Isochrone engine returned invalid JSON",
                cause=e,
                engine="valhalla",
                traveller_id=traveller.id,
            ) from e

        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            raise EngineError(
                "Isochrone engine returned no feature collection",
                engine="valhalla",
                traveller_id=traveller.id,
            )
        if not features:
            self._logger.warning(
                "Valhalla returned no isochrone features",
                extra={"traveller_id": traveller.id},
            )

        return IsochroneMap(
            traveller_id=traveller.id,
            center=traveller.location,
            ranges=tuple(traveller.ranges),
            features=tuple(features),
        )

    def build_payload(self, parameters: IsochroneSearchParameters) -> Dict[str, Any]:
        """Translate search parameters into a Valhalla isochrone request body."""
        traveller = parameters.traveller
        route = traveller.route_search_parameters

        payload: Dict[str, Any] = {
            "locations": [{"lat": traveller.location.lat, "lon": traveller.location.lon}],
            "costing": COSTING_BY_PROFILE[route.profile_type],
            "contours": self._contours(parameters),
            "polygons": True,
            "reverse": traveller.location_type is LocationType.DESTINATION,
        }
        if parameters.smoothing_factor is not None:
            # 0 keeps every vertex, 100 smooths the most
            payload["denoise"] = round(1 - parameters.smoothing_factor / 100, 2)

        costing_options = {
            option: 0
            for feature, option in COSTING_OPTIONS_BY_FEATURE.items()
            if feature in route.avoid_features
        }
        if costing_options:
            payload["costing_options"] = {payload["costing"]: costing_options}

        if route.avoid_areas is not None:
            payload["exclude_polygons"] = _exclusion_rings(route.avoid_areas)
        return payload

    def _contours(self, parameters: IsochroneSearchParameters) -> List[Dict[str, float]]:
        traveller = parameters.traveller
        if traveller.range_type is TravelRangeType.TIME:
            return [{"time": value / 60} for value in traveller.ranges]

        unit = parameters.units or DistanceUnit.METERS
        return [{"distance": value * unit.meters / 1000} for value in traveller.ranges]


def _exclusion_rings(geometry: Dict[str, Any]) -> List[Any]:
    """Outer rings of a GeoJSON Polygon or MultiPolygon."""
    if geometry["type"] == "Polygon":
        return [geometry["coordinates"][0]]
    return [polygon[0] for polygon in geometry["coordinates"]]
