"""Domain models for the isochrones request layer.

Travellers, route search parameters and search parameters are frozen
dataclasses: once a request has been converted and validated nothing
downstream may change them. The batch itself is mutable only while it
is being assembled by the request converter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple


class RoutingProfileType(IntEnum):
    """Routing profiles known to the computation engine.

    UNKNOWN (0) is never a valid profile for a request.
    """

    UNKNOWN = 0
    DRIVING_CAR = 1
    DRIVING_HGV = 2
    CYCLING_REGULAR = 10
    CYCLING_MOUNTAIN = 11
    CYCLING_ROAD = 12
    CYCLING_ELECTRIC = 17
    FOOT_WALKING = 20
    FOOT_HIKING = 21
    WHEELCHAIR = 30

    @property
    def profile_name(self) -> str:
        """Public name of the profile, e.g. 'driving-car'."""
        return _PROFILE_NAMES.get(self, "unknown")

    @classmethod
    def from_string(cls, value: str) -> RoutingProfileType:
        """Resolve a public profile name, UNKNOWN if it is not recognized."""
        return _PROFILES_BY_NAME.get(value.strip().lower(), cls.UNKNOWN)

    @property
    def is_driving(self) -> bool:
        return self in (RoutingProfileType.DRIVING_CAR, RoutingProfileType.DRIVING_HGV)

    @property
    def is_cycling(self) -> bool:
        return 10 <= self.value < 20

    @property
    def is_walking(self) -> bool:
        return 20 <= self.value < 30

    @property
    def is_wheelchair(self) -> bool:
        return self is RoutingProfileType.WHEELCHAIR


_PROFILE_NAMES: Dict[RoutingProfileType, str] = {
    RoutingProfileType.DRIVING_CAR: "driving-car",
    RoutingProfileType.DRIVING_HGV: "driving-hgv",
    RoutingProfileType.CYCLING_REGULAR: "cycling-regular",
    RoutingProfileType.CYCLING_MOUNTAIN: "cycling-mountain",
    RoutingProfileType.CYCLING_ROAD: "cycling-road",
    RoutingProfileType.CYCLING_ELECTRIC: "cycling-electric",
    RoutingProfileType.FOOT_WALKING: "foot-walking",
    RoutingProfileType.FOOT_HIKING: "foot-hiking",
    RoutingProfileType.WHEELCHAIR: "wheelchair",
}

_PROFILES_BY_NAME: Dict[str, RoutingProfileType] = {
    name: profile for profile, name in _PROFILE_NAMES.items()
}


class TravelRangeType(str, Enum):
    """Cost dimension of the requested ranges."""

    DISTANCE = "distance"
    TIME = "time"


class LocationType(str, Enum):
    """Whether a location is the start or the destination of travel."""

    START = "start"
    DESTINATION = "destination"


class CalculationMethod(str, Enum):
    """Algorithm used by the engine to build the isochrone geometry."""

    CONCAVE_BALLS = "concaveballs"
    GRID = "grid"
    FASTISOCHRONE = "fastisochrone"


class DistanceUnit(str, Enum):
    METERS = "m"
    KILOMETERS = "km"
    MILES = "mi"

    @property
    def meters(self) -> float:
        """Length of one unit in metres."""
        return _UNIT_METERS[self]


_UNIT_METERS = {
    DistanceUnit.METERS: 1.0,
    DistanceUnit.KILOMETERS: 1000.0,
    DistanceUnit.MILES: 1609.344,
}


class AvoidFeature(IntFlag):
    """Way features a route search may avoid, combined as bit flags."""

    NONE = 0
    HIGHWAYS = 1
    TOLLWAYS = 2
    STEPS = 4
    FERRIES = 8
    FORDS = 16


class AvoidBorders(str, Enum):
    ALL = "all"
    CONTROLLED = "controlled"
    NONE = "none"


class VehicleType(str, Enum):
    """Heavy goods vehicle subtypes."""

    HGV = "hgv"
    BUS = "bus"
    AGRICULTURAL = "agricultural"
    DELIVERY = "delivery"
    FORESTRY = "forestry"
    GOODS = "goods"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A validated planar coordinate (x = longitude, y = latitude)."""

    x: float
    y: float

    def __post_init__(self) -> None:
        """Reject NaN and infinite components."""
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Coordinate components must be finite, got ({self.x}, {self.y})")

    @property
    def lon(self) -> float:
        return self.x

    @property
    def lat(self) -> float:
        return self.y

    def to_list(self) -> List[float]:
        return [self.x, self.y]


@dataclass(frozen=True, slots=True)
class RouteSearchParameters:
    """Route search settings a traveller hands to the engine.

    Attributes:
        profile_type: Resolved routing profile
        consider_turn_restrictions: Always False for isochrones
        avoid_features: Combined flags of way features to avoid
        avoid_borders: Border crossing restriction, if any
        avoid_countries: Country ids the search must not enter
        vehicle_type: HGV subtype, only for the driving-hgv profile
        profile_params: Profile-specific weightings and restrictions
        avoid_areas: GeoJSON Polygon or MultiPolygon to avoid
    """

    profile_type: RoutingProfileType = RoutingProfileType.UNKNOWN
    consider_turn_restrictions: bool = False
    avoid_features: AvoidFeature = AvoidFeature.NONE
    avoid_borders: Optional[AvoidBorders] = None
    avoid_countries: Tuple[int, ...] = ()
    vehicle_type: Optional[VehicleType] = None
    profile_params: Optional[Mapping[str, Any]] = None
    avoid_areas: Optional[Mapping[str, Any]] = None

    @property
    def has_profile_params(self) -> bool:
        return self.profile_params is not None


@dataclass(frozen=True, slots=True)
class TravellerInfo:
    """One location of a batch request with its travel cost parameters.

    Attributes:
        id: Position of the location in the request, as a string
        location: Validated coordinate
        route_search_parameters: Settings for the underlying route search
        ranges: Ascending thresholds, one isochrone per threshold.
            Stepped thresholds are computed on access
        range_type: Cost dimension of the thresholds
        location_type: Whether travel starts or ends at the location
        interval: Step the thresholds were derived with, if any
    """

    id: str
    location: Coordinate
    route_search_parameters: RouteSearchParameters
    ranges: Sequence[float]
    range_type: TravelRangeType = TravelRangeType.TIME
    location_type: LocationType = LocationType.START
    interval: Optional[float] = None

    @property
    def maximum_range(self) -> float:
        """Largest threshold requested for this traveller."""
        return self.ranges[-1]

    @property
    def profile_type(self) -> RoutingProfileType:
        return self.route_search_parameters.profile_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for summaries and logs."""
        return {
            "id": self.id,
            "profile": self.profile_type.profile_name,
            "location": self.location.to_list(),
            "range_type": self.range_type.value,
            "location_type": self.location_type.value,
            "ranges": list(self.ranges),
            "interval": self.interval,
        }


@dataclass(frozen=True, slots=True)
class IsochroneSearchParameters:
    """Everything the engine needs to compute the isochrones of one traveller."""

    traveller_index: int
    traveller: TravellerInfo
    calc_method: CalculationMethod
    units: Optional[DistanceUnit] = None
    area_units: Optional[DistanceUnit] = None
    attributes: Tuple[str, ...] = ()
    smoothing_factor: Optional[float] = None
    include_intersections: bool = False

    @property
    def location(self) -> Coordinate:
        return self.traveller.location

    @property
    def ranges(self) -> Sequence[float]:
        return self.traveller.ranges


@dataclass
class IsochroneBatch:
    """A converted isochrones request.

    Attributes:
        travellers: Travellers in input location order
        id: Client supplied request id
        units: Unit of distance ranges
        area_units: Unit of reported areas
        attributes: Extra attributes to compute
        smoothing_factor: Polygon smoothing, 0 to 100
        include_intersections: Whether to compute isochrone intersections
        calc_method: Selected calculation method
    """

    travellers: List[TravellerInfo] = field(default_factory=list)
    id: Optional[str] = None
    units: Optional[DistanceUnit] = None
    area_units: Optional[DistanceUnit] = None
    attributes: Tuple[str, ...] = ()
    smoothing_factor: Optional[float] = None
    include_intersections: bool = False
    calc_method: CalculationMethod = CalculationMethod.FASTISOCHRONE

    def add_traveller(self, traveller: TravellerInfo) -> None:
        """Append a traveller.

        Raises:
            ValueError: If a traveller with the same id is already present.
        """
        if any(t.id == traveller.id for t in self.travellers):
            raise ValueError(f"Duplicate traveller id: {traveller.id}")
        self.travellers.append(traveller)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def search_parameters(self, index: int) -> IsochroneSearchParameters:
        """Build the engine parameters for the traveller at ``index``."""
        return IsochroneSearchParameters(
            traveller_index=index,
            traveller=self.travellers[index],
            calc_method=self.calc_method,
            units=self.units,
            area_units=self.area_units,
            attributes=self.attributes,
            smoothing_factor=self.smoothing_factor,
            include_intersections=self.include_intersections,
        )


@dataclass(frozen=True, slots=True)
class IsochroneMap:
    """Engine result for one traveller.

    Attributes:
        traveller_id: Id of the traveller the isochrones belong to
        center: The traveller's location
        ranges: Thresholds the engine evaluated
        features: GeoJSON features, one per computed isochrone
    """

    traveller_id: str
    center: Coordinate
    ranges: Tuple[float, ...] = ()
    features: Tuple[Dict[str, Any], ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.features) == 0


@dataclass
class IsochroneMapCollection:
    """Engine results, in the order the locations were supplied."""

    maps: List[IsochroneMap] = field(default_factory=list)

    def add(self, isochrone_map: IsochroneMap) -> None:
        self.maps.append(isochrone_map)

    def __len__(self) -> int:
        return len(self.maps)

    def __iter__(self) -> Iterator[IsochroneMap]:
        return iter(self.maps)

    def __getitem__(self, index: int) -> IsochroneMap:
        return self.maps[index]
