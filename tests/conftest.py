"""Shared fixtures for the isochrones tests."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from isochrones.config import IsochronesLimits, reset_config
from isochrones.domain.models import IsochroneMap, IsochroneSearchParameters


class RecordingEngine:
    """Fake engine that records every call and returns one empty map per traveller."""

    def __init__(self) -> None:
        self.calls: List[IsochroneSearchParameters] = []

    def build_isochrone(self, parameters: IsochroneSearchParameters) -> IsochroneMap:
        self.calls.append(parameters)
        return IsochroneMap(
            traveller_id=parameters.traveller.id,
            center=parameters.location,
            ranges=tuple(parameters.ranges),
            features=({"type": "Feature", "properties": {"value": parameters.ranges[-1]}},),
        )


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def limits() -> IsochronesLimits:
    return IsochronesLimits(
        maximum_locations=2,
        maximum_intervals=10,
        allow_compute_area=True,
        maximum_range_distance=100000,
        maximum_range_time=18000,
    )


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def request_body() -> Dict[str, Any]:
    return {
        "profile": "driving-car",
        "locations": [[8.68, 49.41], [8.69, 49.42]],
        "range": [300, 600],
        "range_type": "time",
    }
