"""Null engine implementation for dry runs.

Returns an empty result for every traveller without computing any
geometry. Useful to validate requests against the policy limits, or in
tests that only care about the request flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...domain.models import IsochroneMap, IsochroneSearchParameters


@dataclass
class NullIsochroneEngine:
    """No-op engine - every isochrone map is empty.

    Attributes:
        calls: Search parameters received, in call order
    """

    calls: List[IsochroneSearchParameters] = field(default_factory=list, repr=False)

    def build_isochrone(self, parameters: IsochroneSearchParameters) -> IsochroneMap:
        self.calls.append(parameters)
        return IsochroneMap(
            traveller_id=parameters.traveller.id,
            center=parameters.location,
            ranges=tuple(parameters.ranges),
        )
