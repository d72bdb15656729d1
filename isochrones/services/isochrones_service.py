"""Isochrones service - Main orchestrator.

Converts a batch request, validates it against the policy limits and
only then invokes the engine once per traveller, in input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import IsochronesLimits
from ..domain.errors import IsochronesError
from ..domain.models import IsochroneBatch, IsochroneMapCollection
from ..domain.request import RequestPayload, parse_request
from ..monitoring import timed
from ..ports.engine import IsochroneEnginePort
from .policy import validate_against_limits
from .request_converter import convert_request


@dataclass
class IsochronesService:
    """Main service for batch isochrone requests.

    This service orchestrates the full flow:
    1. Request parsing
    2. Conversion into travellers
    3. Validation against the policy limits
    4. One engine call per traveller

    Attributes:
        engine: Computes the isochrones of one traveller
        limits: Read-only service policy limits
    """

    engine: IsochroneEnginePort
    limits: IsochronesLimits

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def prepare(self, request: RequestPayload) -> IsochroneBatch:
        """Parse, convert and validate a request without computing anything.

        Args:
            request: A parsed request, a mapping, or JSON text.

        Returns:
            The validated batch.

        Raises:
            RequestError: On the first conversion or validation failure.
        """
        parsed = parse_request(request)
        batch = convert_request(parsed)
        validate_against_limits(batch, self.limits)

        self._logger.info(
            "Request validated",
            extra={
                "request_id": batch.id,
                "travellers": len(batch.travellers),
                "calc_method": batch.calc_method.value,
            },
        )
        return batch

    def compute(self, batch: IsochroneBatch) -> IsochroneMapCollection:
        """Invoke the engine for every traveller of a validated batch.

        Engine errors propagate unchanged; later travellers are not computed.
        """
        isochrone_maps = IsochroneMapCollection()
        for index, traveller in enumerate(batch.travellers):
            with timed(self._logger, "Isochrone computed", traveller_id=traveller.id):
                isochrone_maps.add(
                    self.engine.build_isochrone(batch.search_parameters(index))
                )
        return isochrone_maps

    def generate(self, request: RequestPayload) -> IsochroneMapCollection:
        """Compute the isochrones of a batch request.

        Nothing is computed unless the whole request converts and validates.

        Args:
            request: A parsed request, a mapping, or JSON text.

        Returns:
            One result per location, in input order.

        Raises:
            RequestError: On the first conversion or validation failure.
            EngineError: If the engine fails for a traveller.
        """
        batch = self.prepare(request)
        if not batch.travellers:
            return IsochroneMapCollection()
        return self.compute(batch)

    def generate_safe(
        self, request: RequestPayload
    ) -> tuple[Optional[IsochroneMapCollection], Optional[IsochronesError]]:
        """Compute the isochrones, returning the error instead of raising.

        Returns:
            Tuple of (results or None, error or None).
        """
        try:
            return self.generate(request), None
        except IsochronesError as e:
            self._logger.warning(
                "Isochrones request failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return None, e
