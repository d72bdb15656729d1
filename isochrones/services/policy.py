"""Validation of a converted batch against the service policy limits.

Checks run once over the whole batch, before any engine call, and stop
at the first violation. Their order is fixed:

1. area attribute requested while area computation is disabled
2. number of locations
3. maximum range per traveller (profile, calculation method, range type)
4. number of isochrones per traveller
"""

from __future__ import annotations

import logging

from ..config import IsochronesLimits
from ..domain.errors import (
    FeatureNotSupportedError,
    ParameterExceedsMaximumError,
    ParameterExceedsMinimumError,
)
from ..domain.models import IsochroneBatch
from .converters import PARAM_INTERVAL, PARAM_LOCATIONS, PARAM_RANGE

logger = logging.getLogger(__name__)

AREA_ATTRIBUTE = "area"


def validate_against_limits(batch: IsochroneBatch, limits: IsochronesLimits) -> None:
    """Enforce the configured limits on a converted batch.

    Raises:
        FeatureNotSupportedError: If area is requested but disabled.
        ParameterExceedsMaximumError: If there are too many locations or a
            range is above the allowed maximum.
        ParameterExceedsMinimumError: If a traveller yields more
            isochrones than allowed.
    """
    if not limits.allow_compute_area and batch.has_attribute(AREA_ATTRIBUTE):
        raise FeatureNotSupportedError(
            "Area computation is not enabled.", parameter="attributes"
        )

    travellers = batch.travellers
    if len(travellers) > limits.maximum_locations:
        raise ParameterExceedsMaximumError.of(
            PARAM_LOCATIONS, len(travellers), limits.maximum_locations
        )

    for traveller in travellers:
        allowed = limits.maximum_range(
            traveller.profile_type, batch.calc_method, traveller.range_type
        )
        if traveller.maximum_range > allowed:
            logger.info(
                "Range above limit",
                extra={
                    "traveller_id": traveller.id,
                    "maximum_range": traveller.maximum_range,
                    "allowed": allowed,
                },
            )
            raise ParameterExceedsMaximumError.of(
                PARAM_RANGE, traveller.maximum_range, allowed
            )

        max_intervals = limits.maximum_intervals
        count = len(traveller.ranges)
        if 0 < max_intervals < count:
            raise ParameterExceedsMinimumError(
                f"Resulting number of {count} isochrones exceeds maximum value of "
                f"{max_intervals}.",
                parameter=PARAM_INTERVAL,
                value=str(count),
                limit=str(max_intervals),
            )
