"""Services layer - Request conversion, validation and orchestration.

Available services:
- IsochronesService: Converts, validates and computes batch requests
"""

from .isochrones_service import IsochronesService
from .policy import validate_against_limits
from .request_converter import build_traveller, convert_request, select_calc_method

__all__ = [
    "IsochronesService",
    "build_traveller",
    "convert_request",
    "select_calc_method",
    "validate_against_limits",
]
