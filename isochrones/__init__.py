"""Top-level package for the isochrones request layer.

Turns a batch isochrones request into validated per-location search
parameters, enforces the service policy limits, and hands each
traveller to an isochrone computation engine.
"""

from .domain import IsochronesRequest, parse_request
from .services import IsochronesService

__all__ = ["IsochronesRequest", "IsochronesService", "parse_request"]
