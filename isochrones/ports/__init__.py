"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the request layer and the external
systems it drives, so that they can be injected and replaced in tests.
"""

from .engine import IsochroneEnginePort

__all__ = ["IsochroneEnginePort"]
