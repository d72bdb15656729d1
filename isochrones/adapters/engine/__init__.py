"""Engine adapters - Implementations of IsochroneEnginePort.

Available implementations:
- ValhallaIsochroneEngine: Computes isochrones with a Valhalla server
- NullIsochroneEngine: Returns empty results (dry runs)
"""

from .null_engine import NullIsochroneEngine
from .valhalla_adapter import ValhallaIsochroneEngine

__all__ = ["NullIsochroneEngine", "ValhallaIsochroneEngine"]
