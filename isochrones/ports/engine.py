"""Engine port - Abstraction for isochrone geometry computation.

The computation engine is an external collaborator: this layer only
hands it fully validated search parameters, one traveller at a time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import IsochroneMap, IsochroneSearchParameters


class IsochroneEnginePort(Protocol):
    """Port for isochrone computation.

    Implementations:
    - adapters/engine/valhalla_adapter.py (ValhallaIsochroneEngine)
    - adapters/engine/null_engine.py (NullIsochroneEngine) - Dry runs
    """

    def build_isochrone(self, parameters: IsochroneSearchParameters) -> IsochroneMap:
        """Compute the isochrones of one traveller.

        Args:
            parameters: Validated search parameters of the traveller.

        Returns:
            The traveller's isochrones, one feature per threshold.
        """
        ...
