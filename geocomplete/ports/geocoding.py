"""Geocoding port - Abstraction over the address lookup provider.

The orchestrator only talks to this protocol, so Google, Nominatim or a
test double can be plugged in without touching the field logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeocodeResult, LocationState


class GeocoderPort(Protocol):
    """Port for geocoding providers.

    Implementations:
    - adapters/geocoding/google_adapter.py (GoogleGeocoderAdapter)
    - adapters/geocoding/nominatim_adapter.py (NominatimGeocoderAdapter)
    """

    def geocode(self, query: str) -> LocationState:
        """Look up the coordinates of an address or place description.

        Args:
            query: Free text typed or selected in the autocomplete input.

        Returns:
            Coordinates of the best match.

        Raises:
            ProviderError: If the provider is unreachable or finds nothing.
        """
        ...

    def reverse_geocode(self, location: LocationState) -> GeocodeResult:
        """Look up the structured address at the given coordinates.

        Args:
            location: Coordinates to look up.

        Returns:
            Structured address of the best match.

        Raises:
            ProviderError: If the provider is unreachable or finds nothing.
        """
        ...
