"""Ports layer - Protocols between the field core and the outside world.

Output ports only: the field drives a geocoding provider, a cache and the
host form framework through these contracts.
"""

from .cache import CachePort
from .forms import FieldResolverPort, FormStatePort, LocationRecordPort
from .geocoding import GeocoderPort

__all__ = [
    # Geocoding
    "GeocoderPort",
    # Cache
    "CachePort",
    # Forms
    "FieldResolverPort",
    "LocationRecordPort",
    "FormStatePort",
]
