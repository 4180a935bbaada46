"""Geocoding adapters - Implementations of GeocoderPort.

- GoogleGeocoderAdapter: Google Geocoding API (default)
- NominatimGeocoderAdapter: OpenStreetMap Nominatim
"""

from .base import GeopyGeocoderAdapter
from .google_adapter import GoogleGeocoderAdapter
from .nominatim_adapter import NominatimGeocoderAdapter

__all__ = ["GeopyGeocoderAdapter", "GoogleGeocoderAdapter", "NominatimGeocoderAdapter"]
