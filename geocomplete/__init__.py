"""Google Places autocomplete form field with geocoding support.

The field captures a location by text search, keeps the record's
coordinates in sync, and reverse-geocodes the selected place into sibling
fields through ``%`` format strings (``"%n %S"``, ``"%L"``, ``"%A1"``...).
"""

from .domain import GeocodeResult, LocationState, ProviderError
from .fields import GeocompleteField
from .services import (
    FormatResolver,
    GeocodeOrchestrator,
    LocationCodec,
    ReverseGeocodeMapper,
)

__version__ = "0.1.0"

__all__ = [
    "GeocompleteField",
    "FormatResolver",
    "ReverseGeocodeMapper",
    "LocationCodec",
    "GeocodeOrchestrator",
    "GeocodeResult",
    "LocationState",
    "ProviderError",
]
