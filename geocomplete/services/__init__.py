"""Services layer - Field logic independent of any form framework.

- FormatResolver: renders ``%`` format strings against an address
- ReverseGeocodeMapper: renders a whole field -> format mapping
- LocationCodec: persisted state <-> LocationState
- GeocodeOrchestrator: load and save stages around the geocoder
"""

from .format_resolver import FormatResolver, tokenize
from .geocode_orchestrator import GeocodeOrchestrator, SaveOutcome
from .location_codec import LocationCodec
from .reverse_geocode_mapper import ReverseGeocodeMapper

__all__ = [
    "FormatResolver",
    "tokenize",
    "ReverseGeocodeMapper",
    "LocationCodec",
    "GeocodeOrchestrator",
    "SaveOutcome",
]
