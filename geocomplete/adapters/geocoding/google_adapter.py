"""Google geocoder adapter.

Wraps geopy's GoogleV3 geocoder; caching, rate limiting and error
translation come from GeopyGeocoderAdapter.

Google returns addresses as a list of ``address_components``, each tagged
with one or more types; see ``parse_google_result``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from geopy.geocoders import GoogleV3

from ...domain.models import (
    MAX_ADMIN_LEVELS,
    AdminLevel,
    Country,
    GeocodeResult,
    LocationState,
)
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache
from .base import GeopyGeocoderAdapter

PROVIDER_NAME = "google"

# First matching component type wins.
_LOCALITY_TYPES = ("locality", "postal_town")
_SUB_LOCALITY_TYPES = ("sublocality_level_1", "sublocality")


def _component(
    components: list[Mapping[str, Any]], *types: str
) -> Optional[Mapping[str, Any]]:
    for wanted in types:
        for component in components:
            if wanted in component.get("types", ()):
                return component
    return None


def _long_name(components: list[Mapping[str, Any]], *types: str) -> Optional[str]:
    component = _component(components, *types)
    if component is None:
        return None
    return component.get("long_name") or None


def parse_google_result(raw: Mapping[str, Any]) -> GeocodeResult:
    """Build a GeocodeResult from one Google geocoding ``results`` entry."""
    components = list(raw.get("address_components") or [])

    admin_levels = []
    for level in range(1, MAX_ADMIN_LEVELS + 1):
        component = _component(components, f"administrative_area_level_{level}")
        if component is None:
            continue
        admin_levels.append(
            AdminLevel(
                level=level,
                name=component.get("long_name", ""),
                code=component.get("short_name", ""),
            )
        )

    country = None
    country_component = _component(components, "country")
    if country_component is not None:
        country = Country(
            name=country_component.get("long_name", ""),
            code=country_component.get("short_name", ""),
        )

    location = None
    coordinates = (raw.get("geometry") or {}).get("location")
    if coordinates:
        location = LocationState(
            lat=float(coordinates["lat"]), lng=float(coordinates["lng"])
        )

    return GeocodeResult(
        formatted_address=raw.get("formatted_address", ""),
        street_number=_long_name(components, "street_number"),
        street_name=_long_name(components, "route"),
        locality=_long_name(components, *_LOCALITY_TYPES),
        sub_locality=_long_name(components, *_SUB_LOCALITY_TYPES),
        postal_code=_long_name(components, "postal_code"),
        country=country,
        admin_levels=tuple(admin_levels),
        location=location,
    )


@dataclass
class GoogleGeocoderAdapter(GeopyGeocoderAdapter):
    """Google Geocoding API adapter.

    Implements GeocoderPort using geopy's GoogleV3 geocoder.
    ``config.api_key`` is required; a missing key surfaces as
    ConfigurationError on the first lookup.
    """

    provider_name = PROVIDER_NAME

    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="google")
    )

    def _create_geolocator(self) -> GoogleV3:
        return GoogleV3(
            api_key=self.config.api_key,
            timeout=self.config.timeout_seconds,
            user_agent=self.config.user_agent,
        )

    def _geocode_options(self) -> Dict[str, Any]:
        return {"language": self.config.language, "region": self.config.region}

    def _parse(self, raw: Any) -> GeocodeResult:
        return parse_google_result(raw)
