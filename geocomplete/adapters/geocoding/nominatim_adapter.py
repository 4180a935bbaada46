"""Nominatim geocoder adapter.

OpenStreetMap alternative to the Google adapter, selected with
``GEOCOMPLETE_GEO_PROVIDER=nominatim``. Same caching, rate limiting and
error translation; address details come back as a flat ``address`` dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from geopy.geocoders import Nominatim

from ...domain.models import AdminLevel, Country, GeocodeResult, LocationState
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache
from .base import GeopyGeocoderAdapter

PROVIDER_NAME = "nominatim"

# Nominatim keys for each admin level, broadest first.
_ADMIN_LEVEL_KEYS = (
    ("state", "region"),
    ("state_district",),
    ("county",),
    ("municipality",),
    ("city_district",),
)


def _pick(address: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = address.get(key)
        if value:
            return str(value)
    return None


def parse_nominatim_result(raw: Mapping[str, Any]) -> GeocodeResult:
    """Build a GeocodeResult from a Nominatim ``jsonv2`` place."""
    address = raw.get("address") or {}

    admin_levels = []
    for level, keys in enumerate(_ADMIN_LEVEL_KEYS, start=1):
        name = _pick(address, *keys)
        if name is None:
            continue
        code = ""
        if level == 1:
            # e.g. "US-PA" -> "PA"
            iso_code = address.get("ISO3166-2-lvl4", "")
            code = iso_code.split("-", 1)[-1] if iso_code else ""
        admin_levels.append(AdminLevel(level=level, name=name, code=code))

    country = None
    if address.get("country") or address.get("country_code"):
        country = Country(
            name=address.get("country", ""),
            code=str(address.get("country_code", "")).upper(),
        )

    location = None
    if raw.get("lat") is not None and raw.get("lon") is not None:
        location = LocationState(lat=float(raw["lat"]), lng=float(raw["lon"]))

    return GeocodeResult(
        formatted_address=raw.get("display_name", ""),
        street_number=_pick(address, "house_number"),
        street_name=_pick(address, "road", "pedestrian", "footway"),
        locality=_pick(address, "city", "town", "village", "hamlet"),
        sub_locality=_pick(address, "suburb", "borough", "quarter", "neighbourhood"),
        postal_code=_pick(address, "postcode"),
        country=country,
        admin_levels=tuple(admin_levels),
        location=location,
    )



@dataclass
class NominatimGeocoderAdapter(GeopyGeocoderAdapter):
    """Nominatim geocoder adapter.

    Implements GeocoderPort using OpenStreetMap's Nominatim service.
    """

    provider_name = PROVIDER_NAME

    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="nominatim")
    )

    def _create_geolocator(self) -> Nominatim:
        return Nominatim(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
        )

    def _min_delay_seconds(self) -> float:
        # Usage policy: at most one request per second.
        return max(self.config.rate_limit_delay, 1.0)

    def _reverse_options(self) -> Dict[str, Any]:
        return {"language": self.config.language, "addressdetails": True}

    def _parse(self, raw: Any) -> GeocodeResult:
        return parse_nominatim_result(raw)
