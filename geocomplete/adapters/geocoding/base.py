"""Shared plumbing for geopy-backed geocoder adapters.

Subclasses supply the geopy client, the provider-specific call options and
the raw-result parser. Caching, rate limiting and error translation live
here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders.base import Geocoder

from ...config import GeocodingConfig, get_config
from ...domain.errors import ProviderError
from ...domain.models import GeocodeResult, LocationState
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache
from .errors import translate_geopy_error


@dataclass
class GeopyGeocoderAdapter:
    """Base GeocoderPort implementation over a geopy geocoder.

    Attributes:
        config: Geocoding configuration
        cache: Cache for successful lookups
    """

    provider_name = "geopy"

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="geocoding")
    )

    _geolocator: Optional[Geocoder] = field(default=None, repr=False)
    _geocode_fn: Optional[Any] = field(default=None, repr=False)
    _reverse_fn: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(type(self).__module__)

    def _create_geolocator(self) -> Geocoder:
        raise NotImplementedError

    def _min_delay_seconds(self) -> float:
        return self.config.rate_limit_delay

    def _geocode_options(self) -> Dict[str, Any]:
        return {"language": self.config.language}

    def _reverse_options(self) -> Dict[str, Any]:
        return {"language": self.config.language}

    def _parse(self, raw: Any) -> GeocodeResult:
        raise NotImplementedError

    def _get_geolocator(self) -> Geocoder:
        """Create the geopy client and its rate-limited entry points."""
        if self._geolocator is not None:
            return self._geolocator

        self._logger.debug(
            "Initializing geocoder",
            extra={
                "provider": self.provider_name,
                "timeout": self.config.timeout_seconds,
            },
        )

        try:
            geolocator = self._create_geolocator()
        except GeopyError as e:
            raise translate_geopy_error(e, query="", provider=self.provider_name) from e

        limiter_options = dict(
            min_delay_seconds=self._min_delay_seconds(),
            max_retries=self.config.max_retries,
            error_wait_seconds=self.config.error_wait_seconds,
            swallow_exceptions=False,
        )
        self._geocode_fn = RateLimiter(geolocator.geocode, **limiter_options)
        self._reverse_fn = RateLimiter(geolocator.reverse, **limiter_options)
        self._geolocator = geolocator
        return geolocator

    def _lookup_address(self, query: str) -> LocationState:
        self._get_geolocator()
        try:
            location = self._geocode_fn(  # type: ignore[misc]
                query, **self._geocode_options()
            )
        except GeopyError as e:
            self._logger.warning(
                "Geocode service error",
                extra={"query": query, "error": str(e)},
            )
            raise translate_geopy_error(e, query=query, provider=self.provider_name) from e

        if location is None:
            raise ProviderError(
                "No geocoding result", query=query, provider=self.provider_name
            )

        return LocationState(lat=float(location.latitude), lng=float(location.longitude))

    def _lookup_coordinates(self, location: LocationState) -> GeocodeResult:
        self._get_geolocator()
        query = f"{location.lat},{location.lng}"
        try:
            result = self._reverse_fn(  # type: ignore[misc]
                (location.lat, location.lng), **self._reverse_options()
            )
        except GeopyError as e:
            self._logger.warning(
                "Reverse geocode service error",
                extra={"lat": location.lat, "lng": location.lng, "error": str(e)},
            )
            raise translate_geopy_error(e, query=query, provider=self.provider_name) from e

        if result is None:
            raise ProviderError(
                "No reverse geocoding result", query=query, provider=self.provider_name
            )

        return self._parse(result.raw)

    def geocode(self, query: str) -> LocationState:
        """Geocode address text to coordinates.

        Raises:
            ProviderError: Empty query, no result, or provider failure.
        """
        if not query or not query.strip():
            raise ProviderError("Empty geocoding query", provider=self.provider_name)

        cache_key = f"geocode:{query.strip().lower()}:{self.config.language}"
        location = self.cache.get_or_compute(
            cache_key, lambda: self._lookup_address(query.strip())
        )
        self._logger.debug(
            "Geocode success",
            extra={"query": query, "lat": location.lat, "lng": location.lng},
        )
        return location

    def reverse_geocode(self, location: LocationState) -> GeocodeResult:
        """Reverse geocode coordinates to a structured address.

        Raises:
            ProviderError: No result or provider failure.
        """
        cache_key = (
            f"reverse:{location.lat:.8f},{location.lng:.8f}:{self.config.language}"
        )
        return self.cache.get_or_compute(
            cache_key, lambda: self._lookup_coordinates(location)
        )
