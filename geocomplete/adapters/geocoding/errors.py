"""Translation of geopy exceptions into domain errors."""

from __future__ import annotations

from geopy.exc import (
    ConfigurationError as GeopyConfigurationError,
    GeocoderAuthenticationFailure,
    GeocoderInsufficientPrivileges,
    GeocoderQuotaExceeded,
    GeocoderRateLimited,
    GeopyError,
)

from ...domain.errors import ConfigurationError, GeocompleteError, ProviderError


def translate_geopy_error(
    exc: GeopyError, *, query: str, provider: str
) -> GeocompleteError:
    """Map a geopy exception onto ProviderError or ConfigurationError."""
    if isinstance(exc, GeopyConfigurationError):
        return ConfigurationError(
            f"{provider} geocoder is misconfigured",
            setting_name="api_key",
            cause=exc,
        )
    if isinstance(exc, (GeocoderAuthenticationFailure, GeocoderInsufficientPrivileges)):
        return ProviderError(
            f"{provider} rejected the credentials",
            query=query,
            provider=provider,
            cause=exc,
        )
    if isinstance(exc, (GeocoderQuotaExceeded, GeocoderRateLimited)):
        return ProviderError(
            f"{provider} quota exceeded",
            query=query,
            provider=provider,
            is_rate_limited=True,
            cause=exc,
        )
    return ProviderError(
        f"{provider} geocoder is unavailable",
        query=query,
        provider=provider,
        cause=exc,
    )
