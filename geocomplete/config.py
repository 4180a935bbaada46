"""Centralized configuration using Pydantic Settings.

Holds everything the field used to read from ambient application state:
the Maps API key, the locale, provider settings and asset locations.

Configuration can be overridden via environment variables:
- GEOCOMPLETE_GMAPS_KEY=...
- GEOCOMPLETE_GMAPS_LOCALE=fr
- GEOCOMPLETE_GEO_PROVIDER=nominatim
- GEOCOMPLETE_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parent


class GoogleMapsConfig(BaseSettings):
    """Google Maps JavaScript API settings for the front-end widget.

    Environment variables prefixed with GEOCOMPLETE_GMAPS_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOCOMPLETE_GMAPS_")

    key: Optional[str] = None
    script_url: str = "https://maps.googleapis.com/maps/api/js"
    libraries: str = "places"
    version: str = "weekly"
    locale: str = "en"


class GeocodingConfig(BaseSettings):
    """Server-side geocoding provider settings.

    Environment variables prefixed with GEOCOMPLETE_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOCOMPLETE_GEO_")

    provider: Literal["google", "nominatim"] = "google"
    api_key: Optional[str] = None
    user_agent: str = "geocomplete"
    timeout_seconds: int = 10
    language: str = "en"
    region: Optional[str] = None
    rate_limit_delay: float = 0.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0
    cache_duration_seconds: Optional[float] = 60 * 60 * 24 * 30
    cache_max_size: Optional[int] = 10_000


class AssetConfig(BaseSettings):
    """Location of the compiled front-end assets.

    Environment variables prefixed with GEOCOMPLETE_ASSETS_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOCOMPLETE_ASSETS_")

    manifest_path: Path = Field(
        default_factory=lambda: PACKAGE_ROOT / "dist" / "mix-manifest.json"
    )
    base_url: str = "/"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with GEOCOMPLETE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOCOMPLETE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.google_maps.locale)
        print(config.geocoding.provider)

    Environment variables prefixed with GEOCOMPLETE_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOCOMPLETE_")

    google_maps: GoogleMapsConfig = Field(default_factory=GoogleMapsConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    assets: AssetConfig = Field(default_factory=AssetConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload it (e.g. in tests),
    call reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
