"""Dependency injection container.

Registers the geocoder, cache, orchestrator and asset manifest used by
fields created with ``GeocompleteField.make``. Tests build their own
Container and register doubles.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        orchestrator = container.resolve(GeocodeOrchestrator)

        # Testing
        container = Container()
        container.register(GeocoderPort, lambda: FakeGeocoder())
        geocoder = container.resolve(GeocoderPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the production bindings.

        The geocoder is chosen by ``config.geocoding.provider``. The Google
        adapter falls back to the Maps script key when no dedicated
        geocoding key is configured.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.geocoding import GoogleGeocoderAdapter, NominatimGeocoderAdapter
        from .assets import AssetManifest
        from .ports.cache import CachePort
        from .ports.geocoding import GeocoderPort
        from .services import GeocodeOrchestrator

        config = config or get_config()
        container = cls(config=config)

        cache: InMemoryCache[Any] = InMemoryCache(
            name="geocoding",
            default_ttl_seconds=config.geocoding.cache_duration_seconds,
            max_size=config.geocoding.cache_max_size,
        )
        container.register(CachePort, lambda: cache)

        def create_geocoder() -> GeocoderPort:
            geocoding = config.geocoding
            if geocoding.provider == "google":
                if geocoding.api_key is None:
                    geocoding = geocoding.model_copy(
                        update={"api_key": config.google_maps.key}
                    )
                return GoogleGeocoderAdapter(geocoding, cache)
            if geocoding.provider == "nominatim":
                return NominatimGeocoderAdapter(geocoding, cache)
            raise ConfigurationError(
                f"Unknown geocoding provider: {geocoding.provider!r}",
                setting_name="geocoding.provider",
                expected_type="'google' or 'nominatim'",
            )

        container.register(GeocoderPort, create_geocoder)
        container.register(
            GeocodeOrchestrator,
            lambda: GeocodeOrchestrator(geocoder=container.resolve(GeocoderPort)),
        )
        container.register(AssetManifest, lambda: AssetManifest(config.assets))

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default container, creating it on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def set_container(container: Container) -> None:
    """Replace the default container (e.g. with test bindings)."""
    global _default_container
    with _container_lock:
        _default_container = container


def reset_container() -> None:
    """Reset the default container."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
