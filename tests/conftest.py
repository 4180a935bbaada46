"""Shared fixtures and test doubles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from geocomplete.config import reset_config
from geocomplete.container import reset_container
from geocomplete.domain.errors import ProviderError
from geocomplete.domain.models import AdminLevel, Country, GeocodeResult, LocationState


@dataclass
class FakeGeocoder:
    """In-memory GeocoderPort recording every call."""

    locations: Dict[str, LocationState] = field(default_factory=dict)
    results: Dict[LocationState, GeocodeResult] = field(default_factory=dict)
    error: Optional[Exception] = None
    geocode_calls: List[str] = field(default_factory=list)
    reverse_calls: List[LocationState] = field(default_factory=list)

    def geocode(self, query: str) -> LocationState:
        self.geocode_calls.append(query)
        if self.error is not None:
            raise self.error
        try:
            return self.locations[query]
        except KeyError:
            raise ProviderError("No geocoding result", query=query) from None

    def reverse_geocode(self, location: LocationState) -> GeocodeResult:
        self.reverse_calls.append(location)
        if self.error is not None:
            raise self.error
        try:
            return self.results[location]
        except KeyError:
            raise ProviderError("No reverse geocoding result") from None


@dataclass
class FakeRecord:
    location: Optional[LocationState] = None
    writes: int = 0

    def set_location_attribute(self, location: LocationState) -> None:
        self.location = location
        self.writes += 1


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    for name in ("GEOCOMPLETE_GMAPS_KEY", "GEOCOMPLETE_GEO_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def springfield() -> GeocodeResult:
    return GeocodeResult(
        formatted_address="12 Main St, Springfield, PA 19064, USA",
        street_number="12",
        street_name="Main St",
        locality="Springfield",
        sub_locality="Downtown",
        postal_code="19064",
        country=Country(name="United States", code="US"),
        admin_levels=(
            AdminLevel(level=1, name="Pennsylvania", code="PA"),
            AdminLevel(level=2, name="Delaware County", code="Delaware County"),
        ),
    )


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def record() -> FakeRecord:
    return FakeRecord()
