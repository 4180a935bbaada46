"""Tests for the Google geocoder adapter (geopy GoogleV3 replaced by a fake)."""

from types import SimpleNamespace

import pytest
from geopy.exc import GeocoderQuotaExceeded, GeocoderUnavailable

from geocomplete.adapters.cache import InMemoryCache, NullCache
from geocomplete.adapters.geocoding import google_adapter
from geocomplete.adapters.geocoding.google_adapter import (
    GoogleGeocoderAdapter,
    parse_google_result,
)
from geocomplete.config import GeocodingConfig
from geocomplete.domain.errors import ConfigurationError, ProviderError
from geocomplete.domain.models import AdminLevel, Country, LocationState

GOOGLE_RESULT = {
    "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
    "address_components": [
        {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
        {
            "long_name": "Amphitheatre Parkway",
            "short_name": "Amphitheatre Pkwy",
            "types": ["route"],
        },
        {
            "long_name": "Mountain View",
            "short_name": "Mountain View",
            "types": ["locality", "political"],
        },
        {
            "long_name": "Santa Clara County",
            "short_name": "Santa Clara County",
            "types": ["administrative_area_level_2", "political"],
        },
        {
            "long_name": "California",
            "short_name": "CA",
            "types": ["administrative_area_level_1", "political"],
        },
        {
            "long_name": "United States",
            "short_name": "US",
            "types": ["country", "political"],
        },
        {"long_name": "94043", "short_name": "94043", "types": ["postal_code"]},
    ],
    "geometry": {"location": {"lat": 37.4224764, "lng": -122.0842499}},
}


class FakeGoogleV3:
    def __init__(self, location=None, reverse_result=None, error=None):
        self.location = location
        self.reverse_result = reverse_result
        self.error = error
        self.geocode_calls = []
        self.reverse_calls = []

    def geocode(self, query, **kwargs):
        self.geocode_calls.append((query, kwargs))
        if self.error:
            raise self.error
        return self.location

    def reverse(self, query, **kwargs):
        self.reverse_calls.append((query, kwargs))
        if self.error:
            raise self.error
        return self.reverse_result


@pytest.fixture
def config():
    return GeocodingConfig(
        api_key="test-key",
        language="en",
        max_retries=0,
        error_wait_seconds=0.0,
        rate_limit_delay=0.0,
    )


@pytest.fixture
def install_fake(monkeypatch):
    def install(fake):
        monkeypatch.setattr(google_adapter, "GoogleV3", lambda **kwargs: fake)
        return fake

    return install


def test_parse_google_result():
    result = parse_google_result(GOOGLE_RESULT)

    assert result.formatted_address.startswith("1600 Amphitheatre")
    assert result.street_number == "1600"
    assert result.street_name == "Amphitheatre Parkway"
    assert result.locality == "Mountain View"
    assert result.sub_locality is None
    assert result.postal_code == "94043"
    assert result.country == Country(name="United States", code="US")
    assert result.admin_levels == (
        AdminLevel(level=1, name="California", code="CA"),
        AdminLevel(level=2, name="Santa Clara County", code="Santa Clara County"),
    )
    assert result.location == LocationState(lat=37.4224764, lng=-122.0842499)


def test_parse_uses_postal_town_as_locality():
    raw = {
        "formatted_address": "London",
        "address_components": [
            {"long_name": "London", "short_name": "London", "types": ["postal_town"]}
        ],
    }
    assert parse_google_result(raw).locality == "London"


def test_geocode_returns_coordinates(config, install_fake):
    fake = install_fake(FakeGoogleV3(location=SimpleNamespace(latitude=40.0, longitude=-75.0)))
    adapter = GoogleGeocoderAdapter(config, NullCache())

    assert adapter.geocode("123 Main St") == LocationState(lat=40.0, lng=-75.0)
    assert fake.geocode_calls[0][0] == "123 Main St"
    assert fake.geocode_calls[0][1]["language"] == "en"


def test_geocode_is_cached(config, install_fake):
    fake = install_fake(FakeGoogleV3(location=SimpleNamespace(latitude=1.0, longitude=2.0)))
    adapter = GoogleGeocoderAdapter(config, InMemoryCache(name="test"))

    adapter.geocode("Main St")
    adapter.geocode("  main st ")

    assert len(fake.geocode_calls) == 1


def test_geocode_without_result_raises(config, install_fake):
    install_fake(FakeGoogleV3(location=None))
    adapter = GoogleGeocoderAdapter(config, NullCache())

    with pytest.raises(ProviderError) as exc_info:
        adapter.geocode("nowhere")
    assert exc_info.value.query == "nowhere"
    assert exc_info.value.provider == "google"


def test_empty_query_raises_without_calling_provider(config, install_fake):
    fake = install_fake(FakeGoogleV3())
    adapter = GoogleGeocoderAdapter(config, NullCache())

    with pytest.raises(ProviderError):
        adapter.geocode("   ")
    assert fake.geocode_calls == []


def test_reverse_geocode_parses_result(config, install_fake):
    fake = install_fake(FakeGoogleV3(reverse_result=SimpleNamespace(raw=GOOGLE_RESULT)))
    adapter = GoogleGeocoderAdapter(config, NullCache())

    result = adapter.reverse_geocode(LocationState(lat=37.42, lng=-122.08))

    assert result.postal_code == "94043"
    assert fake.reverse_calls[0][0] == (37.42, -122.08)


def test_unavailable_provider_raises_provider_error(config, install_fake):
    install_fake(FakeGoogleV3(error=GeocoderUnavailable("down")))
    adapter = GoogleGeocoderAdapter(config, NullCache())

    with pytest.raises(ProviderError) as exc_info:
        adapter.reverse_geocode(LocationState(lat=1.0, lng=2.0))
    assert not exc_info.value.is_rate_limited
    assert isinstance(exc_info.value.cause, GeocoderUnavailable)


def test_quota_error_is_flagged(config, install_fake):
    install_fake(FakeGoogleV3(error=GeocoderQuotaExceeded("quota")))
    adapter = GoogleGeocoderAdapter(config, NullCache())

    with pytest.raises(ProviderError) as exc_info:
        adapter.geocode("Main St")
    assert exc_info.value.is_rate_limited


def test_missing_api_key_is_a_configuration_error(config):
    adapter = GoogleGeocoderAdapter(config.model_copy(update={"api_key": None}), NullCache())

    with pytest.raises(ConfigurationError):
        adapter.geocode("Main St")


def test_geocode_passes_region_bias(config, install_fake):
    fake = install_fake(FakeGoogleV3(location=SimpleNamespace(latitude=1.0, longitude=2.0)))
    adapter = GoogleGeocoderAdapter(config.model_copy(update={"region": "us"}), NullCache())

    adapter.geocode("Main St")

    assert fake.geocode_calls[0][1]["region"] == "us"
    assert adapter.provider_name == "google"
