"""Tests for the GeocompleteField configuration surface and hooks."""

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from geocomplete.adapters.forms import DictFormState, MappingRecord, SchemaFieldResolver
from geocomplete.assets import CSS_ASSET, JS_ASSET, AssetManifest
from geocomplete.config import AssetConfig, GoogleMapsConfig
from geocomplete.container import Container, set_container
from geocomplete.domain.errors import ProviderError
from geocomplete.domain.models import GeocodeResult, LocationState
from geocomplete.fields import GeocompleteField
from geocomplete.services import GeocodeOrchestrator

PHILLY = LocationState(lat=40.0, lng=-75.0)


@pytest.fixture
def resolver():
    return SchemaFieldResolver(
        field_names=["full_address", "street", "city", "zip"], state_prefix="data"
    )


@pytest.fixture
def field(resolver, fake_geocoder):
    return GeocompleteField(
        "full_address",
        resolver=resolver,
        orchestrator=GeocodeOrchestrator(geocoder=fake_geocoder),
        maps_config=GoogleMapsConfig(key="test-key", locale="fr"),
    )


class TestConfiguration:
    def test_defaults(self, field):
        assert field.get_filter_name() is None
        assert field.get_is_location() is False
        assert field.get_reverse_geocode() == {}
        assert field.get_types() == ["geocode"]
        assert field.get_place_field() == "formatted_address"
        assert field.get_precision() == 8
        assert field.get_state_path() == "data.full_address"

    def test_setters_are_fluent(self, field):
        assert field.is_location() is field
        assert field.types(["address"]) is field

    def test_filter_name_is_prefixed(self, field):
        field.filter_name("radius")
        assert field.get_filter_name() == "tableFilters.radius"

    def test_empty_types_fall_back_to_geocode(self, field):
        field.types([])
        assert field.get_types() == ["geocode"]
        field.types(["(cities)"])
        assert field.get_types() == ["(cities)"]

    def test_callables_are_evaluated_on_read(self, field):
        flags = {"location": False}
        field.is_location(lambda: flags["location"])
        assert field.get_is_location() is False
        flags["location"] = True
        assert field.get_is_location() is True

    def test_reverse_geocode_is_resolved_to_field_ids(self, field):
        field.reverse_geocode({"street": "%n %S", "country": "%C", "zip": "%z"})
        assert field.get_reverse_geocode() == {
            "data.street": "%n %S",
            "data.zip": "%z",
        }


class TestMapConfig:
    def test_payload_keys_and_values(self, field):
        field.is_location().reverse_geocode({"city": "%L"}).types(["address"])

        config = json.loads(field.get_map_config())

        assert set(config) == {
            "filterName",
            "statePath",
            "location",
            "reverseGeocodeFields",
            "types",
            "placeField",
            "gmaps",
        }
        assert config["filterName"] is None
        assert config["statePath"] == "data.full_address"
        assert config["location"] is True
        assert config["reverseGeocodeFields"] == {"data.city": "%L"}
        assert config["types"] == ["address"]
        assert config["placeField"] == "formatted_address"

    def test_gmaps_url(self, field):
        url = urlsplit(json.loads(field.get_map_config())["gmaps"])

        assert f"{url.scheme}://{url.netloc}{url.path}" == (
            "https://maps.googleapis.com/maps/api/js"
        )
        assert parse_qs(url.query) == {
            "key": ["test-key"],
            "libraries": ["places"],
            "v": ["weekly"],
            "language": ["fr"],
        }


class TestHooks:
    def test_load_displays_address_for_location_field(self, field, fake_geocoder):
        fake_geocoder.results[PHILLY] = GeocodeResult(
            formatted_address="123 Main St, Springfield"
        )
        field.is_location()

        assert field.after_state_hydrated('{"lat":40.0,"lng":-75.0}') == (
            "123 Main St, Springfield"
        )

    def test_load_leaves_plain_field_untouched(self, field, fake_geocoder):
        assert field.after_state_hydrated("typed text") == "typed text"
        assert fake_geocoder.reverse_calls == []

    def test_save_updates_record_and_sibling_fields(self, field, fake_geocoder):
        fake_geocoder.locations["123 Main St"] = PHILLY
        fake_geocoder.results[PHILLY] = GeocodeResult(postal_code="19019")
        field.is_location().reverse_geocode({"zip": "%z", "unknown": "%L"})
        record = MappingRecord(lat_attribute="lat", lng_attribute="lng")
        form_state = DictFormState()

        outcome = field.before_state_dehydrated("123 Main St", record, form_state)

        assert record.data == {
            "location": {"lat": 40.0, "lng": -75.0},
            "lat": 40.0,
            "lng": -75.0,
        }
        assert outcome.field_values == {"data.zip": "19019"}
        assert form_state.get_state("data.zip") == "19019"

    def test_save_failure_propagates(self, field, fake_geocoder):
        fake_geocoder.error = ProviderError("down")
        field.is_location()
        record = MappingRecord()

        with pytest.raises(ProviderError):
            field.before_state_dehydrated("123 Main St", record)
        assert record.data == {}


class TestAssets:
    def test_js_and_css_urls(self, field):
        assert field.has_js() is True
        assert field.has_css() is False
        assert field.js_url().startswith("/geocomplete/geocomplete.js?id=")
        assert field.css_url().startswith("/geocomplete/geocomplete.css?id=")

    def test_custom_base_url(self, tmp_path, resolver, fake_geocoder):
        manifest = tmp_path / "mix-manifest.json"
        manifest.write_text(
            json.dumps({"/geocomplete/geocomplete.js": "/geocomplete/geocomplete.js?id=1"})
        )
        field = GeocompleteField(
            "full_address",
            resolver=resolver,
            orchestrator=GeocodeOrchestrator(geocoder=fake_geocoder),
            assets=AssetManifest(
                AssetConfig(manifest_path=manifest, base_url="https://cdn.example.com/")
            ),
        )

        assert field.js_url() == "https://cdn.example.com/geocomplete/geocomplete.js?id=1"


def test_make_uses_container(fake_geocoder, resolver):
    container = Container.create_default()
    container.register(
        GeocodeOrchestrator, lambda: GeocodeOrchestrator(geocoder=fake_geocoder)
    )
    set_container(container)

    field = GeocompleteField.make("full_address", resolver=resolver)

    assert field.orchestrator.geocoder is fake_geocoder
    assert field.get_state_path() == "data.full_address"


def test_make_requires_a_resolver():
    with pytest.raises(TypeError):
        GeocompleteField.make("full_address")


def test_packaged_assets_exist():
    assets = AssetManifest(AssetConfig())

    for asset in (JS_ASSET, CSS_ASSET):
        assert assets.path(asset).is_file()
