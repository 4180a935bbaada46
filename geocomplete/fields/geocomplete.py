"""Geocomplete form field.

A text input backed by Google Places Autocomplete. Optionally keeps the
record's location attribute in sync with the selected place and fills
sibling fields (street, city, zip, ...) from the reverse-geocoded address.

    field = (
        GeocompleteField.make("full_address", resolver=resolver)
        .is_location()
        .reverse_geocode({"street": "%n %S", "city": "%L", "state": "%A1", "zip": "%z"})
        .types(["address"])
    )

Every setter accepts either a value or a zero-argument callable that is
evaluated each time the value is read.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from ..assets import AssetManifest
from ..config import GoogleMapsConfig, get_config
from ..ports.forms import FieldResolverPort, FormStatePort, LocationRecordPort
from ..services.geocode_orchestrator import GeocodeOrchestrator, SaveOutcome
from ..services.location_codec import DEFAULT_PRECISION

T = TypeVar("T")
Evaluable = Union[T, Callable[[], T]]

DEFAULT_TYPES = ["geocode"]
DEFAULT_PLACE_FIELD = "formatted_address"
FILTER_STATE_PREFIX = "tableFilters"


def evaluate(value: Evaluable[T]) -> T:
    """Call ``value`` if it is callable, otherwise return it."""
    if callable(value):
        return value()
    return value


class MapConfigPayload(BaseModel):
    """Configuration consumed by the front-end autocomplete widget."""

    model_config = ConfigDict(populate_by_name=True)

    filter_name: Optional[str] = Field(alias="filterName")
    state_path: str = Field(alias="statePath")
    location: bool
    reverse_geocode_fields: Dict[str, str] = Field(alias="reverseGeocodeFields")
    types: List[str]
    place_field: str = Field(alias="placeField")
    gmaps: str


class GeocompleteField:
    """Place autocomplete field with geocode and reverse-geocode support.

    Attributes:
        name: Field name in the form
        resolver: Resolves sibling field names in the current form
        orchestrator: Geocoding load/save stages
        maps_config: Google Maps script settings
        assets: Asset manifest for the widget script
    """

    def __init__(
        self,
        name: str,
        resolver: FieldResolverPort,
        orchestrator: GeocodeOrchestrator,
        maps_config: Optional[GoogleMapsConfig] = None,
        assets: Optional[AssetManifest] = None,
    ) -> None:
        self.name = name
        self.resolver = resolver
        self.orchestrator = orchestrator
        self.maps_config = maps_config or get_config().google_maps
        self.assets = assets or AssetManifest()

        self._filter_name: Evaluable[Optional[str]] = None
        self._place_field: Evaluable[Optional[str]] = None
        self._is_location: Evaluable[bool] = False
        self._reverse_geocode: Evaluable[Mapping[str, str]] = {}
        self._types: Evaluable[List[str]] = []
        self._precision: Evaluable[int] = DEFAULT_PRECISION

        self._logger = logging.getLogger(__name__)

    @classmethod
    def make(
        cls,
        name: str,
        *,
        resolver: FieldResolverPort,
        orchestrator: Optional[GeocodeOrchestrator] = None,
    ) -> GeocompleteField:
        """Build a field for the form described by ``resolver``.

        The orchestrator, Maps settings and assets come from the container
        unless given.
        """
        from ..container import get_container

        container = get_container()
        return cls(
            name,
            resolver=resolver,
            orchestrator=orchestrator or container.resolve(GeocodeOrchestrator),
            maps_config=container.config.google_maps,
            assets=container.resolve(AssetManifest),
        )

    # Configuration

    def filter_name(self, name: Evaluable[Optional[str]]) -> GeocompleteField:
        """Only for the radius table filter: state path of the filter form."""
        self._filter_name = name
        return self

    def get_filter_name(self) -> Optional[str]:
        name = evaluate(self._filter_name)
        if name:
            return f"{FILTER_STATE_PREFIX}.{name}"
        return None

    def is_location(self, is_location: Evaluable[bool] = True) -> GeocompleteField:
        """Make the field update the record's location attribute."""
        self._is_location = is_location
        return self

    def get_is_location(self) -> bool:
        return bool(evaluate(self._is_location))

    def reverse_geocode(
        self, mapping: Evaluable[Mapping[str, str]]
    ) -> GeocompleteField:
        """Fill sibling fields from the address, e.g. ``{"city": "%L"}``.

        See geocomplete.services.format_resolver for the directives.
        """
        self._reverse_geocode = mapping
        return self

    def get_reverse_geocode(self) -> Dict[str, str]:
        """Mapping keyed by resolved field identifier; unknown fields dropped."""
        mapping = evaluate(self._reverse_geocode) or {}
        return self.orchestrator.mapper.resolve(mapping, self.resolver)

    def types(self, types: Evaluable[List[str]]) -> GeocompleteField:
        """Place types for the autocomplete.

        Google allows at most 5 types and does not allow mixing the
        ``geocode``/``establishment`` collections with specific types;
        this is not checked here.
        """
        self._types = types
        return self

    def get_types(self) -> List[str]:
        types = list(evaluate(self._types) or [])
        if not types:
            return list(DEFAULT_TYPES)
        return types

    def place_field(self, place_field: Evaluable[Optional[str]]) -> GeocompleteField:
        """Property of the selected place shown in the input."""
        self._place_field = place_field
        return self

    def get_place_field(self) -> str:
        return evaluate(self._place_field) or DEFAULT_PLACE_FIELD

    def precision(self, precision: Evaluable[int]) -> GeocompleteField:
        self._precision = precision
        return self

    def get_precision(self) -> int:
        return int(evaluate(self._precision))

    def get_state_path(self) -> str:
        return self.resolver.state_path(self.name)

    # Lifecycle hooks

    def after_state_hydrated(self, state: Any) -> Any:
        """Replace stored coordinates by the address text to display.

        Non-location fields keep their state unchanged.
        """
        if not self.get_is_location():
            return state
        return self.orchestrator.on_load(state)

    def before_state_dehydrated(
        self,
        state: Any,
        record: Optional[LocationRecordPort] = None,
        form_state: Optional[FormStatePort] = None,
    ) -> SaveOutcome:
        """Geocode the state and push results to the record and form.

        Raises:
            ProviderError: If a lookup fails; see GeocodeOrchestrator.on_save.
        """
        outcome = self.orchestrator.on_save(
            state,
            record,
            is_location=self.get_is_location(),
            mapping=self.get_reverse_geocode(),
            precision=self.get_precision(),
        )

        if form_state is not None:
            for field_id, value in outcome.field_values.items():
                form_state.set_state(field_id, value)

        return outcome

    # Front-end

    def get_maps_script_url(self) -> str:
        query = urlencode(
            {
                "key": self.maps_config.key or "",
                "libraries": self.maps_config.libraries,
                "v": self.maps_config.version,
                "language": self.maps_config.locale,
            }
        )
        return f"{self.maps_config.script_url}?{query}"

    def get_map_config(self) -> str:
        """JSON configuration string for the autocomplete widget."""
        payload = MapConfigPayload(
            filter_name=self.get_filter_name(),
            state_path=self.get_state_path(),
            location=self.get_is_location(),
            reverse_geocode_fields=self.get_reverse_geocode(),
            types=self.get_types(),
            place_field=self.get_place_field(),
            gmaps=self.get_maps_script_url(),
        )
        return payload.model_dump_json(by_alias=True)

    def has_js(self) -> bool:
        return True

    def js_url(self) -> str:
        return self.assets.js_url()

    def has_css(self) -> bool:
        return False

    def css_url(self) -> str:
        return self.assets.css_url()
