"""Geocode orchestrator - Load and save stages of a location field.

The host form framework calls two hooks on a field: one after the stored
state is hydrated into the form, one before the form state is dehydrated
back into the record. They map onto ``on_load`` and ``on_save`` here,
which take their inputs explicitly and return explicit results.

Failure policy:
- Load: any GeocompleteError (provider failure or a misconfigured
  provider) is logged and the field shows empty text, so the form still
  renders and the user can retype the address.
- Save: the error is logged and re-raised. The record is left untouched;
  the caller decides whether to block the save.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..domain.errors import GeocompleteError, ProviderError
from ..domain.models import GeocodeResult, LocationState
from ..ports.forms import LocationRecordPort
from ..ports.geocoding import GeocoderPort
from .location_codec import LocationCodec, RawLocation
from .reverse_geocode_mapper import ReverseGeocodeMapper


@dataclass(frozen=True, slots=True)
class SaveOutcome:
    """What the save stage produced.

    Attributes:
        location: Coordinates resolved for the state, if any lookup ran
        field_values: Field identifier -> rendered value for mapped fields
    """

    location: Optional[LocationState] = None
    field_values: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.location is None and not self.field_values


def _is_blank_state(state: Any) -> bool:
    if state is None:
        return True
    if isinstance(state, str):
        return not state.strip()
    if isinstance(state, (Mapping, list, tuple)):
        return len(state) == 0
    return False


@dataclass
class GeocodeOrchestrator:
    """Drives the geocoder, codec and mapper for one field.

    Attributes:
        geocoder: Geocoding provider
        codec: Location state codec
        mapper: Reverse-geocode field mapper
    """

    geocoder: GeocoderPort
    codec: LocationCodec = field(default_factory=LocationCodec)
    mapper: ReverseGeocodeMapper = field(default_factory=ReverseGeocodeMapper)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def geocode(self, text: str) -> LocationState:
        """Address text -> coordinates.

        Raises:
            ProviderError: If the provider fails, times out or finds nothing.
        """
        try:
            return self.geocoder.geocode(text)
        except TimeoutError as e:
            raise ProviderError("Geocoding timed out", query=text, cause=e) from e

    def reverse_geocode(self, state: LocationState) -> GeocodeResult:
        """Coordinates -> structured address.

        Raises:
            ProviderError: If the provider fails, times out or finds nothing.
        """
        try:
            return self.geocoder.reverse_geocode(state)
        except TimeoutError as e:
            raise ProviderError(
                "Reverse geocoding timed out",
                query=f"{state.lat},{state.lng}",
                cause=e,
            ) from e

    def on_load(self, raw_state: RawLocation) -> str:
        """Turn stored coordinates into the text shown in the input.

        Returns:
            The formatted address, or "" for a blank location or when the
            provider fails.
        """
        state = self.codec.decode(raw_state)
        if self.codec.is_blank(state):
            return ""

        try:
            result = self.reverse_geocode(state)
        except GeocompleteError as e:
            self._logger.warning(
                "Reverse geocode failed on load, showing empty text",
                extra={
                    "lat": state.lat,
                    "lng": state.lng,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            return ""

        return result.formatted_address

    def _locate(self, state: Any) -> LocationState:
        # Coordinate state (JSON object, mapping, pair) needs no forward lookup.
        if isinstance(state, str) and not state.lstrip().startswith("{"):
            return self.geocode(state)
        return self.codec.decode(state)

    def on_save(
        self,
        state: Any,
        record: Optional[LocationRecordPort] = None,
        *,
        is_location: bool = False,
        mapping: Optional[Mapping[str, str]] = None,
        precision: Optional[int] = None,
    ) -> SaveOutcome:
        """Resolve the field state before the record is persisted.

        Args:
            state: Text from the input, or a coordinate value.
            record: Record receiving the coordinates when ``is_location``.
            is_location: Whether the field drives the record's location.
            mapping: Resolved field identifier -> format string.
            precision: Decimal places kept in the coordinates written to
                the record (all of them when None).

        Returns:
            The resolved location and the rendered sibling field values.

        Raises:
            ProviderError: If a lookup fails. Nothing has been written to
                the record when the forward lookup fails.
            ConfigurationError: If the provider is misconfigured.
        """
        if _is_blank_state(state):
            return SaveOutcome()

        location: Optional[LocationState] = None
        field_values: dict[str, str] = {}

        try:
            if is_location:
                location = self._locate(state)
                if precision is not None:
                    location = LocationState(
                        lat=round(location.lat, precision),
                        lng=round(location.lng, precision),
                    )
                if record is not None and not self.codec.is_blank(location):
                    record.set_location_attribute(location)
                    self._logger.info(
                        "Location attribute updated",
                        extra={"lat": location.lat, "lng": location.lng},
                    )

            if mapping:
                if location is None:
                    location = self._locate(state)
                if not self.codec.is_blank(location):
                    result = self.reverse_geocode(location)
                    field_values = self.mapper.apply(mapping, result)
        except ProviderError as e:
            self._logger.error(
                "Geocoding failed on save, location not updated",
                extra={"query": e.query, "rate_limited": e.is_rate_limited},
            )
            raise
        except GeocompleteError as e:
            self._logger.error(
                "Geocoder misconfigured on save, location not updated",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise

        return SaveOutcome(location=location, field_values=field_values)
