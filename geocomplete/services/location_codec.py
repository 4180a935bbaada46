"""Conversion between persisted field state and LocationState.

A location field may hold a JSON string (``'{"lat": 40.0, "lng": -75.0}'``),
a ``{"lat", "lng"}`` mapping, a ``(lat, lng)`` pair, or nothing at all.
Decoding is total: anything unreadable becomes the zero location, which
the field treats as "no location set".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..domain.models import LocationState

RawLocation = Union[str, bytes, Mapping[str, Any], Sequence[Any], LocationState, None]

DEFAULT_PRECISION = 8


class LocationPayload(BaseModel):
    """Shape of a stored location.

    Numbers and numeric strings are accepted; booleans, NaN and infinities
    are not.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    lat: float = 0.0
    lng: float = 0.0

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("coordinate must be a number, not a boolean")
        return value


@dataclass
class LocationCodec:
    """Decodes and encodes location state.

    Attributes:
        precision: Decimal places kept when encoding coordinates
    """

    precision: int = DEFAULT_PRECISION

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _validate(self, raw: Any) -> LocationState:
        try:
            if isinstance(raw, (str, bytes)):
                payload = LocationPayload.model_validate_json(raw)
            else:
                payload = LocationPayload.model_validate(raw)
        except ValidationError as e:
            self._logger.debug(
                "Unreadable location state, using zero location",
                extra={"error_count": e.error_count()},
            )
            return LocationState()
        return LocationState(lat=payload.lat, lng=payload.lng)

    def decode(self, raw: RawLocation) -> LocationState:
        """Normalize persisted state to a LocationState. Never raises."""
        if isinstance(raw, LocationState):
            return raw
        if raw is None:
            return LocationState()
        if isinstance(raw, (str, bytes)):
            if not raw.strip():
                return LocationState()
            return self._validate(raw)
        if isinstance(raw, Mapping):
            return self._validate(dict(raw))
        if isinstance(raw, Sequence) and len(raw) == 2:
            return self._validate({"lat": raw[0], "lng": raw[1]})
        return LocationState()

    def is_blank(self, state: LocationState) -> bool:
        """True for the zero location."""
        return state.is_blank

    def encode(self, state: LocationState) -> str:
        """Serialize to the canonical JSON string."""
        return json.dumps(
            {
                "lat": round(state.lat, self.precision),
                "lng": round(state.lng, self.precision),
            }
        )
