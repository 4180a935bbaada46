"""Form adapters backed by plain Python containers.

Used when the host framework describes its form as a list of field names
under a common state prefix (``data.street``, ``data.city``, ...), and by
the tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, MutableMapping, Optional

from ...domain.models import LocationState


@dataclass
class SchemaFieldResolver:
    """Resolves field names against a flat form schema.

    Implements FieldResolverPort.

    Attributes:
        field_names: Names of the fields present in the form
        state_prefix: Prefix of every state path (e.g. ``data``)
    """

    field_names: Iterable[str] = field(default_factory=tuple)
    state_prefix: str = "data"

    def __post_init__(self) -> None:
        self.field_names = frozenset(self.field_names)

    def state_path(self, name: str) -> str:
        if not self.state_prefix:
            return name
        return f"{self.state_prefix}.{name}"

    def resolve_field_id(self, name: str) -> Optional[str]:
        if name not in self.field_names:
            return None
        return self.state_path(name)


@dataclass
class MappingRecord:
    """A record stored as a mutable mapping.

    Implements LocationRecordPort: the location is written under
    ``location_attribute``, and optionally split into separate latitude
    and longitude attributes.
    """

    data: MutableMapping[str, Any] = field(default_factory=dict)
    location_attribute: str = "location"
    lat_attribute: Optional[str] = None
    lng_attribute: Optional[str] = None

    def set_location_attribute(self, location: LocationState) -> None:
        self.data[self.location_attribute] = location.as_dict()
        if self.lat_attribute:
            self.data[self.lat_attribute] = location.lat
        if self.lng_attribute:
            self.data[self.lng_attribute] = location.lng


@dataclass
class DictFormState:
    """Form state keyed by dotted state path.

    Implements FormStatePort.
    """

    values: Dict[str, Any] = field(default_factory=dict)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def set_state(self, field_id: str, value: str) -> None:
        self._logger.debug("Form state set", extra={"field_id": field_id})
        self.values[field_id] = value

    def get_state(self, field_id: str, default: Any = None) -> Any:
        return self.values.get(field_id, default)
