"""Form ports - What the field needs from the host form framework.

The host framework owns the form schema, the persisted record and the
live form state. The field only sees these three narrow protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import LocationState


class FieldResolverPort(Protocol):
    """Resolves field names to addressable identifiers in the current form."""

    def resolve_field_id(self, name: str) -> Optional[str]:
        """Return the state path of a sibling field, or None if the form
        has no field with that name."""
        ...

    def state_path(self, name: str) -> str:
        """Return the state path the form assigns to a field name."""
        ...


class LocationRecordPort(Protocol):
    """The record that owns the field's location attribute."""

    def set_location_attribute(self, location: LocationState) -> None:
        """Write coordinates onto the record before it is persisted."""
        ...


class FormStatePort(Protocol):
    """Writable view of the current form's state."""

    def set_state(self, field_id: str, value: str) -> None:
        """Replace the state of the field addressed by ``field_id``."""
        ...
