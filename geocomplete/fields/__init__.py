"""Form fields."""

from .geocomplete import GeocompleteField, MapConfigPayload

__all__ = ["GeocompleteField", "MapConfigPayload"]
