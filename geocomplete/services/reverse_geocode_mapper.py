"""Maps a reverse-geocoded address onto sibling form fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..domain.models import GeocodeResult
from ..ports.forms import FieldResolverPort
from .format_resolver import FormatResolver


@dataclass
class ReverseGeocodeMapper:
    """Applies a field -> format-string mapping to a GeocodeResult.

    Attributes:
        resolver: Format-string renderer
    """

    resolver: FormatResolver = field(default_factory=FormatResolver)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(
        self, mapping: Mapping[str, str], fields: FieldResolverPort
    ) -> Dict[str, str]:
        """Replace field names by their identifiers in the current form.

        Entries whose field cannot be found are dropped with a warning.

        Args:
            mapping: Field name -> format string, as configured.
            fields: Resolver for the current form schema.

        Returns:
            Field identifier -> format string.
        """
        resolved: Dict[str, str] = {}
        for name, format_string in mapping.items():
            field_id = fields.resolve_field_id(name)
            if field_id is None:
                self._logger.warning(
                    "Dropping reverse geocode field not found in form",
                    extra={"field_name": name},
                )
                continue
            resolved[field_id] = format_string
        return resolved

    def apply(
        self, mapping: Mapping[str, str], result: GeocodeResult
    ) -> Dict[str, str]:
        """Render every format string of ``mapping`` against ``result``.

        Empty renders are kept: they tell the form there is no data for
        that part of the address.
        """
        return {
            field_id: self.resolver.render(format_string, result)
            for field_id, format_string in mapping.items()
        }
