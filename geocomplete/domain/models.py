"""Immutable domain models for the geocomplete field.

All models are frozen dataclasses with slots. They are built fresh for
every lookup or render and never persisted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

MAX_ADMIN_LEVELS = 5


@dataclass(frozen=True, slots=True)
class LocationState:
    """Coordinates carried by a location field.

    ``(0, 0)`` is the sentinel for "no location set".
    """

    lat: float = 0.0
    lng: float = 0.0

    @property
    def is_blank(self) -> bool:
        """Check if this is the zero location."""
        return self.lat == 0 and self.lng == 0

    def as_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class AdminLevel:
    """One administrative division of an address.

    Attributes:
        level: 1 (broadest, e.g. state) to 5 (finest)
        name: Long name (e.g. 'Pennsylvania')
        code: Short name or code (e.g. 'PA')
    """

    level: int
    name: str
    code: str = ""


@dataclass(frozen=True, slots=True)
class Country:
    """Country of an address."""

    name: str
    code: str = ""


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    """Structured address returned by a reverse-geocode lookup.

    Attributes:
        formatted_address: Single-line address as the provider prints it
        street_number: House number
        street_name: Street or route name
        locality: City
        sub_locality: City district
        postal_code: Zip or postal code
        country: Country name and code
        admin_levels: Up to five administrative divisions
        location: Coordinates of the result, if the provider returned them
    """

    formatted_address: str = ""
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    locality: Optional[str] = None
    sub_locality: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[Country] = None
    admin_levels: tuple[AdminLevel, ...] = field(default_factory=tuple)
    location: Optional[LocationState] = None

    def __post_init__(self) -> None:
        """Validate the admin level count."""
        if len(self.admin_levels) > MAX_ADMIN_LEVELS:
            raise ValueError(
                f"At most {MAX_ADMIN_LEVELS} admin levels are supported, "
                f"got {len(self.admin_levels)}"
            )

    def admin_level(self, level: int) -> Optional[AdminLevel]:
        """Return the admin level numbered ``level``, or None if absent."""
        for admin_level in self.admin_levels:
            if admin_level.level == level:
                return admin_level
        return None


class TokenKind(Enum):
    """Kind of a format-string token."""

    LITERAL = auto()
    DIRECTIVE = auto()


@dataclass(frozen=True, slots=True)
class FormatToken:
    """Atomic unit of a format string.

    Attributes:
        kind: LITERAL for plain text, DIRECTIVE for a ``%`` placeholder
        text: The source text of the token
        letter: Directive letter (``n``, ``S``, ``A``, ...), None for literals
        level: Admin level digit for ``%A``/``%a`` directives
    """

    kind: TokenKind
    text: str
    letter: Optional[str] = None
    level: Optional[int] = None

    @property
    def is_directive(self) -> bool:
        return self.kind is TokenKind.DIRECTIVE
