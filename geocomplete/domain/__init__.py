"""Domain layer - Core models and errors.

Immutable models and typed errors shared by every layer. No external
dependencies.
"""

from .errors import ConfigurationError, GeocompleteError, ProviderError
from .models import (
    MAX_ADMIN_LEVELS,
    AdminLevel,
    Country,
    FormatToken,
    GeocodeResult,
    LocationState,
    TokenKind,
)

__all__ = [
    # Models
    "LocationState",
    "AdminLevel",
    "Country",
    "GeocodeResult",
    "FormatToken",
    "TokenKind",
    "MAX_ADMIN_LEVELS",
    # Errors
    "GeocompleteError",
    "ProviderError",
    "ConfigurationError",
]
