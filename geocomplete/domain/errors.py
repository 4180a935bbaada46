"""Typed domain errors for the geocomplete field.

Every error inherits from GeocompleteError and can optionally wrap the
root cause (a geopy exception, a timeout, ...) for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GeocompleteError(Exception):
    """Base error for the geocomplete domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ProviderError(GeocompleteError):
    """The geocoding provider was unreachable, timed out or found nothing.

    Attributes:
        query: The address text or coordinates that were looked up
        provider: Name of the provider adapter that failed
        is_rate_limited: Whether the provider refused the request for quota
    """

    query: str = ""
    provider: str = ""
    is_rate_limited: bool = False


@dataclass
class ConfigurationError(GeocompleteError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
