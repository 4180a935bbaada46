"""Format-string resolution for reverse-geocoded fields.

A format string mixes literal text with ``%`` directives, each naming one
part of a structured address:

    Street Number: %n
    Street Name: %S
    City (Locality): %L
    City District (Sub-Locality): %D
    Zipcode (Postal Code): %z
    Admin Level Name: %A1, %A2, %A3, %A4, %A5
    Admin Level Code: %a1, %a2, %a3, %a4, %a5
    Country: %C
    Country Code: %c

``"%n %S"`` renders ``"12 Main St"``. Anything after ``%`` that is not a
directive is kept as literal text, so rendering never fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Optional

from ..domain.models import (
    MAX_ADMIN_LEVELS,
    FormatToken,
    GeocodeResult,
    TokenKind,
)

DIRECTIVE_CHAR = "%"
ADMIN_NAME = "A"
ADMIN_CODE = "a"

_FIELD_GETTERS: Dict[str, Callable[[GeocodeResult], Optional[str]]] = {
    "n": lambda result: result.street_number,
    "S": lambda result: result.street_name,
    "L": lambda result: result.locality,
    "D": lambda result: result.sub_locality,
    "z": lambda result: result.postal_code,
    "C": lambda result: result.country.name if result.country else None,
    "c": lambda result: result.country.code if result.country else None,
}


@lru_cache(maxsize=256)
def tokenize(format_string: str) -> tuple[FormatToken, ...]:
    """Split a format string into literal and directive tokens.

    Adjacent literal characters are merged into a single token.
    """
    tokens: list[FormatToken] = []
    literal: list[str] = []

    def flush_literal() -> None:
        if literal:
            tokens.append(FormatToken(TokenKind.LITERAL, "".join(literal)))
            literal.clear()

    position = 0
    length = len(format_string)
    while position < length:
        char = format_string[position]
        if char != DIRECTIVE_CHAR or position + 1 >= length:
            literal.append(char)
            position += 1
            continue

        letter = format_string[position + 1]
        if letter in (ADMIN_NAME, ADMIN_CODE):
            digit = format_string[position + 2 : position + 3]
            if digit.isdigit() and digit.isascii():
                flush_literal()
                tokens.append(
                    FormatToken(
                        TokenKind.DIRECTIVE,
                        format_string[position : position + 3],
                        letter=letter,
                        level=int(digit),
                    )
                )
                position += 3
                continue
        elif letter in _FIELD_GETTERS:
            flush_literal()
            tokens.append(
                FormatToken(
                    TokenKind.DIRECTIVE,
                    format_string[position : position + 2],
                    letter=letter,
                )
            )
            position += 2
            continue

        # Not a directive: keep the '%' and rescan from the next character.
        literal.append(char)
        position += 1

    flush_literal()
    return tuple(tokens)


@dataclass(frozen=True)
class FormatResolver:
    """Renders format strings against a GeocodeResult."""

    def resolve_token(self, token: FormatToken, result: GeocodeResult) -> str:
        """Return the text a single token contributes to the output."""
        if not token.is_directive:
            return token.text

        if token.letter in (ADMIN_NAME, ADMIN_CODE):
            if token.level is None or not 1 <= token.level <= MAX_ADMIN_LEVELS:
                return ""
            admin_level = result.admin_level(token.level)
            if admin_level is None:
                return ""
            value = admin_level.name if token.letter == ADMIN_NAME else admin_level.code
            return value or ""

        getter = _FIELD_GETTERS.get(token.letter or "")
        if getter is None:
            return token.text
        return getter(result) or ""

    def render(self, format_string: str, result: GeocodeResult) -> str:
        """Render ``format_string`` with values from ``result``.

        Args:
            format_string: Literal text with ``%`` directives.
            result: Structured address to read values from.

        Returns:
            The rendered string; missing address parts render as "".
        """
        if not format_string:
            return ""
        return "".join(
            self.resolve_token(token, result) for token in tokenize(format_string)
        )
