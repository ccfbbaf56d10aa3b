"""Decimal helpers for monetary values carried as strings."""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

ZERO = Decimal("0")


def try_parse_decimal(value: Any) -> Decimal | None:
    """
    Parse a monetary value, returning None when it is not a finite number.

    Accepts Decimal, int, float and numeric strings. Booleans, blanks and
    NaN/Infinity are rejected.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def parse_decimal(value: Any) -> Decimal:
    """Parse a monetary value; anything unparseable becomes zero."""
    parsed = try_parse_decimal(value)
    return ZERO if parsed is None else parsed


def format_decimal(value: Decimal) -> str:
    """Render a decimal without exponent notation."""
    return format(value, "f")


# Decimal field that never fails validation and is sent as a string
Money = Annotated[
    Decimal,
    BeforeValidator(parse_decimal),
    PlainSerializer(format_decimal, return_type=str, when_used="json"),
]
