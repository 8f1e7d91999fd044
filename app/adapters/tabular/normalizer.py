"""Column normalization — maps raw headers onto a canonical field schema."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from decimal import Decimal

from app.domain.value_objects.field_schema import FieldSchema

# Plain decimal / scientific literal. No hex, no thousands separators, no NaN/inf.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_MAX_INT_DIGITS = 30


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_number(value: str | None) -> int | float | None:
    """Strictly parse a numeric literal.

    Integral values come back as int ("12", "12.0", "1e2"); anything that is
    not a plain literal yields None.
    """
    text = clean_string(value)
    if text is None or not _NUMBER_RE.fullmatch(text):
        return None
    number = Decimal(text)
    # Exponent cap keeps "1e999999" from expanding into a huge int
    if number == number.to_integral_value() and number.adjusted() < _MAX_INT_DIGITS:
        return int(number)
    result = float(number)
    return result if math.isfinite(result) else None


def normalize_row(raw: Mapping[str, str], schema: FieldSchema) -> dict[str, str | int | float]:
    """Map one raw row onto *schema*.

    Headers are matched against each field's aliases case-, whitespace- and
    separator-insensitively. When two headers alias the same field the first
    one in iteration order wins. Fields without a matching header are absent;
    numeric fields that do not parse are absent too.
    """
    out: dict[str, str | int | float] = {}
    claimed: set[str] = set()
    for header, value in raw.items():
        if header is None:
            continue
        canonical = schema.field_for(header)
        if canonical is None or canonical.name in claimed:
            continue
        claimed.add(canonical.name)
        if canonical.numeric:
            number = parse_number(value)
            if number is not None:
                out[canonical.name] = number
        else:
            out[canonical.name] = "" if value is None else str(value)
    return out


def unmatched_headers(headers: list[str], schema: FieldSchema) -> list[str]:
    """Headers that alias no field of *schema* (for diagnostics)."""
    return [h for h in headers if schema.field_for(h) is None]
