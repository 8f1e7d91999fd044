"""CanonicalRow — one validated upload row in the canonical field schema."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanonicalRow:
    display_name: str
    contact_number: str
    ordinal: int | float | None = None
    email_address: str | None = None
    freeform_note: str = ""
