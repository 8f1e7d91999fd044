"""Canonical field schemas and their header alias tables."""

from __future__ import annotations

import re
from dataclasses import dataclass

from app.domain.value_objects.enums import SchemaKind

ORDINAL = "ordinal"
DISPLAY_NAME = "display_name"
CONTACT_NUMBER = "contact_number"
EMAIL_ADDRESS = "email_address"
FREEFORM_NOTE = "freeform_note"


def header_key(header: str) -> str:
    """Comparison key for a header: case-, whitespace- and separator-insensitive.

    "First Name", "first_name", "FIRSTNAME" and "\\ufeffFirstName " all
    reduce to "firstname".
    """
    key = header.replace("\ufeff", "").lower()
    return re.sub(r"[\s _\-]+", "", key)


@dataclass(frozen=True)
class CanonicalField:
    name: str
    aliases: tuple[str, ...]
    required: bool = True
    numeric: bool = False

    def matches(self, header: str) -> bool:
        key = header_key(header)
        return any(key == header_key(alias) for alias in self.aliases)


@dataclass(frozen=True)
class FieldSchema:
    kind: SchemaKind | None
    fields: tuple[CanonicalField, ...]

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    def field_for(self, header: str) -> CanonicalField | None:
        """Return the canonical field a raw header aliases, if any."""
        for f in self.fields:
            if f.matches(header):
                return f
        return None


GENERIC_LIST_SCHEMA = FieldSchema(
    kind=SchemaKind.GENERIC_LIST,
    fields=(
        CanonicalField(DISPLAY_NAME, ("FirstName", "First Name", "Name")),
        CanonicalField(CONTACT_NUMBER, ("Phone", "Phone Number", "Mobile")),
        CanonicalField(FREEFORM_NOTE, ("Notes", "Note"), required=False),
    ),
)

CALL_QUEUE_SCHEMA = FieldSchema(
    kind=SchemaKind.CALL_QUEUE,
    fields=(
        CanonicalField(ORDINAL, ("Record no", "Record", "Record number", "Sr no"), numeric=True),
        CanonicalField(DISPLAY_NAME, ("Name", "Full Name")),
        CanonicalField(CONTACT_NUMBER, ("Mobile no", "Mobile", "Phone")),
        CanonicalField(EMAIL_ADDRESS, ("Email", "Email address", "E-mail")),
    ),
)

SCHEMAS: dict[SchemaKind, FieldSchema] = {
    SchemaKind.GENERIC_LIST: GENERIC_LIST_SCHEMA,
    SchemaKind.CALL_QUEUE: CALL_QUEUE_SCHEMA,
}
