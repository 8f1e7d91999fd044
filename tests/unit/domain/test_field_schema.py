"""Tests for header keys and field schemas."""

import pytest

from app.domain.value_objects.enums import SchemaKind
from app.domain.value_objects.field_schema import (
    CALL_QUEUE_SCHEMA,
    CONTACT_NUMBER,
    DISPLAY_NAME,
    FREEFORM_NOTE,
    GENERIC_LIST_SCHEMA,
    ORDINAL,
    SCHEMAS,
    header_key,
)


@pytest.mark.parametrize(
    "header",
    ["First Name", "first_name", "FIRSTNAME", "\ufeffFirstName ", "first-name", " First  Name"],
)
def test_header_key_variants_collapse(header):
    assert header_key(header) == "firstname"


def test_generic_aliases():
    assert GENERIC_LIST_SCHEMA.field_for("Name").name == DISPLAY_NAME
    assert GENERIC_LIST_SCHEMA.field_for("PHONE NUMBER").name == CONTACT_NUMBER
    assert GENERIC_LIST_SCHEMA.field_for("notes").name == FREEFORM_NOTE
    assert GENERIC_LIST_SCHEMA.field_for("Email") is None


def test_call_queue_aliases():
    assert CALL_QUEUE_SCHEMA.field_for("Sr No").name == ORDINAL
    assert CALL_QUEUE_SCHEMA.field_for("record_number").name == ORDINAL
    assert CALL_QUEUE_SCHEMA.field_for("Mobile no").name == CONTACT_NUMBER
    assert CALL_QUEUE_SCHEMA.field_for("FirstName") is None


def test_ordinal_is_numeric():
    assert CALL_QUEUE_SCHEMA.field_for("Record").numeric


def test_required_fields():
    assert GENERIC_LIST_SCHEMA.required_fields == (DISPLAY_NAME, CONTACT_NUMBER)
    assert ORDINAL in CALL_QUEUE_SCHEMA.required_fields
    assert len(CALL_QUEUE_SCHEMA.required_fields) == 4


def test_schemas_cover_all_kinds():
    assert set(SCHEMAS) == set(SchemaKind)
