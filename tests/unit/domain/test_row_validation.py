"""Tests for RowValidator."""

import math

import pytest

from app.domain.exceptions import EmptyResultError
from app.domain.policies.row_validation import validate_row, validate_rows
from app.domain.value_objects.enums import SchemaKind


def _cq(**kw):
    row = {
        "ordinal": 1,
        "display_name": "Ann",
        "contact_number": "555",
        "email_address": "Ann@Example.COM",
    }
    row.update(kw)
    return row


# ─── Generic list ───────────────────────────────────────────────────


def test_generic_row_accepted_and_trimmed():
    row, missing = validate_row(
        {"display_name": " Ann ", "contact_number": " 555 "}, SchemaKind.GENERIC_LIST
    )
    assert missing == ()
    assert row.display_name == "Ann"
    assert row.contact_number == "555"
    assert row.freeform_note == ""


def test_generic_row_blank_phone_dropped():
    row, missing = validate_row(
        {"display_name": "Ann", "contact_number": "   "}, SchemaKind.GENERIC_LIST
    )
    assert row is None
    assert missing == ("contact_number",)


def test_generic_note_kept():
    row, _ = validate_row(
        {"display_name": "A", "contact_number": "1", "freeform_note": "VIP"},
        SchemaKind.GENERIC_LIST,
    )
    assert row.freeform_note == "VIP"


# ─── Call queue ─────────────────────────────────────────────────────


def test_call_queue_row_lowercases_email():
    row, _ = validate_row(_cq(), SchemaKind.CALL_QUEUE)
    assert row.email_address == "ann@example.com"
    assert row.ordinal == 1


@pytest.mark.parametrize("ordinal", [None, "3", True, math.nan, math.inf])
def test_call_queue_bad_ordinal_dropped(ordinal):
    row, missing = validate_row(_cq(ordinal=ordinal), SchemaKind.CALL_QUEUE)
    assert row is None
    assert missing == ("ordinal",)


def test_call_queue_missing_email_dropped():
    row = _cq()
    del row["email_address"]
    canonical, missing = validate_row(row, SchemaKind.CALL_QUEUE)
    assert canonical is None
    assert missing == ("email_address",)


def test_call_queue_fractional_ordinal_kept():
    row, _ = validate_row(_cq(ordinal=2.5), SchemaKind.CALL_QUEUE)
    assert row.ordinal == 2.5


# ─── Batch ──────────────────────────────────────────────────────────


def test_validate_rows_counts_dropped():
    rows = [_cq(ordinal=1), _cq(ordinal=None, display_name="Bob"), _cq(ordinal=3)]
    result = validate_rows(rows, SchemaKind.CALL_QUEUE)
    assert [r.ordinal for r in result.rows] == [1, 3]
    assert result.dropped == 1
    dropped = result.dropped_rows[0]
    assert dropped.row_number == 2
    assert dropped.display_name == "Bob"
    assert dropped.missing == ("ordinal",)


def test_validate_rows_all_invalid_raises():
    with pytest.raises(EmptyResultError, match="no valid records"):
        validate_rows([{"display_name": "A"}], SchemaKind.GENERIC_LIST)


def test_validate_rows_empty_input_raises():
    with pytest.raises(EmptyResultError):
        validate_rows([], SchemaKind.CALL_QUEUE)
