"""Tests for header normalization and strict number parsing."""

import pytest

from app.adapters.tabular.normalizer import (
    clean_string,
    normalize_row,
    parse_number,
    unmatched_headers,
)
from app.domain.value_objects.field_schema import CALL_QUEUE_SCHEMA, GENERIC_LIST_SCHEMA


def test_clean_string():
    assert clean_string("  x ") == "x"
    assert clean_string("   ") is None
    assert clean_string(None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [("12", 12), ("12.0", 12), ("1e2", 100), (" 7 ", 7), ("-3", -3), ("2.5", 2.5), (".5", 0.5)],
)
def test_parse_number_accepts_plain_literals(raw, expected):
    value = parse_number(raw)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize("raw", ["", "abc", "0x1A", "1,000", "nan", "inf", "12abc", None])
def test_parse_number_rejects_everything_else(raw):
    assert parse_number(raw) is None


def test_normalize_generic_any_casing():
    for headers in (("FirstName", "Phone"), ("first name", "PHONE NUMBER"), ("NAME", "mobile")):
        raw = {headers[0]: "Ann", headers[1]: "555"}
        assert normalize_row(raw, GENERIC_LIST_SCHEMA) == {
            "display_name": "Ann",
            "contact_number": "555",
        }


def test_normalize_first_matching_header_wins():
    raw = {"FirstName": "Ann", "Name": "Ann Smith", "Phone": "1"}
    assert normalize_row(raw, GENERIC_LIST_SCHEMA)["display_name"] == "Ann"


def test_normalize_first_header_claims_field_even_if_unparseable():
    raw = {"Record no": "n/a", "Sr no": "4", "Name": "A"}
    row = normalize_row(raw, CALL_QUEUE_SCHEMA)
    assert "ordinal" not in row


def test_normalize_call_queue_row():
    raw = {
        "Record no": "3",
        "Full Name": "Bob",
        "Mobile no": "900",
        "E-mail": "bob@x.io",
        "Extra": "ignored",
    }
    assert normalize_row(raw, CALL_QUEUE_SCHEMA) == {
        "ordinal": 3,
        "display_name": "Bob",
        "contact_number": "900",
        "email_address": "bob@x.io",
    }


def test_normalize_missing_cell_becomes_empty_string():
    row = normalize_row({"Name": None, "Phone": "1"}, GENERIC_LIST_SCHEMA)
    assert row["display_name"] == ""


def test_unmatched_headers():
    headers = ["Name", "Phone", "City", "Notes"]
    assert unmatched_headers(headers, GENERIC_LIST_SCHEMA) == ["City"]


def test_parse_number_keeps_large_integers_exact():
    assert parse_number("9007199254740993") == 2**53 + 1
    assert parse_number("9007199254740993.0") == 2**53 + 1
    assert parse_number("1e25") == 10**25
    assert parse_number("1e400") is None
