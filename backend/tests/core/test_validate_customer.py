"""Customer Input Enforcement — tests for pure presence checks and id coercion.

Tests cover:
    - find_missing_fields flags absent, empty and non-string values
    - extract_customer_fields builds CustomerFields only for complete payloads
    - coerce_customer_id accepts positive decimal ids in the INTEGER range only
"""

import pytest

from bank_api.core.domain_types import CustomerFields
from bank_api.core.validate_customer import (
    find_missing_fields,
    extract_customer_fields,
    coerce_customer_id,
    MAX_CUSTOMER_ID,
)


COMPLETE = {"firstName": "Matti", "lastName": "Meikäläinen", "address": "X"}


# ─── find_missing_fields ─────────────────────────────────────────

def test_complete_payload_has_no_missing_fields():
    assert find_missing_fields(COMPLETE) == []


def test_empty_string_counts_as_missing():
    assert find_missing_fields({**COMPLETE, "lastName": ""}) == ["lastName"]


def test_absent_fields_reported_in_declared_order():
    assert find_missing_fields({}) == ["firstName", "lastName", "address"]


def test_non_string_values_count_as_missing():
    payload = {**COMPLETE, "firstName": 123, "address": None}
    assert find_missing_fields(payload) == ["firstName", "address"]


def test_whitespace_is_not_stripped():
    assert find_missing_fields({**COMPLETE, "address": "  "}) == []


# ─── extract_customer_fields ─────────────────────────────────────

def test_extract_maps_camel_case_to_fields():
    assert extract_customer_fields({**COMPLETE, "id": 5}) == CustomerFields(
        first_name="Matti", last_name="Meikäläinen", address="X",
    )


def test_extract_incomplete_returns_none():
    assert extract_customer_fields({"firstName": "Matti"}) is None


# ─── coerce_customer_id ──────────────────────────────────────────

def test_coerce_plain_integer():
    assert coerce_customer_id("42") == 42


def test_coerce_strips_surrounding_whitespace():
    assert coerce_customer_id(" 7 ") == 7


@pytest.mark.parametrize("raw", ["abc", "12abc", "1.5", "-3", "+3", "", "0", "١", "٤٢"])
def test_coerce_rejects_non_ids(raw):
    assert coerce_customer_id(raw) is None


def test_coerce_rejects_ids_beyond_integer_range():
    assert coerce_customer_id(str(MAX_CUSTOMER_ID)) == MAX_CUSTOMER_ID
    assert coerce_customer_id(str(MAX_CUSTOMER_ID + 1)) is None
