"""Customer Input Enforcement — presence checks and id coercion, pure functions only.

Invariants:
    - A field counts as present only when it is a non-empty string
    - No length or format checks here: column types at the gateway are the only limit
    - coerce_customer_id never raises: unusable ids come back as None

Design Decisions:
    - Strict integer parsing over lenient prefix parsing: "12abc" is not customer 12,
      and only ASCII digits count ("١" is not customer 1)
    - Ids outside the storage INTEGER range are treated as absent rather than
      letting the driver fail with an overflow (ADR: not-found over 400 for bad ids)
"""

import re
from typing import Any

from bank_api.core.domain_types import CustomerFields, CustomerId


REQUIRED_FIELDS: tuple[str, ...] = ("firstName", "lastName", "address")
MAX_CUSTOMER_ID: int = 2**31 - 1

_ID_PATTERN = re.compile(r"[0-9]+")


def find_missing_fields(payload: dict[str, Any]) -> list[str]:
    """Return required field names that are absent, empty, or not strings."""
    return [
        name for name in REQUIRED_FIELDS
        if not isinstance(payload.get(name), str) or not payload[name]
    ]


def extract_customer_fields(payload: dict[str, Any]) -> CustomerFields | None:
    """Build CustomerFields from a decoded body, or None if any field is missing."""
    if find_missing_fields(payload):
        return None
    return CustomerFields(
        first_name=payload["firstName"],
        last_name=payload["lastName"],
        address=payload["address"],
    )


def coerce_customer_id(raw: str) -> CustomerId | None:
    """Coerce an external id (path segment) to a CustomerId."""
    raw = raw.strip()
    if not _ID_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value < 1 or value > MAX_CUSTOMER_ID:
        return None
    return CustomerId(value)
