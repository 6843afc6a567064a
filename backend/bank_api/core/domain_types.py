"""Domain Types — customer records, editable fields and repository result values.

Invariants:
    - CustomerId is always an int inside the domain (coercion happens once, in core/validate_customer.py)
    - CustomerRecord is immutable: every mutation round-trips through the gateway
    - Repository results are exactly one of Ok | NotFound | PersistenceFailure

Design Decisions:
    - Result values over exceptions for "not found": the handler branches with match,
      no thrown-error side channel (ADR: explicit control flow)
    - PersistenceFailure wraps the DatabaseError instead of swallowing it so the
      handler can re-raise it to the centralized formatter untouched
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, NewType, TypeVar

from bank_api.core.errors import BankApiError


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", int)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CustomerFields:
    """The three editable customer fields."""
    first_name: str
    last_name: str
    address: str


@dataclass(frozen=True)
class CustomerRecord:
    """A persisted customer as seen by the domain."""
    id: CustomerId
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime


# ─── Repository Results ──────────────────────────────────────────

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    """No customer with the requested id (or the id could not be coerced)."""
    customer_id: str


@dataclass(frozen=True)
class PersistenceFailure:
    """The gateway failed; error is forwarded to the centralized formatter."""
    error: BankApiError


RepositoryResult = Ok[T] | NotFound | PersistenceFailure
