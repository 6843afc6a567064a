"""Boundary Protocols — contract between the customer service and persistence.

Invariants:
    - The service NEVER imports a concrete gateway — implementations are injected
    - Gateway methods return plain ORM-shaped objects or None/False for absence
    - Gateway failures surface as DatabaseError / DatabaseUnavailableError only

Design Decisions:
    - Protocol over ABC: structural subtyping, any relational client that satisfies
      the five operations is substitutable (ADR: persistence is an external collaborator)
"""

from datetime import datetime
from typing import Protocol

from bank_api.core.domain_types import CustomerFields, CustomerId


class CustomerLike(Protocol):
    """Structural contract for stored customer rows returned by a gateway."""
    id: int
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime


class CustomerGateway(Protocol):
    """Contract for customer persistence — implemented by infrastructure."""
    async def list_all(self) -> list[CustomerLike]: ...
    async def get(self, customer_id: CustomerId) -> CustomerLike | None: ...
    async def create(self, fields: CustomerFields) -> CustomerLike: ...
    async def update(
        self, customer_id: CustomerId, fields: CustomerFields,
    ) -> CustomerLike | None: ...
    async def delete(self, customer_id: CustomerId) -> bool: ...
