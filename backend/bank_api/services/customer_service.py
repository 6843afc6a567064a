"""Customer Repository Service — gateway results to domain records, with explicit not-found results.

Invariants:
    - No caching: every call round-trips to the gateway
    - Ids arrive in external string form and are coerced here, once
    - An uncoercible id is NotFound, never an exception
    - Gateway failures come back as PersistenceFailure, never raised

Design Decisions:
    - Returns Ok | NotFound | PersistenceFailure so the handler branches explicitly
      (ADR: no error-as-exception control flow for expected outcomes)
    - Gateway injected as a Protocol: the service never sees SQLAlchemy
"""

import logging

from bank_api.core.domain_types import (
    CustomerFields, CustomerRecord, CustomerId,
    Ok, NotFound, PersistenceFailure, RepositoryResult,
)
from bank_api.core.errors import BankApiError
from bank_api.core.repository_protocols import CustomerGateway, CustomerLike
from bank_api.core.validate_customer import coerce_customer_id

logger = logging.getLogger(__name__)


def to_record(row: CustomerLike) -> CustomerRecord:
    """Shape a gateway row into a domain record."""
    return CustomerRecord(
        id=CustomerId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        address=row.address,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class CustomerService:
    """Customer CRUD over a CustomerGateway."""

    def __init__(self, gateway: CustomerGateway):
        self.gateway = gateway

    async def list_all(self) -> RepositoryResult[list[CustomerRecord]]:
        try:
            rows = await self.gateway.list_all()
        except BankApiError as e:
            return PersistenceFailure(e)
        return Ok([to_record(r) for r in rows])

    async def get_by_id(self, raw_id: str) -> RepositoryResult[CustomerRecord]:
        customer_id = coerce_customer_id(raw_id)
        if customer_id is None:
            return NotFound(raw_id)
        try:
            row = await self.gateway.get(customer_id)
        except BankApiError as e:
            return PersistenceFailure(e)
        if row is None:
            return NotFound(raw_id)
        return Ok(to_record(row))

    async def create(self, fields: CustomerFields) -> RepositoryResult[CustomerRecord]:
        try:
            row = await self.gateway.create(fields)
        except BankApiError as e:
            return PersistenceFailure(e)
        logger.info("Customer created", extra={"customer_id": row.id})
        return Ok(to_record(row))

    async def update(
        self, raw_id: str, fields: CustomerFields,
    ) -> RepositoryResult[CustomerRecord]:
        customer_id = coerce_customer_id(raw_id)
        if customer_id is None:
            return NotFound(raw_id)
        try:
            row = await self.gateway.update(customer_id, fields)
        except BankApiError as e:
            return PersistenceFailure(e)
        if row is None:
            return NotFound(raw_id)
        logger.info("Customer updated", extra={"customer_id": row.id})
        return Ok(to_record(row))

    async def delete(self, raw_id: str) -> RepositoryResult[None]:
        customer_id = coerce_customer_id(raw_id)
        if customer_id is None:
            return NotFound(raw_id)
        try:
            deleted = await self.gateway.delete(customer_id)
        except BankApiError as e:
            return PersistenceFailure(e)
        if not deleted:
            return NotFound(raw_id)
        logger.info("Customer deleted", extra={"customer_id": customer_id})
        return Ok(None)
