"""Customer Gateway — SQLAlchemy implementation of the CustomerGateway protocol.

Invariants:
    - Every mutation commits before returning; failures roll back first
    - Absence is reported as None (get/update) or False (delete), never raised
    - SQLAlchemy exceptions never escape: they are mapped via map_db_error,
      even when the rollback itself fails
    - create stamps created_at and updated_at from one clock reading;
      update refreshes updated_at only

Design Decisions:
    - SELECT-then-mutate over UPDATE ... RETURNING: portable across PostgreSQL and
      SQLite (test DB); concurrent writers resolve last-write-wins in the database
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bank_api.core.domain_types import CustomerFields, CustomerId
from bank_api.infrastructure.database import map_db_error
from bank_api.models.customer import Customer

logger = logging.getLogger(__name__)


class SqlAlchemyCustomerGateway:
    """Customer persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Customer]:
        try:
            result = await self.db.execute(
                select(Customer).order_by(Customer.id.asc()),
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def get(self, customer_id: CustomerId) -> Customer | None:
        try:
            return await self.db.get(Customer, customer_id)
        except SQLAlchemyError as e:
            raise await self._fail(e)

    async def create(self, fields: CustomerFields) -> Customer:
        now = datetime.now(timezone.utc)
        customer = Customer(
            first_name=fields.first_name,
            last_name=fields.last_name,
            address=fields.address,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(customer)
            await self.db.commit()
            await self.db.refresh(customer)
        except SQLAlchemyError as e:
            raise await self._fail(e)
        return customer

    async def update(
        self, customer_id: CustomerId, fields: CustomerFields,
    ) -> Customer | None:
        try:
            customer = await self.db.get(Customer, customer_id)
            if customer is None:
                return None
            customer.first_name = fields.first_name
            customer.last_name = fields.last_name
            customer.address = fields.address
            customer.updated_at = datetime.now(timezone.utc)
            await self.db.commit()
            await self.db.refresh(customer)
        except SQLAlchemyError as e:
            raise await self._fail(e)
        return customer

    async def delete(self, customer_id: CustomerId) -> bool:
        try:
            customer = await self.db.get(Customer, customer_id)
            if customer is None:
                return False
            await self.db.delete(customer)
            await self.db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(e)
        return True

    async def _fail(self, exc: SQLAlchemyError):
        """Roll back and translate a SQLAlchemy failure.

        A failing rollback is logged; the original failure is still the one mapped.
        """
        logger.error(f"Customer gateway error: {exc}")
        try:
            await self.db.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.error(f"Customer gateway rollback failed: {rollback_exc}")
        return map_db_error(exc)
