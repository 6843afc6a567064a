"""Service test fixtures — in-memory CustomerGateway fake.

Invariants:
    - FakeGateway satisfies the CustomerGateway protocol without a database
    - fail_with makes every gateway call raise the given error

Design Decisions:
    - Fake over AsyncMock: ordering, id assignment and absence behave like a real store,
      so service tests assert on results rather than on call patterns
"""

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import pytest

from bank_api.core.domain_types import CustomerFields, CustomerId


@dataclass
class FakeRow:
    id: int
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime


class FakeGateway:
    def __init__(self):
        self.rows: dict[int, FakeRow] = {}
        self.calls: list[str] = []
        self.fail_with: Exception | None = None
        self._next_id = 1
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def list_all(self):
        self._record("list_all")
        return [self.rows[k] for k in sorted(self.rows)]

    async def get(self, customer_id: CustomerId):
        self._record("get")
        return self.rows.get(customer_id)

    async def create(self, fields: CustomerFields):
        self._record("create")
        now = self._tick()
        row = FakeRow(
            self._next_id, fields.first_name, fields.last_name,
            fields.address, now, now,
        )
        self.rows[row.id] = row
        self._next_id += 1
        return row

    async def update(self, customer_id: CustomerId, fields: CustomerFields):
        self._record("update")
        row = self.rows.get(customer_id)
        if row is None:
            return None
        row.first_name = fields.first_name
        row.last_name = fields.last_name
        row.address = fields.address
        row.updated_at = self._tick()
        return row

    async def delete(self, customer_id: CustomerId) -> bool:
        self._record("delete")
        return self.rows.pop(customer_id, None) is not None


@pytest.fixture
def gateway():
    return FakeGateway()
