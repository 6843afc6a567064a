"""Customer ORM — the single persisted entity of the Bank API.

Invariants:
    - id is an autoincrement INTEGER primary key, never reassigned
    - first_name, last_name, address are non-nullable with fixed max lengths
    - created_at is written once; updated_at >= created_at

Design Decisions:
    - snake_case columns, camelCase only at the JSON boundary (schemas/customer.py)
    - Timestamps stamped by the gateway from one clock reading on create, so
      created_at == updated_at for a fresh row (ADR: no server_default drift)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from bank_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Customer(Base):
    """Bank customer."""
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
