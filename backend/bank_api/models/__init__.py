"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is populated for alembic and tests
"""

from bank_api.models.customer import Customer  # noqa: F401
