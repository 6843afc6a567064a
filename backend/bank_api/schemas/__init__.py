"""Pydantic Schemas — response envelopes and documented request bodies.

Invariants:
    - Schemas describe the API boundary; models/ describe persistence

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
