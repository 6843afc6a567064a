"""Customer Schemas — Pydantic models for the JSON boundary and the OpenAPI document.

Invariants:
    - JSON keys are camelCase (firstName, createdAt...); ORM attributes are snake_case
    - Envelopes never serialize absent keys (exclude_none at dump time)
    - CustomerInput accepts anything: presence checks live in core/validate_customer.py
      so a missing field yields the fixed 400 message, not a 422 error list

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for every field
    - Envelope models exist mainly to document responses; handlers dump them by alias
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class CustomerInput(_CamelModel):
    """Request body for create/update (documentation only, see module invariants)."""
    first_name: str = Field(max_length=100, examples=["Matti"])
    last_name: str = Field(max_length=100, examples=["Meikäläinen"])
    address: str = Field(max_length=255, examples=["Kauppurienkatu 1, 90100 Oulu"])


class CustomerOut(_CamelModel):
    """Customer as returned by the API."""
    id: int
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime


class CustomerEnvelope(_CamelModel):
    success: bool = True
    data: CustomerOut
    message: str | None = None


class CustomerListEnvelope(_CamelModel):
    success: bool = True
    data: list[CustomerOut]
    count: int


class MessageEnvelope(_CamelModel):
    success: bool
    message: str


class ErrorEnvelope(_CamelModel):
    success: bool = False
    message: str
    error: str | None = Field(None, description="Detailed error (development only)")
    stack: str | None = Field(None, description="Stack trace (development only)")


def dump_envelope(envelope: BaseModel) -> dict:
    """Serialize an envelope with camelCase keys and without absent fields."""
    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
