"""Customer Routes — request handler for the five customer CRUD operations.

Invariants:
    - Presence validation runs before any persistence call (create and update)
    - NotFound results → 404 {success: false, message: "Customer not found"}, handled here
    - PersistenceFailure results are re-raised to the centralized formatter, never handled here
    - Path ids are taken as str: coercion and not-found mapping belong to CustomerService

Design Decisions:
    - match over result values instead of try/except on "not found" (ADR: explicit control flow)
    - Validation and not-found rendered locally via the error's to_response(): same
      envelope as the formatter without routing expected outcomes through it
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bank_api.api.dependencies import get_customer_service, read_body
from bank_api.core.domain_types import (
    CustomerRecord, Ok, NotFound, PersistenceFailure,
)
from bank_api.core.errors import CustomerNotFoundError, ValidationError
from bank_api.core.validate_customer import extract_customer_fields, find_missing_fields
from bank_api.schemas.customer import (
    CustomerOut, CustomerEnvelope, CustomerListEnvelope,
    MessageEnvelope, ErrorEnvelope, CustomerInput, dump_envelope,
)
from bank_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/customers", tags=["Customers"])

_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": CustomerInput.model_json_schema(by_alias=True),
            },
            "application/x-www-form-urlencoded": {
                "schema": CustomerInput.model_json_schema(by_alias=True),
            },
        },
    },
}
_NOT_FOUND_DOC = {404: {"model": ErrorEnvelope, "description": "Customer not found"}}
_INVALID_DOC = {400: {"model": ErrorEnvelope, "description": "Missing fields or database failure"}}


def _customer_out(record: CustomerRecord) -> CustomerOut:
    return CustomerOut(**asdict(record))


def _not_found(customer_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=CustomerNotFoundError(customer_id).to_response(),
    )


def _validation_failed(payload: dict[str, Any]) -> JSONResponse | None:
    """Return a 400 response if required fields are missing, else None."""
    missing = find_missing_fields(payload)
    if not missing:
        return None
    logger.warning(f"Customer payload missing fields: {', '.join(missing)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationError(missing).to_response(),
    )


@router.get("", response_model=CustomerListEnvelope)
async def list_customers(
    service: CustomerService = Depends(get_customer_service),
):
    """Get all customers, ordered by id."""
    match await service.list_all():
        case Ok(value=records):
            return JSONResponse(content=dump_envelope(CustomerListEnvelope(
                data=[_customer_out(r) for r in records], count=len(records),
            )))
        case PersistenceFailure(error=error):
            raise error


@router.get(
    "/{customer_id}", response_model=CustomerEnvelope, responses=_NOT_FOUND_DOC,
)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a customer by id."""
    match await service.get_by_id(customer_id):
        case Ok(value=record):
            return JSONResponse(content=dump_envelope(
                CustomerEnvelope(data=_customer_out(record)),
            ))
        case NotFound():
            return _not_found(customer_id)
        case PersistenceFailure(error=error):
            raise error


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=CustomerEnvelope,
    responses=_INVALID_DOC, openapi_extra=_BODY_DOC,
)
async def create_customer(
    payload: dict[str, Any] = Depends(read_body),
    service: CustomerService = Depends(get_customer_service),
):
    """Create a customer from firstName, lastName and address."""
    if (invalid := _validation_failed(payload)) is not None:
        return invalid
    fields = extract_customer_fields(payload)

    match await service.create(fields):
        case Ok(value=record):
            return JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content=dump_envelope(CustomerEnvelope(
                    data=_customer_out(record),
                    message="Customer created successfully",
                )),
            )
        case PersistenceFailure(error=error):
            raise error


@router.put(
    "/{customer_id}", response_model=CustomerEnvelope,
    responses={**_INVALID_DOC, **_NOT_FOUND_DOC}, openapi_extra=_BODY_DOC,
)
async def update_customer(
    customer_id: str,
    payload: dict[str, Any] = Depends(read_body),
    service: CustomerService = Depends(get_customer_service),
):
    """Replace a customer's firstName, lastName and address."""
    if (invalid := _validation_failed(payload)) is not None:
        return invalid
    fields = extract_customer_fields(payload)

    match await service.update(customer_id, fields):
        case Ok(value=record):
            return JSONResponse(content=dump_envelope(CustomerEnvelope(
                data=_customer_out(record),
                message="Customer updated successfully",
            )))
        case NotFound():
            return _not_found(customer_id)
        case PersistenceFailure(error=error):
            raise error


@router.delete(
    "/{customer_id}", response_model=MessageEnvelope, responses=_NOT_FOUND_DOC,
)
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer (hard delete)."""
    match await service.delete(customer_id):
        case Ok():
            return JSONResponse(content=dump_envelope(MessageEnvelope(
                success=True, message="Customer deleted successfully",
            )))
        case NotFound():
            return _not_found(customer_id)
        case PersistenceFailure(error=error):
            raise error
