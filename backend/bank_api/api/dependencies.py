"""Route Dependencies — body decoding and service construction for customer routes.

Invariants:
    - JSON and URL-encoded bodies decode to a flat dict; other content types decode to {}
    - Malformed JSON raises MalformedBodyError (400) before any handler code runs
    - A JSON body that is not an object decodes to {} (all fields then count as missing)

Design Decisions:
    - Manual decoding over a Pydantic body parameter: a missing field must produce the
      fixed "Missing required fields" message, not FastAPI's 422 error list
    - One CustomerService per request, bound to the request's AsyncSession
"""

import json
import logging
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bank_api.core.errors import MalformedBodyError
from bank_api.infrastructure.customer_gateway import SqlAlchemyCustomerGateway
from bank_api.infrastructure.database import get_db
from bank_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def read_body(request: Request) -> dict[str, Any]:
    """Decode the request body into a dict of fields."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return dict(form)

    if content_type == "application/json" or content_type.endswith("+json"):
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                f"Malformed JSON body: {e}", extra={"path": request.url.path},
            )
            raise MalformedBodyError(str(e))
        return payload if isinstance(payload, dict) else {}

    return {}


def get_customer_service(db: AsyncSession = Depends(get_db)) -> CustomerService:
    return CustomerService(SqlAlchemyCustomerGateway(db))
