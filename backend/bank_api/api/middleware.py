"""Request Middleware — origin restriction and per-client rate limiting.

Invariants:
    - Requests with an Origin header outside the allow-list → 403, before rate limiting
    - General policy counts every request except /health paths
    - Write policy additionally counts POST/PUT/DELETE under /api/customers
    - Over-limit → 429 {success: false, message} with Retry-After; never reaches the router
    - Allowed responses carry RateLimit-Limit / RateLimit-Remaining / RateLimit-Reset
      of the tighter policy (fewest remaining) among those the request counted against

Design Decisions:
    - Limiters are injected instances owned by the app (app.state), not module globals,
      so each app (and each test) has isolated counters
    - Rejections rendered from the error's to_response(): same envelope as the formatter
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from bank_api.core.errors import OriginNotAllowedError, RateLimitExceededError
from bank_api.infrastructure.rate_limiter import RateLimitDecision, SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

EXEMPT_PATH_PREFIX = "/health"
WRITE_METHODS = frozenset({"POST", "PUT", "DELETE"})
WRITE_PATH_PREFIX = "/api/customers"


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests whose Origin is not allow-listed."""

    def __init__(self, app: ASGIApp, allowed_origins: list[str]):
        super().__init__(app)
        self.allow_all = "*" in allowed_origins
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        origin = request.headers.get("origin")
        if origin is None or self.allow_all or origin in self.allowed_origins:
            return await call_next(request)

        error = OriginNotAllowedError(origin)
        logger.warning(
            f"Rejected request from origin {origin}",
            extra={"origin": origin, "path": request.url.path},
        )
        return JSONResponse(status_code=error.http_status, content=error.to_response())


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the general and (optionally) the write rate limit policies."""

    def __init__(
        self,
        app: ASGIApp,
        general: SlidingWindowRateLimiter,
        write: SlidingWindowRateLimiter | None = None,
    ):
        super().__init__(app)
        self.general = general
        self.write = write

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path.startswith(EXEMPT_PATH_PREFIX):
            return await call_next(request)

        client = client_address(request)
        decision = await self.general.hit(client)
        if not decision.allowed:
            return self._reject(self.general, decision, request, client)

        if (
            self.write is not None
            and request.method in WRITE_METHODS
            and path.startswith(WRITE_PATH_PREFIX)
        ):
            write_decision = await self.write.hit(client)
            if not write_decision.allowed:
                return self._reject(self.write, write_decision, request, client)
            if write_decision.remaining < decision.remaining:
                decision = write_decision

        response = await call_next(request)
        _set_rate_limit_headers(response, decision)
        return response

    def _reject(
        self,
        limiter: SlidingWindowRateLimiter,
        decision: RateLimitDecision,
        request: Request,
        client: str,
    ) -> JSONResponse:
        error = RateLimitExceededError(limiter.message, decision.reset_after_seconds)
        logger.warning(
            "Rate limit exceeded",
            extra={
                "client": client, "path": request.url.path,
                "method": request.method, "error_code": error.code,
            },
        )
        response = JSONResponse(status_code=error.http_status, content=error.to_response())
        _set_rate_limit_headers(response, decision)
        response.headers["Retry-After"] = str(error.retry_after_seconds)
        return response


def _set_rate_limit_headers(response: Response, decision: RateLimitDecision) -> None:
    response.headers["RateLimit-Limit"] = str(decision.limit)
    response.headers["RateLimit-Remaining"] = str(decision.remaining)
    response.headers["RateLimit-Reset"] = str(decision.reset_after_seconds)
