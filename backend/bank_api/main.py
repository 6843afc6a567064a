"""Bank API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure → {success: false, message} JSON
    - Middleware order per request: origin guard → CORS → rate limit → router
    - Database engine and rate limiter state are process-scoped: created in
      create_app/lifespan, released on shutdown on every exit path

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app factory: tests build isolated apps with their own limiter counters;
      `app` at module level is what uvicorn serves
    - Interactive docs at /api-docs, OpenAPI document at /api-docs.json
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bank_api.api.error_handlers import register_error_handlers
from bank_api.api.middleware import OriginGuardMiddleware, RateLimitMiddleware
from bank_api.api.routes import customers, health
from bank_api.config import Settings, get_settings
from bank_api.infrastructure.database import init_db, close_db
from bank_api.infrastructure.observability import setup_logging
from bank_api.infrastructure.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


def build_rate_limiters(
    settings: Settings,
) -> tuple[SlidingWindowRateLimiter, SlidingWindowRateLimiter | None]:
    """Create the general and write rate limiters from settings."""
    general = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        message="Too many requests from this IP, please try again after 15 minutes.",
    )
    write = None
    if settings.rate_limit_write_enabled:
        write = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_write_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            message="Too many create/update/delete requests, please try again later.",
        )
    return general, write


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info(f"Bank API started ({settings.environment})")
    try:
        yield
    finally:
        logger.info("Bank API shutting down")
        for limiter in app.state.rate_limiters:
            await limiter.reset()
        await close_db()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Bank ATM API",
        version="1.0.0",
        description="REST API for Bank ATM system - Customer management",
        lifespan=lifespan,
        docs_url="/api-docs",
        openapi_url="/api-docs.json",
        redoc_url=None,
    )
    app.state.settings = settings

    general, write = build_rate_limiters(settings)
    app.state.rate_limiters = [limiter for limiter in (general, write) if limiter]

    # Added innermost first: the last middleware added runs first.
    # The origin guard wraps CORS so disallowed preflights get the 403 envelope too.
    app.add_middleware(RateLimitMiddleware, general=general, write=write)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.cors_origins)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(customers.router)

    register_error_handlers(app, development=settings.is_development)
    return app


app = create_app()
