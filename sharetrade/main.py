"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, trading)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration

No business logic belongs here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from sharetrade.core.config import settings
from sharetrade.interfaces.health import router as health_router
from sharetrade.interfaces.trading.dependencies import get_trade_workflow
from sharetrade.interfaces.trading.router import router as trading_router
from sharetrade.shared.errors.handlers import register_error_handlers
from sharetrade.shared.logging import configure_logging
from sharetrade.shared.security.headers import SecurityHeadersMiddleware
from sharetrade.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: drop the trading session on shutdown."""
    yield
    get_trade_workflow().disconnect()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(
        level=settings.log_level, ledger_level=settings.ledger_log_level
    )

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(trading_router, prefix="/api/v1")

    return app


app = create_app()
