"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-endpoint rate limits.
Transaction-submitting endpoints get a tighter limit than reads,
since each call costs a ledger round trip.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from sharetrade.core.config import settings

DEFAULT_RATE_LIMIT = settings.rate_limit_default
MUTATING_RATE_LIMIT = settings.rate_limit_mutating

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return a 429 JSON body in the same shape as domain errors."""
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
