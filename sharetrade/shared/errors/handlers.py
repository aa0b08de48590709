"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
Ledger rejection reasons are passed through verbatim, since they are
the ledger's own explanation of why a transaction was declined.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sharetrade.domain.trading.errors import (
    InsufficientHoldingError,
    InvalidAmountError,
    InvalidBidderError,
    InvalidQuantityError,
    InvalidTransitionError,
    LedgerUnavailableError,
    TradingDomainError,
    TransactionRejectedError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(InvalidQuantityError)
    async def handle_invalid_quantity(
        _request: Request, exc: InvalidQuantityError
    ) -> JSONResponse:
        logger.warning("Invalid quantity: %s", exc.quantity)
        return _error_response(HTTP_422, "Invalid quantity", exc.message)

    @app.exception_handler(InvalidAmountError)
    async def handle_invalid_amount(
        _request: Request, exc: InvalidAmountError
    ) -> JSONResponse:
        logger.warning("Invalid amount: %r", exc.amount)
        return _error_response(HTTP_422, "Invalid amount", exc.message)

    @app.exception_handler(InsufficientHoldingError)
    async def handle_insufficient_holding(
        _request: Request, exc: InsufficientHoldingError
    ) -> JSONResponse:
        logger.warning(
            "Insufficient holding: requested=%d available=%d",
            exc.requested,
            exc.available,
        )
        return _error_response(HTTP_400, "Insufficient holding", exc.message)

    @app.exception_handler(InvalidBidderError)
    async def handle_invalid_bidder(
        _request: Request, exc: InvalidBidderError
    ) -> JSONResponse:
        logger.warning("Invalid bidder for request %s", exc.request_id)
        return _error_response(HTTP_400, "Invalid bidder", exc.message)

    @app.exception_handler(TransactionRejectedError)
    async def handle_transaction_rejected(
        _request: Request, exc: TransactionRejectedError
    ) -> JSONResponse:
        logger.warning("Transaction rejected: %s", exc.reason)
        return _error_response(HTTP_409, "Transaction rejected", exc.reason)

    @app.exception_handler(LedgerUnavailableError)
    async def handle_ledger_unavailable(
        _request: Request, exc: LedgerUnavailableError
    ) -> JSONResponse:
        logger.error("Ledger unavailable: %s", exc.reason)
        return _error_response(HTTP_503, "Ledger unavailable", exc.reason)

    @app.exception_handler(InvalidTransitionError)
    async def handle_invalid_transition(
        _request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        logger.warning("Invalid transition: %s", exc.message)
        return _error_response(HTTP_409, "Invalid state transition")

    @app.exception_handler(TradingDomainError)
    async def handle_trading_domain(
        _request: Request, exc: TradingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled trading domain errors."""
        logger.error("Unhandled trading domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
