"""
Health check router.

Liveness/readiness probe. Reports the configured ledger backend and
whether the trade workflow currently holds a session; never touches
the ledger itself.
"""

from fastapi import APIRouter, Depends

from sharetrade.application.trading.workflow import TradeWorkflow
from sharetrade.core.config import settings
from sharetrade.interfaces.trading.dependencies import get_trade_workflow
from sharetrade.interfaces.trading.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application status, version and session state.",
)
def health_check(
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=settings.version,
        ledger_backend=settings.ledger_backend,
        connected=workflow.session is not None,
    )
