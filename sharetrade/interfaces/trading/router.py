"""
FastAPI router for the trading bounded context.

All routes delegate to the trade workflow. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Request

from sharetrade.application.trading.workflow import TradeWorkflow
from sharetrade.domain.trading.entities import SellRequest
from sharetrade.domain.trading.units import from_base_units
from sharetrade.interfaces.trading.dependencies import get_trade_workflow
from sharetrade.interfaces.trading.schemas import (
    BidItem,
    BuyRequest,
    BuyResponse,
    ConfirmBuyerRequest,
    ErrorResponse,
    HoldingResponse,
    PaymentRequest,
    PaymentResponse,
    PlaceBidRequest,
    PlaceBidResponse,
    SellRequestBody,
    SellRequestItem,
    SellRequestListResponse,
    SellResponse,
    SessionResponse,
    TradeResponse,
)
from sharetrade.shared.security.rate_limiting import MUTATING_RATE_LIMIT, limiter

router = APIRouter(prefix="/trading", tags=["trading"])

LEDGER_ERRORS = {
    409: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _request_item(request: SellRequest) -> SellRequestItem:
    return SellRequestItem(
        request_id=request.request_id,
        seller=request.seller,
        quantity=request.quantity,
        status=request.status.value,
        buyer=request.buyer,
        bids=[
            BidItem(bidder=b.bidder, amount=b.display_amount, confirmed=b.confirmed)
            for b in request.bids
        ],
    )


@router.post(
    "/session",
    response_model=SessionResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Connect a session",
    description="Bind the workflow to the wallet's active account.",
)
async def connect(
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> SessionResponse:
    session = await workflow.connect()
    return SessionResponse(account=session.account)


@router.delete(
    "/session",
    status_code=204,
    summary="Disconnect the session",
)
async def disconnect(
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> None:
    workflow.disconnect()


@router.get(
    "/holdings",
    response_model=HoldingResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Load holdings",
    description="Read the session account's share count from the ledger.",
)
async def load_holdings(
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> HoldingResponse:
    holding = await workflow.load_holdings()
    return HoldingResponse(account=holding.account, shares=holding.shares)


@router.post(
    "/buy",
    response_model=BuyResponse,
    responses={422: {"model": ErrorResponse}, **LEDGER_ERRORS},
    summary="Buy shares",
    description="Buy 1-5 shares at one display unit per share.",
)
@limiter.limit(MUTATING_RATE_LIMIT)
async def buy(
    request: Request,
    body: BuyRequest,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> BuyResponse:
    result = await workflow.buy(body.quantity)
    return BuyResponse(
        account=result.account,
        quantity=result.quantity,
        value=from_base_units(result.value),
        tx_hash=result.tx_hash,
    )


@router.post(
    "/sell",
    response_model=SellResponse,
    responses={400: {"model": ErrorResponse}, **LEDGER_ERRORS},
    summary="List shares for sale",
    description="Create a sell request bounded by the loaded holding.",
)
@limiter.limit(MUTATING_RATE_LIMIT)
async def sell(
    request: Request,
    body: SellRequestBody,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> SellResponse:
    result = await workflow.sell(body.quantity)
    return SellResponse(
        request_id=result.request_id, quantity=result.quantity, tx_hash=result.tx_hash
    )


@router.get(
    "/requests",
    response_model=SellRequestListResponse,
    responses={503: {"model": ErrorResponse}},
    summary="List my sell requests",
    description="Fetch the session account's sell requests with their bids.",
)
async def list_my_requests(
    include_closed: bool = False,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> SellRequestListResponse:
    requests = await workflow.list_my_requests(include_closed=include_closed)
    return SellRequestListResponse(requests=[_request_item(r) for r in requests])


@router.post(
    "/bids",
    response_model=PlaceBidResponse,
    responses={422: {"model": ErrorResponse}, **LEDGER_ERRORS},
    summary="Place a bid",
)
@limiter.limit(MUTATING_RATE_LIMIT)
async def place_bid(
    request: Request,
    body: PlaceBidRequest,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> PlaceBidResponse:
    result = await workflow.place_bid(body.request_id, body.amount)
    return PlaceBidResponse(
        request_id=result.request_id,
        bidder=result.bidder,
        amount=from_base_units(result.amount),
        tx_hash=result.tx_hash,
    )


@router.post(
    "/requests/{request_id}/confirm",
    response_model=TradeResponse,
    responses={400: {"model": ErrorResponse}, **LEDGER_ERRORS},
    summary="Confirm the buyer",
    description="Pick a bidder from the last listed bids as the buyer.",
)
@limiter.limit(MUTATING_RATE_LIMIT)
async def confirm_buyer(
    request: Request,
    request_id: int,
    body: ConfirmBuyerRequest,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> TradeResponse:
    trade = await workflow.confirm_buyer(request_id, body.bidder)
    return TradeResponse(
        trade_id=trade.trade_id,
        request_id=trade.request_id,
        buyer=trade.buyer,
        amount=trade.display_amount,
        status=trade.status.value,
    )


@router.post(
    "/trades/{trade_id}/payment",
    response_model=PaymentResponse,
    responses={422: {"model": ErrorResponse}, **LEDGER_ERRORS},
    summary="Pay for a trade",
)
@limiter.limit(MUTATING_RATE_LIMIT)
async def pay_for_trade(
    request: Request,
    trade_id: int,
    body: PaymentRequest,
    workflow: TradeWorkflow = Depends(get_trade_workflow),
) -> PaymentResponse:
    result = await workflow.pay_for_trade(trade_id, body.amount)
    return PaymentResponse(
        trade_id=result.trade_id,
        amount=from_base_units(result.amount),
        tx_hash=result.tx_hash,
    )
