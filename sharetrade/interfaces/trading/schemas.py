"""
Pydantic schemas for trading API request/response validation.

These schemas enforce input validation and define the API contract.
Amounts are exchanged as decimal strings in display units so that no
precision is lost on the way to base units.
No business logic belongs here.
"""

from pydantic import BaseModel, Field

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
AMOUNT_PATTERN = r"^\d+(\.\d+)?$"
AMOUNT_DESCRIPTION = "Amount in display units, e.g. '1.5'"


class SessionResponse(BaseModel):
    """The connected account."""

    account: str


class HoldingResponse(BaseModel):
    """Share count of the session account."""

    account: str
    shares: int


class BuyRequest(BaseModel):
    """Request schema for buying shares.

    Range checks are left to the workflow so that out-of-range
    quantities surface as domain errors.
    """

    quantity: int = Field(..., description="Number of shares to buy (1-5)")


class BuyResponse(BaseModel):
    account: str
    quantity: int
    value: str = Field(..., description="Amount paid, in display units")
    tx_hash: str


class SellRequestBody(BaseModel):
    """Request schema for listing shares for sale."""

    quantity: int = Field(..., description="Number of shares to list")


class SellResponse(BaseModel):
    request_id: int
    quantity: int
    tx_hash: str


class BidItem(BaseModel):
    """A bid as shown to the seller."""

    bidder: str
    amount: str
    confirmed: bool


class SellRequestItem(BaseModel):
    """A sell request with its bids."""

    request_id: int
    seller: str
    quantity: int
    status: str
    buyer: str | None = None
    bids: list[BidItem]


class SellRequestListResponse(BaseModel):
    requests: list[SellRequestItem]


class PlaceBidRequest(BaseModel):
    """Request schema for bidding on a sell request."""

    request_id: int = Field(..., ge=0, description="Sell request to bid on")
    amount: str = Field(..., pattern=AMOUNT_PATTERN, description=AMOUNT_DESCRIPTION)


class PlaceBidResponse(BaseModel):
    request_id: int
    bidder: str
    amount: str
    tx_hash: str


class ConfirmBuyerRequest(BaseModel):
    """Request schema for confirming the winning bidder."""

    bidder: str = Field(..., pattern=ADDRESS_PATTERN, description="Bidder address")


class TradeResponse(BaseModel):
    trade_id: int
    request_id: int
    buyer: str
    amount: str
    status: str


class PaymentRequest(BaseModel):
    """Request schema for paying for a trade."""

    amount: str = Field(..., pattern=AMOUNT_PATTERN, description=AMOUNT_DESCRIPTION)


class PaymentResponse(BaseModel):
    trade_id: int
    amount: str
    tx_hash: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    ledger_backend: str
    connected: bool


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
