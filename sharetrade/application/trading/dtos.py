"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PurchaseResult:
    """Output DTO for a settled share purchase.

    Attributes:
        account: Buying account.
        quantity: Number of shares bought.
        value: Amount paid in base units.
        tx_hash: Ledger transaction identifier.
    """

    account: str
    quantity: int
    value: int
    tx_hash: str


@dataclass(frozen=True)
class ListingResult:
    """Output DTO for a settled sell listing.

    Attributes:
        request_id: Ledger-assigned sell request id.
        quantity: Number of shares listed.
        tx_hash: Ledger transaction identifier.
    """

    request_id: int
    quantity: int
    tx_hash: str


@dataclass(frozen=True)
class BidResult:
    """Output DTO for a settled bid.

    Attributes:
        request_id: The sell request bid on.
        bidder: Bidding account.
        amount: Offered value in base units.
        tx_hash: Ledger transaction identifier.
    """

    request_id: int
    bidder: str
    amount: int
    tx_hash: str


@dataclass(frozen=True)
class PaymentResult:
    """Output DTO for a settled trade payment.

    Attributes:
        trade_id: The trade paid for.
        amount: Value paid in base units.
        tx_hash: Ledger transaction identifier.
    """

    trade_id: int
    amount: int
    tx_hash: str
