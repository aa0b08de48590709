"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.

Sell requests and trades are immutable records: a state change returns
a new record, and only the transitions listed in the transition tables
below are legal.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from sharetrade.domain.trading.errors import InvalidTransitionError
from sharetrade.domain.trading.units import from_base_units


class RequestStatus(Enum):
    """Lifecycle of a sell request."""

    OPEN = "open"
    BUYER_CONFIRMED = "buyer_confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TradeStatus(Enum):
    """Lifecycle of a trade created by confirming a buyer."""

    BUYER_CONFIRMED = "buyer_confirmed"
    COMPLETED = "completed"


_REQUEST_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.OPEN: frozenset(
        {RequestStatus.BUYER_CONFIRMED, RequestStatus.CANCELLED}
    ),
    RequestStatus.BUYER_CONFIRMED: frozenset({RequestStatus.COMPLETED}),
    RequestStatus.COMPLETED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}

_TRADE_TRANSITIONS: dict[TradeStatus, frozenset[TradeStatus]] = {
    TradeStatus.BUYER_CONFIRMED: frozenset({TradeStatus.COMPLETED}),
    TradeStatus.COMPLETED: frozenset(),
}


def same_address(left: str, right: str) -> bool:
    """Compare two account addresses ignoring checksum casing."""
    return left.strip().lower() == right.strip().lower()


@dataclass(frozen=True)
class Session:
    """Binding between a connected account and the workflow."""

    account: str


@dataclass(frozen=True)
class Holding:
    """Share count owned by an account, as last read from the ledger."""

    account: str
    shares: int


@dataclass(frozen=True)
class Bid:
    """An offer against a sell request.

    Attributes:
        request_id: The sell request this bid targets.
        bidder: Address of the bidding account.
        amount: Offered value in base units.
        confirmed: True once the seller picked this bidder.
    """

    request_id: int
    bidder: str
    amount: int
    confirmed: bool = False

    @property
    def display_amount(self) -> str:
        return from_base_units(self.amount)


@dataclass(frozen=True)
class SellRequest:
    """A seller's offer of a quantity of shares."""

    request_id: int
    seller: str
    quantity: int
    status: RequestStatus = RequestStatus.OPEN
    bids: tuple[Bid, ...] = field(default_factory=tuple)
    buyer: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status is RequestStatus.OPEN

    def bid_from(self, bidder: str) -> Optional[Bid]:
        """Return the latest bid placed by ``bidder``, or None."""
        for bid in reversed(self.bids):
            if same_address(bid.bidder, bidder):
                return bid
        return None

    def _move(self, target: RequestStatus, **changes) -> "SellRequest":
        if target not in _REQUEST_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"sell request {self.request_id}", self.status.value, target.value
            )
        return replace(self, status=target, **changes)

    def with_bid(self, bid: Bid) -> "SellRequest":
        """Return a copy carrying ``bid``. Only open requests accept bids."""
        if not self.is_open:
            raise InvalidTransitionError(
                f"sell request {self.request_id}", self.status.value, "bid"
            )
        return replace(self, bids=self.bids + (bid,))

    def confirm_buyer(self, bidder: str) -> "SellRequest":
        """Move OPEN -> BUYER_CONFIRMED and flag the winning bid."""
        winning = self.bid_from(bidder)
        if winning is None:
            raise InvalidTransitionError(
                f"sell request {self.request_id}",
                self.status.value,
                f"{RequestStatus.BUYER_CONFIRMED.value} (no bid from {bidder})",
            )
        bids = tuple(
            replace(b, confirmed=True) if b is winning else b for b in self.bids
        )
        return self._move(
            RequestStatus.BUYER_CONFIRMED, bids=bids, buyer=winning.bidder
        )

    def complete(self) -> "SellRequest":
        return self._move(RequestStatus.COMPLETED)


@dataclass(frozen=True)
class Trade:
    """The realized transaction after a buyer is confirmed.

    Attributes:
        trade_id: Ledger-assigned trade identifier.
        request_id: The sell request the trade settles.
        buyer: Address of the confirmed buyer.
        amount: Agreed price in base units.
        status: BUYER_CONFIRMED until paid, then COMPLETED.
    """

    trade_id: int
    request_id: int
    buyer: str
    amount: int
    status: TradeStatus = TradeStatus.BUYER_CONFIRMED

    @property
    def display_amount(self) -> str:
        return from_base_units(self.amount)

    def complete(self) -> "Trade":
        if TradeStatus.COMPLETED not in _TRADE_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"trade {self.trade_id}",
                self.status.value,
                TradeStatus.COMPLETED.value,
            )
        return replace(self, status=TradeStatus.COMPLETED)


@dataclass(frozen=True)
class TransactionReceipt:
    """Settlement outcome of a submitted ledger transaction.

    Attributes:
        tx_hash: Ledger transaction identifier.
        succeeded: True if committed, False if rejected.
        result: Ledger-assigned id produced by the call (request or trade id).
        reason: Ledger-reported rejection reason.
    """

    tx_hash: str
    succeeded: bool
    result: Optional[int] = None
    reason: Optional[str] = None
