"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain and application layers must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class TradingDomainError(Exception):
    """Base error for all trading domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidQuantityError(TradingDomainError):
    """Raised when a buy or sell quantity is outside the allowed range."""

    def __init__(self, quantity: int, minimum: int, maximum: int) -> None:
        super().__init__(
            f"Invalid quantity: {quantity}. Must be between {minimum} and {maximum}."
        )
        self.quantity = quantity
        self.minimum = minimum
        self.maximum = maximum


class InsufficientHoldingError(TradingDomainError):
    """Raised when a sell quantity exceeds the cached share holding."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient holding: requested {requested}, available {available}"
        )
        self.requested = requested
        self.available = available


class InvalidBidderError(TradingDomainError):
    """Raised when a bidder is absent from the listed bids of a request."""

    def __init__(self, request_id: int, bidder: str) -> None:
        super().__init__(f"Invalid bidder {bidder} for request {request_id}")
        self.request_id = request_id
        self.bidder = bidder


class InvalidAmountError(TradingDomainError):
    """Raised when a display amount cannot be converted to base units."""

    def __init__(self, amount: object) -> None:
        super().__init__(f"Invalid amount: {amount!r}")
        self.amount = amount


class InvalidTransitionError(TradingDomainError):
    """Raised when a sell request or trade is moved out of order."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"Cannot move {entity} from {current} to {target}")
        self.entity = entity
        self.current = current
        self.target = target


class LedgerUnavailableError(TradingDomainError):
    """Raised when there is no active session or the ledger cannot be reached."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Ledger unavailable: {reason}")
        self.reason = reason


class TransactionRejectedError(TradingDomainError):
    """Raised when the ledger declines a submitted transaction.

    The ledger's reason string is kept verbatim on ``reason``.
    """

    def __init__(self, reason: str, tx_hash: str | None = None) -> None:
        super().__init__(f"Transaction rejected: {reason}")
        self.reason = reason
        self.tx_hash = tx_hash
