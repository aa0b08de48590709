"""
Trade workflow: buy, list for sale, bid, confirm a buyer, pay.

Every operation follows the same shape: validate locally, submit one
ledger call, await its settlement, then reconcile the local view from
what the ledger reported. Local precondition failures never reach the
ledger. The cached holding and request list are only ever replaced by
fresh ledger reads.

Input: user intent through the public coroutine methods.
Output: DTOs and domain entities describing settled outcomes.
Failure cases: InvalidQuantityError, InsufficientHoldingError,
InvalidBidderError, InvalidAmountError, LedgerUnavailableError,
TransactionRejectedError.
"""

import logging
from typing import Awaitable, Optional

from sharetrade.application.trading.dtos import (
    BidResult,
    ListingResult,
    PaymentResult,
    PurchaseResult,
)
from sharetrade.domain.trading.entities import (
    Holding,
    SellRequest,
    Session,
    Trade,
    TransactionReceipt,
    same_address,
)
from sharetrade.domain.trading.errors import (
    InsufficientHoldingError,
    InvalidBidderError,
    InvalidQuantityError,
    LedgerUnavailableError,
    TransactionRejectedError,
)
from sharetrade.domain.trading.ports import (
    LedgerPort,
    PendingTransaction,
    WalletPort,
)
from sharetrade.domain.trading.units import to_base_units

logger = logging.getLogger(__name__)

MIN_BUY_QUANTITY = 1
MAX_BUY_QUANTITY = 5


def _is_quantity(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class TradeWorkflow:
    """Client-side driver of the share-trading state machine.

    Holds the active session, the cached holding and the most recently
    listed sell requests of the session account. A change of account in
    the wallet invalidates all of it; connect() must be called again.
    """

    def __init__(self, wallet: WalletPort, ledger: LedgerPort) -> None:
        self._wallet = wallet
        self._ledger = ledger
        self._session: Optional[Session] = None
        self._holding: Optional[Holding] = None
        self._requests: dict[int, SellRequest] = {}
        self._trades: dict[int, Trade] = {}

    # ------------------------------------------------------------------
    # Local view
    # ------------------------------------------------------------------

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def holding(self) -> Optional[Holding]:
        return self._holding

    @property
    def requests(self) -> tuple[SellRequest, ...]:
        return tuple(self._requests.values())

    @property
    def trades(self) -> tuple[Trade, ...]:
        return tuple(self._trades.values())

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def connect(self) -> Session:
        """Bind the workflow to the wallet's active account.

        Returns:
            The new session.

        Raises:
            LedgerUnavailableError: If the wallet exposes no account or
                its signer does not match the account.
        """
        accounts = await self._wallet.request_accounts()
        if not accounts:
            raise LedgerUnavailableError("wallet returned no accounts")
        account = accounts[0]

        signer = await self._wallet.get_signer()
        if not same_address(signer, account):
            raise LedgerUnavailableError("signer does not match the active account")

        self._clear()
        self._wallet.remove_listener(self._on_accounts_changed)
        self._wallet.on_accounts_changed(self._on_accounts_changed)
        self._session = Session(account=account)
        logger.info("Session connected: account=%s", account)
        return self._session

    def disconnect(self) -> None:
        """Drop the session and every cached view of the ledger."""
        self._wallet.remove_listener(self._on_accounts_changed)
        if self._session is not None:
            logger.info("Session disconnected: account=%s", self._session.account)
        self._clear()

    def _on_accounts_changed(self, accounts: list[str]) -> None:
        previous = self._session.account if self._session else None
        logger.warning(
            "Wallet account changed from %s to %s; session invalidated",
            previous,
            accounts[0] if accounts else None,
        )
        self.disconnect()

    def _clear(self) -> None:
        self._session = None
        self._holding = None
        self._requests = {}
        self._trades = {}

    def _require_session(self) -> Session:
        if self._session is None:
            raise LedgerUnavailableError("no active session")
        return self._session

    def _is_current(self, session: Session) -> bool:
        return self._session is session

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    async def _settle(
        self, submission: Awaitable[PendingTransaction], operation: str
    ) -> TransactionReceipt:
        pending = await submission
        logger.info("%s submitted: tx=%s", operation, pending.tx_hash)

        receipt = await pending.wait()
        if not receipt.succeeded:
            reason = receipt.reason or "rejected without reason"
            logger.warning(
                "%s rejected: tx=%s reason=%s", operation, receipt.tx_hash, reason
            )
            raise TransactionRejectedError(reason, tx_hash=receipt.tx_hash)

        logger.info("%s committed: tx=%s", operation, receipt.tx_hash)
        return receipt

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load_holdings(self) -> Holding:
        """Read the session account's share count from the ledger."""
        session = self._require_session()
        shares = await self._ledger.get_shares_owned(session.account)
        holding = Holding(account=session.account, shares=shares)
        if self._is_current(session):
            self._holding = holding
        logger.info("Holdings loaded: account=%s shares=%d", session.account, shares)
        return holding

    async def buy(self, quantity: int) -> PurchaseResult:
        """Buy 1-5 shares, paying one display unit per share.

        The cached holding is left untouched; call load_holdings() to see
        the new count.
        """
        session = self._require_session()
        if not _is_quantity(quantity) or not (
            MIN_BUY_QUANTITY <= quantity <= MAX_BUY_QUANTITY
        ):
            raise InvalidQuantityError(quantity, MIN_BUY_QUANTITY, MAX_BUY_QUANTITY)

        value = to_base_units(quantity)
        logger.info("Buying shares: account=%s quantity=%d", session.account, quantity)
        receipt = await self._settle(
            self._ledger.buy_shares(session.account, quantity, value), "buy"
        )
        return PurchaseResult(
            account=session.account,
            quantity=quantity,
            value=value,
            tx_hash=receipt.tx_hash,
        )

    async def sell(self, quantity: int) -> ListingResult:
        """List shares for sale, bounded by the cached holding.

        Raises:
            InvalidQuantityError: If quantity is below 1.
            InsufficientHoldingError: If quantity exceeds the cached holding
                (an unloaded holding counts as zero).
        """
        session = self._require_session()
        available = self._holding.shares if self._holding is not None else 0
        if not _is_quantity(quantity) or quantity < 1:
            raise InvalidQuantityError(quantity, 1, max(available, 1))
        if quantity > available:
            raise InsufficientHoldingError(quantity, available)

        logger.info("Listing shares: account=%s quantity=%d", session.account, quantity)
        receipt = await self._settle(
            self._ledger.create_sell_request(session.account, quantity), "sell"
        )
        if receipt.result is None:
            raise LedgerUnavailableError(
                f"ledger committed {receipt.tx_hash} without a request id"
            )
        return ListingResult(
            request_id=receipt.result, quantity=quantity, tx_hash=receipt.tx_hash
        )

    async def list_my_requests(self, include_closed: bool = False) -> list[SellRequest]:
        """Fetch the session account's sell requests and their bids.

        The full result replaces the cached request list consulted by
        confirm_buyer(). Only open requests are returned unless
        ``include_closed`` is set.
        """
        session = self._require_session()
        requests = await self._ledger.get_my_requests(session.account)
        if self._is_current(session):
            self._requests = {r.request_id: r for r in requests}
        logger.info(
            "Requests loaded: account=%s count=%d", session.account, len(requests)
        )
        if include_closed:
            return list(requests)
        return [r for r in requests if r.is_open]

    async def place_bid(self, request_id: int, amount: str) -> BidResult:
        """Bid a display amount on a sell request.

        Sufficiency of the amount and the request's state are for the
        ledger to decide.
        """
        session = self._require_session()
        value = to_base_units(amount)
        logger.info(
            "Placing bid: account=%s request=%s amount=%s",
            session.account,
            request_id,
            amount,
        )
        receipt = await self._settle(
            self._ledger.place_bid(session.account, request_id, value), "bid"
        )
        return BidResult(
            request_id=request_id,
            bidder=session.account,
            amount=value,
            tx_hash=receipt.tx_hash,
        )

    async def confirm_buyer(self, request_id: int, bidder: str) -> Trade:
        """Pick ``bidder`` as the buyer of one of the caller's requests.

        The bidder must appear in the bids last fetched by
        list_my_requests(). On success the trade is recorded and the
        request list is re-read from the ledger. The settled trade is
        returned even if that re-read fails; the previous request entry
        then stays cached until the next successful list_my_requests().

        Raises:
            InvalidBidderError: If the bidder is not in the cached bids.
            TransactionRejectedError: If the ledger declines the sale.
        """
        session = self._require_session()
        request = self._requests.get(request_id)
        bid = request.bid_from(bidder) if request is not None else None
        if bid is None:
            raise InvalidBidderError(request_id, bidder)

        logger.info("Confirming buyer: request=%s bidder=%s", request_id, bid.bidder)
        receipt = await self._settle(
            self._ledger.finalize_sale(session.account, request_id, bid.bidder),
            "confirm_buyer",
        )
        if receipt.result is None:
            raise LedgerUnavailableError(
                f"ledger committed {receipt.tx_hash} without a trade id"
            )

        trade = Trade(
            trade_id=receipt.result,
            request_id=request_id,
            buyer=bid.bidder,
            amount=bid.amount,
        )
        if self._is_current(session):
            self._trades[trade.trade_id] = trade
            try:
                await self.list_my_requests()
            except LedgerUnavailableError as exc:
                logger.warning(
                    "Trade %s committed but request list refresh failed: %s",
                    trade.trade_id,
                    exc.reason,
                )
        return trade

    async def pay_for_trade(self, trade_id: int, amount: str) -> PaymentResult:
        """Pay a display amount to settle a trade as its confirmed buyer.

        The amount is converted exactly as in buy(); a mismatch with the
        agreed price is rejected by the ledger, never adjusted here.
        """
        session = self._require_session()
        value = to_base_units(amount)
        logger.info("Paying for trade: trade=%s amount=%s", trade_id, amount)
        receipt = await self._settle(
            self._ledger.pay_for_trade(session.account, trade_id, value),
            "pay_for_trade",
        )
        if self._is_current(session) and trade_id in self._trades:
            self._trades[trade_id] = self._trades[trade_id].complete()
        return PaymentResult(trade_id=trade_id, amount=value, tx_hash=receipt.tx_hash)
