"""
Adapter: In-memory ledger service.

Implements LedgerPort.
Keeps share ownership, sell requests, bids and trades in process memory
and enforces the marketplace contract rules. Used for local development
and tests; production deployments point at the ledger gateway instead.

Submitted transactions are queued and settled strictly in submission
order when any of them is awaited.
"""

import asyncio
import itertools
import logging
from collections import deque
from typing import Callable, Optional

from sharetrade.domain.trading.entities import (
    Bid,
    SellRequest,
    Trade,
    TradeStatus,
    TransactionReceipt,
    same_address,
)
from sharetrade.domain.trading.ports import LedgerPort, PendingTransaction
from sharetrade.domain.trading.units import BASE_UNITS_PER_DISPLAY_UNIT

logger = logging.getLogger(__name__)

DEFAULT_SHARE_SUPPLY = 1_000
MAX_SHARES_PER_PURCHASE = 5
SHARE_PRICE = BASE_UNITS_PER_DISPLAY_UNIT


class _Revert(Exception):
    """Contract rule violation; aborts the transaction with a reason."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class _QueuedTransaction(PendingTransaction):
    """Transaction waiting in the ledger's settlement queue."""

    def __init__(
        self,
        ledger: "InMemoryLedger",
        tx_hash: str,
        apply: Callable[[], Optional[int]],
    ) -> None:
        self._ledger = ledger
        self._tx_hash = tx_hash
        self.apply = apply

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    async def wait(self) -> TransactionReceipt:
        return await self._ledger._settle_through(self._tx_hash)


class InMemoryLedger(LedgerPort):
    """Process-local ledger enforcing the share marketplace rules.

    Rules:
        - Primary purchases cost one display unit per share, 1-5 shares
          per purchase, bounded by the remaining supply.
        - Listed shares are escrowed out of the seller's holding.
        - Bids are accepted only on open requests, never from the seller.
        - Only the seller may confirm a buyer, and only among its bidders.
        - Only the confirmed buyer may pay, and only the agreed amount.
        - Payment moves the escrowed shares to the buyer and credits the
          seller's balance.
    """

    def __init__(self, share_supply: int = DEFAULT_SHARE_SUPPLY) -> None:
        self._supply = share_supply
        self._holdings: dict[str, int] = {}
        self._balances: dict[str, int] = {}
        self._requests: dict[int, SellRequest] = {}
        self._trades: dict[int, Trade] = {}
        self._queue: deque[_QueuedTransaction] = deque()
        self._receipts: dict[str, TransactionReceipt] = {}
        self._tx_counter = itertools.count(1)
        self._request_ids = itertools.count(1)
        self._trade_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(self._key(account), 0)

    def get_request(self, request_id: int) -> Optional[SellRequest]:
        return self._requests.get(request_id)

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        return self._trades.get(trade_id)

    @staticmethod
    def _key(account: str) -> str:
        return account.strip().lower()

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    def _submit(self, apply: Callable[[], Optional[int]]) -> _QueuedTransaction:
        tx_hash = f"0x{next(self._tx_counter):064x}"
        tx = _QueuedTransaction(self, tx_hash, apply)
        self._queue.append(tx)
        return tx

    async def _settle_through(self, tx_hash: str) -> TransactionReceipt:
        await asyncio.sleep(0)
        while tx_hash not in self._receipts:
            tx = self._queue.popleft()
            try:
                result = tx.apply()
            except _Revert as exc:
                logger.info("Ledger reverted %s: %s", tx.tx_hash, exc.reason)
                receipt = TransactionReceipt(
                    tx_hash=tx.tx_hash, succeeded=False, reason=exc.reason
                )
            else:
                receipt = TransactionReceipt(
                    tx_hash=tx.tx_hash, succeeded=True, result=result
                )
            self._receipts[tx.tx_hash] = receipt
        return self._receipts[tx_hash]

    # ------------------------------------------------------------------
    # LedgerPort
    # ------------------------------------------------------------------

    async def get_shares_owned(self, account: str) -> int:
        return self._holdings.get(self._key(account), 0)

    async def get_my_requests(self, account: str) -> list[SellRequest]:
        return [
            r for r in self._requests.values() if same_address(r.seller, account)
        ]

    async def buy_shares(
        self, account: str, quantity: int, value: int
    ) -> PendingTransaction:
        def apply() -> None:
            if not 1 <= quantity <= MAX_SHARES_PER_PURCHASE:
                raise _Revert("Allowed share - 1 -> 5")
            if value != quantity * SHARE_PRICE:
                raise _Revert("Incorrect payment amount")
            if quantity > self._supply:
                raise _Revert("Not enough shares available")
            key = self._key(account)
            self._supply -= quantity
            self._holdings[key] = self._holdings.get(key, 0) + quantity

        return self._submit(apply)

    async def create_sell_request(
        self, account: str, quantity: int
    ) -> PendingTransaction:
        def apply() -> int:
            key = self._key(account)
            if quantity < 1:
                raise _Revert("Quantity must be positive")
            if quantity > self._holdings.get(key, 0):
                raise _Revert("Insufficient shares")
            self._holdings[key] -= quantity
            request_id = next(self._request_ids)
            self._requests[request_id] = SellRequest(
                request_id=request_id, seller=account, quantity=quantity
            )
            return request_id

        return self._submit(apply)

    def _open_request(self, request_id: int) -> SellRequest:
        request = self._requests.get(request_id)
        if request is None:
            raise _Revert("Request does not exist")
        if not request.is_open:
            raise _Revert("Request is not open")
        return request

    async def place_bid(
        self, account: str, request_id: int, amount: int
    ) -> PendingTransaction:
        def apply() -> None:
            request = self._open_request(request_id)
            if same_address(request.seller, account):
                raise _Revert("Seller cannot bid on own request")
            if amount <= 0:
                raise _Revert("Bid amount must be positive")
            self._requests[request_id] = request.with_bid(
                Bid(request_id=request_id, bidder=account, amount=amount)
            )

        return self._submit(apply)

    async def finalize_sale(
        self, account: str, request_id: int, bidder: str
    ) -> PendingTransaction:
        def apply() -> int:
            request = self._open_request(request_id)
            if not same_address(request.seller, account):
                raise _Revert("Only the seller can confirm a buyer")
            bid = request.bid_from(bidder)
            if bid is None:
                raise _Revert("Bidder has not bid on this request")
            self._requests[request_id] = request.confirm_buyer(bidder)
            trade_id = next(self._trade_ids)
            self._trades[trade_id] = Trade(
                trade_id=trade_id,
                request_id=request_id,
                buyer=bid.bidder,
                amount=bid.amount,
            )
            return trade_id

        return self._submit(apply)

    async def pay_for_trade(
        self, account: str, trade_id: int, value: int
    ) -> PendingTransaction:
        def apply() -> None:
            trade = self._trades.get(trade_id)
            if trade is None:
                raise _Revert("Trade does not exist")
            if trade.status is not TradeStatus.BUYER_CONFIRMED:
                raise _Revert("Trade is not payable")
            if not same_address(trade.buyer, account):
                raise _Revert("Only the confirmed buyer can pay")
            if value != trade.amount:
                raise _Revert("Incorrect payment amount")

            request = self._requests[trade.request_id]
            buyer, seller = self._key(trade.buyer), self._key(request.seller)
            self._trades[trade_id] = trade.complete()
            self._requests[trade.request_id] = request.complete()
            self._holdings[buyer] = self._holdings.get(buyer, 0) + request.quantity
            self._balances[seller] = self._balances.get(seller, 0) + value

        return self._submit(apply)

