"""
Adapter: Ledger service gateway over HTTP.

Implements LedgerPort against a JSON gateway in front of the ledger:

    GET  /accounts/{account}/shares      -> {"shares": 3}
    GET  /accounts/{account}/requests    -> {"requests": [...]}
    POST /transactions/{operation}       -> {"tx_hash": "0x..."}
    GET  /transactions/{tx_hash}         -> {"status": "pending" | "committed"
                                              | "rejected", "result": ...,
                                              "reason": ...}

Base-unit values travel as decimal strings because they exceed the
range of JSON numbers. Transport failures become LedgerUnavailableError;
rejections become TransactionRejectedError with the gateway's reason.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from sharetrade.domain.trading.entities import (
    Bid,
    RequestStatus,
    SellRequest,
    TransactionReceipt,
)
from sharetrade.domain.trading.errors import (
    LedgerUnavailableError,
    TransactionRejectedError,
)
from sharetrade.domain.trading.ports import LedgerPort, PendingTransaction

logger = logging.getLogger(__name__)

HTTP_REJECTED = (400, 403, 409, 422)

STATUS_PENDING = "pending"
STATUS_COMMITTED = "committed"
STATUS_REJECTED = "rejected"


def _parse_request(raw: dict[str, Any]) -> SellRequest:
    """Build a SellRequest entity from its gateway representation."""
    request_id = int(raw["request_id"])
    bids = tuple(
        Bid(
            request_id=request_id,
            bidder=b["bidder"],
            amount=int(b["amount"]),
            confirmed=bool(b.get("confirmed", False)),
        )
        for b in raw.get("bids", [])
    )
    return SellRequest(
        request_id=request_id,
        seller=raw["seller"],
        quantity=int(raw["quantity"]),
        status=RequestStatus(raw.get("status", RequestStatus.OPEN.value)),
        bids=bids,
        buyer=raw.get("buyer"),
    )


class _GatewayTransaction(PendingTransaction):
    """Pending transaction tracked by polling the gateway."""

    def __init__(self, adapter: "HttpLedgerAdapter", tx_hash: str) -> None:
        self._adapter = adapter
        self._tx_hash = tx_hash

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    async def wait(self) -> TransactionReceipt:
        return await self._adapter.wait_for(self._tx_hash)


class HttpLedgerAdapter(LedgerPort):
    """Concrete adapter for the ledger service gateway.

    Args:
        base_url: Gateway root URL.
        timeout: HTTP timeout in seconds per call.
        poll_interval: Seconds between settlement polls.
        max_polls: Polls before giving up on a pending transaction.
        transport: Optional httpx transport (tests inject a MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        poll_interval: float = 1.0,
        max_polls: int = 120,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._max_polls = max_polls
        self._transport = transport

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _call(
        self, method: str, path: str, payload: Optional[dict] = None
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(
                    method,
                    path,
                    json=payload,
                    headers={"X-ShareTrade-Client": "workflow"},
                )
        except httpx.HTTPError as exc:
            logger.error("Ledger gateway unreachable: %s %s: %s", method, path, exc)
            raise LedgerUnavailableError(str(exc) or type(exc).__name__) from exc

        if resp.status_code in HTTP_REJECTED:
            reason = self._reason(resp)
            logger.warning("Ledger gateway rejected %s %s: %s", method, path, reason)
            raise TransactionRejectedError(reason)
        if resp.status_code >= 400:
            raise LedgerUnavailableError(
                f"gateway returned HTTP {resp.status_code} for {method} {path}"
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise LedgerUnavailableError("gateway returned invalid JSON") from exc

    @staticmethod
    def _reason(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text or f"HTTP {resp.status_code}"
        if isinstance(body, dict):
            return str(body.get("reason") or body.get("detail") or body)
        return str(body)

    async def _submit(self, operation: str, payload: dict) -> PendingTransaction:
        data = await self._call("POST", f"/transactions/{operation}", payload)
        tx_hash = data.get("tx_hash")
        if not tx_hash:
            raise LedgerUnavailableError(f"gateway accepted {operation} without a tx hash")
        return _GatewayTransaction(self, tx_hash)

    async def wait_for(self, tx_hash: str) -> TransactionReceipt:
        """Poll the gateway until the transaction is committed or rejected."""
        for _ in range(self._max_polls):
            data = await self._call("GET", f"/transactions/{tx_hash}")
            status = data.get("status", STATUS_PENDING)
            if status == STATUS_COMMITTED:
                result = data.get("result")
                return TransactionReceipt(
                    tx_hash=tx_hash,
                    succeeded=True,
                    result=int(result) if result is not None else None,
                )
            if status == STATUS_REJECTED:
                return TransactionReceipt(
                    tx_hash=tx_hash,
                    succeeded=False,
                    reason=data.get("reason"),
                )
            await asyncio.sleep(self._poll_interval)

        raise LedgerUnavailableError(
            f"transaction {tx_hash} not settled after {self._max_polls} polls"
        )

    # ------------------------------------------------------------------
    # LedgerPort
    # ------------------------------------------------------------------

    async def get_shares_owned(self, account: str) -> int:
        data = await self._call("GET", f"/accounts/{account}/shares")
        return int(data["shares"])

    async def get_my_requests(self, account: str) -> list[SellRequest]:
        data = await self._call("GET", f"/accounts/{account}/requests")
        return [_parse_request(r) for r in data.get("requests", [])]

    async def buy_shares(
        self, account: str, quantity: int, value: int
    ) -> PendingTransaction:
        return await self._submit(
            "buy_shares", {"from": account, "quantity": quantity, "value": str(value)}
        )

    async def create_sell_request(
        self, account: str, quantity: int
    ) -> PendingTransaction:
        return await self._submit(
            "create_sell_request", {"from": account, "quantity": quantity}
        )

    async def place_bid(
        self, account: str, request_id: int, amount: int
    ) -> PendingTransaction:
        return await self._submit(
            "place_bid",
            {"from": account, "request_id": request_id, "amount": str(amount)},
        )

    async def finalize_sale(
        self, account: str, request_id: int, bidder: str
    ) -> PendingTransaction:
        return await self._submit(
            "finalize_sale",
            {"from": account, "request_id": request_id, "bidder": bidder},
        )

    async def pay_for_trade(
        self, account: str, trade_id: int, value: int
    ) -> PendingTransaction:
        return await self._submit(
            "pay_for_trade",
            {"from": account, "trade_id": trade_id, "value": str(value)},
        )
