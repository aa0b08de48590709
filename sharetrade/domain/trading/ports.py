"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

All ledger values are integers in base units. Adapters translate
transport failures into LedgerUnavailableError and ledger-side
rejections into TransactionRejectedError.
"""

from abc import ABC, abstractmethod
from typing import Callable

from sharetrade.domain.trading.entities import SellRequest, TransactionReceipt

AccountsChangedListener = Callable[[list[str]], None]


class PendingTransaction(ABC):
    """Handle for a transaction accepted by the ledger but not yet final."""

    @property
    @abstractmethod
    def tx_hash(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def wait(self) -> TransactionReceipt:
        """Suspend until the ledger commits or rejects the transaction.

        Returns:
            The settled receipt. A rejected transaction is returned with
            ``succeeded=False`` and the ledger's reason.
        """
        raise NotImplementedError


class WalletPort(ABC):
    """Port for the wallet/signer collaborator that owns account identity."""

    @abstractmethod
    async def request_accounts(self) -> list[str]:
        """Ask the wallet for the accounts the user authorizes."""
        raise NotImplementedError

    @abstractmethod
    def on_accounts_changed(self, listener: AccountsChangedListener) -> None:
        """Register a listener fired whenever the active account changes."""
        raise NotImplementedError

    @abstractmethod
    def remove_listener(self, listener: AccountsChangedListener) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_signer(self) -> str:
        """Return the address that signs submitted transactions."""
        raise NotImplementedError


class LedgerPort(ABC):
    """Port for the external ledger service.

    Reads return values directly. Mutating calls return a
    PendingTransaction once the ledger has accepted the submission.
    """

    @abstractmethod
    async def get_shares_owned(self, account: str) -> int:
        """Return the share count owned by ``account``."""
        raise NotImplementedError

    @abstractmethod
    async def buy_shares(
        self, account: str, quantity: int, value: int
    ) -> PendingTransaction:
        """Submit a primary share purchase carrying ``value`` base units."""
        raise NotImplementedError

    @abstractmethod
    async def create_sell_request(
        self, account: str, quantity: int
    ) -> PendingTransaction:
        """List ``quantity`` shares for sale.

        The settled receipt's ``result`` carries the new request id.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_my_requests(self, account: str) -> list[SellRequest]:
        """Return the sell requests owned by ``account`` with their bids."""
        raise NotImplementedError

    @abstractmethod
    async def place_bid(
        self, account: str, request_id: int, amount: int
    ) -> PendingTransaction:
        """Bid ``amount`` base units on a sell request."""
        raise NotImplementedError

    @abstractmethod
    async def finalize_sale(
        self, account: str, request_id: int, bidder: str
    ) -> PendingTransaction:
        """Confirm ``bidder`` as the buyer of a request.

        The settled receipt's ``result`` carries the new trade id.
        """
        raise NotImplementedError

    @abstractmethod
    async def pay_for_trade(
        self, account: str, trade_id: int, value: int
    ) -> PendingTransaction:
        """Pay ``value`` base units to settle a trade."""
        raise NotImplementedError
