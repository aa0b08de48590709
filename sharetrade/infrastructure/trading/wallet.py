"""
Adapter: Wallet bound to a configured account.

Implements WalletPort.
Server-side stand-in for a browser wallet: exposes one account,
signs as that account, and notifies listeners when the account is switched.
"""

import logging
from typing import Optional

from sharetrade.domain.trading.errors import LedgerUnavailableError
from sharetrade.domain.trading.ports import AccountsChangedListener, WalletPort

logger = logging.getLogger(__name__)


class ConfiguredWallet(WalletPort):
    """Wallet holding a single account chosen by configuration."""

    def __init__(self, account: Optional[str] = None) -> None:
        self._account = account
        self._listeners: list[AccountsChangedListener] = []

    @property
    def account(self) -> Optional[str]:
        return self._account

    async def request_accounts(self) -> list[str]:
        return [self._account] if self._account else []

    def on_accounts_changed(self, listener: AccountsChangedListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: AccountsChangedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def get_signer(self) -> str:
        if not self._account:
            raise LedgerUnavailableError("wallet has no signing account")
        return self._account

    def switch_account(self, account: Optional[str]) -> None:
        """Replace the active account and notify every listener."""
        if account == self._account:
            return
        logger.info("Wallet account switched: %s -> %s", self._account, account)
        self._account = account
        accounts = [account] if account else []
        # listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(accounts)
