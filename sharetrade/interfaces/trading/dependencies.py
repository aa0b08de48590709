"""
Dependency injection for the trading bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into the trade workflow via constructor injection.
These are the composition root for the trading context.

The workflow holds the session and the cached ledger view, so one
instance is shared by every request of the process.
"""

from functools import lru_cache

from sharetrade.application.trading.workflow import TradeWorkflow
from sharetrade.core.config import settings
from sharetrade.domain.trading.ports import LedgerPort
from sharetrade.infrastructure.trading.http_ledger import HttpLedgerAdapter
from sharetrade.infrastructure.trading.memory_ledger import InMemoryLedger
from sharetrade.infrastructure.trading.wallet import ConfiguredWallet


def build_ledger() -> LedgerPort:
    """Build the ledger adapter selected by ``settings.ledger_backend``."""
    if settings.ledger_backend == "http":
        return HttpLedgerAdapter(
            base_url=settings.ledger_url,
            timeout=settings.ledger_timeout_seconds,
            poll_interval=settings.ledger_poll_interval_seconds,
            max_polls=settings.ledger_max_polls,
        )
    return InMemoryLedger(share_supply=settings.share_supply)


@lru_cache(maxsize=1)
def get_wallet() -> ConfiguredWallet:
    """Return the process-wide wallet bound to the configured account."""
    return ConfiguredWallet(account=settings.wallet_account)


@lru_cache(maxsize=1)
def get_trade_workflow() -> TradeWorkflow:
    """Return the process-wide TradeWorkflow."""
    return TradeWorkflow(wallet=get_wallet(), ledger=build_ledger())
