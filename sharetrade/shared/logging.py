"""
Logging setup for ShareTrade.

Every record carries the logger name, so workflow, ledger adapter and
wallet output can be told apart in one stream. Ledger adapters log each
submission, settlement poll and rejection; their verbosity can be set
separately from the application level.

Account addresses, transaction hashes and amounts are logged. Signer
material and raw gateway payloads are not.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEDGER_LOGGER = "sharetrade.infrastructure.trading"
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _to_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(level: str = "INFO", ledger_level: Optional[str] = None) -> None:
    """Install the root handler and per-component levels.

    Args:
        level: Application log level (DEBUG, INFO, WARNING, ERROR).
        ledger_level: Level for the ledger and wallet adapters. Falls back
            to ``level`` when unset.
    """
    logging.basicConfig(
        level=_to_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger(LEDGER_LOGGER).setLevel(_to_level(ledger_level or level))

    # one line per request/connection otherwise
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
