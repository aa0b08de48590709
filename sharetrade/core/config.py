"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, with no scattered magic strings.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        ledger_log_level: Level for ledger and wallet adapters; defaults to log_level.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_mutating: Rate limit for endpoints that submit transactions.
        ledger_backend: "memory" for the in-process ledger, "http" for the gateway.
        ledger_url: Base URL of the ledger gateway.
        ledger_timeout_seconds: HTTP timeout per gateway call.
        ledger_poll_interval_seconds: Delay between settlement polls.
        ledger_max_polls: Polls before a pending transaction is reported unavailable.
        wallet_account: Account address the wallet signs as.
        share_supply: Shares available for primary sale on the in-memory ledger.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "ShareTrade"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    ledger_log_level: Optional[str] = None
    rate_limit_default: str = "60/minute"
    rate_limit_mutating: str = "10/minute"

    # Ledger service
    ledger_backend: Literal["memory", "http"] = "memory"
    ledger_url: str = "http://localhost:8545"
    ledger_timeout_seconds: float = 10.0
    ledger_poll_interval_seconds: float = 1.0
    ledger_max_polls: int = 120
    share_supply: int = 1_000

    # Wallet
    wallet_account: Optional[str] = None


settings = Settings()
