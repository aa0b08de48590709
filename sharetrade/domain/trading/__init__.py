"""
Trading bounded context, domain layer.

This module contains all domain logic for the trading context:
- Holdings, sell requests, bids and trades
- Sell request / trade state transitions
- Display-unit to base-unit value conversion
- Ports to the wallet and the external ledger service
"""
