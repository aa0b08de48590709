"""
Application layer for the trading bounded context.

The trade workflow coordinates domain entities and ports to fulfill
buy, sell, bid, confirm-buyer and payment operations.
No framework or infrastructure imports allowed.
"""
