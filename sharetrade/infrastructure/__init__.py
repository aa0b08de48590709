"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer. This is where the ledger service
gateway, the wallet and other external integrations live.
"""
