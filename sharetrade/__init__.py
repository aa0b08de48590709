"""
ShareTrade: peer-brokered marketplace for tokenized company shares.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - trading: Buying, listing, bidding on and settling share trades.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: The trade workflow, DTOs, orchestration.
    - infrastructure: Adapters (ledger service, wallet) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
