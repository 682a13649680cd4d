"""
EventSpotter: event listings API with accounts and saved events.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - events: Listing, querying, ownership-guarded mutation, save/unsave.
    - accounts: Registration, login sessions, profile management.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (async SQLAlchemy, bcrypt) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
