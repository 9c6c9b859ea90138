"""
Infrastructure layer - Adapters for the petition registry.

This layer contains:
- Persistence adapters (PostgreSQL via SQLAlchemy)
- In-memory stubs for development and testing
- Observability (structured logging, correlation ids)

IMPORT RULES:
- CAN import from: application (ports), domain
- CANNOT import from: api
"""
