"""
Application layer - Use cases and orchestration for the petition registry.

This layer contains:
- The petition lifecycle service (validate -> index -> store sequencing)
- Port definitions (abstract interfaces for infrastructure)
- Service logging conventions

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""
