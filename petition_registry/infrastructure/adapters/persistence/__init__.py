"""PostgreSQL persistence adapters."""

from petition_registry.infrastructure.adapters.persistence.registry_repository import (
    PostgresRegistryRepository,
)

__all__ = ["PostgresRegistryRepository"]
