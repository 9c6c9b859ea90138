"""Bootstrap wiring for petition registry dependencies.

Selection rules:
- Persistence: PostgreSQL when DATABASE_URL is set, else in-memory stub
- Fee settlement: recording stub (transfers are logged, not executed)
- Block height: wall clock (Unix seconds, never decreasing)

Every getter builds its singleton on first use. Tests replace them with
the set_* functions and restore defaults with
reset_petition_registry_dependencies().
"""

from __future__ import annotations

import os

from structlog import get_logger

from petition_registry.application.ports.block_height import BlockHeightProtocol
from petition_registry.application.ports.fee_settlement import FeeSettlementProtocol
from petition_registry.application.ports.registry_persistence import (
    RegistryPersistenceProtocol,
)
from petition_registry.application.services.block_height_service import (
    WallClockBlockHeightService,
)
from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)
from petition_registry.config.registry_config import RegistryConfig
from petition_registry.domain.models.registry_store import RegistryStore
from petition_registry.infrastructure.stubs.fee_settlement_stub import (
    FeeSettlementStub,
)
from petition_registry.infrastructure.stubs.registry_persistence_stub import (
    RegistryPersistenceStub,
)

logger = get_logger()

_registry_config: RegistryConfig | None = None
_registry_persistence: RegistryPersistenceProtocol | None = None
_fee_settlement: FeeSettlementProtocol | None = None
_block_height: BlockHeightProtocol | None = None
_petition_registry_service: PetitionRegistryService | None = None


def get_registry_config() -> RegistryConfig:
    """Get registry configuration."""
    global _registry_config
    if _registry_config is None:
        _registry_config = RegistryConfig.from_environment()
    return _registry_config


def get_registry_persistence() -> RegistryPersistenceProtocol:
    """Get registry persistence instance.

    Returns the PostgreSQL repository if DATABASE_URL is configured,
    otherwise the in-memory stub.
    """
    global _registry_persistence
    if _registry_persistence is None:
        initial = get_registry_config().initial_configuration()
        if os.environ.get("DATABASE_URL"):
            from petition_registry.bootstrap.database import get_session_factory
            from petition_registry.infrastructure.adapters.persistence.registry_repository import (
                PostgresRegistryRepository,
            )

            _registry_persistence = PostgresRegistryRepository(
                session_factory=get_session_factory(),
                initial_configuration=initial,
            )
            logger.info(
                "registry_persistence_initialized",
                repository_type="PostgreSQL",
            )
        else:
            logger.warning(
                "registry_persistence_initialized",
                repository_type="InMemoryStub",
                message="DATABASE_URL not set - registry state will not persist",
            )
            _registry_persistence = RegistryPersistenceStub(initial_configuration=initial)
    return _registry_persistence


def get_fee_settlement() -> FeeSettlementProtocol:
    """Get fee settlement instance."""
    global _fee_settlement
    if _fee_settlement is None:
        _fee_settlement = FeeSettlementStub()
    return _fee_settlement


def get_block_height() -> BlockHeightProtocol:
    """Get block height source."""
    global _block_height
    if _block_height is None:
        _block_height = WallClockBlockHeightService()
    return _block_height


def get_petition_registry_service() -> PetitionRegistryService:
    """Get the petition registry service.

    The service starts from the configured initial state. Call
    restore() on it (the API does so at startup) to load persisted state.
    """
    global _petition_registry_service
    if _petition_registry_service is None:
        config = get_registry_config()
        _petition_registry_service = PetitionRegistryService(
            persistence=get_registry_persistence(),
            fee_settlement=get_fee_settlement(),
            block_height=get_block_height(),
            store=RegistryStore(
                configuration=config.initial_configuration(),
                burn_address=config.burn_address,
            ),
            burn_address=config.burn_address,
        )
    return _petition_registry_service


def set_registry_config(config: RegistryConfig) -> None:
    """Set custom registry configuration (for testing)."""
    global _registry_config
    _registry_config = config


def set_registry_persistence(persistence: RegistryPersistenceProtocol) -> None:
    """Set custom registry persistence (for testing)."""
    global _registry_persistence
    _registry_persistence = persistence


def set_fee_settlement(fee_settlement: FeeSettlementProtocol) -> None:
    """Set custom fee settlement (for testing)."""
    global _fee_settlement
    _fee_settlement = fee_settlement


def set_block_height(block_height: BlockHeightProtocol) -> None:
    """Set custom block height source (for testing)."""
    global _block_height
    _block_height = block_height


def set_petition_registry_service(service: PetitionRegistryService) -> None:
    """Set custom petition registry service (for testing)."""
    global _petition_registry_service
    _petition_registry_service = service


def reset_petition_registry_dependencies() -> None:
    """Reset petition registry singletons (for testing)."""
    global _registry_config
    global _registry_persistence
    global _fee_settlement
    global _block_height
    global _petition_registry_service
    _registry_config = None
    _registry_persistence = None
    _fee_settlement = None
    _block_height = None
    _petition_registry_service = None
