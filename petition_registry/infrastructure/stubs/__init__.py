"""In-memory stubs for development and testing.

WARNING: Stubs are for development/testing only.
"""

from petition_registry.infrastructure.stubs.block_height_stub import BlockHeightStub
from petition_registry.infrastructure.stubs.fee_settlement_stub import FeeSettlementStub
from petition_registry.infrastructure.stubs.registry_persistence_stub import (
    RegistryPersistenceStub,
)

__all__: list[str] = [
    "BlockHeightStub",
    "FeeSettlementStub",
    "RegistryPersistenceStub",
]
