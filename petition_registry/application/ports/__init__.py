"""Application ports - Abstract interfaces for infrastructure adapters.

Available ports:
- BlockHeightProtocol: Current block/time index for deadlines and timestamps
- FeeSettlementProtocol: Executes creation-fee transfers
- RegistryPersistenceProtocol: Durable storage of registry state
"""

from petition_registry.application.ports.block_height import BlockHeightProtocol
from petition_registry.application.ports.fee_settlement import FeeSettlementProtocol
from petition_registry.application.ports.registry_persistence import (
    RegistryPersistenceProtocol,
)

__all__: list[str] = [
    "BlockHeightProtocol",
    "FeeSettlementProtocol",
    "RegistryPersistenceProtocol",
]
