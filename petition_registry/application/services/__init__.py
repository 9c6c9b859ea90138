"""Application services - Use case orchestration.

Available services:
- PetitionRegistryService: Petition lifecycle controller
- WallClockBlockHeightService: Block height from the system clock
"""

from petition_registry.application.services.block_height_service import (
    WallClockBlockHeightService,
)
from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)

__all__: list[str] = [
    "PetitionRegistryService",
    "WallClockBlockHeightService",
]
