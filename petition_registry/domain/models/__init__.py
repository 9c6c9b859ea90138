"""Domain models for the petition registry."""

from petition_registry.domain.models.petition import (
    FeeTransfer,
    Petition,
    PetitionCategory,
    PetitionDraft,
    PetitionStatus,
    PetitionUpdate,
)
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.registry_store import (
    RegistrySnapshot,
    RegistryStore,
)
from petition_registry.domain.models.title_index import TitleIndex

__all__: list[str] = [
    "FeeTransfer",
    "Petition",
    "PetitionCategory",
    "PetitionDraft",
    "PetitionStatus",
    "PetitionUpdate",
    "RegistryConfiguration",
    "RegistrySnapshot",
    "RegistryStore",
    "TitleIndex",
]
