"""Registry persistence port.

This module defines the interface for durably storing registry state
across restarts. The logical schema is exactly the domain's: the
configuration singleton, petitions by id and the latest update slot per
petition. The title index is not stored; it is rebuilt from petitions.

Developer Golden Rules:
1. WRITE BEFORE SWAP - The service persists staged state before it
   becomes visible in memory
2. FAIL LOUD - Implementations raise RegistryPersistenceError, never
   return partial results
3. ONE WRITE, ONE TRANSACTION - Each save_* call is atomic on its own
"""

from __future__ import annotations

from typing import Protocol

from petition_registry.domain.models.petition import Petition, PetitionUpdate
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.registry_store import RegistrySnapshot


class RegistryPersistenceProtocol(Protocol):
    """Protocol for registry storage operations."""

    async def load(self) -> RegistrySnapshot:
        """Load the full registry state.

        Returns:
            Snapshot of configuration, petitions and update slots. An empty
            registry yields a default snapshot.

        Raises:
            RegistryPersistenceError: If state cannot be read.
        """
        ...

    async def save_petition(
        self, petition: Petition, configuration: RegistryConfiguration
    ) -> None:
        """Insert or replace a petition together with the configuration.

        Creation advances the id counter, so both are written in one
        transaction.

        Raises:
            RegistryPersistenceError: If the write fails.
        """
        ...

    async def save_petition_update(
        self, petition: Petition, update: PetitionUpdate
    ) -> None:
        """Replace a petition and overwrite its update slot in one transaction.

        Raises:
            RegistryPersistenceError: If the write fails.
        """
        ...

    async def save_configuration(self, configuration: RegistryConfiguration) -> None:
        """Replace the configuration singleton.

        Raises:
            RegistryPersistenceError: If the write fails.
        """
        ...
