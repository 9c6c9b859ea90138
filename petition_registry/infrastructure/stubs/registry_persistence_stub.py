"""Registry persistence stub implementation.

In-memory RegistryPersistenceProtocol for development and testing. It
keeps the last written configuration, petitions and update slots, so a
fresh service can restore() from it just as it would from PostgreSQL.

It can be told to fail writes, to exercise the paths where a mutation
must leave the visible registry untouched.

WARNING: This stub is NOT suitable for production use. Nothing survives
a process restart.
"""

from __future__ import annotations

from petition_registry.application.ports.registry_persistence import (
    RegistryPersistenceProtocol,
)
from petition_registry.domain.errors.registry import RegistryPersistenceError
from petition_registry.domain.models.petition import Petition, PetitionUpdate
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.registry_store import RegistrySnapshot


class RegistryPersistenceStub(RegistryPersistenceProtocol):
    """In-memory registry storage.

    Attributes:
        _initial_configuration: Configuration reported before any save.
        _configuration: Last saved configuration.
        _petitions: Last saved version of each petition.
        _updates: Last saved update slot per petition.
        _fail_reason: When set, every write raises RegistryPersistenceError.
        write_count: Number of successful writes (for assertions).
    """

    def __init__(
        self, initial_configuration: RegistryConfiguration | None = None
    ) -> None:
        self._initial_configuration = initial_configuration or RegistryConfiguration()
        self._configuration = self._initial_configuration
        self._petitions: dict[int, Petition] = {}
        self._updates: dict[int, PetitionUpdate] = {}
        self._fail_reason: str | None = None
        self.write_count = 0

    async def load(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            configuration=self._configuration,
            petitions=tuple(self._petitions[i] for i in sorted(self._petitions)),
            updates=tuple(self._updates[i] for i in sorted(self._updates)),
        )

    async def save_petition(
        self, petition: Petition, configuration: RegistryConfiguration
    ) -> None:
        self._check_writable("save_petition")
        self._petitions[petition.petition_id] = petition
        self._configuration = configuration
        self.write_count += 1

    async def save_petition_update(
        self, petition: Petition, update: PetitionUpdate
    ) -> None:
        self._check_writable("save_petition_update")
        self._petitions[petition.petition_id] = petition
        self._updates[update.petition_id] = update
        self.write_count += 1

    async def save_configuration(self, configuration: RegistryConfiguration) -> None:
        self._check_writable("save_configuration")
        self._configuration = configuration
        self.write_count += 1

    def fail_writes(self, reason: str | None) -> None:
        """Fail all further writes with ``reason`` (None to accept again)."""
        self._fail_reason = reason

    def _check_writable(self, operation: str) -> None:
        if self._fail_reason is not None:
            raise RegistryPersistenceError(operation, self._fail_reason)

    def clear(self) -> None:
        """Clear all stored state (for testing)."""
        self._configuration = self._initial_configuration
        self._petitions.clear()
        self._updates.clear()
        self.write_count = 0
