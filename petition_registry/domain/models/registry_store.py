"""Registry store: petitions, update slots, configuration and title index.

The store holds the primary id -> Petition map, the id -> PetitionUpdate
slot map, the registry configuration and the derived TitleIndex. It
does not validate petition fields (that is the validator's job) but it
refuses any mutation that would break its own structural invariants:

- ids are assigned densely from the counter and never reused
- the title index stays injective and in step with the petitions
- the authority is installed at most once

Stores are cheap to copy (petitions are immutable), which is how the
lifecycle service makes multi-step mutations all-or-nothing: it mutates
a copy and only swaps it in once every step has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from petition_registry.domain.errors.registry import (
    PetitionNotFoundError,
    RegistryPersistenceError,
    TitleAlreadyIndexedError,
)
from petition_registry.domain.models.petition import Petition, PetitionUpdate
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.title_index import TitleIndex
from petition_registry.domain.services import authority_gate


@dataclass(frozen=True)
class RegistrySnapshot:
    """Everything the persistence layer stores for the registry.

    The title index is deliberately absent: it is derived from petitions.
    """

    configuration: RegistryConfiguration = field(default_factory=RegistryConfiguration)
    petitions: tuple[Petition, ...] = ()
    updates: tuple[PetitionUpdate, ...] = ()


class RegistryStore:
    """In-memory registry state with its title index.

    Attributes:
        _configuration: Current registry configuration.
        _petitions: Petition by id.
        _updates: Latest update slot by petition id.
        _index: Title -> id index derived from _petitions.
    """

    def __init__(
        self,
        configuration: RegistryConfiguration | None = None,
        burn_address: str = authority_gate.DEFAULT_BURN_ADDRESS,
    ) -> None:
        self._configuration = configuration or RegistryConfiguration()
        self._burn_address = burn_address
        self._petitions: dict[int, Petition] = {}
        self._updates: dict[int, PetitionUpdate] = {}
        self._index = TitleIndex()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: RegistrySnapshot,
        burn_address: str = authority_gate.DEFAULT_BURN_ADDRESS,
    ) -> RegistryStore:
        """Rebuild a store (and its title index) from persisted state.

        Raises:
            RegistryPersistenceError: If the snapshot breaks a store invariant
                (ids not dense below the counter, duplicate titles, update
                slots for unknown petitions).
        """
        store = cls(snapshot.configuration, burn_address=burn_address)
        counter = snapshot.configuration.petition_counter
        for petition in snapshot.petitions:
            if petition.petition_id >= counter or petition.petition_id in store._petitions:
                raise RegistryPersistenceError(
                    "restore", f"unexpected petition id {petition.petition_id}"
                )
            store._petitions[petition.petition_id] = petition
        if len(store._petitions) != counter:
            raise RegistryPersistenceError(
                "restore",
                f"counter is {counter} but {len(store._petitions)} petitions were loaded",
            )
        try:
            store._index = TitleIndex.from_petitions(store._petitions.values())
        except TitleAlreadyIndexedError as e:
            raise RegistryPersistenceError("restore", str(e)) from e
        for update in snapshot.updates:
            if update.petition_id not in store._petitions:
                raise RegistryPersistenceError(
                    "restore", f"update slot for unknown petition {update.petition_id}"
                )
            store._updates[update.petition_id] = update
        return store

    def copy(self) -> RegistryStore:
        """Return an independent copy sharing only immutable records."""
        clone = RegistryStore(self._configuration, burn_address=self._burn_address)
        clone._petitions = dict(self._petitions)
        clone._updates = dict(self._updates)
        clone._index = self._index.copy()
        return clone

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            configuration=self._configuration,
            petitions=tuple(self._petitions[i] for i in sorted(self._petitions)),
            updates=tuple(self._updates[i] for i in sorted(self._updates)),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def configuration(self) -> RegistryConfiguration:
        return self._configuration

    @property
    def index(self) -> TitleIndex:
        return self._index

    @property
    def burn_address(self) -> str:
        return self._burn_address

    def get(self, petition_id: int) -> Petition | None:
        return self._petitions.get(petition_id)

    def get_update(self, petition_id: int) -> PetitionUpdate | None:
        return self._updates.get(petition_id)

    def count(self) -> int:
        return self._configuration.petition_counter

    def title_exists(self, title: str) -> bool:
        return self._index.contains(title)

    # ------------------------------------------------------------------
    # Petition mutations
    # ------------------------------------------------------------------

    def next_id(self) -> int:
        """Return the next petition id and advance the counter."""
        petition_id = self._configuration.petition_counter
        self._configuration = self._configuration.with_next_id()
        return petition_id

    def put(self, petition: Petition) -> None:
        """Store ``petition`` under its id, replacing any previous version.

        Raises:
            PetitionNotFoundError: If the id has not been assigned yet.
        """
        if petition.petition_id >= self._configuration.petition_counter:
            raise PetitionNotFoundError(petition.petition_id)
        self._petitions[petition.petition_id] = petition

    def put_update(self, update: PetitionUpdate) -> None:
        """Overwrite the update slot for the update's petition.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        if update.petition_id not in self._petitions:
            raise PetitionNotFoundError(update.petition_id)
        self._updates[update.petition_id] = update

    # ------------------------------------------------------------------
    # Configuration mutations (authority gated)
    # ------------------------------------------------------------------

    def set_authority(self, principal: str) -> RegistryConfiguration:
        """Install the authority principal (set-once).

        Raises:
            InvalidPrincipalError: If principal is blank or the burn address.
            AuthorityAlreadySetError: If an authority is already installed.
        """
        self._configuration = authority_gate.install_authority(
            self._configuration, principal, self._burn_address
        )
        return self._configuration

    def set_creation_fee(self, caller: str, creation_fee: int) -> RegistryConfiguration:
        """Change the creation fee (authority only).

        Raises:
            InvalidConfigurationValueError: If the fee is negative.
            AuthorityNotSetError: If no authority has been installed.
            NotAuthorityError: If caller is not the authority.
        """
        self._configuration = authority_gate.change_creation_fee(
            self._configuration, caller, creation_fee
        )
        return self._configuration

    def set_max_petitions(self, caller: str, max_petitions: int) -> RegistryConfiguration:
        """Change the petition capacity (authority only).

        Raises:
            InvalidConfigurationValueError: If the capacity is not positive.
            AuthorityNotSetError: If no authority has been installed.
            NotAuthorityError: If caller is not the authority.
        """
        self._configuration = authority_gate.change_max_petitions(
            self._configuration, caller, max_petitions
        )
        return self._configuration
