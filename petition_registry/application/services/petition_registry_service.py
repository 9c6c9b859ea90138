"""Petition Registry Service (petition lifecycle controller).

This service orchestrates every registry operation: it runs the
validator, maintains the title index, mutates the registry store and
calls the fee settlement and persistence collaborators, in that order.

Guarantees:
- Every public operation returns a RegistryResult; domain errors never
  escape the service
- Mutations are all-or-nothing: they are applied to a staged copy of the
  store, persisted, and only then swapped in. Any failure (validation,
  index collision, settlement rejection, persistence error) leaves the
  visible registry exactly as it was
- Mutating operations are serialized by a single asyncio.Lock; reads take
  no lock and always see a whole store (either before or after a write)

Developer Golden Rules:
1. VALIDATE FIRST - Run the rule pipeline against live state under the lock
2. STAGE, THEN SWAP - Never mutate the live store directly
3. SETTLE BEFORE PERSIST - A rejected fee transfer aborts the creation
4. LOG EVERYTHING - Every rejection is logged with its error code
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import cast

import structlog

from petition_registry.application.dtos.registry_result import RegistryResult
from petition_registry.application.ports.block_height import BlockHeightProtocol
from petition_registry.application.ports.fee_settlement import FeeSettlementProtocol
from petition_registry.application.ports.registry_persistence import (
    RegistryPersistenceProtocol,
)
from petition_registry.application.services.base import LoggingMixin
from petition_registry.domain.errors.registry import (
    PetitionNotFoundError,
    PetitionRegistryError,
    PetitionRuleViolationError,
    RegistryErrorCode,
    RegistryPersistenceError,
)
from petition_registry.domain.models.petition import (
    FeeTransfer,
    Petition,
    PetitionCategory,
    PetitionDraft,
    PetitionUpdate,
)
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.registry_store import RegistryStore
from petition_registry.domain.services import petition_validator
from petition_registry.domain.services.authority_gate import DEFAULT_BURN_ADDRESS


class PetitionRegistryService(LoggingMixin):
    """Lifecycle controller for the petition registry.

    Attributes:
        _persistence: Durable storage for registry state.
        _fee_settlement: Collaborator executing creation-fee transfers.
        _block_height: Source of the current block height.
        _store: The visible registry state (swapped, never edited in place).
        _write_lock: Serializes all mutating operations.
    """

    def __init__(
        self,
        persistence: RegistryPersistenceProtocol,
        fee_settlement: FeeSettlementProtocol,
        block_height: BlockHeightProtocol,
        store: RegistryStore | None = None,
        burn_address: str = DEFAULT_BURN_ADDRESS,
    ) -> None:
        """Initialize the registry service.

        Args:
            persistence: Storage for configuration, petitions and update slots.
            fee_settlement: Settlement collaborator for creation fees.
            block_height: Current block height source.
            store: Initial registry state. Defaults to an empty registry.
            burn_address: Null-sentinel principal that may never be authority.
        """
        self._persistence = persistence
        self._fee_settlement = fee_settlement
        self._block_height = block_height
        self._store = store or RegistryStore(burn_address=burn_address)
        self._write_lock = asyncio.Lock()
        self._init_logger(component="petition_registry")

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def restore(self) -> RegistryResult[int]:
        """Replace in-memory state with the persisted registry.

        The title index is rebuilt from the loaded petitions.

        Returns:
            Result carrying the number of petitions restored.
        """
        log = self._log_operation("restore")
        async with self._write_lock:
            try:
                snapshot = await self._persistence.load()
                restored = RegistryStore.from_snapshot(
                    snapshot, burn_address=self._store.burn_address
                )
            except RegistryPersistenceError as e:
                log.error("restore_failed", error=str(e))
                return RegistryResult.from_error(e)
            self._store = restored
        log.info("registry_restored", petition_count=restored.count())
        return RegistryResult.ok(restored.count())

    # ------------------------------------------------------------------
    # Configuration (authority gate)
    # ------------------------------------------------------------------

    async def set_authority_contract(self, principal: str) -> RegistryResult[bool]:
        """Install the registry authority. Succeeds at most once.

        Args:
            principal: The authority principal. Never the burn address.

        Returns:
            ok(True), or INVALID_INPUT / UPDATE_NOT_ALLOWED failures.
        """
        log = self._log_operation("set_authority_contract", principal=principal)
        async with self._write_lock:
            staged = self._store.copy()
            try:
                configuration = staged.set_authority(principal)
                await self._persistence.save_configuration(configuration)
            except PetitionRegistryError as e:
                return self._reject(log, "set_authority_rejected", e)
            self._store = staged
        log.info("authority_set")
        return RegistryResult.ok(True)

    async def set_creation_fee(self, caller: str, fee: int) -> RegistryResult[bool]:
        """Change the flat creation fee (authority only).

        Returns:
            ok(True), or INVALID_INPUT / AUTHORITY_NOT_SET / NOT_AUTHORIZED.
        """
        log = self._log_operation("set_creation_fee", caller=caller, fee=fee)
        async with self._write_lock:
            staged = self._store.copy()
            try:
                configuration = staged.set_creation_fee(caller, fee)
                await self._persistence.save_configuration(configuration)
            except PetitionRegistryError as e:
                return self._reject(log, "set_creation_fee_rejected", e)
            self._store = staged
        log.info("creation_fee_set")
        return RegistryResult.ok(True)

    async def set_max_petitions(
        self, caller: str, max_petitions: int
    ) -> RegistryResult[bool]:
        """Change the petition capacity ceiling (authority only).

        Returns:
            ok(True), or INVALID_INPUT / AUTHORITY_NOT_SET / NOT_AUTHORIZED.
        """
        log = self._log_operation(
            "set_max_petitions", caller=caller, max_petitions=max_petitions
        )
        async with self._write_lock:
            staged = self._store.copy()
            try:
                configuration = staged.set_max_petitions(caller, max_petitions)
                await self._persistence.save_configuration(configuration)
            except PetitionRegistryError as e:
                return self._reject(log, "set_max_petitions_rejected", e)
            self._store = staged
        log.info("max_petitions_set")
        return RegistryResult.ok(True)

    # ------------------------------------------------------------------
    # Petition lifecycle
    # ------------------------------------------------------------------

    async def create_petition(
        self,
        caller: str,
        title: str,
        description: str,
        target_signatures: int,
        deadline: int,
        category: str,
        priority: int,
        location: str,
        tags: Sequence[str],
        min_signatures: int,
        max_extension: int,
    ) -> RegistryResult[int]:
        """Create a petition and charge the creation fee.

        Sequence: full rule pipeline -> fee transfer intent (creator to
        authority) -> id assignment -> title index -> store -> persist.
        Any failure aborts with zero side effects: no id consumed, no
        title reserved, nothing stored.

        Returns:
            ok(petition_id), or the code of the first failing rule,
            FEE_SETTLEMENT_FAILED or PERSISTENCE_FAILED.
        """
        draft = PetitionDraft(
            title=title,
            description=description,
            target_signatures=target_signatures,
            deadline=deadline,
            category=category,
            priority=priority,
            location=location,
            tags=tuple(tags),
            min_signatures=min_signatures,
            max_extension=max_extension,
        )
        log = self._log_operation(
            "create_petition",
            caller=caller,
            title=title,
            category=category,
            target_signatures=target_signatures,
        )
        log.debug("creation_started")

        async with self._write_lock:
            height = self._block_height.current_height()
            try:
                petition_validator.validate_creation(
                    draft,
                    petition_validator.CreationContext(
                        configuration=self._store.configuration,
                        current_height=height,
                        title_index=self._store.index,
                    ),
                )
            except PetitionRuleViolationError as e:
                return self._reject(log, "create_petition_rejected", e)

            configuration = self._store.configuration
            transfer = FeeTransfer(
                amount=configuration.creation_fee,
                payer=caller,
                # The rule pipeline rejects creation while no authority is set
                payee=cast(str, configuration.authority),
                height=height,
            )

            staged = self._store.copy()
            petition_id = staged.next_id()
            petition = Petition(
                petition_id=petition_id,
                creator=caller,
                title=draft.title,
                description=draft.description,
                target_signatures=draft.target_signatures,
                deadline=draft.deadline,
                category=PetitionCategory(draft.category),
                priority=draft.priority,
                location=draft.location,
                tags=draft.tags,
                timestamp=height,
                min_signatures=draft.min_signatures,
                max_extension=draft.max_extension,
            )
            try:
                staged.index.insert(petition.title, petition_id)
                staged.put(petition)
                await self._fee_settlement.transfer(transfer)
            except PetitionRegistryError as e:
                return self._reject(log, "create_petition_rejected", e)

            try:
                await self._persistence.save_petition(petition, staged.configuration)
            except RegistryPersistenceError as e:
                # The fee has already moved; operators reconcile from this entry.
                log.error(
                    "petition_persist_failed_after_settlement",
                    error=str(e),
                    fee_amount=transfer.amount,
                    fee_payer=transfer.payer,
                    fee_payee=transfer.payee,
                )
                return RegistryResult.from_error(e)

            self._store = staged

        log.info(
            "petition_created",
            petition_id=petition_id,
            height=height,
            fee_amount=transfer.amount,
        )
        return RegistryResult.ok(petition_id)

    async def update_petition(
        self,
        caller: str,
        petition_id: int,
        title: str,
        description: str,
        target_signatures: int,
    ) -> RegistryResult[bool]:
        """Edit title, description and target of an open petition (creator only).

        A title change releases the old title and reserves the new one as a
        single step; on a collision neither happens. The petition's update
        slot is overwritten with this edit.

        Returns:
            ok(True), or PETITION_NOT_FOUND / NOT_AUTHORIZED /
            PETITION_CLOSED / INVALID_TITLE / INVALID_DESCRIPTION /
            INVALID_TARGET / PETITION_ALREADY_EXISTS / PERSISTENCE_FAILED.
        """
        log = self._log_operation(
            "update_petition", caller=caller, petition_id=petition_id
        )
        async with self._write_lock:
            petition = self._store.get(petition_id)
            if petition is None:
                return self._reject(
                    log, "update_petition_rejected", PetitionNotFoundError(petition_id)
                )
            code = petition_validator.check_update(
                petition,
                caller,
                title,
                description,
                target_signatures,
                self._store.index,
            )
            if code is not None:
                return self._reject(
                    log, "update_petition_rejected", PetitionRuleViolationError(code)
                )
            height = self._block_height.current_height()
            updated = petition.with_content(
                title=title,
                description=description,
                target_signatures=target_signatures,
                timestamp=height,
            )
            update = PetitionUpdate(
                petition_id=petition_id,
                update_title=title,
                update_description=description,
                update_target=target_signatures,
                update_timestamp=height,
                updater=caller,
            )

            staged = self._store.copy()
            try:
                staged.index.rename(petition_id, petition.title, title)
                staged.put(updated)
                staged.put_update(update)
                await self._persistence.save_petition_update(updated, update)
            except PetitionRegistryError as e:
                return self._reject(log, "update_petition_rejected", e)
            self._store = staged

        log.info(
            "petition_updated",
            title_changed=petition.title != title,
            height=height,
        )
        return RegistryResult.ok(True)

    async def close_petition(self, caller: str, petition_id: int) -> RegistryResult[bool]:
        """Close an open petition (creator only). Closed is terminal.

        Returns:
            ok(True), or PETITION_NOT_FOUND / NOT_AUTHORIZED /
            PETITION_CLOSED / PERSISTENCE_FAILED.
        """
        log = self._log_operation(
            "close_petition", caller=caller, petition_id=petition_id
        )
        async with self._write_lock:
            petition = self._store.get(petition_id)
            if petition is None:
                return self._reject(
                    log, "close_petition_rejected", PetitionNotFoundError(petition_id)
                )
            code = petition_validator.check_close(petition, caller)
            if code is not None:
                return self._reject(
                    log, "close_petition_rejected", PetitionRuleViolationError(code)
                )
            closed = petition.closed()
            staged = self._store.copy()
            try:
                staged.put(closed)
                await self._persistence.save_petition(closed, staged.configuration)
            except PetitionRegistryError as e:
                return self._reject(log, "close_petition_rejected", e)
            self._store = staged

        log.info("petition_closed", final_signatures=closed.current_signatures)
        return RegistryResult.ok(True)

    async def increment_signatures(
        self, caller: str, petition_id: int, amount: int
    ) -> RegistryResult[bool]:
        """Record ``amount`` more signatures on an open petition.

        Any caller may record signatures. The count never decreases and
        never passes the target.

        Returns:
            ok(True), or PETITION_NOT_FOUND / PETITION_CLOSED /
            INVALID_INPUT (amount <= 0) / INVALID_UPDATE_PARAM (over target) /
            PERSISTENCE_FAILED.
        """
        log = self._log_operation(
            "increment_signatures",
            caller=caller,
            petition_id=petition_id,
            amount=amount,
        )
        async with self._write_lock:
            petition = self._store.get(petition_id)
            if petition is None:
                return self._reject(
                    log,
                    "increment_signatures_rejected",
                    PetitionNotFoundError(petition_id),
                )
            code = petition_validator.check_signature_increment(petition, amount)
            if code is not None:
                return self._reject(
                    log,
                    "increment_signatures_rejected",
                    PetitionRuleViolationError(code),
                )
            signed = petition.with_signatures_added(amount)
            staged = self._store.copy()
            try:
                staged.put(signed)
                await self._persistence.save_petition(signed, staged.configuration)
            except PetitionRegistryError as e:
                return self._reject(log, "increment_signatures_rejected", e)
            self._store = staged

        log.info(
            "signatures_incremented",
            current_signatures=signed.current_signatures,
            target_signatures=signed.target_signatures,
        )
        return RegistryResult.ok(True)

    # ------------------------------------------------------------------
    # Reads (no lock; the store reference is swapped atomically)
    # ------------------------------------------------------------------

    def get_petition(self, petition_id: int) -> RegistryResult[Petition | None]:
        """Return the petition with ``petition_id``, or ok(None) if absent."""
        return RegistryResult.ok(self._store.get(petition_id))

    def get_petition_update(
        self, petition_id: int
    ) -> RegistryResult[PetitionUpdate | None]:
        """Return the latest update slot for ``petition_id``, or ok(None)."""
        return RegistryResult.ok(self._store.get_update(petition_id))

    def get_petition_count(self) -> RegistryResult[int]:
        """Return the number of petitions ever created."""
        return RegistryResult.ok(self._store.count())

    def check_petition_existence(self, title: str) -> RegistryResult[bool]:
        """Return whether ``title`` is held by any petition (open or closed)."""
        return RegistryResult.ok(self._store.title_exists(title))

    def get_registry_configuration(self) -> RegistryResult[RegistryConfiguration]:
        """Return the current registry configuration."""
        return RegistryResult.ok(self._store.configuration)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reject(
        self,
        log: structlog.BoundLogger,
        event: str,
        error: PetitionRegistryError,
    ) -> RegistryResult:
        """Log a rejected operation and convert the error to a result."""
        if error.code in (
            RegistryErrorCode.FEE_SETTLEMENT_FAILED,
            RegistryErrorCode.PERSISTENCE_FAILED,
        ):
            log.error(event, error_code=error.code.name, error=str(error))
        else:
            log.warning(event, error_code=error.code.name, error=str(error))
        return RegistryResult.from_error(error)
