"""PostgreSQL registry repository.

Production implementation of RegistryPersistenceProtocol using SQLAlchemy
async sessions and raw SQL.

Tables:
- petition_registry_config: single row (id = 1) holding the counter,
  capacity, creation fee and authority
- registry_petitions: one row per petition, upserted on every change
- registry_petition_updates: the latest update slot per petition

The title index is not stored. It is rebuilt from registry_petitions
when the service restores.

Each save runs in its own transaction, so a petition row and the
configuration (or update slot) written with it land together or not at
all. Every database failure, including an unreachable server, surfaces
as RegistryPersistenceError.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from petition_registry.application.ports.registry_persistence import (
    RegistryPersistenceProtocol,
)
from petition_registry.domain.errors.registry import RegistryPersistenceError
from petition_registry.domain.models.petition import (
    Petition,
    PetitionCategory,
    PetitionStatus,
    PetitionUpdate,
)
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.registry_store import RegistrySnapshot

logger = get_logger()

# Driver connection failures (refused, reset, DNS) surface as OSError
DATABASE_ERRORS: tuple[type[Exception], ...] = (SQLAlchemyError, OSError)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS petition_registry_config (
        id SMALLINT PRIMARY KEY CHECK (id = 1),
        petition_counter BIGINT NOT NULL CHECK (petition_counter >= 0),
        max_petitions BIGINT NOT NULL CHECK (max_petitions > 0),
        creation_fee BIGINT NOT NULL CHECK (creation_fee >= 0),
        authority TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS registry_petitions (
        petition_id BIGINT PRIMARY KEY CHECK (petition_id >= 0),
        creator TEXT NOT NULL,
        title VARCHAR(100) NOT NULL UNIQUE,
        description VARCHAR(500) NOT NULL,
        target_signatures BIGINT NOT NULL CHECK (target_signatures > 0),
        current_signatures BIGINT NOT NULL
            CHECK (current_signatures BETWEEN 0 AND target_signatures),
        deadline BIGINT NOT NULL,
        is_active BOOLEAN NOT NULL,
        category TEXT NOT NULL,
        priority SMALLINT NOT NULL,
        location VARCHAR(100) NOT NULL,
        tags TEXT[] NOT NULL DEFAULT '{}',
        created_or_updated_at BIGINT NOT NULL,
        status TEXT NOT NULL,
        min_signatures BIGINT NOT NULL,
        max_extension SMALLINT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS registry_petition_updates (
        petition_id BIGINT PRIMARY KEY
            REFERENCES registry_petitions (petition_id),
        update_title VARCHAR(100) NOT NULL,
        update_description VARCHAR(500) NOT NULL,
        update_target BIGINT NOT NULL,
        update_timestamp BIGINT NOT NULL,
        updater TEXT NOT NULL
    )
    """,
)

_UPSERT_CONFIG = text("""
    INSERT INTO petition_registry_config
        (id, petition_counter, max_petitions, creation_fee, authority)
    VALUES (1, :petition_counter, :max_petitions, :creation_fee, :authority)
    ON CONFLICT (id) DO UPDATE SET
        petition_counter = EXCLUDED.petition_counter,
        max_petitions = EXCLUDED.max_petitions,
        creation_fee = EXCLUDED.creation_fee,
        authority = EXCLUDED.authority
""")

_UPSERT_PETITION = text("""
    INSERT INTO registry_petitions (
        petition_id, creator, title, description, target_signatures,
        current_signatures, deadline, is_active, category, priority,
        location, tags, created_or_updated_at, status, min_signatures,
        max_extension
    ) VALUES (
        :petition_id, :creator, :title, :description, :target_signatures,
        :current_signatures, :deadline, :is_active, :category, :priority,
        :location, :tags, :timestamp, :status, :min_signatures,
        :max_extension
    )
    ON CONFLICT (petition_id) DO UPDATE SET
        title = EXCLUDED.title,
        description = EXCLUDED.description,
        target_signatures = EXCLUDED.target_signatures,
        current_signatures = EXCLUDED.current_signatures,
        is_active = EXCLUDED.is_active,
        created_or_updated_at = EXCLUDED.created_or_updated_at,
        status = EXCLUDED.status
""")

_UPSERT_UPDATE = text("""
    INSERT INTO registry_petition_updates (
        petition_id, update_title, update_description, update_target,
        update_timestamp, updater
    ) VALUES (
        :petition_id, :update_title, :update_description, :update_target,
        :update_timestamp, :updater
    )
    ON CONFLICT (petition_id) DO UPDATE SET
        update_title = EXCLUDED.update_title,
        update_description = EXCLUDED.update_description,
        update_target = EXCLUDED.update_target,
        update_timestamp = EXCLUDED.update_timestamp,
        updater = EXCLUDED.updater
""")


class PostgresRegistryRepository(RegistryPersistenceProtocol):
    """PostgreSQL-backed registry storage.

    Attributes:
        _session_factory: SQLAlchemy async session factory.
        _initial_configuration: Configuration used until one has been saved.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        initial_configuration: RegistryConfiguration | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._initial_configuration = initial_configuration or RegistryConfiguration()
        self._log = logger.bind(component="registry_repository")

    async def ensure_schema(self) -> None:
        """Create the registry tables if they do not exist."""
        try:
            async with self._session_factory() as session, session.begin():
                for statement in SCHEMA_STATEMENTS:
                    await session.execute(text(statement))
        except DATABASE_ERRORS as e:
            raise RegistryPersistenceError("ensure_schema", str(e)) from e
        self._log.info("registry_schema_ready")

    async def load(self) -> RegistrySnapshot:
        try:
            async with self._session_factory() as session:
                config_row = (
                    await session.execute(
                        text("""
                            SELECT petition_counter, max_petitions, creation_fee, authority
                            FROM petition_registry_config
                            WHERE id = 1
                        """)
                    )
                ).fetchone()
                petition_rows = (
                    await session.execute(
                        text("""
                            SELECT petition_id, creator, title, description,
                                   target_signatures, current_signatures, deadline,
                                   is_active, category, priority, location, tags,
                                   created_or_updated_at, status, min_signatures,
                                   max_extension
                            FROM registry_petitions
                            ORDER BY petition_id
                        """)
                    )
                ).fetchall()
                update_rows = (
                    await session.execute(
                        text("""
                            SELECT petition_id, update_title, update_description,
                                   update_target, update_timestamp, updater
                            FROM registry_petition_updates
                            ORDER BY petition_id
                        """)
                    )
                ).fetchall()
        except DATABASE_ERRORS as e:
            raise RegistryPersistenceError("load", str(e)) from e

        configuration = self._initial_configuration
        if config_row is not None:
            configuration = RegistryConfiguration(
                petition_counter=config_row.petition_counter,
                max_petitions=config_row.max_petitions,
                creation_fee=config_row.creation_fee,
                authority=config_row.authority,
            )

        try:
            petitions = tuple(self._row_to_petition(row) for row in petition_rows)
        except ValueError as e:
            raise RegistryPersistenceError("load", f"corrupt petition row: {e}") from e
        updates = tuple(
            PetitionUpdate(
                petition_id=row.petition_id,
                update_title=row.update_title,
                update_description=row.update_description,
                update_target=row.update_target,
                update_timestamp=row.update_timestamp,
                updater=row.updater,
            )
            for row in update_rows
        )

        self._log.info(
            "registry_loaded",
            petition_count=len(petitions),
            update_count=len(updates),
        )
        return RegistrySnapshot(
            configuration=configuration, petitions=petitions, updates=updates
        )

    async def save_petition(
        self, petition: Petition, configuration: RegistryConfiguration
    ) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(_UPSERT_CONFIG, self._config_params(configuration))
                await session.execute(_UPSERT_PETITION, self._petition_params(petition))
        except DATABASE_ERRORS as e:
            raise RegistryPersistenceError("save_petition", str(e)) from e

    async def save_petition_update(
        self, petition: Petition, update: PetitionUpdate
    ) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(_UPSERT_PETITION, self._petition_params(petition))
                await session.execute(
                    _UPSERT_UPDATE,
                    {
                        "petition_id": update.petition_id,
                        "update_title": update.update_title,
                        "update_description": update.update_description,
                        "update_target": update.update_target,
                        "update_timestamp": update.update_timestamp,
                        "updater": update.updater,
                    },
                )
        except DATABASE_ERRORS as e:
            raise RegistryPersistenceError("save_petition_update", str(e)) from e

    async def save_configuration(self, configuration: RegistryConfiguration) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(_UPSERT_CONFIG, self._config_params(configuration))
        except DATABASE_ERRORS as e:
            raise RegistryPersistenceError("save_configuration", str(e)) from e

    @staticmethod
    def _config_params(configuration: RegistryConfiguration) -> dict[str, Any]:
        return {
            "petition_counter": configuration.petition_counter,
            "max_petitions": configuration.max_petitions,
            "creation_fee": configuration.creation_fee,
            "authority": configuration.authority,
        }

    @staticmethod
    def _petition_params(petition: Petition) -> dict[str, Any]:
        params = petition.to_dict()
        params["tags"] = list(petition.tags)
        return params

    @staticmethod
    def _row_to_petition(row: Any) -> Petition:
        return Petition(
            petition_id=row.petition_id,
            creator=row.creator,
            title=row.title,
            description=row.description,
            target_signatures=row.target_signatures,
            current_signatures=row.current_signatures,
            deadline=row.deadline,
            is_active=row.is_active,
            category=PetitionCategory(row.category),
            priority=row.priority,
            location=row.location,
            tags=tuple(row.tags or ()),
            timestamp=row.created_or_updated_at,
            status=PetitionStatus(row.status),
            min_signatures=row.min_signatures,
            max_extension=row.max_extension,
        )
