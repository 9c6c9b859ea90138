"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container and a per-test async
session factory. Registry tables are created once per test and truncated
afterwards, so every test starts from an empty registry.

Usage:
    @pytest.mark.integration
    async def test_example(session_factory: async_sessionmaker[AsyncSession]) -> None:
        repository = PostgresRegistryRepository(session_factory)
        ...

Note: Docker must be running for these fixtures to work.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from petition_registry.infrastructure.adapters.persistence.registry_repository import (
    PostgresRegistryRepository,
)


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per run."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Get the container URL in postgresql+asyncpg:// form.

    testcontainers returns a psycopg2 URL by default.
    """
    sync_url = postgres_container.get_connection_url()
    async_url: str = sync_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    ).replace("postgresql://", "postgresql+asyncpg://")
    return async_url


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Per-test session factory over a freshly created registry schema."""
    engine = create_async_engine(postgres_async_url, echo=False)
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await PostgresRegistryRepository(factory).ensure_schema()

    yield factory

    async with factory() as session, session.begin():
        await session.execute(
            text(
                "TRUNCATE registry_petition_updates, registry_petitions, "
                "petition_registry_config"
            )
        )
    await engine.dispose()
