"""
Pytest configuration and shared fixtures for petition registry tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/<layer>/
- Integration tests go in tests/integration/ and are marked `integration`
"""

from collections.abc import Iterator

import pytest

from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)
from petition_registry.bootstrap.petition_registry import (
    reset_petition_registry_dependencies,
)
from petition_registry.infrastructure.stubs.fee_settlement_stub import (
    FeeSettlementStub,
)
from petition_registry.infrastructure.stubs.registry_persistence_stub import (
    RegistryPersistenceStub,
)
from tests.helpers import FakeBlockHeight
from tests.helpers.principals import AUTHORITY, START_HEIGHT


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from petition_registry import __version__

    return __version__


@pytest.fixture
def block_height() -> FakeBlockHeight:
    return FakeBlockHeight(start=START_HEIGHT)


@pytest.fixture
def fee_settlement() -> FeeSettlementStub:
    return FeeSettlementStub()


@pytest.fixture
def persistence() -> RegistryPersistenceStub:
    return RegistryPersistenceStub()


@pytest.fixture
def registry_service(
    persistence: RegistryPersistenceStub,
    fee_settlement: FeeSettlementStub,
    block_height: FakeBlockHeight,
) -> PetitionRegistryService:
    """Fresh registry with default configuration and no authority."""
    return PetitionRegistryService(
        persistence=persistence,
        fee_settlement=fee_settlement,
        block_height=block_height,
    )


@pytest.fixture
async def authorized_service(
    registry_service: PetitionRegistryService,
) -> PetitionRegistryService:
    """Registry with AUTHORITY installed."""
    result = await registry_service.set_authority_contract(AUTHORITY)
    assert result.success
    return registry_service


@pytest.fixture
def petition_fields() -> dict[str, object]:
    """Valid creation arguments (deadline well past START_HEIGHT)."""
    return {
        "title": "Protect the river",
        "description": "Stop dumping in the river",
        "target_signatures": 100,
        "deadline": START_HEIGHT + 1000,
        "category": "environment",
        "priority": 5,
        "location": "Riverside",
        "tags": ["water", "nature"],
        "min_signatures": 10,
        "max_extension": 7,
    }


@pytest.fixture(autouse=True)
def _reset_bootstrap() -> Iterator[None]:
    """Keep bootstrap singletons from leaking between tests."""
    reset_petition_registry_dependencies()
    yield
    reset_petition_registry_dependencies()
