"""Startup hooks for the petition registry API.

Startup sequence:
1. Load a local .env file, if present
2. Configure structured logging
3. Prepare the schema (PostgreSQL only) and restore persisted state
4. Install the configured authority, if any and none is set yet

A failed restore stops startup: serving from an empty registry would
hand out ids and titles that are already taken.
"""

import os

from dotenv import load_dotenv
from structlog import get_logger

from petition_registry.bootstrap.logging import configure_structlog
from petition_registry.bootstrap.petition_registry import (
    get_petition_registry_service,
    get_registry_config,
    get_registry_persistence,
)
from petition_registry.domain.errors.registry import RegistryErrorCode
from petition_registry.infrastructure.adapters.persistence.registry_repository import (
    PostgresRegistryRepository,
)

ENVIRONMENT_VAR = "ENVIRONMENT"
DEFAULT_ENVIRONMENT = "development"

logger = get_logger()


def load_environment() -> None:
    """Load variables from a .env file without overriding the environment."""
    load_dotenv(override=False)


def configure_logging() -> None:
    """Configure structlog from the ENVIRONMENT variable."""
    environment = os.getenv(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)
    configure_structlog(environment=environment)
    logger.bind(component="startup_logging").info(
        "structured_logging_configured", environment=environment
    )


async def initialize_petition_registry() -> None:
    """Restore registry state and install the configured authority.

    Raises:
        RuntimeError: If persisted state cannot be restored.
    """
    log = logger.bind(component="registry_startup")
    persistence = get_registry_persistence()
    if isinstance(persistence, PostgresRegistryRepository):
        await persistence.ensure_schema()

    service = get_petition_registry_service()
    restored = await service.restore()
    if not restored.success:
        raise RuntimeError(f"Registry restore failed: {restored.error_message}")

    authority = get_registry_config().authority
    if authority is None:
        log.info("registry_ready", petition_count=restored.value, authority_configured=False)
        return

    current = service.get_registry_configuration().unwrap().authority
    if current is None:
        installed = await service.set_authority_contract(authority)
        if not installed.success:
            raise RuntimeError(f"Authority installation failed: {installed.error_message}")
    elif current != authority:
        log.warning(
            "configured_authority_ignored",
            configured=authority,
            installed=current,
            error_code=RegistryErrorCode.UPDATE_NOT_ALLOWED.name,
        )
    log.info("registry_ready", petition_count=restored.value, authority_configured=True)
