"""Petition registry API dependencies.

Thin FastAPI wrappers over the bootstrap singletons. Tests swap
implementations with the bootstrap set_* functions.
"""

from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)
from petition_registry.bootstrap.petition_registry import (
    get_petition_registry_service as _get_petition_registry_service,
)


def get_petition_registry_service() -> PetitionRegistryService:
    """Get the petition registry service."""
    return _get_petition_registry_service()
