"""Configuration for the petition registry."""

from petition_registry.config.registry_config import (
    DEFAULT_REGISTRY_CONFIG,
    TEST_REGISTRY_CONFIG,
    RegistryConfig,
)

__all__ = [
    "DEFAULT_REGISTRY_CONFIG",
    "TEST_REGISTRY_CONFIG",
    "RegistryConfig",
]
