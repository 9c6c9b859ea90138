"""Petition registry configuration.

This module defines the deployment settings of the registry with
environment variable overrides.

Environment Variables:
- PETITION_REGISTRY_MAX_PETITIONS: Initial capacity ceiling (default: 10000, must be > 0)
- PETITION_REGISTRY_CREATION_FEE: Initial creation fee (default: 500, must be >= 0)
- PETITION_REGISTRY_BURN_ADDRESS: Null-sentinel principal that can never be authority
- PETITION_REGISTRY_AUTHORITY: Authority principal installed at boot (optional)

Capacity and fee only seed an empty registry. Once a configuration has
been persisted, the persisted values win; later changes go through the
authority-gated operations.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.services.authority_gate import DEFAULT_BURN_ADDRESS

DEFAULT_MAX_PETITIONS = 10_000
DEFAULT_CREATION_FEE = 500


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class RegistryConfig:
    """Deployment settings for the petition registry.

    Attributes:
        max_petitions: Capacity ceiling for a fresh registry.
        creation_fee: Creation fee for a fresh registry.
        burn_address: Principal rejected as authority.
        authority: Principal to install as authority at startup, if any.
    """

    max_petitions: int = DEFAULT_MAX_PETITIONS
    creation_fee: int = DEFAULT_CREATION_FEE
    burn_address: str = DEFAULT_BURN_ADDRESS
    authority: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_petitions <= 0:
            raise ValueError(
                f"max_petitions must be positive, got {self.max_petitions}"
            )
        if self.creation_fee < 0:
            raise ValueError(
                f"creation_fee must be non-negative, got {self.creation_fee}"
            )
        if not self.burn_address:
            raise ValueError("burn_address must not be empty")

    def initial_configuration(self) -> RegistryConfiguration:
        """Return the configuration an empty registry starts with."""
        return RegistryConfiguration(
            max_petitions=self.max_petitions,
            creation_fee=self.creation_fee,
        )

    @classmethod
    def from_environment(cls) -> RegistryConfig:
        """Create config from environment variables with defaults.

        Out-of-range integers fall back to the defaults.

        Returns:
            RegistryConfig with values from environment or defaults.
        """
        max_petitions = _get_int_env(
            "PETITION_REGISTRY_MAX_PETITIONS", DEFAULT_MAX_PETITIONS
        )
        if max_petitions <= 0:
            max_petitions = DEFAULT_MAX_PETITIONS

        creation_fee = _get_int_env(
            "PETITION_REGISTRY_CREATION_FEE", DEFAULT_CREATION_FEE
        )
        if creation_fee < 0:
            creation_fee = DEFAULT_CREATION_FEE

        burn_address = (
            os.environ.get("PETITION_REGISTRY_BURN_ADDRESS", "").strip()
            or DEFAULT_BURN_ADDRESS
        )
        authority = os.environ.get("PETITION_REGISTRY_AUTHORITY", "").strip() or None

        return cls(
            max_petitions=max_petitions,
            creation_fee=creation_fee,
            burn_address=burn_address,
            authority=authority,
        )


# Default configuration
DEFAULT_REGISTRY_CONFIG = RegistryConfig()

# Test configuration (small capacity, fee-free)
TEST_REGISTRY_CONFIG = RegistryConfig(max_petitions=5, creation_fee=0)
