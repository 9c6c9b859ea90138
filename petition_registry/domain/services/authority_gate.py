"""Authority gate domain service.

This module guards every change to registry-wide configuration. The
authority principal may be installed exactly once, and never as the
null-sentinel (burn) address. After that, only the authority itself may
change the creation fee or the petition capacity.

All functions are pure: they take the current RegistryConfiguration and
return the next one, or raise. Nothing is changed in place.
"""

from __future__ import annotations

from petition_registry.domain.errors.registry import (
    AuthorityAlreadySetError,
    AuthorityNotSetError,
    InvalidConfigurationValueError,
    InvalidPrincipalError,
    NotAuthorityError,
)
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)

# Null-sentinel principal; funds sent here are unrecoverable
DEFAULT_BURN_ADDRESS: str = "SP000000000000000000002Q6VF78"


def validate_authority_principal(
    principal: str, burn_address: str = DEFAULT_BURN_ADDRESS
) -> None:
    """Reject blank principals and the burn address.

    Raises:
        InvalidPrincipalError: If the principal cannot hold authority.
    """
    if not principal or not principal.strip() or principal == burn_address:
        raise InvalidPrincipalError(principal)


def install_authority(
    configuration: RegistryConfiguration,
    principal: str,
    burn_address: str = DEFAULT_BURN_ADDRESS,
) -> RegistryConfiguration:
    """Set the authority principal on a configuration that has none.

    The principal is checked before the set-once rule, so the burn address
    is always reported as invalid input.

    Raises:
        InvalidPrincipalError: If principal is blank or the burn address.
        AuthorityAlreadySetError: If an authority is already installed.
    """
    validate_authority_principal(principal, burn_address)
    if configuration.authority is not None:
        raise AuthorityAlreadySetError(configuration.authority)
    return configuration.with_authority(principal)


def require_authority(configuration: RegistryConfiguration, caller: str) -> str:
    """Check that ``caller`` is the installed authority.

    Returns:
        The authority principal.

    Raises:
        AuthorityNotSetError: If no authority has been installed.
        NotAuthorityError: If caller is not the authority.
    """
    if configuration.authority is None:
        raise AuthorityNotSetError()
    if caller != configuration.authority:
        raise NotAuthorityError(caller)
    return configuration.authority


def change_creation_fee(
    configuration: RegistryConfiguration, caller: str, creation_fee: int
) -> RegistryConfiguration:
    """Return configuration with a new creation fee (authority only).

    Raises:
        InvalidConfigurationValueError: If the fee is negative.
        AuthorityNotSetError: If no authority has been installed.
        NotAuthorityError: If caller is not the authority.
    """
    if creation_fee < 0:
        raise InvalidConfigurationValueError("creation_fee", creation_fee, "non-negative")
    require_authority(configuration, caller)
    return configuration.with_creation_fee(creation_fee)


def change_max_petitions(
    configuration: RegistryConfiguration, caller: str, max_petitions: int
) -> RegistryConfiguration:
    """Return configuration with a new petition capacity (authority only).

    Lowering the capacity below the current counter is allowed; it only
    blocks further creations.

    Raises:
        InvalidConfigurationValueError: If the capacity is not positive.
        AuthorityNotSetError: If no authority has been installed.
        NotAuthorityError: If caller is not the authority.
    """
    if max_petitions <= 0:
        raise InvalidConfigurationValueError("max_petitions", max_petitions, "positive")
    require_authority(configuration, caller)
    return configuration.with_max_petitions(max_petitions)
