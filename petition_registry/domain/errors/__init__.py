"""Domain errors for the petition registry."""

from petition_registry.domain.errors.registry import (
    AuthorityAlreadySetError,
    AuthorityNotSetError,
    FeeSettlementError,
    InvalidConfigurationValueError,
    InvalidPrincipalError,
    NotAuthorityError,
    PetitionNotFoundError,
    PetitionRegistryError,
    PetitionRuleViolationError,
    RegistryErrorCode,
    RegistryPersistenceError,
    TitleAlreadyIndexedError,
)

__all__: list[str] = [
    "AuthorityAlreadySetError",
    "AuthorityNotSetError",
    "FeeSettlementError",
    "InvalidConfigurationValueError",
    "InvalidPrincipalError",
    "NotAuthorityError",
    "PetitionNotFoundError",
    "PetitionRegistryError",
    "PetitionRuleViolationError",
    "RegistryErrorCode",
    "RegistryPersistenceError",
    "TitleAlreadyIndexedError",
]
