"""Petition registry domain errors.

This module provides the numeric error codes reported by every registry
operation and the exception classes raised inside the core (store, index,
authority gate, collaborators). The lifecycle service converts these
exceptions into RegistryResult failures at its boundary, so callers only
ever branch on RegistryErrorCode.

Error codes are stable integers: callers persist and compare them, so a
code is never renumbered or reused.
"""

from __future__ import annotations

from enum import IntEnum

from petition_registry.domain.exceptions import RegistryDomainError


class RegistryErrorCode(IntEnum):
    """Classified failure reasons for registry operations.

    Creation failures are reported in the fixed order of the creation
    rule pipeline (see petition_validator.CREATION_RULES).
    """

    NOT_AUTHORIZED = 100
    PETITION_NOT_FOUND = 101
    PETITION_CLOSED = 102
    INVALID_INPUT = 103
    INVALID_TITLE = 104
    INVALID_DESCRIPTION = 105
    INVALID_TARGET = 106
    INVALID_DEADLINE = 107
    PETITION_ALREADY_EXISTS = 108
    INVALID_STATUS = 109
    UPDATE_NOT_ALLOWED = 110
    INVALID_UPDATE_PARAM = 111
    MAX_PETITIONS_EXCEEDED = 112
    INVALID_CATEGORY = 113
    INVALID_PRIORITY = 114
    INVALID_LOCATION = 115
    INVALID_TAGS = 116
    AUTHORITY_NOT_SET = 117
    INVALID_TIMESTAMP = 118
    INVALID_MIN_SIGNATURES = 119
    INVALID_MAX_EXTENSION = 120
    FEE_SETTLEMENT_FAILED = 121
    PERSISTENCE_FAILED = 122

    @property
    def label(self) -> str:
        """Return the CamelCase name used in API problem details."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class PetitionRegistryError(RegistryDomainError):
    """Base error for petition registry operations.

    Every subclass carries the RegistryErrorCode it reports, so the
    lifecycle service can translate any core failure into a result
    without inspecting the exception type.

    Attributes:
        code: The classified error code.
    """

    code: RegistryErrorCode = RegistryErrorCode.INVALID_INPUT

    def __init__(self, message: str = "", code: RegistryErrorCode | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message or self.code.label)


class PetitionRuleViolationError(PetitionRegistryError):
    """Raised when proposed petition fields fail a validation rule.

    Attributes:
        code: The code of the first failing rule.
    """

    def __init__(self, code: RegistryErrorCode, detail: str | None = None) -> None:
        message = f"{code.label}: {detail}" if detail else code.label
        super().__init__(message, code=code)


class PetitionNotFoundError(PetitionRegistryError):
    """Raised when a petition id has never been assigned.

    Attributes:
        petition_id: The id that was not found.
    """

    code = RegistryErrorCode.PETITION_NOT_FOUND

    def __init__(self, petition_id: int) -> None:
        self.petition_id = petition_id
        super().__init__(f"Petition not found: {petition_id}")


class TitleAlreadyIndexedError(PetitionRegistryError):
    """Raised when a title is already mapped to a petition id.

    Attributes:
        title: The colliding title.
        existing_id: The petition currently holding the title.
    """

    code = RegistryErrorCode.PETITION_ALREADY_EXISTS

    def __init__(self, title: str, existing_id: int) -> None:
        self.title = title
        self.existing_id = existing_id
        super().__init__(f"Title already used by petition {existing_id}: {title!r}")


class AuthorityAlreadySetError(PetitionRegistryError):
    """Raised when the authority principal is set a second time.

    Attributes:
        current_authority: The principal already installed.
    """

    code = RegistryErrorCode.UPDATE_NOT_ALLOWED

    def __init__(self, current_authority: str) -> None:
        self.current_authority = current_authority
        super().__init__(f"Authority already set to {current_authority}")


class InvalidPrincipalError(PetitionRegistryError):
    """Raised when a principal is blank or is the null-sentinel address.

    Attributes:
        principal: The rejected principal.
    """

    code = RegistryErrorCode.INVALID_INPUT

    def __init__(self, principal: str) -> None:
        self.principal = principal
        super().__init__(f"Invalid principal: {principal!r}")


class AuthorityNotSetError(PetitionRegistryError):
    """Raised when an operation needs the authority before one is set."""

    code = RegistryErrorCode.AUTHORITY_NOT_SET

    def __init__(self) -> None:
        super().__init__("Registry authority has not been set")


class NotAuthorityError(PetitionRegistryError):
    """Raised when a non-authority caller changes registry configuration.

    Attributes:
        caller: The principal that attempted the change.
    """

    code = RegistryErrorCode.NOT_AUTHORIZED

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"Caller {caller} is not the registry authority")


class InvalidConfigurationValueError(PetitionRegistryError):
    """Raised when a configuration value is out of range.

    Attributes:
        setting: Name of the setting.
        value: The rejected value.
    """

    code = RegistryErrorCode.INVALID_INPUT

    def __init__(self, setting: str, value: int, requirement: str) -> None:
        self.setting = setting
        self.value = value
        super().__init__(f"{setting} must be {requirement}, got {value}")


class FeeSettlementError(PetitionRegistryError):
    """Raised by the fee settlement collaborator when it rejects a transfer.

    Attributes:
        amount: Transfer amount.
        payer: Paying principal.
        payee: Receiving principal.
        reason: Collaborator-supplied rejection reason.
    """

    code = RegistryErrorCode.FEE_SETTLEMENT_FAILED

    def __init__(self, amount: int, payer: str, payee: str, reason: str) -> None:
        self.amount = amount
        self.payer = payer
        self.payee = payee
        self.reason = reason
        super().__init__(
            f"Fee transfer of {amount} from {payer} to {payee} rejected: {reason}"
        )


class RegistryPersistenceError(PetitionRegistryError):
    """Raised by the persistence layer when a read or write fails.

    Attributes:
        operation: The persistence operation that failed.
        reason: Underlying failure description.
    """

    code = RegistryErrorCode.PERSISTENCE_FAILED

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Registry persistence failed during {operation}: {reason}")
