"""Petition validation domain service.

Pure, stateless checks for proposed petition fields. Each check returns
the RegistryErrorCode of the first failing rule, or None when every rule
passes. The order of CREATION_RULES is part of the registry's external
contract: callers branch on which code they get back, so a draft that
breaks several rules must always report the same one.

Creation rule order:
    1. registry below capacity             MAX_PETITIONS_EXCEEDED
    2. title 1-100 chars                    INVALID_TITLE
    3. description 1-500 chars              INVALID_DESCRIPTION
    4. target > 0                           INVALID_TARGET
    5. deadline after current height        INVALID_DEADLINE
    6. category policy|environment|social   INVALID_CATEGORY
    7. priority 0-10                        INVALID_PRIORITY
    8. location <= 100 chars                INVALID_LOCATION
    9. at most 10 tags                      INVALID_TAGS
    10. min signatures > 0                  INVALID_MIN_SIGNATURES
    11. max extension 0-30                  INVALID_MAX_EXTENSION
    12. title not already indexed           PETITION_ALREADY_EXISTS
    13. authority configured                AUTHORITY_NOT_SET
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from petition_registry.domain.errors.registry import (
    PetitionRuleViolationError,
    RegistryErrorCode,
)
from petition_registry.domain.models.petition import (
    MAX_DESCRIPTION_LENGTH,
    MAX_EXTENSION_LIMIT,
    MAX_LOCATION_LENGTH,
    MAX_PRIORITY,
    MAX_TAGS,
    MAX_TITLE_LENGTH,
    Petition,
    PetitionCategory,
    PetitionDraft,
)
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.title_index import TitleIndex


@dataclass(frozen=True)
class CreationContext:
    """Registry state a creation draft is checked against."""

    configuration: RegistryConfiguration
    current_height: int
    title_index: TitleIndex


def is_valid_title(title: str) -> bool:
    return 0 < len(title) <= MAX_TITLE_LENGTH


def is_valid_description(description: str) -> bool:
    return 0 < len(description) <= MAX_DESCRIPTION_LENGTH


def is_valid_target(target_signatures: int) -> bool:
    return target_signatures > 0


CreationRule = Callable[[PetitionDraft, CreationContext], bool]

CREATION_RULES: tuple[tuple[RegistryErrorCode, CreationRule], ...] = (
    (
        RegistryErrorCode.MAX_PETITIONS_EXCEEDED,
        lambda draft, ctx: not ctx.configuration.at_capacity,
    ),
    (RegistryErrorCode.INVALID_TITLE, lambda draft, ctx: is_valid_title(draft.title)),
    (
        RegistryErrorCode.INVALID_DESCRIPTION,
        lambda draft, ctx: is_valid_description(draft.description),
    ),
    (
        RegistryErrorCode.INVALID_TARGET,
        lambda draft, ctx: is_valid_target(draft.target_signatures),
    ),
    (
        RegistryErrorCode.INVALID_DEADLINE,
        lambda draft, ctx: draft.deadline > ctx.current_height,
    ),
    (
        RegistryErrorCode.INVALID_CATEGORY,
        lambda draft, ctx: PetitionCategory.parse(draft.category) is not None,
    ),
    (
        RegistryErrorCode.INVALID_PRIORITY,
        lambda draft, ctx: 0 <= draft.priority <= MAX_PRIORITY,
    ),
    (
        RegistryErrorCode.INVALID_LOCATION,
        lambda draft, ctx: len(draft.location) <= MAX_LOCATION_LENGTH,
    ),
    (RegistryErrorCode.INVALID_TAGS, lambda draft, ctx: len(draft.tags) <= MAX_TAGS),
    (
        RegistryErrorCode.INVALID_MIN_SIGNATURES,
        lambda draft, ctx: draft.min_signatures > 0,
    ),
    (
        RegistryErrorCode.INVALID_MAX_EXTENSION,
        lambda draft, ctx: 0 <= draft.max_extension <= MAX_EXTENSION_LIMIT,
    ),
    (
        RegistryErrorCode.PETITION_ALREADY_EXISTS,
        lambda draft, ctx: not ctx.title_index.contains(draft.title),
    ),
    (
        RegistryErrorCode.AUTHORITY_NOT_SET,
        lambda draft, ctx: ctx.configuration.has_authority,
    ),
)


def check_creation(
    draft: PetitionDraft, context: CreationContext
) -> RegistryErrorCode | None:
    """Return the first failing creation rule, or None if the draft is valid."""
    for code, rule in CREATION_RULES:
        if not rule(draft, context):
            return code
    return None


def validate_creation(draft: PetitionDraft, context: CreationContext) -> None:
    """Raise for the first failing creation rule.

    Raises:
        PetitionRuleViolationError: Carrying the failing rule's code.
    """
    code = check_creation(draft, context)
    if code is not None:
        raise PetitionRuleViolationError(code, f"rejected petition {draft.title!r}")


def check_content(
    title: str, description: str, target_signatures: int
) -> RegistryErrorCode | None:
    """Check the editable fields (title, description, target) in creation order."""
    if not is_valid_title(title):
        return RegistryErrorCode.INVALID_TITLE
    if not is_valid_description(description):
        return RegistryErrorCode.INVALID_DESCRIPTION
    if not is_valid_target(target_signatures):
        return RegistryErrorCode.INVALID_TARGET
    return None


def check_update(
    petition: Petition | None,
    caller: str,
    title: str,
    description: str,
    target_signatures: int,
    title_index: TitleIndex,
) -> RegistryErrorCode | None:
    """Check an edit of an existing petition.

    Order: petition exists, caller is the creator, petition is active,
    edited fields are valid, new title is not held by another petition.

    A new target below the signatures already recorded is rejected as
    INVALID_TARGET, since a petition can never hold more signatures than
    its target.
    """
    if petition is None:
        return RegistryErrorCode.PETITION_NOT_FOUND
    if petition.creator != caller:
        return RegistryErrorCode.NOT_AUTHORIZED
    if not petition.is_active:
        return RegistryErrorCode.PETITION_CLOSED
    code = check_content(title, description, target_signatures)
    if code is not None:
        return code
    if target_signatures < petition.current_signatures:
        return RegistryErrorCode.INVALID_TARGET
    holder = title_index.lookup(title)
    if holder is not None and holder != petition.petition_id:
        return RegistryErrorCode.PETITION_ALREADY_EXISTS
    return None


def check_close(petition: Petition | None, caller: str) -> RegistryErrorCode | None:
    """Check that ``caller`` may close ``petition``."""
    if petition is None:
        return RegistryErrorCode.PETITION_NOT_FOUND
    if petition.creator != caller:
        return RegistryErrorCode.NOT_AUTHORIZED
    if not petition.is_active:
        return RegistryErrorCode.PETITION_CLOSED
    return None


def check_signature_increment(
    petition: Petition | None, amount: int
) -> RegistryErrorCode | None:
    """Check that ``amount`` signatures may be added to ``petition``.

    Any caller may record signatures; only the petition state and the
    target bound are checked.
    """
    if petition is None:
        return RegistryErrorCode.PETITION_NOT_FOUND
    if not petition.is_active:
        return RegistryErrorCode.PETITION_CLOSED
    if amount <= 0:
        return RegistryErrorCode.INVALID_INPUT
    if petition.current_signatures + amount > petition.target_signatures:
        return RegistryErrorCode.INVALID_UPDATE_PARAM
    return None
