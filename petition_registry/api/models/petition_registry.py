"""Petition registry API request/response models.

Request models only check shape and types. Every domain rule (lengths,
ranges, categories, signs) is left to the registry so that rejections
carry the registry's own error codes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from petition_registry.domain.models.petition import Petition, PetitionUpdate
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)


class SetAuthorityRequest(BaseModel):
    """Request to install the registry authority."""

    principal: str = Field(..., description="Authority principal (set once)")


class SetCreationFeeRequest(BaseModel):
    """Request to change the creation fee."""

    fee: int = Field(..., description="Flat fee charged per petition creation")


class SetMaxPetitionsRequest(BaseModel):
    """Request to change the petition capacity."""

    max_petitions: int = Field(..., description="Capacity ceiling for created petitions")


class CreatePetitionRequest(BaseModel):
    """Request to create a petition.

    Attributes:
        title: Globally unique title (1-100 chars).
        description: Body text (1-500 chars).
        target_signatures: Signatures sought (> 0).
        deadline: Block height after which the petition lapses.
        category: policy, environment or social.
        priority: 0-10.
        location: Free-form location (<= 100 chars).
        tags: Up to 10 tags.
        min_signatures: Informational threshold (> 0).
        max_extension: Informational extension cap (0-30).
    """

    title: str
    description: str
    target_signatures: int
    deadline: int
    category: str
    priority: int
    location: str = ""
    tags: list[str] = Field(default_factory=list)
    min_signatures: int
    max_extension: int


class CreatePetitionResponse(BaseModel):
    """Response for a created petition."""

    petition_id: int


class UpdatePetitionRequest(BaseModel):
    """Request to edit a petition's title, description and target."""

    title: str
    description: str
    target_signatures: int


class IncrementSignaturesRequest(BaseModel):
    """Request to record more signatures."""

    amount: int = Field(..., description="Signatures to add (> 0)")


class OperationResponse(BaseModel):
    """Acknowledgement for mutating operations without a payload."""

    success: bool = True


class PetitionResponse(BaseModel):
    """A petition record."""

    petition_id: int
    creator: str
    title: str
    description: str
    target_signatures: int
    current_signatures: int
    deadline: int
    is_active: bool
    category: str
    priority: int
    location: str
    tags: list[str]
    timestamp: int
    status: str
    min_signatures: int
    max_extension: int

    @classmethod
    def from_domain(cls, petition: Petition) -> PetitionResponse:
        return cls.model_validate(petition.to_dict())


class PetitionUpdateResponse(BaseModel):
    """The latest edit recorded for a petition."""

    petition_id: int
    update_title: str
    update_description: str
    update_target: int
    update_timestamp: int
    updater: str

    @classmethod
    def from_domain(cls, update: PetitionUpdate) -> PetitionUpdateResponse:
        return cls(
            petition_id=update.petition_id,
            update_title=update.update_title,
            update_description=update.update_description,
            update_target=update.update_target,
            update_timestamp=update.update_timestamp,
            updater=update.updater,
        )


class PetitionCountResponse(BaseModel):
    count: int


class PetitionExistsResponse(BaseModel):
    title: str
    exists: bool


class RegistryConfigurationResponse(BaseModel):
    """Current registry-wide configuration."""

    petition_counter: int
    max_petitions: int
    creation_fee: int
    authority: str | None

    @classmethod
    def from_domain(
        cls, configuration: RegistryConfiguration
    ) -> RegistryConfigurationResponse:
        return cls.model_validate(configuration.to_dict())


class RegistryErrorResponse(BaseModel):
    """Error response for registry operations (RFC 7807).

    Attributes:
        type: Error type URI.
        title: Human-readable error title.
        status: HTTP status code.
        detail: Detailed error message.
        instance: Request path that caused the error.
        error_code: Numeric registry error code.
        error: Registry error name.
    """

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Human-readable error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Detailed error message")
    instance: str = Field(..., description="Request path that caused the error")
    error_code: int = Field(..., description="Numeric registry error code")
    error: str = Field(..., description="Registry error name")
