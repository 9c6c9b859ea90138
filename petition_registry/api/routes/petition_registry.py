"""Petition registry API routes.

FastAPI router exposing every registry operation. Handlers resolve the
calling principal, call PetitionRegistryService and translate failed
RegistryResults into RFC 7807 problem details carrying the numeric
registry error code.

HTTP status by error code:
- NOT_AUTHORIZED -> 403
- PETITION_NOT_FOUND -> 404
- PETITION_CLOSED, PETITION_ALREADY_EXISTS, UPDATE_NOT_ALLOWED,
  MAX_PETITIONS_EXCEEDED, AUTHORITY_NOT_SET -> 409
- FEE_SETTLEMENT_FAILED, PERSISTENCE_FAILED -> 503
- anything else -> 400
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from petition_registry.api.auth.principal_auth import get_principal
from petition_registry.api.dependencies.petition_registry import (
    get_petition_registry_service,
)
from petition_registry.api.models.petition_registry import (
    CreatePetitionRequest,
    CreatePetitionResponse,
    IncrementSignaturesRequest,
    OperationResponse,
    PetitionCountResponse,
    PetitionExistsResponse,
    PetitionResponse,
    PetitionUpdateResponse,
    RegistryConfigurationResponse,
    RegistryErrorResponse,
    SetAuthorityRequest,
    SetCreationFeeRequest,
    SetMaxPetitionsRequest,
    UpdatePetitionRequest,
)
from petition_registry.application.dtos.registry_result import RegistryResult
from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)
from petition_registry.domain.errors.registry import RegistryErrorCode

router = APIRouter(prefix="/v1/petition-registry", tags=["petition-registry"])

ERROR_TYPE_BASE = "urn:petition-registry:error:"

_STATUS_BY_CODE: dict[RegistryErrorCode, int] = {
    RegistryErrorCode.NOT_AUTHORIZED: 403,
    RegistryErrorCode.PETITION_NOT_FOUND: 404,
    RegistryErrorCode.PETITION_CLOSED: 409,
    RegistryErrorCode.PETITION_ALREADY_EXISTS: 409,
    RegistryErrorCode.UPDATE_NOT_ALLOWED: 409,
    RegistryErrorCode.MAX_PETITIONS_EXCEEDED: 409,
    RegistryErrorCode.AUTHORITY_NOT_SET: 409,
    RegistryErrorCode.FEE_SETTLEMENT_FAILED: 503,
    RegistryErrorCode.PERSISTENCE_FAILED: 503,
}

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": RegistryErrorResponse, "description": "Rejected by a registry rule"},
    401: {"description": "X-Principal header missing"},
    403: {"model": RegistryErrorResponse, "description": "Caller not authorized"},
    404: {"model": RegistryErrorResponse, "description": "Petition not found"},
    409: {"model": RegistryErrorResponse, "description": "Conflicts with registry state"},
    503: {"model": RegistryErrorResponse, "description": "Collaborator failure"},
}


def status_for_code(code: RegistryErrorCode) -> int:
    """Return the HTTP status for a registry error code."""
    return _STATUS_BY_CODE.get(code, 400)


def _problem(request: Request, code: RegistryErrorCode, detail: str) -> HTTPException:
    status_code = status_for_code(code)
    return HTTPException(
        status_code=status_code,
        detail={
            "type": f"{ERROR_TYPE_BASE}{code.label}",
            "title": code.label,
            "status": status_code,
            "detail": detail,
            "instance": str(request.url),
            "error_code": int(code),
            "error": code.label,
        },
    )


def _raise_on_failure(request: Request, result: RegistryResult) -> None:
    if not result.success:
        code = result.error_code or RegistryErrorCode.INVALID_INPUT
        raise _problem(request, code, result.error_message or code.label)


# =============================================================================
# Configuration
# =============================================================================


@router.put(
    "/authority",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Install the registry authority (once)",
)
async def set_authority(
    body: SetAuthorityRequest,
    request: Request,
    _caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    """Install the authority principal. Fails once an authority is set."""
    result = await service.set_authority_contract(body.principal)
    _raise_on_failure(request, result)
    return OperationResponse()


@router.put(
    "/creation-fee",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Change the creation fee (authority only)",
)
async def set_creation_fee(
    body: SetCreationFeeRequest,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    result = await service.set_creation_fee(caller, body.fee)
    _raise_on_failure(request, result)
    return OperationResponse()


@router.put(
    "/max-petitions",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Change the petition capacity (authority only)",
)
async def set_max_petitions(
    body: SetMaxPetitionsRequest,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    result = await service.set_max_petitions(caller, body.max_petitions)
    _raise_on_failure(request, result)
    return OperationResponse()


@router.get(
    "/configuration",
    response_model=RegistryConfigurationResponse,
    summary="Get the registry configuration",
)
async def get_configuration(
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> RegistryConfigurationResponse:
    return RegistryConfigurationResponse.from_domain(
        service.get_registry_configuration().unwrap()
    )


# =============================================================================
# Petitions
# =============================================================================


@router.post(
    "/petitions",
    response_model=CreatePetitionResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Create a petition",
    description=(
        "Create a petition owned by the calling principal. The creation fee "
        "is charged from the caller to the registry authority."
    ),
)
async def create_petition(
    body: CreatePetitionRequest,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> CreatePetitionResponse:
    result = await service.create_petition(
        caller=caller,
        title=body.title,
        description=body.description,
        target_signatures=body.target_signatures,
        deadline=body.deadline,
        category=body.category,
        priority=body.priority,
        location=body.location,
        tags=body.tags,
        min_signatures=body.min_signatures,
        max_extension=body.max_extension,
    )
    _raise_on_failure(request, result)
    return CreatePetitionResponse(petition_id=result.unwrap())


# Static paths are registered before /petitions/{petition_id}.
@router.get(
    "/petitions/count",
    response_model=PetitionCountResponse,
    summary="Count petitions ever created",
)
async def get_petition_count(
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> PetitionCountResponse:
    return PetitionCountResponse(count=service.get_petition_count().unwrap())


@router.get(
    "/petitions/exists",
    response_model=PetitionExistsResponse,
    summary="Check whether a title is taken",
)
async def check_petition_existence(
    title: str = Query(..., description="Exact petition title"),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> PetitionExistsResponse:
    return PetitionExistsResponse(
        title=title,
        exists=service.check_petition_existence(title).unwrap(),
    )


@router.get(
    "/petitions/{petition_id}",
    response_model=PetitionResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Get a petition",
)
async def get_petition(
    petition_id: int,
    request: Request,
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> PetitionResponse:
    petition = service.get_petition(petition_id).unwrap()
    if petition is None:
        raise _problem(
            request,
            RegistryErrorCode.PETITION_NOT_FOUND,
            f"Petition not found: {petition_id}",
        )
    return PetitionResponse.from_domain(petition)


@router.get(
    "/petitions/{petition_id}/update",
    response_model=PetitionUpdateResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Get the latest edit of a petition",
)
async def get_petition_update(
    petition_id: int,
    request: Request,
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> PetitionUpdateResponse:
    update = service.get_petition_update(petition_id).unwrap()
    if update is None:
        raise _problem(
            request,
            RegistryErrorCode.PETITION_NOT_FOUND,
            f"No update recorded for petition {petition_id}",
        )
    return PetitionUpdateResponse.from_domain(update)


@router.put(
    "/petitions/{petition_id}",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Edit a petition (creator only)",
)
async def update_petition(
    petition_id: int,
    body: UpdatePetitionRequest,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    result = await service.update_petition(
        caller=caller,
        petition_id=petition_id,
        title=body.title,
        description=body.description,
        target_signatures=body.target_signatures,
    )
    _raise_on_failure(request, result)
    return OperationResponse()


@router.post(
    "/petitions/{petition_id}/close",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Close a petition (creator only)",
)
async def close_petition(
    petition_id: int,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    result = await service.close_petition(caller, petition_id)
    _raise_on_failure(request, result)
    return OperationResponse()


@router.post(
    "/petitions/{petition_id}/signatures",
    response_model=OperationResponse,
    responses=_ERROR_RESPONSES,
    summary="Record signatures on a petition",
)
async def increment_signatures(
    petition_id: int,
    body: IncrementSignaturesRequest,
    request: Request,
    caller: str = Depends(get_principal),
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> OperationResponse:
    result = await service.increment_signatures(caller, petition_id, body.amount)
    _raise_on_failure(request, result)
    return OperationResponse()
