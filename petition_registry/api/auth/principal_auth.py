"""Principal header authentication.

Every mutating registry call acts on behalf of a principal. The API
takes it from the X-Principal header; deployments put an authenticating
gateway in front that sets the header.
"""

from typing import Annotated

import structlog
from fastapi import Header, HTTPException, Request, status

logger = structlog.get_logger(__name__)

PRINCIPAL_HEADER = "X-Principal"


def get_principal(
    request: Request,
    x_principal: Annotated[
        str | None,
        Header(description="Principal performing the operation."),
    ] = None,
) -> str:
    """Extract the calling principal from the X-Principal header.

    Returns:
        The principal with surrounding whitespace removed.

    Raises:
        HTTPException 401: If the header is missing or blank.
    """
    principal = (x_principal or "").strip()
    if not principal:
        logger.warning(
            "auth_failed",
            reason="missing_principal",
            path=request.url.path,
            request_ip=request.client.host if request.client else "unknown",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{PRINCIPAL_HEADER} header is required",
        )
    return principal
