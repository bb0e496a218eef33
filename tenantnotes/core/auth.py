from __future__ import annotations

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tenantnotes.core.errors import unauthorized
from tenantnotes.core.principal import Principal
from tenantnotes.core.security.dependencies import get_token_service
from tenantnotes.core.security.tokens import TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise unauthorized()

    principal = token_service.verify(credentials.credentials)
    if principal is None:
        raise unauthorized()

    request.state.principal = principal
    logger.debug("Authenticated user=%s tenant=%s role=%s", principal.user_id, principal.tenant_id, principal.role)
    return principal
