from __future__ import annotations

import logging
import time
from uuid import UUID

from jose import JWTError, jwt

from tenantnotes.core.principal import ROLES, Principal

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies the signed session tokens that carry a principal.

    Tokens are stateless: there is no revocation list, so a token stays valid
    until its ``exp`` claim passes.
    """

    def __init__(self, secret: str, *, algorithm: str = "HS256", default_ttl_seconds: int = 86400) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.default_ttl_seconds = default_ttl_seconds

    def issue(self, principal: Principal, ttl_seconds: int | None = None) -> str:
        now = int(time.time())
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        claims = {
            "sub": str(principal.user_id),
            "email": principal.email,
            "role": principal.role,
            "tenant_id": str(principal.tenant_id),
            "tenant_slug": principal.tenant_slug,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Principal | None:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info("Rejected session token: %s", exc)
            return None

        try:
            return _principal_from_claims(claims)
        except (KeyError, TypeError, ValueError) as exc:
            logger.info("Rejected session token with malformed claims: %s", exc)
            return None


def _principal_from_claims(claims: dict) -> Principal:
    role = claims["role"]
    if role not in ROLES:
        raise ValueError(f"unknown role {role!r}")

    subject = claims["sub"]
    email = claims["email"]
    tenant_id = claims["tenant_id"]
    tenant_slug = claims["tenant_slug"]
    if not all(isinstance(value, str) for value in (subject, email, tenant_id, tenant_slug)):
        raise TypeError("sub, email, tenant_id and tenant_slug claims must be strings")

    return Principal(
        user_id=UUID(subject),
        email=email,
        role=role,
        tenant_id=UUID(tenant_id),
        tenant_slug=tenant_slug,
    )
