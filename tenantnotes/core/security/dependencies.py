from tenantnotes.core.config import JWT_SECRET_PLACEHOLDER, settings
from tenantnotes.core.security.tokens import TokenService


def get_token_service() -> TokenService:
    secret = (settings.jwt_secret or "").strip()
    if not secret or secret == JWT_SECRET_PLACEHOLDER:
        raise ValueError("JWT_SECRET is not configured with a real signing secret")
    return TokenService(
        secret,
        algorithm=settings.jwt_algorithm,
        default_ttl_seconds=settings.auth_token_ttl_seconds,
    )
