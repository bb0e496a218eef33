from tenantnotes.core.security.dependencies import get_token_service
from tenantnotes.core.security.passwords import hash_password, verify_password
from tenantnotes.core.security.tokens import TokenService

__all__ = ["TokenService", "get_token_service", "hash_password", "verify_password"]
