from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reporting.auth.jwt_handler import Identity
from reporting.auth.service import Authenticator
from reporting.core import config
from reporting.core.errors import AuthenticationError

security = HTTPBearer(auto_error=False)


@lru_cache()
def get_authenticator() -> Authenticator:
    """Process-wide authenticator, built once from configuration."""
    return Authenticator(config.load_token_settings(), config.INSTITUTION_EMAIL_DOMAIN)


def authorize(
    credentials: HTTPAuthorizationCredentials | None,
    authenticator: Authenticator,
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return authenticator.verify_token(credentials.credentials)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Identity:
    return authorize(credentials, authenticator)
