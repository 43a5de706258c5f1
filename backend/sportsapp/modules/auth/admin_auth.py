"""
Admin credentials.

There is a single admin principal configured through ADMIN_USERNAME and
either ADMIN_PASSWORD_HASH (bcrypt, preferred) or ADMIN_PASSWORD.
"""

import secrets

from sportsapp.core.config import settings
from sportsapp.core.exceptions import AuthenticationError, ValidationError
from sportsapp.core.logging_config import logger
from sportsapp.core.security import verify_password

INVALID_ADMIN_CREDENTIALS = "Invalid admin credentials"


def admin_configured() -> bool:
    return bool(settings.ADMIN_USERNAME and (settings.ADMIN_PASSWORD_HASH or settings.ADMIN_PASSWORD))


def check_admin_password(password: str) -> bool:
    if settings.ADMIN_PASSWORD_HASH:
        return verify_password(password, settings.ADMIN_PASSWORD_HASH)
    if settings.ADMIN_PASSWORD:
        return secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
    return False


def authenticate_admin(username: str, password: str) -> str:
    """Validate admin credentials and return the admin username"""
    if not username or not password:
        raise ValidationError("Username and password are required")

    valid_username = secrets.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
    if not (valid_username and check_admin_password(password)):
        logger.log_auth_event("admin_login", success=False, username=username, reason="invalid_credentials")
        raise AuthenticationError(INVALID_ADMIN_CREDENTIALS)

    logger.log_auth_event("admin_login", success=True, username=username)
    return settings.ADMIN_USERNAME
