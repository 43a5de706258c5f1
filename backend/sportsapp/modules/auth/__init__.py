# Authentication module

from sportsapp.modules.auth.dependencies import (
    get_current_user,
    get_optional_user,
    get_optional_admin,
    require_admin,
    is_admin_request,
)
from sportsapp.modules.auth.admin_auth import authenticate_admin, admin_configured

__all__ = [
    "get_current_user",
    "get_optional_user",
    "get_optional_admin",
    "require_admin",
    "is_admin_request",
    "authenticate_admin",
    "admin_configured",
]
