"""
Custom Exceptions for SportsApp
===============================

Services raise these instead of HTTPException so the same rules apply
whether called from an endpoint or a script. Each class carries the HTTP
status the API exception handler responds with.

Usage:
    from sportsapp.core.exceptions import PostNotFoundError

    if not post:
        raise PostNotFoundError(post_id)
"""

from typing import Optional, Any, Dict


class SportsAppError(Exception):
    """Base exception for all SportsApp errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(SportsAppError):
    """Principal could not be authenticated"""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(SportsAppError):
    """Principal not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(SportsAppError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": str(resource_id)}
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Any):
        super().__init__("User", user_id)


class PostNotFoundError(ResourceNotFoundError):
    def __init__(self, post_id: Any):
        super().__init__("Post", post_id)


class CommentNotFoundError(ResourceNotFoundError):
    def __init__(self, comment_id: Any):
        super().__init__("Comment", comment_id)


class NotificationNotFoundError(ResourceNotFoundError):
    def __init__(self, notification_id: Any):
        super().__init__("Notification", notification_id)


class ConversationNotFoundError(ResourceNotFoundError):
    def __init__(self, conversation_id: Any):
        super().__init__("Conversation", conversation_id)


class DrillNotFoundError(ResourceNotFoundError):
    def __init__(self, drill_id: Any):
        super().__init__("Drill", drill_id)


class TryoutNotFoundError(ResourceNotFoundError):
    def __init__(self, tryout_id: Any):
        super().__init__("Tryout", tryout_id)


class TryoutApplicationNotFoundError(ResourceNotFoundError):
    def __init__(self, application_id: Any):
        super().__init__("Application", application_id)


class RedemptionNotFoundError(ResourceNotFoundError):
    def __init__(self, redemption_id: Any):
        super().__init__("Redemption", redemption_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(SportsAppError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateError(ValidationError):
    """Unique constraint would be violated (username, point, report, application)"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field)
        self.code = "DUPLICATE"


class InsufficientPointsError(ValidationError):
    """User tried to redeem more points than they hold"""

    def __init__(self, requested: int, available: int):
        super().__init__("Insufficient points")
        self.code = "INSUFFICIENT_POINTS"
        self.details = {"requested": requested, "available": available}


class UploadError(ValidationError):
    """Uploaded file rejected"""

    def __init__(self, message: str):
        super().__init__(message, field="file")
        self.code = "UPLOAD_REJECTED"


class InvalidStatusTransitionError(SportsAppError):
    """Workflow status change not allowed from the current status"""

    status_code = 409

    def __init__(self, resource_type: str, current: str, target: str):
        super().__init__(
            f"Cannot move {resource_type} from '{current}' to '{target}'",
            code="INVALID_STATUS_TRANSITION",
            details={"resource_type": resource_type, "current": current, "target": target}
        )


# ============================================
# External Service Errors
# ============================================

class ServiceNotConfiguredError(SportsAppError):
    """Optional integration has no credentials"""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="SERVICE_NOT_CONFIGURED")


class ExternalServiceError(SportsAppError):
    """Upstream API could not be reached or answered with an error"""

    status_code = 502

    def __init__(self, service: str, message: str):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", details={"service": service})


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: SportsAppError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict(),
        "detail": error.message,
    }
