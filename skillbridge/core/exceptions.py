from typing import Any, Optional


class SkillBridgeException(Exception):
    """Base exception for SkillBridge application"""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(SkillBridgeException):
    """Exception raised for malformed or out-of-range input"""
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(SkillBridgeException):
    """Exception raised for missing or invalid credentials"""
    status_code = 401
    code = "UNAUTHORIZED"


class AuthorizationError(SkillBridgeException):
    """Exception raised when an authenticated user is not entitled to an action"""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(SkillBridgeException):
    """Exception raised when a referenced entity does not exist"""
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(SkillBridgeException):
    """Exception raised for uniqueness or state-precondition violations"""
    status_code = 409
    code = "CONFLICT"


class RateLimitError(SkillBridgeException):
    """Exception raised when a client exceeds its request budget"""
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self, message: str, retry_after: int):
        super().__init__(message)
        self.retry_after = retry_after


class DatabaseError(SkillBridgeException):
    """Exception raised for unexpected storage failures"""
    pass


class ReviewError(ConflictError):
    """Exception raised for review precondition errors"""
    pass
