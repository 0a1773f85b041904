"""
Authentication and authorization exceptions.
"""

from satstream.domain.exceptions.base import SatStreamException


class InvalidTokenError(SatStreamException):
    """Raised when JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class ExpiredTokenError(SatStreamException):
    """Raised when JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class UserBannedError(SatStreamException):
    """Raised when a banned account tries to act."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is banned", code="USER_BANNED")


class AdminRequiredError(SatStreamException):
    """Raised when a non-admin actor calls an admin operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Admin privileges required for {operation}",
            code="ADMIN_REQUIRED",
        )
