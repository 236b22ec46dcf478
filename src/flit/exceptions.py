"""Exception hierarchy for the Flit domain core and API client."""

from typing import Any, Dict, Optional


class FlitException(Exception):
    """Base exception for Flit application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(FlitException):
    """Exception for resource not found errors."""

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message=message,
            status_code=404,
            details={"resource": resource, "identifier": identifier},
        )


class ValidationException(FlitException):
    """Exception for validation errors surfaced to the user."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = {"field_errors": field_errors or {}}
        merged.update(details or {})
        super().__init__(message=message, status_code=422, details=merged)


class InsufficientFundsError(ValidationException):
    """Raised when an amount exceeds the available balance."""

    def __init__(self, requested: Any, available: Any, balance: str = "liquidFunds"):
        super().__init__(
            message=f"Insufficient funds: requested {requested}, available {available}",
            details={
                "requested": str(requested),
                "available": str(available),
                "balance": balance,
            },
        )


class InvalidTurnError(ValidationException):
    """Raised when a user picks while another user is on the clock."""

    def __init__(self, user_id: str, current_user_id: Optional[str]):
        super().__init__(
            message=f"It is not {user_id}'s turn to pick",
            details={"user_id": user_id, "current_user_id": current_user_id},
        )


class AssetUnavailableError(ValidationException):
    """Raised when an asset cannot be acquired."""

    def __init__(self, asset_id: str, reason: str = "already picked"):
        super().__init__(
            message=f"Asset '{asset_id}' is unavailable: {reason}",
            details={"asset_id": asset_id, "reason": reason},
        )


class AssetLockedError(AssetUnavailableError):
    """Raised when the user has not completed the lessons an asset requires."""

    def __init__(self, asset_id: str, missing_lessons):
        super().__init__(asset_id, reason="required lessons not completed")
        self.details["missing_lessons"] = sorted(missing_lessons)


class InvalidJoinCodeError(ValidationException):
    """Raised for malformed league join codes."""

    def __init__(self, join_code: str):
        super().__init__(
            message="Join code must be 6 characters",
            field_errors={"joinCode": "must be 6 characters"},
            details={"join_code": join_code},
        )


class InvalidLineupError(ValidationException):
    """Raised when a lineup does not partition the portfolio slots."""


class InvalidStateError(FlitException):
    """Exception for operations not allowed in the current lifecycle state."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=409, details=details)


class PermissionDeniedError(FlitException):
    """Exception for actions the user is not allowed to perform."""

    def __init__(self, action: str, user_id: str):
        super().__init__(
            message=f"User '{user_id}' is not allowed to {action}",
            status_code=403,
            details={"action": action, "user_id": user_id},
        )


class ApiError(FlitException):
    """Error raised by the service layer for failed backend calls."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=status_code or 0, details=details)


class UnauthorizedError(ApiError):
    """Backend answered 401."""


class ForbiddenError(ApiError):
    """Backend answered 403."""


class ServerError(ApiError):
    """Backend answered with a 5xx status."""


class NetworkError(ApiError):
    """No response was received from the backend."""
