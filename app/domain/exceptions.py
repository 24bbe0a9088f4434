"""Domain exceptions for the Fitmyphone application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class FitmyphoneException(Exception):
    """Base exception for all Fitmyphone application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FitmyphoneException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(FitmyphoneException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ReauthenticationRequiredException(FitmyphoneException):
    """Raised when the auth provider needs a fresh sign-in before a sensitive operation."""

    def __init__(self) -> None:
        super().__init__(
            "Please sign out and sign in again to continue.",
            "REAUTHENTICATION_REQUIRED",
        )


class AuthorizationException(FitmyphoneException):
    """Raised when the user lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'contribution', 'user').
            action: Optional action that was attempted (e.g. 'approve').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class AccountSuspendedException(FitmyphoneException):
    """Raised when a suspended user attempts a write."""

    def __init__(self, uid: str) -> None:
        super().__init__(
            "This account is suspended",
            "ACCOUNT_SUSPENDED",
            {"uid": uid},
        )


class UserAlreadyExistsException(FitmyphoneException):
    """Raised when registering an email that the auth provider already knows."""

    def __init__(self) -> None:
        super().__init__(
            "An account with this email already exists",
            "USER_ALREADY_EXISTS",
            {},
        )


class ResourceNotFoundException(FitmyphoneException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'contribution', 'accessory').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ContributionAlreadyReviewedException(FitmyphoneException):
    """Raised when a review action targets a contribution in the wrong status."""

    def __init__(self, contribution_id: str, status: str) -> None:
        super().__init__(
            f"Contribution {contribution_id} is already {status}",
            "CONTRIBUTION_ALREADY_REVIEWED",
            {"contribution_id": contribution_id, "status": status},
        )


class SearchTermTooShortException(ValidationException):
    """Raised when a search term is shorter than the configured minimum."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            f"Search term must be at least {min_length} characters", field="term"
        )
        self.error_code = "SEARCH_TERM_TOO_SHORT"
        self.details["min_length"] = min_length


class CategoryAlreadyExistsException(FitmyphoneException):
    """Raised when adding a category whose name exists (case-insensitive)."""

    def __init__(self, name: str) -> None:
        super().__init__(
            "This category already exists.",
            "CATEGORY_ALREADY_EXISTS",
            {"name": name},
        )


class MasterModelAlreadyExistsException(FitmyphoneException):
    """Raised when adding a master model that is already listed."""

    def __init__(self, name: str) -> None:
        super().__init__(
            "Model already exists.",
            "MASTER_MODEL_ALREADY_EXISTS",
            {"name": name},
        )


class SuggestionServiceException(FitmyphoneException):
    """Raised when the LLM suggestion service fails or returns an unusable payload."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Something went wrong. Please try again.",
            "SUGGESTION_SERVICE_ERROR",
            {"reason": reason},
        )


class StoreNotConfiguredException(FitmyphoneException):
    """Raised when an operation requires Firestore but credentials are not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a document store that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class ServiceNotConfiguredException(FitmyphoneException):
    """Raised when an external Firebase service (auth, messaging) is not configured."""

    def __init__(self, service: str) -> None:
        super().__init__(
            f"{service} is not configured",
            "SERVICE_UNAVAILABLE",
            {"service": service},
        )
