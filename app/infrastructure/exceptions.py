"""Infrastructure exceptions for document store and external service operations.

Store errors extend FitmyphoneException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import FitmyphoneException, ResourceNotFoundException


class StoreException(FitmyphoneException):
    """Base exception for document store operations."""


class StorePermissionError(StoreException):
    """Firestore rejected the request (HTTP 403).

    Callers get only the generic message; path and operation stay on the
    exception for the store error emitter and never reach response details.
    """

    def __init__(self, path: str, operation: str, detail: str | None = None) -> None:
        super().__init__("The data store rejected this operation.", "STORE_PERMISSION_DENIED")
        self.path = path
        self.operation = operation
        self.detail = detail


class DocumentExistsError(StoreException):
    """Raised when a create targets a document ID that already exists (409 ALREADY_EXISTS)."""

    def __init__(self, path: str) -> None:
        super().__init__("Document already exists", "DOCUMENT_EXISTS")
        self.path = path


class TransactionAbortedError(StoreException):
    """Raised when Firestore aborts a transaction because of contention (409 ABORTED)."""

    def __init__(self, attempts: int | None = None) -> None:
        details = {"attempts": attempts} if attempts is not None else {}
        super().__init__(
            "The operation conflicted with a concurrent change. Please retry.",
            "TRANSACTION_ABORTED",
            details,
        )


class DocumentMissingError(ResourceNotFoundException):
    """Raised when an update precondition fails because the document does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__("document", path)


class ExternalServiceError(FitmyphoneException):
    """An upstream Google/Firebase API answered with an unexpected error."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(
            f"{service} request failed",
            "UPSTREAM_SERVICE_ERROR",
            {"service": service, "reason": reason},
        )
