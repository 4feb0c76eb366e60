"""Error hierarchy for portfolio operations.

Every error carries a machine-readable ``kind`` next to the human-readable
message, and maps to an HTTP status so routes can let it propagate.
"""
from fastapi import HTTPException


class PortfolioError(HTTPException):
    """Base exception for all portfolio operations."""

    kind = "portfolio_error"
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(status_code=status_code or type(self).status_code, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def with_context(self, intent: str) -> "PortfolioError":
        """Return a copy of this error with the message prefixed by ``intent``."""
        return type(self)(f"Failed to {intent}: {self.message}", status_code=self.status_code)

    def to_response(self) -> dict:
        return {"detail": self.message, "kind": self.kind}


class ValidationFailed(PortfolioError):
    """Input shape or constraint violation.

    ``reasons`` holds the field-level details; they are logged but never
    returned to the caller, who only sees the generic message.
    """

    kind = "validation_failed"
    status_code = 422

    def __init__(self, message: str, reasons: list[dict] | None = None, status_code: int | None = None):
        super().__init__(message, status_code)
        self.reasons = reasons or []

    def with_context(self, intent: str) -> "ValidationFailed":
        return ValidationFailed(
            f"Failed to {intent}: {self.message}",
            reasons=self.reasons,
            status_code=self.status_code,
        )


class Unauthenticated(PortfolioError):
    """No principal present on the request."""

    kind = "unauthenticated"
    status_code = 401


class NotFoundOrUnauthorized(PortfolioError):
    """A row-level check matched zero rows.

    Missing rows and rows owned by someone else are reported the same way
    so non-owners cannot probe for existence.
    """

    kind = "not_found_or_unauthorized"
    status_code = 404


class StorageProviderError(PortfolioError):
    """Upload or delete against the object store failed."""

    kind = "storage_provider_error"
    status_code = 502


class UnknownPersistenceError(PortfolioError):
    """Any other database failure."""

    kind = "unknown_persistence_error"
    status_code = 500


class ConstraintViolation(UnknownPersistenceError):
    """A uniqueness or foreign-key constraint rejected the write."""

    kind = "constraint_violation"
    status_code = 409
