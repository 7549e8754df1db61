"""Domain exception hierarchy for the catalog service.

Every error carries a human-readable ``message`` that the admin client shows
verbatim, plus an HTTP status used by the error handler middleware.
"""

from typing import Optional


class ErrorCategory:
    """Error categories for structured error responses"""
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found_error"
    CONFLICT = "conflict_error"
    TRANSACTION = "transaction_error"
    DATABASE = "database_error"
    AUTHENTICATION = "authentication_error"
    INTERNAL = "internal_error"


class CatalogError(Exception):
    """Base catalog error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Malformed or missing input; fixable by correcting the request."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details=details,
        )


class NotFoundError(CatalogError):
    """A referenced id does not exist."""

    def __init__(self, message: str, resource: Optional[str] = None):
        details = {"resource": resource} if resource else {}
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
            details=details,
        )


class ConflictError(CatalogError):
    """Operation blocked by a uniqueness or referential-integrity rule."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            status_code=409,
            details=details,
        )


class TransactionError(CatalogError):
    """Persistence failure during a multi-row mutation; nothing was applied."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.TRANSACTION,
            status_code=500,
            details=details,
        )
