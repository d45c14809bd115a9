"""
Custom exception classes for the application.

Every error carries a code, a user-facing message and an HTTP status so
routes can turn it into the standard error body.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class PreconditionError(AppError):
    """Operation called in a state that does not allow it (409)."""

    def __init__(
        self,
        message: str,
        code: str = "PRECONDITION_FAILED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class AuthenticationError(AppError):
    """Admin session missing, expired or rejected (401)."""

    def __init__(
        self,
        message: str = "Not signed in",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="AUTHENTICATION_FAILED",
            message=message,
            status_code=401,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# REMOTE CATALOG ERRORS
# ===================

REMOTE_FALLBACK_MESSAGE = "The catalog service could not complete the request"


class RemoteError(ExternalServiceError):
    """
    Remote catalog call failed.

    Carries the server-provided message when there is one,
    a generic fallback otherwise.
    """

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        remote_status: Optional[int] = None
    ):
        super().__init__(
            service="catalog_api",
            message=message or REMOTE_FALLBACK_MESSAGE,
            details={"operation": operation, "remote_status": remote_status}
        )
        self.code = "REMOTE_ERROR"
        self.status_code = 502
        self.operation = operation
        self.remote_status = remote_status


# ===================
# PRODUCT EDITOR ERRORS
# ===================

class InvalidImageUrlError(ValidationError):
    """Image URL is not an https:// address."""

    def __init__(self, candidate: str):
        super().__init__(
            code="INVALID_IMAGE_URL",
            message="Image URL must start with https://",
            details={"provided": candidate}
        )


class InvalidFieldError(ValidationError):
    """Unknown draft field or a value the field cannot hold."""

    def __init__(self, field: str, reason: str, value: Any = None):
        super().__init__(
            code="INVALID_FIELD",
            message=f"Invalid value for {field}: {reason}",
            details={"field": field, "provided": value}
        )


class InvalidRecordError(ValidationError):
    """Catalog record holds a value the editor cannot take (e.g. a negative price)."""

    def __init__(self, product_id: str, field: str, reason: str):
        super().__init__(
            code="INVALID_PRODUCT_RECORD",
            message=f"Product {product_id} cannot be edited: {field} {reason}",
            details={"id": product_id, "field": field}
        )


class ImageNotFoundError(NotFoundError):
    """No image at the requested position of the draft's image list."""

    def __init__(self, index: int, size: int):
        super().__init__(
            resource="Image",
            identifier=str(index),
            code="IMAGE_NOT_FOUND"
        )
        self.details["size"] = size


class MissingEditTargetError(PreconditionError):
    """Edit submit without the identifier of the record being edited."""

    def __init__(self):
        super().__init__(
            code="EDIT_TARGET_MISSING",
            message="No product selected to edit"
        )


class MissingEditRecordError(PreconditionError):
    """Edit mode requested without an existing record to seed from."""

    def __init__(self):
        super().__init__(
            code="EDIT_RECORD_MISSING",
            message="Edit mode requires an existing product"
        )


class SubmitInProgressError(PreconditionError):
    """A submit is already waiting on the remote catalog."""

    def __init__(self):
        super().__init__(
            code="SUBMIT_IN_PROGRESS",
            message="A submit is already in progress"
        )


# ===================
# CATALOG ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found in the current catalog page."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class InvalidPageError(ValidationError):
    """Requested page is outside the known pagination range."""

    def __init__(self, page: int, total_pages: int):
        super().__init__(
            code="INVALID_PAGE",
            message=f"Page must be between 1 and {total_pages}",
            details={"provided": page, "total_pages": total_pages}
        )
