"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    PreconditionError,
    AuthenticationError,
    ExternalServiceError,

    # Remote catalog
    RemoteError,
    REMOTE_FALLBACK_MESSAGE,

    # Product editor
    InvalidImageUrlError,
    InvalidFieldError,
    InvalidRecordError,
    ImageNotFoundError,
    MissingEditTargetError,
    MissingEditRecordError,
    SubmitInProgressError,

    # Catalog
    ProductNotFoundError,
    InvalidPageError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "PreconditionError",
    "AuthenticationError",
    "ExternalServiceError",

    # Remote catalog
    "RemoteError",
    "REMOTE_FALLBACK_MESSAGE",

    # Product editor
    "InvalidImageUrlError",
    "InvalidFieldError",
    "InvalidRecordError",
    "ImageNotFoundError",
    "MissingEditTargetError",
    "MissingEditRecordError",
    "SubmitInProgressError",

    # Catalog
    "ProductNotFoundError",
    "InvalidPageError",
]
