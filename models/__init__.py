"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    MessageResponse
)
from models.product import (
    EditorMode,
    ProductDraft,
    ProductRecord,
    Pagination,
    ProductListResponse,
    ProductPageResponse,
    UploadImageResponse,
    EditorOpenRequest,
    ImageInputRequest,
    EditorStateResponse,
    SubmitResponse
)
from models.auth import (
    LoginRequest,
    LoginResponse,
    LoginCheckResponse,
    SessionStatus
)

__all__ = [
    # Base
    "BaseSchema",
    "MessageResponse",

    # Product
    "EditorMode",
    "ProductDraft",
    "ProductRecord",
    "Pagination",
    "ProductListResponse",
    "ProductPageResponse",
    "UploadImageResponse",
    "EditorOpenRequest",
    "ImageInputRequest",
    "EditorStateResponse",
    "SubmitResponse",

    # Auth
    "LoginRequest",
    "LoginResponse",
    "LoginCheckResponse",
    "SessionStatus",
]
