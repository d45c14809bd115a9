"""
Helpers shared by the API routes.
"""

from fastapi.responses import JSONResponse
import structlog

from services.session_service import get_session_service
from exceptions import AppError

logger = structlog.get_logger(__name__)


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# DEPENDENCIES
# ===================

def require_session() -> str:
    """
    Route dependency: the admin must be signed in.

    Raises:
        AuthenticationError: If there is no usable session token
    """
    return get_session_service().require()
