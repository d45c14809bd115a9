"""
Admin session routes.
"""

from fastapi import APIRouter
import structlog

from models.auth import LoginRequest, SessionStatus
from services.session_service import get_session_service
from routes.common import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=SessionStatus)
async def login(data: LoginRequest):
    """
    Sign in as the admin.

    Raises:
        401: Credentials rejected
    """
    try:
        service = get_session_service()
        return service.login(data.username, data.password)

    except Exception as e:
        return handle_error(e)


@router.post("/check")
async def check_login():
    """Ask the catalog whether the current session is still valid."""
    try:
        service = get_session_service()
        return {"success": service.check_status()}

    except Exception as e:
        return handle_error(e)


@router.get("/status", response_model=SessionStatus)
async def session_status():
    """Local view of the session (no remote call)."""
    return get_session_service().status()


@router.post("/logout", status_code=204)
async def logout():
    """Sign out and drop the local session."""
    try:
        get_session_service().logout()
        return None

    except Exception as e:
        return handle_error(e)
