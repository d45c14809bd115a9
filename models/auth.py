"""
Admin session schemas.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema


class LoginRequest(BaseSchema):
    """Admin credentials."""

    username: str = Field(..., min_length=1, description="Admin e-mail")
    password: str = Field(..., min_length=1, description="Admin password")


class LoginResponse(BaseSchema):
    """Remote sign-in result. `expired` is epoch milliseconds."""

    success: bool
    message: str = ""
    uid: Optional[str] = None
    token: Optional[str] = None
    expired: Optional[int] = None


class LoginCheckResponse(BaseSchema):
    """Remote check of the current token."""

    success: bool
    uid: Optional[str] = None
    message: str = ""


class SessionStatus(BaseSchema):
    """Local view of the admin session."""

    authenticated: bool
    uid: Optional[str] = None
    expires_at: Optional[datetime] = None
