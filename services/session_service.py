"""
Admin session service.

Holds the single admin session: the token issued at sign-in, the admin
uid and the expiry. The token is handed to the catalog client so every
remote call is authorized.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from integrations.catalog_api import CatalogApiClient, get_catalog_api_client
from models.auth import SessionStatus
from exceptions import AuthenticationError, RemoteError

logger = structlog.get_logger(__name__)


def expiry_from_millis(expired: Optional[int]) -> Optional[datetime]:
    """Convert the backend's epoch-milliseconds expiry to an aware datetime."""
    if expired is None:
        return None
    return datetime.fromtimestamp(expired / 1000, tz=timezone.utc)


class SessionService:
    """
    Single admin session.

    Sign-in stores the token; expiry is checked locally before the
    token is used and remotely by check_status().
    """

    def __init__(self, client: Optional[CatalogApiClient] = None):
        self.client = client or get_catalog_api_client()
        self._token: Optional[str] = self.client.token
        self._uid: Optional[str] = None
        self._expires_at: Optional[datetime] = None

    @property
    def token(self) -> Optional[str]:
        """Current token, or None when signed out or expired."""
        if self._token and self._is_expired():
            logger.info("session_expired", uid=self._uid)
            self._clear()
        return self._token

    def _is_expired(self) -> bool:
        if self._expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self._expires_at

    def _clear(self) -> None:
        self._token = None
        self._uid = None
        self._expires_at = None
        self.client.set_token(None)

    # ===================
    # OPERATIONS
    # ===================

    def login(self, username: str, password: str) -> SessionStatus:
        """
        Sign in as the admin.

        Raises:
            AuthenticationError: If the backend rejects the credentials
        """
        logger.info("admin_signing_in", username=username)

        try:
            result = self.client.sign_in(username, password)
        except RemoteError as e:
            logger.warning("admin_sign_in_failed", username=username, error=e.message)
            raise AuthenticationError(e.message)

        if not result.token:
            raise AuthenticationError(result.message or "Sign-in returned no token")

        self._token = result.token
        self._uid = result.uid
        self._expires_at = expiry_from_millis(result.expired)
        self.client.set_token(result.token)

        logger.info("admin_signed_in", uid=self._uid, expires_at=self._expires_at)
        return self.status()

    def check_status(self) -> bool:
        """
        Ask the backend whether the current token is still accepted.

        A rejected token clears the local session.
        """
        if not self.token:
            return False

        try:
            result = self.client.check_login()
        except RemoteError as e:
            logger.warning("admin_session_rejected", error=e.message)
            self._clear()
            return False

        if result.uid:
            self._uid = result.uid
        return result.success

    def logout(self) -> None:
        """Sign out remotely when possible, then drop the local session."""
        if self.token:
            try:
                self.client.sign_out()
            except RemoteError as e:
                logger.warning("admin_sign_out_failed", error=e.message)
        self._clear()
        logger.info("admin_signed_out")

    def status(self) -> SessionStatus:
        token = self.token
        return SessionStatus(
            authenticated=bool(token),
            uid=self._uid if token else None,
            expires_at=self._expires_at if token else None
        )

    def require(self) -> str:
        """
        Return the token or fail.

        Raises:
            AuthenticationError: If there is no usable token
        """
        token = self.token
        if not token:
            raise AuthenticationError()
        return token


# Singleton instance for convenience
_session_service: Optional[SessionService] = None

def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
