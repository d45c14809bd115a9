"""
Remote catalog API client.

Thin wrapper over the course-style e-commerce admin API. Every call
carries the admin session token in the Authorization header.
"""

from typing import Any, Optional
import requests
import structlog

from config import settings
from exceptions import RemoteError
from models.base import MessageResponse
from models.auth import LoginResponse, LoginCheckResponse
from models.product import ProductListResponse, UploadImageResponse

logger = structlog.get_logger(__name__)

UPLOAD_FIELD_NAME = "file-to-upload"


def extract_message(body: Any) -> Optional[str]:
    """
    Pull the user-facing message out of an API body.

    The backend sends either a string or a list of strings.
    """
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, list):
        message = ", ".join(str(m) for m in message if m)
    return message or None


class CatalogApiClient:
    """
    HTTP client for the remote catalog.

    Raises RemoteError for transport failures, non-2xx responses and
    bodies with success=false.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_path: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or settings.catalog_api_base).rstrip("/")
        self.api_path = api_path if api_path is not None else settings.catalog_api_path
        self.timeout = timeout or settings.request_timeout_seconds
        self.session = session or requests.Session()
        self.token = token

    # ===================
    # TRANSPORT
    # ===================

    def set_token(self, token: Optional[str]) -> None:
        """Use this token on every following call (None to stop sending one)."""
        self.token = token

    @property
    def admin_root(self) -> str:
        return f"{self.base_url}/api/{self.api_path}/admin"

    def _request(self, method: str, operation: str, url: str, **kwargs) -> dict:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = self.token

        logger.debug("catalog_request", operation=operation, method=method, url=url)

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error("catalog_request_failed", operation=operation, error=str(e))
            raise RemoteError(operation)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok or not isinstance(body, dict) or body.get("success") is False:
            message = extract_message(body)
            logger.warning(
                "catalog_request_rejected",
                operation=operation,
                status=response.status_code,
                message=message
            )
            raise RemoteError(operation, message, response.status_code)

        return body

    # ===================
    # SESSION
    # ===================

    def sign_in(self, username: str, password: str) -> LoginResponse:
        body = self._request(
            "POST",
            "sign_in",
            f"{self.base_url}/admin/signin",
            json={"username": username, "password": password}
        )
        return LoginResponse(**body)

    def check_login(self) -> LoginCheckResponse:
        body = self._request("POST", "check_login", f"{self.base_url}/api/user/check")
        return LoginCheckResponse(**body)

    def sign_out(self) -> MessageResponse:
        body = self._request("POST", "sign_out", f"{self.base_url}/logout")
        return MessageResponse(**body)

    # ===================
    # PRODUCTS
    # ===================

    def get_products(self, page: int = 1, category: str = "") -> ProductListResponse:
        """
        Get one page of products.

        Args:
            page: Page number (1-indexed)
            category: Only products of this category ("" for all)

        Returns:
            ProductListResponse with products and pagination
        """
        params: dict[str, Any] = {"page": page}
        if category:
            params["category"] = category

        body = self._request("GET", "get_products", f"{self.admin_root}/products", params=params)
        return ProductListResponse(**body)

    def create_product(self, payload: dict) -> MessageResponse:
        """Create a product from a draft payload."""
        body = self._request(
            "POST",
            "create_product",
            f"{self.admin_root}/product",
            json={"data": payload}
        )
        return MessageResponse(**body)

    def edit_product(self, product_id: str, payload: dict) -> MessageResponse:
        """Replace the editable fields of an existing product."""
        body = self._request(
            "PUT",
            "edit_product",
            f"{self.admin_root}/product/{product_id}",
            json={"data": payload}
        )
        return MessageResponse(**body)

    def delete_product(self, product_id: str) -> MessageResponse:
        body = self._request(
            "DELETE",
            "delete_product",
            f"{self.admin_root}/product/{product_id}"
        )
        return MessageResponse(**body)

    def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream"
    ) -> UploadImageResponse:
        """Upload an image file; the response carries its hosted URL."""
        body = self._request(
            "POST",
            "upload_image",
            f"{self.admin_root}/upload",
            files={UPLOAD_FIELD_NAME: (filename, content, content_type)}
        )
        return UploadImageResponse(**body)


# Singleton instance for convenience
_catalog_api_client: Optional[CatalogApiClient] = None

def get_catalog_api_client() -> CatalogApiClient:
    """Get or create CatalogApiClient instance."""
    global _catalog_api_client
    if _catalog_api_client is None:
        _catalog_api_client = CatalogApiClient(token=settings.catalog_api_token)
    return _catalog_api_client
