"""
Product catalog service.

The parent view of the product editor: it owns the current product page,
opens the editor on a selected product and re-fetches when the editor
signals a refresh. It never edits product records itself.
"""

from typing import Optional
import structlog

from integrations.catalog_api import CatalogApiClient, get_catalog_api_client
from models.product import ProductRecord, Pagination
from exceptions import ProductNotFoundError, InvalidPageError, RemoteError

logger = structlog.get_logger(__name__)


class CatalogService:
    """
    Product listing, pagination and deletion.
    """

    def __init__(self, client: Optional[CatalogApiClient] = None):
        self.client = client or get_catalog_api_client()
        self.products: list[ProductRecord] = []
        self.pagination = Pagination()
        self.page = 1
        self.category = ""

    # ===================
    # READ OPERATIONS
    # ===================

    def list_products(self, page: int = 1, category: str = "") -> tuple[list[ProductRecord], Pagination]:
        """
        Fetch one page of products and remember it as the current page.

        Args:
            page: Page number (1-indexed)
            category: Category filter ("" for all)

        Returns:
            Tuple of (products, pagination)

        Raises:
            RemoteError: If the catalog call fails
        """
        logger.info("getting_products", page=page, category=category)

        result = self.client.get_products(page=page, category=category)

        self.products = result.products
        self.pagination = result.pagination
        self.page = page
        self.category = category

        logger.info(
            "products_retrieved",
            count=len(self.products),
            total_pages=self.pagination.total_pages
        )
        return self.products, self.pagination

    def refresh(self) -> tuple[list[ProductRecord], Pagination]:
        """Re-fetch the current page and category."""
        return self.list_products(page=self.page, category=self.category)

    def change_page(self, page: int) -> tuple[list[ProductRecord], Pagination]:
        """
        Move to another page of the current listing.

        Raises:
            InvalidPageError: If page is outside 1..total_pages
        """
        if not 1 <= page <= self.pagination.total_pages:
            raise InvalidPageError(page, self.pagination.total_pages)
        return self.list_products(page=page, category=self.category)

    def get_cached(self, product_id: str) -> ProductRecord:
        """
        Product from the current page.

        Raises:
            ProductNotFoundError: If it is not on the current page
        """
        for product in self.products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def delete_product(self, product_id: str) -> str:
        """
        Delete a product, then refresh the current page.

        A failed refresh is logged; the delete has already happened.

        Returns:
            Server message

        Raises:
            RemoteError: If the delete call fails
        """
        logger.info("deleting_product", product_id=product_id)

        result = self.client.delete_product(product_id)

        logger.info("product_deleted", product_id=product_id)
        try:
            self.refresh()
        except RemoteError as e:
            logger.warning("refresh_after_delete_failed", product_id=product_id, error=e.message)
        return result.message


# Singleton instance for convenience
_catalog_service: Optional[CatalogService] = None

def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
