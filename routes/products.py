"""
Product catalog routes.

Listing, pagination and deletion. Creating and editing go through the
editor routes.
"""

from fastapi import APIRouter, Depends, Query
import structlog

from models.base import MessageResponse
from models.product import ProductPageResponse
from services.catalog_service import get_catalog_service
from routes.common import handle_error, require_session

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("", response_model=ProductPageResponse)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    category: str = Query("", description="Filter by category")
):
    """
    List one page of products.

    Raises:
        502: Catalog call failed
    """
    try:
        service = get_catalog_service()
        products, pagination = service.list_products(page=page, category=category)
        return ProductPageResponse.create(products, pagination)

    except Exception as e:
        return handle_error(e)


@router.get("/page/{page}", response_model=ProductPageResponse)
async def change_page(page: int):
    """
    Move to another page of the current listing.

    Raises:
        422: Page outside the known range
    """
    try:
        service = get_catalog_service()
        products, pagination = service.change_page(page)
        return ProductPageResponse.create(products, pagination)

    except Exception as e:
        return handle_error(e)


@router.post("/refresh", response_model=ProductPageResponse)
async def refresh_products():
    """Re-fetch the current page."""
    try:
        service = get_catalog_service()
        products, pagination = service.refresh()
        return ProductPageResponse.create(products, pagination)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str):
    """
    Delete a product and refresh the current page.

    Raises:
        502: Catalog call failed
    """
    try:
        service = get_catalog_service()
        message = service.delete_product(product_id)
        return MessageResponse(success=True, message=message)

    except Exception as e:
        return handle_error(e)
