"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import MagicMock, patch

from integrations.catalog_api import CatalogApiClient
from models.base import MessageResponse
from models.auth import LoginResponse, LoginCheckResponse
from models.product import ProductListResponse, ProductRecord, UploadImageResponse
from services.catalog_service import CatalogService
from services.product_editor_service import ProductEditor
from services.session_service import SessionService
from services.editor_events import EditorEvent

from tests.factories import ProductFactory, list_response


# ===================
# MOCK CATALOG CLIENT
# ===================

@pytest.fixture
def mock_client() -> MagicMock:
    """
    CatalogApiClient double with successful default responses.

    Usage:
        def test_something(mock_client):
            mock_client.create_product.side_effect = RemoteError("create_product", "nope")
    """
    client = MagicMock(spec=CatalogApiClient)
    client.token = None
    client.create_product.return_value = MessageResponse(success=True, message="Product created")
    client.edit_product.return_value = MessageResponse(success=True, message="Product updated")
    client.delete_product.return_value = MessageResponse(success=True, message="Product deleted")
    client.upload_image.return_value = UploadImageResponse(
        success=True,
        imageUrl="https://storage.example.com/upload/new.png"
    )
    client.get_products.return_value = ProductListResponse(**list_response([]))
    client.sign_in.return_value = LoginResponse(
        success=True,
        message="Signed in",
        uid="admin-uid",
        token="token-abc",
        expired=4102444800000  # 2100-01-01
    )
    client.check_login.return_value = LoginCheckResponse(success=True, uid="admin-uid")
    client.sign_out.return_value = MessageResponse(success=True, message="Signed out")
    return client


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture
def sample_product_data() -> dict:
    """Sample product data for testing."""
    return {
        "id": "-NvQ1xK2a9product",
        "num": 1,
        "title": "Oolong tea",
        "category": "Tea",
        "origin_price": 500,
        "price": 420,
        "unit": "box",
        "description": "High mountain oolong",
        "content": "150g per box",
        "is_enabled": 1,
        "imageUrl": "https://images.example.com/oolong/front.jpg",
        "imagesUrl": [
            "https://images.example.com/oolong/front.jpg",
            "https://images.example.com/oolong/side.jpg"
        ]
    }


@pytest.fixture
def sample_record(sample_product_data) -> ProductRecord:
    return ProductRecord(**sample_product_data)


@pytest.fixture
def sample_products_list() -> list:
    """Sample list of products for testing."""
    ProductFactory.reset_counter()
    return ProductFactory.create_batch(3)


# ===================
# SERVICES
# ===================

@pytest.fixture
def editor(mock_client) -> ProductEditor:
    """Editor with a mocked catalog client and no listeners."""
    return ProductEditor(client=mock_client)


@pytest.fixture
def recorded_events(editor) -> list:
    """
    Record editor signals in emission order.

    Usage:
        def test_submit(editor, recorded_events):
            editor.submit()
            assert recorded_events == ["close", "refresh"]
    """
    events = []
    for event in EditorEvent:
        editor.events.subscribe(event, lambda e=event: events.append(e.value))
    return events


@pytest.fixture
def catalog(mock_client) -> CatalogService:
    return CatalogService(client=mock_client)


@pytest.fixture
def session(mock_client) -> SessionService:
    return SessionService(client=mock_client)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(mock_client):
    """
    FastAPI test client with a signed-in session and mocked catalog.

    The editor is wired to the catalog the same way get_product_editor()
    wires it.

    Usage:
        def test_endpoint(test_client, mock_client):
            response = test_client.get("/api/products")
    """
    from fastapi.testclient import TestClient
    from main import app

    mock_client.token = "token-abc"
    session_service = SessionService(client=mock_client)
    catalog_service = CatalogService(client=mock_client)
    product_editor = ProductEditor(client=mock_client)
    product_editor.events.subscribe(EditorEvent.CLOSE, product_editor.close)
    product_editor.events.subscribe(EditorEvent.REFRESH, catalog_service.refresh)

    with patch("services.session_service._session_service", session_service), \
         patch("services.catalog_service._catalog_service", catalog_service), \
         patch("services.product_editor_service._product_editor", product_editor):
        yield TestClient(app)
