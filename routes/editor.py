"""
Product editor routes.

The admin UI drives the product modal through these endpoints: open it
in new/edit mode, change fields and images, then submit.
"""

from typing import Any
from fastapi import APIRouter, Body, Depends, File, UploadFile
import structlog

from models.product import (
    EditorMode,
    EditorOpenRequest,
    EditorStateResponse,
    ImageInputRequest,
    SubmitResponse
)
from services.catalog_service import get_catalog_service
from services.product_editor_service import get_product_editor
from routes.common import handle_error, require_session

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("", response_model=EditorStateResponse)
async def get_editor_state():
    """Current editor state and draft."""
    return get_product_editor().state()


@router.post("/open", response_model=EditorStateResponse)
async def open_editor(data: EditorOpenRequest):
    """
    Open the editor.

    Edit mode seeds the draft from the product on the current catalog page.

    Raises:
        404: Product not on the current page
        409: Edit mode without a product
    """
    try:
        editor = get_product_editor()
        record = None
        if data.mode == EditorMode.EDIT and data.product_id:
            record = get_catalog_service().get_cached(data.product_id)
        editor.open(data.mode, record)
        return editor.state()

    except Exception as e:
        return handle_error(e)


@router.post("/close", response_model=EditorStateResponse)
async def close_editor():
    """Close the editor, discarding the draft."""
    editor = get_product_editor()
    editor.close()
    return editor.state()


@router.patch("/fields", response_model=EditorStateResponse)
async def set_fields(values: dict[str, Any] = Body(...)):
    """
    Change draft fields. All fields are applied or none.

    Raises:
        422: Unknown field or invalid value
    """
    try:
        editor = get_product_editor()
        editor.set_fields(values)
        return editor.state()

    except Exception as e:
        return handle_error(e)


@router.put("/image-input", response_model=EditorStateResponse)
async def set_image_input(data: ImageInputRequest):
    """Replace the pending image URL text."""
    editor = get_product_editor()
    editor.set_image_url_input(data.value)
    return editor.state()


@router.post("/images", response_model=EditorStateResponse)
async def add_image():
    """
    Append the pending image URL to the draft.

    Raises:
        422: Not an https URL (pending input is kept)
    """
    try:
        editor = get_product_editor()
        editor.add_image_url()
        return editor.state()

    except Exception as e:
        return handle_error(e)


@router.post("/images/upload", response_model=EditorStateResponse)
async def upload_image(file: UploadFile = File(...)):
    """
    Upload an image file and append its hosted URL.

    Raises:
        502: Upload failed
    """
    try:
        content = await file.read()
        editor = get_product_editor()
        editor.add_uploaded_image(
            file.filename or "image",
            content,
            file.content_type or "application/octet-stream"
        )
        return editor.state()

    except Exception as e:
        return handle_error(e)


@router.delete("/images/{index}", response_model=EditorStateResponse)
async def remove_image(index: int):
    """
    Remove one image from the draft.

    Raises:
        404: No image at that position
    """
    try:
        editor = get_product_editor()
        editor.remove_image_url(index)
        return editor.state()

    except Exception as e:
        return handle_error(e)


@router.post("/submit", response_model=SubmitResponse)
async def submit():
    """
    Create or update the product from the draft.

    Raises:
        409: Edit without a target, or a submit already pending
        502: Catalog call failed (draft kept for retry)
    """
    try:
        editor = get_product_editor()
        return editor.submit()

    except Exception as e:
        return handle_error(e)
