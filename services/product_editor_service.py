"""
Product editor service.

State machine behind the product modal:
    - open(mode, record) re-seeds the draft (blank for NEW, a copy of
      the record for EDIT)
    - field and image edits mutate only the current draft
    - submit() sends exactly one create or edit call and, on success,
      emits CLOSE then REFRESH to the parent

The record being edited is only read. Submits work on a snapshot of the
draft, so re-opening or closing the editor while a call is in flight
cannot change what is sent, and a late result is applied to nothing.
"""

from dataclasses import dataclass
from math import isfinite
from typing import Any, Optional, Union
import structlog
from pydantic import ValidationError as PydanticValidationError

from integrations.catalog_api import CatalogApiClient, get_catalog_api_client
from models.product import (
    EditorMode,
    ProductDraft,
    ProductRecord,
    EditorStateResponse,
    SubmitResponse,
    EDITABLE_TEXT_FIELDS,
    EDITABLE_PRICE_FIELDS,
    coerce_enabled_flag
)
from services.catalog_service import get_catalog_service
from services.editor_events import EditorEvent, EditorEvents
from services.image_list import append_image, remove_image
from exceptions import (
    InvalidFieldError,
    InvalidRecordError,
    MissingEditRecordError,
    MissingEditTargetError,
    RemoteError,
    SubmitInProgressError
)

logger = structlog.get_logger(__name__)


def reseed(mode: EditorMode, record: Optional[ProductRecord]) -> ProductDraft:
    """
    Draft for a newly signalled (mode, record) pair.

    NEW always yields the blank template, whatever was typed before.
    EDIT yields a detached copy of the record.

    Raises:
        MissingEditRecordError: If mode is EDIT and record is None
        InvalidRecordError: If the record holds values a draft cannot
    """
    if mode == EditorMode.NEW:
        return ProductDraft.blank()
    if record is None:
        raise MissingEditRecordError()
    try:
        return ProductDraft.from_record(record)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0])
        logger.warning("product_record_not_editable", product_id=record.id, field=field)
        raise InvalidRecordError(record.id, field, error["msg"])


def coerce_price(field: str, value: Any) -> Union[int, float]:
    """
    Turn price input into a non-negative number.

    Empty text counts as 0, the same as an emptied number input.

    Raises:
        InvalidFieldError: For booleans, non-numeric text, NaN/inf or negatives
    """
    if isinstance(value, bool) or value is None:
        raise InvalidFieldError(field, "must be a number", value)

    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0
        try:
            number: Union[int, float] = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise InvalidFieldError(field, "must be a number", value)
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise InvalidFieldError(field, "must be a number", value)

    if not isfinite(number):
        raise InvalidFieldError(field, "must be a finite number", value)
    if number < 0:
        raise InvalidFieldError(field, "must not be negative", value)
    return number


@dataclass(frozen=True)
class SubmitSnapshot:
    """What a submit sends, captured before the remote call."""
    mode: EditorMode
    target_id: Optional[str]
    payload: dict
    generation: int


class ProductEditor:
    """
    Create/edit editor for a single product.

    One instance per editor; all mutations are synchronous and ordered by
    the caller. The only remote calls are the submit and image upload.
    """

    def __init__(
        self,
        client: Optional[CatalogApiClient] = None,
        events: Optional[EditorEvents] = None
    ):
        self.client = client or get_catalog_api_client()
        self.events = events or EditorEvents()
        self.mode = EditorMode.NEW
        self.target: Optional[ProductRecord] = None
        self.draft = ProductDraft.blank()
        self.image_url_input = ""
        self.is_open = False
        self.pending = False
        # Bumped on every open/close; a submit whose generation no longer
        # matches resolves against nothing.
        self._generation = 0

    @property
    def target_id(self) -> Optional[str]:
        return self.target.id if self.target else None

    # ===================
    # MODE CONTROL
    # ===================

    def open(self, mode: EditorMode, record: Optional[ProductRecord] = None) -> ProductDraft:
        """
        React to the parent's (mode, record) signal.

        Raises:
            MissingEditRecordError: If mode is EDIT without a record
            InvalidRecordError: If the record cannot seed a draft
        """
        draft = reseed(mode, record)

        self.mode = mode
        self.target = record if mode == EditorMode.EDIT else None
        self.draft = draft
        self.image_url_input = ""
        self.is_open = True
        self._generation += 1

        logger.info("editor_opened", mode=mode.value, product_id=self.target_id)
        return self.draft

    def close(self) -> None:
        """Hide the editor and discard the draft."""
        self.is_open = False
        self.draft = ProductDraft.blank()
        self.image_url_input = ""
        self._generation += 1
        logger.info("editor_closed", mode=self.mode.value, product_id=self.target_id)

    # ===================
    # DRAFT EDITS
    # ===================

    def set_field(self, key: str, value: Any) -> ProductDraft:
        """
        Change one field of the draft.

        Raises:
            InvalidFieldError: For unknown or derived fields and bad values;
                the draft keeps its previous value
        """
        if key in EDITABLE_TEXT_FIELDS:
            if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int, float))):
                raise InvalidFieldError(key, "must be text", value)
            value = "" if value is None else str(value)
        elif key in EDITABLE_PRICE_FIELDS:
            value = coerce_price(key, value)
        elif key == "is_enabled":
            value = coerce_enabled_flag(value)
            if value not in (0, 1):
                raise InvalidFieldError(key, "must be enabled or disabled", value)
        else:
            raise InvalidFieldError(key, "not an editable field", value)

        try:
            setattr(self.draft, key, value)
        except PydanticValidationError as e:
            raise InvalidFieldError(key, e.errors()[0]["msg"], value)

        logger.debug("draft_field_set", field=key)
        return self.draft

    def set_fields(self, values: dict[str, Any]) -> ProductDraft:
        """
        Apply several field edits; all of them or none.

        Raises:
            InvalidFieldError: On the first rejected field
        """
        backup = self.draft.model_copy(deep=True)
        try:
            for key, value in values.items():
                self.set_field(key, value)
        except InvalidFieldError:
            self.draft = backup
            raise
        return self.draft

    def set_enabled(self, enabled: bool) -> ProductDraft:
        """Checkbox semantics for the enable flag."""
        self.draft.is_enabled = 1 if enabled else 0
        return self.draft

    def set_image_url_input(self, value: str) -> None:
        self.image_url_input = value

    def add_image_url(self) -> list[str]:
        """
        Append the pending image URL to the draft.

        Empty input is a no-op. The input is cleared only on success.

        Raises:
            InvalidImageUrlError: If the input is not an https URL
        """
        if self.image_url_input == "":
            return self.draft.images_url

        self.draft.set_images(append_image(self.draft.images_url, self.image_url_input))
        self.image_url_input = ""

        logger.debug("draft_image_added", count=len(self.draft.images_url))
        return self.draft.images_url

    def remove_image_url(self, index: int) -> list[str]:
        """
        Remove one image from the draft.

        Raises:
            ImageNotFoundError: If index is out of range
        """
        self.draft.set_images(remove_image(self.draft.images_url, index))
        logger.debug("draft_image_removed", index=index, count=len(self.draft.images_url))
        return self.draft.images_url

    def add_uploaded_image(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream"
    ) -> list[str]:
        """
        Upload an image file and append its hosted URL to the draft.

        The pending input buffer is left alone.

        Raises:
            RemoteError: If the upload fails
            InvalidImageUrlError: If the hosted URL is not https
        """
        generation = self._generation
        result = self.client.upload_image(filename, content, content_type)

        if generation != self._generation:
            logger.info("stale_upload_result_discarded", image_url=result.image_url)
            return self.draft.images_url

        self.draft.set_images(append_image(self.draft.images_url, result.image_url))
        logger.info("draft_image_uploaded", image_url=result.image_url)
        return self.draft.images_url

    # ===================
    # SUBMIT
    # ===================

    def _snapshot(self) -> SubmitSnapshot:
        return SubmitSnapshot(
            mode=self.mode,
            target_id=self.target_id,
            payload=self.draft.to_payload(),
            generation=self._generation
        )

    def submit(self) -> SubmitResponse:
        """
        Send the draft to the remote catalog.

        NEW calls create, EDIT calls edit on the target product. On
        success the editor emits CLOSE then REFRESH; a NEW draft is also
        reset. On failure the draft is left as it was.

        Raises:
            SubmitInProgressError: If a submit is already pending
            MissingEditTargetError: If mode is EDIT with no target id
            RemoteError: If the remote call fails
        """
        if self.pending:
            raise SubmitInProgressError()

        snapshot = self._snapshot()
        if snapshot.mode == EditorMode.EDIT and not snapshot.target_id:
            raise MissingEditTargetError()

        logger.info("submitting_product", mode=snapshot.mode.value, product_id=snapshot.target_id)

        self.pending = True
        try:
            if snapshot.mode == EditorMode.NEW:
                result = self.client.create_product(snapshot.payload)
            else:
                result = self.client.edit_product(snapshot.target_id, snapshot.payload)
        except RemoteError as e:
            logger.warning(
                "submit_product_failed",
                mode=snapshot.mode.value,
                product_id=snapshot.target_id,
                error=e.message
            )
            raise
        finally:
            self.pending = False

        stale = snapshot.generation != self._generation
        if stale:
            logger.info(
                "stale_submit_result",
                mode=snapshot.mode.value,
                product_id=snapshot.target_id
            )
        else:
            if snapshot.mode == EditorMode.NEW:
                self.draft = ProductDraft.blank()
            self.events.emit(EditorEvent.CLOSE)

        logger.info("product_submitted", mode=snapshot.mode.value, product_id=snapshot.target_id)
        self.events.emit(EditorEvent.REFRESH)

        return SubmitResponse(
            mode=snapshot.mode,
            product_id=snapshot.target_id,
            message=result.message,
            stale=stale
        )

    def state(self) -> EditorStateResponse:
        return EditorStateResponse(
            is_open=self.is_open,
            mode=self.mode,
            target_id=self.target_id,
            pending=self.pending,
            image_url_input=self.image_url_input,
            draft=self.draft.to_payload()
        )


# Singleton instance for convenience
_product_editor: Optional[ProductEditor] = None

def get_product_editor() -> ProductEditor:
    """
    Get or create the ProductEditor, wired to the catalog view.

    CLOSE hides the editor; REFRESH re-fetches the current catalog page.
    """
    global _product_editor
    if _product_editor is None:
        editor = ProductEditor()
        editor.events.subscribe(EditorEvent.CLOSE, editor.close)
        editor.events.subscribe(EditorEvent.REFRESH, lambda: get_catalog_service().refresh())
        _product_editor = editor
    return _product_editor
