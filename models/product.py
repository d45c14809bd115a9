"""
Product schemas for validation and serialization.

Field names and numeric typing match the remote catalog API exactly;
camelCase wire names are exposed through aliases.
"""

from pydantic import ConfigDict, Field, NonNegativeFloat, NonNegativeInt, field_validator
from typing import Any, Optional, Union
from enum import Enum

from models.base import BaseSchema
from services.image_list import derive_primary

Number = Union[int, float]
NonNegativeNumber = Union[NonNegativeInt, NonNegativeFloat]

# Fields the editor may change through set_field.
EDITABLE_TEXT_FIELDS = ("title", "category", "unit", "description", "content")
EDITABLE_PRICE_FIELDS = ("origin_price", "price")


class EditorMode(str, Enum):
    """Whether the editor creates a new product or edits an existing one."""
    NEW = "new"
    EDIT = "edit"


def coerce_enabled_flag(value: Any) -> Any:
    """Map checkbox-style input onto the 1/0 flag the backend stores."""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "on", "yes", "1"):
            return 1
        if lowered in ("false", "off", "no", "0", ""):
            return 0
    return value


class ProductDraft(BaseSchema):
    """
    The product being authored in the editor.

    `imageUrl` starts as the record's main image and is recomputed from
    `imagesUrl` each time an image is added or removed.
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=False,
        validate_assignment=True,
        populate_by_name=True
    )

    title: str = ""
    category: str = ""
    origin_price: NonNegativeNumber = 0
    price: NonNegativeNumber = 0
    unit: str = ""
    description: str = ""
    content: str = ""
    is_enabled: int = Field(1, ge=0, le=1)
    image_url: str = Field("", alias="imageUrl")
    images_url: list[str] = Field(default_factory=list, alias="imagesUrl")

    @field_validator("is_enabled", mode="before")
    @classmethod
    def enabled_as_flag(cls, v: Any) -> Any:
        return coerce_enabled_flag(v)

    @property
    def enabled(self) -> bool:
        return self.is_enabled == 1

    def set_images(self, urls: list[str]) -> list[str]:
        """Replace the image list and move the main image to its first entry."""
        self.images_url = urls
        self.image_url = derive_primary(urls)
        return self.images_url

    @classmethod
    def blank(cls) -> "ProductDraft":
        """The empty template used for new products."""
        return cls()

    @classmethod
    def from_record(cls, record: "ProductRecord") -> "ProductDraft":
        """
        Detached copy of an existing record's editable fields.

        The image list is copied so later edits never reach the record.
        The stored main image is kept as is.
        """
        return cls(
            title=record.title,
            category=record.category,
            origin_price=record.origin_price,
            price=record.price,
            unit=record.unit,
            description=record.description,
            content=record.content,
            is_enabled=record.is_enabled,
            image_url=record.image_url,
            images_url=list(record.images_url or []),
        )

    def to_payload(self) -> dict:
        """Wire representation sent to the create and edit operations."""
        return self.model_dump(by_alias=True, mode="json")


class ProductRecord(BaseSchema):
    """
    A product as stored by the remote catalog.

    Read-only from the editor's point of view.
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=False,
        populate_by_name=True,
        frozen=True
    )

    id: str = Field(..., description="Product identifier")
    num: Optional[int] = Field(None, description="Sequence number assigned by the backend")
    title: str = ""
    category: str = ""
    origin_price: Number = 0
    price: Number = 0
    unit: str = ""
    description: str = ""
    content: str = ""
    is_enabled: int = 0
    image_url: str = Field("", alias="imageUrl")
    images_url: Optional[list[str]] = Field(None, alias="imagesUrl")

    @field_validator("is_enabled", mode="before")
    @classmethod
    def enabled_as_flag(cls, v: Any) -> Any:
        return coerce_enabled_flag(v)

    @field_validator("title", "category", "unit", "description", "content", "image_url", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """The backend omits or nulls text fields it never received."""
        return "" if v is None else v


class Pagination(BaseSchema):
    """Pagination block returned with each product page."""

    total_pages: int = 1
    current_page: int = 1
    has_pre: bool = False
    has_next: bool = False
    category: str = ""

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.total_pages + 1))


class ProductListResponse(BaseSchema):
    """Response of the admin product listing."""

    success: bool
    products: list[ProductRecord] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    messages: list[str] = Field(default_factory=list)


class ProductPageResponse(BaseSchema):
    """Current catalog page as served to the admin UI."""

    products: list[ProductRecord]
    pagination: Pagination
    page_numbers: list[int]

    @classmethod
    def create(cls, products: list[ProductRecord], pagination: Pagination) -> "ProductPageResponse":
        return cls(
            products=products,
            pagination=pagination,
            page_numbers=pagination.page_numbers
        )


class UploadImageResponse(BaseSchema):
    """Response of the admin image upload."""

    success: bool
    image_url: str = Field("", alias="imageUrl")
    message: str = ""


# ===================
# EDITOR REQUEST/RESPONSE SCHEMAS
# ===================

class EditorOpenRequest(BaseSchema):
    """Parent signal: which mode to open the editor in, and on what."""

    mode: EditorMode
    product_id: Optional[str] = Field(
        None,
        description="Product on the current page to edit (edit mode only)"
    )


class ImageInputRequest(BaseSchema):
    """New contents of the pending image URL buffer."""

    value: str = ""


class EditorStateResponse(BaseSchema):
    """Snapshot of the editor for the admin UI."""

    is_open: bool
    mode: EditorMode
    target_id: Optional[str] = None
    pending: bool = False
    image_url_input: str = ""
    draft: dict


class SubmitResponse(BaseSchema):
    """Outcome of a successful submit."""

    mode: EditorMode
    product_id: Optional[str] = None
    message: str = ""
    stale: bool = False
