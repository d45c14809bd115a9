"""
Unit tests for the product schemas.

Run: pytest tests/unit/test_product_models.py -v
"""

import pytest
from pydantic import ValidationError

from models.product import ProductDraft, ProductRecord, Pagination, ProductListResponse
from tests.factories import ProductFactory, list_response

WIRE_FIELDS = {
    "title", "category", "origin_price", "price", "unit",
    "description", "content", "is_enabled", "imageUrl", "imagesUrl",
}


class TestProductDraftBlank:
    """Tests for ProductDraft.blank()"""

    def test_blank_template(self):
        draft = ProductDraft.blank()

        assert draft.to_payload() == {
            "title": "",
            "category": "",
            "origin_price": 0,
            "price": 0,
            "unit": "",
            "description": "",
            "content": "",
            "is_enabled": 1,
            "imageUrl": "",
            "imagesUrl": [],
        }

    def test_blank_drafts_do_not_share_image_list(self):
        first = ProductDraft.blank()
        second = ProductDraft.blank()

        first.images_url = ["https://x.com/a.png"]

        assert second.images_url == []


class TestProductDraftImageUrl:
    """imageUrl is stored on the draft and follows the list on image changes."""

    def test_kept_as_given(self):
        draft = ProductDraft(**{"imageUrl": "https://x.com/main.png", "imagesUrl": ["https://x.com/a.png"]})

        assert draft.image_url == "https://x.com/main.png"
        assert draft.to_payload()["imageUrl"] == "https://x.com/main.png"

    def test_set_images_moves_main_image_to_first(self):
        draft = ProductDraft(**{"imageUrl": "https://x.com/main.png", "imagesUrl": []})

        draft.set_images(["https://x.com/a.png", "https://x.com/b.png"])

        assert draft.image_url == "https://x.com/a.png"
        assert draft.to_payload()["imagesUrl"] == ["https://x.com/a.png", "https://x.com/b.png"]

    def test_set_images_empty_clears_main_image(self):
        draft = ProductDraft(**{"imageUrl": "https://x.com/main.png", "imagesUrl": ["https://x.com/a.png"]})

        draft.set_images([])

        assert draft.image_url == ""


class TestProductDraftValidation:
    """Field-level validation on assignment."""

    def test_negative_price_rejected(self):
        draft = ProductDraft.blank()

        with pytest.raises(ValidationError):
            draft.price = -1

        assert draft.price == 0

    def test_integer_price_stays_integer(self):
        draft = ProductDraft(price=100)

        assert draft.to_payload()["price"] == 100
        assert isinstance(draft.to_payload()["price"], int)

    def test_fractional_price_kept(self):
        draft = ProductDraft(origin_price=99.5)

        assert draft.origin_price == 99.5

    @pytest.mark.parametrize("value,expected", [(True, 1), (False, 0), (1, 1), (0, 0), ("true", 1), ("off", 0)])
    def test_enabled_flag_coerced(self, value, expected):
        draft = ProductDraft(is_enabled=value)

        assert draft.is_enabled == expected

    def test_enabled_flag_out_of_range(self):
        with pytest.raises(ValidationError):
            ProductDraft(is_enabled=2)

    def test_whitespace_preserved(self):
        draft = ProductDraft(title="  Oolong  ")

        assert draft.title == "  Oolong  "


class TestProductDraftFromRecord:
    """Tests for ProductDraft.from_record()"""

    def test_copies_every_editable_field(self, sample_record):
        draft = ProductDraft.from_record(sample_record)

        assert draft.title == sample_record.title
        assert draft.category == sample_record.category
        assert draft.origin_price == sample_record.origin_price
        assert draft.price == sample_record.price
        assert draft.unit == sample_record.unit
        assert draft.description == sample_record.description
        assert draft.content == sample_record.content
        assert draft.is_enabled == sample_record.is_enabled
        assert draft.images_url == sample_record.images_url

    def test_missing_images_default_to_empty(self):
        record = ProductRecord(**ProductFactory.create_without_images())

        draft = ProductDraft.from_record(record)

        assert draft.images_url == []
        assert draft.image_url == ""

    def test_detached_from_record(self, sample_record):
        draft = ProductDraft.from_record(sample_record)

        draft.images_url = [*draft.images_url, "https://x.com/new.png"]
        draft.title = "Changed"

        assert len(sample_record.images_url) == 2
        assert sample_record.title == "Oolong tea"

    def test_payload_round_trip(self, sample_product_data, sample_record):
        """Unchanged draft transmits the record's fields, minus id and num."""
        payload = ProductDraft.from_record(sample_record).to_payload()

        expected = {k: v for k, v in sample_product_data.items() if k not in ("id", "num")}
        assert payload == expected

    def test_round_trip_keeps_separate_main_image(self):
        """A main image that is not the first gallery image survives unchanged."""
        data = ProductFactory.create(
            image_url="https://images.example.com/main.jpg",
            images_url=["https://images.example.com/extra1.jpg", "https://images.example.com/extra2.jpg"]
        )

        payload = ProductDraft.from_record(ProductRecord(**data)).to_payload()

        expected = {k: v for k, v in data.items() if k not in ("id", "num")}
        assert payload == expected

    def test_main_image_kept_without_gallery(self):
        data = ProductFactory.create(image_url="https://images.example.com/main.jpg", images_url=[])
        del data["imagesUrl"]

        payload = ProductDraft.from_record(ProductRecord(**data)).to_payload()

        assert payload["imageUrl"] == "https://images.example.com/main.jpg"
        assert payload["imagesUrl"] == []

    def test_payload_has_exact_wire_fields(self, sample_record):
        payload = ProductDraft.from_record(sample_record).to_payload()

        assert set(payload) == WIRE_FIELDS


class TestProductRecord:
    """Tests for ProductRecord parsing."""

    def test_parses_wire_format(self, sample_product_data):
        record = ProductRecord(**sample_product_data)

        assert record.id == "-NvQ1xK2a9product"
        assert record.image_url == "https://images.example.com/oolong/front.jpg"
        assert len(record.images_url) == 2

    def test_null_text_fields_become_empty(self):
        data = ProductFactory.create(title="Tea")
        data["content"] = None

        record = ProductRecord(**data)

        assert record.content == ""

    def test_is_read_only(self, sample_record):
        with pytest.raises(ValidationError):
            sample_record.title = "Changed"


class TestPagination:
    """Tests for Pagination and listing responses."""

    def test_page_numbers(self):
        pagination = Pagination(total_pages=3, current_page=2, has_pre=True, has_next=True)

        assert pagination.page_numbers == [1, 2, 3]

    def test_listing_response_parses_products(self):
        body = list_response(ProductFactory.create_batch(2), total_pages=4, current_page=2)

        result = ProductListResponse(**body)

        assert len(result.products) == 2
        assert result.pagination.total_pages == 4
        assert result.pagination.has_pre is True
