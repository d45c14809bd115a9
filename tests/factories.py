"""
Test data factories.

Uses factory pattern to generate consistent test data in the remote
catalog's wire format.
"""

from typing import Optional
from uuid import uuid4


class ProductFactory:
    """
    Factory for creating test Product data.

    Usage:
        # Create with defaults
        product = ProductFactory.create()

        # Create with overrides
        product = ProductFactory.create(title="Custom", price=120)

        # Create multiple
        products = ProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        title: Optional[str] = None,
        category: str = "Tea",
        origin_price: float = 500,
        price: float = 400,
        unit: str = "box",
        description: str = "Loose leaf oolong",
        content: str = "150g per box",
        is_enabled: int = 1,
        images_url: Optional[list] = None,
        image_url: Optional[str] = None,
        num: Optional[int] = None
    ) -> dict:
        """
        Create a single product dict.

        imageUrl defaults to the first entry of imagesUrl; pass image_url
        for a record whose main image is kept apart from the list.

        Returns:
            Product dict matching the catalog API
        """
        counter = cls._next_counter()
        images = images_url if images_url is not None else [
            f"https://images.example.com/{counter}/front.jpg",
            f"https://images.example.com/{counter}/back.jpg",
        ]

        return {
            "id": id or f"-{uuid4().hex[:19]}",
            "num": num if num is not None else counter,
            "title": title or f"Test product {counter}",
            "category": category,
            "origin_price": origin_price,
            "price": price,
            "unit": unit,
            "description": description,
            "content": content,
            "is_enabled": is_enabled,
            "imageUrl": image_url if image_url is not None else (images[0] if images else ""),
            "imagesUrl": images
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple products."""
        return [cls.create(**overrides) for _ in range(count)]

    @classmethod
    def create_without_images(cls, **overrides) -> dict:
        """Create a product the backend returned with no imagesUrl key."""
        product = cls.create(images_url=[], **overrides)
        del product["imagesUrl"]
        return product

    @classmethod
    def create_disabled(cls, **overrides) -> dict:
        """Create a disabled product."""
        return cls.create(is_enabled=0, **overrides)

    @classmethod
    def reset_counter(cls):
        """Reset the counter (call in test setup if needed)."""
        cls._counter = 0


def list_response(products: list, total_pages: int = 1, current_page: int = 1, category: str = "") -> dict:
    """Body of a product listing response."""
    return {
        "success": True,
        "products": products,
        "pagination": {
            "total_pages": total_pages,
            "current_page": current_page,
            "has_pre": current_page > 1,
            "has_next": current_page < total_pages,
            "category": category
        },
        "messages": []
    }
