"""
Image URL list operations for the product draft.

The list keeps insertion order and allows duplicates. Functions return
a new list and never mutate the one they are given.
"""

import structlog

from exceptions import InvalidImageUrlError, ImageNotFoundError
from services.validators import is_valid_image_url

logger = structlog.get_logger(__name__)


def append_image(urls: list[str], candidate: str) -> list[str]:
    """
    Append an image URL to the end of the list.

    Args:
        urls: Current image URLs
        candidate: URL typed by the user

    Returns:
        The new list; the same contents when candidate is empty

    Raises:
        InvalidImageUrlError: If candidate is not an https URL
    """
    if candidate == "":
        return list(urls)

    if not is_valid_image_url(candidate):
        logger.info("image_url_rejected", candidate=candidate)
        raise InvalidImageUrlError(candidate)

    return [*urls, candidate]


def remove_image(urls: list[str], index: int) -> list[str]:
    """
    Remove exactly one image URL by position.

    Raises:
        ImageNotFoundError: If index is outside 0 <= index < len(urls)
    """
    if not 0 <= index < len(urls):
        raise ImageNotFoundError(index, len(urls))
    return [url for i, url in enumerate(urls) if i != index]


def derive_primary(urls: list[str]) -> str:
    """Primary image: the first URL, or "" when there are none."""
    return urls[0] if urls else ""
