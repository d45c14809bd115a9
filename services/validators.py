"""
Input validators for the product editor.
"""

import re

# Only https image links are accepted; the scheme check is case-insensitive.
HTTPS_URL_PATTERN = re.compile(r"^https://", re.IGNORECASE)


def is_valid_image_url(candidate: str) -> bool:
    """
    Check that an image URL uses the https scheme.

    Purely syntactic: no DNS lookup or request is made.

    Args:
        candidate: Raw user input

    Returns:
        True if the input starts with https://
    """
    if not isinstance(candidate, str):
        return False
    return HTTPS_URL_PATTERN.match(candidate) is not None
