"""Slug generation utilities."""
from __future__ import annotations

import re
import unicodedata

# Letters that carry no Unicode decomposition but have an obvious ASCII form
_TRANSLITERATIONS = str.maketrans({
    "ł": "l", "Ł": "L",
    "ø": "o", "Ø": "O",
    "đ": "d", "Đ": "D",
    "ß": "ss",
    "æ": "ae", "Æ": "AE",
    "œ": "oe", "Œ": "OE",
})


def slugify(text: str) -> str:
    """
    Convert a string to a URL-friendly slug.

    Accented Latin letters are folded to their base letter, every other run
    of characters outside ``a-z0-9`` becomes a single hyphen.

    Args:
        text: The text to convert to a slug

    Returns:
        A URL-friendly slug string, empty when nothing alphanumeric remains
    """
    if not text:
        return ""

    text = text.translate(_TRANSLITERATIONS)

    # Decompose accented characters and drop the combining marks
    text = unicodedata.normalize('NFKD', text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))

    text = text.lower()

    # Collapse everything that is not alphanumeric into single hyphens
    text = re.sub(r'[^a-z0-9]+', '-', text)

    # Strip leading and trailing hyphens
    return text.strip('-')
