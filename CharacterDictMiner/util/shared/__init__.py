"""
Shared text utilities for API data.

Spoiler redaction and HTML-to-text conversion for AniList descriptions.
"""

from .description_utils import (
    decode_entities,
    html_to_text,
    normalize_description,
)
from .spoiler_utils import (
    SPOILER_PLACEHOLDER,
    SpoilerFormat,
    contains_spoiler_content,
    has_anilist_spoiler_tags,
    mask_spoiler_content,
    redact_spoilers,
    remove_spoiler_word,
)

__all__ = [
    # Description utilities
    "decode_entities",
    "html_to_text",
    "normalize_description",

    # Spoiler utilities
    "SPOILER_PLACEHOLDER",
    "SpoilerFormat",
    "contains_spoiler_content",
    "has_anilist_spoiler_tags",
    "mask_spoiler_content",
    "redact_spoilers",
    "remove_spoiler_word",
]
