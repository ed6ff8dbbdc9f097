"""Conversion of AniList HTML character descriptions to plain text."""

import re
from typing import Optional

from CharacterDictMiner.util.shared.spoiler_utils import SPOILER_PLACEHOLDER, redact_spoilers

LINE_BREAK_PATTERN = re.compile(r'<br\s*/?>|</p\s*>', re.IGNORECASE)
TAG_PATTERN = re.compile(r'<[^>]+>')
ENTITY_PATTERN = re.compile(r'&(nbsp|amp|lt|gt|quot|apos|#39);')

ENTITIES = {
    "nbsp": " ",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "#39": "'",
}


def decode_entities(text: str) -> str:
    """Decode the named entities AniList emits, in one left-to-right pass."""
    return ENTITY_PATTERN.sub(lambda match: ENTITIES[match.group(1)], text)


def html_to_text(html: Optional[str]) -> str:
    """
    Strip HTML down to plain text.

    <br> and </p> become newlines, every other tag is dropped and the common
    named entities are decoded.
    """
    if not html:
        return ""
    text = LINE_BREAK_PATTERN.sub('\n', str(html))
    text = TAG_PATTERN.sub('', text)
    return decode_entities(text).strip()


def _normalize_once(text: str, mask_text: str) -> str:
    return html_to_text(redact_spoilers(text, mask_text))


def normalize_description(markup: Optional[str], mask_text: str = SPOILER_PLACEHOLDER) -> str:
    """
    Turn an AniList description into spoiler-free plain text.

    Decoding entities can expose new markup ("&lt;b&gt;" becomes "<b>"), so
    the redact/strip pass is repeated until the text stops changing. The
    result is therefore stable: normalizing it again returns it unchanged.

    Args:
        markup: HTML or markdown description, may be None
        mask_text: Placeholder for spoiler regions

    Returns:
        Plain text description, "" for empty input
    """
    if not markup:
        return ""
    text = str(markup)
    while True:
        normalized = _normalize_once(text, mask_text)
        if normalized == text:
            return normalized
        text = normalized
