"""
Spoiler handling utilities for AniList character descriptions.

AniList marks spoilers in two ways depending on how the description is
requested:
- HTML (asHtml: true): <span class="markdown_spoiler">content</span>
- Markdown: ~!content!~

Both can nest (a spoiler span usually wraps further spans), so a region runs
from its opening marker to the closing marker that balances it.
"""

import re
from enum import Enum
from typing import Iterator, Optional, Tuple


class SpoilerFormat(Enum):
    """Enumeration of supported spoiler tag formats."""

    ANILIST_HTML = "anilist_html"
    """HTML format: <span class="...spoiler...">content</span>"""

    ANILIST = "anilist"
    """Markdown format: ~!content!~"""


SPOILER_PLACEHOLDER = "[spoilers removed]"

# Opening marker of a spoiler region for each format
SPOILER_OPEN_PATTERNS = {
    SpoilerFormat.ANILIST_HTML: re.compile(
        r'<span\b[^>]*\bclass\s*=\s*["\'][^"\']*spoiler[^"\']*["\'][^>]*>', re.IGNORECASE),
    SpoilerFormat.ANILIST: re.compile(r'~!'),
}

# Tokens that open or close a nesting level inside a region
SPOILER_TOKEN_PATTERNS = {
    SpoilerFormat.ANILIST_HTML: re.compile(r'<span\b[^>]*>|</span\s*>', re.IGNORECASE),
    SpoilerFormat.ANILIST: re.compile(r'~!|!~'),
}

# Standalone "spoiler" word left behind by headings like "Spoiler:" or "(spoiler)"
SPOILER_WORD_PATTERN = re.compile(r'\bspoiler\b', re.IGNORECASE)


def _is_closing_token(token: str, spoiler_format: SpoilerFormat) -> bool:
    if spoiler_format == SpoilerFormat.ANILIST_HTML:
        return token.startswith('</')
    return token == '!~'


def _find_region_end(text: str, start: int, spoiler_format: SpoilerFormat) -> Optional[int]:
    """
    Index just past the marker that closes a region whose body starts at start.

    An unbalanced region ends at its last closing marker. An HTML spoiler with
    no closing tag at all runs to the end of the text; an unclosed "~!" is not
    a spoiler.
    """
    depth = 1
    last_close = None
    for token in SPOILER_TOKEN_PATTERNS[spoiler_format].finditer(text, start):
        if _is_closing_token(token.group(0), spoiler_format):
            depth -= 1
            last_close = token.end()
            if depth == 0:
                return last_close
        else:
            depth += 1
    if last_close is None and spoiler_format == SpoilerFormat.ANILIST_HTML:
        return len(text)
    return last_close


def _spoiler_regions(text: str, spoiler_format: SpoilerFormat) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of each outermost spoiler region, left to right."""
    pattern = SPOILER_OPEN_PATTERNS.get(spoiler_format)
    if not text or pattern is None:
        return
    pos = 0
    while True:
        match = pattern.search(text, pos)
        if match is None:
            return
        end = _find_region_end(text, match.end(), spoiler_format)
        if end is None:
            pos = match.end()
            continue
        yield match.start(), end
        pos = end


def contains_spoiler_content(
    text: str,
    spoiler_format: SpoilerFormat = SpoilerFormat.ANILIST_HTML
) -> bool:
    """
    Check if text contains a spoiler region for the specified format.

    Example:
        >>> contains_spoiler_content('a <span class="markdown_spoiler">b</span>')
        True
        >>> contains_spoiler_content("a ~!b!~", SpoilerFormat.ANILIST)
        True
    """
    return next(_spoiler_regions(text, spoiler_format), None) is not None


def mask_spoiler_content(
    text: str,
    spoiler_format: SpoilerFormat = SpoilerFormat.ANILIST_HTML,
    mask_text: str = SPOILER_PLACEHOLDER
) -> str:
    """
    Replace spoiler regions with a placeholder mask.

    Args:
        text: Text potentially containing spoiler regions
        spoiler_format: Format of spoiler regions to detect
        mask_text: Replacement text for each region

    Returns:
        Text with every spoiler region, nested markup included, replaced by mask_text

    Example:
        >>> mask_spoiler_content("The ending: ~!everyone dies!~", SpoilerFormat.ANILIST)
        'The ending: [spoilers removed]'
    """
    if not text:
        return text

    pieces = []
    pos = 0
    for start, end in _spoiler_regions(text, spoiler_format):
        pieces.append(text[pos:start])
        pieces.append(mask_text)
        pos = end
    pieces.append(text[pos:])
    return ''.join(pieces)


def remove_spoiler_word(text: str) -> str:
    """Delete standalone occurrences of the word "spoiler" (any case)."""
    if not text:
        return text
    return SPOILER_WORD_PATTERN.sub('', text)


def has_anilist_spoiler_tags(text: str) -> bool:
    """Check for either AniList spoiler format."""
    return (contains_spoiler_content(text, SpoilerFormat.ANILIST_HTML)
            or contains_spoiler_content(text, SpoilerFormat.ANILIST))


def redact_spoilers(text: str, mask_text: str = SPOILER_PLACEHOLDER) -> str:
    """
    Mask spoiler regions in both AniList formats, then drop stray "spoiler" words.

    The mask must not itself contain the standalone word "spoiler", or the
    second step would eat it.
    """
    if not text:
        return ""
    if has_anilist_spoiler_tags(text):
        for spoiler_format in (SpoilerFormat.ANILIST_HTML, SpoilerFormat.ANILIST):
            text = mask_spoiler_content(text, spoiler_format, mask_text)
    return remove_spoiler_word(text)
