"""CJK ideograph classification shared by the lexicon and the segmenter."""

# Iteration mark 々 repeats the previous kanji (e.g. 佐々木) and counts as kanji.
ITERATION_MARK = 0x3005

# (start, end) inclusive code point ranges
CJK_RANGES = (
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
)


def is_cjk_char(char: str) -> bool:
    code = ord(char)
    if code == ITERATION_MARK:
        return True
    return any(start <= code <= end for start, end in CJK_RANGES)


def is_all_cjk(text: str) -> bool:
    """
    Check if text is made up entirely of kanji.

    Leading and trailing whitespace is ignored. Empty or whitespace-only
    strings, and anything containing kana, Latin letters, digits or
    punctuation, are rejected.

    Args:
        text: Text to classify

    Returns:
        True if every character of the trimmed text is a CJK ideograph
    """
    if not text:
        return False
    stripped = text.strip()
    if not stripped:
        return False
    return all(is_cjk_char(char) for char in stripped)
