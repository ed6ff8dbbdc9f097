"""Alias derivation and reading generation for Japanese character names."""

import re
from typing import Dict, Iterable, List, Optional, Set, Tuple

import jaconv

from CharacterDictMiner.util.yomitan_dict.cjk import is_all_cjk, is_cjk_char
from CharacterDictMiner.util.yomitan_dict.lexicon_index import LexiconIndex
from CharacterDictMiner.util.yomitan_dict.segmenter import (
    MAX_NAME_LENGTH,
    MIN_NAME_LENGTH,
    segment_name,
)

# Whitespace (including the ideographic space U+3000), middle dots, "=" and bullets
SEPARATOR_PATTERN = re.compile(r'[\s・･·•=＝]+')
WHITESPACE_PATTERN = re.compile(r'\s+')
KATAKANA_MIDDLE_DOT = '・'

ROMAJI_PART_PATTERN = re.compile(r"^[A-Za-z][A-Za-z'\-.]*$")
HIRAGANA_READING_PATTERN = re.compile(r'^[ぁ-ゟー]+$')


def split_name_parts(text: Optional[str]) -> List[str]:
    """Split a name on separator runs, dropping empty parts."""
    if not text:
        return []
    return [part for part in SEPARATOR_PATTERN.split(text.strip()) if part]


def is_kana(text: str) -> bool:
    """True if text is non-empty and made only of hiragana / katakana."""
    if not text:
        return False
    return all('ぁ' <= char <= 'ヿ' for char in text)


def contains_kanji(text: str) -> bool:
    if not text:
        return False
    return any(is_cjk_char(char) for char in text)


def derive_aliases(native: Optional[str], full: Optional[str],
                   lexicon: Optional[LexiconIndex] = None,
                   min_length: int = MIN_NAME_LENGTH,
                   max_length: int = MAX_NAME_LENGTH) -> Set[str]:
    """
    Derive every string a character should be searchable by.

    Steps, each only adding to the result:
    1. trimmed native and full names
    2. native with whitespace removed, and with whitespace and ・ removed
    3. full name lower-cased
    4. native parts split on separators; if there is no separator and the
       native name is all kanji, the lexicon split (surname, given) instead
    5. full name parts split on separators, as-is and lower-cased

    Args:
        native: Name in its original script, e.g. "綾瀬桃" or "山田 太郎"
        full: Romanized or alternate full name, e.g. "Momo Ayase"
        lexicon: Optional index used to split unspaced kanji names
        min_length: Shortest kanji name that is segmented
        max_length: Longest kanji name that is segmented

    Returns:
        Set of alias strings; empty if both names are empty
    """
    aliases: Set[str] = set()

    def add(value: Optional[str]):
        if value and value.strip():
            aliases.add(value.strip())

    native = native.strip() if native else ""
    full = full.strip() if full else ""

    add(native)
    add(full)

    if native:
        collapsed = WHITESPACE_PATTERN.sub('', native)
        add(collapsed)
        add(collapsed.replace(KATAKANA_MIDDLE_DOT, ''))

    if full:
        add(full.lower())

    native_parts = split_name_parts(native)
    if len(native_parts) >= 2:
        for part in native_parts:
            add(part)
    elif lexicon is not None and is_all_cjk(native):
        segmentation = segment_name(native, lexicon, min_length=min_length, max_length=max_length)
        if segmentation is not None:
            add(segmentation.surname)
            add(segmentation.given)

    full_parts = split_name_parts(full)
    if len(full_parts) >= 2:
        for part in full_parts:
            add(part)
            add(part.lower())

    return aliases


class NameParser:
    """
    Handles alias and reading generation for character names.

    This class manages:
    - Deriving searchable aliases (explicit separators or lexicon segmentation)
    - Splitting native names into (family, given)
    - Converting romanized names to hiragana readings per name part
    """

    def __init__(self, lexicon: Optional[LexiconIndex] = None,
                 min_length: int = MIN_NAME_LENGTH, max_length: int = MAX_NAME_LENGTH):
        self.lexicon = lexicon
        self.min_length = min_length
        self.max_length = max_length

    def derive_aliases(self, native: Optional[str], full: Optional[str]) -> Set[str]:
        return derive_aliases(native, full, self.lexicon,
                              min_length=self.min_length, max_length=self.max_length)

    def split_native_name(self, native: Optional[str]) -> Optional[Tuple[str, str]]:
        """
        Split a native name into (family, given).

        Japanese names are "Family Given". An explicit two-part name is split
        on its separator; an unspaced kanji name falls back to the lexicon.

        Returns:
            (family, given), or None if no confident split is available
        """
        parts = split_name_parts(native)
        if len(parts) == 2:
            return parts[0], parts[1]
        if len(parts) != 1 or self.lexicon is None:
            return None
        segmentation = segment_name(parts[0], self.lexicon,
                                    min_length=self.min_length, max_length=self.max_length)
        if segmentation is None:
            return None
        return segmentation.surname, segmentation.given

    @staticmethod
    def romaji_to_hiragana(romaji: str) -> str:
        """Convert a romanized name part to hiragana, or "" if it does not convert cleanly."""
        if not romaji:
            return ""
        return NameParser.clean_reading(jaconv.alphabet2kana(romaji.lower()))

    @staticmethod
    def kana_to_hiragana(kana: str) -> str:
        return NameParser.clean_reading(jaconv.kata2hira(SEPARATOR_PATTERN.sub('', kana)))

    @staticmethod
    def clean_reading(reading: str) -> str:
        """Keep a reading only if it is pure hiragana (no leftover Latin letters)."""
        return reading if reading and HIRAGANA_READING_PATTERN.match(reading) else ""

    def _part_reading(self, part: str, romaji: str) -> str:
        # Kanji parts are read from the romanized name, kana parts read themselves
        if is_kana(part):
            return self.kana_to_hiragana(part)
        if contains_kanji(part):
            return self.romaji_to_hiragana(romaji)
        return ""

    def generate_readings(self, native: Optional[str], full: Optional[str],
                          aliases: Iterable[str]) -> Dict[str, str]:
        """
        Map each alias to a hiragana reading, or "" where none can be derived.

        IMPORTANT: Romanized names from AniList are in Western order
        "GivenName FamilyName" (e.g., "Momo Ayase"), while native names are
        "FamilyName GivenName" (e.g., "綾瀬 桃"). The order is swapped when
        pairing romanized parts with native parts.

        Args:
            native: Native name
            full: Romanized full name
            aliases: Aliases produced by derive_aliases

        Returns:
            Dictionary alias -> reading
        """
        native = native.strip() if native else ""
        romaji_parts = split_name_parts(full)
        if not all(ROMAJI_PART_PATTERN.match(part) for part in romaji_parts):
            romaji_parts = []

        known: Dict[str, str] = {}
        full_reading = ""

        native_split = self.split_native_name(native)
        if len(romaji_parts) == 2:
            given_romaji, family_romaji = romaji_parts
            if native_split:
                family, given = native_split
                family_reading = self._part_reading(family, family_romaji)
                given_reading = self._part_reading(given, given_romaji)
                if family_reading:
                    known[family] = family_reading
                if given_reading:
                    known[given] = given_reading
                if family_reading and given_reading:
                    full_reading = family_reading + given_reading
            else:
                family_reading = self.romaji_to_hiragana(family_romaji)
                given_reading = self.romaji_to_hiragana(given_romaji)
                if family_reading and given_reading:
                    full_reading = family_reading + given_reading
        elif len(romaji_parts) == 1:
            full_reading = self.romaji_to_hiragana(romaji_parts[0])

        if native:
            collapsed = WHITESPACE_PATTERN.sub('', native)
            whole_forms = {native, collapsed, collapsed.replace(KATAKANA_MIDDLE_DOT, '')}
            if is_kana(SEPARATOR_PATTERN.sub('', native)):
                full_reading = self.kana_to_hiragana(native)
            if full_reading:
                for form in whole_forms:
                    known[form] = full_reading

        readings = {}
        for alias in aliases:
            if alias in known:
                readings[alias] = known[alias]
            elif is_kana(SEPARATOR_PATTERN.sub('', alias)):
                readings[alias] = self.kana_to_hiragana(alias)
            else:
                readings[alias] = ""
        return readings
