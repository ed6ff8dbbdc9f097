"""
Yomitan dictionary builder package.

This package provides components for building Yomitan-compatible character
dictionaries from AniList character data.

Components:
- LexiconIndex: Known surnames and given names from a name lexicon
- segment_name: Splits unspaced kanji names into (surname, given)
- NameParser: Derives searchable aliases and hiragana readings
- CharacterCatalog: Merges characters seen across several titles
- ContentBuilder: Builds Yomitan structured content for character cards
- YomitanDictBuilder: Main orchestrating class for building term banks
"""

from .character_catalog import CatalogCharacter, CharacterCatalog
from .cjk import is_all_cjk
from .content_builder import ContentBuilder
from .dict_builder import YomitanDictBuilder
from .lexicon_index import (
    LexiconError,
    LexiconIndex,
    LexiconRecord,
    build_lexicon_index,
    load_lexicon_index,
    load_lexicon_records,
)
from .name_parser import NameParser, derive_aliases
from .segmenter import Segmentation, segment_name

__all__ = [
    'CatalogCharacter',
    'CharacterCatalog',
    'ContentBuilder',
    'LexiconError',
    'LexiconIndex',
    'LexiconRecord',
    'NameParser',
    'Segmentation',
    'YomitanDictBuilder',
    'build_lexicon_index',
    'derive_aliases',
    'is_all_cjk',
    'load_lexicon_index',
    'load_lexicon_records',
    'segment_name',
]
