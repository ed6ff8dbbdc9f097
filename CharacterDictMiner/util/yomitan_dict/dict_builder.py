"""Main Yomitan dictionary builder that orchestrates all components."""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from CharacterDictMiner.util.config.configuration import (
    DEFAULT_DICT_ATTRIBUTION,
    DEFAULT_DICT_DESCRIPTION,
    DEFAULT_DICT_TITLE,
    logger,
)
from .character_catalog import CatalogCharacter
from .content_builder import ContentBuilder
from .lexicon_index import LexiconIndex
from .name_parser import NameParser
from .segmenter import MAX_NAME_LENGTH, MIN_NAME_LENGTH


class YomitanDictBuilder:
    """
    Builder for Yomitan-compatible term banks from AniList character data.

    Every alias of a character becomes one term entry pointing at the same
    structured-content card.
    """

    ENTRIES_PER_BANK = 10000
    TERM_SCORE = 0

    def __init__(self, lexicon: Optional[LexiconIndex] = None,
                 title: str = DEFAULT_DICT_TITLE, revision: str = "1",
                 author: str = "CharacterDictMiner",
                 description: str = DEFAULT_DICT_DESCRIPTION,
                 attribution: str = DEFAULT_DICT_ATTRIBUTION,
                 max_source_titles: int = 6,
                 min_name_length: int = MIN_NAME_LENGTH,
                 max_name_length: int = MAX_NAME_LENGTH):
        """
        Initialize the dictionary builder.

        Args:
            lexicon: Name index used to split unspaced kanji names (optional)
            title: Dictionary title shown in Yomitan
            revision: Revision string for index.json
            author: Author for index.json
            description: Description for index.json
            attribution: Attribution for index.json
            max_source_titles: How many titles the "From:" line lists
            min_name_length: Shortest kanji name that is segmented
            max_name_length: Longest kanji name that is segmented
        """
        self.title = title
        self.revision = revision
        self.author = author
        self.description = description
        self.attribution = attribution
        self.max_source_titles = max_source_titles
        self.entries: List[list] = []  # Term bank entries
        self.character_count = 0

        self.name_parser = NameParser(lexicon, min_length=min_name_length, max_length=max_name_length)
        self.content_builder = ContentBuilder()

    def add_character(self, character: CatalogCharacter) -> int:
        """
        Process a single character and create one term entry per alias.

        For "綾瀬桃" / "Momo Ayase" with 綾瀬 and 桃 in the lexicon, the terms
        are 綾瀬桃, 綾瀬, 桃, Momo Ayase, momo ayase, Momo, momo, Ayase, ayase.

        Args:
            character: Merged character from the catalog

        Returns:
            Number of term entries added
        """
        aliases = self.name_parser.derive_aliases(character.name_native, character.name_full)
        if not aliases:
            return 0

        readings = self.name_parser.generate_readings(character.name_native, character.name_full, aliases)
        structured_content = self.content_builder.build_structured_content(
            character.name_native,
            character.name_full,
            character.from_label(self.max_source_titles),
            character.description,
        )

        for alias in sorted(aliases):
            self.entries.append(self.content_builder.create_term_entry(
                alias, readings.get(alias, ""), self.TERM_SCORE, structured_content
            ))

        self.character_count += 1
        return len(aliases)

    def add_characters(self, characters: Iterable[CatalogCharacter]) -> int:
        """Add every character; returns the total number of term entries added."""
        return sum(self.add_character(character) for character in characters)

    def create_index(self) -> dict:
        """
        Create the dictionary index metadata.

        Returns:
            Dictionary containing index.json content
        """
        return {
            "title": self.title,
            "revision": self.revision,
            "format": 3,  # Yomitan dictionary format version
            "author": self.author,
            "description": self.description,
            "attribution": self.attribution,
        }

    def _create_tag_bank(self) -> list:
        """Tag definitions: [name, category, order, notes, score]."""
        return [
            ["name", "partOfSpeech", 0, "Character name", 0],
        ]

    def term_banks(self) -> Dict[str, list]:
        """Split entries into term_bank_N chunks keyed by file name."""
        banks = {}
        for i in range(0, len(self.entries), self.ENTRIES_PER_BANK):
            bank_num = (i // self.ENTRIES_PER_BANK) + 1
            banks[f"term_bank_{bank_num}.json"] = self.entries[i:i + self.ENTRIES_PER_BANK]
        return banks

    def export(self, output_dir: Union[str, Path]) -> Path:
        """
        Write index.json, tag_bank_1.json and term_bank_N.json into a directory.

        Args:
            output_dir: Directory to write into (created if missing)

        Returns:
            The output directory path
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        files = {
            "index.json": self.create_index(),
            "tag_bank_1.json": self._create_tag_bank(),
        }
        files.update(self.term_banks())

        for filename, data in files.items():
            with open(output_dir / filename, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2 if filename == "index.json" else None)

        logger.info(f"Wrote {len(self.entries)} terms for {self.character_count} characters to {output_dir}")
        return output_dir
