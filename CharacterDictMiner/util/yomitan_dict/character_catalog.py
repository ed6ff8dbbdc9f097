"""Merging of characters that appear in several titles."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from CharacterDictMiner.util.shared.description_utils import normalize_description


@dataclass
class CatalogCharacter:
    id: str
    name_native: str = ""
    name_full: str = ""
    description: str = ""
    titles: List[str] = field(default_factory=list)

    def add_title(self, title: str):
        if title and title not in self.titles:
            self.titles.append(title)

    def from_label(self, limit: Optional[int] = 6) -> str:
        titles = self.titles if limit is None else self.titles[:limit]
        return ", ".join(titles)


class CharacterCatalog:
    """
    Collects characters across titles, keyed by character id.

    The first sighting of a character fixes its names and description; later
    sightings only add the title they were seen in.
    """

    def __init__(self, include_description: bool = True):
        self.include_description = include_description
        self._characters: Dict[str, CatalogCharacter] = {}

    def add(self, char: dict, title: str) -> bool:
        """
        Add one character seen in a title.

        Args:
            char: Character dict from AniListApiClient.fetch_characters
            title: Display title of the media it was seen in

        Returns:
            True if the character was new to the catalog
        """
        char_id = char.get("id")
        if char_id is None or char_id == "":
            return False
        key = str(char_id)

        existing = self._characters.get(key)
        if existing is not None:
            existing.add_title(title)
            return False

        description = ""
        if self.include_description:
            description = normalize_description(char.get("description"))

        character = CatalogCharacter(
            id=key,
            name_native=char.get("name_native") or "",
            name_full=char.get("name_full") or "",
            description=description,
        )
        character.add_title(title)
        self._characters[key] = character
        return True

    def add_all(self, chars: Iterable[dict], title: str) -> int:
        return sum(1 for char in chars if self.add(char, title))

    def characters(self) -> List[CatalogCharacter]:
        return list(self._characters.values())

    def __len__(self) -> int:
        return len(self._characters)

    def __contains__(self, char_id) -> bool:
        return str(char_id) in self._characters
