"""CharacterDictMiner: Yomitan character-name dictionaries from AniList lists."""

__version__ = "0.1.0"
