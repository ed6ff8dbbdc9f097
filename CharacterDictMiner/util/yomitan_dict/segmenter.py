"""Surname / given-name segmentation of unspaced kanji names."""

from dataclasses import dataclass
from typing import Optional

from CharacterDictMiner.util.config.configuration import logger
from CharacterDictMiner.util.yomitan_dict.cjk import is_all_cjk
from CharacterDictMiner.util.yomitan_dict.lexicon_index import LexiconIndex

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 8

BASE_SCORE = 100
# Most Japanese surnames are two or three kanji
SURNAME_LENGTH_BONUS = {
    2: 15,
    3: 8,
}
PART_LENGTH_CAP = 5


@dataclass(frozen=True)
class Segmentation:
    surname: str
    given: str
    score: int = 0


def score_split(surname: str, given: str) -> int:
    """Preference score for a split; only the ordering it induces matters."""
    score = BASE_SCORE + SURNAME_LENGTH_BONUS.get(len(surname), 0)
    return score + min(PART_LENGTH_CAP, len(surname)) + min(PART_LENGTH_CAP, len(given))


def segment_name(name: str, lexicon: LexiconIndex,
                 min_length: int = MIN_NAME_LENGTH,
                 max_length: int = MAX_NAME_LENGTH) -> Optional[Segmentation]:
    """
    Split an unspaced kanji name like "綾瀬桃" into (surname, given).

    Every cut point is tried left to right; a cut is kept only if the left
    part is a known surname and the right part a known given name. The best
    scoring cut wins, and the current best is only replaced on a strictly
    greater score, so among equal scores the leftmost cut is returned.

    Args:
        name: Kanji-only name without separators
        lexicon: Surname / given-name index
        min_length: Shortest name (in characters) that is considered
        max_length: Longest name (in characters) that is considered

    Returns:
        Segmentation whose parts concatenate back to name, or None if the
        name is not kanji, is out of bounds, or has no known split
    """
    if not name or not is_all_cjk(name):
        return None
    name = name.strip()

    length = len(name)
    if length < min_length or length > max_length:
        return None

    best: Optional[Segmentation] = None
    for cut in range(1, length):
        surname, given = name[:cut], name[cut:]
        if not lexicon.is_surname(surname) or not lexicon.is_given_name(given):
            continue
        score = score_split(surname, given)
        if best is None or score > best.score:
            best = Segmentation(surname=surname, given=given, score=score)

    if best is not None:
        logger.debug(f"Segmented {name} -> {best.surname} / {best.given} (score {best.score})")
    return best
