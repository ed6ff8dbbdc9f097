"""
Name lexicon loading and indexing.

Reduces a name lexicon (JMnedict-style records: written forms plus name-type
tags) to two immutable sets of kanji strings, known surnames and known given
names, which the segmenter consults.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Mapping, Tuple, Union

from CharacterDictMiner.util.config.configuration import logger
from CharacterDictMiner.util.yomitan_dict.cjk import is_all_cjk

SURNAME = "surname"
GIVEN = "given"

# JMnedict name_type codes
SURNAME_TAGS = frozenset({"surname", "family"})
GIVEN_TAGS = frozenset({"given", "fem", "masc", "female", "male"})

# Substrings of the expanded entity descriptions ("family or surname",
# "female given name or forename", ...)
SURNAME_PHRASES = ("surname", "family name")
GIVEN_PHRASES = ("given name", "forename")


class LexiconError(Exception):
    """Raised when the lexicon source is missing, unparseable or empty."""


@dataclass(frozen=True)
class LexiconRecord:
    forms: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LexiconIndex:
    """Known surnames and given names. Every entry is a non-empty kanji string."""

    surnames: FrozenSet[str] = field(default_factory=frozenset)
    given_names: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "surnames", frozenset(self.surnames))
        object.__setattr__(self, "given_names", frozenset(self.given_names))
        for entry in self.surnames | self.given_names:
            if not isinstance(entry, str) or not is_all_cjk(entry) or entry != entry.strip():
                raise ValueError(f"Lexicon entries must be kanji-only strings, got {entry!r}")

    def is_surname(self, text: str) -> bool:
        return text in self.surnames

    def is_given_name(self, text: str) -> bool:
        return text in self.given_names

    def __len__(self) -> int:
        return len(self.surnames) + len(self.given_names)


def classify_tags(tags: Iterable[str]) -> FrozenSet[str]:
    """
    Map name-type tags onto the surname / given-name categories.

    Args:
        tags: Tags of one lexicon record, as codes ("surname", "fem") or
              expanded descriptions ("female given name or forename")

    Returns:
        Subset of {SURNAME, GIVEN}; empty if no tag applies
    """
    categories = set()
    for tag in tags:
        if not isinstance(tag, str):
            continue
        normalized = tag.strip().lower()
        if normalized in SURNAME_TAGS or any(phrase in normalized for phrase in SURNAME_PHRASES):
            categories.add(SURNAME)
        if normalized in GIVEN_TAGS or any(phrase in normalized for phrase in GIVEN_PHRASES):
            categories.add(GIVEN)
    return frozenset(categories)


def _record_from_mapping(raw: Mapping) -> LexiconRecord:
    """
    Decode one raw record.

    Two shapes are understood:
    - {"forms": [...], "tags": [...]}
    - a jmdict-simplified JMnedict word: {"kanji": [{"text": ...}], "kana": [...],
      "translation": [{"type": [...]}]}
    """
    if "forms" in raw or "tags" in raw:
        forms = raw.get("forms") or []
        tags = raw.get("tags") or []
    else:
        forms = [item.get("text") for item in (raw.get("kanji") or []) + (raw.get("kana") or [])]
        tags = [tag for translation in (raw.get("translation") or []) for tag in (translation.get("type") or [])]

    if isinstance(forms, str) or isinstance(tags, str):
        raise TypeError("forms and tags must be lists")
    return LexiconRecord(forms=tuple(forms), tags=tuple(tags))


def build_lexicon_index(raw_records: Iterable[Union[LexiconRecord, Mapping]]) -> LexiconIndex:
    """
    Build the surname / given-name index from raw lexicon records.

    Records without an applicable name category, forms that are not pure
    kanji, and records that cannot be decoded are skipped.

    Args:
        raw_records: LexiconRecord instances or raw record mappings

    Returns:
        Immutable LexiconIndex

    Raises:
        LexiconError: If there are no records at all, or none of them
                      contributes a single surname or given name
    """
    surnames = set()
    given_names = set()
    record_count = 0
    skipped = 0

    for raw in raw_records:
        record_count += 1
        try:
            record = raw if isinstance(raw, LexiconRecord) else _record_from_mapping(raw)
        except (AttributeError, TypeError):
            skipped += 1
            continue

        categories = classify_tags(record.tags)
        if not categories:
            continue

        for form in record.forms:
            if not isinstance(form, str) or not is_all_cjk(form):
                continue
            form = form.strip()
            if SURNAME in categories:
                surnames.add(form)
            if GIVEN in categories:
                given_names.add(form)

    if record_count == 0:
        raise LexiconError("Lexicon source is empty")
    if not surnames and not given_names:
        raise LexiconError(f"Lexicon source yielded no surnames or given names from {record_count} records")

    if skipped:
        logger.debug(f"Skipped {skipped} malformed lexicon records")
    logger.debug(f"Lexicon index built: {len(surnames)} surnames, {len(given_names)} given names "
                 f"from {record_count} records")
    return LexiconIndex(surnames=frozenset(surnames), given_names=frozenset(given_names))


def load_lexicon_records(path: Union[str, Path]) -> List[Union[LexiconRecord, Mapping]]:
    """
    Read raw lexicon records from a local JSON file.

    Accepts a top-level list of records, or an object holding them under
    "words" (jmdict-simplified export) or "records".

    Raises:
        LexiconError: If the file is missing or not a recognised JSON lexicon
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise LexiconError(f"Lexicon file not found: {path}") from None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LexiconError(f"Could not parse lexicon file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("words", data.get("records"))
    if not isinstance(data, list):
        raise LexiconError(f"Lexicon file {path} does not contain a list of records")
    return data


def load_lexicon_index(path: Union[str, Path]) -> LexiconIndex:
    """Load a lexicon file and build its index in one step."""
    logger.info(f"Loading name lexicon from {path}")
    return build_lexicon_index(load_lexicon_records(path))
