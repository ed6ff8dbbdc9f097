"""
Build a Yomitan character dictionary from a user's CURRENT AniList entries.

Usage:
    python -m CharacterDictMiner.build_dict --user <AniList user> --lexicon jmnedict.json
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from CharacterDictMiner.util.clients.anilist_api_client import AniListApiClient, AniListApiError
from CharacterDictMiner.util.config.configuration import Config, cleanup_old_logs, load_config, logger
from CharacterDictMiner.util.yomitan_dict import (
    CharacterCatalog,
    LexiconError,
    LexiconIndex,
    YomitanDictBuilder,
    load_lexicon_index,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a Yomitan character dictionary from AniList CURRENT lists"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="Path to config.json (default: app directory)")
    parser.add_argument("--user", type=str, default=None,
                        help="AniList user name (overrides ANILIST_USER)")
    parser.add_argument("--lexicon", type=str, default=None,
                        help="Name lexicon JSON used to split unspaced kanji names")
    parser.add_argument("--output", type=str, default=None,
                        help="Directory to write the dictionary files into")
    parser.add_argument("--max-titles", type=int, default=None,
                        help="Maximum number of CURRENT titles to use")
    parser.add_argument("--chars-per-title", type=int, default=None,
                        help="Characters fetched per title")
    parser.add_argument("--no-description", action="store_true",
                        help="Leave character descriptions out of the cards")
    return parser.parse_args(argv)


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    if args.user:
        config.anilist.user_name = args.user
    if args.lexicon:
        config.lexicon.path = args.lexicon
    if args.output:
        config.dictionary.output_folder = args.output
    if args.max_titles is not None:
        config.anilist.max_titles = args.max_titles
    if args.chars_per_title is not None:
        config.anilist.chars_per_title = args.chars_per_title
    if args.no_description:
        config.anilist.include_description = False
    return config


def collect_titles(config: Config) -> List[dict]:
    titles = []
    for media_type in config.anilist.media_types:
        found = AniListApiClient.fetch_current_titles(
            config.anilist.user_name, media_type, config.anilist.max_titles
        )
        logger.info(f"{media_type}: {len(found)} CURRENT titles")
        titles.extend(found)
    return titles[:config.anilist.max_titles]


def collect_characters(config: Config, titles: List[dict]) -> CharacterCatalog:
    catalog = CharacterCatalog(include_description=config.anilist.include_description)
    for i, title in enumerate(titles, start=1):
        logger.info(f"({i}/{len(titles)}) {title['title']}")
        chars = AniListApiClient.fetch_characters(title["id"], config.anilist.chars_per_title)
        catalog.add_all(chars, title["title"])
        # Pacing to reduce 429 risk
        if config.anilist.pacing_seconds > 0:
            time.sleep(config.anilist.pacing_seconds)
    return catalog


def build_dictionary(config: Config, lexicon: Optional[LexiconIndex],
                     catalog: CharacterCatalog) -> Path:
    dictionary = config.dictionary
    builder = YomitanDictBuilder(
        lexicon=lexicon,
        title=f"{dictionary.title} - {config.anilist.user_name}",
        revision=dictionary.revision,
        author=dictionary.author,
        description=dictionary.description,
        attribution=dictionary.attribution,
        max_source_titles=dictionary.max_source_titles,
        min_name_length=config.lexicon.min_name_length,
        max_name_length=config.lexicon.max_name_length,
    )
    builder.add_characters(catalog.characters())
    output_dir = Path(dictionary.output_folder) / f"anilist-characters-current-{config.anilist.user_name}"
    return builder.export(output_dir)


def run(config: Config) -> int:
    if not config.anilist.user_name:
        logger.error("Missing AniList user name (set ANILIST_USER or pass --user)")
        return 1

    logger.info(f"User: {config.anilist.user_name}")
    logger.info(f"MAX_TITLES: {config.anilist.max_titles} CHARS_PER_TITLE: {config.anilist.chars_per_title} "
                f"INCLUDE_DESC: {config.anilist.include_description}")

    # The lexicon has to be ready before the first name is processed
    lexicon = None
    try:
        if config.lexicon.path:
            lexicon = load_lexicon_index(config.lexicon.path)
            logger.info(f"Lexicon: {len(lexicon.surnames)} surnames, {len(lexicon.given_names)} given names")
        else:
            logger.warning("No name lexicon configured; unspaced kanji names will not be split")

        titles = collect_titles(config)
        if not titles:
            logger.error("No CURRENT entries found.")
            return 1

        catalog = collect_characters(config, titles)
    except LexiconError as e:
        logger.error(f"Could not build name lexicon: {e}")
        return 1
    except AniListApiError as e:
        hint = " Reduce limits or rerun later." if e.rate_limited else ""
        logger.error(f"AniList request failed: {e}.{hint}")
        return 1

    logger.info(f"Unique characters: {len(catalog)}")
    output_dir = build_dictionary(config, lexicon, catalog)
    logger.info(f"Wrote: {output_dir}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    cleanup_old_logs()
    config = apply_args(load_config(args.config), args)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
