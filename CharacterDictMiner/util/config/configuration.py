import json
import os
import shutil
from dataclasses import dataclass, field
from dataclasses_json import dataclass_json
from os.path import expanduser
from sys import platform
from typing import List, Optional


DEFAULT_DICT_TITLE = "AniList Characters (CURRENT)"
DEFAULT_DICT_DESCRIPTION = ("Character dictionary from AniList CURRENT only. Structured content definitions. "
                            "Spoilers removed. Supports full + partial name lookup.")
DEFAULT_DICT_ATTRIBUTION = ("Data via AniList GraphQL API (anilist.co). Descriptions from AniList content "
                            "sources. Generated for personal use.")


def sanitize_and_resolve_path(path: str) -> str:
    if not path:
        return path
    return os.path.normpath(expanduser(path.strip().strip('"')))


def get_app_directory():
    if platform == 'win32':  # Windows
        appdata_dir = os.getenv('APPDATA')
    else:  # macOS and Linux
        appdata_dir = sanitize_and_resolve_path('~/.config')
    config_dir = os.path.join(appdata_dir, 'CharacterDictMiner')
    # Create the directory if it doesn't exist
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


def get_config_path():
    return os.path.join(get_app_directory(), 'config.json')


@dataclass_json
@dataclass
class AniList:
    user_name: str = ""
    max_titles: int = 50
    chars_per_title: int = 12
    include_description: bool = True
    media_types: List[str] = field(default_factory=lambda: ["ANIME", "MANGA"])
    pacing_seconds: float = 0.45


@dataclass_json
@dataclass
class Lexicon:
    path: str = ""
    min_name_length: int = 2
    max_name_length: int = 8

    def __post_init__(self):
        self.path = sanitize_and_resolve_path(self.path)


@dataclass_json
@dataclass
class Dictionary:
    title: str = DEFAULT_DICT_TITLE
    revision: str = "1"
    author: str = "CharacterDictMiner"
    description: str = DEFAULT_DICT_DESCRIPTION
    attribution: str = DEFAULT_DICT_ATTRIBUTION
    output_folder: str = "out"
    max_source_titles: int = 6

    def __post_init__(self):
        self.output_folder = sanitize_and_resolve_path(self.output_folder)


@dataclass_json
@dataclass
class Config:
    anilist: AniList = field(default_factory=AniList)
    lexicon: Lexicon = field(default_factory=Lexicon)
    dictionary: Dictionary = field(default_factory=Dictionary)

    @classmethod
    def new(cls):
        return cls()

    def save(self, path: Optional[str] = None):
        with open(path or get_config_path(), 'w', encoding='utf-8') as file:
            json.dump(self.to_dict(), file, indent=4, ensure_ascii=False)
        return self

    def apply_env_overrides(self, environ=None):
        """Apply the generator's environment variables on top of the saved settings."""
        environ = os.environ if environ is None else environ

        if environ.get('ANILIST_USER'):
            self.anilist.user_name = environ['ANILIST_USER'].strip()
        if environ.get('MAX_TITLES'):
            self.anilist.max_titles = _int_from_env(environ, 'MAX_TITLES')
        if environ.get('CHARS_PER_TITLE'):
            self.anilist.chars_per_title = _int_from_env(environ, 'CHARS_PER_TITLE')
        if environ.get('INCLUDE_DESC'):
            self.anilist.include_description = environ['INCLUDE_DESC'].strip().lower() == 'true'
        if environ.get('LEXICON_PATH'):
            self.lexicon.path = sanitize_and_resolve_path(environ['LEXICON_PATH'])
        return self


def _int_from_env(environ, name: str) -> int:
    raw = environ[name].strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(path: Optional[str] = None, environ=None) -> Config:
    config_path = path or get_config_path()

    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                config = Config.from_dict(json.load(file))
        except json.JSONDecodeError as e:
            logger.error(
                f"Error parsing {config_path}, saving backup and returning new config: {e}")
            shutil.copy(config_path, config_path + '.bak')
            config = Config.new()
            config.save(config_path)
    else:
        config = Config.new()
        config.save(config_path)
        logger.info(f"Created new config at {config_path}")

    return config.apply_env_overrides(environ)


# Logging is handled by CharacterDictMiner.util.logging_config
# Imported at the end of this file to avoid circular dependencies
from CharacterDictMiner.util.logging_config import logger, initialize_logging, cleanup_old_logs
