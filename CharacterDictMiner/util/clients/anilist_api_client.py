"""
AniList API Client

Fetch a user's CURRENT anime/manga and the characters of each title from the
AniList GraphQL API.
"""

import re
from typing import Dict, List, Optional

import requests

from CharacterDictMiner.util.config.configuration import logger


RATE_LIMIT_MESSAGE_PATTERN = re.compile(r'too many requests|rate limit', re.IGNORECASE)


class AniListApiError(Exception):
    def __init__(self, message: str, rate_limited: bool = False):
        super().__init__(message)
        self.rate_limited = rate_limited


class AniListApiClient:
    """
    Client for AniList GraphQL API interactions.

    Provides methods for:
    - Fetching the CURRENT entries of a user's anime or manga list
    - Fetching the most relevant characters of a media entry
    """

    API_URL = "https://graphql.anilist.co"
    TIMEOUT = 15

    # GraphQL query for a user's list
    MEDIA_LIST_QUERY = """
    query ($userName: String, $type: MediaType) {
        MediaListCollection(userName: $userName, type: $type) {
            lists {
                entries {
                    status
                    media {
                        id
                        title {
                            romaji
                            english
                            native
                        }
                    }
                }
            }
        }
    }
    """

    # GraphQL query for fetching characters
    CHARACTERS_QUERY = """
    query ($id: Int, $perPage: Int) {
        Media(id: $id) {
            characters(page: 1, perPage: $perPage, sort: [RELEVANCE, ROLE]) {
                edges {
                    node {
                        id
                        name {
                            full
                            native
                        }
                        description(asHtml: true)
                    }
                }
            }
        }
    }
    """

    @classmethod
    def query(cls, query: str, variables: Dict) -> Dict:
        """
        Run one GraphQL query.

        Args:
            query: GraphQL query text
            variables: Query variables

        Returns:
            The "data" object of the response

        Raises:
            AniListApiError: On transport failure, non-200 status or GraphQL errors
        """
        logger.debug(f"AniList request with variables: {variables}")
        try:
            response = requests.post(
                cls.API_URL,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                json={
                    "query": query,
                    "variables": variables
                },
                timeout=cls.TIMEOUT
            )
        except requests.RequestException as e:
            raise AniListApiError(f"AniList request failed: {e}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(f"AniList rate limited the request (Retry-After: {retry_after})")
            raise AniListApiError("AniList rate limit exceeded", rate_limited=True)

        if response.status_code != 200:
            raise AniListApiError(f"AniList API returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise AniListApiError(f"AniList returned invalid JSON: {e}") from e

        if payload.get("errors"):
            message = "\n".join(str(error.get("message", error)) for error in payload["errors"])
            logger.warning(f"AniList API returned errors: {message}")
            raise AniListApiError(message, rate_limited=bool(RATE_LIMIT_MESSAGE_PATTERN.search(message)))

        return payload.get("data") or {}

    @staticmethod
    def pick_title(title: Optional[Dict], media_id) -> str:
        title = title or {}
        return title.get("english") or title.get("romaji") or title.get("native") or str(media_id)

    @classmethod
    def fetch_current_titles(cls, user_name: str, media_type: str = "ANIME",
                             max_titles: int = 50) -> List[Dict]:
        """
        Fetch the titles a user is currently watching or reading.

        Args:
            user_name: AniList user name
            media_type: "ANIME" or "MANGA"
            max_titles: Maximum number of titles to return

        Returns:
            List of {"id", "title"} dicts, unique by id, in list order
        """
        data = cls.query(cls.MEDIA_LIST_QUERY, {"userName": user_name, "type": media_type.upper()})

        lists = (data.get("MediaListCollection") or {}).get("lists") or []
        entries = [entry for media_list in lists for entry in (media_list.get("entries") or [])]

        seen = set()
        titles = []
        for entry in entries:
            if not entry or entry.get("status") != "CURRENT":
                continue
            media = entry.get("media") or {}
            media_id = media.get("id")
            if not media_id or media_id in seen:
                continue
            seen.add(media_id)
            titles.append({"id": media_id, "title": cls.pick_title(media.get("title"), media_id)})
            if len(titles) >= max_titles:
                break

        logger.debug(f"Found {len(titles)} CURRENT {media_type} titles for {user_name}")
        return titles

    @classmethod
    def fetch_characters(cls, media_id: int, per_page: int = 12) -> List[Dict]:
        """
        Fetch the most relevant characters of a media entry.

        Args:
            media_id: AniList media ID
            per_page: Number of characters to request

        Returns:
            List of character dicts with id, name_native, name_full and
            description (HTML). Characters without an id or any name are dropped.
        """
        data = cls.query(cls.CHARACTERS_QUERY, {"id": media_id, "perPage": per_page})

        edges = ((data.get("Media") or {}).get("characters") or {}).get("edges") or []

        characters = []
        for edge in edges:
            node = (edge or {}).get("node") or {}
            name = node.get("name") or {}
            character = {
                "id": node.get("id"),
                "name_native": name.get("native") or "",
                "name_full": name.get("full") or "",
                "description": node.get("description") or "",
            }
            if character["id"] and (character["name_native"] or character["name_full"]):
                characters.append(character)

        return characters
