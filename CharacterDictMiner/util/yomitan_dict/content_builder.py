"""Content building for Yomitan dictionary structured content."""

from typing import Optional


class ContentBuilder:
    """
    Builds Yomitan structured content for character cards.

    Definitions are structured-content objects rather than HTML strings, so
    Yomitan renders them instead of showing raw "<div>" markup.
    """

    TITLE_STYLE = {"fontWeight": "bold"}
    FULL_NAME_STYLE = {"fontSize": "0.95em", "opacity": 0.85}
    FROM_STYLE = {"marginTop": "4px", "fontSize": "0.92em", "opacity": 0.9}
    DESCRIPTION_STYLE = {"marginTop": "6px"}

    def build_structured_content(self, name_native: str, name_full: str,
                                 from_label: str = "", description: str = "") -> dict:
        """
        Build Yomitan structured content for a character card.

        Args:
            name_native: Native name (kanji/kana), shown as the title when present
            name_full: Romanized full name, shown below the title if it differs
            from_label: Comma-separated titles the character appears in
            description: Plain text description (already normalized)

        Returns:
            Yomitan structured content object
        """
        title = name_native or name_full or ""

        details = [{"tag": "div", "style": dict(self.TITLE_STYLE), "content": title}]

        if name_native and name_full and name_native != name_full:
            details.append({"tag": "div", "style": dict(self.FULL_NAME_STYLE), "content": name_full})

        if from_label:
            details.append({"tag": "div", "style": dict(self.FROM_STYLE), "content": f"From: {from_label}"})

        if description:
            details.append({"tag": "div", "style": dict(self.DESCRIPTION_STYLE), "content": description})

        return {
            "type": "structured-content",
            "content": {
                "tag": "div",
                "content": [
                    {"tag": "div", "style": {"marginTop": "6px"}, "content": details},
                ],
            },
        }

    def create_term_entry(self, term: str, reading: Optional[str], score: int,
                          structured_content: dict) -> list:
        """
        Create a single Yomitan term entry.

        Args:
            term: The term/word to look up
            reading: Hiragana reading, or "" when none is known
            score: Priority score
            structured_content: The structured content dictionary

        Returns:
            List representing a Yomitan term entry
        """
        return [
            term,                      # term
            reading or "",             # reading
            "name",                    # definitionTags
            "",                        # rules - empty for names
            score,                     # score
            [structured_content],      # definitions
            0,                         # sequence
            ""                         # termTags
        ]
