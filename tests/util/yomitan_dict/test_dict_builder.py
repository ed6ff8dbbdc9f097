import json

from CharacterDictMiner.util.yomitan_dict.character_catalog import CatalogCharacter
from CharacterDictMiner.util.yomitan_dict.dict_builder import YomitanDictBuilder
from CharacterDictMiner.util.yomitan_dict.lexicon_index import LexiconIndex


LEXICON = LexiconIndex(surnames={"綾瀬"}, given_names={"桃"})


def _momo():
    return CatalogCharacter(id="1", name_native="綾瀬桃", name_full="Momo Ayase",
                            description="Plain text", titles=["Dandadan"])


def test_add_character_creates_one_entry_per_alias():
    builder = YomitanDictBuilder(lexicon=LEXICON)

    added = builder.add_character(_momo())

    terms = [entry[0] for entry in builder.entries]
    assert added == 9
    assert terms == sorted(terms)
    assert set(terms) == {"綾瀬桃", "綾瀬", "桃", "Momo Ayase", "momo ayase", "Momo", "momo", "Ayase", "ayase"}
    assert builder.character_count == 1

    definitions = {json.dumps(entry[5], ensure_ascii=False) for entry in builder.entries}
    assert len(definitions) == 1
    assert all(entry[2] == "name" for entry in builder.entries)


def test_add_character_uses_readings_from_name_parser(monkeypatch):
    builder = YomitanDictBuilder(lexicon=LEXICON)
    monkeypatch.setattr(
        builder.name_parser,
        "generate_readings",
        lambda native, full, aliases: {alias: "よみ" for alias in aliases},
    )

    builder.add_character(_momo())

    assert {entry[1] for entry in builder.entries} == {"よみ"}


def test_add_character_card_lists_limited_titles():
    builder = YomitanDictBuilder(max_source_titles=1)
    character = _momo()
    character.titles = ["A", "B"]

    builder.add_character(character)

    card = builder.entries[0][5][0]["content"]["content"][0]["content"]
    assert {"tag": "div", "style": builder.content_builder.FROM_STYLE, "content": "From: A"} in card


def test_add_character_skips_empty_names():
    builder = YomitanDictBuilder(lexicon=LEXICON)
    assert builder.add_character(CatalogCharacter(id="c1")) == 0
    assert builder.entries == []
    assert builder.character_count == 0


def test_add_characters_sums_entries():
    builder = YomitanDictBuilder()
    total = builder.add_characters([
        CatalogCharacter(id="1", name_native="桃"),
        CatalogCharacter(id="2", name_full="Okarun"),
    ])
    assert total == 1 + 2
    assert builder.character_count == 2


def test_create_index_metadata():
    builder = YomitanDictBuilder(title="Chars", revision="7", author="me", description="d", attribution="a")

    assert builder.create_index() == {
        "title": "Chars",
        "revision": "7",
        "format": 3,
        "author": "me",
        "description": "d",
        "attribution": "a",
    }


def test_export_writes_index_tags_and_split_term_banks(tmp_path, monkeypatch):
    builder = YomitanDictBuilder(lexicon=LEXICON)
    monkeypatch.setattr(YomitanDictBuilder, "ENTRIES_PER_BANK", 4)
    builder.add_character(_momo())

    output_dir = builder.export(tmp_path / "dict")

    assert output_dir == tmp_path / "dict"
    index = json.loads((output_dir / "index.json").read_text(encoding="utf-8"))
    assert index["format"] == 3
    tags = json.loads((output_dir / "tag_bank_1.json").read_text(encoding="utf-8"))
    assert tags[0][0] == "name"

    banks = sorted(output_dir.glob("term_bank_*.json"))
    assert [bank.name for bank in banks] == ["term_bank_1.json", "term_bank_2.json", "term_bank_3.json"]
    rows = [row for bank in banks for row in json.loads(bank.read_text(encoding="utf-8"))]
    assert [row[0] for row in rows] == [entry[0] for entry in builder.entries]
