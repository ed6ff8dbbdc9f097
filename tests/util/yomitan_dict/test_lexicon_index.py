import json

import pytest

from CharacterDictMiner.util.yomitan_dict import lexicon_index
from CharacterDictMiner.util.yomitan_dict.lexicon_index import (
    GIVEN,
    SURNAME,
    LexiconError,
    LexiconIndex,
    LexiconRecord,
    build_lexicon_index,
    classify_tags,
    load_lexicon_index,
    load_lexicon_records,
)


def test_build_lexicon_index_splits_surnames_and_given_names():
    index = build_lexicon_index([
        {"forms": ["綾瀬"], "tags": ["surname"]},
        {"forms": ["桃"], "tags": ["given"]},
    ])

    assert index.surnames == {"綾瀬"}
    assert index.given_names == {"桃"}
    assert len(index) == 2


def test_build_lexicon_index_drops_non_kanji_forms():
    index = build_lexicon_index([
        {"forms": ["Α瀬", "綾瀬", "あやせ", ""], "tags": ["surname"]},
        {"forms": ["桃"], "tags": ["fem"]},
    ])

    assert index.surnames == {"綾瀬"}


def test_build_lexicon_index_accepts_records_and_jmnedict_words():
    index = build_lexicon_index([
        LexiconRecord(forms=("和泉",), tags=("surname", "given")),
        {
            "kanji": [{"text": "山田", "tags": []}],
            "kana": [{"text": "やまだ"}],
            "translation": [{"type": ["surname", "place"], "translation": [{"text": "Yamada"}]}],
        },
    ])

    assert index.surnames == {"和泉", "山田"}
    assert index.given_names == {"和泉"}


def test_build_lexicon_index_skips_malformed_and_uncategorised_records():
    index = build_lexicon_index([
        42,
        "not a record",
        {"forms": "綾瀬", "tags": ["surname"]},
        {"kanji": ["綾瀬"], "translation": [{"type": ["surname"]}]},
        {"forms": ["東京"], "tags": ["place"]},
        {"forms": ["織田信長"], "tags": ["person"]},
        {"forms": ["桃"], "tags": ["fem"]},
    ])

    assert index.surnames == frozenset()
    assert index.given_names == {"桃"}


def test_build_lexicon_index_fails_loudly_on_empty_source():
    with pytest.raises(LexiconError):
        build_lexicon_index([])


def test_build_lexicon_index_fails_when_nothing_usable():
    with pytest.raises(LexiconError):
        build_lexicon_index([{"forms": ["東京"], "tags": ["place"]}])


def test_classify_tags_understands_codes_and_descriptions():
    assert classify_tags(["surname"]) == {SURNAME}
    assert classify_tags(["family or surname"]) == {SURNAME}
    assert classify_tags(["masc"]) == {GIVEN}
    assert classify_tags(["Female given name or forename"]) == {GIVEN}
    assert classify_tags(["given name or forename, gender not specified"]) == {GIVEN}
    assert classify_tags(["surname", "fem"]) == {SURNAME, GIVEN}
    assert classify_tags(["place", "company", None]) == frozenset()


def test_lexicon_index_rejects_non_kanji_entries():
    with pytest.raises(ValueError):
        LexiconIndex(surnames={"yamada"})
    with pytest.raises(ValueError):
        LexiconIndex(given_names={""})


def test_lexicon_index_is_immutable():
    index = LexiconIndex(surnames={"綾瀬"}, given_names={"桃"})
    assert isinstance(index.surnames, frozenset)
    with pytest.raises(Exception):
        index.surnames = frozenset()


def test_load_lexicon_records_reads_jmdict_simplified_export(tmp_path):
    path = tmp_path / "jmnedict.json"
    path.write_text(json.dumps({
        "version": "3.5.0",
        "words": [
            {"kanji": [{"text": "綾瀬"}], "kana": [], "translation": [{"type": ["surname"]}]},
            {"kanji": [{"text": "桃"}], "kana": [], "translation": [{"type": ["fem"]}]},
        ],
    }, ensure_ascii=False), encoding="utf-8")

    records = load_lexicon_records(path)
    assert len(records) == 2

    index = load_lexicon_index(path)
    assert index.surnames == {"綾瀬"}
    assert index.given_names == {"桃"}


def test_load_lexicon_records_reads_plain_list(tmp_path):
    path = tmp_path / "names.json"
    path.write_text(json.dumps([{"forms": ["桃"], "tags": ["given"]}], ensure_ascii=False), encoding="utf-8")

    assert load_lexicon_records(str(path)) == [{"forms": ["桃"], "tags": ["given"]}]


def test_load_lexicon_records_errors(tmp_path):
    with pytest.raises(LexiconError):
        load_lexicon_records(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(LexiconError):
        load_lexicon_records(broken)

    wrong_shape = tmp_path / "wrong.json"
    wrong_shape.write_text(json.dumps({"entries": 3}), encoding="utf-8")
    with pytest.raises(LexiconError):
        load_lexicon_records(wrong_shape)


def test_load_lexicon_index_fails_on_empty_file(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"words": []}), encoding="utf-8")
    with pytest.raises(LexiconError):
        load_lexicon_index(path)


def test_build_lexicon_index_logs_summary(monkeypatch):
    messages = []

    class FakeLogger:
        def debug(self, msg):
            messages.append(msg)

    monkeypatch.setattr(lexicon_index, "logger", FakeLogger())
    build_lexicon_index([{"forms": ["桃"], "tags": ["given"]}, 7])

    assert any("Skipped 1 malformed" in msg for msg in messages)
    assert any("0 surnames, 1 given names" in msg for msg in messages)
