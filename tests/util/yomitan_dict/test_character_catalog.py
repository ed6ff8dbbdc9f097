from CharacterDictMiner.util.yomitan_dict.character_catalog import CatalogCharacter, CharacterCatalog


def _char(char_id, native="綾瀬桃", full="Momo Ayase", description=""):
    return {"id": char_id, "name_native": native, "name_full": full, "description": description}


def test_catalog_merges_characters_across_titles():
    catalog = CharacterCatalog()

    assert catalog.add(_char(1), "Dandadan") is True
    assert catalog.add(_char(1, native="別名"), "Dandadan Season 2") is False
    assert catalog.add(_char(1), "Dandadan") is False

    assert len(catalog) == 1
    character = catalog.characters()[0]
    assert character.id == "1"
    assert character.name_native == "綾瀬桃"
    assert character.titles == ["Dandadan", "Dandadan Season 2"]
    assert 1 in catalog
    assert "1" in catalog


def test_catalog_skips_characters_without_id():
    catalog = CharacterCatalog()
    assert catalog.add({"name_native": "誰"}, "Title") is False
    assert catalog.add(_char(""), "Title") is False
    assert len(catalog) == 0


def test_catalog_normalizes_description_once():
    catalog = CharacterCatalog()
    catalog.add(_char(5, description="<p>Kind<br>Brave</p>"), "Title")
    assert catalog.characters()[0].description == "Kind\nBrave"


def test_catalog_can_leave_descriptions_out():
    catalog = CharacterCatalog(include_description=False)
    catalog.add(_char(5, description="<p>Kind</p>"), "Title")
    assert catalog.characters()[0].description == ""


def test_add_all_counts_new_characters():
    catalog = CharacterCatalog()
    assert catalog.add_all([_char(1), _char(2), _char(1)], "Title") == 2


def test_from_label_limits_titles():
    character = CatalogCharacter(id="1", titles=[f"T{i}" for i in range(8)])
    assert character.from_label() == "T0, T1, T2, T3, T4, T5"
    assert character.from_label(2) == "T0, T1"
    assert character.from_label(None) == ", ".join(f"T{i}" for i in range(8))
