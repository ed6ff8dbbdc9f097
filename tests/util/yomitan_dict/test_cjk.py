from CharacterDictMiner.util.yomitan_dict.cjk import is_all_cjk, is_cjk_char


def test_is_all_cjk_accepts_kanji_names():
    assert is_all_cjk("綾瀬桃") is True
    assert is_all_cjk("佐々木") is True  # iteration mark
    assert is_all_cjk("㐀䶿") is True  # Extension A bounds
    assert is_all_cjk("一鿿") is True


def test_is_all_cjk_trims_surrounding_whitespace():
    assert is_all_cjk("  山田\n") is True


def test_is_all_cjk_rejects_empty_and_whitespace():
    assert is_all_cjk("") is False
    assert is_all_cjk("   ") is False
    assert is_all_cjk("　") is False
    assert is_all_cjk(None) is False


def test_is_all_cjk_rejects_mixed_scripts():
    assert is_all_cjk("やまだ") is False
    assert is_all_cjk("ヤマダ") is False
    assert is_all_cjk("山田a") is False
    assert is_all_cjk("山田1") is False
    assert is_all_cjk("山・田") is False
    assert is_all_cjk("山田 太郎") is False
    assert is_all_cjk("Α瀬") is False


def test_is_cjk_char_bounds():
    assert is_cjk_char("々") is True
    assert is_cjk_char("㏿") is False
    assert is_cjk_char("䷀") is False
    assert is_cjk_char("ꀀ") is False
