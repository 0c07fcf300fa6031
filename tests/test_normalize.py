from gacchanko.pipeline.normalize import (
    normalize_header,
    normalize_header_for_matching,
    normalize_key,
    trim,
)


def test_normalize_key_width_and_dash_variants():
    assert normalize_key("A-001") == "A001"
    assert normalize_key("Ａ－００１") == normalize_key("A-001")
    # hyphen, horizontal bar and long vowel mark all act as dashes
    assert normalize_key("k‐1") == "K1"
    assert normalize_key("k―1") == "K1"
    assert normalize_key("kー1") == "K1"
    assert normalize_key("  k 1\t") == "K1"
    assert normalize_key("k　1") == "K1"


def test_normalize_key_empty_and_non_string():
    assert normalize_key(None) == ""
    assert normalize_key("") == ""
    assert normalize_key("  - ") == ""
    assert normalize_key(123) == "123"


def test_normalize_key_is_idempotent():
    for raw in ["A-001", "Ａ－００１", " k ー 9 ", "abc", "", "x‐y―z"]:
        once = normalize_key(raw)
        assert normalize_key(once) == once


def test_normalize_header_for_matching():
    target = normalize_header_for_matching("契約ID")
    assert target == "契約id"
    assert normalize_header_for_matching("\ufeff契約ID") == target
    assert normalize_header_for_matching("契約ＩＤ") == target
    assert normalize_header_for_matching(" 契 約 ID ") == target
    assert normalize_header_for_matching(None) == ""
    # only the BOM is dropped, nothing else
    assert normalize_header_for_matching("\ufeffKeiyakuNO") == "keiyakuno"


def test_normalize_header_trims_and_lowercases():
    assert normalize_header("  KeiyakuNO ") == "keiyakuno"
    assert normalize_header("Shouhin Name") == "shouhin name"
    assert normalize_header(None) == ""


def test_byte_order_mark_is_trimmed_like_whitespace():
    assert trim("\ufeff K-1 \ufeff") == "K-1"
    assert trim(None) == ""
    assert normalize_key("\ufeffK-1") == "K1"
    assert normalize_key("K\ufeff-1") == "K1"
    assert normalize_key("\ufeff") == ""
    assert normalize_header("\ufeffKeiyakuNO ") == "keiyakuno"
    assert normalize_header_for_matching("契約\ufeffID") == "契約id"
