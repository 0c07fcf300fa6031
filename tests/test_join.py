from gacchanko.pipeline.aggregation import aggregate
from gacchanko.pipeline.join import UNMATCHED_VALUES, join
from gacchanko.pipeline.models import OUTPUT_COLUMNS, ColumnMapping


MAPPING = ColumnMapping(contract_key="id", data_key="KeiyakuNO", route="Route", authority="Auth", options="OP")


def _per_key(rows, mapping=MAPPING):
    return aggregate(rows, mapping.data_key, mapping.tracked_headers, mapping.options, mapping.approval).per_key


def test_matched_row_gets_derived_columns_after_contract_columns():
    per_key = _per_key([{"KeiyakuNO": "k-1", "Route": "Web", "Auth": "OK", "OP": "ジライフ安心サポート"}])
    res = join([{"id": "K1", "name": "Taro"}], "id", per_key, MAPPING)

    row = res.merged_rows[0]
    assert list(row) == ["id", "name", *OUTPUT_COLUMNS]
    assert [row[c] for c in OUTPUT_COLUMNS] == ["Web", "OK", "1", "0", "ERROR"]
    assert res.unmatched == []


def test_unmatched_row_defaults_and_reports_raw_key():
    res = join([{"id": " z-9 "}], "id", _per_key([]), MAPPING)

    row = res.merged_rows[0]
    for col, value in UNMATCHED_VALUES.items():
        assert row[col] == value
    assert res.unmatched == [" z-9 "]


def test_row_without_key_is_defaulted_but_not_reported():
    res = join([{"id": ""}, {"id": " - "}, {"name": "no id"}], "id", _per_key([]), MAPPING)
    assert len(res.merged_rows) == 3
    assert res.unmatched == []
    assert all(r["承認ID"] == "ERROR" for r in res.merged_rows)


def test_contract_order_and_duplicates_are_preserved():
    per_key = _per_key([{"KeiyakuNO": "b", "Route": "R", "Auth": "", "OP": ""}])
    contract = [{"id": "a"}, {"id": "B"}, {"id": "c"}, {"id": "b"}]
    res = join(contract, "id", per_key, MAPPING)

    assert [r["id"] for r in res.merged_rows] == ["a", "B", "c", "b"]
    assert [r["販路"] for r in res.merged_rows] == ["", "R", "", "R"]
    assert res.unmatched == ["a", "c"]


def test_approval_id_trimmed_or_error():
    mapping = MAPPING.model_copy(update={"approval": "Appr"})
    per_key = _per_key(
        [
            {"KeiyakuNO": "k1", "Route": "", "Auth": "", "OP": "", "Appr": " A-77 "},
            {"KeiyakuNO": "k2", "Route": "", "Auth": "", "OP": "", "Appr": "   "},
        ],
        mapping,
    )
    res = join([{"id": "k1"}, {"id": "k2"}], "id", per_key, mapping)
    assert [r["承認ID"] for r in res.merged_rows] == ["A-77", "ERROR"]

    # approval header not configured: always ERROR
    res = join([{"id": "k1"}], "id", per_key, MAPPING)
    assert res.merged_rows[0]["承認ID"] == "ERROR"


def test_join_copies_contract_rows():
    contract = [{"id": "k1"}]
    join(contract, "id", _per_key([]), MAPPING)
    assert contract == [{"id": "k1"}]
