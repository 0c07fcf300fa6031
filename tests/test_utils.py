import numpy as np
import pandas as pd

from gacchanko.pipeline.utils import headers_of, merged_frame, records_from_frame, to_cell_string


def test_to_cell_string():
    assert to_cell_string(None) == ""
    assert to_cell_string(float("nan")) == ""
    assert to_cell_string(pd.NaT) == ""
    assert to_cell_string(1.0) == "1"
    assert to_cell_string(1.5) == "1.5"
    assert to_cell_string(np.int64(12)) == "12"
    assert to_cell_string(" a ") == " a "


def test_records_from_frame():
    df = pd.DataFrame({"id": ["K-1", None], 2024: [1.0, np.nan], "op": ["x", ""]})
    records = records_from_frame(df)
    assert records == [
        {"id": "K-1", "2024": "1", "op": "x"},
        {"id": "", "2024": "", "op": ""},
    ]
    assert records_from_frame(pd.DataFrame()) == []


def test_headers_of():
    assert headers_of([]) == []
    assert headers_of([{"b": "1", "a": "2"}, {"c": "3"}]) == ["b", "a"]


def test_merged_frame_keeps_column_order():
    rows = [{"id": "1", "販路": "Web"}, {"id": "2", "extra": "x", "販路": ""}]
    df = merged_frame(rows)
    assert list(df.columns) == ["id", "販路", "extra"]
    assert df.loc[0, "extra"] == ""
    assert df.loc[1, "extra"] == "x"

    empty = merged_frame([])
    assert empty.empty
