from __future__ import annotations

import pytest

from docdb_client.core.errors import ProtocolError
from docdb_client.rows.models import (
    RowSet,
    row_set_from_csv,
    row_set_from_json,
    row_set_from_json_seq,
)


def test_row_set_behaves_as_sequence_of_rows():
    row_set = RowSet(columns=[{"name": "id"}], rows=[{"id": 1}, {"id": 2}])
    assert len(row_set) == 2
    assert list(row_set) == [{"id": 1}, {"id": 2}]
    assert row_set[1] == {"id": 2}
    assert row_set.column_names == ("id",)
    assert isinstance(row_set.rows, tuple)


def test_empty_row_set():
    assert len(RowSet.empty()) == 0
    assert row_set_from_json(None) == RowSet.empty()


def test_row_set_from_json(fixture_loader):
    row_set = row_set_from_json(fixture_loader("rows_object.json"))
    assert len(row_set) == 3
    assert row_set.column_names[0] == "opticFunctionalTest.musician.lastName"


def test_row_set_from_json_rejects_non_object():
    with pytest.raises(ProtocolError):
        row_set_from_json([1, 2])


def test_row_set_from_json_seq_uses_header_record():
    row_set = row_set_from_json_seq([{"columns": [{"name": "a"}]}, {"a": 1}, {"a": 2}])
    assert row_set.column_names == ("a",)
    assert list(row_set) == [{"a": 1}, {"a": 2}]


def test_row_set_from_json_seq_without_header():
    row_set = row_set_from_json_seq([[1, "x"], [2, "y"]])
    assert row_set.columns == ()
    assert len(row_set) == 2


def test_row_set_from_json_seq_rejects_single_json_object():
    with pytest.raises(ProtocolError, match="sequence of records"):
        row_set_from_json_seq({"columns": [], "rows": []})  # type: ignore[arg-type]


def test_row_set_from_csv_maps_rows_by_header():
    row_set = row_set_from_csv([["id", "name"], ["1", "Alice"], [], ["2", "Bob"]])
    assert row_set.column_names == ("id", "name")
    assert list(row_set) == [{"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}]
