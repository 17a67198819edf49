"""Row result models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from ..core.errors import ProtocolError


@dataclass(slots=True, frozen=True)
class RowSet:
    """Columns plus rows of one executed plan; behaves as a sequence of rows."""

    columns: tuple[object, ...] | list[object] = ()
    rows: tuple[object, ...] | list[object] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))
        if not isinstance(self.rows, tuple):
            object.__setattr__(self, "rows", tuple(self.rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[object]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> object:
        return self.rows[index]

    @property
    def column_names(self) -> tuple[str, ...]:
        names: list[str] = []
        for column in self.columns:
            if isinstance(column, Mapping):
                names.append(str(column.get("name", "")))
            else:
                names.append(str(column))
        return tuple(names)

    @classmethod
    def empty(cls) -> "RowSet":
        return cls()


def row_set_from_json(payload: object) -> RowSet:
    if payload is None:
        return RowSet.empty()
    if not isinstance(payload, Mapping):
        raise ProtocolError("row set response must be a JSON object")
    columns = payload.get("columns") or []
    rows = payload.get("rows") or []
    if not isinstance(columns, list) or not isinstance(rows, list):
        raise ProtocolError("row set columns and rows must be lists")
    return RowSet(columns=columns, rows=rows)


def row_set_from_json_seq(records: list[object] | None) -> RowSet:
    if records is None:
        return RowSet.empty()
    if not isinstance(records, list):
        raise ProtocolError("json-seq row set response must be a sequence of records")
    if not records:
        return RowSet.empty()
    head = records[0]
    if isinstance(head, Mapping) and set(head) == {"columns"}:
        columns = head["columns"]
        if not isinstance(columns, list):
            raise ProtocolError("row set columns must be a list")
        return RowSet(columns=columns, rows=records[1:])
    return RowSet(rows=records)


def row_set_from_csv(lines: list[list[str]] | None) -> RowSet:
    if not lines:
        return RowSet.empty()
    header = lines[0]
    return RowSet(
        columns=header,
        rows=[dict(zip(header, line)) for line in lines[1:] if line],
    )


__all__ = [
    "RowSet",
    "row_set_from_json",
    "row_set_from_json_seq",
    "row_set_from_csv",
]
