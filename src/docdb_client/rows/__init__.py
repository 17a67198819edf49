"""Row-set query package."""

from .bindings import Binding
from .models import RowSet
from .options import (
    ColumnTypes,
    ExplainFormat,
    ExplainOptions,
    RowFormat,
    RowsFormat,
    RowsOutput,
    RowsQueryOptions,
)

__all__ = [
    "Binding",
    "RowSet",
    "RowsFormat",
    "RowsOutput",
    "RowFormat",
    "ColumnTypes",
    "ExplainFormat",
    "RowsQueryOptions",
    "ExplainOptions",
]
