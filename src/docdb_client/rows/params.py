"""Request builders for the rows endpoint."""

from __future__ import annotations

from ..core.operation import (
    MULTIPART_BOUNDARY,
    ConnectionParams,
    QueryParam,
    RequestOptions,
    render_path,
)
from ..core.plan import SerializablePlan, serialize_plan
from .options import ExplainOptions, RowsFormat, RowsQueryOptions

ROWS_ENDPOINT = "/v1/rows"


def build_rows_query_params(options: RowsQueryOptions) -> list[QueryParam]:
    """Ordered query parameters: bindings first, then format parameters."""

    params = [binding.to_param() for binding in options.bindings]
    if options.sends_output:
        params.append(("output", options.output.value))
        params.append(("column-types", options.column_types.value))
    if options.format is RowsFormat.MULTIPART:
        params.append(("row-format", options.row_format.value))
    return params


def build_rows_accept_header(format: RowsFormat) -> str:
    if format is RowsFormat.MULTIPART:
        return f"multipart/mixed; boundary={MULTIPART_BOUNDARY}"
    if format is RowsFormat.CSV:
        return "text/csv"
    return f"application/{format.value}"


def build_rows_query_request(
    plan: SerializablePlan,
    options: RowsQueryOptions,
    connection: ConnectionParams,
) -> RequestOptions:
    return connection.new_request(
        "POST",
        render_path(ROWS_ENDPOINT, build_rows_query_params(options)),
        headers={
            "Content-Type": "application/json",
            "Accept": build_rows_accept_header(options.format),
        },
        body=serialize_plan(plan),
    )


def build_rows_explain_request(
    plan: SerializablePlan,
    options: ExplainOptions,
    connection: ConnectionParams,
) -> RequestOptions:
    return connection.new_request(
        "POST",
        render_path(ROWS_ENDPOINT, [("output", "explain")]),
        headers={
            "Content-Type": "application/json",
            "Accept": f"application/{options.format.value}",
        },
        body=serialize_plan(plan),
    )


__all__ = [
    "ROWS_ENDPOINT",
    "build_rows_query_params",
    "build_rows_accept_header",
    "build_rows_query_request",
    "build_rows_explain_request",
]
