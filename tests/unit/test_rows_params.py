from __future__ import annotations

import itertools
import json

import pytest

from docdb_client.core.operation import MULTIPART_BOUNDARY, ConnectionParams
from docdb_client.rows.options import (
    ExplainOptions,
    RowsFormat,
    validate_explain_options,
    validate_rows_options,
)
from docdb_client.rows.params import (
    build_rows_accept_header,
    build_rows_explain_request,
    build_rows_query_params,
    build_rows_query_request,
)

PLAN = {"$optic": {"ns": "op", "fn": "operators", "args": []}}
CONNECTION = ConnectionParams()


def _expected_keys(format: str, row_format: str) -> list[str]:
    keys: list[str] = []
    if format != "xml" and not (format == "multipart" and row_format == "xml"):
        keys += ["output", "column-types"]
    if format == "multipart":
        keys.append("row-format")
    return keys


@pytest.mark.parametrize(
    ("format", "output", "row_format", "column_types"),
    list(
        itertools.product(
            ["json", "xml", "json-seq", "csv", "multipart"],
            ["object", "array"],
            ["json", "xml"],
            ["rows", "header"],
        )
    ),
)
def test_query_params_follow_format_table(format, output, row_format, column_types):
    options = validate_rows_options(
        {
            "format": format,
            "output": output,
            "rowFormat": row_format,
            "columnTypes": column_types,
        }
    )
    params = dict(build_rows_query_params(options))
    assert list(params) == _expected_keys(format, row_format)
    if "output" in params:
        assert params["output"] == output
        assert params["column-types"] == column_types
    if "row-format" in params:
        assert params["row-format"] == row_format


def test_default_query_path():
    request = build_rows_query_request(PLAN, validate_rows_options(None), CONNECTION)
    assert request.method == "POST"
    assert request.path == "/v1/rows?output=object&column-types=rows"


def test_xml_without_bindings_has_no_query_string():
    request = build_rows_query_request(PLAN, validate_rows_options({"format": "xml"}), CONNECTION)
    assert request.path == "/v1/rows"


def test_bindings_come_first_and_share_one_separator():
    options = validate_rows_options(
        {
            "format": "multipart",
            "bindings": {
                "dirs": "/test/",
                "label": {"value": "jazz", "lang": "en"},
                "age": {"value": 30, "type": "integer"},
            },
        }
    )
    request = build_rows_query_request(PLAN, options, CONNECTION)
    assert request.path == (
        "/v1/rows?bind%3Adirs=%2Ftest%2F&bind%3Alabel%40en=jazz&bind%3Aage%3Ainteger=30"
        "&output=object&column-types=rows&row-format=json"
    )
    assert request.path.count("?") == 1


def test_bindings_only_path_when_format_params_are_omitted():
    options = validate_rows_options({"format": "xml", "bindings": {"a": 1, "b": 2}})
    request = build_rows_query_request(PLAN, options, CONNECTION)
    assert request.path == "/v1/rows?bind%3Aa=1&bind%3Ab=2"


@pytest.mark.parametrize(
    ("format", "accept"),
    [
        ("json", "application/json"),
        ("xml", "application/xml"),
        ("json-seq", "application/json-seq"),
        ("csv", "text/csv"),
        ("multipart", f"multipart/mixed; boundary={MULTIPART_BOUNDARY}"),
    ],
)
def test_accept_header_per_format(format, accept):
    assert build_rows_accept_header(RowsFormat(format)) == accept


def test_query_request_headers_and_body():
    request = build_rows_query_request(PLAN, validate_rows_options({"format": "csv"}), CONNECTION)
    assert request.headers == {"Content-Type": "application/json", "Accept": "text/csv"}
    assert json.loads(request.body) == PLAN


def test_explain_request():
    request = build_rows_explain_request(PLAN, validate_explain_options({"format": "xml"}), CONNECTION)
    assert request.path == "/v1/rows?output=explain"
    assert request.headers["Accept"] == "application/xml"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == PLAN


def test_explain_request_defaults_to_json():
    request = build_rows_explain_request(PLAN, ExplainOptions(), CONNECTION)
    assert request.headers["Accept"] == "application/json"
