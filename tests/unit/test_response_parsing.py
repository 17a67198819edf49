from __future__ import annotations

from xml.etree import ElementTree

import pytest

from docdb_client.core.errors import ProtocolError, ServerError
from docdb_client.core.response_parsing import (
    build_server_error,
    decode_body,
    parse_header_params,
)


def test_parse_header_params():
    assert parse_header_params('multipart/mixed; boundary="abc"; charset=UTF-8') == (
        "multipart/mixed",
        {"boundary": "abc", "charset": "UTF-8"},
    )
    assert parse_header_params(None) == ("", {})


def test_decode_json():
    assert decode_body("application/json; charset=utf-8", b'{"a": [1, 2]}') == {"a": [1, 2]}


def test_decode_vendor_json_suffix():
    assert decode_body("application/vnd.docdb+json", b"[1]") == [1]


def test_decode_json_seq_records():
    body = b'\x1e{"columns": []}\n\x1e{"a": 1}\n\x1e{"a": 2}\n'
    assert decode_body("application/json-seq", body) == [{"columns": []}, {"a": 1}, {"a": 2}]


def test_decode_xml_returns_element():
    element = decode_body("application/xml", b"<plan><step/></plan>")
    assert isinstance(element, ElementTree.Element)
    assert element.tag == "plan"


def test_decode_csv_as_text_or_rows():
    body = b"id,name\r\n1,Alice\r\n2,Bob\r\n"
    assert decode_body("text/csv", body) == "id,name\r\n1,Alice\r\n2,Bob\r\n"
    assert decode_body("text/csv", body, parse_csv=True) == [
        ["id", "name"],
        ["1", "Alice"],
        ["2", "Bob"],
    ]


def test_decode_source_types_as_text():
    assert decode_body("application/xquery", b"xquery version '1.0';") == "xquery version '1.0';"
    assert decode_body("text/plain; charset=latin-1", "café".encode("latin-1")) == "café"


def test_decode_unknown_type_keeps_bytes():
    assert decode_body("application/octet-stream", b"\x00\x01") == b"\x00\x01"


def test_decode_empty_body_is_none():
    assert decode_body("application/json", b"") is None


def test_decode_invalid_json_is_protocol_error():
    with pytest.raises(ProtocolError, match="not valid application/json"):
        decode_body("application/json", b"{not json")


def test_build_server_error_parses_json_body():
    body = (
        b'{"errorResponse": {"statusCode": 400, "messageCode": "XDMP-UNDVAR",'
        b' "message": "Undefined variable"}}'
    )
    err = build_server_error(
        label="query rows",
        http_status=400,
        content_type="application/json",
        body=body,
    )
    assert isinstance(err, ServerError)
    assert err.http_status == 400
    assert err.message_code == "XDMP-UNDVAR"
    assert err.body["errorResponse"]["statusCode"] == 400
    assert str(err) == "query rows: server responded with HTTP 400: Undefined variable"


def test_build_server_error_keeps_raw_text_when_undecodable():
    err = build_server_error(
        label="query rows",
        http_status=500,
        content_type="application/json",
        body=b"<html>proxy error</html>",
    )
    assert err.body == "<html>proxy error</html>"
    assert err.message_code is None


def test_build_server_error_without_body():
    err = build_server_error(label="read", http_status=502, content_type=None, body=b"")
    assert err.body is None
    assert str(err) == "read: server responded with HTTP 502"
