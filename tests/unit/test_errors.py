from __future__ import annotations

from xml.etree import ElementTree

from docdb_client.core.errors import (
    DocDbError,
    IncompatibleBindingError,
    InvalidBindingError,
    ServerError,
    extract_error_fields,
)


def test_incompatible_binding_is_an_invalid_binding():
    err = IncompatibleBindingError("cannot combine", binding="a")
    assert isinstance(err, InvalidBindingError)
    assert isinstance(err, DocDbError)
    assert err.binding == "a"


def test_server_error_carries_status_and_body():
    err = ServerError("boom", http_status=500, body={"x": 1}, message_code="XDMP-OOPS")
    assert err.http_status == 500
    assert err.body == {"x": 1}
    assert err.message_code == "XDMP-OOPS"
    assert err.cause == "server"


def test_extract_error_fields_from_json_envelope():
    body = {
        "errorResponse": {
            "statusCode": 400,
            "messageCode": "XDMP-UNDVAR",
            "message": "Undefined variable $foo",
        }
    }
    assert extract_error_fields(body) == ("Undefined variable $foo", "XDMP-UNDVAR")


def test_extract_error_fields_from_xml_envelope():
    body = ElementTree.fromstring(
        '<rapi:error xmlns:rapi="http://marklogic.com/rest-api">'
        "<rapi:status-code>404</rapi:status-code>"
        "<rapi:message-code>RESTAPI-NODOCUMENT</rapi:message-code>"
        "<rapi:message>Resource or document does not exist</rapi:message>"
        "</rapi:error>"
    )
    assert extract_error_fields(body) == (
        "Resource or document does not exist",
        "RESTAPI-NODOCUMENT",
    )


def test_extract_error_fields_from_text_and_empty():
    assert extract_error_fields("  gateway down \n") == ("gateway down", None)
    assert extract_error_fields("") == (None, None)
    assert extract_error_fields(None) == (None, None)
