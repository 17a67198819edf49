"""Content-type driven body decoding shared by single and multipart responses."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping
from dataclasses import dataclass
from xml.etree import ElementTree

import httpx

from .errors import ProtocolError, ServerError, extract_error_fields
from .multipart import MultipartPart

_TEXT_TYPES = frozenset(
    {
        "application/xquery",
        "application/javascript",
        "application/vnd.marklogic-javascript",
        "application/sparql-query",
    }
)
_RECORD_SEPARATOR = "\x1e"


@dataclass(slots=True, frozen=True)
class ResponsePart:
    """One decoded section of a multipart response."""

    content_type: str | None
    headers: httpx.Headers
    content: object


def parse_header_params(value: str | None) -> tuple[str, dict[str, str]]:
    """Split ``type/sub; key=value`` style headers into a lowered value and params."""

    if not value:
        return "", {}
    head, *rest = value.split(";")
    params: dict[str, str] = {}
    for item in rest:
        key, eq, raw = item.partition("=")
        if not eq:
            continue
        params[key.strip().lower()] = raw.strip().strip('"')
    return head.strip().lower(), params


def _charset(params: Mapping[str, str]) -> str:
    return params.get("charset") or "utf-8"


def _is_json(mime: str) -> bool:
    return mime == "application/json" or mime.endswith("+json")


def _is_xml(mime: str) -> bool:
    return mime in ("application/xml", "text/xml") or mime.endswith("+xml")


def _decode_json_seq(text: str) -> list[object]:
    records: list[object] = []
    for record in text.split(_RECORD_SEPARATOR):
        record = record.strip()
        if record:
            records.append(json.loads(record))
    return records


def decode_body(content_type: str | None, body: bytes, *, parse_csv: bool = False) -> object:
    """Decode ``body`` per its content type.

    JSON becomes Python objects, a JSON text sequence becomes a list of
    records, XML becomes an ``Element``, CSV becomes text or (with
    ``parse_csv``) a list of rows, other text types become ``str`` and
    anything unknown stays ``bytes``.
    """

    mime, params = parse_header_params(content_type)
    if not body:
        return None
    try:
        if mime == "application/json-seq":
            return _decode_json_seq(body.decode(_charset(params)))
        if _is_json(mime):
            return json.loads(body.decode(_charset(params)))
        if _is_xml(mime):
            return ElementTree.fromstring(body)
        if mime == "text/csv":
            text = body.decode(_charset(params))
            if not parse_csv:
                return text
            return list(csv.reader(io.StringIO(text, newline="")))
        if mime.startswith("text/") or mime in _TEXT_TYPES:
            return body.decode(_charset(params))
    except (ValueError, ElementTree.ParseError) as exc:
        raise ProtocolError(f"response body is not valid {mime or 'content'}") from exc
    return body


def decode_part(part: MultipartPart, *, parse_csv: bool = False) -> ResponsePart:
    return ResponsePart(
        content_type=part.content_type,
        headers=part.headers,
        content=decode_body(part.content_type, part.body, parse_csv=parse_csv),
    )


def build_server_error(
    *,
    label: str,
    http_status: int,
    content_type: str | None,
    body: bytes,
) -> ServerError:
    """Map a rejected response to ``ServerError``, keeping the raw text when undecodable."""

    try:
        decoded = decode_body(content_type, body)
    except ProtocolError:
        decoded = body.decode("utf-8", errors="replace")
    if isinstance(decoded, bytes):
        decoded = decoded.decode("utf-8", errors="replace")

    message, message_code = extract_error_fields(decoded)
    summary = f"{label}: server responded with HTTP {http_status}"
    if message:
        summary = f"{summary}: {message}"
    return ServerError(
        summary,
        http_status=http_status,
        body=decoded,
        message_code=message_code,
    )


__all__ = [
    "ResponsePart",
    "parse_header_params",
    "decode_body",
    "decode_part",
    "build_server_error",
]
