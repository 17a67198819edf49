"""Request builders for the documents endpoint."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping

from ..core.errors import InvalidOptionError
from ..core.operation import (
    MULTIPART_BOUNDARY,
    ConnectionParams,
    QueryParam,
    RequestOptions,
    render_path,
)
from ..core.response_parsing import ResponsePart, parse_header_params
from .models import Document, DocumentCategory, DocumentDescriptor, Transform, coerce_category

DOCUMENTS_ENDPOINT = "/v1/documents"


def normalize_uris(uris: Iterable[str]) -> tuple[str, ...]:
    normalized = tuple(uris)
    if not normalized:
        raise InvalidOptionError("at least one uri is required", option="uris")
    for uri in normalized:
        if not isinstance(uri, str) or not uri:
            raise InvalidOptionError("uri must be a non-empty str", option="uris", value=uri)
    return normalized


def build_read_params(
    uris: tuple[str, ...],
    categories: Iterable[object],
    transform: Transform | None,
) -> list[QueryParam]:
    params: list[QueryParam] = [("uri", uri) for uri in uris]
    seen: list[DocumentCategory] = []
    for value in categories:
        category = coerce_category(value)
        if category not in seen:
            seen.append(category)
    if not seen:
        raise InvalidOptionError("at least one category is required", option="category")
    params.extend(("category", category.value) for category in seen)
    if transform is not None:
        params.extend(transform.to_params())
    return params


def build_write_params(descriptor: DocumentDescriptor) -> list[QueryParam]:
    params: list[QueryParam] = [("uri", descriptor.uri)]
    params.extend(("collection", collection) for collection in descriptor.collections)
    for role, capabilities in descriptor.permissions.items():
        params.extend((f"perm:{role}", capability.value) for capability in capabilities)
    params.extend((f"prop:{name}", str(value)) for name, value in descriptor.properties.items())
    if descriptor.quality is not None:
        params.append(("quality", str(descriptor.quality)))
    if descriptor.temporal_collection:
        params.append(("temporal-collection", descriptor.temporal_collection))
    if descriptor.system_time:
        params.append(("system-time", descriptor.system_time))
    if descriptor.transform is not None:
        params.extend(descriptor.transform.to_params())  # type: ignore[union-attr]
    return params


def serialize_content(content: object, content_type: str | None) -> tuple[str | bytes, str]:
    if isinstance(content, (Mapping, list)):
        return json.dumps(content, ensure_ascii=False), content_type or "application/json"
    if isinstance(content, (bytes, bytearray)):
        return bytes(content), content_type or "application/octet-stream"
    if isinstance(content, str):
        return content, content_type or "text/plain"
    raise InvalidOptionError(
        "content must be a mapping, list, str or bytes",
        option="content",
        value=type(content).__name__,
    )


def build_read_request(
    uris: tuple[str, ...],
    categories: Iterable[object],
    transform: Transform | None,
    connection: ConnectionParams,
) -> RequestOptions:
    return connection.new_request(
        "GET",
        render_path(DOCUMENTS_ENDPOINT, build_read_params(uris, categories, transform)),
        headers={"Accept": f"multipart/mixed; boundary={MULTIPART_BOUNDARY}"},
    )


def build_write_request(
    descriptor: DocumentDescriptor,
    connection: ConnectionParams,
) -> RequestOptions:
    body, content_type = serialize_content(descriptor.content, descriptor.content_type)
    return connection.new_request(
        "PUT",
        render_path(DOCUMENTS_ENDPOINT, build_write_params(descriptor)),
        headers={"Content-Type": content_type},
        body=body,
    )


def build_remove_request(uris: tuple[str, ...], connection: ConnectionParams) -> RequestOptions:
    return connection.new_request(
        "DELETE",
        render_path(DOCUMENTS_ENDPOINT, [("uri", uri) for uri in uris]),
    )


def document_from_part(part: ResponsePart) -> Document:
    _, disposition = parse_header_params(part.headers.get("content-disposition"))
    return Document(
        uri=disposition.get("filename"),
        category=disposition.get("category"),
        format=disposition.get("format"),
        content_type=part.content_type,
        content=part.content,
    )


__all__ = [
    "DOCUMENTS_ENDPOINT",
    "normalize_uris",
    "build_read_params",
    "build_write_params",
    "serialize_content",
    "build_read_request",
    "build_write_request",
    "build_remove_request",
    "document_from_part",
]
