"""Installed server-side transforms under ``/v1/config/transforms``."""

from __future__ import annotations

from enum import Enum

from ..core.async_transport import OperationStarter
from ..core.errors import InvalidOptionError
from ..core.operation import ConnectionParams, Operation, ResponseShape, encode_component, render_path
from ..core.result import ResultProvider

TRANSFORMS_ENDPOINT = "/v1/config/transforms"


class TransformFormat(str, Enum):
    XQUERY = "xquery"
    XSLT = "xslt"
    JAVASCRIPT = "javascript"


_CONTENT_TYPES = {
    TransformFormat.XQUERY: "application/xquery",
    TransformFormat.XSLT: "application/xslt+xml",
    TransformFormat.JAVASCRIPT: "application/vnd.marklogic-javascript",
}


def _coerce_format(value: object) -> TransformFormat:
    for member in TransformFormat:
        if member is value or member.value == value:
            return member
    raise InvalidOptionError(f'invalid transform format "{value}"', option="format", value=value)


def transform_path(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidOptionError("transform name must be a non-empty str", option="name", value=name)
    return f"{TRANSFORMS_ENDPOINT}/{encode_component(name)}"


class AsyncTransformsService:
    def __init__(self, transport: OperationStarter, connection: ConnectionParams) -> None:
        self._transport = transport
        self._connection = connection

    def write(
        self,
        name: str,
        format: TransformFormat | str,
        source: str | bytes,
        *,
        title: str | None = None,
        description: str | None = None,
        provider: str | None = None,
        version: str | float | None = None,
    ) -> ResultProvider:
        transform_format = _coerce_format(format)
        params = [
            (key, str(value))
            for key, value in (
                ("title", title),
                ("description", description),
                ("provider", provider),
                ("version", version),
            )
            if value is not None
        ]
        request = self._connection.new_request(
            "PUT",
            render_path(transform_path(name), params),
            headers={"Content-Type": _CONTENT_TYPES[transform_format]},
            body=source,
        )
        operation = Operation(
            label="write transform",
            request=request,
            request_shape=ResponseShape.SINGLE,
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({204}),
            decode_single=lambda _: name,
            client=self,
        )
        return self._transport.start_request(operation)

    def read(self, name: str) -> ResultProvider:
        request = self._connection.new_request("GET", transform_path(name))
        return self._transport.start_request(
            Operation(label="read transform", request=request, client=self)
        )

    def list(self) -> ResultProvider:
        request = self._connection.new_request(
            "GET",
            TRANSFORMS_ENDPOINT,
            headers={"Accept": "application/json"},
        )
        return self._transport.start_request(
            Operation(label="list transforms", request=request, client=self)
        )

    def remove(self, name: str) -> ResultProvider:
        request = self._connection.new_request("DELETE", transform_path(name))
        operation = Operation(
            label="remove transform",
            request=request,
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({204}),
            decode_single=lambda _: name,
            client=self,
        )
        return self._transport.start_request(operation)


__all__ = [
    "TRANSFORMS_ENDPOINT",
    "TransformFormat",
    "transform_path",
    "AsyncTransformsService",
]
