"""Extension library assets under ``/v1/ext``."""

from __future__ import annotations

from urllib.parse import quote

from ..core.async_transport import OperationStarter
from ..core.errors import InvalidOptionError
from ..core.operation import ConnectionParams, Operation, ResponseShape
from ..core.result import ResultProvider

EXTLIBS_ENDPOINT = "/v1/ext"


def extlib_path(path: str) -> str:
    if not isinstance(path, str) or not path.startswith("/"):
        raise InvalidOptionError("library path must start with /", option="path", value=path)
    return EXTLIBS_ENDPOINT + quote(path, safe="/")


class AsyncExtlibsService:
    def __init__(self, transport: OperationStarter, connection: ConnectionParams) -> None:
        self._transport = transport
        self._connection = connection

    def write(self, path: str, content_type: str, source: str | bytes) -> ResultProvider:
        if not content_type:
            raise InvalidOptionError("content_type is required", option="content_type")
        request = self._connection.new_request(
            "PUT",
            extlib_path(path),
            headers={"Content-Type": content_type},
            body=source,
        )
        operation = Operation(
            label="write extension library",
            request=request,
            request_shape=ResponseShape.SINGLE,
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({201, 204}),
            decode_single=lambda _: path,
            client=self,
        )
        return self._transport.start_request(operation)

    def read(self, path: str) -> ResultProvider:
        request = self._connection.new_request("GET", extlib_path(path))
        return self._transport.start_request(
            Operation(label="read extension library", request=request, client=self)
        )

    def list(self, directory: str = "/") -> ResultProvider:
        path = extlib_path(directory if directory.endswith("/") else directory + "/")
        request = self._connection.new_request(
            "GET",
            path,
            headers={"Accept": "application/json"},
        )
        return self._transport.start_request(
            Operation(label="list extension libraries", request=request, client=self)
        )

    def remove(self, path: str) -> ResultProvider:
        request = self._connection.new_request("DELETE", extlib_path(path))
        operation = Operation(
            label="remove extension library",
            request=request,
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({204}),
            decode_single=lambda _: path,
            client=self,
        )
        return self._transport.start_request(operation)


__all__ = [
    "EXTLIBS_ENDPOINT",
    "extlib_path",
    "AsyncExtlibsService",
]
