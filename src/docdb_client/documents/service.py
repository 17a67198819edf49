"""Document read, write and remove."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.async_transport import OperationStarter
from ..core.operation import ConnectionParams, Operation, ResponseShape
from ..core.result import ResultProvider
from .models import DocumentDescriptor, Transform
from .params import (
    build_read_request,
    build_remove_request,
    build_write_request,
    document_from_part,
    normalize_uris,
)


class AsyncDocumentsService:
    def __init__(self, transport: OperationStarter, connection: ConnectionParams) -> None:
        self._transport = transport
        self._connection = connection

    def read(
        self,
        *uris: str,
        categories: str | Iterable[object] = ("content",),
        transform: Transform | str | Sequence[object] | None = None,
    ) -> ResultProvider:
        """Read one or more documents as a multipart response.

        Settles to a list of ``Document``, one per returned part, in the
        order the server sent them.
        """

        if isinstance(categories, str):
            categories = (categories,)
        request = build_read_request(
            normalize_uris(uris),
            categories,
            Transform.coerce(transform),
            self._connection,
        )
        operation = Operation(
            label="read documents",
            request=request,
            response_shape=ResponseShape.MULTIPART,
            valid_status_codes=frozenset({200}),
            decode_part=document_from_part,  # type: ignore[arg-type]
            client=self,
        )
        return self._transport.start_request(operation)

    def write(self, descriptor: DocumentDescriptor) -> ResultProvider:
        """Write one document; settles to its URI."""

        uri = descriptor.uri
        operation = Operation(
            label="write document",
            request=build_write_request(descriptor, self._connection),
            request_shape=ResponseShape.SINGLE,
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({201, 204}),
            decode_single=lambda _: uri,
            client=self,
        )
        return self._transport.start_request(operation)

    def remove(self, *uris: str) -> ResultProvider:
        """Remove documents; settles to the removed URIs."""

        normalized = normalize_uris(uris)
        operation = Operation(
            label="remove documents",
            request=build_remove_request(normalized, self._connection),
            response_shape=ResponseShape.EMPTY,
            valid_status_codes=frozenset({204}),
            decode_single=lambda _: normalized,
            client=self,
        )
        return self._transport.start_request(operation)


__all__ = [
    "AsyncDocumentsService",
]
