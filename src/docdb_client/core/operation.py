"""Request descriptors handed to the transport."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from urllib.parse import quote

MULTIPART_BOUNDARY = "DOCDB_CLIENT_BOUNDARY_7d3f1a9c"

QueryParam = tuple[str, str]


class ResponseShape(str, Enum):
    """How a request body is sent or a response body is read."""

    EMPTY = "empty"
    SINGLE = "single"
    MULTIPART = "multipart"


def encode_component(value: str) -> str:
    """Percent-encode like ``encodeURIComponent``."""

    return quote(value, safe="!*'()")


def render_path(endpoint: str, params: Iterable[QueryParam]) -> str:
    """Render an endpoint and its ordered parameters into one path.

    The first parameter is introduced by ``?`` and every following one
    by ``&``, whichever builder contributed it.
    """

    pairs = [f"{encode_component(key)}={encode_component(value)}" for key, value in params]
    if not pairs:
        return endpoint
    return endpoint + "?" + "&".join(pairs)


@dataclass(slots=True, frozen=True)
class ConnectionParams:
    """Read-only request headers shared by every operation of a client.

    Paths stay relative; the transport resolves them against its base URL.
    """

    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def new_request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> "RequestOptions":
        merged = dict(self.headers)
        if headers:
            merged.update(headers)
        return RequestOptions(method=method, path=path, headers=merged, body=body)


@dataclass(slots=True)
class RequestOptions:
    method: str
    path: str
    headers: dict[str, str]
    body: str | bytes | None = None


@dataclass(slots=True, frozen=True)
class Operation:
    """One request/response cycle, consumed once by the transport."""

    label: str
    request: RequestOptions
    request_shape: ResponseShape = ResponseShape.EMPTY
    response_shape: ResponseShape = ResponseShape.SINGLE
    valid_status_codes: frozenset[int] = frozenset({200})
    # Statuses that resolve to ``empty_value()`` instead of being decoded.
    empty_status_codes: frozenset[int] = frozenset()
    empty_value: Callable[[], object] | None = None
    parse_csv: bool = False
    decode_single: Callable[[object], object] | None = None
    decode_part: Callable[[object], object] | None = None
    client: object | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "valid_status_codes", frozenset(self.valid_status_codes))
        object.__setattr__(self, "empty_status_codes", frozenset(self.empty_status_codes))
        if not self.empty_status_codes <= self.valid_status_codes:
            raise ValueError("empty_status_codes must be a subset of valid_status_codes")

    def make_empty(self) -> object:
        if self.empty_value is None:
            return None
        return self.empty_value()


__all__ = [
    "MULTIPART_BOUNDARY",
    "QueryParam",
    "ResponseShape",
    "encode_component",
    "render_path",
    "ConnectionParams",
    "RequestOptions",
    "Operation",
]
