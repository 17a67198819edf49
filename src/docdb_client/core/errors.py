"""Error types and server error extraction."""

from __future__ import annotations

from collections.abc import Mapping
from xml.etree import ElementTree


class DocDbError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class InvalidOptionError(DocDbError):
    """Option value outside its legal set; raised before any request is built."""

    def __init__(self, message: str, *, option: str, value: object = None) -> None:
        super().__init__(message)
        self.option = option
        self.value = value


class InvalidBindingError(DocDbError):
    """Malformed placeholder binding."""

    def __init__(self, message: str, *, binding: str | None = None) -> None:
        super().__init__(message)
        self.binding = binding


class IncompatibleBindingError(InvalidBindingError):
    """Binding combines a datatype with a language tag."""


class ServerError(DocDbError):
    """Server answered with a status outside the operation's valid set."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int,
        body: object = None,
        message_code: str | None = None,
    ) -> None:
        super().__init__(message, http_status=http_status, cause="server")
        self.body = body
        self.message_code = message_code


class TransportError(DocDbError):
    """Network/transport-level failure."""


class ProtocolError(DocDbError):
    """Response body could not be decoded as declared."""


class ClientClosedError(DocDbError):
    """Raised when client is used after close."""


class ResultConsumedError(DocDbError):
    """Raised when a result stream is read more than once."""


def _text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def extract_error_fields(body: object) -> tuple[str | None, str | None]:
    """Return ``(message, message_code)`` from a decoded error body."""

    if isinstance(body, Mapping):
        envelope = body.get("errorResponse", body)
        if not isinstance(envelope, Mapping):
            return None, None
        return _text(envelope.get("message")), _text(envelope.get("messageCode"))
    if isinstance(body, ElementTree.Element):
        message = body.find("{*}message")
        code = body.find("{*}message-code")
        return (
            message.text if message is not None else None,
            code.text if code is not None else None,
        )
    if isinstance(body, str) and body.strip():
        return body.strip(), None
    return None, None


__all__ = [
    "DocDbError",
    "InvalidOptionError",
    "InvalidBindingError",
    "IncompatibleBindingError",
    "ServerError",
    "TransportError",
    "ProtocolError",
    "ClientClosedError",
    "ResultConsumedError",
    "extract_error_fields",
]
