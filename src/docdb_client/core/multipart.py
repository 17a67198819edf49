"""Incremental ``multipart/mixed`` splitting."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass

import httpx

from .errors import ProtocolError


@dataclass(slots=True, frozen=True)
class MultipartPart:
    headers: httpx.Headers
    body: bytes

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")


def _parse_part(raw: bytes) -> MultipartPart:
    if not raw:
        return MultipartPart(headers=httpx.Headers(), body=b"")
    if raw.startswith(b"\r\n"):
        head, body = b"", raw[2:]
    elif raw.startswith(b"\n"):
        head, body = b"", raw[1:]
    else:
        head, sep, body = raw.partition(b"\r\n\r\n")
        if not sep:
            head, sep, body = raw.partition(b"\n\n")
        if not sep:
            raise ProtocolError("multipart part has no header terminator")

    headers: list[tuple[str, str]] = []
    for line in head.decode("latin-1").splitlines():
        if not line.strip():
            continue
        name, colon, value = line.partition(":")
        if not colon:
            raise ProtocolError(f"malformed multipart header line: {line!r}")
        headers.append((name.strip(), value.strip()))
    return MultipartPart(headers=httpx.Headers(headers), body=body)


class MultipartSplitter:
    """Feed raw bytes, collect complete parts in arrival order."""

    def __init__(self, boundary: str) -> None:
        if not boundary:
            raise ValueError("boundary must not be empty")
        self._delimiter = b"--" + boundary.encode("latin-1")
        self._buffer = bytearray()
        self._in_part = False
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def feed(self, data: bytes) -> list[MultipartPart]:
        if self._done:
            return []
        self._buffer.extend(data)
        parts: list[MultipartPart] = []
        while not self._done:
            if self._in_part:
                end = self._buffer.find(b"\n" + self._delimiter)
                if end < 0:
                    break
                raw = bytes(self._buffer[:end])
                if raw.endswith(b"\r"):
                    raw = raw[:-1]
                parts.append(_parse_part(raw))
                del self._buffer[: end + 1]
                self._in_part = False
                continue

            start = self._buffer.find(self._delimiter)
            if start < 0:
                break
            after = start + len(self._delimiter)
            if len(self._buffer) < after + 2:
                break
            if self._buffer[after : after + 2] == b"--":
                self._done = True
                self._buffer.clear()
                break
            eol = self._buffer.find(b"\n", after)
            if eol < 0:
                break
            del self._buffer[: eol + 1]
            self._in_part = True
        return parts

    def close(self) -> None:
        if not self._done:
            raise ProtocolError("multipart body ended before the closing boundary")


async def aiter_multipart(
    chunks: AsyncIterable[bytes],
    boundary: str,
) -> AsyncIterator[MultipartPart]:
    splitter = MultipartSplitter(boundary)
    async for chunk in chunks:
        for part in splitter.feed(chunk):
            yield part
        if splitter.done:
            return
    splitter.close()


__all__ = [
    "MultipartPart",
    "MultipartSplitter",
    "aiter_multipart",
]
