"""Async HTTP transport with retry and response demultiplexing."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Protocol

import httpx

from ..config import DocDbClientConfig
from .errors import ClientClosedError, TransportError
from .multipart import aiter_multipart
from .operation import MULTIPART_BOUNDARY, Operation, ResponseShape
from .response_parsing import (
    ResponsePart,
    build_server_error,
    decode_body,
    decode_part,
    parse_header_params,
)
from .result import ResultProvider
from .retry import RetryPolicy, parse_retry_after
from .transport_shared import build_async_http_client

logger = logging.getLogger("docdb_client")


def _failure_cause(exc: httpx.HTTPError) -> str:
    return "timeout" if isinstance(exc, httpx.TimeoutException) else "network"


class AsyncHttpClient(Protocol):
    def build_request(self, method: str, url: str, **kwargs: object) -> httpx.Request: ...
    async def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...
    async def aclose(self) -> None: ...


class OperationStarter(Protocol):
    def start_request(self, operation: Operation) -> ResultProvider: ...


class AsyncTransport:
    """Runs ``Operation`` descriptors against the REST endpoint.

    ``start_request`` returns a ``ResultProvider`` immediately; the HTTP
    exchange happens when the provider is first consumed. Connection
    failures and ``503`` responses are retried per ``RetryConfig``.
    """

    def __init__(
        self,
        config: DocDbClientConfig,
        *,
        client: AsyncHttpClient | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._sleep = sleeper or asyncio.sleep
        self._clock = clock or time.monotonic
        self._retry = RetryPolicy(config.retry, rng=rng)
        self._closed = False
        self._owns_client = client is None
        self._client = client or build_async_http_client(config)

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    def start_request(self, operation: Operation) -> ResultProvider:
        if self._closed:
            raise ClientClosedError("transport is already closed")
        return ResultProvider(
            lambda: self._execute(operation),
            shape=operation.response_shape,
            label=operation.label,
        )

    async def _send(self, operation: Operation, attempt: int) -> httpx.Response:
        path = operation.request.path.lstrip("/")
        logger.debug(
            "request start label=%s method=%s path=%s attempt=%s",
            operation.label,
            operation.request.method,
            path,
            attempt,
        )
        request = self._client.build_request(
            operation.request.method,
            path,
            headers=operation.request.headers,
            content=operation.request.body,
        )
        return await self._client.send(request, stream=True)

    async def _execute(self, operation: Operation) -> AsyncIterator[object]:
        if self._closed:
            raise ClientClosedError("transport is already closed")

        started_at = self._clock()
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await self._send(operation, attempt)
            except httpx.HTTPError as exc:
                cause = _failure_cause(exc)
                if not self._retry.allows(attempt=attempt, elapsed_seconds=self._clock() - started_at):
                    logger.error(
                        "request %s error; giving up label=%s attempt=%s error=%s",
                        cause,
                        operation.label,
                        attempt,
                        exc.__class__.__name__,
                    )
                    raise TransportError(f"{operation.label}: {cause} error", cause=cause) from exc
                logger.warning(
                    "request %s error; retrying label=%s attempt=%s error=%s",
                    cause,
                    operation.label,
                    attempt,
                    exc.__class__.__name__,
                )
                await self._sleep(self._retry.delay(attempt))
                continue

            retry_after: float | None = None
            try:
                http_status = response.status_code
                logger.debug(
                    "response received label=%s attempt=%s http_status=%s",
                    operation.label,
                    attempt,
                    http_status,
                )
                retry = self._retry.is_retryable_status(
                    http_status, operation.valid_status_codes
                ) and self._retry.allows(attempt=attempt, elapsed_seconds=self._clock() - started_at)
                if not retry:
                    async for item in self._read_guarded(operation, response):
                        yield item
                    return
                retry_after = parse_retry_after(response.headers.get("retry-after"))
                logger.warning(
                    "server unavailable; retrying label=%s attempt=%s http_status=%s",
                    operation.label,
                    attempt,
                    http_status,
                )
            finally:
                await response.aclose()
            await self._sleep(self._retry.delay(attempt, retry_after=retry_after))

    async def _read_guarded(
        self,
        operation: Operation,
        response: httpx.Response,
    ) -> AsyncIterator[object]:
        try:
            async for item in self._read_response(operation, response):
                yield item
        except httpx.HTTPError as exc:
            cause = _failure_cause(exc)
            logger.error(
                "response read %s error label=%s error=%s",
                cause,
                operation.label,
                exc.__class__.__name__,
            )
            raise TransportError(
                f"{operation.label}: {cause} error while reading response",
                http_status=response.status_code,
                cause=cause,
            ) from exc

    async def _read_response(
        self,
        operation: Operation,
        response: httpx.Response,
    ) -> AsyncIterator[object]:
        http_status = response.status_code
        content_type = response.headers.get("content-type")

        if http_status not in operation.valid_status_codes:
            body = await response.aread()
            error = build_server_error(
                label=operation.label,
                http_status=http_status,
                content_type=content_type,
                body=body,
            )
            logger.error(
                "request failed label=%s http_status=%s message_code=%s",
                operation.label,
                http_status,
                error.message_code,
            )
            raise error

        if http_status in operation.empty_status_codes:
            logger.info(
                "request resolved empty label=%s http_status=%s",
                operation.label,
                http_status,
            )
            if operation.response_shape is not ResponseShape.MULTIPART:
                yield operation.make_empty()
            return

        if operation.response_shape is ResponseShape.MULTIPART:
            count = 0
            async for part in self._iter_parts(operation, response, content_type):
                count += 1
                yield operation.decode_part(part) if operation.decode_part else part
            logger.info("request success label=%s parts=%s", operation.label, count)
            return

        body = await response.aread()
        value: object = None
        if operation.response_shape is ResponseShape.SINGLE:
            value = decode_body(content_type, body, parse_csv=operation.parse_csv)
        if operation.decode_single is not None:
            value = operation.decode_single(value)
        logger.info("request success label=%s http_status=%s", operation.label, http_status)
        yield value

    @staticmethod
    async def _iter_parts(
        operation: Operation,
        response: httpx.Response,
        content_type: str | None,
    ) -> AsyncIterator[ResponsePart]:
        mime, params = parse_header_params(content_type)
        if not mime.startswith("multipart/"):
            body = await response.aread()
            if body:
                yield ResponsePart(
                    content_type=content_type,
                    headers=response.headers,
                    content=decode_body(content_type, body, parse_csv=operation.parse_csv),
                )
            return
        boundary = params.get("boundary") or MULTIPART_BOUNDARY
        async for part in aiter_multipart(response.aiter_bytes(), boundary):
            yield decode_part(part, parse_csv=operation.parse_csv)


__all__ = [
    "AsyncHttpClient",
    "OperationStarter",
    "AsyncTransport",
]
