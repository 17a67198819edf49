"""Settle-once result handle with an optional streaming view."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

from .errors import ResultConsumedError, TransportError
from .operation import ResponseShape

logger = logging.getLogger("docdb_client")

T = TypeVar("T")

SuccessCallback = Callable[[object], object]
FailureCallback = Callable[[BaseException], object]
ItemCallback = Callable[[object], object]


def _elements(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    rows = getattr(value, "rows", None)
    if isinstance(rows, tuple):
        return list(rows)
    return [value]


class ResultProvider(Generic[T]):
    """Handle over the outcome of one operation.

    The request is dispatched on first consumption: ``await result()``,
    ``stream()`` or ``subscribe()``. Exactly one terminal outcome is
    recorded. Later settle attempts are ignored, so callbacks never run
    after the provider settled.

    For a ``multipart`` response the settled value is the list of parts
    and ``stream()`` yields each part as it is demultiplexed. For a
    ``single`` response the settled value is the decoded body and
    ``stream()`` yields its rows (or the value itself when it is not a
    sequence).
    """

    def __init__(
        self,
        produce: Callable[[], AsyncIterator[object]],
        *,
        shape: ResponseShape,
        label: str,
    ) -> None:
        self._produce = produce
        self._shape = shape
        self._label = label
        self._started = False
        self._settled = False
        self._value: object = None
        self._error: BaseException | None = None
        self._task: asyncio.Task[None] | None = None
        self._success_callbacks: list[SuccessCallback] = []
        self._failure_callbacks: list[FailureCallback] = []
        self._item_callbacks: list[ItemCallback] = []

    @property
    def label(self) -> str:
        return self._label

    @property
    def settled(self) -> bool:
        return self._settled

    async def result(self, *, timeout: float | None = None) -> T:
        """Wait for the terminal value, raising the failure if there is one.

        ``timeout`` bounds the wait only; the underlying request keeps
        running and can still be awaited again.
        """

        if not self._settled:
            task = self._ensure_task()
            try:
                await asyncio.wait_for(asyncio.shield(task), timeout)
            except asyncio.TimeoutError as exc:
                raise TransportError(
                    f"{self._label}: no result within {timeout} seconds",
                    cause="timeout",
                ) from exc
            except Exception:
                if not self._settled:
                    raise
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def stream(self) -> AsyncIterator[object]:
        """Iterate partial results; may be called once per provider."""

        if self._started:
            raise ResultConsumedError(f"{self._label}: result stream already consumed")
        self._started = True
        return self._iterate()

    def subscribe(
        self,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
        *,
        on_item: ItemCallback | None = None,
    ) -> "ResultProvider[T]":
        """Register callbacks and start consumption in a background task."""

        if on_item is not None:
            if self._started:
                raise ResultConsumedError(f"{self._label}: cannot observe items after start")
            self._item_callbacks.append(on_item)
        if self._settled:
            if self._error is None:
                if on_success is not None:
                    on_success(self._value)
            elif on_failure is not None:
                on_failure(self._error)
            return self
        if on_success is not None:
            self._success_callbacks.append(on_success)
        if on_failure is not None:
            self._failure_callbacks.append(on_failure)
        self._ensure_task()
        return self

    def _ensure_task(self) -> asyncio.Task[None]:
        if self._task is None:
            if self._started:
                raise ResultConsumedError(f"{self._label}: result stream already consumed")
            self._started = True
            self._task = asyncio.ensure_future(self._drain())
            self._task.add_done_callback(_retrieve_exception)
        return self._task

    async def _drain(self) -> None:
        async for _ in self._iterate():
            pass

    async def _iterate(self) -> AsyncIterator[object]:
        collected: list[object] = []
        single: object = None
        completed = False
        try:
            async for item in self._produce():
                if self._shape is ResponseShape.MULTIPART:
                    collected.append(item)
                    self._notify_item(item)
                    yield item
                    continue
                single = item
                for element in _elements(item):
                    self._notify_item(element)
                    yield element
            completed = True
        except Exception as exc:
            self._settle(error=exc)
            raise
        finally:
            if not completed:
                # consumer stopped iterating early
                self._abandon()
        self._settle(value=collected if self._shape is ResponseShape.MULTIPART else single)

    def _notify_item(self, item: object) -> None:
        for callback in self._item_callbacks:
            self._invoke(callback, item, kind="item")

    def _invoke(self, callback: Callable[[object], object], payload: object, *, kind: str) -> None:
        # later subscribers are still notified when one raises
        try:
            callback(payload)
        except Exception:
            logger.exception("%s callback failed label=%s", kind, self._label)

    def _abandon(self) -> None:
        if self._settled:
            return
        self._settle(
            error=ResultConsumedError(f"{self._label}: result stream closed before completion")
        )

    def _settle(self, *, value: object = None, error: BaseException | None = None) -> None:
        if self._settled:
            return
        self._settled = True
        self._value = value
        self._error = error
        if error is None:
            callbacks: list = self._success_callbacks
            payload: object = value
        else:
            callbacks = self._failure_callbacks
            payload = error
        self._success_callbacks = []
        self._failure_callbacks = []
        kind = "success" if error is None else "failure"
        for callback in callbacks:
            self._invoke(callback, payload, kind=kind)


def _retrieve_exception(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug("result task finished with %s", error.__class__.__name__)


__all__ = [
    "ResultProvider",
]
