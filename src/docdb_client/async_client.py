"""Public async client entrypoint."""

from __future__ import annotations

from types import TracebackType

from .client_shared import build_connection_params, validate_client_config
from .config import DocDbClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import ClientClosedError
from .documents.service import AsyncDocumentsService
from .resources.extlibs import AsyncExtlibsService
from .resources.transforms import AsyncTransformsService
from .rows.service import AsyncRowsService


class _ConfigResources:
    """``client.config`` namespace."""

    def __init__(self, transforms: AsyncTransformsService, extlibs: AsyncExtlibsService) -> None:
        self.transforms = transforms
        self.extlibs = extlibs


class AsyncDocDbClient:
    """Public async database client."""

    def __init__(
        self,
        *,
        config: DocDbClientConfig | None = None,
        transport: AsyncTransport | None = None,
    ) -> None:
        self._config = config or DocDbClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        self.connection_params = build_connection_params(self._config)
        self._closed = False

        self.rows = AsyncRowsService(self._transport, self.connection_params)
        self.documents = AsyncDocumentsService(self._transport, self.connection_params)
        self.config = _ConfigResources(
            transforms=AsyncTransformsService(self._transport, self.connection_params),
            extlibs=AsyncExtlibsService(self._transport, self.connection_params),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("AsyncDocDbClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncDocDbClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncDocDbClient",
]
