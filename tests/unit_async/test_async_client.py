from __future__ import annotations

import httpx
import pytest

from docdb_client.async_client import AsyncDocDbClient
from docdb_client.config import AuthConfig, DocDbClientConfig, RetryConfig
from docdb_client.core.async_transport import AsyncTransport
from docdb_client.core.errors import ClientClosedError, InvalidOptionError
from docdb_client.core.transport_shared import build_auth
from tests.shared.transport import build_config, make_transport


class _CloseTrackingTransport:
    def __init__(self):
        self.close_calls = 0

    async def close(self) -> None:
        self.close_calls += 1

    def start_request(self, operation):
        raise AssertionError("not expected")


@pytest.mark.asyncio
async def test_async_client_close_is_idempotent():
    transport = _CloseTrackingTransport()
    client = AsyncDocDbClient(transport=transport)  # type: ignore[arg-type]

    await client.close()
    await client.close()

    assert client.closed is True
    assert transport.close_calls == 1


@pytest.mark.asyncio
async def test_async_client_context_manager_closes_transport():
    transport = _CloseTrackingTransport()
    async with AsyncDocDbClient(transport=transport) as client:  # type: ignore[arg-type]
        assert client.closed is False
    assert client.closed is True
    assert transport.close_calls == 1


@pytest.mark.asyncio
async def test_async_client_rejects_reentry_after_close():
    client = AsyncDocDbClient(transport=_CloseTrackingTransport())  # type: ignore[arg-type]
    await client.close()

    with pytest.raises(ClientClosedError):
        async with client:
            pass


@pytest.mark.asyncio
async def test_operations_after_close_raise_client_closed():
    transport, handler = make_transport([])
    client = AsyncDocDbClient(config=build_config(), transport=transport)
    await client.close()

    with pytest.raises(ClientClosedError):
        client.rows.query({"$optic": {}})
    with pytest.raises(ClientClosedError):
        client.documents.remove("/a.json")
    assert handler.calls == 0


def test_invalid_config_is_rejected():
    config = DocDbClientConfig(retry=RetryConfig(max_attempts=0))

    with pytest.raises(InvalidOptionError) as exc_info:
        AsyncDocDbClient(config=config)

    assert exc_info.value.option == "config"


def test_connection_params_use_configured_user_agent():
    client = AsyncDocDbClient(
        config=DocDbClientConfig(user_agent="etl-job/2.1"),
        transport=_CloseTrackingTransport(),  # type: ignore[arg-type]
    )

    assert client.connection_params.headers["User-Agent"] == "etl-job/2.1"


@pytest.mark.asyncio
async def test_configured_headers_and_auth_reach_the_wire():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    config = DocDbClientConfig(
        base_url="http://docdb.test:8000",
        auth=AuthConfig(username="rest-writer", password="x", scheme="basic"),
    )
    http_client = httpx.AsyncClient(
        base_url="http://docdb.test:8000/",
        auth=build_auth(config.auth),
        transport=httpx.MockTransport(handler),
    )
    transport = AsyncTransport(config, client=http_client)
    async with AsyncDocDbClient(config=config, transport=transport) as client:
        await client.documents.remove("/a.json").result()
    await http_client.aclose()

    assert seen[0].headers["User-Agent"] == "docdb-client/0.1.0"
    assert seen[0].headers["Authorization"].startswith("Basic ")
