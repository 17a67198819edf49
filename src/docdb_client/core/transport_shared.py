"""Construction of the default httpx client from ``DocDbClientConfig``."""

from __future__ import annotations

import ssl
from collections.abc import Mapping

import httpx

from ..config import AuthConfig, DocDbClientConfig


def build_default_headers(config: DocDbClientConfig) -> Mapping[str, str]:
    # Accept is negotiated per operation
    return {
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: DocDbClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_auth(auth: AuthConfig | None) -> httpx.Auth | None:
    if auth is None:
        return None
    if auth.scheme == "basic":
        return httpx.BasicAuth(auth.username, auth.password)
    return httpx.DigestAuth(auth.username, auth.password)


def build_verify(verify_tls: bool | str) -> bool | ssl.SSLContext:
    if isinstance(verify_tls, str):
        return ssl.create_default_context(cafile=verify_tls)
    return verify_tls


def build_async_http_client(config: DocDbClientConfig) -> httpx.AsyncClient:
    """Client rooted at ``base_url`` so operation paths resolve relative to it."""

    return httpx.AsyncClient(
        base_url=config.base_url.rstrip("/") + "/",
        timeout=build_default_timeout(config),
        auth=build_auth(config.auth),
        verify=build_verify(config.transport.verify_tls),
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_auth",
    "build_verify",
    "build_async_http_client",
]
