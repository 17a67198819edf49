"""Helpers for client bootstrap."""

from __future__ import annotations

from .config import DocDbClientConfig
from .core.errors import InvalidOptionError
from .core.operation import ConnectionParams
from .core.transport_shared import build_default_headers


def validate_client_config(config: DocDbClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise InvalidOptionError(str(exc), option="config") from exc


def build_connection_params(config: DocDbClientConfig) -> ConnectionParams:
    return ConnectionParams(headers=build_default_headers(config))


__all__ = [
    "validate_client_config",
    "build_connection_params",
]
