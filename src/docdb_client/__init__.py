"""Public package exports for the document database client."""

from .async_client import AsyncDocDbClient
from .config import DocDbClientConfig
from .core.errors import (
    DocDbError,
    IncompatibleBindingError,
    InvalidBindingError,
    InvalidOptionError,
    ServerError,
    TransportError,
)

__all__ = [
    "AsyncDocDbClient",
    "DocDbClientConfig",
    "DocDbError",
    "InvalidOptionError",
    "InvalidBindingError",
    "IncompatibleBindingError",
    "ServerError",
    "TransportError",
]
