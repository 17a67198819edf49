"""Server-side configuration resources."""

from .extlibs import AsyncExtlibsService
from .transforms import AsyncTransformsService, TransformFormat

__all__ = [
    "AsyncExtlibsService",
    "AsyncTransformsService",
    "TransformFormat",
]
