"""Document descriptors and read results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import InvalidOptionError


class DocumentCategory(str, Enum):
    CONTENT = "content"
    METADATA = "metadata"
    COLLECTIONS = "collections"
    PERMISSIONS = "permissions"
    PROPERTIES = "properties"
    QUALITY = "quality"
    METADATA_VALUES = "metadata-values"


class Capability(str, Enum):
    READ = "read"
    UPDATE = "update"
    INSERT = "insert"
    EXECUTE = "execute"
    NODE_UPDATE = "node-update"


def _coerce_member(enum_cls: type[Enum], value: object, *, option: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    raise InvalidOptionError(f'invalid {option} "{value}"', option=option, value=value)


def coerce_category(value: object) -> DocumentCategory:
    return _coerce_member(DocumentCategory, value, option="category")  # type: ignore[return-value]


@dataclass(slots=True, frozen=True)
class Transform:
    """Server-side transform applied while reading or writing."""

    name: str
    params: tuple[tuple[str, str], ...] | Mapping[str, object] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidOptionError("transform name must be a non-empty str", option="transform")
        params = self.params
        if isinstance(params, Mapping):
            params = tuple((str(key), str(value)) for key, value in params.items())
        object.__setattr__(self, "params", tuple(params))

    def to_params(self) -> list[tuple[str, str]]:
        return [("transform", self.name)] + [(f"trans:{key}", value) for key, value in self.params]

    @classmethod
    def coerce(cls, value: object) -> "Transform | None":
        """Accept a ``Transform``, a bare name, or a ``(name, params)`` pair."""

        if value is None or isinstance(value, Transform):
            return value
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, Sequence) and len(value) in (1, 2):
            name = value[0]
            params = value[1] if len(value) == 2 else ()
            return cls(name=name, params=params)  # type: ignore[arg-type]
        raise InvalidOptionError("invalid transform", option="transform", value=value)


@dataclass(slots=True, frozen=True)
class DocumentDescriptor:
    uri: str
    content: object
    content_type: str | None = None
    collections: Sequence[str] = ()
    permissions: Mapping[str, Sequence[str]] = field(default_factory=dict)
    properties: Mapping[str, object] = field(default_factory=dict)
    quality: int | None = None
    temporal_collection: str | None = None
    system_time: str | None = None
    transform: Transform | str | Sequence[object] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.uri, str) or not self.uri:
            raise InvalidOptionError("uri must be a non-empty str", option="uri", value=self.uri)
        if isinstance(self.collections, str):
            raise InvalidOptionError(
                "collections must be a sequence of str, not str",
                option="collections",
                value=self.collections,
            )
        object.__setattr__(self, "collections", tuple(self.collections))
        if self.quality is not None and (
            isinstance(self.quality, bool) or not isinstance(self.quality, int)
        ):
            raise InvalidOptionError("quality must be int", option="quality", value=self.quality)
        normalized: dict[str, tuple[Capability, ...]] = {}
        for role, capabilities in self.permissions.items():
            if isinstance(capabilities, str):
                capabilities = (capabilities,)
            normalized[role] = tuple(
                _coerce_member(Capability, capability, option="capability")  # type: ignore[misc]
                for capability in capabilities
            )
        object.__setattr__(self, "permissions", normalized)
        object.__setattr__(self, "transform", Transform.coerce(self.transform))


@dataclass(slots=True, frozen=True)
class Document:
    """One part of a multi-document read."""

    uri: str | None
    category: str | None
    format: str | None
    content_type: str | None
    content: object


__all__ = [
    "DocumentCategory",
    "Capability",
    "coerce_category",
    "Transform",
    "DocumentDescriptor",
    "Document",
]
