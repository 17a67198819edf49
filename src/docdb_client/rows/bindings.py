"""Placeholder binding parsing and ``bind:`` parameter encoding."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ..core.errors import IncompatibleBindingError, InvalidBindingError
from ..core.operation import QueryParam

BindingValue = str | int | float | bool


@dataclass(slots=True, frozen=True)
class Binding:
    """A named placeholder value with an optional datatype or language tag."""

    name: str
    value: BindingValue
    type: str | None = None
    lang: str | None = None

    @property
    def wire_name(self) -> str:
        if self.lang is not None:
            return f"{self.name}@{self.lang}"
        if self.type is not None:
            return f"{self.name}:{self.type}"
        return self.name

    @property
    def wire_value(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def to_param(self) -> QueryParam:
        return f"bind:{self.wire_name}", self.wire_value


def _ensure_scalar(name: str, value: object) -> BindingValue:
    if isinstance(value, (str, int, float, bool)):
        return value
    raise InvalidBindingError(
        f"binding {name} value must be str, int, float or bool",
        binding=name,
    )


def parse_binding(name: str, raw: object) -> Binding:
    if not isinstance(name, str) or not name:
        raise InvalidBindingError("binding name must be a non-empty str", binding=str(name))

    if not isinstance(raw, Mapping) or "value" not in raw:
        return Binding(name=name, value=_ensure_scalar(name, raw))

    value = _ensure_scalar(name, raw["value"])
    type_ = raw.get("type")
    lang = raw.get("lang")

    if type_ is not None:
        if not isinstance(type_, str):
            raise InvalidBindingError("type must be string", binding=name)
        if ":" in type_:
            raise InvalidBindingError(f"type cannot contain colon - {type_}", binding=name)
    if lang is not None and not isinstance(lang, str):
        raise InvalidBindingError("lang must be string", binding=name)

    if type_ is not None and lang is not None and type_ != "string":
        raise IncompatibleBindingError(
            f"cannot combine type with lang - {type_} {lang}",
            binding=name,
        )
    return Binding(name=name, value=value, type=type_, lang=lang)


def parse_bindings(bindings: Mapping[str, object] | None) -> tuple[Binding, ...]:
    """Parse bindings in mapping order, failing on the first invalid entry."""

    if bindings is None:
        return ()
    if not isinstance(bindings, Mapping):
        raise InvalidBindingError("bindings must be a mapping of name to value")
    return tuple(parse_binding(name, raw) for name, raw in bindings.items())


def encode_bindings(bindings: Mapping[str, object] | None) -> list[QueryParam]:
    """Return ``(bind:<wire name>, value)`` pairs in mapping order."""

    return [binding.to_param() for binding in parse_bindings(bindings)]


__all__ = [
    "Binding",
    "parse_binding",
    "parse_bindings",
    "encode_bindings",
]
