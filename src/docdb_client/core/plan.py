"""Wire serialization for pre-built plans and JSON payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Protocol

from .errors import InvalidOptionError


class SerializablePlan(Protocol):
    """Anything whose ``str()`` is the plan's JSON text."""

    def __str__(self) -> str: ...


def serialize_plan(plan: SerializablePlan | Mapping[str, object] | list | str | bytes | None) -> str:
    """Return the plan's wire text without inspecting it."""

    if plan is None:
        raise InvalidOptionError("plan is required", option="plan")
    if isinstance(plan, str):
        return plan
    if isinstance(plan, (bytes, bytearray)):
        try:
            return bytes(plan).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidOptionError("plan bytes must be UTF-8", option="plan") from exc
    if isinstance(plan, (Mapping, list)):
        return json.dumps(plan, separators=(",", ":"), ensure_ascii=False)
    return str(plan)


__all__ = [
    "SerializablePlan",
    "serialize_plan",
]
