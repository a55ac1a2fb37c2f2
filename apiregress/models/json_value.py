"""Normalized representation of JSON-shaped response bodies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any


class JsonValueError(TypeError):
    """Raised when a value cannot be represented as JSON."""


class JsonKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"



@dataclass(frozen=True)
class JsonValue:
    """A JSON value tagged with its kind.

    Containers keep the raw list or dict and normalize their children on
    first access, so a deep branch costs nothing until it is visited.
    """

    kind: JsonKind
    value: Any = None

    @property
    def is_container(self) -> bool:
        return self.kind in (JsonKind.ARRAY, JsonKind.OBJECT)

    @cached_property
    def items(self) -> tuple[JsonValue, ...]:
        if self.kind is not JsonKind.ARRAY:
            raise JsonValueError(f"{self.kind.value} has no items")
        return tuple(to_json_value(item) for item in self.value)

    @cached_property
    def fields(self) -> dict[str, JsonValue]:
        if self.kind is not JsonKind.OBJECT:
            raise JsonValueError(f"{self.kind.value} has no fields")
        return {str(key): to_json_value(child) for key, child in self.value.items()}

    def keys(self) -> list[str]:
        return [str(key) for key in self.value]

    def describe(self) -> str:
        return self.kind.value


NULL = JsonValue(JsonKind.NULL)


def to_json_value(raw: Any) -> JsonValue:
    """Tag dynamic data (as produced by json.load) with its JSON kind.

    Only the top level is checked here; unsupported values nested inside a
    container raise JsonValueError when that container is expanded.
    """
    if raw is None:
        return NULL
    # bool is a subclass of int; check it first
    if isinstance(raw, bool):
        return JsonValue(JsonKind.BOOLEAN, raw)
    if isinstance(raw, (int, float)):
        return JsonValue(JsonKind.NUMBER, raw)
    if isinstance(raw, str):
        return JsonValue(JsonKind.STRING, raw)
    if isinstance(raw, (list, tuple)):
        return JsonValue(JsonKind.ARRAY, raw)
    if isinstance(raw, dict):
        return JsonValue(JsonKind.OBJECT, raw)
    raise JsonValueError(f"Unsupported JSON value of type {type(raw).__name__}")


def structure_summary(value: JsonValue) -> str:
    """Short human-readable description of a value's shape."""
    if value.kind is JsonKind.ARRAY:
        return f"array with {len(value.value)} items"
    if value.kind is JsonKind.OBJECT:
        return f"object with keys: {', '.join(value.keys())}"
    return value.describe()
