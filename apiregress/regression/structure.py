"""Structural diffing of JSON response bodies.

Only shape is compared: object keys, value kinds, and the shape of the
first array element. Equal-kind primitives never differ, so value churn
such as timestamps or generated ids does not register as a change.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from apiregress.models.json_value import JsonKind, JsonValue, JsonValueError

logger = logging.getLogger(__name__)

PathSegment = Union[str, int]
JsonPath = tuple[PathSegment, ...]


class ChangeKind(str, Enum):
    REMOVED = "removed"
    ADDED = "added"
    TYPE_CHANGED = "type_changed"


def render_path(path: JsonPath) -> str:
    """Render path segments as ``user.tags[0].name``."""
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(segment)
    return "".join(parts)


@dataclass(frozen=True)
class StructuralChange:
    path: JsonPath
    change: ChangeKind
    baseline_kind: JsonKind | None = None
    current_kind: JsonKind | None = None

    @property
    def path_str(self) -> str:
        return render_path(self.path) or "<root>"

    def __str__(self) -> str:
        if self.change is ChangeKind.REMOVED:
            return f"{self.path_str}: removed (was present in baseline)"
        if self.change is ChangeKind.ADDED:
            return f"{self.path_str}: added (not present in baseline)"
        if JsonKind.NULL in (self.baseline_kind, self.current_kind):
            return f"{self.path_str}: was {self.baseline_kind.value}, now {self.current_kind.value}"
        return (
            f"{self.path_str}: type changed from "
            f"{self.baseline_kind.value} to {self.current_kind.value}"
        )


def _type_change(path: JsonPath, baseline: JsonValue, current: JsonValue) -> StructuralChange:
    return StructuralChange(path, ChangeKind.TYPE_CHANGED, baseline.kind, current.kind)


def _diff_child(baseline: JsonValue, current: JsonValue, path: JsonPath) -> list[StructuralChange]:
    try:
        return _diff(baseline, current, path)
    except (RecursionError, JsonValueError) as e:
        logger.warning("Skipping structural comparison of %s: %s", render_path(path), e)
        return []


def _diff(baseline: JsonValue, current: JsonValue, path: JsonPath) -> list[StructuralChange]:
    if baseline.kind is JsonKind.ARRAY and current.kind is JsonKind.ARRAY:
        # Arrays are assumed homogeneous: only the first element's shape counts
        if not baseline.value or not current.value:
            return []
        return _diff_child(baseline.items[0], current.items[0], path + (0,))

    if baseline.kind is JsonKind.NULL or current.kind is JsonKind.NULL:
        if baseline.kind is not current.kind:
            return [_type_change(path, baseline, current)]
        return []

    if baseline.kind is not current.kind:
        return [_type_change(path, baseline, current)]

    if baseline.kind is not JsonKind.OBJECT:
        return []

    differences: list[StructuralChange] = []
    baseline_fields = baseline.fields
    current_fields = current.fields

    for key, baseline_child in baseline_fields.items():
        child_path = path + (key,)
        if key not in current_fields:
            differences.append(StructuralChange(child_path, ChangeKind.REMOVED))
            continue
        current_child = current_fields[key]
        if baseline_child.kind is not current_child.kind:
            differences.append(_type_change(child_path, baseline_child, current_child))
            continue
        if baseline_child.is_container:
            differences.extend(_diff_child(baseline_child, current_child, child_path))

    for key in current_fields:
        if key not in baseline_fields:
            differences.append(StructuralChange(path + (key,), ChangeKind.ADDED))

    return differences


def diff_structure(
    baseline: JsonValue, current: JsonValue, path: JsonPath = ()
) -> list[StructuralChange]:
    """Compare the shapes of two JSON values.

    Returns path-qualified differences: removed and added object keys, kind
    changes (including null transitions), recursing into nested objects and
    into the first element of arrays.
    """
    if _same_shape_and_values(baseline, current):
        return []
    return _diff(baseline, current, path)


def _same_shape_and_values(baseline: JsonValue, current: JsonValue) -> bool:
    try:
        return json.dumps(baseline.value, sort_keys=True) == json.dumps(current.value, sort_keys=True)
    except (TypeError, ValueError, RecursionError):
        # fall back to the walk, which skips what it cannot compare
        return False
