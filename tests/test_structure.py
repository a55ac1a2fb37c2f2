"""Tests for structural diffing of response bodies."""

from unittest.mock import patch

from apiregress.models.json_value import JsonKind, to_json_value
from apiregress.regression import structure
from apiregress.regression.structure import ChangeKind, diff_structure, render_path


def _diff(baseline, current):
    return diff_structure(to_json_value(baseline), to_json_value(current))


def _messages(baseline, current):
    return [str(change) for change in _diff(baseline, current)]


class TestRenderPath:

    def test_keys_and_indexes(self):
        assert render_path(("user", "tags", 0, "name")) == "user.tags[0].name"

    def test_leading_index(self):
        assert render_path((0, "b")) == "[0].b"

    def test_empty(self):
        assert render_path(()) == ""


class TestDiffStructure:

    def test_identical_values_have_no_differences(self):
        body = {"id": 1, "items": [{"a": 1}], "meta": None}
        assert _diff(body, body) == []

    def test_value_changes_are_ignored(self):
        assert _diff(
            {"id": 1, "createdAt": "2025-01-01", "active": True},
            {"id": 2, "createdAt": "2025-02-02", "active": False},
        ) == []

    def test_removed_key(self):
        changes = _diff({"id": 1, "name": "Alice"}, {"id": 1})
        assert len(changes) == 1
        assert changes[0].path_str == "name"
        assert changes[0].change is ChangeKind.REMOVED
        assert str(changes[0]) == "name: removed (was present in baseline)"

    def test_added_key(self):
        assert _messages({"id": 1}, {"id": 1, "email": "a@b.c"}) == [
            "email: added (not present in baseline)",
        ]

    def test_type_change(self):
        assert _messages({"id": 1}, {"id": "1"}) == ["id: type changed from number to string"]

    def test_type_change_does_not_recurse(self):
        assert _messages({"user": {"id": 1}}, {"user": [{"id": 1}]}) == [
            "user: type changed from object to array",
        ]

    def test_null_transition(self):
        assert _messages({"deletedAt": None}, {"deletedAt": "2025-01-01"}) == [
            "deletedAt: was null, now string",
        ]
        change = _diff({"deletedAt": "x"}, {"deletedAt": None})[0]
        assert change.baseline_kind is JsonKind.STRING
        assert change.current_kind is JsonKind.NULL

    def test_nested_object_paths(self):
        assert _messages(
            {"user": {"profile": {"age": 30}}},
            {"user": {"profile": {"age": 30, "bio": ""}}},
        ) == ["user.profile.bio: added (not present in baseline)"]

    def test_array_compares_first_element_only(self):
        assert _messages([{"a": 1}], [{"a": 1, "b": 2}]) == ["[0].b: added (not present in baseline)"]
        assert _diff([{"a": 1}], [{"a": 2}, {"zzz": 1}]) == []

    def test_empty_arrays_have_no_differences(self):
        assert _diff([], [{"a": 1}]) == []
        assert _diff({"items": [{"a": 1}]}, {"items": []}) == []

    def test_nested_array_path(self):
        assert _messages(
            {"data": {"items": [{"id": 1, "sku": "x"}]}},
            {"data": {"items": [{"id": 1}]}},
        ) == ["data.items[0].sku: removed (was present in baseline)"]

    def test_top_level_type_change(self):
        changes = _diff({"id": 1}, "error")
        assert len(changes) == 1
        assert changes[0].path == ()
        assert str(changes[0]) == "<root>: type changed from object to string"

    def test_removed_before_added(self):
        assert _messages({"a": 1, "b": 2}, {"b": 2, "c": 3}) == [
            "a: removed (was present in baseline)",
            "c: added (not present in baseline)",
        ]

    def test_failing_field_is_skipped(self, caplog):
        real_diff = structure._diff

        def failing_diff(baseline, current, path):
            if path == ("deep",):
                raise RecursionError("maximum recursion depth exceeded")
            return real_diff(baseline, current, path)

        with patch.object(structure, "_diff", side_effect=failing_diff):
            messages = _messages({"deep": {"n": 1}, "gone": 1}, {"deep": {"n": 2, "x": 1}})

        assert messages == ["gone: removed (was present in baseline)"]
        assert "Skipping structural comparison of deep" in caplog.text

    def test_too_deep_field_does_not_hide_siblings(self, caplog):
        nested: list = []
        for _ in range(5000):
            nested = [nested]
        messages = _messages({"deep": nested, "gone": 1}, {"deep": nested})

        assert messages == ["gone: removed (was present in baseline)"]
        assert "Skipping structural comparison of deep" in caplog.text
