"""Tests for snapshot persistence."""

import json
from pathlib import Path

import pytest

from apiregress.models.test_result import Snapshot
from apiregress.regression.snapshot_store import SnapshotStore, load_snapshot, save_snapshot

from conftest import make_result


class TestSnapshotStore:
    """Tests for loading and saving snapshot files."""

    def test_load_missing_returns_none(self, tmp_path: Path):
        assert SnapshotStore(tmp_path / "missing.json").load() is None

    def test_load_invalid_json_returns_none(self, tmp_path: Path, caplog):
        path = tmp_path / "baseline.json"
        path.write_text("{not json")
        assert SnapshotStore(path).load() is None
        assert "Failed to load snapshot" in caplog.text

    def test_load_non_array_returns_none(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"id": "t1"}))
        assert SnapshotStore(path).load() is None

    def test_save_creates_parent_dirs(self, tmp_path: Path, baseline_snapshot: Snapshot):
        path = tmp_path / "deep" / "nested" / "baseline.json"
        SnapshotStore(path).save(baseline_snapshot)
        assert path.exists()

    def test_saved_file_is_array_with_ids(self, tmp_path: Path, baseline_snapshot: Snapshot):
        path = tmp_path / "baseline.json"
        save_snapshot(baseline_snapshot, path)
        data = json.loads(path.read_text())
        assert isinstance(data, list)
        assert [record["id"] for record in data] == ["tc_1", "tc_2", "tc_3"]
        assert data[1]["testCase"]["method"] == "POST"
        assert data[1]["response"]["statusCode"] == 201

    def test_save_then_load(self, tmp_path: Path, baseline_snapshot: Snapshot):
        path = tmp_path / "baseline.json"
        save_snapshot(baseline_snapshot, path)
        loaded = load_snapshot(path)
        assert loaded is not None
        assert loaded.name == "baseline"
        assert loaded.results == baseline_snapshot.results

    def test_load_skips_malformed_records(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps([
            {"id": "t1", "testCase": {"method": "GET", "endpoint": "/a"}, "success": True},
            {"id": "t2", "success": True},
        ]))
        loaded = load_snapshot(path)
        assert list(loaded.results) == ["t1"]

    def test_save_failure_propagates(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        snapshot = Snapshot(results={"t1": make_result()})
        with pytest.raises(OSError):
            SnapshotStore(blocker / "baseline.json").save(snapshot)

    def test_load_too_deeply_nested_returns_none(self, tmp_path: Path, caplog):
        path = tmp_path / "baseline.json"
        path.write_text("[" * 100000 + "]" * 100000)
        assert SnapshotStore(path).load() is None
        assert "Failed to load snapshot" in caplog.text

    def test_load_accepts_status_field(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps([{
            "id": "t1",
            "testCase": {"method": "GET", "endpoint": "/a"},
            "success": True,
            "response": {"status": 404, "body": {"error": "missing"}},
        }]))
        loaded = load_snapshot(path)
        assert loaded.results["t1"].status_code == 404
        assert loaded.to_records()[0]["response"]["statusCode"] == 404
