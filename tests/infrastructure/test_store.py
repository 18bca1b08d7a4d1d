"""Tests for MemoryStore, SnapshotStore, and node child extraction."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from hakot.config.settings import HakotSettings
from hakot.infrastructure.store import (
    DataFetchError,
    MemoryStore,
    SnapshotStore,
    _TreeStore,
    node_children,
)


class TestNodeChildren:
    def test_mapping_node_in_stored_order(self) -> None:
        tree = {"drivers": {"-b": {"n": 2}, "-a": {"n": 1}}}
        assert node_children(tree, "drivers") == [{"n": 2}, {"n": 1}]

    def test_list_node_skips_holes(self) -> None:
        tree = {"drivers": [None, {"n": 1}, None, {"n": 3}]}
        assert node_children(tree, "drivers") == [{"n": 1}, {"n": 3}]

    def test_missing_node_is_empty(self) -> None:
        assert node_children({}, "drivers") == []
        assert node_children({"drivers": None}, "drivers") == []

    def test_scalar_node_is_fetch_error(self) -> None:
        with pytest.raises(DataFetchError, match="not a collection"):
            node_children({"drivers": "oops"}, "drivers")


class TestMemoryStore:
    def test_fetches_both_nodes(self, store: MemoryStore) -> None:
        assert len(store.fetch_all_credentials()) == 2
        assert len(store.fetch_all_vehicles()) == 3

    def test_empty_tree(self) -> None:
        store = MemoryStore()
        assert store.fetch_all_credentials() == []
        assert store.fetch_all_vehicles() == []

    def test_custom_node_names(self) -> None:
        store = MemoryStore(
            {"staff": {"-a": {"username": "x"}}, "fleet": [{"vehicleDriver": "X"}]},
            credentials_node="staff",
            vehicles_node="fleet",
        )
        assert store.fetch_all_credentials() == [{"username": "x"}]
        assert store.fetch_all_vehicles() == [{"vehicleDriver": "X"}]


class TestSnapshotStore:
    def test_reads_export(self, snapshot_file: Path, tree: dict[str, Any]) -> None:
        store = SnapshotStore(snapshot_file)
        assert store.fetch_all_credentials() == list(tree["drivers"].values())

    def test_rereads_on_every_fetch(self, snapshot_file: Path) -> None:
        store = SnapshotStore(snapshot_file)
        assert len(store.fetch_all_credentials()) == 2
        snapshot_file.write_text(json.dumps({"drivers": {}}), encoding="utf-8")
        assert store.fetch_all_credentials() == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataFetchError, match="Cannot read snapshot"):
            SnapshotStore(tmp_path / "absent.json").fetch_all_credentials()

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataFetchError, match="Invalid JSON"):
            SnapshotStore(path).fetch_all_vehicles()

    def test_non_object_root(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DataFetchError, match="must be a JSON object"):
            SnapshotStore(path).fetch_all_vehicles()

    def test_null_root_is_empty_database(self, tmp_path: Path) -> None:
        path = tmp_path / "null.json"
        path.write_text("null", encoding="utf-8")
        assert SnapshotStore(path).fetch_all_credentials() == []

    def test_unconfigured_path(self) -> None:
        with pytest.raises(DataFetchError, match="no snapshot configured"):
            SnapshotStore(None).fetch_all_credentials()

    def test_from_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HAKOT_CONFIG", raising=False)
        (tmp_path / "hakot.toml").write_text(
            '[store]\nsnapshot_path = "data/export.json"\nvehicles_node = "fleet"\n'
        )
        settings = HakotSettings.from_cli(start=tmp_path)
        store = SnapshotStore.from_settings(settings)
        assert settings.config_path is not None
        assert store.path == settings.config_path.parent / "data" / "export.json"
        assert store.credentials_node == "drivers"
        assert store.vehicles_node == "fleet"

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"drivers": {"-a": {"username": "\xff\xfe"}}}')
        with pytest.raises(DataFetchError, match="is not UTF-8"):
            SnapshotStore(path).fetch_all_credentials()


class TestTreeStoreBase:
    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            _TreeStore()  # type: ignore[abstract]
