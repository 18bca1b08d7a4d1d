"""Read-only stores for the driver and truck nodes.

Both stores serve a realtime-database-shaped tree::

    {
        "drivers": {"<push-key>": {"username": ..., "password": ..., "fullname": ...}},
        "trucks": {"<push-key>": {"vehicleDriver": ..., "schedules": {...}}},
    }

Each fetch returns the raw children of one node.  A node may be a mapping
of push keys or a list (array-like keys, where missing indexes show up as
``null`` holes).  An absent node is an empty list, which is not an error.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from hakot.config.settings import HakotSettings

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_NODE = "drivers"
DEFAULT_VEHICLES_NODE = "trucks"


class DataFetchError(Exception):
    """The store could not produce a usable snapshot of a node."""


class DataStore(Protocol):
    """Outbound data-access interface consumed by the login service."""

    def fetch_all_credentials(self) -> list[Any]: ...

    def fetch_all_vehicles(self) -> list[Any]: ...


def node_children(tree: Mapping[str, Any], node: str) -> list[Any]:
    """Return the children of *node* in *tree*, in stored order.

    Raises:
        DataFetchError: If the node exists but is not a collection.
    """
    value = tree.get(node)
    if value is None:
        return []
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, list):
        return [child for child in value if child is not None]
    msg = f"Node '{node}' is not a collection (got {type(value).__name__})"
    raise DataFetchError(msg)


class _TreeStore(ABC):
    """Shared node lookup for stores backed by a whole-tree snapshot."""

    def __init__(
        self,
        *,
        credentials_node: str = DEFAULT_CREDENTIALS_NODE,
        vehicles_node: str = DEFAULT_VEHICLES_NODE,
    ) -> None:
        self.credentials_node = credentials_node
        self.vehicles_node = vehicles_node

    @abstractmethod
    def _load_tree(self) -> Mapping[str, Any]: ...

    def fetch_all_credentials(self) -> list[Any]:
        return node_children(self._load_tree(), self.credentials_node)

    def fetch_all_vehicles(self) -> list[Any]:
        return node_children(self._load_tree(), self.vehicles_node)


class MemoryStore(_TreeStore):
    """Store over an in-memory tree (tests, embedding callers)."""

    def __init__(self, tree: Mapping[str, Any] | None = None, **nodes: str) -> None:
        super().__init__(**nodes)
        self._tree: Mapping[str, Any] = tree or {}

    def _load_tree(self) -> Mapping[str, Any]:
        return self._tree


class SnapshotStore(_TreeStore):
    """Store over a JSON export of the realtime database.

    The file is re-read on every fetch so each request sees a fresh snapshot.
    A store without a path fails every fetch with :class:`DataFetchError`.
    """

    def __init__(self, path: Path | None, **nodes: str) -> None:
        super().__init__(**nodes)
        self.path = path

    @classmethod
    def from_settings(cls, settings: HakotSettings) -> SnapshotStore:
        """Build a store from the ``[store]`` section and ``--snapshot`` flag."""
        return cls(
            settings.resolved_snapshot_path(),
            credentials_node=settings.store.credentials_node,
            vehicles_node=settings.store.vehicles_node,
        )

    def _load_tree(self) -> Mapping[str, Any]:
        if self.path is None:
            msg = "no snapshot configured (set [store] snapshot_path or pass --snapshot)"
            raise DataFetchError(msg)
        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Snapshot {self.path} is not UTF-8: {exc}"
            raise DataFetchError(msg) from exc
        except OSError as exc:
            msg = f"Cannot read snapshot {self.path}: {exc.strerror or exc}"
            raise DataFetchError(msg) from exc

        try:
            tree = json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON in snapshot {self.path}: {exc}"
            raise DataFetchError(msg) from exc

        if tree is None:
            return {}
        if not isinstance(tree, dict):
            msg = f"Snapshot root in {self.path} must be a JSON object"
            raise DataFetchError(msg)
        logger.debug("Loaded snapshot %s (%d top-level nodes)", self.path, len(tree))
        return tree
