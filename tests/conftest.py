"""Shared pytest fixtures for hakot tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import bcrypt
import pytest
from click.testing import CliRunner

from hakot.infrastructure.store import MemoryStore
from hakot.services.telemetry import _current_span, disable_telemetry

# Minimum bcrypt cost keeps fixture hashing fast.
TEST_ROUNDS = 4


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    hakot_level = logging.getLogger("hakot").level
    yield
    disable_telemetry()
    _current_span.set(None)
    root.handlers = original_handlers
    root.setLevel(original_level)
    logging.getLogger("hakot").setLevel(hakot_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def hash_pw() -> Callable[[str], str]:
    """Low-cost bcrypt hasher, cached per password for the session."""
    cache: dict[str, str] = {}

    def _hash(password: str) -> str:
        if password not in cache:
            salt = bcrypt.gensalt(rounds=TEST_ROUNDS)
            cache[password] = bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")
        return cache[password]

    return _hash


@pytest.fixture
def depot() -> dict[str, Any]:
    return {"name": "Depot", "latitude": 14.6, "longitude": 121.0}


@pytest.fixture
def tree(hash_pw: Callable[[str], str], depot: dict[str, Any]) -> dict[str, Any]:
    """Realtime-database-shaped tree with two drivers and three trucks."""
    return {
        "drivers": {
            "-Nd1": {"username": "d1", "password": hash_pw("pw1"), "fullname": "Juan Dela Cruz"},
            "-Nd2": {"username": "d2", "password": hash_pw("pw2"), "fullname": "Maria Santos"},
        },
        "trucks": {
            "-Nt1": {
                "vehicleDriver": "Juan Dela Cruz",
                "schedules": {"Mon": {"places": [depot]}},
            },
            "-Nt2": {
                "vehicleDriver": "Maria Santos",
                "schedules": {
                    "Tue": {
                        "places": [
                            {"name": "Market", "latitude": 14.55, "longitude": 121.02},
                            {"name": "Landfill", "latitude": 14.7, "longitude": 121.1},
                        ]
                    }
                },
            },
            "-Nt3": {
                "vehicleDriver": "Juan Dela Cruz",
                "plateNumber": "ABC-123",
                "schedules": ["unreadable"],
            },
        },
    }


@pytest.fixture
def store(tree: dict[str, Any]) -> MemoryStore:
    return MemoryStore(tree)


@pytest.fixture
def snapshot_file(tmp_path: Path, tree: dict[str, Any]) -> Path:
    """The fixture tree written as a realtime database JSON export."""
    path = tmp_path / "export.json"
    path.write_text(json.dumps(tree), encoding="utf-8")
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config env overrides."""
    monkeypatch.chdir(tmp_path)
    for var in ("HAKOT_CONFIG", "HAKOT_SNAPSHOT", "HAKOT_JSON_OUTPUT", "HAKOT_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
