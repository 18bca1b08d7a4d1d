"""Tests for HakotSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from hakot.config.settings import HakotSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("HAKOT_CONFIG", "HAKOT_SNAPSHOT", "HAKOT_VERBOSE", "HAKOT_STORE__SNAPSHOT_PATH"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = HakotSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.store.snapshot_path is None
        assert settings.store.credentials_node == "drivers"
        assert settings.store.vehicles_node == "trucks"
        assert settings.auth.bcrypt_rounds == 12
        assert settings.resolved_snapshot_path() is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = HakotSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "hakot.toml").write_text('[store]\ncredentials_node = "staff"\n[auth]\nbcrypt_rounds = 10\n')
        settings = HakotSettings.from_cli(start=tmp_path)
        assert settings.store.credentials_node == "staff"
        assert settings.store.vehicles_node == "trucks"
        assert settings.auth.bcrypt_rounds == 10

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[store]\nvehicles_node = "fleet"\n')
        settings = HakotSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.config_path == custom
        assert settings.store.vehicles_node == "fleet"

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            HakotSettings.from_cli(config_path=str(tmp_path / "typo.toml"), start=tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "hakot.toml").write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            HakotSettings.from_cli(start=tmp_path)

    def test_rounds_out_of_range(self, tmp_path: Path) -> None:
        (tmp_path / "hakot.toml").write_text("[auth]\nbcrypt_rounds = 2\n")
        with pytest.raises(Exception):
            HakotSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "hakot.toml").write_text('[store]\nsnapshot_path = "toml.json"\n')
        monkeypatch.setenv("HAKOT_STORE__SNAPSHOT_PATH", "/data/env.json")
        settings = HakotSettings.from_cli(start=tmp_path)
        assert settings.store.snapshot_path == Path("/data/env.json")

    def test_cli_flag_beats_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HAKOT_VERBOSE", "true")
        assert HakotSettings.from_cli(start=tmp_path).verbose is True
        assert HakotSettings.from_cli(start=tmp_path, verbose=False).verbose is False


class TestResolvedSnapshotPath:
    def test_relative_to_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "hakot.toml").write_text('[store]\nsnapshot_path = "exports/db.json"\n')
        settings = HakotSettings.from_cli(start=tmp_path)
        assert settings.resolved_snapshot_path() == tmp_path.resolve() / "exports" / "db.json"

    def test_absolute_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "db.json"
        (tmp_path / "hakot.toml").write_text(f'[store]\nsnapshot_path = "{target.as_posix()}"\n')
        settings = HakotSettings.from_cli(start=tmp_path)
        assert settings.resolved_snapshot_path() == target

    def test_snapshot_flag_wins(self, tmp_path: Path) -> None:
        (tmp_path / "hakot.toml").write_text('[store]\nsnapshot_path = "db.json"\n')
        settings = HakotSettings.from_cli(start=tmp_path, snapshot=Path("other.json"))
        assert settings.resolved_snapshot_path() == Path("other.json")
