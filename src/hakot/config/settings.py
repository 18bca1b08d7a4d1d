"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``HAKOT_*`` prefix
  3. TOML file    — ``hakot.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from hakot.config.discovery import ConfigNotFoundError, find_config
from hakot.config.models import AuthConfig, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``hakot.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class HakotSettings(BaseSettings):
    """Unified settings for the hakot CLI and embedding callers.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        snapshot: ``--snapshot`` override for ``[store] snapshot_path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HAKOT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    snapshot: Path | None = None

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> HakotSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given, otherwise discovers
        ``hakot.toml`` by walking up from *start* (default: cwd).

        Raises:
            click.ClickException: If a named config file does not exist.
        """
        try:
            toml_path = find_config(config_path, start)
        except ConfigNotFoundError as exc:
            import click

            raise click.ClickException(str(exc)) from exc

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def resolved_snapshot_path(self) -> Path | None:
        """The snapshot file to read, or None if none is configured.

        ``--snapshot`` wins over ``[store] snapshot_path``.  A relative TOML
        path is taken relative to the config file's directory.
        """
        if self.snapshot is not None:
            return self.snapshot
        path = self.store.snapshot_path
        if path is None:
            return None
        if not path.is_absolute() and self.config_path is not None:
            return self.config_path.parent / path
        return path
