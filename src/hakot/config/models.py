"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hakot.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    snapshot_path: Path | None = None
    credentials_node: str = "drivers"
    vehicles_node: str = "trucks"


class AuthConfig(BaseModel):
    """[auth] section."""

    model_config = {"frozen": True}

    # Cost factor for newly hashed passwords; 4..31 is bcrypt's valid range.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
