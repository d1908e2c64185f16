"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``roamclosure.toml`` only
contains overrides. With no config file at all the tool reads the
default org-roam database location.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# org-roam-db-location default: (expand-file-name "org-roam.db" user-emacs-directory)
DEFAULT_DB_LOCATION = Path("~/.emacs.d/org-roam.db")


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    location: Path = Field(default=DEFAULT_DB_LOCATION, validate_default=True)

    @field_validator("location")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()


class ClosureConfig(BaseModel):
    """[closure] section."""

    model_config = {"frozen": True}

    exclude: list[str] = Field(default_factory=list)


class RoamConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    closure: ClosureConfig = Field(default_factory=ClosureConfig)
