"""Core configuration.

Why here:
- Centralises the file names, field paths and artifact rules (pydantic-settings)
  without polluting the CLI.
- Lets the reader and the validator read the same layout consistently.

Defaults describe a yarn (berry) project; every value can be overridden with a
`PM_SYNC_*` environment variable or a `.env` file in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckerSettings(BaseSettings):
    """Central configuration of the checker.

    Why pydantic-settings:
    - Typed + validated at the edge (env vars) without leaking into the core.
    - A single configuration contract for CLI and services.
    """

    model_config = SettingsConfigDict(
        env_prefix="PM_SYNC_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    tool_name: str = Field(
        default="yarn",
        min_length=1,
        description="Package-manager name; the primary field reads '<tool_name>@X.Y.Z'.",
    )

    manifest_filename: str = Field(
        default="package.json",
        min_length=1,
        description="JSON manifest at the project root.",
    )
    primary_field: str = Field(
        default="packageManager",
        min_length=1,
        description="Dotted path of the primary tool-version field.",
    )
    secondary_field: str = Field(
        default="volta.yarn",
        min_length=1,
        description="Dotted path of the secondary tool-version field (bare X.Y.Z).",
    )
    constraint_field: str = Field(
        default="devEngines.yarn",
        min_length=1,
        description="Dotted path of the minimum-version constraint ('>=X.Y.Z').",
    )

    config_filename: str = Field(
        default=".yarnrc.yml",
        min_length=1,
        description="Line-oriented configuration file at the project root.",
    )
    config_key: str = Field(
        default="yarnPath",
        min_length=1,
        description="Key whose value points at the release artifact.",
    )

    # Release artifact: <release_dir>/<release_prefix>X.Y.Z<release_suffix>
    release_dir: str = Field(default=".yarn/releases", min_length=1)
    release_prefix: str = Field(default="yarn-")
    release_suffix: str = Field(default=".cjs")

    artifact_shebang: str = Field(
        default="#!/usr/bin/env node",
        min_length=1,
        description="Literal every release artifact must start with.",
    )
    artifact_corrupt_marker: str = Field(
        default="SyntaxError",
        min_length=1,
        description="Substring that marks a broken artifact.",
    )
    artifact_min_bytes: int = Field(
        default=100_000,
        gt=0,
        description="The artifact must be strictly larger than this many bytes.",
    )

    @property
    def primary_prefix(self) -> str:
        return f"{self.tool_name}@"

    @property
    def config_value_prefix(self) -> str:
        """Prefix stripped from the configuration value to reach the version."""

        return f"{self.release_dir.rstrip('/')}/{self.release_prefix}"

    def artifact_filename(self, version: str) -> str:
        return f"{self.release_prefix}{version}{self.release_suffix}"
