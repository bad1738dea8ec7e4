"""Checker errors.

Two families live here:
- fatal errors (`MissingFileError`, `InvalidManifestError`,
  `InvalidConfigError`) that abort a run before any check can be evaluated;
- parse errors (`KeyNotFoundError`, `MalformedVersionError`) raised by the
  extractor and turned into diagnostics by the validator.
"""

from __future__ import annotations

from pathlib import Path


class ConfigCheckError(Exception):
    """Base class for every error raised by pm-sync."""


class MissingFileError(ConfigCheckError):
    """A required input file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Required file not found: {path}")


class InvalidManifestError(ConfigCheckError):
    """The manifest exists but is not a UTF-8 encoded JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid manifest {path}: {reason}")


class InvalidConfigError(ConfigCheckError):
    """The configuration file exists but cannot be decoded as UTF-8."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration file {path}: {reason}")


class KeyNotFoundError(ConfigCheckError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key '{key}' not found")


class MalformedVersionError(ConfigCheckError):
    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed version '{value}': {reason}")
