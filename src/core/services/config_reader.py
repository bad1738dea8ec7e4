"""Reading the project configuration.

Builds a `ConfigSnapshot` from the manifest and the configuration file. Only
the absence (or unreadable shape) of those two files is fatal; absent fields
are recorded as `None` and judged later by the validator.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from core.config import CheckerSettings
from core.domain.models import ConfigSnapshot
from core.errors import (
    InvalidConfigError,
    InvalidManifestError,
    KeyNotFoundError,
    MissingFileError,
)
from core.interfaces.filesystem import FileSystem
from core.services.version_extractor import find_config_value, strip_affixes

logger = logging.getLogger(__name__)


def lookup_field(data: dict[str, Any], dotted: str) -> str | None:
    """Resolve `a.b.c` inside nested dicts; non-string leaves count as absent."""

    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    if not isinstance(node, str) or not node.strip():
        return None
    return node


def load_manifest(path: Path, fs: FileSystem) -> dict[str, Any]:
    if not fs.exists(path):
        raise MissingFileError(path)
    try:
        data = json.loads(fs.read_text(path))
    except UnicodeDecodeError as exc:
        raise InvalidManifestError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except json.JSONDecodeError as exc:
        raise InvalidManifestError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise InvalidManifestError(path, f"expected a JSON object, got {type(data).__name__}")
    return data


def load_config_text(path: Path, fs: FileSystem) -> str:
    if not fs.exists(path):
        raise MissingFileError(path)
    try:
        return fs.read_text(path)
    except UnicodeDecodeError as exc:
        raise InvalidConfigError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


def read_snapshot(root: Path, *, settings: CheckerSettings, fs: FileSystem) -> ConfigSnapshot:
    """Read every source under `root` into an immutable snapshot.

    Raises:
    - `MissingFileError` if the manifest or the configuration file is absent.
    - `InvalidManifestError` if the manifest is not a UTF-8 JSON object.
    - `InvalidConfigError` if the configuration file is not valid UTF-8.
    """

    manifest = load_manifest(root / settings.manifest_filename, fs)
    config_text = load_config_text(root / settings.config_filename, fs)

    primary_raw = lookup_field(manifest, settings.primary_field)
    primary = strip_affixes(primary_raw, prefix=settings.primary_prefix) if primary_raw else None
    secondary_raw = lookup_field(manifest, settings.secondary_field)
    secondary = secondary_raw.strip() if secondary_raw else None
    constraint = lookup_field(manifest, settings.constraint_field)

    config_key_found = True
    config_version: str | None = None
    try:
        config_value = find_config_value(config_text, settings.config_key)
    except KeyNotFoundError:
        config_key_found = False
        logger.debug("Key %s not present in %s", settings.config_key, settings.config_filename)
    else:
        config_version = strip_affixes(
            config_value,
            prefix=settings.config_value_prefix,
            suffix=settings.release_suffix,
        ) or None

    artifact_path = None
    if primary:
        artifact_path = root / settings.release_dir / settings.artifact_filename(primary)

    snapshot = ConfigSnapshot(
        root=root,
        primary_version=primary or None,
        secondary_version=secondary or None,
        config_version=config_version,
        config_key_found=config_key_found,
        constraint=constraint.strip() if constraint else None,
        artifact_path=artifact_path,
    )
    logger.debug("Snapshot for %s: %s", root, snapshot.model_dump(mode="json"))
    return snapshot
