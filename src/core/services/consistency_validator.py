"""Version consistency validation.

This module holds the only decision-making logic of the checker. Every rule
runs on every call and contributes its own diagnostics, so one run reports
every problem found instead of stopping at the first one. Fatal conditions
(missing or undecodable manifest or configuration file) are raised by the
reader before any rule runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from pathlib import Path

from adapters.local_fs import LocalFileSystem
from core.config import CheckerSettings
from core.domain.diagnostics import DiagnosticCode
from core.domain.models import ConfigSnapshot, Diagnostic, ValidationResult
from core.errors import MalformedVersionError
from core.interfaces.filesystem import FileSystem
from core.services.config_reader import read_snapshot
from core.services.version_comparator import parse_constraint, satisfies_minimum
from core.services.version_extractor import parse_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionSource:
    """A named version value taken from the snapshot."""

    label: str
    location: str
    value: str | None


def _sources(snapshot: ConfigSnapshot, settings: CheckerSettings) -> list[VersionSource]:
    return [
        VersionSource(settings.primary_field, settings.manifest_filename, snapshot.primary_version),
        VersionSource(settings.secondary_field, settings.manifest_filename, snapshot.secondary_version),
        VersionSource(settings.config_filename, settings.config_filename, snapshot.config_version),
    ]


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _check_config_key(snapshot: ConfigSnapshot, settings: CheckerSettings) -> list[Diagnostic]:
    if snapshot.config_key_found:
        return []
    return [
        Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=f"Could not find {settings.config_key} in {settings.config_filename}",
        )
    ]


def _check_defined(sources: list[VersionSource]) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    for source in sources:
        if source.value is None:
            out.append(
                Diagnostic(
                    code=DiagnosticCode.UNDEFINED_VERSION,
                    message=f"{source.label} version not found in {source.location}",
                )
            )
            continue
        try:
            parse_version(source.value)
        except MalformedVersionError as exc:
            out.append(
                Diagnostic(
                    code=DiagnosticCode.MALFORMED_VERSION,
                    message=f"{source.label} version '{source.value}' is malformed: {exc.reason}",
                )
            )
    return out


def _check_mismatches(sources: list[VersionSource]) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    # A/B, A/C, B/C
    for a, b in combinations(sources, 2):
        if a.value is None or b.value is None or a.value == b.value:
            continue
        out.append(
            Diagnostic(
                code=DiagnosticCode.VERSION_MISMATCH,
                message=f"Version mismatch: {a.label} ({a.value}) vs {b.label} ({b.value})",
            )
        )
    return out


def _check_artifact(
    snapshot: ConfigSnapshot, settings: CheckerSettings, fs: FileSystem
) -> list[Diagnostic]:
    path = snapshot.artifact_path
    if path is None:
        return []

    shown = _display_path(path, snapshot.root)
    if not fs.exists(path):
        return [
            Diagnostic(
                code=DiagnosticCode.ARTIFACT_MISSING,
                message=f"Release file not found: {shown}",
            )
        ]

    raw = fs.read_bytes(path)
    content = raw.decode("utf-8", errors="replace")
    out: list[Diagnostic] = []

    if not content.startswith(settings.artifact_shebang):
        out.append(
            Diagnostic(
                code=DiagnosticCode.INVALID_ARTIFACT_HEADER,
                message=f"Release file does not start with '{settings.artifact_shebang}': {shown}",
            )
        )
    if settings.artifact_corrupt_marker in content:
        out.append(
            Diagnostic(
                code=DiagnosticCode.ARTIFACT_CORRUPT,
                message=f"Release file contains '{settings.artifact_corrupt_marker}': {shown}",
            )
        )
    if len(raw) <= settings.artifact_min_bytes:
        out.append(
            Diagnostic(
                code=DiagnosticCode.ARTIFACT_TOO_SMALL,
                message=(
                    f"Release file seems too small ({len(raw)} bytes, "
                    f"expected more than {settings.artifact_min_bytes}): {shown}"
                ),
            )
        )
    return out


def _check_constraint(snapshot: ConfigSnapshot, settings: CheckerSettings) -> list[Diagnostic]:
    raw = snapshot.constraint
    if raw is None:
        return [
            Diagnostic(
                code=DiagnosticCode.CONSTRAINT_MISSING,
                message=f"{settings.constraint_field} requirement not found in {settings.manifest_filename}",
            )
        ]
    try:
        required = parse_constraint(raw)
    except MalformedVersionError:
        return [
            Diagnostic(
                code=DiagnosticCode.CONSTRAINT_MISSING,
                message=f"{settings.constraint_field} requirement '{raw}' is not of the form >=X.Y.Z",
            )
        ]

    if snapshot.primary_version is None:
        return []
    try:
        actual = parse_version(snapshot.primary_version)
    except MalformedVersionError:
        # Already reported as MalformedVersion.
        return []

    if satisfies_minimum(actual, required):
        return []
    return [
        Diagnostic(
            code=DiagnosticCode.CONSTRAINT_NOT_SATISFIED,
            message=f"{settings.tool_name} version {actual} does not satisfy requirement {raw}",
        )
    ]


def validate_snapshot(
    snapshot: ConfigSnapshot,
    *,
    settings: CheckerSettings,
    fs: FileSystem,
) -> ValidationResult:
    """Run every rule against `snapshot` and collect their diagnostics in order."""

    sources = _sources(snapshot, settings)
    diagnostics: list[Diagnostic] = []
    diagnostics += _check_config_key(snapshot, settings)
    diagnostics += _check_defined(sources)
    diagnostics += _check_mismatches(sources)
    diagnostics += _check_artifact(snapshot, settings, fs)
    diagnostics += _check_constraint(snapshot, settings)

    for diagnostic in diagnostics:
        logger.debug("%s", diagnostic)
    logger.debug("Validation of %s finished with %d diagnostic(s)", snapshot.root, len(diagnostics))
    return ValidationResult(diagnostics=tuple(diagnostics))


def validate_project(
    root: Path,
    *,
    settings: CheckerSettings | None = None,
    fs: FileSystem | None = None,
) -> ValidationResult:
    """Validate the project under `root`.

    Raises `MissingFileError`, `InvalidManifestError` or `InvalidConfigError`
    for fatal conditions; everything else is returned as diagnostics.

    When `settings` is omitted, `CheckerSettings()` is built here and therefore
    reads `PM_SYNC_*` environment variables and a `.env` file from the current
    working directory. Pass `settings` explicitly for a run that depends only on
    its arguments.
    """

    settings = settings or CheckerSettings()
    fs = fs or LocalFileSystem()
    snapshot = read_snapshot(root, settings=settings, fs=fs)
    return validate_snapshot(snapshot, settings=settings, fs=fs)
