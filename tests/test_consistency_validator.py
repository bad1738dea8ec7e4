"""Tests for the consistency rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import CheckerSettings
from core.domain.diagnostics import DiagnosticCode
from core.domain.models import ConfigSnapshot
from core.errors import MissingFileError
from core.services.consistency_validator import validate_project, validate_snapshot
from fakes import InMemoryFileSystem, release_body


def _codes(result) -> list[DiagnosticCode]:
    return result.codes()


def test_consistent_project_passes(make_project, settings: CheckerSettings) -> None:
    """Matching versions, a valid release file and a satisfied constraint pass."""

    result = validate_project(make_project(), settings=settings)

    assert result.success is True
    assert result.diagnostics == ()


def test_secondary_mismatch_names_both_values(make_project, settings: CheckerSettings) -> None:
    result = validate_project(make_project(volta="4.0.2"), settings=settings)

    assert result.success is False
    assert _codes(result) == [DiagnosticCode.VERSION_MISMATCH, DiagnosticCode.VERSION_MISMATCH]
    first, second = result.messages()
    assert "packageManager (4.6.0)" in first and "volta.yarn (4.0.2)" in first
    assert "volta.yarn (4.0.2)" in second and ".yarnrc.yml (4.6.0)" in second


def test_config_file_mismatch_reports_pairs_with_config(make_project, settings: CheckerSettings) -> None:
    root = make_project(yarnrc="yarnPath: .yarn/releases/yarn-4.5.0.cjs\n")
    result = validate_project(root, settings=settings)

    assert _codes(result) == [DiagnosticCode.VERSION_MISMATCH, DiagnosticCode.VERSION_MISMATCH]
    assert all(".yarnrc.yml (4.5.0)" in m for m in result.messages())


def test_primary_mismatch_reports_every_problem(make_project, settings: CheckerSettings) -> None:
    """A different primary version also moves the release path and the constraint check."""

    root = make_project(package_manager="yarn@3.8.0")
    result = validate_project(root, settings=settings)

    assert _codes(result) == [
        DiagnosticCode.VERSION_MISMATCH,
        DiagnosticCode.VERSION_MISMATCH,
        DiagnosticCode.ARTIFACT_MISSING,
        DiagnosticCode.CONSTRAINT_NOT_SATISFIED,
    ]
    assert "yarn-3.8.0.cjs" in result.messages()[2]


def test_undefined_sources_are_reported_each(make_project, settings: CheckerSettings) -> None:
    root = make_project(package_manager=None, volta=None, yarnrc="nodeLinker: pnp\n")
    result = validate_project(root, settings=settings)

    assert _codes(result) == [
        DiagnosticCode.KEY_NOT_FOUND,
        DiagnosticCode.UNDEFINED_VERSION,
        DiagnosticCode.UNDEFINED_VERSION,
        DiagnosticCode.UNDEFINED_VERSION,
    ]
    assert "packageManager" in result.messages()[1]
    assert "volta.yarn" in result.messages()[2]


def test_malformed_version_is_a_diagnostic(make_project, settings: CheckerSettings) -> None:
    root = make_project(volta="4.6")
    result = validate_project(root, settings=settings)

    assert DiagnosticCode.MALFORMED_VERSION in _codes(result)
    assert DiagnosticCode.VERSION_MISMATCH in _codes(result)


def test_missing_artifact(make_project, settings: CheckerSettings) -> None:
    result = validate_project(make_project(release_version=None), settings=settings)

    assert _codes(result) == [DiagnosticCode.ARTIFACT_MISSING]
    assert ".yarn/releases/yarn-4.6.0.cjs" in result.messages()[0]


def test_small_artifact_is_reported(make_project, settings: CheckerSettings) -> None:
    """A 50,000-byte release file is too small even when everything else matches."""

    root = make_project(release_content=release_body(50_000))
    result = validate_project(root, settings=settings)

    assert _codes(result) == [DiagnosticCode.ARTIFACT_TOO_SMALL]
    assert "50000 bytes" in result.messages()[0]


def test_artifact_at_threshold_is_too_small(make_project, settings: CheckerSettings) -> None:
    root = make_project(release_content=release_body(100_000))
    assert _codes(validate_project(root, settings=settings)) == [DiagnosticCode.ARTIFACT_TOO_SMALL]

    root = make_project(release_content=release_body(100_001))
    assert validate_project(root, settings=settings).success is True


def test_syntax_error_marks_artifact_corrupt(make_project, settings: CheckerSettings) -> None:
    root = make_project(release_content=release_body(extra="SyntaxError: missing ) after argument list\n"))
    result = validate_project(root, settings=settings)

    assert _codes(result) == [DiagnosticCode.ARTIFACT_CORRUPT]


def test_wrong_shebang_is_reported(make_project, settings: CheckerSettings) -> None:
    root = make_project(release_content=release_body(shebang="#!/bin/sh\n"))
    result = validate_project(root, settings=settings)

    assert _codes(result) == [DiagnosticCode.INVALID_ARTIFACT_HEADER]


def test_artifact_checks_do_not_short_circuit(make_project, settings: CheckerSettings) -> None:
    root = make_project(release_content="<html>SyntaxError</html>")
    result = validate_project(root, settings=settings)

    assert _codes(result) == [
        DiagnosticCode.INVALID_ARTIFACT_HEADER,
        DiagnosticCode.ARTIFACT_CORRUPT,
        DiagnosticCode.ARTIFACT_TOO_SMALL,
    ]


def test_constraint_not_satisfied(make_project, settings: CheckerSettings) -> None:
    result = validate_project(make_project(dev_engines=">=4.7.0"), settings=settings)

    assert _codes(result) == [DiagnosticCode.CONSTRAINT_NOT_SATISFIED]
    assert "4.6.0" in result.messages()[0] and ">=4.7.0" in result.messages()[0]


def test_constraint_missing(make_project, settings: CheckerSettings) -> None:
    result = validate_project(make_project(dev_engines=None), settings=settings)

    assert _codes(result) == [DiagnosticCode.CONSTRAINT_MISSING]


def test_constraint_with_other_operator_counts_as_missing(make_project, settings: CheckerSettings) -> None:
    result = validate_project(make_project(dev_engines="^4.0.0"), settings=settings)

    assert _codes(result) == [DiagnosticCode.CONSTRAINT_MISSING]
    assert "^4.0.0" in result.messages()[0]


def test_missing_manifest_raises(tmp_path: Path, settings: CheckerSettings) -> None:
    with pytest.raises(MissingFileError):
        validate_project(tmp_path, settings=settings)


def test_repeated_runs_are_identical(make_project, settings: CheckerSettings) -> None:
    root = make_project(volta="4.0.2", dev_engines=">=4.7.0", release_content=release_body(10))

    first = validate_project(root, settings=settings)
    second = validate_project(root, settings=settings)

    assert first.model_dump_json() == second.model_dump_json()
    assert first.messages() == second.messages()


def test_validate_snapshot_with_in_memory_file_system(settings: CheckerSettings) -> None:
    root = Path("/virtual")
    artifact = root / ".yarn" / "releases" / "yarn-4.6.0.cjs"
    fs = InMemoryFileSystem({artifact: release_body()})
    snapshot = ConfigSnapshot(
        root=root,
        primary_version="4.6.0",
        secondary_version="4.6.0",
        config_version="4.6.0",
        constraint=">=4.0.2",
        artifact_path=artifact,
    )

    result = validate_snapshot(snapshot, settings=settings, fs=fs)

    assert result.success is True
    assert fs.reads == [artifact]


def test_min_bytes_setting_is_respected(make_project) -> None:
    relaxed = CheckerSettings(_env_file=None, artifact_min_bytes=1_000)
    root = make_project(release_content=release_body(5_000))

    assert validate_project(root, settings=relaxed).success is True


def test_validate_project_without_settings_reads_environment(
    make_project, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Omitted settings come from PM_SYNC_* variables; explicit settings ignore them."""

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("PM_SYNC_ARTIFACT_MIN_BYTES", "1000")
    root = make_project(release_content=release_body(5_000))

    assert validate_project(root).success is True
    assert _codes(validate_project(root, settings=CheckerSettings(_env_file=None, artifact_min_bytes=100_000))) == [
        DiagnosticCode.ARTIFACT_TOO_SMALL
    ]
