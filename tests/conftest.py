"""Shared fixtures: throw-away yarn projects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from core.config import CheckerSettings
from fakes import release_body

ProjectFactory = Callable[..., Path]


@pytest.fixture
def settings() -> CheckerSettings:
    return CheckerSettings(_env_file=None)


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Factory writing a yarn project under `tmp_path`.

    Defaults describe a fully consistent project pinned at 4.6.0.
    Pass `None` for a field to leave it out of the manifest.
    """

    def _make(
        *,
        package_manager: str | None = "yarn@4.6.0",
        volta: str | None = "4.6.0",
        dev_engines: str | None = ">=4.0.2",
        yarnrc: str | None = "yarnPath: .yarn/releases/yarn-4.6.0.cjs\n",
        release_version: str | None = "4.6.0",
        release_content: str | None = None,
        manifest: dict[str, Any] | None = None,
    ) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)

        if manifest is None:
            manifest = {"name": "demo", "private": True}
            if package_manager is not None:
                manifest["packageManager"] = package_manager
            if volta is not None:
                manifest["volta"] = {"node": "22.14.0", "yarn": volta}
            if dev_engines is not None:
                manifest["devEngines"] = {"node": ">=22.0.0", "yarn": dev_engines}
        (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")

        if yarnrc is not None:
            (root / ".yarnrc.yml").write_text(yarnrc, encoding="utf-8")

        if release_version is not None:
            releases = root / ".yarn" / "releases"
            releases.mkdir(parents=True, exist_ok=True)
            content = release_content if release_content is not None else release_body()
            (releases / f"yarn-{release_version}.cjs").write_text(content, encoding="utf-8")
        return root

    return _make

