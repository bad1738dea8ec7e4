"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at construction time (non-negative version parts,
  non-empty messages) without coupling the core to file I/O.
- Free JSON serialisation of results for `--json` / `--report`.

Note:
- These models describe *what* was read and decided, never *how* it was read.
- All of them are frozen: a snapshot or a result never changes after creation.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict

from core.domain.diagnostics import DiagnosticCode


class VersionTriple(BaseModel):
    """A `major.minor.patch` version parsed from a dotted string."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(..., ge=0, description="Major component.")
    minor: int = Field(..., ge=0, description="Minor component.")
    patch: int = Field(..., ge=0, description="Patch component.")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class ConfigSnapshot(BaseModel):
    """Raw values read from the project in a single run.

    Why it exists:
    - Separates reading (ConfigReader) from deciding (ConsistencyValidator), so
      the validator can be exercised with hand-built snapshots.
    - `None` means "source did not declare a value"; the validator turns that
      into an `UndefinedVersion` diagnostic instead of failing.
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="Project root the values were read from.")
    primary_version: str | None = Field(
        default=None,
        description="Tool version from the primary manifest field, prefix stripped.",
    )
    secondary_version: str | None = Field(
        default=None,
        description="Tool version from the secondary manifest field.",
    )
    config_version: str | None = Field(
        default=None,
        description="Tool version embedded in the configuration-file path.",
    )
    config_key_found: bool = Field(
        default=True,
        description="Whether the configuration file declared the expected key.",
    )
    constraint: str | None = Field(
        default=None,
        description="Raw minimum-version constraint (e.g. '>=4.0.2').",
    )
    artifact_path: Path | None = Field(
        default=None,
        description="Release artifact path derived from the primary version.",
    )


class Diagnostic(BaseModel):
    """One failed consistency check."""

    model_config = ConfigDict(frozen=True)

    code: DiagnosticCode
    message: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ValidationResult(BaseModel):
    """Aggregated outcome of a validation run.

    `success` is derived: a run passes exactly when it produced no diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        return not self.diagnostics

    def codes(self) -> list[DiagnosticCode]:
        return [d.code for d in self.diagnostics]

    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]
