"""Diagnostic taxonomy.

Every check run by the validator owns exactly one code, so a diagnostic can
always be traced back to the rule that produced it.
"""

from __future__ import annotations

from enum import Enum


class DiagnosticCode(str, Enum):
    """Codes for non-fatal validation failures."""

    KEY_NOT_FOUND = "KeyNotFound"
    UNDEFINED_VERSION = "UndefinedVersion"
    MALFORMED_VERSION = "MalformedVersion"
    VERSION_MISMATCH = "VersionMismatch"
    ARTIFACT_MISSING = "ArtifactMissing"
    INVALID_ARTIFACT_HEADER = "InvalidArtifactHeader"
    ARTIFACT_CORRUPT = "ArtifactCorrupt"
    ARTIFACT_TOO_SMALL = "ArtifactTooSmall"
    CONSTRAINT_MISSING = "ConstraintMissing"
    CONSTRAINT_NOT_SATISFIED = "ConstraintNotSatisfied"

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value
