"""Minimum-version rule.

Only `>=X.Y.Z` is supported: no ranges, carets, tildes, pre-release or build
metadata.
"""

from __future__ import annotations

import re

from core.domain.models import VersionTriple
from core.errors import MalformedVersionError
from core.services.version_extractor import parse_version

CONSTRAINT_RE = re.compile(r"^>=\s*(\d+\.\d+\.\d+)$")


def parse_constraint(raw: str) -> VersionTriple:
    """Parse `>=X.Y.Z` into the required `VersionTriple`."""

    match = CONSTRAINT_RE.match(raw.strip())
    if not match:
        raise MalformedVersionError(raw, "expected '>=' followed by major.minor.patch")
    return parse_version(match.group(1))


def satisfies_minimum(actual: VersionTriple, required: VersionTriple) -> bool:
    """True when `actual >= required`, comparing major, then minor, then patch."""

    if actual.major != required.major:
        return actual.major > required.major
    if actual.minor != required.minor:
        return actual.minor > required.minor
    return actual.patch >= required.patch
