"""Version extraction.

Turns the raw strings found in each source into comparable values:
- `strip_affixes` removes the tool prefix (`yarn@`) or the path prefix/suffix
  (`.yarn/releases/yarn-` ... `.cjs`).
- `parse_version` validates a dotted `major.minor.patch` string.
- `find_config_value` locates a `key: value` line in the configuration text.
"""

from __future__ import annotations

import re

from core.domain.models import VersionTriple
from core.errors import KeyNotFoundError, MalformedVersionError

_SEGMENT_RE = re.compile(r"[0-9]+")
_COMMENT_RE = re.compile(r"[ \t]+#.*$")
_QUOTED_RE = re.compile(r"""^(['"])(.*)\1(?:[ \t]+#.*)?$""")


def strip_affixes(raw: str, *, prefix: str = "", suffix: str = "") -> str:
    """Remove `prefix` and `suffix` when present; surrounding blanks are dropped."""

    value = raw.strip()
    if prefix:
        value = value.removeprefix(prefix)
    if suffix:
        value = value.removesuffix(suffix)
    return value


def parse_version(raw: str) -> VersionTriple:
    """Parse `X.Y.Z` into a `VersionTriple`.

    Raises:
    - `MalformedVersionError` if there are not exactly three segments or any
      segment is not a plain non-negative integer.
    """

    segments = raw.split(".")
    if len(segments) != 3:
        raise MalformedVersionError(raw, f"expected 3 dot-separated segments, got {len(segments)}")
    for segment in segments:
        if not _SEGMENT_RE.fullmatch(segment):
            raise MalformedVersionError(raw, f"segment '{segment}' is not a non-negative integer")
    major, minor, patch = (int(s) for s in segments)
    return VersionTriple(major=major, minor=minor, patch=patch)


def find_config_value(text: str, key: str) -> str:
    """Return the value of the first `key: value` line in `text`.

    Quoted scalars ("..." / '...') are unquoted; a trailing ` # comment` on
    an unquoted value is dropped. Raises `KeyNotFoundError` when
    no line declares `key` with a non-empty value.
    """

    pattern = re.compile(rf"^[ \t]*{re.escape(key)}[ \t]*:[ \t]*(\S.*?)[ \t]*$", re.MULTILINE)
    match = pattern.search(text)
    if not match:
        raise KeyNotFoundError(key)
    value = match.group(1)
    quoted = _QUOTED_RE.match(value)
    if quoted:
        return quoted.group(2)
    return _COMMENT_RE.sub("", value)
