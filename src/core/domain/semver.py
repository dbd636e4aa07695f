"""Semantic version classification.

Uses the regular expression suggested by semver.org for SemVer 2.0.0. The
pattern is anchored with `fullmatch`, so a valid prefix followed by junk
(`1.2.3.4`, `1.2.3 `) is rejected.
"""

from __future__ import annotations

import re

_NUM = r"0|[1-9]\d*"
_PRERELEASE_ID = rf"(?:{_NUM}|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"

SEMVER_PATTERN = re.compile(
    rf"(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<buildmetadata>{_BUILD_ID}(?:\.{_BUILD_ID})*))?",
    re.ASCII,
)


def is_semantic_version(version: str) -> bool:
    """Return True when `version` is a SemVer 2.0.0 string."""

    if not isinstance(version, str):
        return False
    return SEMVER_PATTERN.fullmatch(version) is not None
