"""OpenShift version comparison helpers."""

from __future__ import annotations

import re

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+)\.(\d+)(?:\.(\d+))?")


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``major.minor[.patch]``, ignoring pre-release or build suffixes.

    Raises:
        ValueError: If the version does not start with ``major.minor``.
    """
    match = _VERSION_PATTERN.match(version)
    if not match:
        raise ValueError(f"Invalid OpenShift version: {version!r}")
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def version_at_least(version: str, minimum: str) -> bool:
    return parse_version(version) >= parse_version(minimum)
