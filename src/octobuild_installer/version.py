from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from packaging.version import InvalidVersion, Version

from .errors import InvalidVersionError, VersionNotFoundError

VERSION_PATTERN = re.compile(r'^\s*version\s*=\s*"(\S+)"')
SEMVER_RELEASE = re.compile(r'^(\d+(?:\.\d+)*)(?:[-+]\S*)?$')


def read_version(path: Path | str) -> Optional[str]:
    """Return the first ``version = "..."`` value in the manifest, or None.

    Missing or unreadable files raise the usual ``OSError`` family.
    """
    # Manifests saved by Windows editors may carry a BOM or a stray legacy byte
    with open(path, encoding="utf-8-sig", errors="replace") as manifest:
        for line in manifest:
            match = VERSION_PATTERN.match(line)
            if match:
                return match.group(1)
    return None


def parse_version(path: Path | str, token: Optional[str]) -> Version:
    """
    Validate a manifest version token.

    PEP 440 tokens parse as-is. Cargo semver tokens PEP 440 rejects
    (``1.0.0-alpha.beta``) are reduced to their numeric release, which is
    all the MSI product version uses.
    """
    if token is None:
        raise VersionNotFoundError(path)
    try:
        return Version(token)
    except InvalidVersion as e:
        match = SEMVER_RELEASE.match(token)
        if match is None:
            raise InvalidVersionError(path, token) from e
        return Version(match.group(1))


def require_version(path: Path | str) -> Version:
    """Like read_version(), but fails fast when there is nothing usable to build with."""
    return parse_version(path, read_version(path))
