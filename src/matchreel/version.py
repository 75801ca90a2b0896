"""Version detection for installed and source checkouts."""

from __future__ import annotations

import os
import re
from importlib import metadata
from pathlib import Path

_FALLBACK_VERSION = "unknown"
_DISTRIBUTION = "matchreel"

# Matches release headings like: ## [1.0.0] - 2024-03-10
_VERSION_PATTERN = re.compile(r"^## \[(\d+\.\d+\.\d+)\]")


def _version_from_changelog() -> str | None:
    changelog = Path(__file__).resolve().parent.parent.parent / "CHANGELOG.md"
    try:
        with changelog.open(encoding="utf-8") as handle:
            for line in handle:
                match = _VERSION_PATTERN.match(line)
                if match:
                    return match.group(1)
    except OSError:
        return None
    return None


def get_version() -> str:
    """Return the running version.

    Priority:
    1. BUILD_VERSION environment variable (set during CI/CD)
    2. Installed distribution metadata
    3. Latest release heading in CHANGELOG.md
    """
    build_version = os.environ.get("BUILD_VERSION")
    if build_version:
        return build_version.strip()

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        pass

    return _version_from_changelog() or _FALLBACK_VERSION


__version__ = get_version()
