"""
Single source of version: read from the repo root VERSION file.
Served by GET /api/meta/version.
"""

from __future__ import annotations

import re
from pathlib import Path


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def get_version() -> str:
    """Return version string from VERSION file, or '0.0.0' if missing/invalid."""
    path = _version_file_path()
    if not path.is_file():
        return "0.0.0"
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"
    first = raw.splitlines()[0].strip() if raw else ""
    return first if is_semver(first) else "0.0.0"


SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$")


def is_semver(s: str) -> bool:
    """True for 1.0.0 or 1.0.0-alpha style strings."""
    return bool(s and SEMVER_PATTERN.match(s.strip()))
