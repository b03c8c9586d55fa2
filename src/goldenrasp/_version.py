"""Version lookup for goldenrasp.

Installed copies report the version recorded in the package metadata.
Source checkouts fall back to BASE_VERSION with the git commit count as the
patch number (e.g. 2.0.47).
"""

from __future__ import annotations

import subprocess
from importlib.metadata import PackageNotFoundError, version

BASE_VERSION = "2.0"


def _git_patch_number() -> int | None:
    """Count commits reachable from HEAD, or None outside a git checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-list", "--count", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.SubprocessError, OSError):
        return None
    if result.returncode != 0:
        return None
    try:
        return int(result.stdout.strip())
    except ValueError:
        return None


def get_version() -> str:
    """Get the full MAJOR.MINOR.PATCH version string."""
    try:
        return version("goldenrasp")
    except PackageNotFoundError:
        pass
    patch = _git_patch_number()
    return f"{BASE_VERSION}.{patch if patch is not None else 0}"


__version__ = get_version()
