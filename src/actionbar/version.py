"""Installed package version."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version


@lru_cache(maxsize=1)
def get_actionbar_version() -> str:
    """Return the installed version, or 'dev' for a source checkout."""
    try:
        return version("actionbar")
    except PackageNotFoundError:
        return "dev"
