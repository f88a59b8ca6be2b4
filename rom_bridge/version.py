"""Version utilities for ROM Bridge."""

from __future__ import annotations

from importlib import metadata

_FALLBACK_VERSION = "0.1.0"


def load_version() -> str:
    try:
        return metadata.version("rom-bridge")
    except metadata.PackageNotFoundError:
        return _FALLBACK_VERSION


__version__ = load_version()
