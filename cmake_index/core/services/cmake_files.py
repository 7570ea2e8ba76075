"""
CMake file helpers — classify file names, read versions, build locations.

These are the small predicates the package scanners consult for every
file they visit.  Pure functions, no state.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# ── File classification ─────────────────────────────────────────

_CONFIG_SUFFIXES = ("Config.cmake", "-config.cmake")
_CONFIG_VERSION_SUFFIXES = ("ConfigVersion.cmake", "-config-version.cmake")
_MODULE_SUFFIX = ".cmake"

# set(PACKAGE_VERSION "1.2.3")  /  set(PACKAGE_VERSION 1.2.3)
_PACKAGE_VERSION_RE = re.compile(
    r"""set\s*\(\s*PACKAGE_VERSION\s+"?([^"\s)]*)"?\s*\)""",
    re.IGNORECASE,
)


class LocationError(ValueError):
    """Raised when a filesystem path cannot be turned into a location URI."""


def is_config_file(name: str) -> bool:
    """``<Name>Config.cmake`` or ``<name>-config.cmake``."""
    return Path(name).name.endswith(_CONFIG_SUFFIXES)


def is_config_version_file(name: str) -> bool:
    """``<Name>ConfigVersion.cmake`` or ``<name>-config-version.cmake``."""
    return Path(name).name.endswith(_CONFIG_VERSION_SUFFIXES)


def is_module_file(name: str) -> bool:
    """Any ``*.cmake`` file."""
    return Path(name).name.endswith(_MODULE_SUFFIX)


# ── Version extraction ──────────────────────────────────────────


def extract_version(content: str) -> str | None:
    """Pull the declared package version out of a config-version file.

    The last non-empty ``set(PACKAGE_VERSION ...)`` wins, matching how
    CMake itself would evaluate repeated assignments.
    """
    version: str | None = None
    for match in _PACKAGE_VERSION_RE.finditer(content):
        value = match.group(1).strip()
        # unexpanded variable references carry no usable version
        if value and "${" not in value:
            version = value
    return version


def read_text(path: Path) -> str | None:
    """Read a file for version parsing; ``None`` if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def read_version(path: Path) -> str | None:
    """Read and parse a config-version file in one step."""
    content = read_text(path)
    if content is None:
        return None
    return extract_version(content)


# ── Paths & locations ───────────────────────────────────────────


def absolutize(path: Path) -> Path:
    """Make a path absolute and normalised without resolving symlinks."""
    return Path(os.path.abspath(path))


def to_location(path: Path) -> str:
    """Convert a filesystem path into a ``file://`` location identifier.

    Raises:
        LocationError: If the path cannot be expressed as a URI.
    """
    try:
        return absolutize(path).as_uri()
    except ValueError as e:
        raise LocationError(f"Cannot build location for {path!r}: {e}") from e
