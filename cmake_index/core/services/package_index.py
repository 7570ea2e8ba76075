"""
Index builder — run the scan phases and freeze the result.

Phases run in a fixed order over one shared table with first-insert-wins
semantics.  The order *is* the precedence contract: a config tree always
wins over a library-root entry with the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from cmake_index.core.config.loader import LIBRARY_DIRS
from cmake_index.core.models.index import PackageIndex
from cmake_index.core.models.package import CMakePackage
from cmake_index.core.services.package_scan import (
    available_library_roots,
    scan_config_trees,
    scan_library_roots,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanPhase:
    """One ordered step of the index build."""

    name: str
    run: Callable[[Path, Sequence[str], dict[str, CMakePackage]], int]


def _config_tree_phase(
    prefix: Path,
    library_dirs: Sequence[str],
    packages: dict[str, CMakePackage],
) -> int:
    return scan_config_trees(prefix, packages)


def _library_root_phase(
    prefix: Path,
    library_dirs: Sequence[str],
    packages: dict[str, CMakePackage],
) -> int:
    roots = available_library_roots(prefix, library_dirs)
    return scan_library_roots(roots, packages)


# Highest precedence first
SCAN_PHASES: tuple[ScanPhase, ...] = (
    ScanPhase("config-trees", _config_tree_phase),
    ScanPhase("library-roots", _library_root_phase),
)


def build_package_index(
    prefix: Path | None,
    library_dirs: Sequence[str] = LIBRARY_DIRS,
) -> PackageIndex:
    """Scan a prefix and return an immutable package index.

    Args:
        prefix: Installation root.  None means "unconfigured" and gives
            an empty index.
        library_dirs: Library directory names checked for ``<dir>/cmake``.

    Returns:
        PackageIndex with every package found, config trees first.
    """
    if prefix is None:
        logger.info("No prefix configured; package index is empty")
        return PackageIndex.empty()

    packages: dict[str, CMakePackage] = {}
    for phase in SCAN_PHASES:
        added = phase.run(prefix, library_dirs, packages)
        logger.debug("Phase %s added %d packages", phase.name, added)

    logger.info("Indexed %d CMake packages under %s", len(packages), prefix)
    return PackageIndex.from_mapping(packages, prefix=prefix)
