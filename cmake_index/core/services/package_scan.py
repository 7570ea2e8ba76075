"""
Package scanners — walk an installation prefix for CMake packages.

Two scans feed the index, always in this order:

    1. Config trees     <prefix>/share/<Name>/cmake/*.cmake
    2. Library roots    <prefix>/{lib,lib32,lib64,share}/cmake/<child>

Both insert into a shared ``name -> CMakePackage`` dict and never
overwrite an existing name, so a config tree always beats a library-root
entry of the same name.  Within one scan, directory entries are visited
in sorted order; only the cross-scan precedence is a guarantee.

Everything here is best-effort: unreadable directories, unreadable files
and paths that cannot become a location are logged and skipped.
"""

from __future__ import annotations

import errno
import logging
import stat
from collections.abc import Iterable, Sequence
from pathlib import Path

from cmake_index.core.config.loader import LIBRARY_DIRS
from cmake_index.core.models.package import CMakePackage, FileType
from cmake_index.core.services.cmake_files import (
    LocationError,
    absolutize,
    is_config_file,
    is_config_version_file,
    is_module_file,
    read_version,
    to_location,
)

logger = logging.getLogger(__name__)


def available_library_roots(
    prefix: Path,
    library_dirs: Sequence[str] = LIBRARY_DIRS,
) -> list[Path]:
    """Return ``<prefix>/<dir>/cmake`` for each library dir that exists.

    Order follows ``library_dirs``.  Missing directories are not an error.
    """
    roots: list[Path] = []
    for lib in library_dirs:
        candidate = prefix / lib / "cmake"
        if _is_dir(candidate):
            roots.append(candidate)
    logger.debug("Library roots under %s: %s", prefix, [str(r) for r in roots])
    return roots


def package_name_from_file(filename: str) -> str:
    """Derive a package name from a standalone module file name.

    Everything from the first ``.`` onward is dropped, so
    ``FindFoo.cmake`` -> ``FindFoo`` and ``Foo.Bar.cmake`` -> ``Foo``.
    """
    return filename.split(".", 1)[0]


# Errors that mean "nothing there" rather than "cannot look"
_MISSING_ERRNOS = (errno.ENOENT, errno.ENOTDIR, errno.ELOOP)


def _stat_mode(path: Path) -> int:
    """Return ``st_mode`` following symlinks; 0 for dangling or vanished entries.

    Raises:
        OSError: If the entry exists but cannot be stat'ed (e.g. EACCES).
    """
    try:
        return path.stat().st_mode
    except OSError as e:
        if e.errno in _MISSING_ERRNOS:
            return 0
        raise


def _is_dir(path: Path) -> bool:
    """Like ``Path.is_dir`` but any stat failure means False, with a log."""
    try:
        return stat.S_ISDIR(_stat_mode(path))
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return False


def _cmake_files(directory: Path) -> list[Path] | None:
    """Immediate regular ``*.cmake`` files of a directory, in name order.

    None if the directory cannot be listed or any of its ``*.cmake``
    entries cannot be stat'ed; the caller then skips the whole package.
    """
    entries = _sorted_entries(directory)
    if entries is None:
        return None

    files: list[Path] = []
    for entry in entries:
        if not is_module_file(entry.name):
            continue
        try:
            mode = _stat_mode(entry)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return None
        if stat.S_ISREG(mode):
            files.append(entry)
    return files


def _sorted_entries(directory: Path) -> list[Path] | None:
    """List a directory's children in name order; None if unreadable."""
    try:
        return sorted(directory.iterdir())
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return None


def _insert(packages: dict[str, CMakePackage], package: CMakePackage) -> bool:
    """First-insert-wins.  Returns True if the package was added."""
    if package.name in packages:
        logger.debug(
            "Package '%s' at %s shadowed by %s",
            package.name,
            package.location,
            packages[package.name].location,
        )
        return False
    packages[package.name] = package
    return True


# ── Config trees ────────────────────────────────────────────────


def scan_config_trees(prefix: Path, packages: dict[str, CMakePackage]) -> int:
    """Find config packages under ``<prefix>/share/*/cmake/``.

    A tree is a package when at least one of its immediate ``*.cmake``
    files is a config file.  Every ``*.cmake`` file in the tree becomes a
    navigation target.  The package is named after the directory that
    holds ``cmake/``.

    Returns:
        Number of packages added.
    """
    added = 0
    share = prefix / "share"
    for child in _sorted_entries(share) or []:
        # same matches as the share/*/cmake/ glob: hidden entries excluded
        if child.name.startswith("."):
            continue
        tree = child / "cmake"
        if not _is_dir(tree):
            continue
        package = _scan_config_tree(tree)
        if package is not None and _insert(packages, package):
            added += 1
    logger.info("Config trees under %s: %d packages", share, added)
    return added


def _scan_config_tree(tree: Path) -> CMakePackage | None:
    files = _cmake_files(tree)
    if files is None:
        return None

    targets: list[Path] = []
    version: str | None = None
    is_package = False

    for entry in files:
        targets.append(absolutize(entry))
        if is_config_file(entry.name):
            is_package = True
        if is_config_version_file(entry.name):
            parsed = read_version(entry)
            if parsed is not None:
                version = parsed

    if not is_package:
        return None

    name = tree.parent.name
    try:
        location = to_location(tree)
    except LocationError as e:
        logger.debug("Dropping config package '%s': %s", name, e)
        return None

    return CMakePackage(
        name=name,
        filetype=FileType.DIR,
        location=location,
        version=version,
        navigation_targets=targets,
    )


# ── Library roots ───────────────────────────────────────────────


def scan_library_roots(roots: Iterable[Path], packages: dict[str, CMakePackage]) -> int:
    """Find directory and single-file packages directly under each root.

    Roots are visited in the order given; children of a root in sorted
    order.

    Returns:
        Number of packages added.
    """
    added = 0
    for root in roots:
        entries = _sorted_entries(root)
        if entries is None:
            continue
        for entry in entries:
            try:
                mode = _stat_mode(entry)
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry, e)
                continue
            if stat.S_ISDIR(mode):
                package = _scan_package_dir(entry)
            else:
                package = _scan_module_file(entry)
            if package is not None and _insert(packages, package):
                added += 1
    logger.info("Library roots: %d packages", added)
    return added


def _scan_package_dir(directory: Path) -> CMakePackage | None:
    files = _cmake_files(directory)
    if files is None:
        return None

    targets: list[Path] = []
    version: str | None = None

    for entry in files:
        targets.append(absolutize(entry))
        if is_config_version_file(entry.name):
            parsed = read_version(entry)
            if parsed is not None:
                version = parsed

    try:
        location = to_location(directory)
    except LocationError as e:
        logger.debug("Dropping package directory %s: %s", directory, e)
        return None

    return CMakePackage(
        name=directory.name,
        filetype=FileType.DIR,
        location=location,
        version=version,
        navigation_targets=targets,
    )


def _scan_module_file(path: Path) -> CMakePackage | None:
    name = package_name_from_file(path.name)
    if not name:
        logger.debug("Skipping %s: no package name before the first dot", path)
        return None

    try:
        location = to_location(path)
    except LocationError as e:
        logger.debug("Dropping module file %s: %s", path, e)
        return None

    return CMakePackage(
        name=name,
        filetype=FileType.FILE,
        location=location,
        navigation_targets=[absolutize(path)],
    )
