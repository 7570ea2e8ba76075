"""
Package model — one find_package() candidate discovered under a prefix.

A package is either a directory holding one or more CMake files (config
trees, library-root package directories) or a single standalone module
file.  Records are frozen: once the index is built nothing mutates them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileType(str, Enum):
    """How a package is laid out on disk."""

    DIR = "dir"
    FILE = "file"


class PackageSource(str, Enum):
    """Where a package record came from."""

    SYSTEM = "system"  # found by scanning the installation prefix


class CMakePackage(BaseModel):
    """A CMake package that ``find_package()`` could resolve to.

    ``location`` is a ``file://`` URI of the package directory (or of the
    module file for single-file packages).  ``navigation_targets`` lists
    the files tooling can jump to, in the order they were discovered.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    filetype: FileType
    location: str
    version: str | None = None
    navigation_targets: tuple[Path, ...] = Field(default_factory=tuple)
    source: PackageSource = PackageSource.SYSTEM

    @field_validator("version")
    @classmethod
    def _blank_version_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("navigation_targets")
    @classmethod
    def _targets_are_absolute(cls, v: tuple[Path, ...]) -> tuple[Path, ...]:
        for target in v:
            if not target.is_absolute():
                raise ValueError(f"navigation target must be absolute: {target}")
        return v

    @property
    def is_dir(self) -> bool:
        return self.filetype is FileType.DIR

    @property
    def is_file(self) -> bool:
        return self.filetype is FileType.FILE

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
