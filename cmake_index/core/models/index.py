"""
Package index — the immutable result of one prefix scan.

Two read-only views over the same records: ``packages`` keeps insertion
order (config trees first, then library roots), ``by_name`` is the
lookup table used for go-to-definition and hover.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from cmake_index.core.models.package import CMakePackage


@dataclass(frozen=True)
class PackageIndex:
    """Name-keyed, insertion-ordered set of discovered packages."""

    packages: tuple[CMakePackage, ...] = ()
    by_name: Mapping[str, CMakePackage] = field(
        default_factory=lambda: MappingProxyType({})
    )
    prefix: Path | None = None

    @classmethod
    def from_mapping(
        cls,
        packages: Mapping[str, CMakePackage],
        prefix: Path | None = None,
    ) -> PackageIndex:
        """Freeze an insertion-ordered ``name -> package`` mapping."""
        frozen = dict(packages)
        return cls(
            packages=tuple(frozen.values()),
            by_name=MappingProxyType(frozen),
            prefix=prefix,
        )

    @classmethod
    def empty(cls, prefix: Path | None = None) -> PackageIndex:
        return cls(prefix=prefix)

    def get(self, name: str) -> CMakePackage | None:
        return self.by_name.get(name)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.packages]

    def __len__(self) -> int:
        return len(self.packages)

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __iter__(self) -> Iterator[CMakePackage]:
        return iter(self.packages)

    def to_dict(self) -> dict:
        return {
            "prefix": str(self.prefix) if self.prefix else None,
            "total": len(self.packages),
            "packages": [p.to_dict() for p in self.packages],
        }
