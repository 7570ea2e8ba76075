"""
Tests for domain models — package records and the frozen index.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cmake_index.core.models import CMakePackage, FileType, PackageIndex, PackageSource


def _package(name: str = "Foo", **kwargs) -> CMakePackage:
    defaults = {
        "filetype": FileType.DIR,
        "location": f"file:///opt/share/{name}/cmake",
    }
    defaults.update(kwargs)
    return CMakePackage(name=name, **defaults)


class TestCMakePackage:
    def test_defaults(self):
        p = _package()
        assert p.version is None
        assert p.navigation_targets == ()
        assert p.source is PackageSource.SYSTEM
        assert p.is_dir
        assert not p.is_file

    def test_file_package(self):
        p = _package(
            "FindFoo",
            filetype=FileType.FILE,
            navigation_targets=[Path("/opt/lib/cmake/FindFoo.cmake")],
        )
        assert p.is_file
        assert p.navigation_targets == (Path("/opt/lib/cmake/FindFoo.cmake"),)

    def test_empty_version_is_none(self):
        assert _package(version="").version is None
        assert _package(version="   ").version is None

    def test_version_is_stripped(self):
        assert _package(version=" 1.2.3 ").version == "1.2.3"

    def test_relative_target_rejected(self):
        with pytest.raises(ValidationError):
            _package(navigation_targets=[Path("relative/FooConfig.cmake")])

    def test_frozen(self):
        p = _package()
        with pytest.raises(ValidationError):
            p.name = "Bar"

    def test_to_dict(self):
        p = _package(
            version="6.5.0",
            navigation_targets=[Path("/opt/share/Foo/cmake/FooConfig.cmake")],
        )
        d = p.to_dict()
        assert d["name"] == "Foo"
        assert d["filetype"] == "dir"
        assert d["version"] == "6.5.0"
        assert d["source"] == "system"
        assert d["navigation_targets"] == ["/opt/share/Foo/cmake/FooConfig.cmake"]


class TestPackageIndex:
    def test_empty(self):
        index = PackageIndex.empty()
        assert len(index) == 0
        assert index.get("Foo") is None
        assert index.names == []
        assert "Foo" not in index

    def test_from_mapping_keeps_order(self):
        packages = {"B": _package("B"), "A": _package("A")}
        index = PackageIndex.from_mapping(packages, prefix=Path("/opt"))
        assert index.names == ["B", "A"]
        assert [p.name for p in index] == ["B", "A"]
        assert index.get("A").name == "A"
        assert "B" in index
        assert index.prefix == Path("/opt")

    def test_views_are_read_only(self):
        index = PackageIndex.from_mapping({"A": _package("A")})
        with pytest.raises(TypeError):
            index.by_name["B"] = _package("B")
        assert isinstance(index.packages, tuple)

    def test_detached_from_source_mapping(self):
        packages = {"A": _package("A")}
        index = PackageIndex.from_mapping(packages)
        packages["B"] = _package("B")
        assert "B" not in index
        assert len(index) == 1

    def test_to_dict(self):
        index = PackageIndex.from_mapping({"A": _package("A")}, prefix=Path("/opt"))
        d = index.to_dict()
        assert d["prefix"] == "/opt"
        assert d["total"] == 1
        assert d["packages"][0]["name"] == "A"


class TestExports:
    def test_all_matches_definitions(self):
        from cmake_index.core import models
        from cmake_index.core.models import index, package

        assert set(models.__all__) == {"CMakePackage", "FileType", "PackageIndex", "PackageSource"}
        for name in ("CMakePackage", "FileType", "PackageSource"):
            assert getattr(models, name) is getattr(package, name)
        assert models.PackageIndex is index.PackageIndex
