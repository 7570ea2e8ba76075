"""
Tests for CMake file helpers — name classification, version parsing, locations.
"""

import textwrap
from pathlib import Path

import pytest

from cmake_index.core.services import cmake_files
from cmake_index.core.services.cmake_files import (
    LocationError,
    absolutize,
    extract_version,
    is_config_file,
    is_config_version_file,
    is_module_file,
    read_text,
    read_version,
    to_location,
)


class TestClassification:
    @pytest.mark.parametrize(
        "name",
        ["ECMConfig.cmake", "zlib-config.cmake", "/opt/share/ECM/cmake/ECMConfig.cmake"],
    )
    def test_config_files(self, name: str):
        assert is_config_file(name)

    @pytest.mark.parametrize(
        "name",
        ["ECMConfigVersion.cmake", "FindFoo.cmake", "ECMTargets.cmake", "ECMConfig.txt"],
    )
    def test_not_config_files(self, name: str):
        assert not is_config_file(name)

    @pytest.mark.parametrize(
        "name",
        ["ECMConfigVersion.cmake", "zlib-config-version.cmake"],
    )
    def test_config_version_files(self, name: str):
        assert is_config_version_file(name)

    def test_config_file_is_not_version_file(self):
        assert not is_config_version_file("ECMConfig.cmake")

    def test_module_files(self):
        assert is_module_file("FindFoo.cmake")
        assert is_module_file("ECMConfigVersion.cmake")
        assert not is_module_file("README.md")
        assert not is_module_file("Foo.cmake.in")


class TestExtractVersion:
    def test_quoted(self):
        assert extract_version('set(PACKAGE_VERSION "1.3.295")\n') == "1.3.295"

    def test_unquoted(self):
        assert extract_version("set(PACKAGE_VERSION 6.5.0)") == "6.5.0"

    def test_spacing_and_case(self):
        assert extract_version('SET ( PACKAGE_VERSION  "2.0" )') == "2.0"

    def test_last_assignment_wins(self):
        content = textwrap.dedent("""\
            set(PACKAGE_VERSION "1.0")
            if(WIN32)
              set(PACKAGE_VERSION "1.1")
            endif()
        """)
        assert extract_version(content) == "1.1"

    def test_generated_basic_config_version(self):
        content = textwrap.dedent("""\
            set(PACKAGE_VERSION "3.4.1")
            if(PACKAGE_VERSION VERSION_LESS PACKAGE_FIND_VERSION)
              set(PACKAGE_VERSION_COMPATIBLE FALSE)
            else()
              set(PACKAGE_VERSION_COMPATIBLE TRUE)
            endif()
        """)
        assert extract_version(content) == "3.4.1"

    def test_missing(self):
        assert extract_version("set(PACKAGE_VERSION_COMPATIBLE TRUE)") is None
        assert extract_version("") is None

    def test_empty_value(self):
        assert extract_version('set(PACKAGE_VERSION "")') is None

    def test_variable_reference_ignored(self):
        assert extract_version('set(PACKAGE_VERSION "${Foo_VERSION}")') is None


class TestReading:
    def test_read_version(self, tmp_path: Path):
        f = tmp_path / "FooConfigVersion.cmake"
        f.write_text('set(PACKAGE_VERSION "4.2")\n')
        assert read_version(f) == "4.2"

    def test_read_missing_file(self, tmp_path: Path):
        assert read_text(tmp_path / "nope.cmake") is None
        assert read_version(tmp_path / "nope.cmake") is None

    def test_read_invalid_utf8(self, tmp_path: Path):
        f = tmp_path / "FooConfigVersion.cmake"
        f.write_bytes(b'\xff\xfe set(PACKAGE_VERSION "1.0")')
        assert read_version(f) == "1.0"


class TestLocation:
    def test_absolute_path(self, tmp_path: Path):
        assert to_location(tmp_path) == tmp_path.as_uri()

    def test_relative_path_made_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert to_location(Path("pkg")) == (tmp_path / "pkg").as_uri()

    def test_absolutize_normalises(self, tmp_path: Path):
        assert absolutize(tmp_path / "a" / ".." / "b") == tmp_path / "b"

    def test_failure_raises_location_error(self, tmp_path: Path, monkeypatch):
        def broken_abspath(path):
            raise ValueError("embedded null byte")

        monkeypatch.setattr(cmake_files.os.path, "abspath", broken_abspath)
        with pytest.raises(LocationError):
            to_location(tmp_path)
