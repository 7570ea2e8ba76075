"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from cmake_index.core.config.loader import PREFIX_ENV_VARS


@pytest.fixture
def prefix(tmp_path: Path) -> Path:
    """Return an empty installation prefix."""
    root = tmp_path / "prefix"
    root.mkdir()
    return root


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset prefix variables and run from a directory with no config file."""
    for var in PREFIX_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def write(path: Path, content: str = "") -> Path:
    """Create a file (and its parents) with the given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def version_file(path: Path, version: str) -> Path:
    """Write a minimal config-version file declaring ``version``."""
    return write(path, f'set(PACKAGE_VERSION "{version}")\n')
